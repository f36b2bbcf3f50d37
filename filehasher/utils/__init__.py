"""Shared utilities: logging, events and threading helpers."""
