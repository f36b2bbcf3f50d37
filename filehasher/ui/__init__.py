"""Presentation helpers: status labels and Qt adapters."""
