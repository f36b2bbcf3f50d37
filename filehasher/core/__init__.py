"""Core hashing engine (Qt-free)."""
