"""Module: text_hasher.py

Author: Michael Economou
Date: 2026-03-02

Synchronous digests of in-memory text.
"""

from __future__ import annotations

import locale

from filehasher.config import TEXT_ENCODING
from filehasher.core.hash.algorithms import HashAlgorithm, hash_bytes
from filehasher.core.hash.hash_status import HashStatus


def default_text_encoding() -> str:
    """Encoding used for text digests when none is given."""
    return TEXT_ENCODING or locale.getpreferredencoding(False)


def compute_text_digest(algorithm: HashAlgorithm, text: str, encoding: str | None = None) -> str:
    """Hash text and return the uppercase hex digest.

    Args:
        algorithm: Digest algorithm.
        text: Text to hash.
        encoding: Text encoding (platform default if None).

    Returns:
        Uppercase hex digest.

    Characters the encoding cannot represent are replaced with '?'.

    """
    data = text.encode(encoding or default_text_encoding(), errors="replace")
    return hash_bytes(algorithm, data)


class TextHashTask:
    """A text hash; the result is available immediately after construction."""

    def __init__(self, algorithm: HashAlgorithm, text: str, encoding: str | None = None):
        self.algorithm = algorithm
        self.text = text
        self.result = compute_text_digest(algorithm, text, encoding)
        self.status = HashStatus.SUCCESS

    @property
    def digest(self) -> str:
        return self.result

    def __repr__(self) -> str:
        return f"TextHashTask({self.algorithm.value}, {self.result})"
