"""Module: algorithms.py

Author: Michael Economou
Date: 2026-03-02

Digest algorithm selection and hashing primitives.

HashAlgorithm is a closed enumeration mapped directly to hashlib
constructors. Digests are rendered as uppercase hex with no separators,
identically for text and file inputs.

Usage:
    from filehasher.core.hash.algorithms import HashAlgorithm, hash_bytes

    hash_bytes(HashAlgorithm.MD5, b"123456")  # 'E10ADC3949BA59ABBE56E057F20F883E'
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from enum import Enum
from typing import BinaryIO

from filehasher.config import READ_BUFFER_SIZE


class HashAlgorithm(Enum):
    """Supported digest algorithms."""

    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digest_size(self) -> int:
        """Native digest length in bytes."""
        return _DIGEST_SIZES[self]

    @property
    def hex_length(self) -> int:
        """Length of the rendered hex digest (32/40/64/128)."""
        return _DIGEST_SIZES[self] * 2

    @classmethod
    def from_name(cls, name: str) -> HashAlgorithm:
        """Parse a user-supplied algorithm name.

        Case-insensitive; dashes and underscores are ignored so
        'sha-256', 'SHA_256' and 'sha256' are equivalent.

        Raises:
            ValueError: If the name does not match a supported algorithm.

        """
        key = name.strip().upper().replace("-", "").replace("_", "")
        try:
            return cls[key]
        except KeyError:
            supported = ", ".join(member.value for member in cls)
            raise ValueError(f"Unsupported algorithm: {name!r}. Supported: {supported}") from None


_CONSTRUCTORS: dict[HashAlgorithm, Callable[[], hashlib._Hash]] = {
    HashAlgorithm.MD5: hashlib.md5,
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
}

_DIGEST_SIZES: dict[HashAlgorithm, int] = {
    HashAlgorithm.MD5: 16,
    HashAlgorithm.SHA1: 20,
    HashAlgorithm.SHA256: 32,
    HashAlgorithm.SHA512: 64,
}


def new_hasher(algorithm: HashAlgorithm) -> hashlib._Hash:
    """Create a fresh hash object for the algorithm.

    Raises:
        TypeError: If algorithm is not a HashAlgorithm member.

    """
    if not isinstance(algorithm, HashAlgorithm):
        raise TypeError(f"Expected HashAlgorithm, got {type(algorithm).__name__}")
    return _CONSTRUCTORS[algorithm]()


def format_digest(digest: bytes) -> str:
    """Render digest bytes as uppercase hex with no delimiters (E1 0A -> 'E10A')."""
    return digest.hex().upper()


def digest_bytes(algorithm: HashAlgorithm, data: bytes) -> bytes:
    """Digest an in-memory byte sequence."""
    hasher = new_hasher(algorithm)
    hasher.update(data)
    return hasher.digest()


def hash_bytes(algorithm: HashAlgorithm, data: bytes) -> str:
    """Digest a byte sequence and render it as hex."""
    return format_digest(digest_bytes(algorithm, data))


def digest_stream(
    algorithm: HashAlgorithm,
    stream: BinaryIO,
    buffer_size: int = READ_BUFFER_SIZE,
    progress_callback: Callable[[int], None] | None = None,
    cancel_check: Callable[[], bool] | None = None,
) -> bytes | None:
    """Digest a readable binary stream until EOF.

    Args:
        algorithm: Digest algorithm.
        stream: Binary stream supporting readinto().
        buffer_size: Bytes per read.
        progress_callback: Optional callback(bytes_processed) after every chunk.
        cancel_check: Optional callable checked before every read; when it
            returns True the digest is abandoned.

    Returns:
        Raw digest bytes, or None if cancelled.

    Raises:
        OSError: On read failure.
        ValueError: If the stream is closed while reading.

    """
    hasher = new_hasher(algorithm)
    buffer = bytearray(max(1, buffer_size))
    mv = memoryview(buffer)
    bytes_processed = 0

    while True:
        if cancel_check and cancel_check():
            return None

        bytes_read = stream.readinto(buffer)
        if not bytes_read:
            break

        hasher.update(mv[:bytes_read])

        bytes_processed += bytes_read
        if progress_callback:
            progress_callback(bytes_processed)

    # A stalled read may return after cancellation
    if cancel_check and cancel_check():
        return None
    return hasher.digest()
