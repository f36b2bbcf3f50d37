"""Module: hash_compare.py

Author: Michael Economou
Date: 2026-03-04

Comparison of a computed digest with a reference digest typed or pasted
by the user. Reference text is normalized first: separators such as
spaces, dashes and colons are removed ("E1-0A", "e1:0a" -> "E10A").
"""

from __future__ import annotations

import re
from enum import Enum

from filehasher.config import HASH_SEPARATORS
from filehasher.core.hash.algorithms import HashAlgorithm

_HEX_PATTERN = re.compile(r"[0-9A-Fa-f]+")


class HashComparison(Enum):
    """Outcome of comparing two digest strings."""

    MATCH = "match"
    MISMATCH = "mismatch"
    INCOMPLETE = "incomplete"  # one side is empty


def normalize_hash_text(text: str | None) -> str:
    """Strip whitespace and separators from a digest string."""
    if not text:
        return ""
    text = text.strip()
    for separator in HASH_SEPARATORS:
        text = text.replace(separator, "")
    return text


def compare_hashes(computed: str | None, reference: str | None) -> HashComparison:
    """Compare two digests case-insensitively after normalization."""
    a = normalize_hash_text(computed)
    b = normalize_hash_text(reference)
    if not a or not b:
        return HashComparison.INCOMPLETE
    if a.casefold() == b.casefold():
        return HashComparison.MATCH
    return HashComparison.MISMATCH


def guess_algorithm(digest: str | None) -> HashAlgorithm | None:
    """Guess the algorithm of a hex digest from its length."""
    text = normalize_hash_text(digest)
    if not _HEX_PATTERN.fullmatch(text):
        return None
    for algorithm in HashAlgorithm:
        if algorithm.hex_length == len(text):
            return algorithm
    return None
