"""Hash operations module.

This module provides the hashing engine:
- HashAlgorithm: Supported digest algorithms and hashing primitives
- compute_text_digest / TextHashTask: Synchronous text digests
- FileHashTask: Streaming, cancellable file digest on a worker thread
- HashBatchCoordinator: Concurrent file batches with aggregate progress
- compare_hashes: Digest comparison with separator normalization

Author: Michael Economou
Date: 2026-03-02
"""

from __future__ import annotations

from filehasher.core.hash.algorithms import (
    HashAlgorithm,
    digest_bytes,
    digest_stream,
    format_digest,
    hash_bytes,
    new_hasher,
)
from filehasher.core.hash.batch_coordinator import HashBatchCoordinator, ProgressPoller
from filehasher.core.hash.file_hash_task import (
    ERROR_RESULT,
    FileHashTask,
    HashTaskWorker,
    create_file_task,
)
from filehasher.core.hash.hash_compare import (
    HashComparison,
    compare_hashes,
    guess_algorithm,
    normalize_hash_text,
)
from filehasher.core.hash.hash_status import HashStatus, StreamState
from filehasher.core.hash.text_hasher import TextHashTask, compute_text_digest

__all__ = [
    "ERROR_RESULT",
    "FileHashTask",
    "HashAlgorithm",
    "HashBatchCoordinator",
    "HashComparison",
    "HashStatus",
    "HashTaskWorker",
    "ProgressPoller",
    "StreamState",
    "TextHashTask",
    "compare_hashes",
    "compute_text_digest",
    "create_file_task",
    "digest_bytes",
    "digest_stream",
    "format_digest",
    "guess_algorithm",
    "hash_bytes",
    "new_hasher",
    "normalize_hash_text",
]
