"""Module: filehasher.config.hashing

Author: Michael Economou
Date: 2026-01-01

Hashing engine configuration: algorithm defaults, stream buffering,
progress polling cadence and digest text normalization.
"""

# =====================================
# ALGORITHMS
# =====================================

# Used when the caller does not pick one
DEFAULT_ALGORITHM_NAME = "SHA256"

# Text encoding for in-memory text digests (None = platform default)
TEXT_ENCODING = None

# =====================================
# FILE STREAMING
# =====================================

READ_BUFFER_SIZE = 1024 * 1024  # 1MB per read

# =====================================
# PROGRESS POLLING
# =====================================

POLL_INTERVAL_MS = 100

# =====================================
# DIGEST COMPARISON
# =====================================

# Characters stripped from pasted digests before comparison
HASH_SEPARATORS = (" ", "-", ":")
