"""Module: filehasher.config

Author: Michael Economou
Date: 2026-01-01

Configuration package for the filehasher application.

This package organizes configuration into logical modules:
- app: Application info, logging
- hashing: Algorithm defaults, buffer sizes, progress polling

All settings are re-exported from this module:
    from filehasher.config import APP_NAME, POLL_INTERVAL_MS
"""

from filehasher.config.app import *  # noqa: F401, F403
from filehasher.config.hashing import *  # noqa: F401, F403
