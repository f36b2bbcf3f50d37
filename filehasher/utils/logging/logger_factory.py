"""Module: logger_factory.py

Author: Michael Economou
Date: 2025-05-31

Optimized logger factory with caching.
Provides centralized logger management with thread-safe operations.
"""

import logging
import threading

from filehasher.utils.logging.logger_helper import get_logger


class LoggerFactory:
    """Thread-safe logger factory with caching.

    Maintains a single logger instance per module name, so hash workers
    running on many threads share the same patched loggers.
    """

    _loggers: dict[str, logging.Logger] = {}
    _lock = threading.Lock()

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get or create a cached logger for the given name.

        Args:
            name (str): Logger name, typically __name__ from calling module

        Returns:
            logging.Logger: Cached logger instance

        """
        with cls._lock:
            if name not in cls._loggers:
                cls._loggers[name] = get_logger(name)

            return cls._loggers[name]


def get_cached_logger(name: str) -> logging.Logger:
    """Convenience function for getting cached logger.

    Args:
        name (str): Logger name

    Returns:
        logging.Logger: Cached logger instance

    """
    return LoggerFactory.get_logger(name)
