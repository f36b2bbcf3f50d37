"""Module: logger_setup.py

Author: Michael Economou
Date: 2025-05-06

This module provides the ConfigureLogger class for setting up logging in the application.
The root logger is configured to log WARNING and higher to the console (stdout is
shared with digest output), INFO and higher to a per-session log file, and DEBUG+
to a separate debug file when enabled in config.
"""

import contextlib
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler

from filehasher.config import (
    LOG_CONSOLE_LEVEL,
    LOG_DEBUG_FILE_BACKUP_COUNT,
    LOG_DEBUG_FILE_ENABLED,
    LOG_DEBUG_FILE_MAX_BYTES,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_LEVEL,
    LOG_FILE_MAX_BYTES,
    LOG_TO_CONSOLE,
    LOG_TO_FILE,
)
from filehasher.utils.logging.logger_file_helper import (
    FILE_LOG_DATEFMT,
    FILE_LOG_FORMAT,
    add_file_handler,
)
from filehasher.utils.logging.logger_helper import DevOnlyFilter


def get_user_config_dir(app_name: str = "filehasher") -> str:
    """Get user configuration directory based on OS."""
    if os.name == "nt":
        base_dir = os.environ.get("APPDATA", os.path.expanduser("~"))
    else:
        base_dir = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return os.path.join(base_dir, app_name)


class ConfigureLogger:
    """Configures application-wide logging on the root logger.

    Does nothing if the root logger already has handlers, so embedding
    applications (and pytest) keep their own setup.
    """

    def __init__(
        self,
        log_name: str = "filehasher",
        log_dir: str = "logs",
        console_enabled: bool = LOG_TO_CONSOLE,
        console_level: int | None = None,
        file_enabled: bool = LOG_TO_FILE,
        file_level: int | None = None,
        debug_enabled: bool = LOG_DEBUG_FILE_ENABLED,
    ):
        """Initializes and configures the logger.

        Args:
            log_name (str): Base name for the log files.
            log_dir (str): Directory to store log files.
            console_enabled (bool): Attach a stdout handler.
            console_level (int): Logging level for the console (config default if None).
            file_enabled (bool): Attach the rotating session log file.
            file_level (int): Logging level for the log file (config default if None).
            debug_enabled (bool): Attach an extra DEBUG-level log file.

        """
        if console_level is None:
            console_level = getattr(logging, LOG_CONSOLE_LEVEL, logging.WARNING)
        if file_level is None:
            file_level = getattr(logging, LOG_FILE_LEVEL, logging.INFO)

        self.logger = logging.getLogger()
        self.configured = False

        if self.logger.hasHandlers():
            return

        # Accept everything; handlers filter levels
        self.logger.setLevel(logging.DEBUG)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_file_path = os.path.join(log_dir, f"{log_name}_{timestamp}.log")
        self.debug_file_path = os.path.join(log_dir, f"{log_name}_debug_{timestamp}.log")

        if console_enabled:
            self._setup_console_handler(console_level)

        if file_enabled:
            os.makedirs(log_dir, exist_ok=True)
            self._setup_file_handler(
                self.log_file_path, file_level, LOG_FILE_MAX_BYTES, LOG_FILE_BACKUP_COUNT
            )

        if debug_enabled:
            add_file_handler(
                logger=self.logger,
                log_path=self.debug_file_path,
                level=logging.DEBUG,
                max_bytes=LOG_DEBUG_FILE_MAX_BYTES,
                backup_count=LOG_DEBUG_FILE_BACKUP_COUNT,
            )

        self.configured = True

    def _setup_console_handler(self, level: int) -> None:
        """Sets up console handler with UTF-8-safe formatting and DevOnlyFilter."""
        console_handler = logging.StreamHandler(sys.stdout)

        with contextlib.suppress(Exception):
            console_handler.stream.reconfigure(encoding="utf-8")

        console_handler.setLevel(level)
        console_handler.addFilter(DevOnlyFilter())
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        self.logger.addHandler(console_handler)

    def _setup_file_handler(self, path: str, level: int, max_bytes: int, backup_count: int) -> None:
        """Sets up file handler with rotating file output."""
        file_handler = RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=FILE_LOG_DATEFMT))
        self.logger.addHandler(file_handler)
