"""Module: hash_status.py

Author: Michael Economou
Date: 2026-03-02

Status enumerations shared by text and file hash tasks.
User-facing text for these lives in filehasher.ui.status_labels.
"""

from enum import Enum


class HashStatus(Enum):
    """Lifecycle of a hash task.

    INCOMPLETE -> SUCCESS | FILE_ERROR. FILE_ERROR is also entered directly
    when a file cannot be opened. A stopped task ends in FILE_ERROR.
    """

    INCOMPLETE = "incomplete"
    SUCCESS = "success"
    FILE_ERROR = "file_error"

    @property
    def is_terminal(self) -> bool:
        return self is not HashStatus.INCOMPLETE


class StreamState(Enum):
    """Ownership state of a task's input stream."""

    OPEN = "open"
    CLOSED = "closed"
