"""Module: progress_protocol.py

Author: Michael Economou
Date: 2025-11-21

Standard Progress Reporting Protocol
Defines the progress value published by the hash batch coordinator.

This module provides:
- SizeProgress data class (byte-based progress snapshot)
- Helper for human-readable progress messages
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SizeProgress:
    """Size-based progress information (for file operations).

    Attributes:
        processed_bytes: Bytes processed so far
        total_bytes: Total bytes to process
        current_file: Name of current file being processed
    """

    processed_bytes: int
    total_bytes: int
    current_file: str = ""

    @property
    def percent(self) -> float:
        """Calculate progress percentage."""
        if self.total_bytes == 0:
            return 0.0
        return (self.processed_bytes / self.total_bytes) * 100.0

    @property
    def is_complete(self) -> bool:
        """Check if progress is complete (non-empty work only)."""
        return self.processed_bytes >= self.total_bytes and self.total_bytes > 0

    @property
    def is_drained(self) -> bool:
        """Check if nothing is left to process.

        Unlike is_complete this also holds for 0/0, i.e. a batch of
        empty or unreadable files.
        """
        return self.processed_bytes >= self.total_bytes


def format_size_progress(progress: SizeProgress) -> str:
    """Format a snapshot as 'NN% (processed/total bytes)'."""
    return (
        f"{progress.percent:.0f}% "
        f"({format(progress.processed_bytes, ',')}/{format(progress.total_bytes, ',')} bytes)"
    )
