"""Module: status_labels.py

Author: Michael Economou
Date: 2026-03-05

User-facing text for hash statuses and comparison outcomes, and the
result line format shown for each finished file.
"""

from __future__ import annotations

from filehasher.core.hash.file_hash_task import FileHashTask
from filehasher.core.hash.hash_compare import HashComparison
from filehasher.core.hash.hash_status import HashStatus

STATUS_LABELS = {
    HashStatus.INCOMPLETE: "File reading cancelled",
    HashStatus.SUCCESS: "Success",
    HashStatus.FILE_ERROR: "File read error!",
}

COMPARISON_LABELS = {
    HashComparison.MATCH: "Hashes match",
    HashComparison.MISMATCH: "Hashes differ!",
    HashComparison.INCOMPLETE: "Nothing to compare",
}


def status_label(status: HashStatus) -> str:
    return STATUS_LABELS[status]


def comparison_label(comparison: HashComparison) -> str:
    return COMPARISON_LABELS[comparison]


def format_task_result(task: FileHashTask, full_path: bool = False) -> str:
    """Two-line result block: file name (or full path), then digest or status label."""
    name = task.file_path if full_path else task.file_name
    digest = task.digest
    return f"{name}\n{digest if digest is not None else status_label(task.status)}"
