"""Module: batch_coordinator.py

Author: Michael Economou
Date: 2026-03-03

Hash Batch Coordination Layer.

Runs a batch of FileHashTask objects concurrently and aggregates their
byte positions into a single SizeProgress value. Progress is polled on a
fixed cadence (POLL_INTERVAL_MS) by a ProgressPoller thread, or by any
external timer calling poll_once() (see ui.adapters.qt_progress_poller).

The batch drains when the summed positions reach the grand total fixed at
submission and every task is terminal. Unreadable and zero-length files
contribute 0 to both sides, and stopped tasks are terminal at once and
report their full size, so a stopped or empty batch drains on the next
poll.

Usage:
    coordinator = HashBatchCoordinator()
    coordinator.task_finished.connect(show_result)
    coordinator.progress_updated.connect(update_bar)
    coordinator.submit(paths, HashAlgorithm.SHA256)
    coordinator.wait_until_drained()
"""

from __future__ import annotations

import os
import threading
import time
from collections.abc import Iterable

from filehasher.config import POLL_INTERVAL_MS
from filehasher.core.hash.algorithms import HashAlgorithm
from filehasher.core.hash.file_hash_task import FileHashTask
from filehasher.core.hash.hash_status import HashStatus
from filehasher.core.progress_protocol import SizeProgress
from filehasher.utils.events import Observable, Signal
from filehasher.utils.logging.logger_factory import get_cached_logger
from filehasher.utils.threading import WorkerBase

logger = get_cached_logger(__name__)


class ProgressPoller(WorkerBase):
    """Calls coordinator.poll_once() every interval until the batch drains."""

    def __init__(self, coordinator: HashBatchCoordinator, interval_ms: int) -> None:
        super().__init__(parent=coordinator, name="hash-progress-poller")
        self._coordinator = coordinator
        self._interval = max(interval_ms, 1) / 1000.0

    def run(self) -> None:
        drained = False
        while not self.is_cancelled():
            self._coordinator.poll_once()
            # poll_once() detaches the poller when the batch drains
            if not self._coordinator._is_current_poller(self):
                drained = True
                break
            if self.wait_for_cancellation(self._interval):
                break

        logger.debug(
            "[ProgressPoller] Exiting (drained=%s)", drained, extra={"dev_only": True}
        )
        self.finished_processing.emit(drained)


class HashBatchCoordinator(Observable):
    """Owns the active batch of file hash tasks and its aggregate progress.

    Signals:
        task_finished(task): A task reached a terminal status. Tasks whose
            file could not be opened are reported during submit().
        progress_updated(SizeProgress): Emitted on every poll.
        batch_drained(list[FileHashTask]): The batch finished and was cleared.
    """

    task_finished = Signal(object)
    progress_updated = Signal(object)
    batch_drained = Signal(object)

    def __init__(self, poll_interval_ms: int = POLL_INTERVAL_MS, auto_poll: bool = True) -> None:
        """Initialize the coordinator.

        Args:
            poll_interval_ms: Progress polling cadence for the built-in poller.
            auto_poll: Start the built-in poller on submit(). Disable when an
                external timer drives poll_once().

        """
        super().__init__()
        self._poll_interval_ms = poll_interval_ms
        self._auto_poll = auto_poll

        self._lock = threading.RLock()
        self._tasks: list[FileHashTask] = []
        self._total_bytes = 0
        self._poller: ProgressPoller | None = None
        self._last_drained: list[FileHashTask] = []
        self._drained_event = threading.Event()
        self._drained_event.set()

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def tasks(self) -> list[FileHashTask]:
        """Snapshot of the active batch."""
        with self._lock:
            return list(self._tasks)

    @property
    def total_bytes(self) -> int:
        with self._lock:
            return self._total_bytes

    @property
    def is_busy(self) -> bool:
        with self._lock:
            return bool(self._tasks)

    @property
    def poll_interval_ms(self) -> int:
        return self._poll_interval_ms

    # =========================================================================
    # Submission and cancellation
    # =========================================================================

    def submit(
        self, paths: Iterable[str | os.PathLike[str]] | None, algorithm: HashAlgorithm
    ) -> list[FileHashTask]:
        """Create, register and start one task per path.

        All tasks are added to the batch before any of them starts.

        Returns:
            The created tasks, in input order ([] for an empty input).

        """
        if isinstance(paths, (str, bytes, os.PathLike)):
            paths = [paths]
        if not paths:
            logger.debug("[HashBatchCoordinator] Nothing to submit")
            return []

        new_tasks = [FileHashTask(algorithm, path) for path in paths]
        if not new_tasks:
            return []

        with self._lock:
            for task in new_tasks:
                task.hash_finished.connect(self._on_task_finished)
                self._tasks.append(task)
                self._total_bytes += task.total_size
            self._drained_event.clear()
            total_bytes = self._total_bytes

        logger.info(
            "[HashBatchCoordinator] Submitted %d files for %s (batch total: %s bytes)",
            len(new_tasks),
            algorithm.value,
            format(total_bytes, ","),
        )

        for task in new_tasks:
            if not task.start():
                # Open failed: already terminal, no worker will report it
                self.task_finished.emit(task)

        if self._auto_poll:
            self.start_polling()

        return new_tasks

    def stop_all(self) -> int:
        """Stop every incomplete task in the batch.

        Returns:
            Number of tasks that accepted the stop.

        """
        with self._lock:
            tasks = list(self._tasks)

        stopped = sum(1 for task in tasks if task.stop())
        if stopped:
            logger.info("[HashBatchCoordinator] Stopped %d of %d tasks", stopped, len(tasks))
        return stopped

    # =========================================================================
    # Progress
    # =========================================================================

    def _snapshot(self) -> tuple[SizeProgress, bool]:
        """Aggregate progress and whether every task is terminal; caller holds the lock."""
        processed = 0
        current_file = ""
        all_terminal = True
        for task in self._tasks:
            processed += task.current_position()
            if task.status is HashStatus.INCOMPLETE:
                all_terminal = False
                if not current_file:
                    current_file = task.file_name
        return SizeProgress(processed, self._total_bytes, current_file), all_terminal

    def progress(self) -> SizeProgress:
        """Sum of task positions against the batch grand total."""
        with self._lock:
            return self._snapshot()[0]

    def poll_once(self) -> SizeProgress:
        """Take one progress snapshot, emit it and drain the batch if done.

        The batch drains once every byte is accounted for and every task
        has reached a terminal status.
        """
        drained_tasks: list[FileHashTask] = []
        with self._lock:
            progress, all_terminal = self._snapshot()
            drained = progress.is_drained and all_terminal
            if drained:
                drained_tasks = self._tasks
                self._tasks = []
                self._total_bytes = 0
                self._poller = None
                if drained_tasks:
                    self._last_drained = drained_tasks

        self.progress_updated.emit(progress)

        if drained_tasks:
            failed = sum(1 for task in drained_tasks if task.status is HashStatus.FILE_ERROR)
            logger.info(
                "[HashBatchCoordinator] Batch drained: %d tasks, %d failed",
                len(drained_tasks),
                failed,
            )
            self.batch_drained.emit(drained_tasks)

        if drained:
            with self._lock:
                # A submit() since the snapshot starts a new batch
                if not self._tasks:
                    self._drained_event.set()

        return progress

    def _is_current_poller(self, poller: ProgressPoller) -> bool:
        with self._lock:
            return self._poller is poller

    def start_polling(self) -> bool:
        """Start the built-in poller unless one is running.

        Returns:
            True if a new poller thread was started.

        """
        with self._lock:
            if self._poller is not None:
                return False
            poller = ProgressPoller(self, self._poll_interval_ms)
            self._poller = poller

        poller.start()
        return True

    def stop_polling(self) -> None:
        """Cancel the built-in poller (the batch itself keeps running)."""
        with self._lock:
            poller = self._poller
            self._poller = None

        if poller is not None:
            poller.request_cancellation()
            poller.wait()

    def wait_until_drained(self, timeout: float | None = None) -> bool:
        """Block until the active batch drains.

        Also waits for the workers of drained tasks that were not stopped,
        so every task_finished callback has run when this returns True.
        Stopped tasks report on the stopping thread; their workers may still
        sit in a stalled read and are not waited for. Requires something to
        be polling (the built-in poller or an external timer).

        Returns:
            False on timeout.

        """
        deadline = None if timeout is None else time.monotonic() + timeout
        if not self._drained_event.wait(timeout):
            return False

        with self._lock:
            tasks = list(self._last_drained)

        for task in tasks:
            if task.was_stopped:
                continue
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            if not task.wait(remaining):
                return False
        return True

    def shutdown(self) -> None:
        """Stop polling and every running task, then drain the batch."""
        self.stop_polling()
        self.stop_all()
        self.poll_once()

    def _on_task_finished(self, task: FileHashTask) -> None:
        self.task_finished.emit(task)
