"""Qt progress poller for hash batches.

Author: Michael Economou
Date: 2026-03-05

Drives HashBatchCoordinator.poll_once() from a QTimer on the Qt main
thread and forwards the coordinator's Observable signals to Qt signals,
so progress bars and result views are only touched from the GUI thread.

Usage:
    coordinator = HashBatchCoordinator(auto_poll=False)
    poller = QtProgressPoller(coordinator, parent=window)
    poller.size_progress.connect(progress_bar_update)
    poller.task_finished.connect(append_result)
    poller.batch_drained.connect(set_idle)
    coordinator.submit(paths, HashAlgorithm.SHA256)
    poller.start()
"""

from __future__ import annotations

from typing import Any

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from filehasher.core.hash.batch_coordinator import HashBatchCoordinator
from filehasher.core.progress_protocol import SizeProgress
from filehasher.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class QtProgressPoller(QObject):
    """QTimer-driven progress polling for a HashBatchCoordinator."""

    # Qt signals (queued to the main thread when emitted from hash workers)
    size_progress = pyqtSignal("qint64", "qint64")  # processed_bytes, total_bytes
    task_finished = pyqtSignal(object)  # FileHashTask
    batch_drained = pyqtSignal(object)  # list[FileHashTask]

    def __init__(self, coordinator: HashBatchCoordinator, parent: QObject | None = None) -> None:
        """Initialize the poller.

        Args:
            coordinator: Coordinator to poll; should be created with auto_poll=False.
            parent: Parent QObject

        """
        super().__init__(parent)
        self._coordinator = coordinator

        self._timer = QTimer(self)
        self._timer.setInterval(coordinator.poll_interval_ms)
        self._timer.timeout.connect(self._on_timeout)

        coordinator.task_finished.connect(self._forward_task_finished)
        coordinator.batch_drained.connect(self._forward_batch_drained)

    def start(self) -> None:
        """Poll immediately, then on every timer tick until the batch drains."""
        if self._timer.isActive():
            return
        logger.debug("[QtProgressPoller] Polling started", extra={"dev_only": True})
        self._timer.start()
        self._on_timeout()

    def stop(self) -> None:
        """Stop polling without touching the running tasks."""
        if self._timer.isActive():
            self._timer.stop()
            logger.debug("[QtProgressPoller] Polling stopped", extra={"dev_only": True})

    def is_active(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self) -> None:
        progress: SizeProgress = self._coordinator.poll_once()
        self.size_progress.emit(progress.processed_bytes, progress.total_bytes)
        # poll_once() clears the batch once it drains
        if not self._coordinator.is_busy:
            self.stop()

    def _forward_task_finished(self, task: Any) -> None:
        self.task_finished.emit(task)

    def _forward_batch_drained(self, tasks: Any) -> None:
        self.batch_drained.emit(tasks)
