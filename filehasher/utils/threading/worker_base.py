"""Qt-free worker base class for background operations.

Author: Michael Economou
Date: 2026-02-03

Provides a QThread-compatible interface using standard threading.Thread.
This allows core modules to run background operations without Qt dependency.
"""

import threading
from abc import abstractmethod
from typing import Any

from filehasher.utils.events import Observable, Signal
from filehasher.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class WorkerBase(threading.Thread, Observable):
    """Base class for background workers.

    Provides QThread-like interface using standard threading.Thread.
    Subclasses must implement run() method.

    Signals (Observable descriptors):
    - finished_processing: Emitted when worker completes (args: success)

    Usage:
        class MyWorker(WorkerBase):
            def run(self):
                while not self.wait_for_cancellation(0.1):
                    ...  # Do background work
                self.finished_processing.emit(True)

        worker = MyWorker(name="my-worker")
        worker.finished_processing.connect(on_finished)
        worker.start()
    """

    finished_processing = Signal(bool)

    def __init__(self, parent: Any = None, name: str | None = None, daemon: bool = True) -> None:
        """Initialize worker.

        Args:
            parent: Owning object (kept for QThread API compatibility)
            name: Thread name (shows up in logs and debuggers)
            daemon: Whether thread should be daemon (default True)

        """
        threading.Thread.__init__(self, name=name, daemon=daemon)
        Observable.__init__(self)
        self._parent = parent
        self._cancel_event = threading.Event()

    def request_cancellation(self) -> None:
        """Request worker to cancel operation (thread-safe)."""
        if not self._cancel_event.is_set():
            self._cancel_event.set()
            logger.debug("[%s] Cancellation requested", self.__class__.__name__)

    def is_cancelled(self) -> bool:
        """Check if cancellation was requested (thread-safe)."""
        return self._cancel_event.is_set()

    def wait_for_cancellation(self, timeout: float) -> bool:
        """Sleep up to timeout seconds, waking early on cancellation.

        Returns:
            True if cancellation was requested, False if the timeout elapsed

        """
        return self._cancel_event.wait(timeout)

    @abstractmethod
    def run(self) -> None:
        """Main worker execution method.

        Must be implemented by subclasses.
        """
        ...

    def isRunning(self) -> bool:
        """Check if worker thread is running (QThread compatibility)."""
        return self.is_alive()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for worker to finish (QThread compatibility).

        Args:
            timeout: Maximum time to wait in seconds (None = wait forever)

        Returns:
            True if thread finished (or never started), False if timeout occurred

        """
        if self.ident is None:
            return True
        self.join(timeout=timeout)
        return not self.is_alive()
