"""Module: file_hash_task.py

Author: Michael Economou
Date: 2026-03-02

Streaming hash of a single file on a background thread.

A FileHashTask opens its file on construction and never raises: open
failures are encoded as HashStatus.FILE_ERROR. start() streams the file
through the digest algorithm on a HashTaskWorker thread while
current_position() exposes the consumed byte count for progress polling.

stop() ends the task in FILE_ERROR at once, exactly like a read error;
was_stopped tells the two apart. The stream is marked CLOSED together with
the terminal status. The worker checks for the stop between reads and
closes the file itself when its pending read returns, so stop() never
waits on a stalled read.

Usage:
    task = FileHashTask(HashAlgorithm.SHA256, "/path/to/file.iso")
    task.hash_finished.connect(on_finished)
    task.start()
    ...
    task.current_position(), task.total_size
"""

from __future__ import annotations

import os
import threading
from typing import BinaryIO

from filehasher.config import READ_BUFFER_SIZE
from filehasher.core.hash.algorithms import HashAlgorithm, digest_stream, format_digest
from filehasher.core.hash.hash_status import HashStatus, StreamState
from filehasher.utils.events import Observable, Signal
from filehasher.utils.logging.logger_factory import get_cached_logger
from filehasher.utils.threading import WorkerBase

logger = get_cached_logger(__name__)

# Result carried by a task that ended in FILE_ERROR
ERROR_RESULT = ""


class HashTaskWorker(WorkerBase):
    """Background thread running a single FileHashTask's digest."""

    def __init__(self, task: FileHashTask) -> None:
        super().__init__(parent=task, name=f"hash-{task.file_name}")
        self._task = task

    def run(self) -> None:
        self._task._stream_digest()
        self.finished_processing.emit(self._task.status is HashStatus.SUCCESS)


class FileHashTask(Observable):
    """Hash of one file with one algorithm.

    Attributes:
        algorithm: Digest algorithm, fixed at construction.
        input_path: Path exactly as given by the caller.
        file_path: Absolute path.
        file_name: Display name (basename of file_path).
        total_size: File length in bytes, 0 if the file could not be opened.

    Signals:
        hash_finished(task): Emitted once when the task reaches a terminal
            status; on the worker thread after start(), on the caller's
            thread after stop().
    """

    hash_finished = Signal(object)

    def __init__(
        self,
        algorithm: HashAlgorithm,
        path: str | os.PathLike[str],
        buffer_size: int = READ_BUFFER_SIZE,
    ) -> None:
        super().__init__()
        self.algorithm = algorithm
        self.input_path = os.fspath(path)
        self.file_path = os.path.abspath(self.input_path)
        self.file_name = os.path.basename(self.file_path)
        self.total_size = 0

        self._buffer_size = buffer_size
        self._lock = threading.Lock()
        self._status = HashStatus.INCOMPLETE
        self._result: str | None = None
        self._stream: BinaryIO | None = None
        self._stream_state = StreamState.CLOSED
        self._consumed = 0
        self._stop_requested = False
        self._worker: HashTaskWorker | None = None

        self._open_stream()

    # =========================================================================
    # Construction
    # =========================================================================

    def _open_stream(self) -> None:
        """Open the input for reading; failures become FILE_ERROR."""
        try:
            stream = open(self.file_path, "rb")  # noqa: SIM115 - owned until terminal
        except (OSError, ValueError) as e:
            logger.warning("[FileHashTask] Cannot open %s: %s", self.file_path, e)
            self._status = HashStatus.FILE_ERROR
            self._result = ERROR_RESULT
            return

        try:
            self.total_size = os.fstat(stream.fileno()).st_size
        except OSError as e:
            logger.warning("[FileHashTask] Cannot stat %s: %s", self.file_path, e)
            stream.close()
            self._status = HashStatus.FILE_ERROR
            self._result = ERROR_RESULT
            return

        self._stream = stream
        self._stream_state = StreamState.OPEN
        logger.debug(
            "[FileHashTask] Opened %s (%s bytes)",
            self.file_name,
            format(self.total_size, ","),
            extra={"dev_only": True},
        )

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def status(self) -> HashStatus:
        with self._lock:
            return self._status

    @property
    def result(self) -> str | None:
        """Hex digest on SUCCESS, ERROR_RESULT on FILE_ERROR, None while incomplete."""
        with self._lock:
            return self._result

    @property
    def digest(self) -> str | None:
        """Hex digest, or None unless the task succeeded."""
        with self._lock:
            return self._result if self._status is HashStatus.SUCCESS else None

    @property
    def stream_state(self) -> StreamState:
        with self._lock:
            return self._stream_state

    @property
    def was_stopped(self) -> bool:
        """True if stop() was accepted for this task."""
        with self._lock:
            return self._stop_requested

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def start(self) -> bool:
        """Start hashing on a background thread.

        Returns:
            True if a worker was started, False if the task is terminal,
            was stopped, or was already started.

        """
        with self._lock:
            if (
                self._status is not HashStatus.INCOMPLETE
                or self._stop_requested
                or self._worker is not None
            ):
                return False
            self._worker = HashTaskWorker(self)
            worker = self._worker

        logger.debug(
            "[FileHashTask] Starting %s hash of %s",
            self.algorithm.value,
            self.file_name,
            extra={"dev_only": True},
        )
        worker.start()
        return True

    def stop(self) -> bool:
        """Request cancellation without blocking.

        No-op on terminal tasks. Otherwise the task ends in FILE_ERROR
        immediately. A running worker abandons its digest once its pending
        read returns and closes the stream itself, so stopping a stalled
        read never waits on it.

        Returns:
            True if the stop was accepted.

        """
        with self._lock:
            if self._status is not HashStatus.INCOMPLETE or self._stop_requested:
                return False
            self._stop_requested = True
            started = self._worker is not None
            self._enter_terminal(HashStatus.FILE_ERROR, ERROR_RESULT)

        logger.info("[FileHashTask] Stop requested for %s", self.file_name)

        if not started:
            self._release_stream()

        self.hash_finished.emit(self)
        return True

    def current_position(self) -> int:
        """Bytes consumed so far; total_size once the stream is closed."""
        with self._lock:
            if self._stream_state is StreamState.CLOSED:
                return self.total_size
            return min(self._consumed, self.total_size)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the worker exits.

        Returns:
            True if no worker is running anymore, False on timeout.

        """
        with self._lock:
            worker = self._worker
        if worker is None:
            return True
        return worker.wait(timeout)

    # =========================================================================
    # Worker side
    # =========================================================================

    def _update_position(self, bytes_processed: int) -> None:
        self._consumed = bytes_processed

    def _is_stop_requested(self) -> bool:
        return self._stop_requested

    def _stream_digest(self) -> None:
        """Digest the open stream. Runs on the worker thread."""
        with self._lock:
            stream = self._stream

        try:
            digest = digest_stream(
                self.algorithm,
                stream,
                buffer_size=self._buffer_size,
                progress_callback=self._update_position,
                cancel_check=self._is_stop_requested,
            )
        except (OSError, ValueError) as e:
            if self.was_stopped:
                logger.info("[FileHashTask] Hash of %s stopped", self.file_name)
            else:
                logger.warning("[FileHashTask] Read error on %s: %s", self.file_path, e)
            self._finish(HashStatus.FILE_ERROR, ERROR_RESULT)
        except Exception as e:
            logger.exception("[FileHashTask] Unexpected error hashing %s: %s", self.file_path, e)
            self._finish(HashStatus.FILE_ERROR, ERROR_RESULT)
        else:
            if digest is None:
                logger.info("[FileHashTask] Hash of %s stopped", self.file_name)
            else:
                self._finish(HashStatus.SUCCESS, format_digest(digest))
        finally:
            self._release_stream()

    def _release_stream(self) -> None:
        """Close the underlying file once. Only called when no read is pending."""
        with self._lock:
            stream = self._stream
            self._stream = None

        if stream is None:
            return
        try:
            stream.close()
        except OSError as e:
            logger.debug("[FileHashTask] Error closing %s: %s", self.file_name, e)

    def _enter_terminal(self, status: HashStatus, result: str) -> None:
        """Set status, result and stream state together; caller holds the lock."""
        self._status = status
        self._result = result
        self._stream_state = StreamState.CLOSED

    def _finish(self, status: HashStatus, result: str) -> None:
        """Enter a terminal status (first caller wins) and notify."""
        with self._lock:
            if self._status is not HashStatus.INCOMPLETE:
                return
            self._enter_terminal(status, result)

        if status is HashStatus.SUCCESS:
            logger.info("[FileHashTask] %s %s: %s", self.algorithm.value, self.file_name, result)

        self.hash_finished.emit(self)

    def __repr__(self) -> str:
        return (
            f"FileHashTask({self.algorithm.value}, {self.file_name!r}, "
            f"{self._status.name}, {self.current_position()}/{self.total_size})"
        )


def create_file_task(algorithm: HashAlgorithm, path: str | os.PathLike[str]) -> FileHashTask:
    """Create a file hash task. Never raises; open failures are in task.status."""
    return FileHashTask(algorithm, path)
