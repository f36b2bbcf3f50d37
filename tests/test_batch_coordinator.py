"""
Tests for HashBatchCoordinator: submission, aggregate progress, draining and stop.

Author: Michael Economou
Date: 2026-03-03
"""

from __future__ import annotations

import hashlib
import pathlib
import threading

from filehasher.core.hash.algorithms import HashAlgorithm
from filehasher.core.hash.batch_coordinator import HashBatchCoordinator
from filehasher.core.hash.file_hash_task import FileHashTask
from filehasher.core.hash.hash_status import HashStatus
from filehasher.core.progress_protocol import SizeProgress


class _Recorder:
    """Thread-safe collector for coordinator signals."""

    def __init__(self, coordinator: HashBatchCoordinator) -> None:
        self._lock = threading.Lock()
        self.finished: list[FileHashTask] = []
        self.progress: list[SizeProgress] = []
        self.drained: list[list[FileHashTask]] = []
        # (status, position == total_size) of each task when the batch drained
        self.drained_states: list[list[tuple[HashStatus, bool]]] = []
        coordinator.task_finished.connect(self._on_finished)
        coordinator.progress_updated.connect(self._on_progress)
        coordinator.batch_drained.connect(self._on_drained)

    def _on_finished(self, task: FileHashTask) -> None:
        with self._lock:
            self.finished.append(task)

    def _on_progress(self, progress: SizeProgress) -> None:
        with self._lock:
            self.progress.append(progress)

    def _on_drained(self, tasks: list[FileHashTask]) -> None:
        with self._lock:
            self.drained.append(list(tasks))
            self.drained_states.append(
                [(t.status, t.current_position() == t.total_size) for t in tasks]
            )


class TestSubmit:
    """Tests for batch submission."""

    def test_empty_submit(self) -> None:
        coordinator = HashBatchCoordinator()

        assert coordinator.submit([], HashAlgorithm.MD5) == []
        assert coordinator.submit(None, HashAlgorithm.MD5) == []
        assert not coordinator.is_busy
        assert coordinator.wait_until_drained(0.1)

    def test_tasks_created_in_order(self, sample_files) -> None:
        coordinator = HashBatchCoordinator(auto_poll=False)

        tasks = coordinator.submit(sample_files, HashAlgorithm.MD5)

        assert [t.input_path for t in tasks] == sample_files
        assert coordinator.total_bytes == 60_000
        assert coordinator.is_busy
        coordinator.shutdown()

    def test_all_files_hashed(self, sample_files) -> None:
        coordinator = HashBatchCoordinator(poll_interval_ms=10)
        recorder = _Recorder(coordinator)

        tasks = coordinator.submit(sample_files, HashAlgorithm.SHA256)

        assert coordinator.wait_until_drained(10.0)
        assert sorted(recorder.finished, key=id) == sorted(tasks, key=id)
        for task, path in zip(tasks, sample_files, strict=True):
            with open(path, "rb") as f:
                assert task.result == hashlib.sha256(f.read()).hexdigest().upper()
        assert recorder.drained == [tasks]
        assert not coordinator.is_busy
        assert coordinator.total_bytes == 0

    def test_failed_open_reported_during_submit(self, tmp_path, make_file) -> None:
        """Unreadable files are reported immediately and count 0 bytes."""
        good = make_file("good.bin", b"abc")
        missing = str(tmp_path / "missing.bin")
        coordinator = HashBatchCoordinator(auto_poll=False)
        recorder = _Recorder(coordinator)

        tasks = coordinator.submit([missing, good], HashAlgorithm.MD5)

        assert tasks[0].status is HashStatus.FILE_ERROR
        assert tasks[0] in recorder.finished
        assert coordinator.total_bytes == 3
        coordinator.shutdown()

    def test_only_failed_files_drain_on_first_poll(self, tmp_path) -> None:
        coordinator = HashBatchCoordinator(auto_poll=False)
        recorder = _Recorder(coordinator)

        tasks = coordinator.submit([tmp_path / "a", tmp_path / "b"], HashAlgorithm.MD5)
        progress = coordinator.poll_once()

        assert progress.total_bytes == 0
        assert progress.is_drained
        assert recorder.finished == tasks
        assert recorder.drained == [tasks]
        assert not coordinator.is_busy

    def test_single_path_string(self, make_file) -> None:
        """A bare path is one file, not a sequence of characters."""
        path = make_file("pw.txt", b"123456")
        coordinator = HashBatchCoordinator(poll_interval_ms=10)

        tasks = coordinator.submit(path, HashAlgorithm.MD5)

        assert len(tasks) == 1
        assert coordinator.wait_until_drained(10.0)
        assert tasks[0].result == "E10ADC3949BA59ABBE56E057F20F883E"

    def test_single_path_like(self, make_file) -> None:
        path = pathlib.Path(make_file("pw.txt", b"123456"))
        coordinator = HashBatchCoordinator(poll_interval_ms=10)

        tasks = coordinator.submit(path, HashAlgorithm.MD5)

        assert [t.file_name for t in tasks] == ["pw.txt"]
        assert coordinator.wait_until_drained(10.0)

    def test_zero_byte_files_drain(self, make_file) -> None:
        paths = [make_file("empty1.bin"), make_file("empty2.bin")]
        coordinator = HashBatchCoordinator(poll_interval_ms=10)

        tasks = coordinator.submit(paths, HashAlgorithm.MD5)

        assert coordinator.wait_until_drained(10.0)
        assert all(t.result == "D41D8CD98F00B204E9800998ECF8427E" for t in tasks)


class TestProgress:
    """Tests for aggregate progress polling."""

    def test_progress_reaches_total(self, sample_files) -> None:
        coordinator = HashBatchCoordinator(poll_interval_ms=5)
        recorder = _Recorder(coordinator)

        coordinator.submit(sample_files, HashAlgorithm.SHA1)
        assert coordinator.wait_until_drained(10.0)

        assert recorder.progress
        last = recorder.progress[-1]
        assert last.processed_bytes == last.total_bytes == 60_000
        assert all(p.total_bytes == 60_000 for p in recorder.progress)
        processed = [p.processed_bytes for p in recorder.progress]
        assert processed == sorted(processed)

    def test_progress_sums_positions(self, sample_files) -> None:
        coordinator = HashBatchCoordinator(auto_poll=False)
        tasks = coordinator.submit(sample_files, HashAlgorithm.MD5)
        for task in tasks:
            assert task.wait(10.0)

        progress = coordinator.progress()

        assert progress.processed_bytes == sum(t.current_position() for t in tasks)
        assert progress.processed_bytes == 60_000
        assert progress.current_file == ""

    def test_idle_poll_reports_zero(self) -> None:
        coordinator = HashBatchCoordinator(auto_poll=False)
        recorder = _Recorder(coordinator)

        progress = coordinator.poll_once()

        assert progress == SizeProgress(0, 0, "")
        assert recorder.progress == [progress]
        assert recorder.drained == []

    def test_drain_clears_batch(self, sample_files) -> None:
        coordinator = HashBatchCoordinator(auto_poll=False)
        tasks = coordinator.submit(sample_files, HashAlgorithm.MD5)
        for task in tasks:
            task.wait(10.0)

        coordinator.poll_once()

        assert coordinator.tasks == []
        assert coordinator.total_bytes == 0
        assert coordinator.wait_until_drained(1.0)

    def test_second_batch_after_drain(self, sample_files, make_file) -> None:
        coordinator = HashBatchCoordinator(poll_interval_ms=10)

        coordinator.submit(sample_files, HashAlgorithm.MD5)
        assert coordinator.wait_until_drained(10.0)

        tasks = coordinator.submit([make_file("again.bin", b"123456")], HashAlgorithm.MD5)
        assert coordinator.wait_until_drained(10.0)
        assert tasks[0].result == "E10ADC3949BA59ABBE56E057F20F883E"


class TestStopAll:
    """Tests for batch cancellation."""

    def test_stop_all_on_empty_batch(self) -> None:
        assert HashBatchCoordinator().stop_all() == 0

    def test_stop_all_drains_batch(self, make_file) -> None:
        paths = [make_file(f"big{i}.bin", b"\x00" * 4_000_000) for i in range(3)]
        coordinator = HashBatchCoordinator(poll_interval_ms=10)
        recorder = _Recorder(coordinator)

        tasks = coordinator.submit(paths, HashAlgorithm.SHA512)
        coordinator.stop_all()

        assert coordinator.wait_until_drained(10.0)
        assert len(recorder.finished) == len(tasks)
        assert all(t.is_terminal for t in tasks)
        assert all(t.was_stopped for t in tasks if t.status is HashStatus.FILE_ERROR)
        assert not coordinator.is_busy

    def test_shutdown_leaves_no_work(self, sample_files) -> None:
        coordinator = HashBatchCoordinator()
        tasks = coordinator.submit(sample_files, HashAlgorithm.MD5)

        coordinator.shutdown()

        assert not coordinator.is_busy
        for task in tasks:
            assert task.wait(10.0)
            assert task.is_terminal

    def test_stopped_tasks_are_terminal_and_full_at_drain(self, make_file) -> None:
        paths = [make_file(f"big{i}.bin", b"\x00" * 4_000_000) for i in range(3)]
        coordinator = HashBatchCoordinator(poll_interval_ms=5)
        recorder = _Recorder(coordinator)

        coordinator.submit(paths, HashAlgorithm.SHA512)
        coordinator.stop_all()

        assert coordinator.wait_until_drained(10.0)
        assert len(recorder.drained_states) == 1
        for status, at_total in recorder.drained_states[0]:
            assert status.is_terminal
            assert at_total


class TestStalledBatch:
    """Tests for batches whose reads are blocked."""

    def test_incomplete_task_keeps_batch_open(self, stalled_fifo) -> None:
        """A 0/0 byte count does not drain while a task is still running."""
        coordinator = HashBatchCoordinator(poll_interval_ms=10)
        recorder = _Recorder(coordinator)

        tasks = coordinator.submit([stalled_fifo.path], HashAlgorithm.MD5)

        assert not coordinator.wait_until_drained(0.3)
        assert coordinator.is_busy
        assert recorder.drained == []
        assert coordinator.progress().current_file == "stalled.fifo"

        stalled_fifo.release(b"123456")
        assert coordinator.wait_until_drained(5.0)
        assert tasks[0].result == "E10ADC3949BA59ABBE56E057F20F883E"
        assert recorder.drained_states == [[(HashStatus.SUCCESS, True)]]

    def test_stop_all_returns_while_read_is_blocked(self, stalled_fifo, make_file) -> None:
        coordinator = HashBatchCoordinator(poll_interval_ms=10)
        recorder = _Recorder(coordinator)
        tasks = coordinator.submit(
            [stalled_fifo.path, make_file("small.bin", b"abc")], HashAlgorithm.MD5
        )
        assert not tasks[0].wait(0.2)

        stopper = threading.Thread(target=coordinator.stop_all, daemon=True)
        stopper.start()
        stopper.join(2.0)

        assert not stopper.is_alive()
        assert coordinator.wait_until_drained(5.0)
        assert tasks[0].status is HashStatus.FILE_ERROR
        assert tasks[0].was_stopped
        assert len(recorder.drained_states) == 1
        assert all(status.is_terminal for status, _ in recorder.drained_states[0])
        assert tasks[0] in recorder.finished

        stalled_fifo.release()
        assert tasks[0].wait(5.0)

    def test_shutdown_returns_while_read_is_blocked(self, stalled_fifo) -> None:
        coordinator = HashBatchCoordinator(poll_interval_ms=10)
        coordinator.submit([stalled_fifo.path], HashAlgorithm.SHA1)

        stopper = threading.Thread(target=coordinator.shutdown, daemon=True)
        stopper.start()
        stopper.join(2.0)

        assert not stopper.is_alive()
        assert not coordinator.is_busy
