"""Threading helpers for background operations."""

from filehasher.utils.threading.worker_base import WorkerBase

__all__ = ["WorkerBase"]
