#!/usr/bin/env python3
"""
Module: main.py

Author: Michael Economou
Date: 2026-03-05

Command-line entry point for filehasher.

Hashes a text buffer and/or any number of files concurrently, shows live
byte progress on stderr, and optionally compares the last digest with a
reference value. Ctrl-C stops all running file hashes.

Usage:
    python -m filehasher -a sha256 file1.iso file2.iso
    python -m filehasher -a md5 --text 123456
    python -m filehasher -a sha1 file.zip --compare "7C:4A:8D:..."

Exit codes: 0 success, 1 file error or digest mismatch, 2 usage error.
"""

from __future__ import annotations

import argparse
import os
import sys
import threading

from filehasher.config import APP_NAME, APP_VERSION, DEFAULT_ALGORITHM_NAME
from filehasher.core.hash import (
    FileHashTask,
    HashAlgorithm,
    HashBatchCoordinator,
    HashComparison,
    HashStatus,
    compare_hashes,
    compute_text_digest,
    guess_algorithm,
)
from filehasher.core.progress_protocol import SizeProgress, format_size_progress
from filehasher.ui.status_labels import comparison_label, format_task_result
from filehasher.utils.logging.logger_factory import get_cached_logger
from filehasher.utils.logging.logger_setup import ConfigureLogger, get_user_config_dir

logger = get_cached_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _algorithm_arg(value: str) -> HashAlgorithm:
    try:
        return HashAlgorithm.from_name(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Compute MD5, SHA-1, SHA-256 or SHA-512 digests of text and files.",
    )
    parser.add_argument("paths", nargs="*", help="files to hash")
    parser.add_argument(
        "-a",
        "--algorithm",
        type=_algorithm_arg,
        default=HashAlgorithm.from_name(DEFAULT_ALGORITHM_NAME),
        metavar="{md5,sha1,sha256,sha512}",
        help=f"digest algorithm (default: {DEFAULT_ALGORITHM_NAME.lower()})",
    )
    parser.add_argument("-t", "--text", help="hash this text instead of (or before) files")
    parser.add_argument(
        "--full-path", action="store_true", help="show full paths instead of file names"
    )
    parser.add_argument(
        "-c", "--compare", metavar="HASH", help="compare the last digest with this value"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="do not show progress")
    parser.add_argument("--log-dir", help="directory for log files")
    parser.add_argument("--no-log-file", action="store_true", help="disable file logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


class _BatchPrinter:
    """Prints results and progress from worker and poller threads."""

    def __init__(self, full_path: bool, show_progress: bool) -> None:
        self._lock = threading.Lock()
        self._full_path = full_path
        self._show_progress = show_progress
        self._progress_shown = False
        self.last_digest: str | None = None
        self.failed = 0

    def _clear_progress(self) -> None:
        if self._progress_shown:
            sys.stderr.write("\r\033[K")
            sys.stderr.flush()
            self._progress_shown = False

    def on_task_finished(self, task: FileHashTask) -> None:
        with self._lock:
            if task.status is HashStatus.SUCCESS:
                self.last_digest = task.digest
            else:
                self.failed += 1
            self._clear_progress()
            print(format_task_result(task, self._full_path), flush=True)
            print(flush=True)

    def on_progress(self, progress: SizeProgress) -> None:
        if not self._show_progress or progress.is_drained:
            return
        with self._lock:
            sys.stderr.write(f"\r{format_size_progress(progress)}")
            sys.stderr.flush()
            self._progress_shown = True

    def finish(self) -> None:
        with self._lock:
            self._clear_progress()


def hash_files(
    paths: list[str], algorithm: HashAlgorithm, full_path: bool = False, show_progress: bool = True
) -> tuple[int, str | None]:
    """Hash files concurrently, printing each result as it completes.

    Returns:
        (number of failed files, last successful digest)

    """
    coordinator = HashBatchCoordinator()
    printer = _BatchPrinter(full_path, show_progress)
    coordinator.task_finished.connect(printer.on_task_finished)
    coordinator.progress_updated.connect(printer.on_progress)

    coordinator.submit(paths, algorithm)
    try:
        while not coordinator.wait_until_drained(timeout=0.5):
            pass
    except KeyboardInterrupt:
        logger.info("[main] Interrupted, stopping all hash tasks")
        coordinator.shutdown()
        coordinator.wait_until_drained()
    finally:
        printer.finish()

    return printer.failed, printer.last_digest


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.text is None and not args.paths:
        parser.error("nothing to hash: give --text and/or file paths")

    ConfigureLogger(
        log_name=APP_NAME,
        log_dir=args.log_dir or os.path.join(get_user_config_dir(APP_NAME), "logs"),
        file_enabled=not args.no_log_file,
    )
    logger.debug("[main] Arguments: %s", vars(args), extra={"dev_only": True})

    algorithm: HashAlgorithm = args.algorithm
    exit_code = EXIT_OK
    last_digest = None

    if args.text is not None:
        last_digest = compute_text_digest(algorithm, args.text)
        print(last_digest, flush=True)

    if args.paths:
        show_progress = not args.quiet and sys.stderr.isatty()
        failed, file_digest = hash_files(args.paths, algorithm, args.full_path, show_progress)
        if file_digest is not None:
            last_digest = file_digest
        if failed:
            exit_code = EXIT_FAILURE

    if args.compare is not None:
        guessed = guess_algorithm(args.compare)
        if guessed is not None and guessed is not algorithm:
            logger.warning(
                "[main] Reference looks like a %s digest, computed %s",
                guessed.value,
                algorithm.value,
            )
        comparison = compare_hashes(last_digest, args.compare)
        print(comparison_label(comparison), flush=True)
        if comparison is not HashComparison.MATCH:
            exit_code = EXIT_FAILURE

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
