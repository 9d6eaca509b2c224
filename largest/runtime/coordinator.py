"""Concurrent per-subdirectory size measurement with a lock-guarded result list."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from ..entry_model.tree_size import compute_tree_size
from ..entry_model.types import Entry

logger = logging.getLogger(__name__)


class ResultCollection:
    """Append-only entry list shared between measurement tasks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[Entry] = []

    def append(self, entry: Entry) -> None:
        with self._lock:
            self._entries.append(entry)

    def snapshot(self) -> list[Entry]:
        """Return a copy of the collected entries in insertion order."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class DirectorySizeCoordinator:
    """Run one tree-size task per submitted directory and join them all.

    By default every ``submit`` starts its own thread, so fan-out equals the
    number of submitted directories. Passing ``max_workers`` switches to a
    bounded ``ThreadPoolExecutor`` instead. Either way ``join`` waits for
    every task; there is no timeout. A caller hitting a fatal error before
    ``join`` uses ``abandon`` instead.
    """

    def __init__(
        self,
        results: ResultCollection,
        measure: Callable[[Path], int] = compute_tree_size,
        max_workers: int | None = None,
    ) -> None:
        if max_workers is not None and max_workers <= 0:
            raise ValueError("max_workers must be >= 1")
        self._results = results
        self._measure = measure
        self._max_workers = max_workers
        self._threads: list[threading.Thread] = []
        self._futures: list[Future[None]] = []
        self._executor: ThreadPoolExecutor | None = None
        self._errors: list[BaseException] = []
        self._errors_lock = threading.Lock()
        self._submitted = 0
        self._abandoned = threading.Event()

    @property
    def submitted(self) -> int:
        return self._submitted

    def _run(self, name: str, path: Path) -> None:
        if self._abandoned.is_set():
            return
        started = time.monotonic()
        size = self._measure(path)
        if self._abandoned.is_set():
            return
        self._results.append(Entry(name=name, size=size))
        logger.debug("measured %s: %d bytes in %.3fs", path, size, time.monotonic() - started)

    def _run_in_thread(self, name: str, path: Path) -> None:
        try:
            self._run(name, path)
        except Exception as exc:
            with self._errors_lock:
                self._errors.append(exc)

    def submit(self, name: str, path: Path) -> None:
        """Start measuring ``path``; its entry is recorded under ``name``."""
        self._submitted += 1
        if self._max_workers is not None:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="largest-dir-size",
                )
            self._futures.append(self._executor.submit(self._run, name, path))
            return

        worker = threading.Thread(
            target=self._run_in_thread,
            args=(name, path),
            name=f"largest-dir-size-{self._submitted}",
            daemon=True,
        )
        self._threads.append(worker)
        worker.start()

    def abandon(self) -> None:
        """Drop all pending work after a fatal error; nothing is joined.

        Queued pool tasks are cancelled and the pool is shut down without
        waiting. Tasks already measuring finish on their own but their
        results are discarded.
        """
        self._abandoned.set()
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        self._futures.clear()
        self._threads.clear()

    def join(self) -> list[Entry]:
        """Block until all submitted tasks finish and return collected entries.

        The first unexpected task exception is re-raised once every task has
        completed.
        """
        for worker in self._threads:
            worker.join()
        self._threads.clear()

        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        for future in self._futures:
            exc = future.exception()
            if exc is not None:
                self._errors.append(exc)
        self._futures.clear()

        if self._errors:
            raise self._errors[0]
        return self._results.snapshot()


__all__ = [
    "DirectorySizeCoordinator",
    "ResultCollection",
]
