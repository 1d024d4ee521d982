"""Bounded fan-out/fan-in pool running metadata extraction on threads.

A feeder thread pushes paths into a bounded work queue, ``workers`` threads
turn each path into a :class:`Song`, and a completion thread waits on every
worker before closing the results stream with an end marker. Every blocking
queue operation wakes up every ``poll_interval`` seconds to look at the
cancellation token, so no thread outlives a cancelled scan.
"""
from __future__ import annotations

import os
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Iterator, List, Optional, Sequence, Tuple

from utils.logging import get_logger

from .cancel import CancellationToken
from .extractor import MetadataExtractor
from .models import Song

LOGGER = get_logger(__name__)

WORKERS_PER_CORE = 4
DEFAULT_POLL_INTERVAL = 0.05

SongResult = Tuple[str, Song]

_STOP = object()
_DONE = object()


def worker_count(path_count: int, cpu_count: Optional[int] = None, per_core: int = WORKERS_PER_CORE) -> int:
    """Number of extraction workers for a scan of ``path_count`` files."""

    if path_count <= 0:
        return 0
    cpus = cpu_count if cpu_count is not None else (os.cpu_count() or 1)
    return min(per_core * max(cpus, 1), path_count)


class ExtractionPool:
    """Extract songs for ``paths`` in parallel and stream ``(path, Song)`` pairs."""

    def __init__(
        self,
        paths: Sequence[str],
        extractor: MetadataExtractor,
        cancel: CancellationToken,
        workers: int,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.paths = list(paths)
        self.extractor = extractor
        self.cancel = cancel
        self.workers = workers
        self.poll_interval = poll_interval
        self.spawned = 0
        self._work: "queue.Queue[object]" = queue.Queue(maxsize=workers)
        self._results: "queue.Queue[object]" = queue.Queue(maxsize=workers)
        self._halt = threading.Event()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._threads: List[threading.Thread] = []

    def _stopped(self) -> bool:
        return self.cancel.cancelled or self._halt.is_set()

    def _put(self, target: "queue.Queue[object]", item: object) -> bool:
        while not self._stopped():
            try:
                target.put(item, timeout=self.poll_interval)
                return True
            except queue.Full:
                continue
        return False

    def _feed(self) -> None:
        for path in self.paths:
            if not self._put(self._work, path):
                LOGGER.debug("Feeder stopped after cancellation")
                return
        for _ in range(self.workers):
            if not self._put(self._work, _STOP):
                return

    def _work_loop(self) -> None:
        while not self._stopped():
            try:
                item = self._work.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            if item is _STOP:
                return
            path = str(item)
            song = self.extractor.build_song(path)
            if not self._put(self._results, (path, song)):
                return

    def _close_when_done(self, futures: List[Future[None]]) -> None:
        wait(futures)
        for future in futures:
            exc = future.exception()
            if exc is not None:
                LOGGER.error("Extraction worker crashed: %s", exc)
        self._put(self._results, _DONE)

    def start(self) -> "ExtractionPool":
        if self._executor is not None:
            raise RuntimeError("pool already started")
        self._executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="extract")
        futures = [self._executor.submit(self._work_loop) for _ in range(self.workers)]
        self.spawned = len(futures)
        feeder = threading.Thread(target=self._feed, name="extract-feeder", daemon=True)
        closer = threading.Thread(
            target=self._close_when_done, args=(futures,), name="extract-closer", daemon=True
        )
        self._threads = [feeder, closer]
        for thread in self._threads:
            thread.start()
        LOGGER.debug("Started %d extraction workers for %d paths", self.spawned, len(self.paths))
        return self

    def results(self) -> Iterator[SongResult]:
        """Yield results until the pool finishes or the scan is cancelled."""

        while True:
            try:
                item = self._results.get(timeout=self.poll_interval)
            except queue.Empty:
                if self._stopped():
                    return
                continue
            if item is _DONE:
                return
            yield item  # type: ignore[misc]

    def close(self) -> None:
        """Stop every pool thread and wait for them to exit."""

        self._halt.set()
        for thread in self._threads:
            thread.join()
        if self._executor is not None:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "ExtractionPool":
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
