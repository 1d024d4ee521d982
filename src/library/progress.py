"""Progress and completion protocol between a scan and its caller.

The file count goes first through :meth:`ProgressChannel.announce`.
Intermediate counts are best-effort: :meth:`ProgressChannel.offer` drops a
value when the consumer has not picked up the previous one, so a slow UI
never stalls the aggregator. The final count goes through the blocking
:meth:`ProgressChannel.publish`, which guarantees the consumer eventually
sees ``total``. :meth:`ProgressChannel.finish` then closes the stream and
hands over the :class:`ScanResult` on a separate one-slot queue.
"""
from __future__ import annotations

import queue
from dataclasses import dataclass
from typing import Optional, Union

from .errors import ScanCancelled
from .models import Library

_CLOSED = object()


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Terminal outcome of a scan: a library and, on failure, the error."""

    library: Optional[Library]
    error: Optional[BaseException] = None

    @property
    def cancelled(self) -> bool:
        return isinstance(self.error, ScanCancelled)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class ScanStarted:
    """Files were counted; ``total`` progress values are to be expected."""

    total: int


@dataclass(frozen=True, slots=True)
class ScanProgress:
    current: int


@dataclass(frozen=True, slots=True)
class ScanComplete:
    result: ScanResult


ScanEvent = Union[ScanStarted, ScanProgress, ScanComplete]


class ProgressChannel:
    """Single-producer, single-consumer stream of processed-file counts."""

    def __init__(self) -> None:
        self._progress: "queue.Queue[object]" = queue.Queue(maxsize=1)
        self._result: "queue.Queue[ScanResult]" = queue.Queue(maxsize=1)
        self._last = 0
        self._closed = False
        self._started = False

    def _check(self, value: int) -> None:
        if self._closed:
            raise RuntimeError("progress channel is closed")
        if value <= self._last:
            raise ValueError(f"progress must increase: {value} after {self._last}")

    def offer(self, value: int) -> bool:
        """Send ``value`` if the consumer is ready; drop it otherwise."""

        self._check(value)
        try:
            self._progress.put_nowait(value)
        except queue.Full:
            return False
        self._last = value
        return True

    def publish(self, value: int) -> None:
        """Send ``value``, waiting for the consumer to take it."""

        self._check(value)
        self._progress.put(value)
        self._last = value

    def announce(self, total: int) -> None:
        """Send the file count ahead of any progress value, waiting for the consumer."""

        if self._closed or self._started or self._last:
            raise RuntimeError("scan total already announced or progress under way")
        self._started = True
        self._progress.put(ScanStarted(total))

    def finish(self, result: ScanResult) -> None:
        """Close the progress stream and deliver the terminal result."""

        if self._closed:
            raise RuntimeError("progress channel is closed")
        self._closed = True
        self._result.put(result)
        self._progress.put(_CLOSED)

    @property
    def closed(self) -> bool:
        return self._closed

    def next_event(self, timeout: Optional[float] = None) -> ScanEvent:
        """Wait for the next progress value, or the result once closed.

        Raises :class:`queue.Empty` when ``timeout`` elapses first.
        """

        item = self._progress.get(timeout=timeout)
        if item is _CLOSED:
            return ScanComplete(self._result.get())
        if isinstance(item, ScanStarted):
            return item
        return ScanProgress(int(item))  # type: ignore[call-overload]
