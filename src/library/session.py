"""Background scans observed from a single-threaded caller.

:func:`start_scan` returns at once; a daemon thread counts the files and then
scans them. The caller asks for one event at a time, either blocking with
:meth:`ScanSession.wait_for_update` or from an asyncio loop with
:meth:`ScanSession.next_update`. A scan that gets past counting reports
:class:`ScanStarted` with the file count, then :class:`ScanProgress` values.
Every scan ends with exactly one :class:`ScanComplete`.
"""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterator, Optional, Union

from utils.logging import get_logger
from utils.parallel import run_in_executor

from .cancel import CancellationToken
from .enumerator import count_files
from .errors import EnumerationError, ScanCancelled
from .models import Library
from .pool import WORKERS_PER_CORE
from .progress import ProgressChannel, ScanComplete, ScanEvent, ScanResult, ScanStarted
from .scanner import LibraryScanner, ScanConfig

LOGGER = get_logger(__name__)


class ScanSession:
    """Handle on a scan running in the background.

    ``total`` stays ``None`` until the :class:`ScanStarted` event has been
    consumed.
    """

    def __init__(self, cancel: CancellationToken, channel: ProgressChannel) -> None:
        self.total: Optional[int] = None
        self.cancel_token = cancel
        self.channel = channel
        self._result: Optional[ScanResult] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def done(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[ScanResult]:
        return self._result

    def cancel(self) -> None:
        self.cancel_token.cancel()

    def wait_for_update(self) -> ScanEvent:
        """Block until the next event; repeats the completion once done."""

        if self._result is not None:
            return ScanComplete(self._result)
        event = self.channel.next_event()
        if isinstance(event, ScanStarted):
            self.total = event.total
        elif isinstance(event, ScanComplete):
            self._result = event.result
            if self._thread is not None:
                self._thread.join()
        return event

    async def next_update(self) -> ScanEvent:
        """Await :meth:`wait_for_update` without blocking the event loop."""

        return await run_in_executor(self.wait_for_update)

    def events(self) -> Iterator[ScanEvent]:
        """Iterate over every event up to and including completion."""

        while True:
            event = self.wait_for_update()
            yield event
            if isinstance(event, ScanComplete):
                return

    def _scan(self, scanner: LibraryScanner, config: ScanConfig) -> ScanResult:
        try:
            total = count_files(config.root, self.cancel_token)
        except ScanCancelled:
            return ScanResult(library=Library(), error=ScanCancelled(Library()))
        except EnumerationError as exc:
            LOGGER.warning("%s", exc)
            return ScanResult(library=None, error=exc)

        self.channel.announce(total)
        if total == 0:
            LOGGER.info("No audio files found under %s", config.root)
            return ScanResult(library=Library())

        try:
            return ScanResult(library=scanner.scan(config, self.cancel_token, self.channel))
        except ScanCancelled as exc:
            library = exc.library if exc.library is not None else Library()
            return ScanResult(library=library, error=exc)
        except EnumerationError as exc:
            LOGGER.warning("%s", exc)
            return ScanResult(library=None, error=exc)

    def _run(self, scanner: LibraryScanner, config: ScanConfig) -> None:
        try:
            result = self._scan(scanner, config)
        except Exception as exc:
            LOGGER.exception("Library scan failed")
            result = ScanResult(library=None, error=exc)
        self.channel.finish(result)


def start_scan(
    root: Union[str, Path],
    cancel: Optional[CancellationToken] = None,
    scanner: Optional[LibraryScanner] = None,
    workers_per_core: int = WORKERS_PER_CORE,
) -> ScanSession:
    """Start counting and scanning ``root`` on a background thread.

    A fatal enumeration error or a cancellation while counting arrives as the
    session's only event. When nothing matches, ``ScanStarted(0)`` is followed
    by completion with an empty library.
    """

    config = ScanConfig(root=Path(root), workers_per_core=workers_per_core)
    session = ScanSession(cancel or CancellationToken(), ProgressChannel())
    thread = threading.Thread(
        target=session._run,
        args=(scanner or LibraryScanner(), config),
        name="library-scan",
        daemon=True,
    )
    session._thread = thread
    thread.start()
    return session
