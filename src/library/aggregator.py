"""Single-threaded fold of extraction results into a :class:`Library`."""
from __future__ import annotations

from typing import Iterable, Optional

from utils.logging import get_logger

from .cancel import CancellationToken
from .errors import ScanCancelled
from .models import Library
from .pool import SongResult
from .progress import ProgressChannel

LOGGER = get_logger(__name__)


class Aggregator:
    """Owns the library under construction; the only thing that mutates it."""

    def __init__(self, cancel: CancellationToken, progress: Optional[ProgressChannel] = None) -> None:
        self.cancel = cancel
        self.progress = progress
        self.library = Library()
        self.count = 0

    def _report(self, total: int) -> None:
        if self.progress is None:
            return
        if self.count == total:
            self.progress.publish(self.count)
        else:
            self.progress.offer(self.count)

    def consume(self, results: Iterable[SongResult], total: int) -> Library:
        """Add every result to the library until the stream ends.

        Raises :class:`ScanCancelled` carrying the partial library as soon as
        cancellation is observed.
        """

        for path, song in results:
            if self.cancel.cancelled:
                break
            self.library.add_song(path, song)
            self.count += 1
            self._report(total)

        if self.cancel.cancelled:
            LOGGER.info("Scan cancelled after %d of %d files", self.count, total)
            raise ScanCancelled(self.library)
        return self.library
