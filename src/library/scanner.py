"""End-to-end library scan: enumerate, extract in parallel, aggregate."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from utils.logging import get_logger

from .aggregator import Aggregator
from .cancel import CancellationToken
from .enumerator import enumerate_paths
from .errors import ScanCancelled
from .extractor import MetadataExtractor
from .models import Library
from .pool import DEFAULT_POLL_INTERVAL, WORKERS_PER_CORE, ExtractionPool, worker_count
from .progress import ProgressChannel

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class ScanConfig:
    """Configuration parameters controlling scan behaviour."""

    root: Path
    workers_per_core: int = WORKERS_PER_CORE
    cpu_count: Optional[int] = None
    poll_interval: float = DEFAULT_POLL_INTERVAL

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        if self.workers_per_core < 1:
            raise ValueError("workers_per_core must be >= 1")
        if self.cpu_count is not None and self.cpu_count < 1:
            raise ValueError("cpu_count must be >= 1")
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be > 0")


class LibraryScanner:
    """Build a fresh :class:`Library` from the audio files below a root."""

    def __init__(self, extractor: Optional[MetadataExtractor] = None) -> None:
        self.extractor = extractor or MetadataExtractor()
        self.last_worker_count = 0

    def scan(
        self,
        config: ScanConfig,
        cancel: Optional[CancellationToken] = None,
        progress: Optional[ProgressChannel] = None,
    ) -> Library:
        """Scan ``config.root``.

        Raises :class:`~library.errors.EnumerationError` when the root cannot
        be read and :class:`~library.errors.ScanCancelled` (with the partial
        library) when ``cancel`` fires.
        """

        cancel = cancel or CancellationToken()
        self.last_worker_count = 0
        LOGGER.info("Scanning library at %s", config.root)

        try:
            paths = enumerate_paths(config.root, cancel)
        except ScanCancelled:
            raise ScanCancelled(Library()) from None

        workers = worker_count(len(paths), config.cpu_count, config.workers_per_core)
        self.last_worker_count = workers
        if workers == 0:
            LOGGER.info("No audio files found under %s", config.root)
            return Library()

        aggregator = Aggregator(cancel, progress)
        with ExtractionPool(
            paths, self.extractor, cancel, workers, poll_interval=config.poll_interval
        ) as pool:
            library = aggregator.consume(pool.results(), total=len(paths))

        summary = library.summary()
        LOGGER.info(
            "Scanned %d songs (%d artists, %d albums) with %d workers",
            summary.total_songs,
            summary.total_artists,
            summary.total_albums,
            workers,
        )
        return library


def scan(
    root: Union[str, Path],
    cancel: Optional[CancellationToken] = None,
    progress: Optional[ProgressChannel] = None,
) -> Library:
    """Scan ``root`` with the default extractor and pool sizing."""

    return LibraryScanner().scan(ScanConfig(root=Path(root)), cancel, progress)
