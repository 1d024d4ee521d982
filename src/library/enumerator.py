"""Discovery of audio files below a library root."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List, Optional, Union

from utils.logging import get_logger
from utils.paths import normalise_path

from .cancel import CancellationToken
from .errors import EnumerationError, InvalidLibraryPath

LOGGER = get_logger(__name__)

AUDIO_EXTENSIONS = frozenset({".mp3", ".flac", ".ogg", ".m4a", ".wav"})

PathLike = Union[str, Path]


def is_audio_file(path: PathLike) -> bool:
    return os.path.splitext(os.fspath(path))[1].lower() in AUDIO_EXTENSIONS


def _iter_audio_paths(root: PathLike, cancel: Optional[CancellationToken]) -> Iterator[str]:
    """Yield absolute paths of audio files below ``root`` in name order.

    An unreadable root raises :class:`EnumerationError`; unreadable nested
    directories are skipped. The token is polled once per visited entry.
    """

    top = os.path.abspath(os.fspath(root))

    def on_walk_error(err: OSError) -> None:
        if err.filename is not None and os.path.abspath(os.fspath(err.filename)) == top:
            raise EnumerationError(top, err)
        LOGGER.debug("Skipping unreadable entry %s: %s", err.filename, err)

    for dirpath, dirnames, filenames in os.walk(top, onerror=on_walk_error):
        if cancel is not None:
            cancel.raise_if_cancelled()
        dirnames.sort()
        for filename in sorted(filenames):
            if cancel is not None:
                cancel.raise_if_cancelled()
            if is_audio_file(filename):
                yield os.path.join(dirpath, filename)


def count_files(root: PathLike, cancel: Optional[CancellationToken] = None) -> int:
    """Return how many audio files live below ``root``."""

    count = 0
    for _ in _iter_audio_paths(root, cancel):
        count += 1
    return count


def enumerate_paths(root: PathLike, cancel: Optional[CancellationToken] = None) -> List[str]:
    """Return the absolute paths of every audio file below ``root``."""

    paths = list(_iter_audio_paths(root, cancel))
    LOGGER.debug("Enumerated %d audio files under %s", len(paths), root)
    return paths


def validate_library_path(path: PathLike) -> Path:
    """Return ``path`` normalised, or raise if it is not an existing directory.

    Callers run this before :func:`~library.scanner.scan`, which expects a
    readable directory.
    """

    resolved = normalise_path(Path(path))
    if not resolved.is_dir():
        raise InvalidLibraryPath(path)
    return resolved
