"""Per-file tag extraction with fallback metadata."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from utils.logging import get_logger

from .handlers import EasyTagHandler, TagHandler, WaveTagHandler
from .models import UNKNOWN_ALBUM, UNKNOWN_ARTIST, Song, SongMetadata

LOGGER = get_logger(__name__)


def default_song_name(path: str) -> str:
    """File name without its extension."""

    return os.path.splitext(os.path.basename(path))[0]


class MetadataExtractor:
    """Read tags from one file and turn them into a :class:`Song`.

    Extraction never fails: unreadable files and missing fields fall back to
    the file name and the unknown artist/album sentinels.
    """

    handlers: List[TagHandler]

    def __init__(self, handlers: Optional[Sequence[TagHandler]] = None) -> None:
        self.handlers = list(handlers) if handlers is not None else [EasyTagHandler(), WaveTagHandler()]

    def _select_handler(self, path: Path) -> Optional[TagHandler]:
        for handler in self.handlers:
            if handler.sniff(path):
                return handler
        return None

    def _read_tags(self, path: str) -> Dict[str, Optional[str]]:
        handler = self._select_handler(Path(path))
        if handler is None:
            return {}
        try:
            return handler.read_tags(Path(path)) or {}
        except Exception as exc:
            LOGGER.debug("Failed to read tags from %s: %s", path, exc)
            return {}

    def read_metadata(self, path: str) -> SongMetadata:
        tags = self._read_tags(path)
        return SongMetadata(
            song_name=_clean(tags.get("title")) or default_song_name(path),
            artist_name=_clean(tags.get("artist")) or UNKNOWN_ARTIST,
            album_name=_clean(tags.get("album")) or UNKNOWN_ALBUM,
        )

    def build_song(self, path: str) -> Song:
        return Song(file_name=os.path.basename(path), metadata=self.read_metadata(path))


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
