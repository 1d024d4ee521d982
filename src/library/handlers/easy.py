"""Handler for formats exposing mutagen's "easy" key/value tag interface."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import mutagen

from .base import TAG_FIELDS, TagHandler, first_text


class EasyTagHandler(TagHandler):
    """Read title/artist/album from MP3, FLAC, Ogg and MP4 files."""

    extensions = (".mp3", ".flac", ".ogg", ".m4a")

    def read_tags(self, path: Path) -> Dict[str, Optional[str]]:
        audio = mutagen.File(path, easy=True)
        if audio is None or audio.tags is None:
            return {}
        tags = audio.tags
        return {key: first_text(tags.get(key)) for key in TAG_FIELDS}
