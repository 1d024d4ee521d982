"""Handler for RIFF/WAVE files carrying an embedded ID3 chunk."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from mutagen.wave import WAVE

from .base import TagHandler, first_text

ID3_FRAMES = {"title": "TIT2", "artist": "TPE1", "album": "TALB"}


class WaveTagHandler(TagHandler):
    """Read ID3 text frames from WAVE files."""

    extensions = (".wav",)

    def read_tags(self, path: Path) -> Dict[str, Optional[str]]:
        audio = WAVE(path)
        if audio.tags is None:
            return {}
        return {key: first_text(audio.tags.get(frame)) for key, frame in ID3_FRAMES.items()}
