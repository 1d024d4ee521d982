"""Base protocol for tag readers used by the metadata extractor."""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, Optional

TAG_FIELDS = ("title", "artist", "album")


class TagHandler(ABC):
    """Abstract base class for audio tag readers."""

    extensions: Iterable[str] = ()

    def sniff(self, path: Path) -> bool:
        """Return ``True`` if the handler can read tags from ``path``."""

        if not self.extensions:
            return True
        return path.suffix.lower() in {ext.lower() for ext in self.extensions}

    @abstractmethod
    def read_tags(self, path: Path) -> Dict[str, Optional[str]]:
        """Return a mapping with any of the ``title``/``artist``/``album`` keys.

        Implementations may raise; the extractor treats every exception as
        "no tags".
        """


def first_text(value: object) -> Optional[str]:
    """Return the first non-blank string of a mutagen tag value."""

    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        for item in value:
            text = first_text(item)
            if text:
                return text
        return None
    text = getattr(value, "text", None)
    if text is not None:
        return first_text(text)
    text = str(value).strip()
    return text or None
