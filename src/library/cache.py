"""Persistence of a library snapshot so startup can skip rescanning."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from utils.logging import get_logger
from utils.paths import user_cache_dir

from .models import Library
from .schema import CACHE_VERSION, LibraryCache

LOGGER = get_logger(__name__)

APP_DIR_NAME = "wired"
CACHE_FILE_NAME = "library.json"


def default_cache_path() -> Path:
    return user_cache_dir() / APP_DIR_NAME / CACHE_FILE_NAME


class CacheStore:
    """Read and write the versioned library cache file.

    Loading is all-or-nothing: any problem with the file makes :meth:`load`
    return ``None`` and the caller rescans.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else default_cache_path()

    def save(self, library: Library) -> None:
        cache = LibraryCache.from_library(library)
        payload = json.dumps(cache.model_dump(mode="json"), indent="\t", ensure_ascii=False)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(payload, encoding="utf-8")
        LOGGER.info("Saved %d songs to library cache %s", len(cache.songs), self.path)

    def load(self) -> Optional[Library]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            LOGGER.info("No library cache at %s", self.path)
            return None
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Unable to read library cache %s: %s", self.path, exc)
            return None

        try:
            cache = LibraryCache.model_validate_json(raw)
        except ValidationError as exc:
            LOGGER.warning("Ignoring corrupt library cache %s: %s", self.path, exc.errors()[:1])
            return None

        if cache.version != CACHE_VERSION:
            LOGGER.info(
                "Ignoring library cache version %d (expected %d)", cache.version, CACHE_VERSION
            )
            return None
        if not cache.songs:
            LOGGER.info("Library cache %s is empty", self.path)
            return None

        library = cache.to_library()
        LOGGER.info("Loaded %d songs from library cache", len(library))
        return library

    def clear(self) -> bool:
        """Delete the cache file; return whether one existed."""

        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        LOGGER.info("Removed library cache %s", self.path)
        return True


def load_library(path: Optional[Path] = None) -> Optional[Library]:
    """Startup entry point: the cached library, or ``None`` to trigger a scan."""

    return CacheStore(path).load()
