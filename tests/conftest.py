from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from library.cancel import CancellationToken  # noqa: E402
from library.handlers.base import TagHandler  # noqa: E402


@pytest.fixture(autouse=True)
def _configure_test_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))


class DictTagHandler(TagHandler):
    """Serve tags from a ``{file name: tags}`` mapping; unknown files fail."""

    def __init__(self, tags: Dict[str, Dict[str, Optional[str]]]) -> None:
        self.tags = tags

    def read_tags(self, path: Path) -> Dict[str, Optional[str]]:
        try:
            return self.tags[path.name]
        except KeyError:
            raise OSError(f"no tags for {path.name}") from None


class CancellingTagHandler(TagHandler):
    """Cancel ``token`` once ``after`` files have been read."""

    def __init__(self, token: CancellationToken, after: int = 1) -> None:
        self.token = token
        self.after = after
        self.calls = 0
        self._lock = threading.Lock()

    def read_tags(self, path: Path) -> Dict[str, Optional[str]]:
        with self._lock:
            self.calls += 1
            if self.calls >= self.after:
                self.token.cancel()
        return {"title": path.stem.upper()}


def make_files(root: Path, names: Iterable[str], payload: bytes = b"not really audio") -> list[Path]:
    created = []
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
        created.append(path)
    return created


@pytest.fixture
def music_root(tmp_path: Path) -> Path:
    root = tmp_path / "music"
    make_files(
        root,
        [
            "Artist A/First/01 intro.mp3",
            "Artist A/First/02 song.FLAC",
            "Artist A/Second/track.ogg",
            "Artist B/loose.m4a",
            "Artist B/deep/er/nested.wav",
            "Artist B/cover.jpg",
            "notes.txt",
            "playlist.m3u",
        ],
    )
    return root
