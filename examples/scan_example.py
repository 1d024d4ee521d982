"""Example script showing how to scan a music folder programmatically."""
from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from library import CacheStore, ScanComplete, ScanStarted, load_library, start_scan  # type: ignore  # noqa: E402


def main() -> None:
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.home() / "Music"
    library = load_library()
    if library is None:
        session = start_scan(root)
        for event in session.events():
            if isinstance(event, ScanComplete):
                if event.result.error is not None:
                    print(f"scan failed: {event.result.error}")
                    return
                library = event.result.library
            elif isinstance(event, ScanStarted):
                print(f"Found {event.total} audio files")
            else:
                print(f"{event.current}/{session.total}", end="\r")
        if library is None:
            return
        CacheStore().save(library)
    for artist_name, artist in sorted(library.artists.items()):
        for album in artist.albums:
            print(f"{artist_name} - {album.album_name}: {len(album.songs)} songs")


if __name__ == "__main__":
    main()
