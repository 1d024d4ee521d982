from __future__ import annotations

from pathlib import Path

import pytest

from conftest import CancellingTagHandler, DictTagHandler, make_files
from library.cancel import CancellationToken
from library.errors import EnumerationError, ScanCancelled
from library.extractor import MetadataExtractor
from library.models import UNKNOWN_ALBUM, UNKNOWN_ARTIST
from library.scanner import LibraryScanner, ScanConfig, scan

TAGS = {
    "01 intro.mp3": {"title": "Intro", "artist": "Artist A", "album": "First"},
    "02 song.FLAC": {"title": "Song", "artist": "Artist A", "album": "First"},
    "track.ogg": {"title": "Track", "artist": "Artist A", "album": "Second"},
    "loose.m4a": {"title": "Loose", "artist": "Artist B"},
}


def _scanner() -> LibraryScanner:
    return LibraryScanner(MetadataExtractor([DictTagHandler(TAGS)]))


def test_scan_builds_hierarchy(music_root: Path) -> None:
    library = _scanner().scan(ScanConfig(root=music_root))

    assert len(library) == 5
    artist_a = library.artists["Artist A"]
    assert [album.album_name for album in artist_a.albums] == ["First", "Second"]
    assert sorted(song.metadata.song_name for song in artist_a.albums[0].songs) == ["Intro", "Song"]
    assert library.artists["Artist B"].albums[0].album_name == UNKNOWN_ALBUM

    untagged = library.artists[UNKNOWN_ARTIST].albums[0].songs
    assert [song.file_name for song in untagged] == ["nested.wav"]
    assert untagged[0].metadata.song_name == "nested"


def test_scan_keys_songs_by_absolute_path(music_root: Path) -> None:
    library = _scanner().scan(ScanConfig(root=music_root))
    expected = str(music_root / "Artist A" / "Second" / "track.ogg")
    assert library.songs[expected].file_name == "track.ogg"


def test_empty_tree_spawns_no_workers(tmp_path: Path) -> None:
    make_files(tmp_path, ["cover.png"])
    scanner = _scanner()
    library = scanner.scan(ScanConfig(root=tmp_path))
    assert library.is_empty
    assert scanner.last_worker_count == 0


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(EnumerationError):
        scan(tmp_path / "missing")


def test_pre_cancelled_scan_returns_subset(music_root: Path) -> None:
    full = _scanner().scan(ScanConfig(root=music_root))
    token = CancellationToken()
    token.cancel()
    with pytest.raises(ScanCancelled) as excinfo:
        _scanner().scan(ScanConfig(root=music_root), token)
    partial = excinfo.value.library
    assert partial is not None
    assert set(partial.songs) <= set(full.songs)


@pytest.mark.parametrize("cpus, files, expected", [(1, 10, 4), (2, 10, 8), (4, 10, 10)])
def test_worker_count_is_bounded(tmp_path: Path, cpus: int, files: int, expected: int) -> None:
    make_files(tmp_path, [f"{index}.mp3" for index in range(files)])
    scanner = _scanner()
    scanner.scan(ScanConfig(root=tmp_path, cpu_count=cpus))
    assert scanner.last_worker_count == expected


def test_worker_count_unchanged_by_cancellation(tmp_path: Path) -> None:
    make_files(tmp_path, [f"{index}.mp3" for index in range(30)])
    token = CancellationToken()
    scanner = LibraryScanner(MetadataExtractor([CancellingTagHandler(token, after=2)]))
    with pytest.raises(ScanCancelled) as excinfo:
        scanner.scan(ScanConfig(root=tmp_path, cpu_count=2, poll_interval=0.01), token)
    assert scanner.last_worker_count == 8
    assert len(excinfo.value.library.songs) < 30


def test_scan_config_validation(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        ScanConfig(root=tmp_path, workers_per_core=0)
    with pytest.raises(ValueError):
        ScanConfig(root=tmp_path, cpu_count=0)
