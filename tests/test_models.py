from __future__ import annotations

import dataclasses

import pytest

from library.models import UNKNOWN_ALBUM, UNKNOWN_ARTIST, Library, Song, SongMetadata


def _song(title: str, artist: str = "Artist", album: str = "Album") -> Song:
    return Song(file_name=f"{title}.mp3", metadata=SongMetadata(title, artist, album))


@pytest.mark.parametrize("reverse", [False, True])
def test_songs_sharing_artist_and_album_share_one_album(reverse: bool) -> None:
    entries = [("/m/a.mp3", _song("a")), ("/m/b.mp3", _song("b"))]
    if reverse:
        entries.reverse()
    library = Library()
    for path, song in entries:
        library.add_song(path, song)

    artist = library.artists["Artist"]
    assert len(artist.albums) == 1
    assert [song.metadata.song_name for song in artist.albums[0].songs] == [
        song.metadata.song_name for _, song in entries
    ]


def test_album_lookup_is_exact_match() -> None:
    library = Library()
    library.add_song("/m/1.mp3", _song("one", album="Album"))
    library.add_song("/m/2.mp3", _song("two", album="album"))
    library.add_song("/m/3.mp3", _song("three", artist="artist", album="Album"))

    assert [album.album_name for album in library.artists["Artist"].albums] == ["Album", "album"]
    assert set(library.artists) == {"Artist", "artist"}


def test_albums_record_their_artist() -> None:
    library = Library()
    library.add_song("/m/1.mp3", _song("one", artist="X", album="Y"))
    album = library.artists["X"].find_album("Y")
    assert album is not None
    assert album.artist_name == "X"
    assert library.artists["X"].find_album("Z") is None


def test_same_album_name_under_different_artists_is_separate() -> None:
    library = Library()
    library.add_song("/m/1.mp3", _song("one", artist="X", album="Hits"))
    library.add_song("/m/2.mp3", _song("two", artist="Y", album="Hits"))
    assert library.artists["X"].albums[0] is not library.artists["Y"].albums[0]


def test_library_accessors() -> None:
    library = Library()
    assert library.is_empty
    library.add_song("/m/1.mp3", _song("one"))
    library.add_song("/m/2.mp3", _song("two", album="Other"))
    assert not library.is_empty
    assert len(library) == 2
    assert "/m/1.mp3" in library
    assert "/m/3.mp3" not in library
    summary = library.summary()
    assert (summary.total_songs, summary.total_artists, summary.total_albums) == (2, 1, 2)


def test_add_song_overwrites_path_mapping() -> None:
    library = Library()
    library.add_song("/m/1.mp3", _song("old"))
    library.add_song("/m/1.mp3", _song("new"))
    assert len(library.songs) == 1
    assert library.songs["/m/1.mp3"].metadata.song_name == "new"


def test_songs_are_immutable() -> None:
    song = _song("frozen")
    with pytest.raises(dataclasses.FrozenInstanceError):
        song.file_name = "other"  # type: ignore[misc]


def test_metadata_defaults_are_sentinels() -> None:
    metadata = SongMetadata("title")
    assert metadata.artist_name == UNKNOWN_ARTIST
    assert metadata.album_name == UNKNOWN_ALBUM
