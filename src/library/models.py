"""In-memory catalog: songs grouped by artist and album."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from pydantic import BaseModel

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"


@dataclass(frozen=True, slots=True)
class SongMetadata:
    """Tag values of a single song, with fallbacks already applied."""

    song_name: str
    artist_name: str = UNKNOWN_ARTIST
    album_name: str = UNKNOWN_ALBUM


@dataclass(frozen=True, slots=True)
class Song:
    """A discovered audio file. ``file_name`` is the display name."""

    file_name: str
    metadata: SongMetadata


@dataclass(slots=True, eq=False)
class Album:
    album_name: str
    artist_name: str
    songs: List[Song] = field(default_factory=list)


@dataclass(slots=True, eq=False)
class Artist:
    name: str
    albums: List[Album] = field(default_factory=list)

    def find_album(self, album_name: str) -> Optional[Album]:
        # Linear scan; artists rarely have more than a handful of albums.
        for album in self.albums:
            if album.album_name == album_name:
                return album
        return None


class Library:
    """Catalog of songs keyed by absolute path, grouped by artist and album.

    A library is only ever populated through :meth:`add_song`, either by the
    scan aggregator or when replaying the on-disk cache. A rescan builds a new
    library instead of mutating an existing one.
    """

    __slots__ = ("songs", "artists")

    def __init__(self) -> None:
        self.songs: Dict[str, Song] = {}
        self.artists: Dict[str, Artist] = {}

    def add_song(self, path: str, song: Song) -> None:
        """Register ``song`` under ``path`` and file it under its artist/album."""

        self.songs[path] = song

        artist_name = song.metadata.artist_name
        artist = self.artists.get(artist_name)
        if artist is None:
            artist = Artist(name=artist_name)
            self.artists[artist_name] = artist

        album_name = song.metadata.album_name
        album = artist.find_album(album_name)
        if album is None:
            album = Album(album_name=album_name, artist_name=artist_name)
            artist.albums.append(album)

        album.songs.append(song)

    def albums(self) -> Iterator[Album]:
        for artist in self.artists.values():
            yield from artist.albums

    @property
    def is_empty(self) -> bool:
        return not self.songs

    def summary(self) -> "LibrarySummary":
        return LibrarySummary.from_library(self)

    def __len__(self) -> int:
        return len(self.songs)

    def __contains__(self, path: object) -> bool:
        return path in self.songs

    def __repr__(self) -> str:
        return f"<Library songs={len(self.songs)} artists={len(self.artists)}>"


class LibrarySummary(BaseModel):
    """Aggregate counts of a library."""

    total_songs: int
    total_artists: int
    total_albums: int

    @classmethod
    def from_library(cls, library: Library) -> "LibrarySummary":
        return cls(
            total_songs=len(library.songs),
            total_artists=len(library.artists),
            total_albums=sum(1 for _ in library.albums()),
        )
