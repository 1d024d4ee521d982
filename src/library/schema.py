"""Pydantic models describing the on-disk library cache."""
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .models import Library, Song, SongMetadata

CACHE_VERSION = 7


class SongCacheEntry(BaseModel):
    """Flattened metadata of one cached song."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    song_name: str
    artist_name: str
    album_name: str

    @classmethod
    def from_song(cls, song: Song) -> "SongCacheEntry":
        return cls(
            file_name=song.file_name,
            song_name=song.metadata.song_name,
            artist_name=song.metadata.artist_name,
            album_name=song.metadata.album_name,
        )

    def to_song(self) -> Song:
        return Song(
            file_name=self.file_name,
            metadata=SongMetadata(
                song_name=self.song_name,
                artist_name=self.artist_name,
                album_name=self.album_name,
            ),
        )


class LibraryCache(BaseModel):
    """Versioned snapshot of a library, keyed by absolute file path."""

    version: StrictInt
    songs: Dict[str, SongCacheEntry] = Field(default_factory=dict)

    @classmethod
    def from_library(cls, library: Library) -> "LibraryCache":
        return cls(
            version=CACHE_VERSION,
            songs={path: SongCacheEntry.from_song(song) for path, song in library.songs.items()},
        )

    def to_library(self) -> Library:
        """Rebuild the artist/album hierarchy by replaying every song."""

        library = Library()
        for path, entry in self.songs.items():
            library.add_song(path, entry.to_song())
        return library
