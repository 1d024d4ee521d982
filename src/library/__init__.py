"""Concurrent music-library indexing: scanning, cataloguing and caching."""

from .cache import CacheStore, load_library
from .cancel import CancellationToken
from .enumerator import AUDIO_EXTENSIONS, count_files, enumerate_paths, validate_library_path
from .errors import EnumerationError, InvalidLibraryPath, LibraryError, ScanCancelled
from .extractor import MetadataExtractor
from .models import UNKNOWN_ALBUM, UNKNOWN_ARTIST, Album, Artist, Library, Song, SongMetadata
from .progress import ProgressChannel, ScanComplete, ScanProgress, ScanResult, ScanStarted
from .scanner import LibraryScanner, ScanConfig, scan
from .session import ScanSession, start_scan

__all__ = [
    "AUDIO_EXTENSIONS",
    "UNKNOWN_ALBUM",
    "UNKNOWN_ARTIST",
    "Album",
    "Artist",
    "CacheStore",
    "CancellationToken",
    "EnumerationError",
    "InvalidLibraryPath",
    "Library",
    "LibraryError",
    "LibraryScanner",
    "MetadataExtractor",
    "ProgressChannel",
    "ScanCancelled",
    "ScanComplete",
    "ScanConfig",
    "ScanProgress",
    "ScanResult",
    "ScanSession",
    "ScanStarted",
    "Song",
    "SongMetadata",
    "count_files",
    "enumerate_paths",
    "load_library",
    "scan",
    "start_scan",
    "validate_library_path",
]
