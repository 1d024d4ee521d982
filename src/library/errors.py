"""Exceptions raised by the library indexing engine."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:  # pragma: no cover
    from .models import Library


class LibraryError(Exception):
    """Base class for all engine errors."""


class EnumerationError(LibraryError):
    """The scan root could not be opened; the scan is aborted."""

    def __init__(self, root: Union[str, Path], cause: OSError) -> None:
        super().__init__(f"Unable to read library root {root}: {cause}")
        self.root = Path(root)
        self.cause = cause


class ScanCancelled(LibraryError):
    """The scan was cancelled by the caller.

    ``library`` holds whatever was catalogued before the cancellation was
    observed. It is ``None`` when the scan had not reached aggregation yet.
    """

    def __init__(self, library: Optional["Library"] = None) -> None:
        super().__init__("Library scan has been cancelled")
        self.library = library


class InvalidLibraryPath(LibraryError):
    """The configured music path does not exist or is not a directory."""

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__(f"Music path {path} does not exist or is not a directory")
        self.path = Path(path)
