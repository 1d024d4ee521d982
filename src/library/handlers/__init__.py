"""Tag handlers for the metadata extractor."""

from .base import TagHandler
from .easy import EasyTagHandler
from .wav import WaveTagHandler

__all__ = [
    "TagHandler",
    "EasyTagHandler",
    "WaveTagHandler",
]
