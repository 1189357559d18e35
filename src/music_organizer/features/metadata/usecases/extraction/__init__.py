"""Tag extraction helpers backed by mutagen."""

from .format_extractors import (
    FlacExtractor,
    M4aExtractor,
    Mp3Extractor,
    OggVorbisExtractor,
    OpusExtractor,
)
from .track_metadata_extractor import TagReader, read_tags

__all__ = [
    "FlacExtractor",
    "M4aExtractor",
    "Mp3Extractor",
    "OggVorbisExtractor",
    "OpusExtractor",
    "TagReader",
    "read_tags",
]
