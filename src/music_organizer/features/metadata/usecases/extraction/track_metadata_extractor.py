"""Audio file metadata extraction functionality.

Where: src/music_organizer/features/metadata/usecases/extraction/track_metadata_extractor.py
What: Provide the TagReader facade routing files to format extractors.
Why: The scanner depends on one ``read_tags`` entry point regardless of container.
"""

from pathlib import Path
from typing import ClassVar

from music_organizer.shared.errors import TagReadError
from music_organizer.shared.tag_set import TagSet

from ._base_extractors import AudioFormatExtractor
from .format_extractors import (
    FlacExtractor,
    M4aExtractor,
    Mp3Extractor,
    OggVorbisExtractor,
    OpusExtractor,
)

__all__ = ["TagReader", "read_tags"]


class TagReader:
    """Facade selecting the appropriate extractor by file extension."""

    _format_map: ClassVar[dict[str, AudioFormatExtractor]] = {
        ".mp3": Mp3Extractor(),
        ".flac": FlacExtractor(),
        ".m4a": M4aExtractor(),
        ".ogg": OggVorbisExtractor(),
        ".opus": OpusExtractor(),
    }

    SUPPORTED_FORMATS: ClassVar[frozenset[str]] = frozenset(_format_map)

    def read_tags(self, path: Path) -> TagSet:
        """Extract metadata from an audio file.

        Raises:
            TagReadError: If the format is unsupported or decoding fails.
        """
        ext = path.suffix.lower()
        extractor = self._format_map.get(ext)
        if extractor is None:
            raise TagReadError(path, f"unsupported file format {ext or '<none>'}")
        return extractor.extract_metadata(path)


def read_tags(path: Path) -> TagSet:
    """Module-level convenience wrapper around ``TagReader().read_tags``."""
    return TagReader().read_tags(path)
