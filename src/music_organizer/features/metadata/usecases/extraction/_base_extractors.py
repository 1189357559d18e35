"""Shared base classes for metadata extractors.

Where: src/music_organizer/features/metadata/usecases/extraction/_base_extractors.py
What: Abstract base classes that encapsulate shared tag handling logic.
Why: Format extractors only declare their tag keys and artwork access.
"""

from __future__ import annotations

import abc
from pathlib import Path
from typing import Any, ClassVar

from typing_extensions import override

from mutagen import MutagenError

from music_organizer.platform.logging import logger
from music_organizer.shared.errors import TagReadError
from music_organizer.shared.tag_set import EmbeddedArtwork, TagSet

from ._tag_utils import clean_text, parse_int, parse_slash_separated, parse_year, safe_get_first

__all__ = [
    "AudioFormatExtractor",
    "BaseTagExtractor",
    "BaseAudioExtractor",
]


class AudioFormatExtractor(abc.ABC):
    """Abstract base class for audio metadata extractors."""

    @abc.abstractmethod
    def extract_metadata(self, file_path: Path) -> TagSet:
        """Extract metadata from an audio file."""
        raise NotImplementedError


class BaseTagExtractor:
    """Provides common helper methods for tag extraction."""

    @staticmethod
    def get_str_tag(tags: Any, key: str, default: str | None = None) -> str | None:
        """Extract the first string value for a key from a tag collection."""
        if not key:
            return default
        value = tags.get(key)
        if isinstance(value, list):
            return safe_get_first(data=[str(v) for v in value], default=default or "") or default
        if isinstance(value, str):
            return value
        return default


class BaseAudioExtractor(AudioFormatExtractor, abc.ABC):
    """Base class for mutagen-backed extractors.

    ``TAG_MAPPING`` maps TagSet concepts to the container's native keys; an
    empty string means the container has no such key.
    """

    FILE_CLASS: ClassVar[type | None] = None
    FILE_INIT_PARAMS: ClassVar[dict[str, Any]] = {}

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "",
        "artist": "",
        "album_artist": "",
        "album": "",
        "genre": "",
        "track": "",
        "track_total": "",
        "disc": "",
        "disc_total": "",
        "date": "",
    }

    def _open_file(self, file_path: Path) -> Any:
        """Open the audio file with the configured mutagen class."""
        if self.FILE_CLASS is None:
            raise NotImplementedError("FILE_CLASS must be defined in subclass")
        try:
            return self.FILE_CLASS(file_path, **self.FILE_INIT_PARAMS)
        except (MutagenError, OSError) as exc:
            raise TagReadError(file_path, str(exc) or type(exc).__name__) from exc

    @abc.abstractmethod
    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        """Get a tag value from the audio file."""
        raise NotImplementedError

    def _get_artwork(self, audio: Any, file_path: Path) -> EmbeddedArtwork | None:
        """Return the first embedded picture, if the format exposes one."""
        del audio, file_path
        return None

    def _text(self, audio: Any, concept: str) -> str | None:
        return clean_text(self._get_tag_value(audio, self.TAG_MAPPING[concept]))

    @override
    def extract_metadata(self, file_path: Path) -> TagSet:
        """Extract a TagSet from an audio file.

        Raises:
            TagReadError: If the container cannot be decoded.
        """
        audio = self._open_file(file_path)
        if audio is None:
            raise TagReadError(file_path, "unrecognized audio container")
        logger.debug("Opened %s as %s", file_path, type(audio).__name__)

        try:
            track_number, track_total = parse_slash_separated(self._text(audio, "track") or "")
            disc_number, disc_total = parse_slash_separated(self._text(audio, "disc") or "")
            if track_total is None:
                track_total = parse_int(self._text(audio, "track_total"))
            if disc_total is None:
                disc_total = parse_int(self._text(audio, "disc_total"))

            year = parse_year(self._text(audio, "date"))

            tags = TagSet(
                title=self._text(audio, "title"),
                artist=self._text(audio, "artist"),
                album_artist=self._text(audio, "album_artist"),
                album=self._text(audio, "album"),
                genre=self._text(audio, "genre"),
                year=year,
                track_number=track_number,
                track_total=track_total,
                disc_number=disc_number,
                disc_total=disc_total,
                artwork=self._get_artwork(audio, file_path),
            )
        except (MutagenError, ValueError, TypeError, KeyError) as exc:
            raise TagReadError(file_path, str(exc) or type(exc).__name__) from exc

        logger.debug("Extracted tags for %s: %s", file_path, tags)
        return tags
