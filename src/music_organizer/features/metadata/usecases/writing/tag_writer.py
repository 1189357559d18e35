"""Summary: Write resolved TagSets back into audio containers with mutagen.
Why: Retagging after a move/copy must round-trip through the extractors."""

from __future__ import annotations

import abc
from pathlib import Path
from typing import Any, ClassVar

from typing_extensions import override

from mutagen import MutagenError
from mutagen.easyid3 import EasyID3
from mutagen.flac import FLAC
from mutagen.mp3 import MP3
from mutagen.mp4 import MP4
from mutagen.oggopus import OggOpus
from mutagen.oggvorbis import OggVorbis

from music_organizer.platform.logging import logger
from music_organizer.shared.errors import TagWriteError
from music_organizer.shared.tag_set import TagSet

from ..extraction._tag_utils import format_number_pair

__all__ = [
    "AudioFormatWriter",
    "EasyKeyWriter",
    "Mp3Writer",
    "FlacWriter",
    "OggVorbisWriter",
    "OpusWriter",
    "M4aWriter",
    "TagWriter",
    "write_tags",
]


class AudioFormatWriter(abc.ABC):
    """Base class for container writers.

    Only fields carrying a value are written; absent fields and embedded
    artwork are left as they are in the file.
    """

    FILE_CLASS: ClassVar[type | None] = None
    FILE_INIT_PARAMS: ClassVar[dict[str, Any]] = {}

    @abc.abstractmethod
    def _assign(self, audio: Any, tags: TagSet) -> None:
        """Copy the set fields of ``tags`` into the open mutagen object."""
        raise NotImplementedError

    def write(self, file_path: Path, tags: TagSet) -> None:
        if self.FILE_CLASS is None:
            raise NotImplementedError("FILE_CLASS must be defined in subclass")
        try:
            audio = self.FILE_CLASS(file_path, **self.FILE_INIT_PARAMS)
            if audio is None:
                raise TagWriteError(file_path, "unrecognized audio container")
            if audio.tags is None:
                audio.add_tags()
            self._assign(audio, tags)
            audio.save()
        except (MutagenError, OSError, ValueError) as exc:
            raise TagWriteError(file_path, str(exc) or type(exc).__name__) from exc
        logger.debug("Wrote tags to %s: %s", file_path, tags)


class EasyKeyWriter(AudioFormatWriter):
    """Writer for containers addressed with plain text keys (EasyID3, Vorbis)."""

    TEXT_KEYS: ClassVar[dict[str, str]] = {
        "title": "title",
        "artist": "artist",
        "album_artist": "albumartist",
        "album": "album",
        "genre": "genre",
    }
    TRACK_TOTAL_KEY: ClassVar[str | None] = "tracktotal"
    DISC_TOTAL_KEY: ClassVar[str | None] = "disctotal"

    @override
    def _assign(self, audio: Any, tags: TagSet) -> None:
        for field_name, key in self.TEXT_KEYS.items():
            value = getattr(tags, field_name)
            if value is not None:
                audio[key] = [value]
        if tags.year is not None:
            audio["date"] = [str(tags.year)]

        self._assign_pair(audio, "tracknumber", self.TRACK_TOTAL_KEY, tags.track_number, tags.track_total)
        self._assign_pair(audio, "discnumber", self.DISC_TOTAL_KEY, tags.disc_number, tags.disc_total)

    @staticmethod
    def _assign_pair(
        audio: Any,
        number_key: str,
        total_key: str | None,
        number: int | None,
        total: int | None,
    ) -> None:
        if total_key is None:
            pair = format_number_pair(number, total)
            if pair is not None:
                audio[number_key] = [pair]
            return
        if number is not None:
            audio[number_key] = [str(number)]
        if total is not None:
            audio[total_key] = [str(total)]


class Mp3Writer(EasyKeyWriter):
    """EasyID3 stores totals inside the number frame ("3/12")."""

    FILE_CLASS: ClassVar[type | None] = MP3
    FILE_INIT_PARAMS: ClassVar[dict[str, Any]] = {"ID3": EasyID3}
    TRACK_TOTAL_KEY: ClassVar[str | None] = None
    DISC_TOTAL_KEY: ClassVar[str | None] = None


class FlacWriter(EasyKeyWriter):
    FILE_CLASS: ClassVar[type | None] = FLAC


class OggVorbisWriter(EasyKeyWriter):
    FILE_CLASS: ClassVar[type | None] = OggVorbis


class OpusWriter(EasyKeyWriter):
    FILE_CLASS: ClassVar[type | None] = OggOpus


class M4aWriter(AudioFormatWriter):
    """Writer for MP4 atoms."""

    FILE_CLASS: ClassVar[type | None] = MP4

    TEXT_ATOMS: ClassVar[dict[str, str]] = {
        "title": "\xa9nam",
        "artist": "\xa9ART",
        "album_artist": "aART",
        "album": "\xa9alb",
        "genre": "\xa9gen",
    }

    @override
    def _assign(self, audio: Any, tags: TagSet) -> None:
        for field_name, atom in self.TEXT_ATOMS.items():
            value = getattr(tags, field_name)
            if value is not None:
                audio[atom] = [value]
        if tags.year is not None:
            audio["\xa9day"] = [str(tags.year)]
        if tags.track_number is not None:
            audio["trkn"] = [(tags.track_number, tags.track_total or 0)]
        if tags.disc_number is not None:
            audio["disk"] = [(tags.disc_number, tags.disc_total or 0)]


class TagWriter:
    """Facade selecting the writer by file extension."""

    _format_map: ClassVar[dict[str, AudioFormatWriter]] = {
        ".mp3": Mp3Writer(),
        ".flac": FlacWriter(),
        ".m4a": M4aWriter(),
        ".ogg": OggVorbisWriter(),
        ".opus": OpusWriter(),
    }

    def write_tags(self, path: Path, tags: TagSet) -> None:
        """Rewrite embedded metadata in place.

        Raises:
            TagWriteError: If the format is unsupported or writing fails.
        """
        writer = self._format_map.get(path.suffix.lower())
        if writer is None:
            raise TagWriteError(path, f"unsupported file format {path.suffix or '<none>'}")
        writer.write(path, tags)


def write_tags(path: Path, tags: TagSet) -> None:
    """Module-level convenience wrapper around ``TagWriter().write_tags``."""
    TagWriter().write_tags(path, tags)
