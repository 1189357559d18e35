"""Format-specific metadata extractors.

Where: src/music_organizer/features/metadata/usecases/extraction/format_extractors.py
What: Concrete metadata extractors for the supported audio containers.
Why: Keep per-container key names and artwork access out of the facade.
"""

from __future__ import annotations

import base64
import binascii
from pathlib import Path
from typing import Any, ClassVar, cast

from typing_extensions import override

from mutagen import MutagenError
from mutagen.easyid3 import EasyID3
from mutagen.flac import FLAC, Picture
from mutagen.id3 import ID3, ID3NoHeaderError
from mutagen.mp3 import MP3
from mutagen.mp4 import MP4, MP4Cover
from mutagen.oggopus import OggOpus
from mutagen.oggvorbis import OggVorbis

from music_organizer.platform.logging import logger
from music_organizer.shared.tag_set import EmbeddedArtwork

from ._base_extractors import BaseAudioExtractor, BaseTagExtractor
from ._tag_utils import artwork_reference, parse_tuple_numbers

__all__ = [
    "Mp3Extractor",
    "FlacExtractor",
    "OggVorbisExtractor",
    "OpusExtractor",
    "M4aExtractor",
]

_VORBIS_MAPPING: dict[str, str] = {
    "title": "title",
    "artist": "artist",
    "album_artist": "albumartist",
    "album": "album",
    "genre": "genre",
    "track": "tracknumber",
    "track_total": "tracktotal",
    "disc": "discnumber",
    "disc_total": "disctotal",
    "date": "date",
}

# Vorbis comments have no single convention for totals.
_VORBIS_ALTERNATES: dict[str, tuple[str, ...]] = {
    "tracktotal": ("tracktotal", "totaltracks"),
    "disctotal": ("disctotal", "totaldiscs"),
}


class Mp3Extractor(BaseAudioExtractor):
    """Extractor for MP3 files using EasyID3 tags."""

    FILE_CLASS: ClassVar[type | None] = MP3
    FILE_INIT_PARAMS: ClassVar[dict[str, Any]] = {"ID3": EasyID3}

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "title",
        "artist": "artist",
        "album_artist": "albumartist",
        "album": "album",
        "genre": "genre",
        "track": "tracknumber",
        "track_total": "",
        "disc": "discnumber",
        "disc_total": "",
        "date": "date",
    }

    @override
    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        return BaseTagExtractor.get_str_tag(tags, key)

    @override
    def _get_artwork(self, audio: Any, file_path: Path) -> EmbeddedArtwork | None:
        # EasyID3 hides picture frames, so read the raw ID3 header separately.
        try:
            frames = ID3(file_path).getall("APIC")
        except ID3NoHeaderError:
            return None
        except (MutagenError, OSError) as exc:
            logger.warning("Failed to read ID3 pictures from %s: %s", file_path, exc)
            return None
        if not frames:
            return None
        return artwork_reference(bytes(frames[0].data), getattr(frames[0], "mime", None))


class _VorbisCommentExtractor(BaseAudioExtractor):
    """Shared behaviour for containers using Vorbis comments."""

    TAG_MAPPING: ClassVar[dict[str, str]] = _VORBIS_MAPPING

    @override
    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        for candidate in _VORBIS_ALTERNATES.get(key, (key,)):
            value = BaseTagExtractor.get_str_tag(tags, candidate)
            if value:
                return value
        return None

    @override
    def _get_artwork(self, audio: Any, file_path: Path) -> EmbeddedArtwork | None:
        encoded = BaseTagExtractor.get_str_tag(audio, "metadata_block_picture")
        if not encoded:
            return None
        try:
            picture = Picture(base64.b64decode(encoded))
        except (binascii.Error, MutagenError, ValueError) as exc:
            logger.warning("Ignoring malformed picture block in %s: %s", file_path, exc)
            return None
        return artwork_reference(bytes(picture.data), picture.mime)


class FlacExtractor(_VorbisCommentExtractor):
    """Extractor for FLAC files."""

    FILE_CLASS: ClassVar[type | None] = FLAC
    FILE_INIT_PARAMS: ClassVar[dict[str, Any]] = {}

    @override
    def _get_artwork(self, audio: Any, file_path: Path) -> EmbeddedArtwork | None:
        pictures = cast(list[Picture], getattr(audio, "pictures", []) or [])
        if not pictures:
            return None
        return artwork_reference(bytes(pictures[0].data), pictures[0].mime)


class OggVorbisExtractor(_VorbisCommentExtractor):
    """Extractor for Ogg Vorbis (.ogg) files."""

    FILE_CLASS: ClassVar[type | None] = OggVorbis
    FILE_INIT_PARAMS: ClassVar[dict[str, Any]] = {}


class OpusExtractor(_VorbisCommentExtractor):
    """Extractor for Opus (.opus) files using Vorbis comments."""

    FILE_CLASS: ClassVar[type | None] = OggOpus
    FILE_INIT_PARAMS: ClassVar[dict[str, Any]] = {}


class M4aExtractor(BaseAudioExtractor):
    """Extractor for M4A/AAC files using MP4 tags."""

    FILE_CLASS: ClassVar[type | None] = MP4
    FILE_INIT_PARAMS: ClassVar[dict[str, Any]] = {}

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "\xa9nam",
        "artist": "\xa9ART",
        "album_artist": "aART",
        "album": "\xa9alb",
        "genre": "\xa9gen",
        "track": "trkn",
        "track_total": "",
        "disc": "disk",
        "disc_total": "",
        "date": "\xa9day",
    }

    @override
    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        if key in ("trkn", "disk"):
            value = cast(list[tuple[int, int]] | None, tags.get(key))
            if not value:
                return None
            num, total = parse_tuple_numbers(data=value)
            return f"{num or ''}/{total or ''}"
        return BaseTagExtractor.get_str_tag(tags, key)

    @override
    def _get_artwork(self, audio: Any, file_path: Path) -> EmbeddedArtwork | None:
        covers = cast(list[MP4Cover] | None, audio.get("covr"))
        if not covers:
            return None
        cover = covers[0]
        mime = "image/png" if cover.imageformat == MP4Cover.FORMAT_PNG else "image/jpeg"
        return artwork_reference(bytes(cover), mime)
