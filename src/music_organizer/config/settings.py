"""Where: src/music_organizer/config/settings.py
What: Runtime constants consumed by the planning pipeline.
Why: Keep magic numbers and naming fallbacks in one documented place.
"""

from __future__ import annotations

from typing import Final

# Scanning -------------------------------------------------------------------

SUPPORTED_AUDIO_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".mp3", ".flac", ".m4a", ".ogg", ".opus"}
)

# Cover images that travel with their album's songs.
IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset({".png", ".jpg", ".jpeg"})

DEFAULT_SCAN_WORKERS: Final[int] = 4


# Naming ---------------------------------------------------------------------

DEFAULT_TEMPLATE: Final[str] = "{album_artist}/{album}/{disc_prefix}{track:02} - {artist} - {title}"

UNKNOWN_ARTIST: Final[str] = "Unknown Artist"
UNKNOWN_ALBUM: Final[str] = "Unknown Album"
UNKNOWN_TITLE: Final[str] = "Untitled"
UNKNOWN_GENRE: Final[str] = "Unknown Genre"
UNKNOWN_NUMBER: Final[int] = 0

SAFE_SUBSTITUTE: Final[str] = "_"


# Path limits (bytes, UTF-8) ----------------------------------------------------

# Rendered segments are truncated to leave room for "-NNN" suffixes.
MAX_SEGMENT_BYTES: Final[int] = 240
MAX_FILE_NAME_BYTES: Final[int] = 255
MAX_PATH_BYTES: Final[int] = 4096

MAX_DISAMBIGUATION_ATTEMPTS: Final[int] = 999


__all__ = [
    "SUPPORTED_AUDIO_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    "DEFAULT_SCAN_WORKERS",
    "DEFAULT_TEMPLATE",
    "UNKNOWN_ARTIST",
    "UNKNOWN_ALBUM",
    "UNKNOWN_TITLE",
    "UNKNOWN_GENRE",
    "UNKNOWN_NUMBER",
    "SAFE_SUBSTITUTE",
    "MAX_SEGMENT_BYTES",
    "MAX_FILE_NAME_BYTES",
    "MAX_PATH_BYTES",
    "MAX_DISAMBIGUATION_ATTEMPTS",
]
