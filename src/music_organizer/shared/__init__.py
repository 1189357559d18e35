"""Shared models used across music_organizer features."""

from .errors import (
    ErrorKind,
    MusicOrganizerError,
    PathResolutionError,
    StructuralError,
    TagReadError,
    TagWriteError,
    TemplateError,
)
from .tag_set import EmbeddedArtwork, TagSet

__all__ = [
    "EmbeddedArtwork",
    "ErrorKind",
    "MusicOrganizerError",
    "PathResolutionError",
    "StructuralError",
    "TagReadError",
    "TagSet",
    "TagWriteError",
    "TemplateError",
]
