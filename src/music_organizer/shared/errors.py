"""Summary: Exception hierarchy and error kinds shared by all pipeline stages.
Why: Per-file failures are reported by kind while structural ones abort a run."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class ErrorKind(StrEnum):
    """Failure categories surfaced in the run report."""

    TAG_READ = "tag-read"
    UNIDENTIFIABLE = "unidentifiable"
    INCONSISTENT_GROUP = "inconsistent-group"
    PATH_RESOLUTION = "path-resolution"
    FILESYSTEM = "filesystem"
    TAG_WRITE = "tag-write"


class MusicOrganizerError(Exception):
    """Base class for all errors raised by music_organizer."""


class TagReadError(MusicOrganizerError):
    """Raised when embedded metadata cannot be decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read tags from {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


class TagWriteError(MusicOrganizerError):
    """Raised when embedded metadata cannot be written back."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot write tags to {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


class TemplateError(MusicOrganizerError, ValueError):
    """Raised for malformed naming templates."""


class PathResolutionError(MusicOrganizerError):
    """Raised when no unique, valid target path can be assigned."""


class StructuralError(MusicOrganizerError):
    """Fatal failure affecting the whole run (e.g. unwritable destination root)."""


__all__ = [
    "ErrorKind",
    "MusicOrganizerError",
    "TagReadError",
    "TagWriteError",
    "TemplateError",
    "PathResolutionError",
    "StructuralError",
]
