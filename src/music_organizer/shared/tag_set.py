# Where: music_organizer.shared.tag_set
# What: Canonical immutable TagSet record shared across features.
# Why: Absent tags are None so "missing" never collides with "empty".

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class EmbeddedArtwork:
    """Reference to a picture embedded in an audio file.

    Only a digest is kept so that TagSets stay small and hashable.
    """

    mime: str
    size: int
    digest: str


@dataclass(frozen=True, slots=True)
class TagSet:
    """Normalized metadata for a music track."""

    title: str | None = None
    artist: str | None = None
    album_artist: str | None = None
    album: str | None = None
    genre: str | None = None
    year: int | None = None
    track_number: int | None = None
    track_total: int | None = None
    disc_number: int | None = None
    disc_total: int | None = None
    artwork: EmbeddedArtwork | None = None

    @property
    def effective_album_artist(self) -> str | None:
        """Album artist, falling back to the track artist."""
        return self.album_artist or self.artist

    @property
    def effective_artist(self) -> str | None:
        """Track artist, falling back to the album artist."""
        return self.artist or self.album_artist

    def is_identifiable(self) -> bool:
        """Return True when at least one of artist, album or title is known."""
        return any((self.artist, self.album_artist, self.album, self.title))

    def merged(self, **changes: Any) -> TagSet:
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)


__all__ = ["EmbeddedArtwork", "TagSet"]
