# Where: music_organizer.features.consistency.domain.models
# What: Immutable grouping and finding records produced by the consistency checker.
# Why: Groups are computed once and never mutated, so checks stay pure.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from music_organizer.features.scan.usecases.scanner import ScanEntry


class Severity(StrEnum):
    WARNING = "warning"
    BLOCKING = "blocking"


class InconsistencyKind(StrEnum):
    """Categories of metadata disagreement."""

    CONFLICTING_ALBUM = "conflicting-album"
    CONFLICTING_ALBUM_ARTIST = "conflicting-album-artist"
    CONFLICTING_YEAR = "conflicting-year"
    CONFLICTING_GENRE = "conflicting-genre"
    DUPLICATE_TRACK_NUMBER = "duplicate-track-number"
    UNIDENTIFIABLE_ENTRY = "unidentifiable-entry"
    MISSING_TRACK_NUMBER = "missing-track-number"
    TRACK_NUMBER_GAP = "track-number-gap"
    TRACK_NUMBER_OUT_OF_RANGE = "track-number-out-of-range"
    CONFLICTING_TRACK_TOTAL = "conflicting-track-total"
    CONFLICTING_DISC_TOTAL = "conflicting-disc-total"

    @property
    def severity(self) -> Severity:
        if self in _WARNING_KINDS:
            return Severity.WARNING
        return Severity.BLOCKING


_WARNING_KINDS = frozenset(
    {
        InconsistencyKind.MISSING_TRACK_NUMBER,
        InconsistencyKind.TRACK_NUMBER_GAP,
        InconsistencyKind.TRACK_NUMBER_OUT_OF_RANGE,
        InconsistencyKind.CONFLICTING_TRACK_TOTAL,
        InconsistencyKind.CONFLICTING_DISC_TOTAL,
    }
)


@dataclass(frozen=True, slots=True)
class GroupKey:
    """Normalized (album artist, album, year) triple identifying an album.

    Absent text is stored as an empty string. Use ``sort_tuple`` for
    ordering because ``year`` may be None.
    """

    album_artist: str
    album: str
    year: int | None

    def sort_tuple(self) -> tuple[str, str, int]:
        return (self.album_artist, self.album, -1 if self.year is None else self.year)

    def label(self) -> str:
        year = "" if self.year is None else f" ({self.year})"
        return f"{self.album_artist or '?'} / {self.album or '?'}{year}"


@dataclass(frozen=True, slots=True)
class AlbumGroup:
    key: GroupKey
    entries: tuple[ScanEntry, ...]

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(entry.source_path for entry in self.entries)


@dataclass(frozen=True, slots=True)
class Inconsistency:
    """A single finding raised by the checker."""

    kind: InconsistencyKind
    severity: Severity
    group: GroupKey | None
    paths: tuple[Path, ...]
    message: str

    @property
    def is_blocking(self) -> bool:
        return self.severity is Severity.BLOCKING


@dataclass(frozen=True, slots=True)
class CheckReport:
    """Outcome of a consistency check.

    Attributes:
        groups: Album groups in sorted key order.
        inconsistencies: Every finding, warnings included.
        blocked_paths: Source paths held back by a blocking finding.
        passed: Entries allowed to advance, in scan order.
    """

    groups: tuple[AlbumGroup, ...] = ()
    inconsistencies: tuple[Inconsistency, ...] = ()
    blocked_paths: frozenset[Path] = field(default_factory=frozenset)
    passed: tuple[ScanEntry, ...] = ()

    @property
    def blocking(self) -> tuple[Inconsistency, ...]:
        return tuple(item for item in self.inconsistencies if item.is_blocking)

    @property
    def warnings(self) -> tuple[Inconsistency, ...]:
        return tuple(item for item in self.inconsistencies if not item.is_blocking)

    def reasons_for(self, path: Path) -> tuple[InconsistencyKind, ...]:
        """Return the blocking kinds affecting ``path`` in report order."""
        return tuple(
            item.kind for item in self.inconsistencies if item.is_blocking and path in item.paths
        )


__all__ = [
    "AlbumGroup",
    "CheckReport",
    "GroupKey",
    "Inconsistency",
    "InconsistencyKind",
    "Severity",
]
