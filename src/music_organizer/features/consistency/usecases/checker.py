"""src/music_organizer/features/consistency/usecases/checker.py
What: Group scanned entries into albums and report metadata inconsistencies.
Why: Entries with ambiguous album metadata must never reach the planner.
"""

from __future__ import annotations

import logging
import unicodedata
from collections import defaultdict
from collections.abc import Iterable, Sequence
from pathlib import Path

from music_organizer.features.scan.usecases.scanner import ScanEntry
from music_organizer.platform.logging import ProcessingEvent, logger
from music_organizer.shared.tag_set import TagSet

from ..domain.models import (
    AlbumGroup,
    CheckReport,
    GroupKey,
    Inconsistency,
    InconsistencyKind,
)

# Entries without a disc number are counted as disc 1.
_DEFAULT_DISC = 1


def normalize_text(value: str | None) -> str:
    """Return the grouping form of ``value``: NFKC, collapsed whitespace, casefolded."""
    if value is None:
        return ""
    normalized = unicodedata.normalize("NFKC", value)
    return " ".join(normalized.split()).casefold()


def group_key_for(tags: TagSet) -> GroupKey:
    return GroupKey(
        album_artist=normalize_text(tags.effective_album_artist),
        album=normalize_text(tags.album),
        year=tags.year,
    )


def build_groups(entries: Iterable[ScanEntry]) -> tuple[AlbumGroup, ...]:
    """Partition identifiable entries into album groups.

    Entries keep their scan order inside a group and groups are returned in
    sorted key order. Unidentifiable entries are left out.
    """
    buckets: dict[GroupKey, list[ScanEntry]] = defaultdict(list)
    for entry in entries:
        if not entry.tags.is_identifiable():
            continue
        buckets[group_key_for(entry.tags)].append(entry)
    ordered = sorted(buckets.items(), key=lambda item: item[0].sort_tuple())
    return tuple(AlbumGroup(key=key, entries=tuple(items)) for key, items in ordered)


def _single(values: Iterable[object]) -> object | None:
    distinct = {value for value in values if value is not None}
    if len(distinct) == 1:
        return next(iter(distinct))
    return None


def resolve_group_tags(group: AlbumGroup) -> dict[Path, TagSet]:
    """Return the TagSet each entry of ``group`` should carry after retagging.

    A missing album artist is filled from the artist. Missing totals and
    genre are filled only when the group agrees on a single value.
    """
    track_total = _single(entry.tags.track_total for entry in group.entries)
    disc_total = _single(entry.tags.disc_total for entry in group.entries)
    genre = _single(entry.tags.genre for entry in group.entries)

    resolved: dict[Path, TagSet] = {}
    for entry in group.entries:
        tags = entry.tags
        changes: dict[str, object] = {}
        if tags.album_artist is None and tags.artist is not None:
            changes["album_artist"] = tags.artist
        if tags.track_total is None and track_total is not None:
            changes["track_total"] = track_total
        if tags.disc_total is None and disc_total is not None:
            changes["disc_total"] = disc_total
        if tags.genre is None and genre is not None:
            changes["genre"] = genre
        resolved[entry.source_path] = tags.merged(**changes) if changes else tags
    return resolved


def _format_numbers(numbers: Iterable[int]) -> str:
    return ", ".join(str(number) for number in sorted(numbers))


class ConsistencyChecker:
    """Detect metadata disagreement within and across album groups."""

    def check(self, entries: Sequence[ScanEntry]) -> CheckReport:
        findings: list[Inconsistency] = []

        for entry in entries:
            if not entry.tags.is_identifiable():
                findings.append(
                    self._finding(
                        InconsistencyKind.UNIDENTIFIABLE_ENTRY,
                        None,
                        (entry.source_path,),
                        "no artist, album artist, album or title",
                    )
                )

        groups = build_groups(entries)
        year_conflicts = self._year_conflicts(groups)
        for group in groups:
            if group.key in year_conflicts:
                findings.append(
                    self._finding(
                        InconsistencyKind.CONFLICTING_YEAR,
                        group.key,
                        group.paths,
                        f"years differ across the album: {_format_numbers(year_conflicts[group.key])}",
                    )
                )
            findings.extend(self._check_group(group))

        blocked = frozenset(path for item in findings if item.is_blocking for path in item.paths)
        passed = tuple(
            entry
            for entry in entries
            if entry.tags.is_identifiable() and entry.source_path not in blocked
        )
        for item in findings:
            logger.log(
                logging.WARNING if item.is_blocking else logging.INFO,
                "%s: %s [%s]",
                item.kind,
                item.message,
                item.group.label() if item.group is not None else item.paths[0],
                extra={"processing_event": ProcessingEvent.CHECK_INCONSISTENCY},
            )
        return CheckReport(
            groups=groups,
            inconsistencies=tuple(findings),
            blocked_paths=blocked,
            passed=passed,
        )

    @staticmethod
    def _finding(
        kind: InconsistencyKind,
        group: GroupKey | None,
        paths: Iterable[Path],
        message: str,
    ) -> Inconsistency:
        return Inconsistency(
            kind=kind,
            severity=kind.severity,
            group=group,
            paths=tuple(paths),
            message=message,
        )

    @staticmethod
    def _year_conflicts(groups: Sequence[AlbumGroup]) -> dict[GroupKey, set[int]]:
        by_album: dict[tuple[str, str], list[GroupKey]] = defaultdict(list)
        for group in groups:
            by_album[(group.key.album_artist, group.key.album)].append(group.key)

        conflicts: dict[GroupKey, set[int]] = {}
        for keys in by_album.values():
            if len(keys) < 2:
                continue
            years = {key.year for key in keys if key.year is not None}
            for key in keys:
                conflicts[key] = years
        return conflicts

    def _check_group(self, group: AlbumGroup) -> list[Inconsistency]:
        findings: list[Inconsistency] = []
        entries = group.entries
        key = group.key

        albums = {entry.tags.album for entry in entries if entry.tags.album is not None}
        if len(albums) > 1:
            findings.append(
                self._finding(
                    InconsistencyKind.CONFLICTING_ALBUM,
                    key,
                    group.paths,
                    f"album spelled differently: {', '.join(sorted(repr(a) for a in albums))}",
                )
            )

        album_artists = {
            entry.tags.effective_album_artist
            for entry in entries
            if entry.tags.effective_album_artist is not None
        }
        if len(album_artists) > 1:
            findings.append(
                self._finding(
                    InconsistencyKind.CONFLICTING_ALBUM_ARTIST,
                    key,
                    group.paths,
                    f"album artist spelled differently: {', '.join(sorted(repr(a) for a in album_artists))}",
                )
            )

        genres = {normalize_text(entry.tags.genre) for entry in entries if entry.tags.genre is not None}
        if len(genres) > 1:
            findings.append(
                self._finding(
                    InconsistencyKind.CONFLICTING_GENRE,
                    key,
                    group.paths,
                    f"genres differ: {', '.join(sorted(genres))}",
                )
            )

        findings.extend(self._check_track_numbers(group))

        track_totals = {entry.tags.track_total for entry in entries if entry.tags.track_total is not None}
        if len(track_totals) > 1:
            findings.append(
                self._finding(
                    InconsistencyKind.CONFLICTING_TRACK_TOTAL,
                    key,
                    group.paths,
                    f"track totals differ: {_format_numbers(track_totals)}",
                )
            )
        disc_totals = {entry.tags.disc_total for entry in entries if entry.tags.disc_total is not None}
        if len(disc_totals) > 1:
            findings.append(
                self._finding(
                    InconsistencyKind.CONFLICTING_DISC_TOTAL,
                    key,
                    group.paths,
                    f"disc totals differ: {_format_numbers(disc_totals)}",
                )
            )
        return findings

    def _check_track_numbers(self, group: AlbumGroup) -> list[Inconsistency]:
        findings: list[Inconsistency] = []
        key = group.key

        missing = [entry.source_path for entry in group.entries if entry.tags.track_number is None]
        if missing:
            findings.append(
                self._finding(
                    InconsistencyKind.MISSING_TRACK_NUMBER,
                    key,
                    missing,
                    f"{len(missing)} track(s) without a track number",
                )
            )

        discs: dict[int, list[ScanEntry]] = defaultdict(list)
        for entry in group.entries:
            discs[entry.tags.disc_number or _DEFAULT_DISC].append(entry)

        for disc in sorted(discs):
            disc_entries = discs[disc]
            slots: dict[int, list[Path]] = defaultdict(list)
            for entry in disc_entries:
                if entry.tags.track_number is not None:
                    slots[entry.tags.track_number].append(entry.source_path)

            for number in sorted(slots):
                paths = slots[number]
                if len(paths) > 1:
                    findings.append(
                        self._finding(
                            InconsistencyKind.DUPLICATE_TRACK_NUMBER,
                            key,
                            paths,
                            f"disc {disc} track {number} appears {len(paths)} times",
                        )
                    )

            if not slots or any(entry.tags.track_number is None for entry in disc_entries):
                continue

            totals = [entry.tags.track_total for entry in disc_entries if entry.tags.track_total is not None]
            stated_total = max(totals) if totals else None
            upper = stated_total if stated_total is not None else max(slots)
            gaps = set(range(1, upper + 1)) - set(slots)
            if gaps:
                findings.append(
                    self._finding(
                        InconsistencyKind.TRACK_NUMBER_GAP,
                        key,
                        (entry.source_path for entry in disc_entries),
                        f"disc {disc} is missing track(s) {_format_numbers(gaps)}",
                    )
                )
            if stated_total is not None:
                beyond = sorted(number for number in slots if number > stated_total)
                if beyond:
                    findings.append(
                        self._finding(
                            InconsistencyKind.TRACK_NUMBER_OUT_OF_RANGE,
                            key,
                            (path for number in beyond for path in slots[number]),
                            f"disc {disc} track(s) {_format_numbers(beyond)} exceed total {stated_total}",
                        )
                    )
        return findings


__all__ = [
    "ConsistencyChecker",
    "build_groups",
    "group_key_for",
    "normalize_text",
    "resolve_group_tags",
]
