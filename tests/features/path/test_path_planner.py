"""Tests for the path planner."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from music_organizer.features.path import PathPlanner
from music_organizer.features.planning import OperationKind, TransferMode
from music_organizer.features.scan import ScanEntry
from music_organizer.shared.tag_set import TagSet

ROOT = Path("/library")


def _entry(path: str, sequence: int = 0, **tags: Any) -> ScanEntry:
    source = Path(path)
    return ScanEntry(source_path=source, tags=TagSet(**tags), extension=source.suffix.lower(), sequence=sequence)


def test_plan_renders_sanitized_target() -> None:
    entry = _entry("/in/x.MP3", artist="AC/DC", album="Back: In Black", title="Hells Bells?", track_number=1)

    operation = PathPlanner(ROOT).plan(entry)

    assert operation.target_path == ROOT / "AC_DC" / "Back_ In Black" / "01 - AC_DC - Hells Bells_.mp3"
    assert operation.kind is OperationKind.MOVE
    assert operation.resolved_tags is None


def test_plan_uses_copy_mode() -> None:
    entry = _entry("/in/x.flac", artist="A", title="T")

    operation = PathPlanner(ROOT, transfer_mode=TransferMode.COPY).plan(entry)

    assert operation.kind is OperationKind.COPY


def test_plan_marks_file_in_place_as_unchanged() -> None:
    entry = _entry("/library/A/Album/01 - A - T.flac", artist="A", album="Album", title="T", track_number=1)

    operation = PathPlanner(ROOT).plan(entry)

    assert operation.kind is OperationKind.SKIP_UNCHANGED


def test_plan_marks_file_in_place_with_tag_changes_as_retag_only() -> None:
    entry = _entry("/library/A/Album/01 - A - T.flac", artist="A", album="Album", title="T", track_number=1)
    resolved = entry.tags.merged(album_artist="A", genre="Rock")

    operation = PathPlanner(ROOT, retag=True).plan(entry, resolved)

    assert operation.kind is OperationKind.RETAG_ONLY
    assert operation.resolved_tags == resolved
    assert operation.needs_retag


def test_plan_renders_from_resolved_tags_when_retagging() -> None:
    entry = _entry("/in/x.mp3", artist="Guest", album="Album", title="T")
    resolved = entry.tags.merged(album_artist="Band")

    with_retag = PathPlanner(ROOT, retag=True).plan(entry, resolved)
    without_retag = PathPlanner(ROOT).plan(entry, resolved)

    assert with_retag.target_path.parts[2] == "Band"
    assert without_retag.target_path.parts[2] == "Guest"
    assert without_retag.resolved_tags is None


def test_plan_all_keeps_input_order() -> None:
    entries = [_entry(f"/in/{name}.mp3", index, title=name) for index, name in enumerate("cab")]

    operations = PathPlanner(ROOT, "{title}").plan_all(entries)

    assert [operation.entry for operation in operations] == entries
    assert [operation.target_path.name for operation in operations] == ["c.mp3", "a.mp3", "b.mp3"]
    assert operations[1].sort_key == (1, "/in/a.mp3")
