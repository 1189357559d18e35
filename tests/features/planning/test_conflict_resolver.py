"""Tests for target disambiguation."""

from __future__ import annotations

from pathlib import Path

import pytest

from music_organizer.features.planning import (
    AssetOperation,
    ConflictResolver,
    OperationKind,
    PlannedOperation,
    TransferMode,
    check_path_limits,
    disambiguated_name,
)
from music_organizer.features.scan import ScanEntry
from music_organizer.shared.errors import ErrorKind, PathResolutionError
from music_organizer.shared.tag_set import TagSet


def _operation(source: Path, target: Path, sequence: int) -> PlannedOperation:
    entry = ScanEntry(source_path=source, tags=TagSet(title=source.stem), extension=source.suffix, sequence=sequence)
    operation = PlannedOperation(entry=entry, target_path=target, kind=OperationKind.MOVE)
    operation.settle_kind()
    return operation


def _offline() -> ConflictResolver:
    return ConflictResolver(exists=lambda _path: False)


def test_disambiguated_name_keeps_extension() -> None:
    assert disambiguated_name(Path("/a/b/01 - Song.flac"), 3) == Path("/a/b/01 - Song-3.flac")


def test_distinct_targets_are_untouched() -> None:
    operations = [
        _operation(Path("/in/a.mp3"), Path("/out/a.mp3"), 0),
        _operation(Path("/in/b.mp3"), Path("/out/b.mp3"), 1),
    ]
    resolver = _offline()

    _ = resolver.resolve(operations)

    assert [op.target_path for op in operations] == [Path("/out/a.mp3"), Path("/out/b.mp3")]
    assert resolver.diagnostics == []


def test_colliding_unknown_files_get_suffixes_in_scan_order() -> None:
    target = Path("/out/Unknown Artist/Unknown Album/00 - Unknown Artist - Untitled.mp3")
    later = _operation(Path("/in/z.mp3"), target, 1)
    first = _operation(Path("/in/a.mp3"), target, 0)
    resolver = _offline()

    _ = resolver.resolve([later, first])

    assert first.target_path == target
    assert later.target_path == target.with_name("00 - Unknown Artist - Untitled-1.mp3")
    assert [d.source for d in resolver.diagnostics] == [Path("/in/z.mp3")]
    assert resolver.diagnostics[0].original == target


def test_suffix_skips_another_operations_natural_target() -> None:
    first = _operation(Path("/in/1.mp3"), Path("/out/x.mp3"), 0)
    second = _operation(Path("/in/2.mp3"), Path("/out/x.mp3"), 1)
    third = _operation(Path("/in/3.mp3"), Path("/out/x-1.mp3"), 2)

    _ = _offline().resolve([first, second, third])

    assert first.target_path == Path("/out/x.mp3")
    assert second.target_path == Path("/out/x-2.mp3")
    assert third.target_path == Path("/out/x-1.mp3")


def test_existing_foreign_file_is_never_clobbered(tmp_path: Path) -> None:
    source = tmp_path / "in" / "song.mp3"
    source.parent.mkdir()
    _ = source.write_bytes(b"new")
    occupied = tmp_path / "out" / "song.mp3"
    occupied.parent.mkdir()
    _ = occupied.write_bytes(b"old")
    operation = _operation(source, occupied, 0)

    _ = ConflictResolver().resolve([operation])

    assert operation.target_path == tmp_path / "out" / "song-1.mp3"
    assert operation.kind is OperationKind.MOVE


def test_path_vacated_by_an_earlier_move_is_free() -> None:
    occupied = Path("/lib/Band/01 - Band - One.mp3")
    leaving = _operation(occupied, Path("/lib/Band/02 - Band - Two.mp3"), 0)
    arriving = _operation(Path("/lib/a/one.mp3"), occupied, 1)
    resolver = ConflictResolver(exists=lambda path: path == occupied, same_file=lambda _a, _b: False)

    _ = resolver.resolve([arriving, leaving])

    assert arriving.target_path == occupied
    assert resolver.diagnostics == []


def test_path_of_a_later_move_still_counts_as_occupied() -> None:
    occupied = Path("/lib/Band/01 - Band - One.mp3")
    arriving = _operation(Path("/lib/A/one.mp3"), occupied, 0)
    leaving = _operation(occupied, Path("/lib/Band/02 - Band - Two.mp3"), 1)
    resolver = ConflictResolver(exists=lambda path: path == occupied, same_file=lambda _a, _b: False)

    _ = resolver.resolve([arriving, leaving])

    assert arriving.target_path == Path("/lib/Band/01 - Band - One-1.mp3")


def test_file_already_in_place_keeps_its_target(tmp_path: Path) -> None:
    source = tmp_path / "song.mp3"
    _ = source.write_bytes(b"x")
    operation = _operation(source, source, 0)

    _ = ConflictResolver().resolve([operation])

    assert operation.target_path == source
    assert operation.kind is OperationKind.SKIP_UNCHANGED


def test_case_insensitive_comparison() -> None:
    first = _operation(Path("/in/a.mp3"), Path("/out/Band/Song.mp3"), 0)
    second = _operation(Path("/in/b.mp3"), Path("/out/band/song.mp3"), 1)

    _ = ConflictResolver(case_sensitive=False, exists=lambda _path: False).resolve([first, second])

    assert second.target_path == Path("/out/band/song-1.mp3")


def test_case_sensitive_comparison_keeps_both() -> None:
    first = _operation(Path("/in/a.mp3"), Path("/out/Song.mp3"), 0)
    second = _operation(Path("/in/b.mp3"), Path("/out/song.mp3"), 1)

    _ = _offline().resolve([first, second])

    assert second.target_path == Path("/out/song.mp3")


def test_exhausted_attempts_fail_the_operation() -> None:
    operations = [_operation(Path(f"/in/{n}.mp3"), Path("/out/x.mp3"), n) for n in range(4)]

    _ = ConflictResolver(max_attempts=2, exists=lambda _path: False).resolve(operations)

    assert [op.failed for op in operations] == [False, False, False, True]
    assert operations[3].error_kind is ErrorKind.PATH_RESOLUTION


def test_overlong_file_name_fails_only_that_operation() -> None:
    long_target = Path("/out") / ("x" * 300 + ".mp3")
    bad = _operation(Path("/in/a.mp3"), long_target, 0)
    good = _operation(Path("/in/b.mp3"), Path("/out/b.mp3"), 1)

    _ = _offline().resolve([bad, good])

    assert bad.error_kind is ErrorKind.PATH_RESOLUTION
    assert not good.failed


def test_failed_operations_are_ignored() -> None:
    failed = _operation(Path("/in/a.mp3"), Path("/out/x.mp3"), 0)
    failed.fail(ErrorKind.TAG_READ, "broken")
    other = _operation(Path("/in/b.mp3"), Path("/out/x.mp3"), 1)

    _ = _offline().resolve([failed, other])

    assert other.target_path == Path("/out/x.mp3")


def test_assets_share_the_namespace_with_songs() -> None:
    song = _operation(Path("/in/01.mp3"), Path("/out/A/cover.jpg"), 0)
    asset = AssetOperation(
        source_path=Path("/in/cover.jpg"),
        target_path=Path("/out/A/cover.jpg"),
        kind=OperationKind.MOVE,
        sequence=5,
        transfer_mode=TransferMode.MOVE,
    )

    _ = _offline().resolve([song, asset])

    assert asset.target_path == Path("/out/A/cover-1.jpg")


def test_check_path_limits() -> None:
    check_path_limits(Path("/out/fine.mp3"))
    with pytest.raises(PathResolutionError):
        check_path_limits(Path("/out") / ("é" * 130 + ".mp3"))
    with pytest.raises(PathResolutionError):
        check_path_limits(Path("/" + "/".join(["d" * 200] * 25)) / "x.mp3")
