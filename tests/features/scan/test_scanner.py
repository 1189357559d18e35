"""Tests for the directory scanner."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from music_organizer.features.scan import ScanEntry, ScanError, Scanner

if TYPE_CHECKING:
    from conftest import FakeLibrary


def test_scan_orders_entries_lexicographically(library: FakeLibrary) -> None:
    _ = library.add("b/02.flac", title="Two", album="X")
    _ = library.add("a/10.mp3", title="Ten", album="X")
    _ = library.add("a/09.MP3", title="Nine", album="X")
    _ = library.add("a b/01.ogg", title="One", album="X")

    result = Scanner(library, workers=3).scan(library.root)

    names = [entry.source_path.relative_to(library.root).as_posix() for entry in result.entries]
    assert names == sorted(names)
    assert [entry.sequence for entry in result.entries] == [0, 1, 2, 3]
    assert result.entries[names.index("a/09.MP3")].extension == ".mp3"


def test_scan_is_deterministic_across_worker_counts(library: FakeLibrary) -> None:
    for index in range(12):
        _ = library.add(f"disc/{index:02}.flac", title=f"T{index}", album="X")

    first = Scanner(library, workers=1).scan(library.root).entries
    second = Scanner(library, workers=8).scan(library.root).entries

    assert first == second


def test_scan_filters_unsupported_and_hidden_files(library: FakeLibrary) -> None:
    kept = library.add("album/01.opus", title="Keep")
    _ = library.add("album/.02.mp3", title="Hidden")
    _ = library.add(".cache/03.mp3", title="Hidden dir")
    _ = library.add_file("album/notes.txt")

    result = Scanner(library).scan(library.root)

    assert [entry.source_path for entry in result.entries] == [kept]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_scan_skips_symlinked_files(library: FakeLibrary) -> None:
    real = library.add("album/01.mp3", title="Real")
    (library.root / "album" / "link.mp3").symlink_to(real)

    result = Scanner(library).scan(library.root)

    assert [entry.source_path for entry in result.entries] == [real]


def test_scan_collects_read_errors_and_continues(library: FakeLibrary) -> None:
    broken = library.add_file("album/00.mp3", b"garbage")
    good = library.add("album/01.mp3", title="Fine")

    result = Scanner(library).scan(library.root)

    assert result.errors == [ScanError(source_path=broken, reason="no recognizable tags", sequence=0)]
    assert [entry.source_path for entry in result.entries] == [good]
    assert result.entries[0].sequence == 1
    assert result.total == 2


def test_scan_collects_companion_images(library: FakeLibrary) -> None:
    _ = library.add("album/01.mp3", title="Song")
    cover = library.add_file("album/cover.JPG", b"jpeg")
    _ = library.add_file("album/.thumb.png", b"png")

    result = Scanner(library).scan(library.root)

    assert result.images == [cover]


def test_iter_scan_yields_entries_and_errors(library: FakeLibrary) -> None:
    _ = library.add("01.flac", title="A")
    _ = library.add_file("02.flac", b"broken")

    items = list(Scanner(library).iter_scan(library.root))

    assert isinstance(items[0], ScanEntry)
    assert isinstance(items[1], ScanError)


def test_scan_rejects_missing_root(tmp_path: Path, library: FakeLibrary) -> None:
    with pytest.raises(NotADirectoryError):
        _ = Scanner(library).scan(tmp_path / "missing")


def test_scanner_rejects_zero_workers(library: FakeLibrary) -> None:
    with pytest.raises(ValueError):
        _ = Scanner(library, workers=0)
