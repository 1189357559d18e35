"""Tests for writing resolved tags back into containers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from mutagen import MutagenError
from pytest_mock import MockerFixture

from music_organizer.features.metadata.usecases.writing.tag_writer import (
    FlacWriter,
    M4aWriter,
    Mp3Writer,
    TagWriter,
)
from music_organizer.shared.errors import TagWriteError
from music_organizer.shared.tag_set import TagSet


class _FakeAudio(dict[str, Any]):
    def __init__(self) -> None:
        super().__init__()
        self.tags: dict[str, Any] | None = None
        self.saved: bool = False

    def add_tags(self) -> None:
        self.tags = {}

    def save(self) -> None:
        self.saved = True


TAGS = TagSet(
    title="Song",
    artist="Band",
    album_artist="Band",
    album="Record",
    year=2001,
    track_number=3,
    track_total=12,
    disc_number=1,
    disc_total=2,
)


def test_mp3_writer_packs_totals_into_number_frames(mocker: MockerFixture) -> None:
    audio = _FakeAudio()
    _ = mocker.patch.object(Mp3Writer, "FILE_CLASS", mocker.Mock(return_value=audio))

    TagWriter().write_tags(Path("song.mp3"), TAGS)

    assert audio["tracknumber"] == ["3/12"]
    assert audio["discnumber"] == ["1/2"]
    assert audio["date"] == ["2001"]
    assert audio["albumartist"] == ["Band"]
    assert audio.saved
    assert audio.tags == {}


def test_flac_writer_uses_separate_total_keys(mocker: MockerFixture) -> None:
    audio = _FakeAudio()
    _ = mocker.patch.object(FlacWriter, "FILE_CLASS", mocker.Mock(return_value=audio))

    TagWriter().write_tags(Path("song.flac"), TAGS)

    assert audio["tracknumber"] == ["3"]
    assert audio["tracktotal"] == ["12"]
    assert audio["disctotal"] == ["2"]


def test_m4a_writer_uses_atoms(mocker: MockerFixture) -> None:
    audio = _FakeAudio()
    _ = mocker.patch.object(M4aWriter, "FILE_CLASS", mocker.Mock(return_value=audio))

    TagWriter().write_tags(Path("song.m4a"), TAGS)

    assert audio["trkn"] == [(3, 12)]
    assert audio["disk"] == [(1, 2)]
    assert audio["\xa9nam"] == ["Song"]


def test_absent_fields_are_left_alone(mocker: MockerFixture) -> None:
    audio = _FakeAudio()
    audio["genre"] = ["Jazz"]
    _ = mocker.patch.object(FlacWriter, "FILE_CLASS", mocker.Mock(return_value=audio))

    TagWriter().write_tags(Path("song.flac"), TagSet(title="Only"))

    assert dict(audio) == {"genre": ["Jazz"], "title": ["Only"]}


def test_write_failure_raises_tag_write_error(mocker: MockerFixture) -> None:
    _ = mocker.patch.object(FlacWriter, "FILE_CLASS", mocker.Mock(side_effect=MutagenError("locked")))

    with pytest.raises(TagWriteError) as excinfo:
        TagWriter().write_tags(Path("song.flac"), TAGS)

    assert excinfo.value.reason == "locked"


def test_unsupported_extension_raises_tag_write_error() -> None:
    with pytest.raises(TagWriteError):
        TagWriter().write_tags(Path("song.wav"), TAGS)
