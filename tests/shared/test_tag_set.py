"""Tests for the TagSet record."""

from dataclasses import FrozenInstanceError

import pytest

from music_organizer.shared.tag_set import TagSet


def test_effective_album_artist_falls_back_to_artist() -> None:
    tags = TagSet(artist="Solo")
    assert tags.effective_album_artist == "Solo"
    assert TagSet(artist="Guest", album_artist="Band").effective_album_artist == "Band"


def test_effective_artist_falls_back_to_album_artist() -> None:
    assert TagSet(album_artist="Band").effective_artist == "Band"


def test_is_identifiable_requires_one_naming_field() -> None:
    assert not TagSet().is_identifiable()
    assert not TagSet(track_number=3, genre="Rock").is_identifiable()
    assert TagSet(title="Song").is_identifiable()


def test_merged_returns_new_instance() -> None:
    original = TagSet(artist="A")
    updated = original.merged(album_artist="A", track_total=10)

    assert original.album_artist is None
    assert updated.album_artist == "A"
    assert updated.track_total == 10


def test_tag_set_is_immutable() -> None:
    tags = TagSet(title="Song")
    with pytest.raises(FrozenInstanceError):
        tags.title = "Other"  # type: ignore[misc]
