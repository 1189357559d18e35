"""
Summary: Validate path segment sanitization rules.
Why: Rendered tag values must always produce portable, bounded segments.
"""

from __future__ import annotations

import pytest

from music_organizer.config.settings import MAX_SEGMENT_BYTES
from music_organizer.features.path import Sanitizer


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("AC/DC", "AC_DC"),
        ('What? "Now" <here>|there', "What_ _Now_ _here__there"),
        ("back\\slash:colon*star", "back_slash_colon_star"),
        ("tab\there", "tab_here"),
        ("  ...Dots and spaces... ", "Dots and spaces"),
        ("..", "_"),
        ("", "_"),
        ("   ", "_"),
        ("Ünïcödé stays", "Ünïcödé stays"),
    ],
)
def test_sanitize_segment(raw: str, expected: str) -> None:
    assert Sanitizer.sanitize_segment(raw) == expected


def test_sanitize_segment_truncates_on_character_boundary() -> None:
    text = "é" * 200  # 400 bytes

    result = Sanitizer.sanitize_segment(text)

    assert len(result.encode("utf-8")) <= MAX_SEGMENT_BYTES
    assert result == "é" * (MAX_SEGMENT_BYTES // 2)


def test_truncation_trims_trailing_dots_again() -> None:
    result = Sanitizer.sanitize_segment("a" * 9 + ". tail", max_bytes=11)

    assert result == "a" * 9


def test_sanitize_extension() -> None:
    assert Sanitizer.sanitize_extension(".FLAC") == ".flac"
    assert Sanitizer.sanitize_extension("mp3") == ".mp3"
    assert Sanitizer.sanitize_extension("") == ""
