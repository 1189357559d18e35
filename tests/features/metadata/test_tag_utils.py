"""Tests for raw tag parsing helpers.

Where: tests/features/metadata/test_tag_utils.py
What: Validate helper functions shared by the extractors and writers.
Why: Absent or zero values must always become None.
"""

from music_organizer.features.metadata.usecases.extraction._tag_utils import (
    artwork_reference,
    clean_text,
    format_number_pair,
    parse_int,
    parse_slash_separated,
    parse_tuple_numbers,
    parse_year,
)


def test_parse_slash_separated_extracts_numbers() -> None:
    """Ensure basic slash-delimited numbers are parsed correctly."""
    assert parse_slash_separated("3/12") == (3, 12)
    assert parse_slash_separated("7") == (7, None)


def test_parse_slash_separated_handles_invalid_values() -> None:
    """Non-numeric and zero segments should yield None values."""
    assert parse_slash_separated("a/b") == (None, None)
    assert parse_slash_separated("0/10") == (None, 10)
    assert parse_slash_separated("") == (None, None)


def test_parse_tuple_numbers_converts_zeros_to_none() -> None:
    assert parse_tuple_numbers([(0, 10)]) == (None, 10)
    assert parse_tuple_numbers([(4, 0)]) == (4, None)
    assert parse_tuple_numbers(None) == (None, None)


def test_parse_year_reads_leading_digits() -> None:
    assert parse_year("2023-04-01") == 2023
    assert parse_year("1999") == 1999
    assert parse_year("abc") is None
    assert parse_year("0000") is None


def test_parse_int_and_clean_text() -> None:
    assert parse_int(" 12 ") == 12
    assert parse_int("-3") is None
    assert parse_int(None) is None
    assert clean_text("  Band ") == "Band"
    assert clean_text("   ") is None
    assert clean_text(None) is None


def test_format_number_pair() -> None:
    assert format_number_pair(3, 12) == "3/12"
    assert format_number_pair(3, None) == "3"
    assert format_number_pair(None, 12) is None


def test_artwork_reference_hashes_bytes() -> None:
    reference = artwork_reference(b"\x89PNG", None)

    assert reference.size == 4
    assert reference.mime == "application/octet-stream"
    assert len(reference.digest) == 64
