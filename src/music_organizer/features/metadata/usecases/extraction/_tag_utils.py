"""Tag utility helpers.

Where: src/music_organizer/features/metadata/usecases/extraction/_tag_utils.py
What: Pure helper routines for parsing and normalizing raw tag values.
Why: Shared by every format extractor and writer; absence is always None.
"""

from __future__ import annotations

import hashlib

from music_organizer.shared.tag_set import EmbeddedArtwork

__all__ = [
    "clean_text",
    "safe_get_first",
    "parse_int",
    "parse_slash_separated",
    "parse_tuple_numbers",
    "parse_year",
    "format_number_pair",
    "artwork_reference",
]


def clean_text(value: object) -> str | None:
    """Return a stripped string, or None for missing/blank values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def safe_get_first(data: list[str] | None, default: str = "") -> str:
    """Safely get the first element from a list or return the default."""
    return data[0] if data else default


def parse_int(value: str | None) -> int | None:
    """Parse a positive integer; zero and garbage become None."""
    if not value:
        return None
    value = value.strip()
    if not value.isdigit():
        return None
    number = int(value)
    return number if number > 0 else None


def parse_slash_separated(value: str) -> tuple[int | None, int | None]:
    """Parse a string in 'number/total' format.

    Returns a tuple (number, total); unparsable or zero parts become None.
    """
    parts: list[str] = value.split(sep="/") if value else []
    num = parse_int(parts[0]) if parts else None
    total = parse_int(parts[1]) if len(parts) > 1 else None
    return num, total


def parse_tuple_numbers(data: list[tuple[int, int]] | None) -> tuple[int | None, int | None]:
    """Parse MP4-style numeric tuples, converting zeros to None."""
    if data:
        first: tuple[int, int] = data[0]
        num: int | None = first[0] if first[0] else None
        total: int | None = first[1] if len(first) > 1 and first[1] else None
        return num, total
    return None, None


def parse_year(date_str: str | None) -> int | None:
    """Parse a year from a string (expects the first 4 characters to be digits)."""
    if not date_str:
        return None
    date_str = date_str.strip()
    if len(date_str) >= 4 and date_str[:4].isdigit():
        year = int(date_str[:4])
        return year if year > 0 else None
    return None


def format_number_pair(number: int | None, total: int | None) -> str | None:
    """Render 'number/total' (or just 'number'); None when number is absent."""
    if number is None:
        return None
    if total is None:
        return str(number)
    return f"{number}/{total}"


def artwork_reference(data: bytes, mime: str | None) -> EmbeddedArtwork:
    """Build an artwork reference from raw picture bytes."""
    return EmbeddedArtwork(
        mime=mime or "application/octet-stream",
        size=len(data),
        digest=hashlib.sha256(data).hexdigest(),
    )
