# Where: music_organizer.features.path.domain.template
# What: Parse and render "/"-separated naming templates with typed placeholders.
# Why: Templates are validated once so rendering can never fail per file.

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar, final

from music_organizer.config.settings import (
    UNKNOWN_ALBUM,
    UNKNOWN_ARTIST,
    UNKNOWN_GENRE,
    UNKNOWN_NUMBER,
    UNKNOWN_TITLE,
)
from music_organizer.shared.errors import TemplateError
from music_organizer.shared.tag_set import TagSet


def _disc_prefix(tags: TagSet) -> str:
    if (tags.disc_total or 0) > 1:
        return f"{tags.disc_number or UNKNOWN_NUMBER} "
    return ""


_TEXT_FIELDS: dict[str, Callable[[TagSet], str]] = {
    "title": lambda tags: tags.title or UNKNOWN_TITLE,
    "artist": lambda tags: tags.effective_artist or UNKNOWN_ARTIST,
    "album_artist": lambda tags: tags.effective_album_artist or UNKNOWN_ARTIST,
    "album": lambda tags: tags.album or UNKNOWN_ALBUM,
    "genre": lambda tags: tags.genre or UNKNOWN_GENRE,
    "disc_prefix": _disc_prefix,
}

_NUMERIC_FIELDS: dict[str, Callable[[TagSet], int | None]] = {
    "year": lambda tags: tags.year,
    "track": lambda tags: tags.track_number,
    "track_total": lambda tags: tags.track_total,
    "disc": lambda tags: tags.disc_number,
    "disc_total": lambda tags: tags.disc_total,
}

FIELD_NAMES: frozenset[str] = frozenset(_TEXT_FIELDS) | frozenset(_NUMERIC_FIELDS)


@dataclass(frozen=True, slots=True)
class Placeholder:
    name: str
    width: int = 0

    def render(self, tags: TagSet) -> str:
        numeric = _NUMERIC_FIELDS.get(self.name)
        if numeric is not None:
            value = numeric(tags)
            return str(UNKNOWN_NUMBER if value is None else value).zfill(self.width)
        return _TEXT_FIELDS[self.name](tags)


Token = str | Placeholder


@final
@dataclass(frozen=True, slots=True)
class NamingTemplate:
    """A parsed naming template.

    Each segment is a tuple of literal strings and placeholders. Rendering
    returns raw segment text; sanitizing is the caller's job so that values
    containing ``/`` never create extra directories.
    """

    source: str
    segments: tuple[tuple[Token, ...], ...]

    _PLACEHOLDER: ClassVar[re.Pattern[str]] = re.compile(r"\{([^{}]*)\}")
    _SPEC: ClassVar[re.Pattern[str]] = re.compile(r"^([a-z_]+)(?::0(\d+))?$")

    @classmethod
    def parse(cls, text: str) -> NamingTemplate:
        """Parse ``text`` into a template.

        Raises:
            TemplateError: On empty segments, unbalanced braces or unknown fields.
        """
        if not text or not text.strip():
            raise TemplateError("Naming template is empty")

        segments: list[tuple[Token, ...]] = []
        for raw_segment in text.split("/"):
            if not raw_segment.strip():
                raise TemplateError(f"Naming template has an empty segment: {text!r}")
            segments.append(cls._parse_segment(raw_segment, text))
        return cls(source=text, segments=tuple(segments))

    @classmethod
    def _parse_segment(cls, segment: str, text: str) -> tuple[Token, ...]:
        tokens: list[Token] = []
        position = 0
        for match in cls._PLACEHOLDER.finditer(segment):
            literal = segment[position : match.start()]
            cls._check_literal(literal, text)
            if literal:
                tokens.append(literal)
            tokens.append(cls._parse_placeholder(match.group(1), text))
            position = match.end()
        tail = segment[position:]
        cls._check_literal(tail, text)
        if tail:
            tokens.append(tail)
        return tuple(tokens)

    @staticmethod
    def _check_literal(literal: str, text: str) -> None:
        if "{" in literal or "}" in literal:
            raise TemplateError(f"Unbalanced brace in naming template: {text!r}")

    @classmethod
    def _parse_placeholder(cls, body: str, text: str) -> Placeholder:
        match = cls._SPEC.match(body.strip())
        if match is None:
            raise TemplateError(f"Malformed placeholder {{{body}}} in naming template: {text!r}")
        name, width = match.group(1), match.group(2)
        if name not in FIELD_NAMES:
            known = ", ".join(sorted(FIELD_NAMES))
            raise TemplateError(f"Unknown template field {name!r} (known fields: {known})")
        return Placeholder(name=name, width=int(width) if width else 0)

    def render(self, tags: TagSet) -> tuple[str, ...]:
        """Render every segment for ``tags`` using the documented fallbacks."""
        return tuple(
            "".join(token if isinstance(token, str) else token.render(tags) for token in segment)
            for segment in self.segments
        )

    def __str__(self) -> str:
        return self.source


__all__ = ["FIELD_NAMES", "NamingTemplate", "Placeholder"]
