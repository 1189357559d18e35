"""File and path segment sanitization."""

import re
from typing import ClassVar, final

from music_organizer.config.settings import MAX_SEGMENT_BYTES, SAFE_SUBSTITUTE


@final
class Sanitizer:
    """Turn rendered template values into portable path segments."""

    # Path separators, characters reserved on common filesystems and control characters
    FORBIDDEN: ClassVar[re.Pattern[str]] = re.compile(r'[/\\:*?"<>|\x00-\x1f\x7f-\x9f]')

    # Characters trimmed from both ends of every segment
    TRIM_CHARACTERS: ClassVar[str] = " \t\r\n."

    @staticmethod
    def truncate_bytes(text: str, max_bytes: int) -> str:
        """Cut ``text`` to at most ``max_bytes`` UTF-8 bytes without splitting a character."""
        encoded = text.encode("utf-8")
        if len(encoded) <= max_bytes:
            return text
        return encoded[:max_bytes].decode("utf-8", errors="ignore")

    @classmethod
    def sanitize_segment(cls, text: str, max_bytes: int = MAX_SEGMENT_BYTES) -> str:
        """Sanitize one path segment.

        Args:
            text: Rendered segment text.
            max_bytes: Maximum encoded length of the result.

        Returns:
            str: A segment that:
                - has forbidden and control characters replaced by ``_``
                - carries no leading or trailing whitespace or dots
                - fits in ``max_bytes`` UTF-8 bytes
                - is ``_`` when nothing else is left
        """
        cleaned = cls.FORBIDDEN.sub(SAFE_SUBSTITUTE, text).strip(cls.TRIM_CHARACTERS)
        cleaned = cls.truncate_bytes(cleaned, max_bytes).rstrip(cls.TRIM_CHARACTERS)
        return cleaned or SAFE_SUBSTITUTE

    @classmethod
    def sanitize_extension(cls, extension: str) -> str:
        """Return ``extension`` lower-cased with exactly one leading dot."""
        bare = cls.FORBIDDEN.sub("", extension).strip(cls.TRIM_CHARACTERS).lower()
        return f".{bare}" if bare else ""
