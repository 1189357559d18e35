"""Rich console handler with structured event rendering."""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar

from typing_extensions import override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text

from .events import ProcessingEvent


class EventRichHandler(RichHandler):
    """Rich handler that renders ``processing_event`` records with icons and compact paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        ProcessingEvent.RUN_START: ("🚀", "cyan"),
        ProcessingEvent.RUN_COMPLETE: ("✅", "green"),
        ProcessingEvent.RUN_ABORTED: ("✋", "yellow"),
        ProcessingEvent.SCAN_START: ("🔎", "cyan"),
        ProcessingEvent.SCAN_COMPLETE: ("📚", "cyan"),
        ProcessingEvent.SCAN_ERROR: ("⛔", "red"),
        ProcessingEvent.CHECK_INCONSISTENCY: ("⚠️", "yellow"),
        ProcessingEvent.ENTRY_BLOCKED: ("🚫", "yellow"),
        ProcessingEvent.CONFLICT_DISAMBIGUATED: ("🔀", "magenta"),
        ProcessingEvent.CONFLICT_UNRESOLVED: ("❌", "red"),
        ProcessingEvent.OPERATION_APPLIED: ("📦", "green"),
        ProcessingEvent.OPERATION_DRY_RUN: ("👀", "blue"),
        ProcessingEvent.OPERATION_FAILED: ("⛔", "red"),
        ProcessingEvent.CLEANUP_REMOVED: ("🧹", "blue"),
    }
    _ARROW_EVENTS: ClassVar[frozenset[str]] = frozenset(
        {
            ProcessingEvent.CONFLICT_DISAMBIGUATED,
            ProcessingEvent.OPERATION_APPLIED,
            ProcessingEvent.OPERATION_DRY_RUN,
            ProcessingEvent.OPERATION_FAILED,
        }
    )
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: object | None = None) -> Text:
        """Format a path relative to ``base`` and keep only the trailing segments."""

        pure_path = self._to_pure_path(path)
        display_path: PurePath = pure_path
        if base:
            base_path = self._to_pure_path(str(base))
            try:
                relative = pure_path.relative_to(base_path)
            except ValueError:
                relative = None
            if relative is not None and str(relative) not in {"", "."}:
                display_path = relative

        separator = "\\" if isinstance(display_path, PureWindowsPath) else "/"
        anchor = display_path.anchor
        body_parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]
            display_string = "…" + separator + separator.join(body_parts)
        else:
            display_string = anchor + separator.join(body_parts) if body_parts else anchor or "."

        text = Text()
        for char in display_string:
            if char == separator or char == "…":
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _render_event(self, record: logging.LogRecord, message: str) -> Text | None:
        event = getattr(record, "processing_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        sequence = getattr(record, "sequence", None)
        total = getattr(record, "total", None)
        if isinstance(sequence, int) and sequence > 0:
            if isinstance(total, int) and total > 0:
                _ = body.append(f"[{sequence}/{total}] ")
            else:
                _ = body.append(f"[{sequence}] ")

        source_path = getattr(record, "source_path", None)
        target_path = getattr(record, "target_path", None)
        if source_path is None:
            _ = body.append(message)
        else:
            _ = body.append_text(
                self._format_path(str(source_path), base=getattr(record, "source_base_path", None))
            )
            if event in self._ARROW_EVENTS and target_path is not None:
                _ = body.append(" → ")
                _ = body.append_text(
                    self._format_path(str(target_path), base=getattr(record, "target_base_path", None))
                )
            error_message = getattr(record, "error_message", None)
            if error_message:
                _ = body.append(f" ({error_message})")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        rendered = self._render_event(record, message)
        if rendered is not None:
            return rendered
        return super().render_message(record, message)


__all__ = ["EventRichHandler"]
