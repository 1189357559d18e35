"""Tests for the ``EventRichHandler`` event rendering."""

from __future__ import annotations

import logging
from io import StringIO
from typing import Any

from rich.console import Console
from rich.text import Text

from music_organizer.platform.logging import EventRichHandler, ProcessingEvent


def _make_handler() -> EventRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return EventRichHandler(console=console)


def _build_record(**extras: Any) -> logging.LogRecord:
    """Create a ``LogRecord`` populated with processing extras for testing."""

    record = logging.LogRecord(
        name="music_organizer",
        level=logging.INFO,
        pathname="test",
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_render_message_truncates_long_absolute_paths() -> None:
    """Absolute source paths should be abbreviated with an ellipsis prefix."""

    handler = _make_handler()
    record = _build_record(
        processing_event=ProcessingEvent.SCAN_ERROR,
        source_path="/home/user/music/incoming/Various Artists/2019 OST/D1 13 Night.flac",
        error_message="no recognizable tags",
    )

    rendered = handler.render_message(record, "")

    assert isinstance(rendered, Text)
    assert "…/incoming/Various Artists/2019 OST/D1 13 Night.flac (no recognizable tags)" in rendered.plain


def test_render_message_relativizes_operation_paths() -> None:
    """Operation records show relative source and target joined by an arrow."""

    handler = _make_handler()
    base = "/home/user/music"
    record = _build_record(
        processing_event=ProcessingEvent.OPERATION_APPLIED,
        sequence=2,
        total=5,
        source_path=f"{base}/rip/01.flac",
        source_base_path=base,
        target_path="/library/Band/Record/01 - Band - One.flac",
        target_base_path="/library",
    )

    rendered = handler.render_message(record, "ignored")

    assert isinstance(rendered, Text)
    assert rendered.plain == "📦 [2/5] rip/01.flac → Band/Record/01 - Band - One.flac"


def test_render_message_without_paths_uses_message() -> None:
    handler = _make_handler()
    record = _build_record(processing_event=ProcessingEvent.RUN_ABORTED)

    rendered = handler.render_message(record, "Run aborted")

    assert isinstance(rendered, Text)
    assert rendered.plain == "✋ Run aborted"


def test_plain_records_fall_back_to_rich() -> None:
    handler = _make_handler()

    rendered = handler.render_message(_build_record(), "hello")

    assert isinstance(rendered, Text)
    assert rendered.plain == "hello"


def test_windows_paths_use_backslashes() -> None:
    handler = _make_handler()
    record = _build_record(
        processing_event=ProcessingEvent.ENTRY_BLOCKED,
        source_path="C:\\Music\\rip\\01.mp3",
        source_base_path="C:\\Music",
    )

    rendered = handler.render_message(record, "")

    assert isinstance(rendered, Text)
    assert rendered.plain.endswith("rip\\01.mp3")
