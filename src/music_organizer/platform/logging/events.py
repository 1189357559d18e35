"""Structured event identifiers attached to log records.

Where: platform/logging/events.py
What: Enumerate the pipeline events rendered by the console handler.
Why: Usecases and the handler must agree on identifiers without importing each other.
"""

from __future__ import annotations

from enum import StrEnum


class ProcessingEvent(StrEnum):
    """Structured event identifiers for organize runs."""

    RUN_START = "organize.run.start"
    RUN_COMPLETE = "organize.run.complete"
    RUN_ABORTED = "organize.run.aborted"
    SCAN_START = "organize.scan.start"
    SCAN_COMPLETE = "organize.scan.complete"
    SCAN_ERROR = "organize.scan.error"
    CHECK_INCONSISTENCY = "organize.check.inconsistency"
    ENTRY_BLOCKED = "organize.entry.blocked"
    CONFLICT_DISAMBIGUATED = "organize.conflict.disambiguated"
    CONFLICT_UNRESOLVED = "organize.conflict.unresolved"
    OPERATION_APPLIED = "organize.operation.applied"
    OPERATION_DRY_RUN = "organize.operation.dry_run"
    OPERATION_FAILED = "organize.operation.failed"
    CLEANUP_REMOVED = "organize.cleanup.removed"


__all__ = ["ProcessingEvent"]
