"""src/music_organizer/features/planning/domain/models.py
What: Planned operations, execution results and the run report.
Why: Resolver and executor share these records; only the resolver mutates targets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from music_organizer.features.consistency.domain.models import Inconsistency, InconsistencyKind
from music_organizer.features.scan.usecases.scanner import ScanEntry, ScanError
from music_organizer.shared.errors import ErrorKind
from music_organizer.shared.tag_set import TagSet


class OperationKind(StrEnum):
    MOVE = "move"
    COPY = "copy"
    RETAG_ONLY = "retag-only"
    SKIP_UNCHANGED = "skip-unchanged"


class TransferMode(StrEnum):
    """How files reach their target: moved (source removed) or copied."""

    MOVE = "move"
    COPY = "copy"

    @property
    def operation_kind(self) -> OperationKind:
        return OperationKind(self.value)

    @property
    def keeps_source(self) -> bool:
        return self is TransferMode.COPY


class ExecutionOutcome(StrEnum):
    APPLIED = "applied"
    SKIPPED_DRYRUN = "skipped-dryrun"
    FAILED = "failed"


class Operation(Protocol):
    """Fields shared by song and asset operations."""

    target_path: Path
    kind: OperationKind
    transfer_mode: TransferMode
    resolved_tags: TagSet | None
    error_kind: ErrorKind | None
    error_message: str | None

    @property
    def source(self) -> Path: ...

    @property
    def sort_key(self) -> tuple[int, str]: ...

    @property
    def needs_retag(self) -> bool: ...

    @property
    def failed(self) -> bool: ...

    def fail(self, kind: ErrorKind, message: str) -> None: ...

    def settle_kind(self) -> None: ...


def _settled_kind(operation: Operation) -> OperationKind:
    if operation.target_path == operation.source:
        return OperationKind.RETAG_ONLY if operation.needs_retag else OperationKind.SKIP_UNCHANGED
    return operation.transfer_mode.operation_kind


@dataclass(slots=True)
class PlannedOperation:
    """One proposed change for one scanned audio file.

    ``target_path``, ``kind`` and the error fields are only changed by the
    conflict resolver; everything else is fixed at planning time.
    """

    entry: ScanEntry
    target_path: Path
    kind: OperationKind
    transfer_mode: TransferMode = TransferMode.MOVE
    resolved_tags: TagSet | None = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None

    @property
    def source(self) -> Path:
        return self.entry.source_path

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.entry.sequence, str(self.entry.source_path))

    @property
    def needs_retag(self) -> bool:
        return self.resolved_tags is not None and self.resolved_tags != self.entry.tags

    @property
    def failed(self) -> bool:
        return self.error_kind is not None

    def fail(self, kind: ErrorKind, message: str) -> None:
        self.error_kind = kind
        self.error_message = message

    def settle_kind(self) -> None:
        """Recompute ``kind`` after the target path changed."""
        self.kind = _settled_kind(self)


@dataclass(slots=True)
class AssetOperation:
    """Relocation of a companion image next to its album's songs."""

    source_path: Path
    target_path: Path
    kind: OperationKind
    sequence: int
    transfer_mode: TransferMode = TransferMode.MOVE
    resolved_tags: TagSet | None = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None

    @property
    def source(self) -> Path:
        return self.source_path

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.sequence, str(self.source_path))

    @property
    def needs_retag(self) -> bool:
        return False

    @property
    def failed(self) -> bool:
        return self.error_kind is not None

    def fail(self, kind: ErrorKind, message: str) -> None:
        self.error_kind = kind
        self.error_message = message

    def settle_kind(self) -> None:
        self.kind = _settled_kind(self)


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    operation: Operation
    outcome: ExecutionOutcome
    error_kind: ErrorKind | None = None
    error_message: str | None = None
    transferred: bool = False

    @property
    def failed(self) -> bool:
        return self.outcome is ExecutionOutcome.FAILED


@dataclass(frozen=True, slots=True)
class Disambiguation:
    """Diagnostic recorded whenever the resolver renames a target."""

    source: Path
    original: Path
    resolved: Path


@dataclass(frozen=True, slots=True)
class BlockedEntry:
    source_path: Path
    reasons: tuple[InconsistencyKind, ...]

    @property
    def error_kind(self) -> ErrorKind:
        if InconsistencyKind.UNIDENTIFIABLE_ENTRY in self.reasons:
            return ErrorKind.UNIDENTIFIABLE
        return ErrorKind.INCONSISTENT_GROUP


@dataclass(slots=True)
class RunReport:
    """Everything an organize run found, planned and did."""

    scan_errors: list[ScanError] = field(default_factory=list)
    inconsistencies: list[Inconsistency] = field(default_factory=list)
    blocked: list[BlockedEntry] = field(default_factory=list)
    operations: list[PlannedOperation] = field(default_factory=list)
    asset_operations: list[AssetOperation] = field(default_factory=list)
    disambiguations: list[Disambiguation] = field(default_factory=list)
    results: list[ExecutionResult] = field(default_factory=list)
    asset_results: list[ExecutionResult] = field(default_factory=list)
    removed_directories: list[Path] = field(default_factory=list)
    confirmed: bool = False
    dry_run: bool = False

    @property
    def failures(self) -> list[ExecutionResult]:
        return [result for result in (*self.results, *self.asset_results) if result.failed]

    @property
    def success(self) -> bool:
        return not self.scan_errors and not self.failures

    def count(self, outcome: ExecutionOutcome) -> int:
        return sum(1 for result in self.results if result.outcome is outcome)


__all__ = [
    "AssetOperation",
    "BlockedEntry",
    "Disambiguation",
    "ExecutionOutcome",
    "ExecutionResult",
    "Operation",
    "OperationKind",
    "PlannedOperation",
    "RunReport",
    "TransferMode",
]
