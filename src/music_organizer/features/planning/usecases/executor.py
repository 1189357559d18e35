"""src/music_organizer/features/planning/usecases/executor.py
What: Apply resolved operations to the filesystem, one at a time and in order.
Why: The executor is the only component allowed to mutate files; every
failure is recorded per operation and never aborts the run.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from music_organizer.features.metadata.adapters.filesystem_adapter import LocalFilesystemAdapter
from music_organizer.features.metadata.usecases.ports import FilesystemPort, TagWriterPort
from music_organizer.platform.logging import ProcessingEvent, logger
from music_organizer.shared.errors import ErrorKind, TagWriteError

from ..domain.models import (
    ExecutionOutcome,
    ExecutionResult,
    Operation,
    OperationKind,
)


class PlanExecutor:
    """Execute planned operations sequentially.

    Dry runs evaluate every operation but never create directories, move,
    copy or write anything.
    """

    def __init__(
        self,
        writer: TagWriterPort | None,
        dry_run: bool = False,
        filesystem: FilesystemPort | None = None,
        *,
        source_root: Path | None = None,
        target_root: Path | None = None,
    ) -> None:
        self.writer: TagWriterPort | None = writer
        self.dry_run: bool = dry_run
        self.filesystem: FilesystemPort = filesystem or LocalFilesystemAdapter()
        self.source_root: Path | None = source_root
        self.target_root: Path | None = target_root

    def execute(self, operations: Sequence[Operation]) -> list[ExecutionResult]:
        """Run ``operations`` in order and return one result per operation."""
        total = len(operations)
        results: list[ExecutionResult] = []
        for index, operation in enumerate(operations, start=1):
            result = self._execute_one(operation)
            self._log_result(result, index, total)
            results.append(result)
        return results

    def _execute_one(self, operation: Operation) -> ExecutionResult:
        if operation.failed:
            return ExecutionResult(
                operation=operation,
                outcome=ExecutionOutcome.FAILED,
                error_kind=operation.error_kind,
                error_message=operation.error_message,
            )
        if self.dry_run:
            return ExecutionResult(operation=operation, outcome=ExecutionOutcome.SKIPPED_DRYRUN)
        if operation.kind is OperationKind.SKIP_UNCHANGED:
            return ExecutionResult(operation=operation, outcome=ExecutionOutcome.APPLIED)

        if operation.kind is OperationKind.RETAG_ONLY:
            return self._retag(operation, operation.source, transferred=False)

        try:
            _ = self.filesystem.ensure_parent_directory(operation.target_path)
            self.filesystem.transfer_file(
                operation.source,
                operation.target_path,
                keep_source=operation.transfer_mode.keeps_source,
            )
        except OSError as exc:
            return ExecutionResult(
                operation=operation,
                outcome=ExecutionOutcome.FAILED,
                error_kind=ErrorKind.FILESYSTEM,
                error_message=str(exc) or type(exc).__name__,
            )
        return self._retag(operation, operation.target_path, transferred=True)

    def _retag(self, operation: Operation, path: Path, *, transferred: bool) -> ExecutionResult:
        if not operation.needs_retag or operation.resolved_tags is None:
            return ExecutionResult(operation=operation, outcome=ExecutionOutcome.APPLIED, transferred=transferred)
        if self.writer is None:
            return ExecutionResult(
                operation=operation,
                outcome=ExecutionOutcome.FAILED,
                error_kind=ErrorKind.TAG_WRITE,
                error_message="no tag writer configured",
                transferred=transferred,
            )
        try:
            self.writer.write_tags(path, operation.resolved_tags)
        except TagWriteError as exc:
            return ExecutionResult(
                operation=operation,
                outcome=ExecutionOutcome.FAILED,
                error_kind=ErrorKind.TAG_WRITE,
                error_message=exc.reason,
                transferred=transferred,
            )
        return ExecutionResult(operation=operation, outcome=ExecutionOutcome.APPLIED, transferred=transferred)

    def _log_result(self, result: ExecutionResult, sequence: int, total: int) -> None:
        operation = result.operation
        if result.outcome is ExecutionOutcome.FAILED:
            level, event = logging.ERROR, ProcessingEvent.OPERATION_FAILED
        elif operation.kind is OperationKind.SKIP_UNCHANGED:
            level = logging.DEBUG
            event = (
                ProcessingEvent.OPERATION_DRY_RUN
                if result.outcome is ExecutionOutcome.SKIPPED_DRYRUN
                else ProcessingEvent.OPERATION_APPLIED
            )
        elif result.outcome is ExecutionOutcome.SKIPPED_DRYRUN:
            level, event = logging.INFO, ProcessingEvent.OPERATION_DRY_RUN
        else:
            level, event = logging.INFO, ProcessingEvent.OPERATION_APPLIED
        logger.log(
            level,
            "%s %s -> %s [%s]",
            operation.kind,
            operation.source,
            operation.target_path,
            result.outcome,
            extra={
                "processing_event": event,
                "sequence": sequence,
                "total": total,
                "source_path": operation.source,
                "source_base_path": self.source_root,
                "target_path": operation.target_path,
                "target_base_path": self.target_root,
                "error_message": result.error_message,
            },
        )


__all__ = ["PlanExecutor"]
