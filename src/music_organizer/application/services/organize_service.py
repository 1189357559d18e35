"""Application service for organizing music files.

This layer wires the pipeline stages (scan, check, plan, resolve, confirm,
execute, cleanup) so that the CLI and tests reuse a single entry point.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import final

from music_organizer.config.settings import DEFAULT_SCAN_WORKERS, DEFAULT_TEMPLATE
from music_organizer.features.consistency import (
    ConsistencyChecker,
    build_groups,
    resolve_group_tags,
)
from music_organizer.features.metadata.adapters import LocalFilesystemAdapter
from music_organizer.features.metadata.usecases.ports import (
    ConfirmPort,
    FilesystemPort,
    TagReaderPort,
    TagWriterPort,
)
from music_organizer.features.path import NamingTemplate, PathPlanner, count_by_kind
from music_organizer.features.planning import (
    BlockedEntry,
    ConflictResolver,
    OperationKind,
    PlanExecutor,
    RunReport,
    TransferMode,
    plan_assets,
)
from music_organizer.features.scan import ScanEntry, Scanner
from music_organizer.platform.filesystem import ensure_directory
from music_organizer.platform.logging import ProcessingEvent, logger
from music_organizer.shared.errors import StructuralError
from music_organizer.shared.tag_set import TagSet


@dataclass(frozen=True)
class OrganizeRequest:
    """Input parameters for an organize run.

    Attributes:
        source: Directory tree to scan.
        destination: Root of the organized layout; defaults to ``source``.
        transfer_mode: Move files (removing the source) or copy them.
        dry_run: If True, plan and report but never touch the filesystem.
        check_consistency: Run the consistency checker and hold back blocked entries.
        verbosity: Report detail, 0..2. Never changes the plan.
        template: Naming template.
        case_sensitive: Compare targets case-sensitively when disambiguating.
        retag: Write resolved tags after the transfer.
        assume_yes: Skip the confirmation prompt.
        cleanup: Remove emptied source directories after a move.
        workers: Threads used for tag reading.
    """

    source: Path
    destination: Path | None = None
    transfer_mode: TransferMode = TransferMode.MOVE
    dry_run: bool = False
    check_consistency: bool = True
    verbosity: int = 0
    template: str = DEFAULT_TEMPLATE
    case_sensitive: bool = True
    retag: bool = False
    assume_yes: bool = False
    cleanup: bool = True
    workers: int = DEFAULT_SCAN_WORKERS

    @property
    def target_root(self) -> Path:
        return self.destination if self.destination is not None else self.source


def describe_plan(report: RunReport) -> str:
    """Return the one-line plan summary shown before confirmation."""
    counts = count_by_kind(op for op in report.operations if not op.failed)
    parts = [
        f"{counts[OperationKind.MOVE]} to move",
        f"{counts[OperationKind.COPY]} to copy",
        f"{counts[OperationKind.RETAG_ONLY]} to retag",
        f"{counts[OperationKind.SKIP_UNCHANGED]} unchanged",
    ]
    if report.asset_operations:
        parts.append(f"{len(report.asset_operations)} image(s)")
    if report.blocked:
        parts.append(f"{len(report.blocked)} blocked")
    failed = sum(1 for op in report.operations if op.failed)
    if failed:
        parts.append(f"{failed} unresolvable")
    return ", ".join(parts)


def _has_pending_changes(report: RunReport) -> bool:
    operations = (*report.operations, *report.asset_operations)
    return any(not op.failed and op.kind is not OperationKind.SKIP_UNCHANGED for op in operations)


@final
class OrganizeMusicService:
    """Application service that orchestrates an organize run.

    Tag I/O and filesystem side effects are injected so tests can run the
    whole pipeline without real audio files.
    """

    def __init__(
        self,
        *,
        reader: TagReaderPort | None = None,
        writer: TagWriterPort | None = None,
        filesystem_factory: Callable[[], FilesystemPort] | None = None,
    ) -> None:
        if reader is None or writer is None:
            from music_organizer.features.metadata.usecases import TagReader, TagWriter

            reader = reader or TagReader()
            writer = writer or TagWriter()
        self._reader: TagReaderPort = reader
        self._writer: TagWriterPort = writer
        self._filesystem_factory: Callable[[], FilesystemPort] = (
            filesystem_factory or LocalFilesystemAdapter
        )

    def run(self, request: OrganizeRequest, confirm: ConfirmPort | None = None) -> RunReport:
        """Execute the full pipeline for ``request``.

        Raises:
            StructuralError: If the source is missing or the destination root
                cannot be created or written.
            TemplateError: If ``request.template`` is malformed.
        """
        source = request.source.absolute()
        destination = request.target_root.absolute()
        template = NamingTemplate.parse(request.template)
        self._check_roots(source, destination, dry_run=request.dry_run)

        logger.info(
            "Organize run started [source=%s, destination=%s, mode=%s, dry_run=%s]",
            source,
            destination,
            request.transfer_mode,
            request.dry_run,
            extra={"processing_event": ProcessingEvent.RUN_START},
        )

        report = RunReport(dry_run=request.dry_run)
        scanner = Scanner(self._reader, workers=request.workers)
        try:
            scan = scanner.scan(source)
        except NotADirectoryError as exc:
            raise StructuralError(str(exc)) from exc
        report.scan_errors = list(scan.errors)

        passed, resolved = self._check(request, scan.entries, report)

        planner = PathPlanner(
            destination,
            template,
            transfer_mode=request.transfer_mode,
            retag=request.retag,
        )
        report.operations = planner.plan_all(passed, resolved)
        unplanned = [blocked.source_path for blocked in report.blocked]
        unplanned.extend(error.source_path for error in scan.errors)
        report.asset_operations = plan_assets(
            scan.images,
            report.operations,
            request.transfer_mode,
            unplanned=unplanned,
            first_sequence=scan.total,
        )

        resolver = ConflictResolver(case_sensitive=request.case_sensitive)
        _ = resolver.resolve([*report.operations, *report.asset_operations])
        report.disambiguations = list(resolver.diagnostics)

        if not request.dry_run:
            report.confirmed = self._confirm(request, report, confirm)
            if not report.confirmed:
                logger.warning(
                    "Run aborted before any change was made",
                    extra={"processing_event": ProcessingEvent.RUN_ABORTED},
                )
                return report

        filesystem = self._filesystem_factory()
        executor = PlanExecutor(
            self._writer,
            dry_run=request.dry_run,
            filesystem=filesystem,
            source_root=source,
            target_root=destination,
        )
        report.results = executor.execute(report.operations)
        report.asset_results = executor.execute(report.asset_operations)

        if not request.dry_run and request.cleanup and request.transfer_mode is TransferMode.MOVE:
            report.removed_directories = filesystem.remove_empty_directories(source)
            for directory in report.removed_directories:
                logger.info(
                    "Removed empty directory",
                    extra={
                        "processing_event": ProcessingEvent.CLEANUP_REMOVED,
                        "source_path": directory,
                        "source_base_path": source,
                    },
                )

        logger.info(
            "Organize run finished [results=%d, failed=%d, scan_errors=%d]",
            len(report.results),
            len(report.failures),
            len(report.scan_errors),
            extra={"processing_event": ProcessingEvent.RUN_COMPLETE},
        )
        return report

    @staticmethod
    def _check_roots(source: Path, destination: Path, *, dry_run: bool) -> None:
        if not source.is_dir():
            raise StructuralError(f"Source directory does not exist: {source}")
        if destination.exists() and not destination.is_dir():
            raise StructuralError(f"Destination is not a directory: {destination}")
        if dry_run:
            return
        try:
            _ = ensure_directory(destination)
        except OSError as exc:
            raise StructuralError(f"Cannot create destination {destination}: {exc}") from exc
        if not os.access(destination, os.W_OK | os.X_OK):
            raise StructuralError(f"Destination is not writable: {destination}")

    @staticmethod
    def _check(
        request: OrganizeRequest,
        entries: list[ScanEntry],
        report: RunReport,
    ) -> tuple[list[ScanEntry], dict[Path, TagSet]]:
        """Gate entries through the checker and collect resolved tags."""
        if not request.check_consistency:
            groups = build_groups(entries) if request.retag else ()
            passed = list(entries)
        else:
            check = ConsistencyChecker().check(entries)
            report.inconsistencies = list(check.inconsistencies)
            for entry in entries:
                if entry.source_path not in check.blocked_paths:
                    continue
                reasons = check.reasons_for(entry.source_path)
                blocked = BlockedEntry(source_path=entry.source_path, reasons=reasons)
                report.blocked.append(blocked)
                logger.warning(
                    "Entry held back (%s): %s",
                    blocked.error_kind,
                    ", ".join(reasons),
                    extra={
                        "processing_event": ProcessingEvent.ENTRY_BLOCKED,
                        "source_path": entry.source_path,
                        "source_base_path": request.source,
                        "error_message": ", ".join(reasons),
                    },
                )
            groups = check.groups if request.retag else ()
            passed = list(check.passed)

        resolved: dict[Path, TagSet] = {}
        for group in groups:
            resolved.update(resolve_group_tags(group))
        return passed, resolved

    @staticmethod
    def _confirm(request: OrganizeRequest, report: RunReport, confirm: ConfirmPort | None) -> bool:
        if not _has_pending_changes(report):
            return True
        if request.assume_yes:
            return True
        if confirm is None:
            return False
        return confirm(describe_plan(report))


__all__ = ["OrganizeMusicService", "OrganizeRequest", "describe_plan"]
