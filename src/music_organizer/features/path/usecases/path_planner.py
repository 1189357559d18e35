"""Path planning: turn scan entries into planned operations."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from music_organizer.config.settings import DEFAULT_TEMPLATE
from music_organizer.features.planning.domain.models import (
    OperationKind,
    PlannedOperation,
    TransferMode,
)
from music_organizer.features.scan.usecases.scanner import ScanEntry
from music_organizer.shared.tag_set import TagSet

from ..domain.sanitizer import Sanitizer
from ..domain.template import NamingTemplate


class PathPlanner:
    """Render the naming template for each entry and decide its operation kind.

    The planner is pure: it never touches the filesystem, so collisions and
    occupied targets are left to the conflict resolver.
    """

    def __init__(
        self,
        destination_root: Path,
        template: NamingTemplate | str = DEFAULT_TEMPLATE,
        transfer_mode: TransferMode = TransferMode.MOVE,
        retag: bool = False,
    ) -> None:
        self.destination_root: Path = destination_root
        self.template: NamingTemplate = (
            template if isinstance(template, NamingTemplate) else NamingTemplate.parse(template)
        )
        self.transfer_mode: TransferMode = transfer_mode
        self.retag: bool = retag

    def target_for(self, tags: TagSet, extension: str) -> Path:
        """Return the sanitized target path for ``tags`` below the destination root."""
        segments = [Sanitizer.sanitize_segment(segment) for segment in self.template.render(tags)]
        *directories, stem = segments
        return self.destination_root.joinpath(*directories, stem + Sanitizer.sanitize_extension(extension))

    def plan(self, entry: ScanEntry, resolved_tags: TagSet | None = None) -> PlannedOperation:
        """Plan a single entry.

        Args:
            entry: Scanned file.
            resolved_tags: Tags the file should carry; ignored unless retagging.

        Returns:
            PlannedOperation: ``skip-unchanged`` or ``retag-only`` when the file
            is already in place, otherwise the transfer mode.
        """
        retag_tags = (resolved_tags or entry.tags) if self.retag else None
        naming_tags = retag_tags if retag_tags is not None else entry.tags
        operation = PlannedOperation(
            entry=entry,
            target_path=self.target_for(naming_tags, entry.extension),
            kind=self.transfer_mode.operation_kind,
            transfer_mode=self.transfer_mode,
            resolved_tags=retag_tags,
        )
        operation.settle_kind()
        return operation

    def plan_all(
        self,
        entries: Iterable[ScanEntry],
        resolved: Mapping[Path, TagSet] | None = None,
    ) -> list[PlannedOperation]:
        """Plan every entry, keeping input order."""
        lookup = resolved or {}
        return [self.plan(entry, lookup.get(entry.source_path)) for entry in entries]


def count_by_kind(operations: Iterable[PlannedOperation]) -> dict[OperationKind, int]:
    counts = {kind: 0 for kind in OperationKind}
    for operation in operations:
        counts[operation.kind] += 1
    return counts


__all__ = ["PathPlanner", "count_by_kind"]
