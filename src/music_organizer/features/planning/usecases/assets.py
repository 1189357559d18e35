"""Companion asset planning (cover images travelling with their songs)."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..domain.models import AssetOperation, PlannedOperation, TransferMode


def plan_assets(
    images: Iterable[Path],
    operations: Sequence[PlannedOperation],
    transfer_mode: TransferMode,
    *,
    unplanned: Iterable[Path] = (),
    first_sequence: int = 0,
) -> list[AssetOperation]:
    """Plan one AssetOperation per image whose songs all move to one new directory.

    Args:
        images: Image files found by the scanner.
        operations: Planned song operations.
        transfer_mode: Move or copy, matching the songs.
        unplanned: Songs that stay where they are (blocked or unreadable); an
            image sharing a directory with any of them is left alone.
        first_sequence: Sequence assigned to the first asset so assets sort
            after every song.
    """
    targets_by_dir: dict[Path, set[Path]] = defaultdict(set)
    for operation in operations:
        if operation.failed:
            continue
        targets_by_dir[operation.source.parent].add(operation.target_path.parent)
    pinned_dirs = {path.parent for path in unplanned}

    assets: list[AssetOperation] = []
    for image in images:
        current_dir = image.parent
        if current_dir in pinned_dirs:
            continue
        targets = targets_by_dir.get(current_dir)
        if not targets or len(targets) != 1:
            continue
        (new_dir,) = targets
        if new_dir == current_dir:
            continue
        assets.append(
            AssetOperation(
                source_path=image,
                target_path=new_dir / image.name,
                kind=transfer_mode.operation_kind,
                sequence=first_sequence + len(assets),
                transfer_mode=transfer_mode,
            )
        )
    return assets


__all__ = ["plan_assets"]
