"""Summary: Filesystem adapter implementing the metadata FilesystemPort.
Why: Route executor side effects through platform helpers so tests can swap them."""

from __future__ import annotations

from pathlib import Path
from typing import final

from music_organizer.platform.filesystem import (
    ensure_parent_directory,
    remove_empty_directories,
    transfer_file,
)

from ..usecases.ports import FilesystemPort


@final
class LocalFilesystemAdapter(FilesystemPort):
    """Concrete adapter delegating to ``music_organizer.platform.filesystem``."""

    def ensure_parent_directory(self, path: Path) -> Path:
        return ensure_parent_directory(path)

    def transfer_file(self, source: Path, target: Path, *, keep_source: bool) -> None:
        transfer_file(source, target, keep_source=keep_source)

    def remove_empty_directories(self, directory: Path) -> list[Path]:
        return remove_empty_directories(directory)


__all__ = ["LocalFilesystemAdapter"]
