"""Summary: Ports defining the collaborators the organize pipeline depends on.
Why: Decouple use cases from mutagen, prompts and the filesystem so tests stay simple."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from music_organizer.shared.tag_set import TagSet


@runtime_checkable
class TagReaderPort(Protocol):
    """Port for decoding embedded metadata."""

    def read_tags(self, path: Path) -> TagSet:
        """Return the TagSet of ``path`` or raise ``TagReadError``."""
        ...


@runtime_checkable
class TagWriterPort(Protocol):
    """Port for rewriting embedded metadata in place."""

    def write_tags(self, path: Path, tags: TagSet) -> None:
        """Write ``tags`` to ``path`` or raise ``TagWriteError``."""
        ...


@runtime_checkable
class ConfirmPort(Protocol):
    """Port for the yes/no decision taken before any mutation."""

    def __call__(self, summary: str) -> bool:
        """Present ``summary`` and return the user's decision."""
        ...


@runtime_checkable
class FilesystemPort(Protocol):
    """Port abstracting the mutating filesystem helpers used by the executor."""

    def ensure_parent_directory(self, path: Path) -> Path:
        """Ensure the parent directory for ``path`` exists and return it."""
        ...

    def transfer_file(self, source: Path, target: Path, *, keep_source: bool) -> None:
        """Copy or move ``source`` to ``target`` without overwriting."""
        ...

    def remove_empty_directories(self, directory: Path) -> list[Path]:
        """Remove empty directories below ``directory`` and return them."""
        ...


__all__ = [
    "ConfirmPort",
    "FilesystemPort",
    "TagReaderPort",
    "TagWriterPort",
]
