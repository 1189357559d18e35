"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import os
import shutil
import uuid
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    return ensure_directory(path.parent)


def is_same_file(first: Path, second: Path) -> bool:
    """Return True when both paths point at the same existing file."""

    try:
        return first.samefile(second)
    except OSError:
        return False


def _same_device(source: Path, target_dir: Path) -> bool:
    try:
        return source.stat().st_dev == target_dir.stat().st_dev
    except OSError:
        return False


def _place(staged: Path, target: Path) -> None:
    """Give ``staged`` the name ``target``, failing if ``target`` already exists.

    A hard link is created and the old name removed, so a file that appears at
    ``target`` after the caller's checks is never replaced. Filesystems
    without hard links fall back to a checked rename.
    """

    try:
        os.link(staged, target)
    except FileExistsError:
        raise
    except OSError:
        if target.exists():
            raise FileExistsError(f"Target already exists: {target}") from None
        os.rename(staged, target)
        return
    staged.unlink()


def _copy_atomically(source: Path, target: Path) -> None:
    """Copy ``source`` next to ``target`` under a hidden name, verify, then place it.

    The target name only ever refers to a fully written file.
    """

    temporary = target.with_name(f".{target.name}.{uuid.uuid4().hex[:8]}.partial")
    try:
        _ = shutil.copy2(source, temporary)
        expected = source.stat().st_size
        written = temporary.stat().st_size
        if written != expected:
            raise OSError(f"Short write to {temporary}: {written} of {expected} bytes")
        _place(temporary, target)
    except BaseException:
        temporary.unlink(missing_ok=True)
        raise


def transfer_file(source: Path, target: Path, *, keep_source: bool) -> None:
    """Copy or move ``source`` to ``target`` without ever overwriting.

    Args:
        source: Existing file to transfer.
        target: Destination path; its parent directory must exist.
        keep_source: Copy when True, move when False.

    Raises:
        FileExistsError: If ``target`` already exists.
        OSError: On any other filesystem failure.
    """

    if target.exists():
        # A case-only rename on a case-insensitive filesystem.
        if not keep_source and is_same_file(source, target):
            os.rename(source, target)
            return
        raise FileExistsError(f"Target already exists: {target}")

    if not keep_source and _same_device(source, target.parent):
        _place(source, target)
        return

    _copy_atomically(source, target)
    if not keep_source:
        source.unlink()


def remove_empty_directories(directory: Path, *, keep_root: bool = True) -> list[Path]:
    """Recursively remove empty directories below ``directory``.

    Returns:
        list[Path]: Removed directories, deepest first.
    """

    removed: list[Path] = []
    if not directory.exists():
        return removed

    for root, _, _ in os.walk(str(directory), topdown=False):
        root_path = Path(root)
        if keep_root and root_path == directory:
            continue
        try:
            if root_path.exists() and not any(root_path.iterdir()):
                root_path.rmdir()
                removed.append(root_path)
        except OSError:
            continue
    return removed


__all__ = [
    "ensure_directory",
    "ensure_parent_directory",
    "is_same_file",
    "remove_empty_directories",
    "transfer_file",
]
