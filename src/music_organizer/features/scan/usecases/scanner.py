"""src/music_organizer/features/scan/usecases/scanner.py
What: Walk a source tree and read the tags of every supported audio file.
Why: Later stages rely on a deterministic, lexicographically ordered entry list.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from music_organizer.config.settings import (
    DEFAULT_SCAN_WORKERS,
    IMAGE_EXTENSIONS,
    SUPPORTED_AUDIO_EXTENSIONS,
)
from music_organizer.features.metadata.usecases.ports import TagReaderPort
from music_organizer.platform.logging import ProcessingEvent, logger
from music_organizer.shared.errors import ErrorKind, TagReadError
from music_organizer.shared.tag_set import TagSet


@dataclass(frozen=True, slots=True)
class ScanEntry:
    """One supported audio file together with its decoded tags."""

    source_path: Path
    tags: TagSet
    extension: str
    sequence: int


@dataclass(frozen=True, slots=True)
class ScanError:
    """A file that was found but whose tags could not be read."""

    source_path: Path
    reason: str
    sequence: int
    kind: ErrorKind = ErrorKind.TAG_READ


@dataclass(slots=True)
class ScanResult:
    """Materialized outcome of a scan."""

    entries: list[ScanEntry] = field(default_factory=list)
    errors: list[ScanError] = field(default_factory=list)
    images: list[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.entries) + len(self.errors)


def _sort_key(path: Path) -> str:
    return path.as_posix()


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


class Scanner:
    """Produce ScanEntry values for every supported file below a root.

    Tag reading is the only step that runs concurrently; results are
    collected with ``Executor.map`` so they come back in sorted order.
    """

    def __init__(
        self,
        reader: TagReaderPort,
        supported_extensions: Iterable[str] = SUPPORTED_AUDIO_EXTENSIONS,
        workers: int = DEFAULT_SCAN_WORKERS,
        image_extensions: Iterable[str] = IMAGE_EXTENSIONS,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.reader: TagReaderPort = reader
        self.supported_extensions: frozenset[str] = frozenset(ext.lower() for ext in supported_extensions)
        self.image_extensions: frozenset[str] = frozenset(ext.lower() for ext in image_extensions)
        self.workers: int = workers

    def _walk(self, root: Path) -> Iterator[Path]:
        for current, dirnames, filenames in os.walk(root, followlinks=False):
            dirnames[:] = [name for name in dirnames if not _is_hidden(name)]
            current_path = Path(current)
            for name in filenames:
                if _is_hidden(name):
                    continue
                candidate = current_path / name
                if candidate.is_symlink() or not candidate.is_file():
                    continue
                yield candidate

    def _check_root(self, root: Path) -> Path:
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")
        return root.absolute()

    def collect_paths(self, root: Path) -> list[Path]:
        """Return supported audio files below ``root`` sorted by POSIX path string."""
        root = self._check_root(root)
        candidates = [
            path for path in self._walk(root) if path.suffix.lower() in self.supported_extensions
        ]
        return sorted(candidates, key=_sort_key)

    def collect_images(self, root: Path) -> list[Path]:
        """Return companion image files below ``root`` in sorted order."""
        root = self._check_root(root)
        images = [path for path in self._walk(root) if path.suffix.lower() in self.image_extensions]
        return sorted(images, key=_sort_key)

    def _read(self, path: Path) -> TagSet | TagReadError:
        try:
            return self.reader.read_tags(path)
        except TagReadError as exc:
            return exc

    def iter_scan(self, root: Path) -> Iterator[ScanEntry | ScanError]:
        """Lazily yield one entry or error per supported file, in scan order.

        Raises:
            NotADirectoryError: If ``root`` is not a directory.
        """
        paths = self.collect_paths(root)
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            for sequence, (path, outcome) in enumerate(zip(paths, pool.map(self._read, paths))):
                if isinstance(outcome, TagReadError):
                    logger.warning(
                        "Cannot read tags: %s",
                        outcome.reason,
                        extra={
                            "processing_event": ProcessingEvent.SCAN_ERROR,
                            "source_path": path,
                            "source_base_path": root,
                            "error_message": outcome.reason,
                        },
                    )
                    yield ScanError(source_path=path, reason=outcome.reason, sequence=sequence)
                    continue
                yield ScanEntry(
                    source_path=path,
                    tags=outcome,
                    extension=path.suffix.lower(),
                    sequence=sequence,
                )

    def scan(self, root: Path) -> ScanResult:
        """Scan ``root`` and materialize entries, read errors and images."""
        logger.info(
            "Scanning %s",
            root,
            extra={"processing_event": ProcessingEvent.SCAN_START},
        )
        result = ScanResult()
        for item in self.iter_scan(root):
            if isinstance(item, ScanError):
                result.errors.append(item)
            else:
                result.entries.append(item)
        result.images = self.collect_images(root)
        logger.info(
            "Scan complete [files=%d, errors=%d, images=%d]",
            len(result.entries),
            len(result.errors),
            len(result.images),
            extra={"processing_event": ProcessingEvent.SCAN_COMPLETE},
        )
        return result


__all__ = ["ScanEntry", "ScanError", "ScanResult", "Scanner"]
