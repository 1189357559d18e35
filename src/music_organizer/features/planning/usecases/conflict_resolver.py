"""Summary: Assign unique, non-clobbering targets to planned operations.
Why: Two files rendering to the same path, or a path already taken on disk,
must be renamed deterministically so reruns produce the same layout."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from music_organizer.config.settings import (
    MAX_DISAMBIGUATION_ATTEMPTS,
    MAX_FILE_NAME_BYTES,
    MAX_PATH_BYTES,
)
from music_organizer.platform.filesystem import is_same_file
from music_organizer.platform.logging import ProcessingEvent, logger
from music_organizer.shared.errors import ErrorKind, PathResolutionError

from ..domain.models import Disambiguation, Operation, OperationKind

OperationT = TypeVar("OperationT", bound=Operation)


def disambiguated_name(path: Path, attempt: int) -> Path:
    """Return ``stem-N.ext`` next to ``path``."""
    return path.with_name(f"{path.stem}-{attempt}{path.suffix}")


def check_path_limits(path: Path) -> None:
    """Raise ``PathResolutionError`` when ``path`` exceeds the byte limits."""
    name_bytes = len(path.name.encode("utf-8"))
    if name_bytes > MAX_FILE_NAME_BYTES:
        raise PathResolutionError(
            f"File name is {name_bytes} bytes (limit {MAX_FILE_NAME_BYTES}): {path.name}"
        )
    path_bytes = len(str(path).encode("utf-8"))
    if path_bytes > MAX_PATH_BYTES:
        raise PathResolutionError(f"Path is {path_bytes} bytes (limit {MAX_PATH_BYTES})")


class ConflictResolver:
    """Resolve duplicate and occupied targets with ``-N`` suffixes.

    Operations are visited in ``sort_key`` order, which is also the order
    the executor applies them. The first operation to reach a target keeps
    it; later ones get the lowest free suffix that is neither claimed,
    reserved as another operation's natural target, nor occupied on disk by
    a different file. A file that an earlier move takes away does not
    occupy its path.
    """

    def __init__(
        self,
        case_sensitive: bool = True,
        max_attempts: int = MAX_DISAMBIGUATION_ATTEMPTS,
        *,
        exists: Callable[[Path], bool] = Path.exists,
        same_file: Callable[[Path, Path], bool] = is_same_file,
    ) -> None:
        self.case_sensitive: bool = case_sensitive
        self.max_attempts: int = max_attempts
        self._exists: Callable[[Path], bool] = exists
        self._same_file: Callable[[Path, Path], bool] = same_file
        self.diagnostics: list[Disambiguation] = []

    def _key(self, path: Path) -> str:
        text = str(path)
        return text if self.case_sensitive else text.casefold()

    def _is_foreign(self, candidate: Path, source: Path, vacated: set[str]) -> bool:
        """Return True when ``candidate`` is on disk, is not ``source`` and stays put."""
        if self._key(candidate) in vacated or not self._exists(candidate):
            return False
        return not self._same_file(candidate, source)

    def resolve(self, operations: list[OperationT]) -> list[OperationT]:
        """Disambiguate targets in place and return ``operations``."""
        active = sorted((op for op in operations if not op.failed), key=lambda op: op.sort_key)
        reserved = {self._key(op.target_path) for op in active}
        claimed: set[str] = set()
        vacated: set[str] = set()

        for operation in active:
            try:
                target = self._choose(operation, reserved, claimed, vacated)
            except PathResolutionError as exc:
                operation.fail(ErrorKind.PATH_RESOLUTION, str(exc))
                logger.error(
                    "Cannot assign a target: %s",
                    exc,
                    extra={
                        "processing_event": ProcessingEvent.CONFLICT_UNRESOLVED,
                        "source_path": operation.source,
                        "target_path": operation.target_path,
                        "error_message": str(exc),
                    },
                )
                continue

            claimed.add(self._key(target))
            if target != operation.target_path:
                diagnostic = Disambiguation(
                    source=operation.source,
                    original=operation.target_path,
                    resolved=target,
                )
                self.diagnostics.append(diagnostic)
                logger.info(
                    "Target renamed to avoid a collision: %s",
                    target.name,
                    extra={
                        "processing_event": ProcessingEvent.CONFLICT_DISAMBIGUATED,
                        "source_path": operation.target_path,
                        "target_path": target,
                    },
                )
                operation.target_path = target
            operation.settle_kind()
            if operation.kind is OperationKind.MOVE:
                vacated.add(self._key(operation.source))
        return operations

    def _choose(
        self,
        operation: Operation,
        reserved: set[str],
        claimed: set[str],
        vacated: set[str],
    ) -> Path:
        natural = operation.target_path
        source = operation.source
        check_path_limits(natural)
        if self._key(natural) not in claimed and not self._is_foreign(natural, source, vacated):
            return natural

        for attempt in range(1, self.max_attempts + 1):
            candidate = disambiguated_name(natural, attempt)
            key = self._key(candidate)
            if key in claimed or key in reserved:
                continue
            if self._is_foreign(candidate, source, vacated):
                continue
            check_path_limits(candidate)
            if attempt > 1:
                logger.debug("Skipped %d taken names for %s", attempt - 1, natural)
            return candidate

        raise PathResolutionError(
            f"No free name for {natural.name} after {self.max_attempts} attempts"
        )


__all__ = ["ConflictResolver", "check_path_limits", "disambiguated_name"]
