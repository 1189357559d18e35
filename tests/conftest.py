"""Shared pytest fixtures for organize pipeline tests."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from music_organizer.shared.errors import TagReadError, TagWriteError
from music_organizer.shared.tag_set import TagSet


@dataclass
class FakeLibrary:
    """In-memory tag store keyed by file content.

    Every audio file written through ``add`` gets unique bytes, so tags follow
    the file through moves and copies without any real audio container.
    """

    root: Path
    tags_by_content: dict[bytes, TagSet] = field(default_factory=dict)
    written: list[tuple[Path, TagSet]] = field(default_factory=list)
    reads: list[Path] = field(default_factory=list)
    fail_writes_for: set[str] = field(default_factory=set)
    _counter: int = 0

    def add(self, relative: str, **tags: Any) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        self._counter += 1
        content = f"audio-{self._counter}:{relative}".encode()
        _ = path.write_bytes(content)
        self.tags_by_content[content] = TagSet(**tags)
        return path

    def add_file(self, relative: str, content: bytes = b"not audio") -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_bytes(content)
        return path

    def read_tags(self, path: Path) -> TagSet:
        self.reads.append(path)
        content = path.read_bytes()
        try:
            return self.tags_by_content[content]
        except KeyError:
            raise TagReadError(path, "no recognizable tags") from None

    def write_tags(self, path: Path, tags: TagSet) -> None:
        if path.name in self.fail_writes_for:
            raise TagWriteError(path, "read-only container")
        self.written.append((path, tags))
        self.tags_by_content[path.read_bytes()] = tags

    def snapshot(self) -> dict[str, bytes]:
        """Return every file below ``root`` with its bytes."""
        return {
            str(path.relative_to(self.root)): path.read_bytes()
            for path in sorted(self.root.rglob("*"))
            if path.is_file()
        }


@pytest.fixture
def library(tmp_path: Path) -> FakeLibrary:
    """Provide a fake music library rooted in a temporary directory."""

    root = tmp_path / "music"
    root.mkdir()
    return FakeLibrary(root=root)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point configuration and log files at the temporary directory."""

    config_path = tmp_path / "config" / "config.toml"
    config_path.parent.mkdir(parents=True, exist_ok=True)
    log_file = tmp_path / "logs" / "music_organizer.log"
    _ = config_path.write_text(f'log_file = "{log_file.as_posix()}"\n', encoding="utf-8")
    monkeypatch.setenv("MUSIC_ORGANIZER_CONFIG", str(config_path))

    from music_organizer.config.config import Config

    Config.reset()
    try:
        yield config_path
    finally:
        Config.reset()
