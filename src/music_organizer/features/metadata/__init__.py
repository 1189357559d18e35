"""Public API for the metadata feature package."""

from music_organizer.shared.tag_set import EmbeddedArtwork, TagSet

from .adapters import LocalFilesystemAdapter
from .usecases import (
    ConfirmPort,
    FilesystemPort,
    TagReader,
    TagReaderPort,
    TagWriter,
    TagWriterPort,
    read_tags,
    write_tags,
)

__all__ = [
    "ConfirmPort",
    "EmbeddedArtwork",
    "FilesystemPort",
    "LocalFilesystemAdapter",
    "TagReader",
    "TagReaderPort",
    "TagSet",
    "TagWriter",
    "TagWriterPort",
    "read_tags",
    "write_tags",
]
