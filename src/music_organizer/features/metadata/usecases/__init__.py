"""Metadata use cases: tag reading, tag writing and the ports they fulfil."""

from .extraction import TagReader, read_tags
from .ports import ConfirmPort, FilesystemPort, TagReaderPort, TagWriterPort
from .writing import TagWriter, write_tags

__all__ = [
    "ConfirmPort",
    "FilesystemPort",
    "TagReader",
    "TagReaderPort",
    "TagWriter",
    "TagWriterPort",
    "read_tags",
    "write_tags",
]
