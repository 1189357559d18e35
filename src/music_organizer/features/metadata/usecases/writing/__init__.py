"""Tag writing helpers backed by mutagen."""

from .tag_writer import TagWriter, write_tags

__all__ = ["TagWriter", "write_tags"]
