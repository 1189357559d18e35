"""Metadata feature adapters."""

from .filesystem_adapter import LocalFilesystemAdapter

__all__ = ["LocalFilesystemAdapter"]
