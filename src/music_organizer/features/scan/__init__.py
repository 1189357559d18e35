"""Public API for the scan feature package."""

from .usecases import ScanEntry, ScanError, ScanResult, Scanner

__all__ = ["ScanEntry", "ScanError", "ScanResult", "Scanner"]
