"""Scan use cases."""

from .scanner import ScanEntry, ScanError, ScanResult, Scanner

__all__ = ["ScanEntry", "ScanError", "ScanResult", "Scanner"]
