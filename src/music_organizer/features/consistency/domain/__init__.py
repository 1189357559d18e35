"""Consistency domain records."""

from .models import (
    AlbumGroup,
    CheckReport,
    GroupKey,
    Inconsistency,
    InconsistencyKind,
    Severity,
)

__all__ = [
    "AlbumGroup",
    "CheckReport",
    "GroupKey",
    "Inconsistency",
    "InconsistencyKind",
    "Severity",
]
