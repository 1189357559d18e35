"""Public API for the consistency feature package."""

from .domain import (
    AlbumGroup,
    CheckReport,
    GroupKey,
    Inconsistency,
    InconsistencyKind,
    Severity,
)
from .usecases import (
    ConsistencyChecker,
    build_groups,
    group_key_for,
    normalize_text,
    resolve_group_tags,
)

__all__ = [
    "AlbumGroup",
    "CheckReport",
    "ConsistencyChecker",
    "GroupKey",
    "Inconsistency",
    "InconsistencyKind",
    "Severity",
    "build_groups",
    "group_key_for",
    "normalize_text",
    "resolve_group_tags",
]
