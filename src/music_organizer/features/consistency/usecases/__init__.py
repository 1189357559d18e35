"""Consistency use cases."""

from .checker import (
    ConsistencyChecker,
    build_groups,
    group_key_for,
    normalize_text,
    resolve_group_tags,
)

__all__ = [
    "ConsistencyChecker",
    "build_groups",
    "group_key_for",
    "normalize_text",
    "resolve_group_tags",
]
