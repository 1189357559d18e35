"""Public API for the path feature package."""

from .domain import FIELD_NAMES, NamingTemplate, Placeholder, Sanitizer
from .usecases import PathPlanner, count_by_kind

__all__ = [
    "FIELD_NAMES",
    "NamingTemplate",
    "PathPlanner",
    "Placeholder",
    "Sanitizer",
    "count_by_kind",
]
