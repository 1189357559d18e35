"""Path use cases."""

from .path_planner import PathPlanner, count_by_kind

__all__ = ["PathPlanner", "count_by_kind"]
