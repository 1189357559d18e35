"""Planning use cases: conflict resolution, companion assets and execution."""

from .assets import plan_assets
from .conflict_resolver import ConflictResolver, check_path_limits, disambiguated_name
from .executor import PlanExecutor

__all__ = [
    "ConflictResolver",
    "PlanExecutor",
    "check_path_limits",
    "disambiguated_name",
    "plan_assets",
]
