"""Public API for the planning feature package."""

from .domain import (
    AssetOperation,
    BlockedEntry,
    Disambiguation,
    ExecutionOutcome,
    ExecutionResult,
    Operation,
    OperationKind,
    PlannedOperation,
    RunReport,
    TransferMode,
)
from .usecases import (
    ConflictResolver,
    PlanExecutor,
    check_path_limits,
    disambiguated_name,
    plan_assets,
)

__all__ = [
    "AssetOperation",
    "BlockedEntry",
    "ConflictResolver",
    "Disambiguation",
    "ExecutionOutcome",
    "ExecutionResult",
    "Operation",
    "OperationKind",
    "PlanExecutor",
    "PlannedOperation",
    "RunReport",
    "TransferMode",
    "check_path_limits",
    "disambiguated_name",
    "plan_assets",
]
