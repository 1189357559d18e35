"""Planning domain records."""

from .models import (
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

__all__ = [
    "AssetOperation",
    "BlockedEntry",
    "Disambiguation",
    "ExecutionOutcome",
    "ExecutionResult",
    "Operation",
    "OperationKind",
    "PlannedOperation",
    "RunReport",
    "TransferMode",
]
