"""src/music_organizer/ui/cli/display/report.py
What: Render inconsistencies, planned operations and the run summary.
Why: Verbosity selects how much of the report is shown; the plan itself never changes.
"""

from __future__ import annotations

from pathlib import Path
from typing import final

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from music_organizer.features.consistency import Severity
from music_organizer.features.planning import (
    ExecutionOutcome,
    ExecutionResult,
    Operation,
    OperationKind,
    RunReport,
)

from .summary import render_run_summary

_KIND_ICONS: dict[OperationKind, str] = {
    OperationKind.MOVE: "📦",
    OperationKind.COPY: "📋",
    OperationKind.RETAG_ONLY: "🏷️",
    OperationKind.SKIP_UNCHANGED: "✔️",
}


def _relative(path: Path, base: Path) -> Path:
    try:
        return path.relative_to(base)
    except ValueError:
        return path


@final
class ReportDisplay:
    """Handles run report display in CLI."""

    console: Console

    def __init__(self) -> None:
        """Initialize report display."""
        self.console = Console()

    def show_report(self, report: RunReport, *, verbosity: int, source_root: Path, target_root: Path) -> None:
        """Display ``report`` at the requested verbosity.

        Args:
            report: Finished run report.
            verbosity: 0 shows the summary, 1 adds inconsistencies, 2 adds every operation.
            source_root: Root the source paths are shown relative to.
            target_root: Root the target tree is drawn from.
        """
        if verbosity >= 1:
            self.show_inconsistencies(report, source_root)
        if verbosity >= 2:
            self.show_operations(report, target_root)
        render_run_summary(self.console, report)

    def show_inconsistencies(self, report: RunReport, source_root: Path) -> None:
        if not report.inconsistencies:
            return

        table = Table(title="Metadata inconsistencies", show_lines=False)
        table.add_column("Severity")
        table.add_column("Kind")
        table.add_column("Album")
        table.add_column("Files", justify="right")
        table.add_column("Details")
        for item in report.inconsistencies:
            style = "red" if item.severity is Severity.BLOCKING else "yellow"
            album = item.group.label() if item.group is not None else str(_relative(item.paths[0], source_root))
            table.add_row(
                f"[{style}]{item.severity}[/{style}]",
                str(item.kind),
                escape(album),
                str(len(item.paths)),
                escape(item.message),
            )
        self.console.print(table)

    def show_operations(self, report: RunReport, target_root: Path) -> None:
        """Draw the planned layout as a tree below ``target_root``."""
        outcomes: dict[int, ExecutionResult] = {
            id(result.operation): result for result in (*report.results, *report.asset_results)
        }
        tree = Tree(f"📁 {escape(str(target_root))}")
        nodes: dict[tuple[str, ...], Tree] = {}

        operations: list[Operation] = [*report.operations, *report.asset_operations]
        for operation in sorted(operations, key=lambda op: str(op.target_path)):
            relative = _relative(operation.target_path, target_root)
            parent: Tree = tree
            for depth in range(1, len(relative.parts)):
                key = relative.parts[:depth]
                if key not in nodes:
                    nodes[key] = parent.add(f"📁 {escape(relative.parts[depth - 1])}")
                parent = nodes[key]
            _ = parent.add(self._label(operation, outcomes.get(id(operation))))
        self.console.print(tree)

    @staticmethod
    def _label(operation: Operation, result: ExecutionResult | None) -> str:
        icon = _KIND_ICONS.get(operation.kind, "•")
        label = f"{icon} {escape(operation.target_path.name)}"
        if operation.failed or (result is not None and result.failed):
            message = operation.error_message if result is None else result.error_message
            return f"[red]{label} ({escape(message or '')})[/red]"
        if operation.kind is OperationKind.SKIP_UNCHANGED:
            return f"[dim]{label}[/dim]"
        status = ""
        if result is not None and result.outcome is ExecutionOutcome.SKIPPED_DRYRUN:
            status = " [blue](dry run)[/blue]"
        return f"{label} [dim]← {escape(operation.source.name)}[/dim]{status}"


__all__ = ["ReportDisplay"]
