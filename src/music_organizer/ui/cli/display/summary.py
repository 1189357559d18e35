"""Utilities for rendering the run summary."""

from __future__ import annotations

from collections import Counter

from rich.console import Console
from rich.markup import escape

from music_organizer.features.planning import ExecutionOutcome, OperationKind, RunReport


def render_run_summary(console: Console, report: RunReport) -> None:
    """Render the counts of an organize run followed by every failure.

    Args:
        console: Rich console instance used to render output.
        report: Finished run report.
    """
    header = "Dry Run Summary" if report.dry_run else "Organize Summary"
    console.print(f"\n[bold]{header}:[/bold]")
    console.print(f"Files planned: {len(report.operations)}")

    if report.dry_run:
        changes = sum(
            1
            for result in report.results
            if result.outcome is ExecutionOutcome.SKIPPED_DRYRUN
            and result.operation.kind is not OperationKind.SKIP_UNCHANGED
        )
        console.print(f"[blue]Would change: {changes}[/blue]")
    elif report.results:
        console.print(f"[green]Applied: {report.count(ExecutionOutcome.APPLIED)}[/green]")
    elif report.operations:
        console.print("[yellow]Nothing was changed (not confirmed)[/yellow]")

    if report.asset_operations:
        console.print(f"Companion images: {len(report.asset_operations)}")
    if report.disambiguations:
        console.print(f"[magenta]Renamed to avoid collisions: {len(report.disambiguations)}[/magenta]")
    if report.blocked:
        by_kind = Counter(str(blocked.error_kind) for blocked in report.blocked)
        details = ", ".join(f"{kind}: {count}" for kind, count in sorted(by_kind.items()))
        console.print(f"[yellow]Held back by inconsistencies: {len(report.blocked)} ({details})[/yellow]")
    if report.removed_directories:
        console.print(f"Empty directories removed: {len(report.removed_directories)}")

    if report.scan_errors:
        console.print(f"[red]Unreadable files: {len(report.scan_errors)}[/red]")
        for error in report.scan_errors:
            console.print(f"[red]  • {escape(str(error.source_path))}: {escape(error.reason)}[/red]")

    failures = report.failures
    if not failures:
        return

    console.print(f"[red]Failed: {len(failures)}[/red]")
    for failed in failures:
        kind = failed.error_kind or "error"
        console.print(
            f"[red]  • {escape(str(failed.operation.source))} ({kind}): {escape(failed.error_message or '')}[/red]"
        )
        if failed.transferred:
            console.print(f"[red]    file is already at {escape(str(failed.operation.target_path))}[/red]")


__all__ = ["render_run_summary"]
