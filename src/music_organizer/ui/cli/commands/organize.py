"""src/music_organizer/ui/cli/commands/organize.py
What: Execute organize runs for a source directory via the CLI.
Why: Bridge parsed arguments with the application service and the report display.
"""

from __future__ import annotations

from rich.console import Console
from rich.prompt import Confirm

from music_organizer.application.services.organize_service import (
    OrganizeMusicService,
    OrganizeRequest,
)
from music_organizer.features.planning import RunReport
from music_organizer.ui.cli.args.options import OrganizeArgs
from music_organizer.ui.cli.display.report import ReportDisplay


class PromptConfirm:
    """Ask the user to approve the plan with a rich prompt."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()

    def __call__(self, summary: str) -> bool:
        self.console.print(f"\n[bold]Planned changes:[/bold] {summary}")
        return Confirm.ask("Apply these changes?", console=self.console, default=False)


class OrganizeCommand:
    """Command for organizing a directory."""

    args: OrganizeArgs
    app: OrganizeMusicService
    request: OrganizeRequest
    report_display: ReportDisplay

    def __init__(self, args: OrganizeArgs, app: OrganizeMusicService | None = None) -> None:
        """Initialize the command.

        Args:
            args: Command line arguments.
            app: Service to run; tests inject one with fake tag I/O.
        """
        self.args = args
        self.app = app or OrganizeMusicService()
        self.request = OrganizeRequest(
            source=args.music_path,
            destination=args.output_path,
            transfer_mode=args.transfer_mode,
            dry_run=args.dry_run,
            check_consistency=args.check,
            verbosity=args.verbosity,
            template=args.template,
            case_sensitive=args.case_sensitive,
            retag=args.retag,
            assume_yes=args.assume_yes,
            cleanup=args.cleanup,
            workers=args.workers,
        )
        self.report_display = ReportDisplay()
        self.confirm = PromptConfirm(self.report_display.console)

    def execute(self) -> RunReport:
        """Run the organize pipeline and display its report.

        Returns:
            RunReport: The finished report.
        """
        report = self.app.run(self.request, confirm=self.confirm)
        self.report_display.show_report(
            report,
            verbosity=self.args.verbosity,
            source_root=self.args.music_path,
            target_root=self.args.output_path,
        )
        return report


__all__ = ["OrganizeCommand", "PromptConfirm"]
