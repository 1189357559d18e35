"""Display management for CLI interface."""

from music_organizer.ui.cli.display.report import ReportDisplay
from music_organizer.ui.cli.display.summary import render_run_summary

__all__ = ["ReportDisplay", "render_run_summary"]
