"""Command line interface package; exposes the console script entry point."""

from music_organizer.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
