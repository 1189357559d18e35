"""Command execution package for CLI."""

from music_organizer.ui.cli.commands.organize import OrganizeCommand, PromptConfirm

__all__ = ["OrganizeCommand", "PromptConfirm"]
