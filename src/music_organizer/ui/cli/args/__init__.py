"""Command line argument handling package."""

from music_organizer.ui.cli.args.parser import ArgumentParser
from music_organizer.ui.cli.args.options import CLIArgs, OrganizeArgs

__all__ = ["ArgumentParser", "CLIArgs", "OrganizeArgs"]
