"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from music_organizer.features.planning import TransferMode


@final
@dataclass(slots=True)
class OrganizeArgs:
    """Command line arguments for the ``organize`` subcommand."""

    command: Literal["organize"]
    music_path: Path
    output_path: Path
    transfer_mode: TransferMode
    dry_run: bool
    check: bool
    cleanup: bool
    retag: bool
    assume_yes: bool
    verbosity: int
    template: str
    case_sensitive: bool
    workers: int


CLIArgs = OrganizeArgs

__all__ = ["CLIArgs", "OrganizeArgs"]
