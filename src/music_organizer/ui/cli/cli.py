"""Command line interface for music-organizer."""

import sys
from collections.abc import Sequence
from typing import final

from music_organizer.platform.logging import logger
from music_organizer.shared.errors import MusicOrganizerError, StructuralError
from music_organizer.ui.cli.args import ArgumentParser
from music_organizer.ui.cli.commands import OrganizeCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: Sequence[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args = ArgumentParser.process_args(args_list)
            report = OrganizeCommand(args).execute()
            if not report.success:
                sys.exit(1)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except StructuralError as e:
            logger.error("Cannot organize: %s", e)
            sys.exit(1)
        except MusicOrganizerError as e:
            logger.error("An unexpected error occurred: %s", e)
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures leave through
        ``sys.exit(...)`` so this return is only reached on success.
    """
    CommandProcessor.process_command()
    return 0
