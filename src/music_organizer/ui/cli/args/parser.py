"""Command line argument parser."""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from music_organizer.config.config import Config
from music_organizer.features.path import NamingTemplate
from music_organizer.features.planning import TransferMode
from music_organizer.platform.logging import (
    DEFAULT_LOG_FILE,
    level_for_verbosity,
    logger,
    setup_logger,
)
from music_organizer.shared.errors import TemplateError
from music_organizer.ui.cli.args.options import CLIArgs, OrganizeArgs

DEFAULT_VERBOSITY = 1


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="music-organizer",
            description="Moves or copies, renames and retags music files using their metadata.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        organize_parser = subparsers.add_parser(
            "organize",
            help="Organize a music directory into the canonical layout",
        )
        ArgumentParser._configure_organize_parser(organize_parser)
        return parser

    @staticmethod
    def _configure_organize_parser(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "music_path",
            type=str,
            help="Directory which will be searched for music files",
            metavar="SOURCE",
        )
        _ = parser.add_argument(
            "-o",
            "--output",
            type=str,
            help="Directory the organized files are written to (defaults to SOURCE)",
            metavar="DIR",
        )
        _ = parser.add_argument(
            "-c",
            "--copy",
            action="store_true",
            help="Copy the files instead of moving them (requires --output)",
        )
        _ = parser.add_argument(
            "-n",
            "--no-check",
            action="store_true",
            help="Don't check for metadata inconsistencies",
        )
        _ = parser.add_argument(
            "--no-cleanup",
            action="store_true",
            help="Don't remove directories left empty by a move",
        )
        _ = parser.add_argument(
            "--retag",
            action="store_true",
            help="Write resolved tags (album artist, totals, genre) after the transfer",
        )
        _ = parser.add_argument(
            "--template",
            type=str,
            help="Naming template, e.g. '{album_artist}/{album}/{track:02} - {title}'",
            metavar="TEMPLATE",
        )
        _ = parser.add_argument(
            "--case-insensitive",
            action="store_true",
            help="Treat target paths differing only in case as collisions",
        )
        _ = parser.add_argument(
            "--workers",
            type=_positive_int,
            help="Threads used to read tags",
            metavar="N",
        )
        _ = parser.add_argument(
            "-v",
            "--verbosity",
            type=int,
            choices=(0, 1, 2),
            default=DEFAULT_VERBOSITY,
            help="Verbosity of the output; 0 is the least and 2 the most verbose",
        )
        exclusive = parser.add_mutually_exclusive_group()
        _ = exclusive.add_argument(
            "-d",
            "--dry-run",
            action="store_true",
            help="Only check files, don't change anything",
        )
        _ = exclusive.add_argument(
            "-y",
            "--assume-yes",
            action="store_true",
            help="Assume yes as the answer to every question",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If the source path is invalid or flags are inconsistent.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(
            log_file=log_file_path,
            console_level=level_for_verbosity(parsed_args.verbosity),
        )

        return ArgumentParser._process_organize(parser, parsed_args, configuration)

    @staticmethod
    def _process_organize(
        parser: argparse.ArgumentParser,
        parsed_args: argparse.Namespace,
        configuration: Config,
    ) -> OrganizeArgs:
        music_path = Path(parsed_args.music_path).expanduser()
        if not music_path.is_dir():
            logger.error("Music directory does not exist: %s", music_path)
            sys.exit(1)

        if parsed_args.output:
            output_path = Path(parsed_args.output).expanduser()
        elif configuration.destination is not None:
            output_path = configuration.destination
        else:
            if parsed_args.copy:
                parser.error("--copy requires --output")
            output_path = music_path

        template = parsed_args.template or configuration.template
        try:
            _ = NamingTemplate.parse(template)
        except TemplateError as exc:
            parser.error(str(exc))

        return OrganizeArgs(
            command="organize",
            music_path=music_path.resolve(),
            output_path=output_path.resolve(),
            transfer_mode=TransferMode.COPY if parsed_args.copy else TransferMode.MOVE,
            dry_run=parsed_args.dry_run,
            check=not parsed_args.no_check,
            cleanup=configuration.cleanup and not parsed_args.no_cleanup,
            retag=parsed_args.retag or configuration.retag,
            assume_yes=parsed_args.assume_yes,
            verbosity=parsed_args.verbosity,
            template=template,
            case_sensitive=configuration.case_sensitive and not parsed_args.case_insensitive,
            workers=parsed_args.workers or configuration.workers,
        )


__all__ = ["ArgumentParser"]
