"""Tests for command line argument parser."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

import pytest

from music_organizer.config.config import Config
from music_organizer.config.settings import DEFAULT_TEMPLATE
from music_organizer.features.planning import TransferMode
from music_organizer.ui.cli.args import ArgumentParser, OrganizeArgs


@pytest.fixture
def music_dir(tmp_path: Path) -> Path:
    path = tmp_path / "music"
    path.mkdir()
    return path


def test_create_parser() -> None:
    """Argument parser should expose the organize subcommand and its options."""

    parser = ArgumentParser.create_parser()

    organize_args: Namespace = parser.parse_args(["organize", "music"])
    assert organize_args.command == "organize"
    assert organize_args.music_path == "music"
    assert organize_args.verbosity == 1

    all_flags = parser.parse_args(
        ["organize", "music", "-o", "out", "-c", "-n", "-d", "-v", "2", "--retag", "--no-cleanup"]
    )
    assert all_flags.output == "out"
    assert all_flags.copy and all_flags.no_check and all_flags.dry_run
    assert all_flags.retag and all_flags.no_cleanup
    assert all_flags.verbosity == 2


def test_dry_run_and_assume_yes_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        _ = ArgumentParser.create_parser().parse_args(["organize", "music", "--dry-run", "--assume-yes"])


@pytest.mark.parametrize("value", ["0", "-2", "many"])
def test_workers_must_be_positive(value: str) -> None:
    with pytest.raises(SystemExit):
        _ = ArgumentParser.create_parser().parse_args(["organize", "music", "--workers", value])


def test_process_args_defaults_to_in_place_move(music_dir: Path) -> None:
    args = ArgumentParser.process_args(["organize", str(music_dir)])

    assert isinstance(args, OrganizeArgs)
    assert args.music_path == music_dir.resolve()
    assert args.output_path == music_dir.resolve()
    assert args.transfer_mode is TransferMode.MOVE
    assert args.check and args.cleanup
    assert not args.dry_run and not args.retag and not args.assume_yes
    assert args.template == DEFAULT_TEMPLATE
    assert args.case_sensitive


def test_process_args_copy_with_output(music_dir: Path, tmp_path: Path) -> None:
    args = ArgumentParser.process_args(
        ["organize", str(music_dir), "--copy", "--output", str(tmp_path / "out"), "--case-insensitive", "-y"]
    )

    assert args.transfer_mode is TransferMode.COPY
    assert args.output_path == (tmp_path / "out").resolve()
    assert not args.case_sensitive
    assert args.assume_yes


def test_copy_requires_output(music_dir: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(["organize", str(music_dir), "--copy"])

    assert excinfo.value.code == 2


def test_missing_source_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(["organize", str(tmp_path / "missing")])

    assert excinfo.value.code == 1


def test_malformed_template_is_a_usage_error(music_dir: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(["organize", str(music_dir), "--template", "{album}/{nope}"])

    assert excinfo.value.code == 2


def test_config_values_fill_unset_flags(music_dir: Path, tmp_path: Path, isolated_config: Path) -> None:
    library = tmp_path / "library"
    _ = isolated_config.write_text(
        f'destination = "{library.as_posix()}"\ntemplate = "{{artist}}/{{title}}"\nretag = true\nworkers = 2\n',
        encoding="utf-8",
    )
    Config.reset()

    args = ArgumentParser.process_args(["organize", str(music_dir), "--copy"])

    assert args.output_path == library.resolve()
    assert args.template == "{artist}/{title}"
    assert args.retag
    assert args.workers == 2
