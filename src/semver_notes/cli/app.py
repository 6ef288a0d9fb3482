"""Command-line interface for semver-notes."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from semver_notes import __version__

app = typer.Typer(
    name="semver-notes",
    help="Next semantic version and release notes from conventional commits.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

CurrentOption = Annotated[
    str | None,
    typer.Option("--current", "-c", help="Latest release tag (omit for a first release)."),
]
InputOption = Annotated[
    Path | None,
    typer.Option(
        "--input",
        "-i",
        exists=True,
        dir_okay=False,
        help="File with commit messages (defaults to stdin).",
    ),
]
NullOption = Annotated[
    bool,
    typer.Option("--null", "-z", help="Messages are NUL separated, e.g. git log --format=%B%x00."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Project directory or TOML file with [tool.semver-notes]."),
]
PrereleaseOption = Annotated[
    str | None,
    typer.Option("--prerelease", help="Pre-release identifier, e.g. rc.1."),
]


def configure_logging(verbose: bool) -> None:
    """Route log records through rich to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"semver-notes {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
        ),
    ] = False,
) -> None:
    """Next semantic version and release notes from conventional commits."""
    configure_logging(verbose)


@app.command("next-version")
def next_version(
    current: CurrentOption = None,
    input_path: InputOption = None,
    null_separated: NullOption = False,
    prerelease: PrereleaseOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Print the version the given commits would release."""
    from semver_notes.cli.commands.next_version import run_next_version

    run_next_version(
        current=current,
        input_path=input_path,
        null_separated=null_separated,
        prerelease=prerelease,
        config_path=config_path,
        console=console,
        err_console=err_console,
    )


@app.command("release-notes")
def release_notes(
    current: CurrentOption = None,
    tag: Annotated[
        str | None,
        typer.Option("--tag", "-t", help="Tag of the new release (defaults to the next version)."),
    ] = None,
    release_date: Annotated[
        datetime | None,
        typer.Option(
            "--date", "-d", formats=["%Y-%m-%d"], help="Release date (defaults to today)."
        ),
    ] = None,
    undated: Annotated[bool, typer.Option("--no-date", help="Render without a date.")] = False,
    prerelease: PrereleaseOption = None,
    input_path: InputOption = None,
    null_separated: NullOption = False,
    config_path: ConfigOption = None,
) -> None:
    """Render release notes for the next version."""
    from semver_notes.cli.commands.release_notes import run_release_notes

    run_release_notes(
        current=current,
        tag=tag,
        release_date=release_date.date() if release_date else None,
        undated=undated,
        prerelease=prerelease,
        input_path=input_path,
        null_separated=null_separated,
        config_path=config_path,
        console=console,
        err_console=err_console,
    )


@app.command("changelog")
def changelog(
    input_path: Annotated[
        Path | None,
        typer.Option(
            "--input",
            "-i",
            exists=True,
            dir_okay=False,
            help="JSON list of releases (defaults to stdin).",
        ),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Render a changelog for several releases."""
    from semver_notes.cli.commands.changelog import run_changelog

    run_changelog(
        input_path=input_path,
        config_path=config_path,
        console=console,
        err_console=err_console,
    )
