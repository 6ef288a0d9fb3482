"""Helpers shared by CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from semver_notes.config import load_config
from semver_notes.core.changelog import OutputFormatter
from semver_notes.core.commits import filter_skip_release_commits, parse_commits
from semver_notes.core.version import BumpType, parse_version
from semver_notes.exceptions import SemverNotesError

if TYPE_CHECKING:
    from rich.console import Console

    from semver_notes.config.models import SemverNotesConfig
    from semver_notes.core.commits import CommitEntry
    from semver_notes.core.version import Version


def load_project_config(config_path: Path | None, err_console: Console) -> SemverNotesConfig:
    """Load configuration, exiting with status 1 on errors."""
    try:
        return load_config(config_path or Path.cwd())
    except SemverNotesError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e


def build_formatter(config: SemverNotesConfig, err_console: Console) -> OutputFormatter:
    """Create the output formatter, exiting with status 1 if templates are unusable."""
    try:
        return OutputFormatter.from_config(config)
    except SemverNotesError as e:
        err_console.print(f"[red]Template error:[/] {escape(str(e))}")
        raise SystemExit(1) from e


def read_input(input_path: Path | None, err_console: Console) -> str:
    """Read UTF-8 text from a file or stdin, exiting with status 1 on errors."""
    try:
        return input_path.read_text(encoding="utf-8") if input_path else sys.stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        source = input_path or "stdin"
        err_console.print(f"[red]Error reading {escape(str(source))}:[/] {escape(str(e))}")
        raise SystemExit(1) from e


def read_commit_messages(
    input_path: Path | None,
    null_separated: bool,
    err_console: Console,
) -> list[str]:
    """Read commit messages from a file or stdin.

    Messages are one per line, or NUL separated (for full messages with
    bodies, as produced by ``git log --format=%B%x00``).
    """
    text = read_input(input_path, err_console)
    records = text.split("\0") if null_separated else text.splitlines()
    return [record for record in records if record.strip()]


def parse_input_commits(messages: list[str], config: SemverNotesConfig) -> list[CommitEntry]:
    """Filter skip markers and parse the remaining messages."""
    messages = filter_skip_release_commits(messages, config.commits.skip_release_patterns)
    return parse_commits(messages, config.commits)


def resolve_current_version(
    current: str | None,
    config: SemverNotesConfig,
    err_console: Console,
) -> Version | None:
    """Parse the ``--current`` tag; an unparseable tag counts as no release."""
    if not current:
        return None
    version = parse_version(current, config.effective_tag_prefix)
    if version is None:
        err_console.print(
            f"[yellow]Tag {escape(current)!r} is not a version, starting from scratch.[/]"
        )
    return version


def apply_prerelease(
    version: Version,
    bump_type: BumpType,
    prerelease: str | None,
    config: SemverNotesConfig,
) -> Version:
    """Label a bumped version with the ``--prerelease`` or configured identifier.

    Without releasable changes the version is left as it is.
    """
    if bump_type is BumpType.NONE:
        return version
    identifier = prerelease or config.version.pre_release
    return version.with_prerelease(identifier) if identifier else version
