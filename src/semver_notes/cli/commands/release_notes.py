"""Implementation of the 'release-notes' command.

Resolves the next version from the given commits and renders the
release notes for it. An explicit ``--tag`` names the release instead;
a tag that is not a version is rendered literally.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from rich.markup import escape

from semver_notes.cli.commands.common import (
    apply_prerelease,
    build_formatter,
    load_project_config,
    parse_input_commits,
    read_commit_messages,
    resolve_current_version,
)
from semver_notes.core.release_note import create_release_note
from semver_notes.core.resolver import calculate_bump, resolve_next_version
from semver_notes.core.version import parse_version
from semver_notes.exceptions import SemverNotesError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_release_notes(
    current: str | None,
    tag: str | None,
    release_date: date | None,
    undated: bool,
    prerelease: str | None,
    input_path: Path | None,
    null_separated: bool,
    config_path: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release-notes command.

    Args:
        current: Latest release tag, if any
        tag: Tag of the new release (defaults to prefix + next version)
        release_date: Release date (defaults to today)
        undated: Render without a date
        prerelease: Pre-release identifier (e.g. "rc.1")
        input_path: File with commit messages (stdin when None)
        null_separated: Messages are NUL separated instead of one per line
        config_path: Project directory or TOML file with configuration
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_project_config(config_path, err_console)
    formatter = build_formatter(config, err_console)
    current_version = resolve_current_version(current, config, err_console)

    messages = read_commit_messages(input_path, null_separated, err_console)
    entries = parse_input_commits(messages, config)
    next_version = resolve_next_version(
        current_version,
        entries,
        config.commits,
        initial_version=config.version.initial,
    )
    next_version = apply_prerelease(
        next_version, calculate_bump(entries, config.commits), prerelease, config
    )

    if tag:
        version = parse_version(tag, config.effective_tag_prefix)
    else:
        version = next_version
        tag = f"{config.effective_tag_prefix}{next_version}"

    note = create_release_note(
        entries,
        version=version,
        tag=tag,
        date=None if undated else (release_date or date.today()),
        table=config.section_table,
        breaking_title=config.changelog.breaking_title,
    )

    try:
        rendered = formatter.format_release_note(note)
    except SemverNotesError as e:
        err_console.print(f"[red]Error rendering release notes:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.out(rendered, highlight=False, end="")
