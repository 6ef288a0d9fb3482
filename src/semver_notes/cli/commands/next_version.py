"""Implementation of the 'next-version' command.

Prints the version the given commits would release.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from semver_notes.cli.commands.common import (
    apply_prerelease,
    load_project_config,
    parse_input_commits,
    read_commit_messages,
    resolve_current_version,
)
from semver_notes.core.resolver import calculate_bump, resolve_next_version
from semver_notes.core.version import BumpType

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_next_version(
    current: str | None,
    input_path: Path | None,
    null_separated: bool,
    prerelease: str | None,
    config_path: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the next-version command.

    Args:
        current: Latest release tag, if any
        input_path: File with commit messages (stdin when None)
        null_separated: Messages are NUL separated instead of one per line
        prerelease: Pre-release identifier (e.g. "rc.1")
        config_path: Project directory or TOML file with configuration
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_project_config(config_path, err_console)
    current_version = resolve_current_version(current, config, err_console)

    messages = read_commit_messages(input_path, null_separated, err_console)
    entries = parse_input_commits(messages, config)
    bump_type = calculate_bump(entries, config.commits)

    next_version = resolve_next_version(
        current_version,
        entries,
        config.commits,
        initial_version=config.version.initial,
    )

    if bump_type is BumpType.NONE:
        err_console.print("[yellow]No releasable changes found, version unchanged.[/]")
    next_version = apply_prerelease(next_version, bump_type, prerelease, config)

    console.out(str(next_version), highlight=False)
