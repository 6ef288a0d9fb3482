"""Implementation of the 'changelog' command.

Renders a changelog for several releases described in a JSON document:

    [
      {"tag": "v1.1.0", "date": "2024-03-01", "commits": ["feat: add x"]},
      {"tag": "v1.0.0", "commits": [{"sha": "abc123", "message": "fix: y"}]}
    ]

Releases are rendered in the order given, so list the newest first.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from rich.markup import escape

from semver_notes.cli.commands.common import build_formatter, load_project_config, read_input
from semver_notes.core.commits import has_skip_release_marker, parse_commit
from semver_notes.core.release_note import create_release_note
from semver_notes.core.version import parse_version
from semver_notes.exceptions import SemverNotesError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from semver_notes.config.models import SemverNotesConfig
    from semver_notes.core.commits import CommitEntry
    from semver_notes.core.release_note import ReleaseNote


class CommitInput(BaseModel):
    """A commit message with an optional reference."""

    model_config = ConfigDict(extra="forbid")

    message: str
    sha: str = ""


class ReleaseInput(BaseModel):
    """One release of the changelog input."""

    model_config = ConfigDict(extra="forbid")

    tag: str = ""
    date: datetime.date | None = None
    commits: list[CommitInput | str] = Field(default_factory=list)


_releases_adapter = TypeAdapter(list[ReleaseInput])


def parse_releases(text: str) -> list[ReleaseInput]:
    """Validate the JSON changelog input.

    Raises:
        pydantic.ValidationError: If the document does not match the schema
    """
    return _releases_adapter.validate_json(text)


def _release_entries(release: ReleaseInput, config: SemverNotesConfig) -> list[CommitEntry]:
    entries = []
    for commit in release.commits:
        if isinstance(commit, str):
            commit = CommitInput(message=commit)
        if has_skip_release_marker(commit.message, config.commits.skip_release_patterns):
            continue
        entry = parse_commit(
            commit.message,
            commit.sha,
            breaking_pattern=config.commits.breaking_pattern,
            issue_pattern=config.commits.issue_pattern,
        )
        if entry is not None:
            entries.append(entry)
    return entries


def build_release_notes(
    releases: list[ReleaseInput],
    config: SemverNotesConfig,
) -> list[ReleaseNote]:
    """Turn validated input into release notes, one per release."""
    return [
        create_release_note(
            _release_entries(release, config),
            version=parse_version(release.tag, config.effective_tag_prefix),
            tag=release.tag,
            date=release.date,
            table=config.section_table,
            breaking_title=config.changelog.breaking_title,
        )
        for release in releases
    ]


def run_changelog(
    input_path: Path | None,
    config_path: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the changelog command.

    Args:
        input_path: JSON file describing the releases (stdin when None)
        config_path: Project directory or TOML file with configuration
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_project_config(config_path, err_console)
    formatter = build_formatter(config, err_console)

    text = read_input(input_path, err_console)
    try:
        releases = parse_releases(text)
    except ValidationError as e:
        err_console.print(f"[red]Invalid changelog input:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        rendered = formatter.format_changelog(build_release_notes(releases, config))
    except SemverNotesError as e:
        err_console.print(f"[red]Error rendering changelog:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.out(rendered, highlight=False, end="")
