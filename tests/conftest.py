"""Shared pytest fixtures."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest

from semver_notes.core.commits import CommitEntry

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def feat_message() -> str:
    return "feat: add user authentication"


@pytest.fixture
def fix_message() -> str:
    return "fix(core): handle missing config file"


@pytest.fixture
def breaking_message() -> str:
    return "feat(api)!: drop v1 endpoints\n\nBREAKING CHANGE: the /v1 routes are removed"


@pytest.fixture
def sample_messages(feat_message: str, fix_message: str, breaking_message: str) -> list[str]:
    """A realistic mix of commits, newest first."""
    return [
        feat_message,
        fix_message,
        "docs: update readme",
        "chore: bump dependencies",
        breaking_message,
        "Merge branch 'main' into feature",
    ]


@pytest.fixture
def release_date() -> date:
    return date(2020, 5, 1)


@pytest.fixture
def subject_entry():
    """Factory for the minimal entries used in release note fixtures."""

    def _make(commit_type: str, subject: str = "subject text", **kwargs) -> CommitEntry:
        return CommitEntry(type=commit_type, subject=subject, **kwargs)

    return _make


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project directory with a pyproject.toml carrying semver-notes config."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.semver-notes.version]
tag_prefix = "v"
"""
    )
    return tmp_path
