"""Core business logic for semver-notes.

This module contains the fundamental building blocks:
- Semantic version parsing, ordering and bumping
- Conventional commit parsing
- Section classification and next version resolution
- Release note assembly and template rendering
"""

from __future__ import annotations

from semver_notes.core.changelog import OutputFormatter, TemplateVars, project, project_many
from semver_notes.core.commits import (
    CommitEntry,
    filter_skip_release_commits,
    get_breaking_changes,
    group_commits_by_type,
    has_skip_release_marker,
    parse_commit,
    parse_commits,
)
from semver_notes.core.release_note import (
    BreakingChangeSection,
    ReleaseNote,
    ReleaseNoteSection,
    assemble,
    create_release_note,
)
from semver_notes.core.resolver import calculate_bump, resolve_next_version
from semver_notes.core.sections import (
    DEFAULT_SECTION_TABLE,
    SectionSpec,
    SectionTable,
    classify,
    collect_breaking_messages,
)
from semver_notes.core.templates import JinjaTemplateRenderer, TemplateRenderer
from semver_notes.core.version import BumpType, Version, max_bump, parse_version

__all__ = [
    "DEFAULT_SECTION_TABLE",
    "BreakingChangeSection",
    "BumpType",
    "CommitEntry",
    "JinjaTemplateRenderer",
    "OutputFormatter",
    "ReleaseNote",
    "ReleaseNoteSection",
    "SectionSpec",
    "SectionTable",
    "TemplateRenderer",
    "TemplateVars",
    "Version",
    "assemble",
    "calculate_bump",
    "classify",
    "collect_breaking_messages",
    "create_release_note",
    "filter_skip_release_commits",
    "get_breaking_changes",
    "group_commits_by_type",
    "has_skip_release_marker",
    "max_bump",
    "parse_commit",
    "parse_commits",
    "parse_version",
    "project",
    "project_many",
    "resolve_next_version",
]
