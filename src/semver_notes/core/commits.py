"""Conventional commit parsing.

Parses commit messages following the Conventional Commits format
(https://www.conventionalcommits.org/) into :class:`CommitEntry` values:

    type(scope)!: subject

    optional body

    BREAKING CHANGE: description of the incompatible change
    Refs: #123

Parsing is pure and never raises. A message that does not follow the
convention yields ``None`` and the caller decides what to do with it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from semver_notes.config.models import CommitsConfig

logger = logging.getLogger(__name__)

DEFAULT_BREAKING_PATTERN = r"BREAKING[ -]CHANGE:"

# type(scope)!: subject. A parenthesised scope may contain colons; failing
# that, the loose alternative lets a malformed scope still yield a type and
# subject.
HEADER_PATTERN: re.Pattern[str] = re.compile(
    r"^(?P<type>[A-Za-z]+)"
    r"(?P<scope>\([^()]*\)|\([^:]*?\)?)?"
    r"(?P<breaking>!)?"
    r":[ \t]*"
    r"(?P<subject>\S.*)$"
)

_WELL_FORMED_SCOPE = re.compile(r"^\(\s*(?P<scope>[^()\s][^()]*?)\s*\)$")

# Git trailer: "Token: value", "Token #value" or "BREAKING CHANGE: value"
FOOTER_PATTERN: re.Pattern[str] = re.compile(
    r"^(?P<token>BREAKING CHANGE|[A-Za-z][\w-]*)(?::[ \t]+|[ \t]+#)(?P<value>.*)$"
)


def _empty_footers() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class CommitEntry:
    """A parsed conventional commit.

    Attributes:
        type: Commit type exactly as written (e.g. ``feat``, ``fix``)
        subject: Header text after the colon, trimmed
        scope: Scope from ``type(scope):``, or None
        breaking: Whether the commit is marked as a breaking change
        breaking_message: Text describing the breaking change, if any
        sha: Commit reference shown next to the entry (may be empty)
        body: Message body without the header
        footers: Trailers from the last paragraph of the body
        issue: Issue reference extracted with the configured pattern
        raw: Original message
    """

    type: str
    subject: str
    scope: str | None = None
    breaking: bool = False
    breaking_message: str | None = None
    sha: str = ""
    body: str = ""
    footers: Mapping[str, str] = field(default_factory=_empty_footers)
    issue: str | None = None
    raw: str = ""


def _parse_scope(raw_scope: str | None) -> str | None:
    if not raw_scope:
        return None
    match = _WELL_FORMED_SCOPE.match(raw_scope)
    return match.group("scope") if match else None


def _find_breaking_message(lines: Sequence[str], breaking_re: re.Pattern[str]) -> str | None:
    """Return the breaking change footer text, or None if there is no footer.

    An empty string means the marker is present without any text.
    """
    for index, line in enumerate(lines):
        stripped = line.strip()
        match = breaking_re.match(stripped)
        if not match:
            continue

        parts = [stripped[match.end() :].strip()]
        for continuation in lines[index + 1 :]:
            continuation = continuation.strip()
            if not continuation or FOOTER_PATTERN.match(continuation):
                break
            parts.append(continuation)
        return " ".join(part for part in parts if part)

    return None


def _parse_footers(body: str) -> dict[str, str]:
    paragraphs = [p for p in re.split(r"\n\s*\n", body.strip()) if p.strip()]
    if not paragraphs:
        return {}

    lines = [line.strip() for line in paragraphs[-1].splitlines()]
    if not FOOTER_PATTERN.match(lines[0]):
        return {}

    footers: dict[str, str] = {}
    token = None
    for line in lines:
        match = FOOTER_PATTERN.match(line)
        if match:
            token = match.group("token")
            footers[token] = match.group("value").strip()
        elif token is not None:
            footers[token] = f"{footers[token]} {line}".strip()
    return footers


def parse_commit(
    message: str,
    sha: str = "",
    *,
    breaking_pattern: str = DEFAULT_BREAKING_PATTERN,
    issue_pattern: str | None = None,
) -> CommitEntry | None:
    """Parse a single commit message.

    Args:
        message: Full commit message (header and optional body)
        sha: Commit reference to attach to the entry
        breaking_pattern: Regex matching a breaking change footer marker
        issue_pattern: Optional regex extracting an issue reference

    Returns:
        The parsed CommitEntry, or None if the message is not a
        conventional commit
    """
    lines = message.strip().splitlines()
    if not lines:
        return None

    match = HEADER_PATTERN.match(lines[0].strip())
    if not match:
        return None

    subject = match.group("subject").strip()
    breaking = bool(match.group("breaking"))
    breaking_message = subject if breaking else None

    body_lines = lines[1:]
    body = "\n".join(body_lines).strip()

    footer_message = _find_breaking_message(body_lines, re.compile(breaking_pattern))
    if footer_message is not None:
        breaking = True
        breaking_message = footer_message or subject

    issue = None
    if issue_pattern:
        issue_match = re.search(issue_pattern, message)
        if issue_match:
            issue = issue_match.group(1) if issue_match.groups() else issue_match.group(0)

    return CommitEntry(
        type=match.group("type"),
        subject=subject,
        scope=_parse_scope(match.group("scope")),
        breaking=breaking,
        breaking_message=breaking_message,
        sha=sha,
        body=body,
        footers=MappingProxyType(_parse_footers(body)),
        issue=issue,
        raw=message,
    )


def parse_commits(
    messages: Iterable[str],
    config: CommitsConfig | None = None,
) -> list[CommitEntry]:
    """Parse many commit messages, dropping non-conventional ones.

    Args:
        messages: Commit messages, typically newest first
        config: Commit parsing configuration (defaults when None)

    Returns:
        Parsed entries in input order
    """
    breaking_pattern = config.breaking_pattern if config else DEFAULT_BREAKING_PATTERN
    issue_pattern = config.issue_pattern if config else None

    entries = []
    for message in messages:
        entry = parse_commit(
            message,
            breaking_pattern=breaking_pattern,
            issue_pattern=issue_pattern,
        )
        if entry is None:
            logger.debug("Skipping non-conventional commit: %r", message.strip()[:72])
            continue
        entries.append(entry)
    return entries


def has_skip_release_marker(message: str, patterns: Sequence[str]) -> bool:
    """Whether ``message`` contains one of the skip release markers.

    Markers are plain substrings matched case-insensitively anywhere in
    the message, e.g. ``[skip release]``.
    """
    text = message.lower()
    return any(pattern.lower() in text for pattern in patterns)


def filter_skip_release_commits(messages: Iterable[str], patterns: Sequence[str]) -> list[str]:
    """Drop messages containing any skip release marker."""
    kept = []
    for message in messages:
        if patterns and has_skip_release_marker(message, patterns):
            logger.debug("Skipping commit with skip release marker: %r", message.strip()[:72])
            continue
        kept.append(message)
    return kept


def get_breaking_changes(entries: Iterable[CommitEntry]) -> list[CommitEntry]:
    """Return only breaking entries, in input order."""
    return [entry for entry in entries if entry.breaking]


def group_commits_by_type(entries: Iterable[CommitEntry]) -> dict[str, list[CommitEntry]]:
    """Group entries by their raw commit type."""
    grouped: dict[str, list[CommitEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.type, []).append(entry)
    return grouped
