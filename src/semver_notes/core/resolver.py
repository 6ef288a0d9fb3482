"""Next version resolution.

All bump precedence rules live here:

1. A breaking change bumps MAJOR (MINOR while the major version is 0).
2. Otherwise a minor type (``feat`` by default) bumps MINOR.
3. Otherwise a patch type (``fix``, ``perf`` by default) bumps PATCH.
4. Otherwise the version stays the same.

The result depends only on the set of commit types and breaking flags,
never on commit order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from semver_notes.core.version import BumpType, Version, max_bump

if TYPE_CHECKING:
    from collections.abc import Iterable

    from semver_notes.config.models import CommitsConfig
    from semver_notes.core.commits import CommitEntry

logger = logging.getLogger(__name__)

ZERO_VERSION = Version(0, 0, 0)


def _default_commits_config() -> CommitsConfig:
    from semver_notes.config.models import CommitsConfig

    return CommitsConfig()


def bump_for_entry(entry: CommitEntry, config: CommitsConfig) -> BumpType:
    """Return the bump a single commit asks for."""
    if entry.breaking or entry.type in config.types_major:
        return BumpType.MAJOR
    if entry.type in config.types_minor:
        return BumpType.MINOR
    if entry.type in config.types_patch:
        return BumpType.PATCH
    return BumpType.NONE


def calculate_bump(
    entries: Iterable[CommitEntry],
    config: CommitsConfig | None = None,
) -> BumpType:
    """Return the strongest bump requested by any entry.

    Args:
        entries: Parsed commits
        config: Commit type mapping (defaults when None)

    Returns:
        BumpType.NONE when no commit is release-worthy
    """
    config = config or _default_commits_config()

    bump = BumpType.NONE
    for entry in entries:
        bump = max_bump(bump, bump_for_entry(entry, config))
        if bump is BumpType.MAJOR:
            break
    return bump


def resolve_next_version(
    current: Version | None,
    entries: Iterable[CommitEntry],
    config: CommitsConfig | None = None,
    *,
    initial_version: Version | None = None,
) -> Version:
    """Compute the next version from the current one and new commits.

    Args:
        current: Latest released version, or None if there is none
        entries: Commits since that release
        config: Commit type mapping (defaults when None)
        initial_version: Base used instead of 0.0.0 when ``current`` is None

    Returns:
        The next version, equal to the base version when nothing
        release-worthy was committed
    """
    base = current or initial_version or ZERO_VERSION
    bump = calculate_bump(entries, config)

    if bump is BumpType.MAJOR and base.is_initial_development:
        # 0.y.z: breaking changes are expected and only bump minor.
        bump = BumpType.MINOR

    next_version = base.bump(bump)
    logger.debug("Resolved %s bump: %s -> %s", bump, base, next_version)
    return next_version
