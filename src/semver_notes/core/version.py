"""Semantic version parsing, ordering and bumping.

Versions follow https://semver.org: ``MAJOR.MINOR.PATCH`` with optional
pre-release and build metadata. Parsing is slightly lenient so that tags
such as ``v1`` or ``1.2`` still resolve, matching what most tagging
conventions produce in practice.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from functools import total_ordering

from semver_notes.exceptions import VersionParseError

_VERSION_PATTERN = re.compile(
    r"^v?"
    r"(?P<major>0|[1-9]\d*)"
    r"(?:\.(?P<minor>0|[1-9]\d*))?"
    r"(?:\.(?P<patch>0|[1-9]\d*))?"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


class BumpType(Enum):
    """Kinds of version bump, with a precedence rank (higher wins)."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    @property
    def rank(self) -> int:
        return self.value

    def __str__(self) -> str:
        return self.name.lower()


def max_bump(a: BumpType, b: BumpType) -> BumpType:
    """Return the stronger of two bump types.

    >>> max_bump(BumpType.MINOR, BumpType.PATCH)
    <BumpType.MINOR: 2>
    """
    return a if a.rank >= b.rank else b


def _prerelease_key(prerelease: str) -> tuple[tuple[int, int | str], ...]:
    # Numeric identifiers sort below alphanumeric ones.
    key: list[tuple[int, int | str]] = []
    for identifier in prerelease.split("."):
        if identifier.isdigit():
            key.append((0, int(identifier)))
        else:
            key.append((1, identifier))
    return tuple(key)


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """An immutable semantic version.

    Equality and ordering follow semver precedence, so build metadata
    is ignored when comparing.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string.

        Args:
            text: Version such as ``1.2.3``, ``v2.0.0-rc.1`` or ``1.4``

        Returns:
            Parsed Version

        Raises:
            VersionParseError: If the string is not a valid version
        """
        match = _VERSION_PATTERN.match(text.strip())
        if not match:
            raise VersionParseError(f"Invalid semantic version: {text!r}")

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
            prerelease=match.group("prerelease"),
            build=match.group("build"),
        )

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def is_initial_development(self) -> bool:
        """True for ``0.y.z`` versions, where anything may change."""
        return self.major == 0

    def bump(self, bump_type: BumpType) -> Version:
        """Return the version produced by applying ``bump_type``.

        Pre-release and build metadata are dropped. A patch bump on a
        pre-release finalises it instead of incrementing.
        """
        if bump_type is BumpType.NONE:
            return self
        if bump_type is BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type is BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if self.is_prerelease:
            return Version(self.major, self.minor, self.patch)
        return Version(self.major, self.minor, self.patch + 1)

    def with_prerelease(self, identifier: str) -> Version:
        """Return a copy labelled with the given pre-release identifier."""
        return replace(self, prerelease=identifier, build=None)

    def _precedence_key(self) -> tuple:
        if self.prerelease is None:
            # A release sorts after all of its pre-releases.
            return (self.major, self.minor, self.patch, 1, ())
        return (self.major, self.minor, self.patch, 0, _prerelease_key(self.prerelease))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() == other._precedence_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __hash__(self) -> int:
        return hash(self._precedence_key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


def parse_version(text: str | None, prefix: str = "") -> Version | None:
    """Leniently parse a tag into a Version.

    Args:
        text: Tag or version string, possibly empty
        prefix: Tag prefix to strip first (e.g. ``"release-"``)

    Returns:
        The parsed Version, or None if the tag is not a version
    """
    if not text:
        return None
    candidate = text.strip()
    if prefix and candidate.startswith(prefix):
        candidate = candidate[len(prefix) :]
        if prefix.endswith("v") and candidate.startswith("v"):
            return None
    try:
        return Version.parse(candidate)
    except VersionParseError:
        return None
