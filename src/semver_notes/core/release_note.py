"""Release note values.

A :class:`ReleaseNote` is the structured, renderable summary of one
release. It is built once and never mutated; rendering decides how an
absent version, empty tag or missing date is displayed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from semver_notes.core.sections import (
    DEFAULT_SECTION_TABLE,
    ReleaseNoteSection,
    SectionTable,
    classify,
    collect_breaking_messages,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from datetime import date as Date

    from semver_notes.core.commits import CommitEntry
    from semver_notes.core.version import Version

BREAKING_CHANGES_TITLE = "Breaking Changes"

__all__ = [
    "BREAKING_CHANGES_TITLE",
    "BreakingChangeSection",
    "ReleaseNote",
    "ReleaseNoteSection",
    "assemble",
    "create_release_note",
]


def _empty_sections() -> Mapping[str, ReleaseNoteSection]:
    return MappingProxyType({})


@dataclass(frozen=True)
class BreakingChangeSection:
    """Breaking change messages listed after all other sections."""

    name: str = BREAKING_CHANGES_TITLE
    messages: tuple[str, ...] = ()


@dataclass(frozen=True)
class ReleaseNote:
    """Everything needed to render one release.

    Attributes:
        version: Resolved version, or None if the tag is not a version
        tag: Tag name, possibly empty
        date: Release date, or None for an undated release
        sections: Section key to section, only for non-empty sections
        breaking_changes: Breaking change messages
    """

    version: Version | None = None
    tag: str = ""
    date: Date | None = None
    sections: Mapping[str, ReleaseNoteSection] = field(default_factory=_empty_sections)
    breaking_changes: BreakingChangeSection = field(default_factory=BreakingChangeSection)


def assemble(
    version: Version | None,
    tag: str,
    date: Date | None,
    sections: Mapping[str, ReleaseNoteSection],
    breaking: Iterable[str],
    *,
    breaking_title: str = BREAKING_CHANGES_TITLE,
) -> ReleaseNote:
    """Combine already computed parts into a ReleaseNote.

    Nothing is validated; breaking messages are kept verbatim and in order.
    """
    return ReleaseNote(
        version=version,
        tag=tag,
        date=date,
        sections=MappingProxyType(dict(sections)),
        breaking_changes=BreakingChangeSection(name=breaking_title, messages=tuple(breaking)),
    )


def create_release_note(
    entries: Sequence[CommitEntry],
    *,
    version: Version | None,
    tag: str = "",
    date: Date | None = None,
    table: SectionTable = DEFAULT_SECTION_TABLE,
    breaking_title: str = BREAKING_CHANGES_TITLE,
) -> ReleaseNote:
    """Classify commits and assemble them into a ReleaseNote."""
    return assemble(
        version,
        tag,
        date,
        classify(entries, table),
        collect_breaking_messages(entries),
        breaking_title=breaking_title,
    )
