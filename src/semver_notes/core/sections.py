"""Commit type to section mapping.

A :class:`SectionTable` is the single source of truth for which commit
types appear in release notes, under which heading, and in what order.
It is an immutable value passed explicitly to the classifier and the
projector, so alternative tables can be used side by side.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

    from semver_notes.core.commits import CommitEntry


@dataclass(frozen=True)
class SectionSpec:
    """A commit type and the heading it is displayed under."""

    key: str
    name: str


@dataclass(frozen=True)
class ReleaseNoteSection:
    """A heading and the commits listed under it, in input order."""

    name: str
    items: tuple[CommitEntry, ...] = ()


class SectionTable:
    """Ordered, read-only mapping of section key to display name."""

    __slots__ = ("_names", "_specs")

    def __init__(self, specs: Iterable[SectionSpec]) -> None:
        specs = tuple(specs)
        names: dict[str, str] = {}
        for spec in specs:
            if spec.key in names:
                raise ValueError(f"Duplicate section key: {spec.key!r}")
            names[spec.key] = spec.name
        self._specs = specs
        self._names = MappingProxyType(names)

    @property
    def order(self) -> tuple[str, ...]:
        """Section keys in display order."""
        return tuple(spec.key for spec in self._specs)

    def name_for(self, key: str) -> str:
        """Return the display name for ``key``.

        Raises:
            KeyError: If the key is not part of the table
        """
        return self._names[key]

    def __contains__(self, key: object) -> bool:
        return key in self._names

    def __iter__(self) -> Iterator[SectionSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SectionTable):
            return NotImplemented
        return self._specs == other._specs

    def __hash__(self) -> int:
        return hash(self._specs)

    def __repr__(self) -> str:
        return f"SectionTable({list(self._specs)!r})"


DEFAULT_SECTION_TABLE = SectionTable(
    [
        SectionSpec("feat", "Features"),
        SectionSpec("fix", "Bug Fixes"),
        SectionSpec("refactor", "Code Refactoring"),
        SectionSpec("perf", "Performance Improvements"),
        SectionSpec("test", "Tests"),
        SectionSpec("build", "Build"),
        SectionSpec("ci", "Continuous Integration"),
        SectionSpec("chore", "Chores"),
        SectionSpec("docs", "Documentation"),
        SectionSpec("style", "Styles"),
    ]
)


def classify(
    entries: Sequence[CommitEntry],
    table: SectionTable = DEFAULT_SECTION_TABLE,
) -> Mapping[str, ReleaseNoteSection]:
    """Group commit entries into release note sections.

    Entries whose type is not in ``table`` are left out. Sections without
    entries are omitted. Within a section, input order is preserved.
    The returned mapping only decides membership: display order comes
    from ``table.order``.
    """
    grouped: dict[str, list[CommitEntry]] = {}
    for entry in entries:
        if entry.type in table:
            grouped.setdefault(entry.type, []).append(entry)

    return MappingProxyType(
        {
            key: ReleaseNoteSection(name=table.name_for(key), items=tuple(items))
            for key, items in grouped.items()
        }
    )


def collect_breaking_messages(entries: Sequence[CommitEntry]) -> tuple[str, ...]:
    """Breaking change messages of all entries, in input order.

    Unknown types count too: a breaking change is always worth listing.
    """
    return tuple(
        entry.breaking_message
        for entry in entries
        if entry.breaking and entry.breaking_message
    )
