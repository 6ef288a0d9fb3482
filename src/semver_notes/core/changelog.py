"""Release notes and changelog generation.

A :class:`ReleaseNote` is first projected into :class:`TemplateVars`, the
flat structure templates consume, and then rendered through a
:class:`TemplateRenderer`. Projection is lossless and keeps order; it does
no classification or version resolution of its own.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from semver_notes.core.release_note import BreakingChangeSection
from semver_notes.core.sections import DEFAULT_SECTION_TABLE, ReleaseNoteSection, SectionTable
from semver_notes.core.templates import (
    CHANGELOG_TEMPLATE,
    RELEASE_NOTES_TEMPLATE,
    JinjaTemplateRenderer,
    TemplateRenderer,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from semver_notes.config.models import SemverNotesConfig
    from semver_notes.core.release_note import ReleaseNote

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class TemplateVars:
    """Variables available to release note templates.

    Attributes:
        release: ``v<version>`` for versioned releases, else the raw tag
        date: Formatted release date, empty when undated
        sections: Section key to section, non-empty sections only
        order: Section keys in display order
        breaking_changes: Breaking change section
    """

    release: str
    date: str
    sections: Mapping[str, ReleaseNoteSection]
    order: tuple[str, ...]
    breaking_changes: BreakingChangeSection


def release_label(note: ReleaseNote) -> str:
    """Heading label: ``v1.2.3`` for versions, the tag verbatim otherwise."""
    if note.version is not None:
        return f"v{note.version}"
    return note.tag


def project(
    note: ReleaseNote,
    table: SectionTable = DEFAULT_SECTION_TABLE,
    *,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> TemplateVars:
    """Flatten a ReleaseNote into template variables."""
    return TemplateVars(
        release=release_label(note),
        date=note.date.strftime(date_format) if note.date else "",
        sections=note.sections,
        order=table.order,
        breaking_changes=note.breaking_changes,
    )


def project_many(
    notes: Sequence[ReleaseNote],
    table: SectionTable = DEFAULT_SECTION_TABLE,
    *,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> list[TemplateVars]:
    """Project several releases, keeping their order."""
    return [project(note, table, date_format=date_format) for note in notes]


class OutputFormatter:
    """Render release notes and changelogs through templates.

    Args:
        renderer: Template renderer (a JinjaTemplateRenderer when None)
        table: Section table deciding section order
        date_format: strftime format for release dates
        release_template: Template used for a single release
        changelog_template: Template used for a list of releases
    """

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        table: SectionTable = DEFAULT_SECTION_TABLE,
        *,
        date_format: str = DEFAULT_DATE_FORMAT,
        release_template: str = RELEASE_NOTES_TEMPLATE,
        changelog_template: str = CHANGELOG_TEMPLATE,
    ) -> None:
        if renderer is None:
            renderer = JinjaTemplateRenderer(required=(release_template, changelog_template))
        self.renderer = renderer
        self.table = table
        self.date_format = date_format
        self.release_template = release_template
        self.changelog_template = changelog_template

    @classmethod
    def from_config(cls, config: SemverNotesConfig) -> OutputFormatter:
        """Build a formatter from the changelog configuration.

        Raises:
            TemplateNotFoundError: If a configured template is missing or empty
        """
        changelog = config.changelog
        renderer = JinjaTemplateRenderer(
            template_dir=changelog.template_dir,
            required=(changelog.release_template, changelog.changelog_template),
        )
        return cls(
            renderer,
            config.section_table,
            date_format=changelog.date_format,
            release_template=changelog.release_template,
            changelog_template=changelog.changelog_template,
        )

    def format_release_note(self, note: ReleaseNote) -> str:
        """Render a single release.

        Raises:
            RenderError: If the template fails to render
        """
        variables = project(note, self.table, date_format=self.date_format)
        return self.renderer.render(self.release_template, {"note": variables})

    def format_changelog(self, notes: Sequence[ReleaseNote]) -> str:
        """Render several releases, newest first as given.

        Raises:
            RenderError: If the template fails to render
        """
        variables = project_many(notes, self.table, date_format=self.date_format)
        return self.renderer.render(self.changelog_template, {"notes": variables})
