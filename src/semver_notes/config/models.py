"""Pydantic models for semver-notes configuration.

Configuration lives under ``[tool.semver-notes]`` in pyproject.toml.
Every model is frozen: once loaded, configuration is a read-only value
that can be passed around freely.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from semver_notes.core.sections import DEFAULT_SECTION_TABLE, SectionSpec, SectionTable
from semver_notes.core.version import Version
from semver_notes.exceptions import VersionParseError


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class CommitsConfig(_FrozenModel):
    """How commit messages are parsed and mapped to version bumps."""

    types_major: list[str] = Field(default_factory=list)
    types_minor: list[str] = Field(default_factory=lambda: ["feat"])
    types_patch: list[str] = Field(default_factory=lambda: ["fix", "perf"])
    breaking_pattern: str = r"BREAKING[ -]CHANGE:"
    skip_release_patterns: list[str] = Field(
        default_factory=lambda: ["[skip release]", "[release skip]", "[no release]"]
    )
    issue_pattern: str | None = None

    @field_validator("breaking_pattern", "issue_pattern")
    @classmethod
    def _check_regex(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid regular expression {value!r}: {e}") from e
        return value


class VersionConfig(_FrozenModel):
    """Versioning settings."""

    initial_version: str | None = None
    tag_prefix: str = "v"
    pre_release: str | None = None

    @field_validator("initial_version")
    @classmethod
    def _check_initial_version(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                Version.parse(value)
            except VersionParseError as e:
                raise ValueError(str(e)) from e
        return value

    @property
    def initial(self) -> Version | None:
        return Version.parse(self.initial_version) if self.initial_version else None


class SectionConfig(_FrozenModel):
    """One commit type shown under its own heading."""

    type: str
    name: str


def _default_sections() -> list[SectionConfig]:
    return [SectionConfig(type=spec.key, name=spec.name) for spec in DEFAULT_SECTION_TABLE]


class ChangelogConfig(_FrozenModel):
    """Release notes and changelog rendering settings."""

    sections: list[SectionConfig] = Field(default_factory=_default_sections)
    breaking_title: str = "Breaking Changes"
    date_format: str = "%Y-%m-%d"
    template_dir: Path | None = None
    release_template: str = "releasenotes-md.j2"
    changelog_template: str = "changelog-md.j2"

    @model_validator(mode="after")
    def _check_unique_sections(self) -> ChangelogConfig:
        seen: set[str] = set()
        for section in self.sections:
            if section.type in seen:
                raise ValueError(f"duplicate section type: {section.type!r}")
            seen.add(section.type)
        return self


class SemverNotesConfig(_FrozenModel):
    """Root configuration."""

    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)

    @property
    def section_table(self) -> SectionTable:
        """The configured sections as an immutable lookup table."""
        return SectionTable(
            SectionSpec(key=section.type, name=section.name) for section in self.changelog.sections
        )

    @property
    def effective_tag_prefix(self) -> str:
        return self.version.tag_prefix
