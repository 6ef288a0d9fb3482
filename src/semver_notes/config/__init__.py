"""Configuration management for semver-notes."""

from __future__ import annotations

from semver_notes.config.loader import load_config
from semver_notes.config.models import (
    ChangelogConfig,
    CommitsConfig,
    SectionConfig,
    SemverNotesConfig,
    VersionConfig,
)

__all__ = [
    "ChangelogConfig",
    "CommitsConfig",
    "SectionConfig",
    "SemverNotesConfig",
    "VersionConfig",
    "load_config",
]
