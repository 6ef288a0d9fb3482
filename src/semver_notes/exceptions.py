"""Exception hierarchy for semver-notes.

All errors raised on purpose by this package derive from
:class:`SemverNotesError`, so callers can catch one type at the boundary.

Commit and tag parsing never raise: malformed input degrades to an
absent value instead. Only configuration and rendering failures surface.
"""

from __future__ import annotations


class SemverNotesError(Exception):
    """Base class for all semver-notes errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(SemverNotesError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


# =============================================================================
# Versions
# =============================================================================


class VersionError(SemverNotesError):
    """Version handling failed."""


class VersionParseError(VersionError):
    """A string is not a valid semantic version."""


# =============================================================================
# Templates
# =============================================================================


class TemplateError(SemverNotesError):
    """Template loading or rendering failed."""


class TemplateNotFoundError(TemplateError):
    """A required template is missing or empty."""


class RenderError(TemplateError):
    """A template failed while rendering."""

    def __init__(self, message: str, template: str | None = None) -> None:
        super().__init__(message)
        self.template = template
