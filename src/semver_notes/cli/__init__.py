"""Command-line interface for semver-notes."""

from __future__ import annotations

from semver_notes.cli.app import app

__all__ = ["app"]
