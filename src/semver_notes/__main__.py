"""Allow ``python -m semver_notes``."""

from __future__ import annotations

from semver_notes.cli import app

if __name__ == "__main__":
    app()
