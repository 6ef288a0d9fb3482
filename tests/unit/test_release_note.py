"""Tests for release note assembly."""

from __future__ import annotations

import dataclasses
from datetime import date

import pytest

from semver_notes.core.commits import parse_commits
from semver_notes.core.release_note import (
    BreakingChangeSection,
    ReleaseNote,
    ReleaseNoteSection,
    assemble,
    create_release_note,
)
from semver_notes.core.sections import SectionSpec, SectionTable
from semver_notes.core.version import Version


class TestAssemble:
    """Tests for assemble()."""

    def test_assemble_all_parts(self, subject_entry, release_date: date):
        sections = {"feat": ReleaseNoteSection("Features", (subject_entry("feat"),))}
        note = assemble(Version(1, 0, 0), "v1.0.0", release_date, sections, ["break"])

        assert note.version == Version(1, 0, 0)
        assert note.tag == "v1.0.0"
        assert note.date == release_date
        assert note.sections["feat"].name == "Features"
        assert note.breaking_changes == BreakingChangeSection("Breaking Changes", ("break",))

    def test_absent_parts_are_legal(self):
        """No version, empty tag and no date are all representable."""
        note = assemble(None, "", None, {}, [])

        assert note.version is None
        assert note.tag == ""
        assert note.date is None
        assert dict(note.sections) == {}
        assert note.breaking_changes.messages == ()

    def test_breaking_messages_verbatim_in_order(self):
        messages = ["  second: keeps spacing ", "first"]
        note = assemble(None, "", None, {}, messages)

        assert note.breaking_changes.messages == ("  second: keeps spacing ", "first")

    def test_breaking_title(self):
        note = assemble(None, "", None, {}, ["x"], breaking_title="Incompatible Changes")

        assert note.breaking_changes.name == "Incompatible Changes"

    def test_sections_are_copied(self, subject_entry):
        """Later changes to the input mapping do not leak into the note."""
        sections = {"fix": ReleaseNoteSection("Bug Fixes", (subject_entry("fix"),))}
        note = assemble(None, "", None, sections, [])
        sections.clear()

        assert "fix" in note.sections

    def test_note_is_immutable(self):
        note = assemble(None, "", None, {}, [])

        with pytest.raises(dataclasses.FrozenInstanceError):
            note.tag = "v2.0.0"  # type: ignore[misc]
        with pytest.raises(TypeError):
            note.sections["feat"] = ReleaseNoteSection("Features")  # type: ignore[index]

    def test_default_note(self):
        note = ReleaseNote()

        assert (note.version, note.tag, note.date) == (None, "", None)
        assert len(note.sections) == 0
        assert note.breaking_changes == BreakingChangeSection()


class TestCreateReleaseNote:
    """Tests for create_release_note()."""

    def test_classifies_and_collects_breaking(self, sample_messages: list[str], release_date):
        entries = parse_commits(sample_messages)
        note = create_release_note(
            entries, version=Version(2, 0, 0), tag="v2.0.0", date=release_date
        )

        assert set(note.sections) == {"feat", "fix", "docs", "chore"}
        assert note.breaking_changes.messages == ("the /v1 routes are removed",)
        assert note.version == Version(2, 0, 0)

    def test_custom_table(self):
        table = SectionTable([SectionSpec("fix", "Fixed")])
        note = create_release_note(parse_commits(["feat: a", "fix: b"]), version=None, table=table)

        assert list(note.sections) == ["fix"]
        assert note.sections["fix"].name == "Fixed"
