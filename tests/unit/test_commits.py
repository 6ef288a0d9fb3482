"""Tests for conventional commit parsing."""

from __future__ import annotations

import dataclasses

import pytest

from semver_notes.config.models import CommitsConfig
from semver_notes.core.commits import (
    CommitEntry,
    filter_skip_release_commits,
    get_breaking_changes,
    group_commits_by_type,
    has_skip_release_marker,
    parse_commit,
    parse_commits,
)


class TestParseCommit:
    """Tests for parse_commit()."""

    def test_parse_simple_feat(self):
        """Parse a simple feat commit."""
        entry = parse_commit("feat: add new feature")

        assert entry is not None
        assert entry.type == "feat"
        assert entry.scope is None
        assert entry.subject == "add new feature"
        assert not entry.breaking
        assert entry.breaking_message is None

    def test_parse_with_scope(self):
        """Parse commit with scope."""
        entry = parse_commit("fix(api): handle null response")

        assert entry.type == "fix"
        assert entry.scope == "api"
        assert entry.subject == "handle null response"

    def test_scope_is_trimmed(self):
        entry = parse_commit("fix( api ): handle null response")

        assert entry.scope == "api"

    def test_parse_breaking_with_exclamation(self):
        """Header ! marks a breaking change; the subject is its message."""
        entry = parse_commit("feat!: redesign API")

        assert entry.breaking
        assert entry.type == "feat"
        assert entry.breaking_message == "redesign API"

    def test_parse_breaking_with_scope_and_exclamation(self):
        """Parse breaking change with scope and ! indicator."""
        entry = parse_commit("feat(core)!: change config format")

        assert entry.breaking
        assert entry.type == "feat"
        assert entry.scope == "core"

    def test_parse_breaking_in_body(self):
        """A BREAKING CHANGE footer in the body marks the commit breaking."""
        entry = parse_commit("feat: new feature\n\nBREAKING CHANGE: old API removed")

        assert entry.breaking
        assert entry.breaking_message == "old API removed"

    def test_parse_breaking_hyphenated(self):
        entry = parse_commit("fix: tweak\n\nBREAKING-CHANGE: flag renamed")

        assert entry.breaking
        assert entry.breaking_message == "flag renamed"

    def test_footer_message_wins_over_header(self):
        """When both markers exist, the footer text is the breaking message."""
        entry = parse_commit("feat!: redesign\n\nBREAKING CHANGE: config keys renamed")

        assert entry.breaking
        assert entry.breaking_message == "config keys renamed"

    def test_breaking_footer_without_text_uses_subject(self):
        entry = parse_commit("refactor: drop legacy loader\n\nBREAKING CHANGE:")

        assert entry.breaking
        assert entry.breaking_message == "drop legacy loader"

    def test_breaking_message_continuation_lines(self):
        """Continuation lines are joined until the next footer."""
        message = (
            "refactor: new storage layout\n"
            "\n"
            "BREAKING CHANGE: data files move to a new directory\n"
            "and must be migrated by hand\n"
            "Refs: #12"
        )
        entry = parse_commit(message)

        assert entry.breaking_message == (
            "data files move to a new directory and must be migrated by hand"
        )
        assert entry.footers["Refs"] == "#12"

    def test_breaking_marker_only_in_body(self):
        """The breaking pattern is not searched for in the header."""
        entry = parse_commit("docs: explain BREAKING CHANGE: usage")

        assert not entry.breaking

    def test_custom_breaking_pattern(self):
        entry = parse_commit("feat: x\n\nBREAKS: everything", breaking_pattern=r"BREAKS:")

        assert entry.breaking
        assert entry.breaking_message == "everything"

    def test_parse_non_conventional(self):
        """Non-conventional messages yield None."""
        assert parse_commit("Updated the readme file") is None

    @pytest.mark.parametrize(
        "message",
        ["", "   ", "feat:", "feat:    ", "Merge branch 'main'", "feat add thing", ": no type"],
    )
    def test_parse_rejects(self, message: str):
        assert parse_commit(message) is None

    @pytest.mark.parametrize(
        "message",
        [
            "feat(api: add thing",
            "feat(): add thing",
            "feat(a)(b): add thing",
            "feat((a)): add thing",
        ],
    )
    def test_malformed_scope_is_no_scope(self, message: str):
        """Bad scope syntax never fails the parse."""
        entry = parse_commit(message)

        assert entry is not None
        assert entry.type == "feat"
        assert entry.scope is None
        assert entry.subject == "add thing"

    def test_scope_with_colon(self):
        """A closed scope may contain colons without eating the subject."""
        entry = parse_commit("feat(a:b): x")

        assert entry.scope == "a:b"
        assert entry.subject == "x"

    @pytest.mark.parametrize(
        ("message", "commit_type", "subject"),
        [
            ("feat: add login", "feat", "add login"),
            ("fix: null pointer in parser", "fix", "null pointer in parser"),
            ("  build: pin setuptools  ", "build", "pin setuptools"),
            ("Feat: Keep Case", "Feat", "Keep Case"),
            ("chore:no space", "chore", "no space"),
            ("docs: colons: are fine", "docs", "colons: are fine"),
        ],
    )
    def test_type_and_subject_preserved(self, message: str, commit_type: str, subject: str):
        """Type and subject come back exactly, apart from trimming."""
        entry = parse_commit(message)

        assert entry.type == commit_type
        assert entry.subject == subject

    def test_sha_and_raw(self):
        message = "fix: crash\n\nLonger explanation."
        entry = parse_commit(message, "abc123")

        assert entry.sha == "abc123"
        assert entry.raw == message
        assert entry.body == "Longer explanation."

    def test_footers(self):
        """Trailers of the last paragraph are collected."""
        message = "fix: crash\n\nSome context.\n\nReviewed-by: Alice\nCloses #7"
        entry = parse_commit(message)

        assert dict(entry.footers) == {"Reviewed-by": "Alice", "Closes": "7"}

    def test_no_footers_when_last_paragraph_is_prose(self):
        entry = parse_commit("fix: crash\n\nJust an explanation here.")

        assert dict(entry.footers) == {}

    def test_issue_pattern(self):
        """The configured issue pattern extracts an issue reference."""
        entry = parse_commit("fix: crash on start\n\nCloses #42", issue_pattern=r"#(\d+)")

        assert entry.issue == "42"

    def test_issue_pattern_without_group(self):
        entry = parse_commit("fix(PROJ-9): crash", issue_pattern=r"PROJ-\d+")

        assert entry.issue == "PROJ-9"

    def test_entry_is_immutable(self):
        entry = parse_commit("feat: add new feature")

        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.subject = "changed"  # type: ignore[misc]


class TestParseCommits:
    """Tests for parse_commits()."""

    def test_drops_non_conventional(self, sample_messages: list[str]):
        """Non-conventional messages are dropped, order is kept."""
        entries = parse_commits(sample_messages)

        assert [entry.type for entry in entries] == ["feat", "fix", "docs", "chore", "feat"]
        assert all(isinstance(entry, CommitEntry) for entry in entries)

    def test_uses_config(self):
        """Breaking and issue patterns come from the config."""
        config = CommitsConfig(breaking_pattern=r"INCOMPATIBLE:", issue_pattern=r"#(\d+)")
        entries = parse_commits(["feat: x\n\nINCOMPATIBLE: y\nRefs #3"], config)

        assert entries[0].breaking
        assert entries[0].breaking_message == "y"
        assert entries[0].issue == "3"

    def test_unknown_types_are_kept(self):
        """Well-formed commits with unknown types survive parsing."""
        entries = parse_commits(["wip: half done", "fix: done"])

        assert [entry.type for entry in entries] == ["wip", "fix"]


class TestGetBreakingChanges:
    """Tests for get_breaking_changes()."""

    def test_get_breaking_changes(self, sample_messages: list[str]):
        """Get only breaking change commits."""
        breaking = get_breaking_changes(parse_commits(sample_messages))

        assert len(breaking) == 1
        assert breaking[0].breaking
        assert breaking[0].breaking_message == "the /v1 routes are removed"


class TestGroupCommitsByType:
    """Tests for group_commits_by_type()."""

    def test_group_by_type(self, sample_messages: list[str]):
        """Group commits by their type."""
        grouped = group_commits_by_type(parse_commits(sample_messages))

        assert set(grouped) == {"feat", "fix", "docs", "chore"}
        assert len(grouped["feat"]) == 2


# =============================================================================
# Skip Release Marker Tests
# =============================================================================


class TestFilterSkipReleaseCommits:
    """Tests for filter_skip_release_commits()."""

    def test_filter_with_skip_release_marker(self):
        """Commits with [skip release] are filtered out."""
        messages = ["feat: add feature", "fix: bug fix [skip release]", "docs: update readme"]
        filtered = filter_skip_release_commits(messages, ["[skip release]"])

        assert filtered == ["feat: add feature", "docs: update readme"]

    def test_filter_case_insensitive(self):
        """Skip markers are matched case-insensitively."""
        messages = [
            "feat: add feature [SKIP RELEASE]",
            "fix: bug fix [Skip Release]",
            "docs: update readme",
        ]
        filtered = filter_skip_release_commits(messages, ["[skip release]"])

        assert filtered == ["docs: update readme"]

    def test_filter_multiple_patterns(self):
        """Multiple skip patterns are all respected."""
        messages = [
            "feat: add feature [skip release]",
            "fix: bug fix [no release]",
            "docs: update readme [release skip]",
            "chore: cleanup",
        ]
        patterns = ["[skip release]", "[no release]", "[release skip]"]

        assert filter_skip_release_commits(messages, patterns) == ["chore: cleanup"]

    def test_filter_empty_patterns_returns_all(self):
        """Empty patterns list returns all commits."""
        messages = ["feat: add feature [skip release]", "fix: bug fix"]

        assert filter_skip_release_commits(messages, []) == messages

    def test_filter_marker_in_body(self):
        """Skip markers in commit body are also detected."""
        messages = ["feat: add feature\n\nSome details [skip release]", "fix: bug fix"]

        assert filter_skip_release_commits(messages, ["[skip release]"]) == ["fix: bug fix"]

    def test_has_skip_release_marker(self):
        assert has_skip_release_marker("fix: x [No Release]", ["[no release]"])
        assert not has_skip_release_marker("fix: x", ["[no release]"])
