"""
Unit tests for the Commit Linter Service.

This module tests:
- Pipeline assembly from settings
- Issue collection and reporting
- Message file linting
- Fatal error handling
"""

import io
import pytest
from datetime import datetime, timezone
from unittest.mock import patch

from config.settings import LintSettings
from services.commit_linter.main import CommitLinterService
from shared.commits import (
    StaticCommits, MessageCommits, RepositoryCommits,
    Since, NotAuthoredByNames, NotAuthoredByEmails, WithMaxParents,
)
from shared.exceptions import InvalidFilterError, RepositoryError
from shared.models import Author, Commit


@pytest.fixture
def history():
    """Repository history, newest first."""
    return [
        Commit(
            hash="18045269d8d2fd8f53d01883c6c7b548d0b9e3ae",
            message="Add a much too long subject line",
            date=datetime(2019, 6, 3, tzinfo=timezone.utc),
            num_parents=1,
            author=Author(name="Alice", email="alice@example.com"),
        ),
        Commit(
            hash="4be918ff8bfc91de77a1462707a8d2eb30956f93",
            message="Merge branch 'feature' into master",
            date=datetime(2019, 6, 2, tzinfo=timezone.utc),
            num_parents=2,
            author=Author(name="Alice", email="alice@example.com"),
        ),
        Commit(
            hash="9f2c1b7a3e5d4c6b8a0f1e2d3c4b5a6978877665",
            message="Bump dependency to a much newer version",
            date=datetime(2019, 6, 1, tzinfo=timezone.utc),
            num_parents=1,
            author=Author(name="dependabot[bot]", email="bot@example.com"),
        ),
        Commit(
            hash="0a1b2c3d4e5f60718293a4b5c6d7e8f901234567",
            message="Fix\n\nShort subject with a body",
            date=datetime(2019, 5, 1, tzinfo=timezone.utc),
            num_parents=1,
            author=Author(name="Bob", email="bob@example.com"),
        ),
    ]


@pytest.fixture
def repository(history):
    """Replace the repository reader with the in-memory history."""
    with patch(
        'services.commit_linter.main.RepositoryCommits',
        side_effect=lambda repo: StaticCommits(history),
    ) as mock_repository:
        yield mock_repository


class TestCommitLinterService:
    """Test cases for CommitLinterService."""

    def test_build_source_chain(self):
        service = CommitLinterService(LintSettings(path="/path/to/repo"))

        source = service.build_source()

        assert isinstance(source, WithMaxParents)
        assert isinstance(source.upstream, NotAuthoredByNames)
        assert isinstance(source.upstream.upstream, NotAuthoredByEmails)
        assert isinstance(source.upstream.upstream.upstream, Since)
        assert isinstance(source.upstream.upstream.upstream.upstream, RepositoryCommits)

    def test_build_source_for_message_file(self, tmp_path):
        service = CommitLinterService(LintSettings(msg_file=str(tmp_path / "COMMIT_EDITMSG")))

        assert isinstance(service.build_source(io.BytesIO(b"msg")), MessageCommits)

    def test_build_source_for_message_file_needs_reader(self, tmp_path):
        service = CommitLinterService(LintSettings(msg_file=str(tmp_path / "COMMIT_EDITMSG")))

        with pytest.raises(ValueError, match="reader is required"):
            service.build_source()

    def test_build_rules_order(self):
        service = CommitLinterService(LintSettings(subject_regex="^x", body_regex="^y"))
        commit = Commit(
            hash="abcdef0",
            message="a\n\nb",
            date=datetime.now(timezone.utc),
        )

        descs = [rule(commit) for rule in service.build_rules()]

        assert [d.desc if d else None for d in descs] == [
            "subject does not match regex [^x]",
            None,
            None,
            "body does not conform to regex [^y]",
            None,
        ]

    def test_clean_history(self, repository):
        writer = io.StringIO()

        issues = CommitLinterService(LintSettings()).run(writer)

        assert issues == []
        assert writer.getvalue() == ""

    def test_run_reports_issues(self, repository):
        settings = LintSettings(subject_maxlen=20, subject_minlen=4)
        writer = io.StringIO()

        issues = CommitLinterService(settings).run(writer)

        # the merge commit is skipped by the default max_parents=1
        assert writer.getvalue() == (
            "1804526: subject length exceeds max [20]\n"
            "9f2c1b7: subject length exceeds max [20]\n"
            "0a1b2c3: subject length less than min [4]\n"
        )
        assert len(issues) == 3

    def test_one_commit_many_issues(self, repository):
        settings = LintSettings(
            subject_maxlen=2, subject_minlen=4, body_regex="^Signed", since="2019-05-02",
            excl_author_names="bot",
        )
        writer = io.StringIO()

        CommitLinterService(settings).run(writer)

        assert writer.getvalue() == (
            "1804526: subject length exceeds max [2]\n"
            "1804526: body does not conform to regex [^Signed]\n"
        )

    def test_filters_applied(self, repository):
        settings = LintSettings(
            subject_maxlen=0,
            since="2019-06-01",
            max_parents=2,
            excl_author_names=r"\[bot\]",
            excl_author_emails="bob@",
        )

        issues = CommitLinterService(settings).lint()

        assert [i.commit.short_id for i in issues] == ["1804526", "4be918f"]

    def test_custom_separator(self, repository):
        settings = LintSettings(subject_minlen=4, separator="|")
        writer = io.StringIO()

        CommitLinterService(settings).run(writer)

        assert writer.getvalue() == "0a1b2c3: subject length less than min [4]|"

    def test_message_file(self, tmp_path, repository):
        msg_file = tmp_path / "COMMIT_EDITMSG"
        msg_file.write_bytes(b"wip\n\nsome details")
        settings = LintSettings(msg_file=str(msg_file), subject_minlen=5)
        writer = io.StringIO()

        issues = CommitLinterService(settings).run(writer)

        assert writer.getvalue() == "fakehsh: subject length less than min [5]\n"
        assert len(issues) == 1
        repository.assert_not_called()

    def test_missing_message_file(self, tmp_path):
        settings = LintSettings(msg_file=str(tmp_path / "missing"))

        with pytest.raises(RepositoryError, match="Cannot open message file"):
            CommitLinterService(settings).lint()

    def test_invalid_regex_aborts_before_reading(self, repository):
        writer = io.StringIO()

        with pytest.raises(InvalidFilterError):
            CommitLinterService(LintSettings(subject_regex="(")).run(writer)

        assert writer.getvalue() == ""
        repository.assert_not_called()

    def test_invalid_since_aborts(self, repository):
        writer = io.StringIO()

        with pytest.raises(InvalidFilterError):
            CommitLinterService(LintSettings(since="June 1st")).run(writer)

        assert writer.getvalue() == ""

    def test_repository_failure_writes_nothing(self):
        writer = io.StringIO()

        with patch.object(StaticCommits, 'commits', side_effect=RepositoryError("no HEAD")):
            with patch(
                'services.commit_linter.main.RepositoryCommits',
                side_effect=lambda repo: StaticCommits([]),
            ):
                with pytest.raises(RepositoryError):
                    CommitLinterService(LintSettings()).run(writer)

        assert writer.getvalue() == ""
