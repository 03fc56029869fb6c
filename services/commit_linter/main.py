"""
Commit Linter Service for gitlint.

Wires the lint pipeline from settings: a commit source narrowed through the
configured filters, the built-in rules, the issue collector and the report
writer. Configuration and I/O errors are fatal and abort the run before any
report is written.
"""

import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, TextIO

from config.settings import LintSettings
from shared.commits import (
    CommitSource, RepositoryCommits, MessageCommits,
    Since, NotAuthoredByNames, NotAuthoredByEmails, WithMaxParents,
)
from shared.exceptions import RepositoryError
from shared.issues import collected, printed
from shared.models import Issue
from shared.repository import filesystem
from shared.rules import (
    Rule, subject_regex, subject_max_length, subject_min_length,
    body_regex, body_max_length,
)

logger = logging.getLogger(__name__)


class CommitLinterService:
    """Core commit linting service."""

    def __init__(self, settings: LintSettings):
        self.settings = settings

    def build_source(self, reader: Optional[BinaryIO] = None) -> CommitSource:
        """
        Build the commit source.

        With a message file configured, ``reader`` must be the opened file and
        the source is its single synthetic commit. Otherwise the repository
        history is narrowed by date, author emails, author names and parent
        count.
        """
        if self.settings.msg_file:
            if reader is None:
                raise ValueError("A reader is required when msg_file is set")
            return MessageCommits(reader)

        return WithMaxParents(
            self.settings.max_parents,
            NotAuthoredByNames(
                self.settings.author_name_patterns,
                NotAuthoredByEmails(
                    self.settings.author_email_patterns,
                    Since(
                        self.settings.since,
                        RepositoryCommits(filesystem(self.settings.path)),
                    ),
                ),
            ),
        )

    def build_rules(self) -> List[Rule]:
        """Build the lint rules in reporting order."""
        return [
            subject_regex(self.settings.subject_regex),
            subject_max_length(self.settings.subject_maxlen),
            subject_min_length(self.settings.subject_minlen),
            body_regex(self.settings.body_regex),
            body_max_length(self.settings.body_maxlen),
        ]

    def lint(self) -> List[Issue]:
        """Collect every issue of the configured commits."""
        rules = self.build_rules()

        if self.settings.msg_file:
            msg_path = Path(self.settings.msg_file)
            try:
                reader = msg_path.open("rb")
            except OSError as e:
                raise RepositoryError(f"Cannot open message file {msg_path}: {e}") from e
            with reader:
                issues = collected(rules, self.build_source(reader))
        else:
            issues = collected(rules, self.build_source())

        logger.info(f"Found {len(issues)} issues")
        return issues

    def run(self, writer: TextIO) -> List[Issue]:
        """Lint, then write the report. Nothing is written if linting fails."""
        issues = self.lint()
        printed(writer, self.settings.separator, issues)
        return issues


__all__ = ['CommitLinterService']
