"""
Commit sources and the filters that narrow them.

A commit source is a zero-argument, re-invocable producer of an ordered list
of commits. Filters are decorators: each wraps an upstream source and, on
every call, re-reads the upstream exactly once and keeps the commits its
predicate accepts, in upstream order. Nothing is cached between calls.

Example:
    >>> source = WithMaxParents(1, Since("2019-01-01", RepositoryCommits(filesystem("."))))
    >>> commits = source()
"""

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import BinaryIO, Callable, Iterable, List, Pattern

from git import GitCommandError

from shared.exceptions import InvalidFilterError, RepositoryError
from shared.models import Author, Commit
from shared.repository import Repository

logger = logging.getLogger(__name__)

# Hash given to the synthetic commit built from a message file
FAKE_HASH = "fakehsh"

# Date format accepted by Since
DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

Predicate = Callable[[Commit], bool]


class CommitSource(ABC):
    """Re-invocable producer of an ordered list of commits."""

    @abstractmethod
    def commits(self) -> List[Commit]:
        """Produce a fresh list of commits."""

    def __call__(self) -> List[Commit]:
        return self.commits()


class StaticCommits(CommitSource):
    """Serves a fixed list of commits."""

    def __init__(self, commits: Iterable[Commit]):
        self._commits = list(commits)

    def commits(self) -> List[Commit]:
        return list(self._commits)


class RepositoryCommits(CommitSource):
    """The linear history reachable from a repository's HEAD."""

    def __init__(self, repository: Repository):
        self.repository = repository

    def commits(self) -> List[Commit]:
        repo = self.repository()

        try:
            head = repo.head.commit
        except (ValueError, GitCommandError) as e:
            raise RepositoryError(f"Cannot resolve HEAD: {e}") from e

        try:
            commits = [self._to_commit(c) for c in repo.iter_commits(head)]
        except GitCommandError as e:
            raise RepositoryError(f"Git command error: {e}") from e

        logger.debug(f"Read {len(commits)} commits from {head.hexsha}")
        return commits

    @staticmethod
    def _to_commit(git_commit) -> Commit:
        return Commit(
            hash=git_commit.hexsha,
            message=git_commit.message,
            date=git_commit.authored_datetime,
            num_parents=len(git_commit.parents),
            author=Author(
                name=git_commit.author.name or "",
                email=git_commit.author.email or "",
            ),
        )


class MessageCommits(CommitSource):
    """
    A single synthetic commit whose message is read from a stream.

    Used to lint a commit message before the commit exists, e.g. from a
    ``commit-msg`` hook. The commit gets a placeholder hash and the current
    time as its date.
    """

    def __init__(self, reader: BinaryIO):
        self.reader = reader

    def commits(self) -> List[Commit]:
        try:
            data = self.reader.read()
        except OSError as e:
            raise RepositoryError(f"Cannot read commit message: {e}") from e

        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")

        return [
            Commit(
                hash=FAKE_HASH,
                message=data,
                date=datetime.now(timezone.utc),
            )
        ]


class FilteredCommits(CommitSource):
    """Keeps the upstream commits accepted by ``predicate``, in order."""

    def __init__(self, upstream: CommitSource, predicate: Predicate):
        self.upstream = upstream
        self.predicate = predicate

    def commits(self) -> List[Commit]:
        commits = self.upstream()
        kept = [c for c in commits if self.predicate(c)]
        logger.debug(f"{type(self).__name__} kept {len(kept)} of {len(commits)} commits")
        return kept


class Since(FilteredCommits):
    """Commits authored on or after a date (format: yyyy-MM-dd)."""

    def __init__(self, date: str, upstream: CommitSource):
        try:
            # strptime alone accepts unpadded fields such as 2019-6-1
            if not DATE_PATTERN.fullmatch(date):
                raise ValueError(f"{date!r} is not zero-padded yyyy-MM-dd")
            parsed = datetime.strptime(date, DATE_FORMAT)
        except (TypeError, ValueError) as e:
            raise InvalidFilterError(
                f"Invalid date {date!r}, expected format yyyy-MM-dd"
            ) from e
        self.start = parsed.replace(tzinfo=timezone.utc)
        super().__init__(upstream, self._authored_since)

    def _authored_since(self, commit: Commit) -> bool:
        date = commit.date
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return date >= self.start


def compile_patterns(patterns: Iterable[str]) -> List[Pattern]:
    """Compile regular expressions, failing on the first malformed one."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise InvalidFilterError(f"Invalid regular expression {pattern!r}: {e}") from e
    return compiled


def _matches_any(patterns: List[Pattern], value: str) -> bool:
    return any(p.search(value) for p in patterns)


class NotAuthoredByNames(FilteredCommits):
    """Drops commits whose author name matches any of the patterns."""

    def __init__(self, patterns: Iterable[str], upstream: CommitSource):
        self.patterns = compile_patterns(patterns)
        super().__init__(upstream, self._not_excluded)

    def _not_excluded(self, commit: Commit) -> bool:
        if commit.author is None:
            return True
        return not _matches_any(self.patterns, commit.author.name)


class NotAuthoredByEmails(FilteredCommits):
    """Drops commits whose author email matches any of the patterns."""

    def __init__(self, patterns: Iterable[str], upstream: CommitSource):
        self.patterns = compile_patterns(patterns)
        super().__init__(upstream, self._not_excluded)

    def _not_excluded(self, commit: Commit) -> bool:
        if commit.author is None:
            return True
        return not _matches_any(self.patterns, commit.author.email)


class WithMaxParents(FilteredCommits):
    """
    Commits with at most ``n`` parents.

    ``WithMaxParents(1, ...)`` excludes merge commits.
    """

    def __init__(self, n: int, upstream: CommitSource):
        self.max_parents = n
        super().__init__(upstream, self._within_max)

    def _within_max(self, commit: Commit) -> bool:
        return commit.num_parents <= self.max_parents


__all__ = [
    'CommitSource', 'StaticCommits', 'RepositoryCommits', 'MessageCommits',
    'FilteredCommits', 'Since', 'NotAuthoredByNames', 'NotAuthoredByEmails',
    'WithMaxParents', 'compile_patterns', 'FAKE_HASH', 'DATE_FORMAT',
]
