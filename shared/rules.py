"""
Lint rules.

A rule maps one commit to an Issue, or to None when the commit complies.
Patterns are compiled when the rule is built, so a malformed pattern fails
before any commit is read.
"""

from typing import Callable, Optional

from shared.commits import compile_patterns
from shared.models import Commit, Issue

Rule = Callable[[Commit], Optional[Issue]]


def subject_regex(pattern: str) -> Rule:
    """Subject line must match ``pattern``."""
    (compiled,) = compile_patterns([pattern])

    def rule(commit: Commit) -> Optional[Issue]:
        if compiled.search(commit.subject):
            return None
        return Issue(desc=f"subject does not match regex [{pattern}]", commit=commit)

    return rule


def subject_max_length(max_length: int) -> Rule:
    """Subject line must be at most ``max_length`` characters."""

    def rule(commit: Commit) -> Optional[Issue]:
        if len(commit.subject) > max_length:
            return Issue(desc=f"subject length exceeds max [{max_length}]", commit=commit)
        return None

    return rule


def subject_min_length(min_length: int) -> Rule:
    """Subject line must be at least ``min_length`` characters."""

    def rule(commit: Commit) -> Optional[Issue]:
        if len(commit.subject) < min_length:
            return Issue(desc=f"subject length less than min [{min_length}]", commit=commit)
        return None

    return rule


def body_regex(pattern: str) -> Rule:
    """Message body must match ``pattern``."""
    (compiled,) = compile_patterns([pattern])

    def rule(commit: Commit) -> Optional[Issue]:
        if compiled.search(commit.body):
            return None
        return Issue(desc=f"body does not conform to regex [{pattern}]", commit=commit)

    return rule


def body_max_length(max_length: int) -> Rule:
    """Message body must be at most ``max_length`` characters."""

    def rule(commit: Commit) -> Optional[Issue]:
        if len(commit.body) > max_length:
            return Issue(desc=f"body length exceeds max [{max_length}]", commit=commit)
        return None

    return rule


__all__ = [
    'Rule', 'subject_regex', 'subject_max_length', 'subject_min_length',
    'body_regex', 'body_max_length',
]
