"""
Issue collection and reporting.
"""

import logging
from typing import Iterable, List, TextIO

from shared.commits import CommitSource
from shared.exceptions import ReportWriteError
from shared.models import Issue
from shared.rules import Rule

logger = logging.getLogger(__name__)


def collected(rules: Iterable[Rule], source: CommitSource) -> List[Issue]:
    """
    Apply every rule to every commit of ``source``.

    Issues are returned in discovery order: for each commit in source order,
    for each rule in list order. A commit may produce one issue per rule.
    """
    rules = list(rules)
    issues = []

    for commit in source():
        for rule in rules:
            issue = rule(commit)
            if issue is not None:
                issues.append(issue)

    logger.debug(f"Collected {len(issues)} issues")
    return issues


def printed(writer: TextIO, separator: str, issues: Iterable[Issue]) -> None:
    """
    Write ``"<short id>: <desc><separator>"`` for each issue to ``writer``.

    The separator follows every issue, including the last one. Every line is
    rendered before the first write, so an unprintable issue leaves the
    writer untouched.
    """
    lines = []
    for issue in issues:
        try:
            short_id = issue.commit.short_id
        except ValueError as e:
            raise ReportWriteError(f"Cannot report commit: {e}") from e
        lines.append(f"{short_id}: {issue.desc}{separator}")

    for line in lines:
        try:
            writer.write(line)
        except (OSError, ValueError) as e:
            # ValueError is what a closed stream raises
            raise ReportWriteError(f"Cannot write report: {e}") from e


__all__ = ['collected', 'printed']
