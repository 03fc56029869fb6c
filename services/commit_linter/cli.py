#!/usr/bin/env python3
"""
gitlint CLI

Lints the commit messages of a git repository, or a single pending commit
message, and prints one line per issue found.

Arguments are read from a .gitlint file in the working directory, one per
line, before the command line's own; flags on the command line win.

Exit codes:
    0  no issues
    1  issues found
    2  fatal error (bad configuration, unreadable repository, write failure)
"""

import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from config.settings import load_settings, load_config_args, configure_logging
from services.commit_linter.main import CommitLinterService
from shared.exceptions import (
    ConfigurationError, GitLintError, InvalidFilterError, RepositoryError, ReportWriteError
)

logger = logging.getLogger(__name__)

EXIT_ISSUES = 1
EXIT_FATAL = 2


class CommitLinterCLI:
    """CLI interface for commit linting."""

    def __init__(self, console: Optional[Console] = None):
        # stdout carries the report
        self.console = console or Console(stderr=True)

    def suggestion_for(self, error: GitLintError) -> str:
        if isinstance(error, ConfigurationError):
            return "Check the GITLINT_* environment variables and your .env file"
        if isinstance(error, InvalidFilterError):
            return "Check the date (yyyy-MM-dd) and regular expressions in your flags or .gitlint"
        if isinstance(error, RepositoryError):
            return "Make sure --path points to a Git repository with at least one commit"
        if isinstance(error, ReportWriteError):
            return "Make sure the output stream is open and writable"
        return ""

    def display_error_message(self, error: str, suggestion: str = ""):
        """Display error message with helpful suggestions."""
        error_text = Text()
        error_text.append("Error: ", style="red")
        error_text.append(f"{error}\n", style="white")

        if suggestion:
            error_text.append("Suggestion: ", style="yellow")
            error_text.append(suggestion, style="white")

        panel = Panel(error_text, title="gitlint", border_style="red")
        self.console.print(panel)


cli = CommitLinterCLI()


def abort(error: GitLintError):
    """Report a fatal error on stderr and exit with EXIT_FATAL."""
    logger.error(f"Lint aborted: {error}")
    cli.display_error_message(str(error), cli.suggestion_for(error))
    sys.exit(EXIT_FATAL)


@click.command(name="gitlint")
@click.option(
    '--path',
    help='Path to the git repo (default: ".")',
    type=click.Path(file_okay=False, dir_okay=True)
)
@click.option(
    '--subject-regex',
    help='Commit subject line must conform to this regular expression (default: ".*")'
)
@click.option(
    '--subject-maxlen',
    help='Max length for commit subject line',
    type=click.IntRange(min=0)
)
@click.option(
    '--subject-minlen',
    help='Min length for commit subject line (default: 0)',
    type=click.IntRange(min=0)
)
@click.option(
    '--body-regex',
    help='Commit message body must conform to this regular expression (default: ".*")'
)
@click.option(
    '--body-maxlen',
    help='Max length for commit body',
    type=click.IntRange(min=0)
)
@click.option(
    '--since',
    help='A date in "yyyy-MM-dd" format starting from which commits will be analyzed '
         '(default: "1970-01-01")'
)
@click.option(
    '--msg-file',
    help='Only analyze the commit message found in this file',
    type=click.Path(dir_okay=False)
)
@click.option(
    '--max-parents',
    help='Max number of parents a commit can have in order to be analyzed (default: 1). '
         'Useful for excluding merge commits',
    type=click.IntRange(min=0)
)
@click.option(
    '--excl-author-names',
    help="Don't lint commits with authors whose names match these comma-separated "
         "regular expressions"
)
@click.option(
    '--excl-author-emails',
    help="Don't lint commits with authors whose emails match these comma-separated "
         "regular expressions"
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output'
)
def lint(
    path: Optional[str],
    subject_regex: Optional[str],
    subject_maxlen: Optional[int],
    subject_minlen: Optional[int],
    body_regex: Optional[str],
    body_maxlen: Optional[int],
    since: Optional[str],
    msg_file: Optional[str],
    max_parents: Optional[int],
    excl_author_names: Optional[str],
    excl_author_emails: Optional[str],
    verbose: bool
):
    """Lint git commit messages."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        abort(e)
    configure_logging(settings.monitoring, verbose)

    options = {
        "path": path,
        "subject_regex": subject_regex,
        "subject_maxlen": subject_maxlen,
        "subject_minlen": subject_minlen,
        "body_regex": body_regex,
        "body_maxlen": body_maxlen,
        "since": since,
        "msg_file": msg_file,
        "max_parents": max_parents,
        "excl_author_names": excl_author_names,
        "excl_author_emails": excl_author_emails,
    }
    lint_settings = settings.lint.model_copy(
        update={k: v for k, v in options.items() if v is not None}
    )

    service = CommitLinterService(lint_settings)
    try:
        issues = service.run(sys.stdout)
    except GitLintError as e:
        abort(e)

    if issues:
        sys.exit(EXIT_ISSUES)


def main():
    """Run gitlint with the .gitlint arguments ahead of the command line's."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        abort(e)
    args = load_config_args(settings.config_file) + sys.argv[1:]
    lint.main(args=args, prog_name="gitlint")


if __name__ == "__main__":
    main()
