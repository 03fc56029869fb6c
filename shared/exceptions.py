"""
Error hierarchy for gitlint.

Every error raised here is fatal to a lint run: the assembler aborts before
any report is printed.
"""


class GitLintError(Exception):
    """Base class for fatal gitlint errors."""


class InvalidFilterError(GitLintError, ValueError):
    """A filter or rule was configured with a malformed date or pattern."""


class ConfigurationError(GitLintError):
    """Settings from the environment or .env file failed validation."""


class RepositoryError(GitLintError):
    """The repository or commit message could not be read."""


class ReportWriteError(GitLintError):
    """The report could not be written to its output sink."""


__all__ = [
    'GitLintError', 'InvalidFilterError', 'ConfigurationError', 'RepositoryError', 'ReportWriteError'
]
