"""
Configuration management for gitlint.

This module provides:
- Lint settings with the command line's defaults
- Logging settings
- Environment and .env overrides (GITLINT_ prefix)
- Loading of the .gitlint arguments file
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import BaseSettings as PydanticBaseSettings

from shared.exceptions import ConfigurationError

# Default for the length limits: effectively unlimited
MAX_LENGTH = 2**31 - 2

# Arguments file read from the working directory
CONFIG_FILE = ".gitlint"


class LintSettings(BaseSettings):
    """Commit selection and lint rule settings."""

    path: str = Field(default=".", description="Path to the git repository")
    subject_regex: str = Field(
        default=".*", description="Commit subject line must conform to this regular expression"
    )
    subject_maxlen: int = Field(
        default=MAX_LENGTH, ge=0, description="Max length for the commit subject line"
    )
    subject_minlen: int = Field(default=0, ge=0, description="Min length for the commit subject line")
    body_regex: str = Field(
        default=".*", description="Commit message body must conform to this regular expression"
    )
    body_maxlen: int = Field(default=MAX_LENGTH, ge=0, description="Max length for the commit body")
    since: str = Field(
        default="1970-01-01",
        description="A date in yyyy-MM-dd format starting from which commits are analyzed",
    )
    msg_file: Optional[str] = Field(
        default=None, description="Only analyze the commit message found in this file"
    )
    max_parents: int = Field(
        default=1, ge=0, description="Max number of parents a commit can have to be analyzed"
    )
    excl_author_names: str = Field(
        default="", description="Comma-separated regexes of author names to skip"
    )
    excl_author_emails: str = Field(
        default="", description="Comma-separated regexes of author emails to skip"
    )
    separator: str = Field(default="\n", description="Written after every reported issue")

    model_config = {
        "env_prefix": "GITLINT_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("msg_file")
    @classmethod
    def validate_msg_file(cls, v):
        return v or None

    @property
    def author_name_patterns(self) -> List[str]:
        return split_patterns(self.excl_author_names)

    @property
    def author_email_patterns(self) -> List[str]:
        return split_patterns(self.excl_author_emails)


class MonitoringSettings(BaseSettings):
    """Logging configuration settings."""

    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )

    model_config = {
        "env_prefix": "GITLINT_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class Settings(PydanticBaseSettings):
    """Main application settings."""

    app_name: str = Field(default="gitlint", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    config_file: str = Field(default=CONFIG_FILE, description="Arguments file")

    lint: LintSettings = Field(default_factory=LintSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    model_config = {
        "env_prefix": "GITLINT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Example:
        >>> settings = get_settings()
        >>> print(settings.lint.subject_regex)
    """
    return Settings()


def load_settings() -> Settings:
    """Get settings, raising ConfigurationError when they fail validation."""
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def split_patterns(value: str) -> List[str]:
    """Split a comma-separated list of regexes, dropping blank entries."""
    return [p.strip() for p in value.split(",") if p.strip()]


def load_config_args(path: str = CONFIG_FILE) -> List[str]:
    """
    Read command-line arguments from an arguments file.

    Each non-blank line holds one argument, e.g. ``--subject-maxlen=50``.
    A missing file yields no arguments.
    """
    config_path = Path(path)
    if not config_path.is_file():
        return []

    args = [line.strip() for line in config_path.read_text(encoding="utf-8").splitlines()]
    args = [arg for arg in args if arg]
    logging.getLogger(__name__).debug(f"Loaded {len(args)} arguments from {config_path}")
    return args


def configure_logging(monitoring: MonitoringSettings, verbose: bool = False) -> None:
    """Configure root logging on stderr; the report owns stdout."""
    level = logging.DEBUG if verbose else getattr(logging, monitoring.log_level)
    logging.basicConfig(level=level, format=monitoring.log_format)
    logging.getLogger().setLevel(level)
