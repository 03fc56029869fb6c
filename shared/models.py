"""
Data models for gitlint.

This module provides:
- The immutable commit record and its derived accessors
- The commit author
- The issue record produced by lint rules
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SHORT_ID_LENGTH = 7


class Author(BaseModel):
    """Author of a commit."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Author name")
    email: str = Field(default="", description="Author email")


class Commit(BaseModel):
    """A single git commit."""

    # revalidation copies the record wherever it is nested, e.g. in an Issue
    model_config = ConfigDict(frozen=True, revalidate_instances="always")

    hash: str = Field(..., min_length=1, description="Full commit hash")
    message: str = Field(default="", description="Full commit message")
    date: datetime = Field(..., description="Authoring timestamp")
    num_parents: int = Field(default=0, ge=0, description="Number of parent commits")
    author: Optional[Author] = Field(default=None, description="Commit author")

    @property
    def id(self) -> str:
        """The commit's full hash."""
        return self.hash

    @property
    def short_id(self) -> str:
        """The short form of the commit hash."""
        if len(self.hash) < SHORT_ID_LENGTH:
            raise ValueError(
                f"Commit hash must be at least {SHORT_ID_LENGTH} characters: {self.hash!r}"
            )
        return self.hash[:SHORT_ID_LENGTH]

    @property
    def subject(self) -> str:
        """The message's subject line."""
        return self.message.split("\n")[0]

    @property
    def body(self) -> str:
        """
        The message body: everything after the first blank line.

        Paragraphs are joined without the blank lines that separated them.
        """
        parts = self.message.split("\n\n")
        if len(parts) > 1:
            return "".join(parts[1:])
        return ""


class Issue(BaseModel):
    """A rule violation found in one commit."""

    model_config = ConfigDict(frozen=True)

    desc: str = Field(..., description="Description of the violated rule")
    commit: Commit = Field(..., description="The offending commit")

    @field_validator('desc')
    @classmethod
    def validate_desc(cls, v):
        if not v:
            raise ValueError('Issue description cannot be empty')
        return v


__all__ = ['Author', 'Commit', 'Issue', 'SHORT_ID_LENGTH']
