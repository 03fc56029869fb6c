"""
Access to git repositories on disk.
"""

import logging
from typing import Callable

from git import Repo, InvalidGitRepositoryError, NoSuchPathError

from shared.exceptions import RepositoryError

logger = logging.getLogger(__name__)

# Zero-argument factory that opens a repository
Repository = Callable[[], Repo]


def filesystem(path: str) -> Repository:
    """Return a factory for the git repository at ``path``."""

    def open_repository() -> Repo:
        try:
            repo = Repo(path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RepositoryError(f"Invalid Git repository: {path}") from e
        logger.debug(f"Opened repository at {repo.working_dir}")
        return repo

    return open_repository


__all__ = ['Repository', 'filesystem']
