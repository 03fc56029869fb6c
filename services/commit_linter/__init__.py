"""
Commit Linter Service for gitlint.

This service is responsible for:
- Reading commits from a repository or a pending commit message
- Narrowing them with date, author and merge filters
- Checking subject and body rules against every commit
- Reporting the issues found
"""

__version__ = "1.0.0"
__author__ = "gitlint Team"
__description__ = "Git commit message linting service"
