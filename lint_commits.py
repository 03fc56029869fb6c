#!/usr/bin/env python3
"""
gitlint - commit message linter.

Usage:
    python lint_commits.py [OPTIONS]

Examples:
    python lint_commits.py                                  # Lint the current repository
    python lint_commits.py --path /path/to/repo --since 2019-01-01
    python lint_commits.py --subject-maxlen 50 --excl-author-names "bot$"
    python lint_commits.py --msg-file .git/COMMIT_EDITMSG  # From a commit-msg hook
"""

from services.commit_linter.cli import main

if __name__ == "__main__":
    main()
