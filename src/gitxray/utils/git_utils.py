"""Repository discovery helpers for gitxray."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Custom exception for Git-related errors."""


def get_repo_root(path: Path | None = None) -> Path:
    """Find the root of the repository containing a path.

    Walks up from ``path`` until a directory holding a ``.git`` directory is
    found. Only the file system is consulted, git itself is never invoked.

    Args:
        path: Optional path to start searching from (defaults to cwd)

    Returns:
        Path to repository root

    Raises:
        GitError: If no enclosing repository exists
    """
    start = (path or Path.cwd()).resolve()
    if start.is_file():
        start = start.parent

    for candidate in (start, *start.parents):
        if (candidate / ".git").is_dir():
            return candidate

    msg = f"Not in a Git repository: {start}"
    raise GitError(msg)


def validate_repo_path(path: Path | None = None) -> Path | None:
    """Validate and return the repository path.

    Args:
        path: Optional path to validate (defaults to current directory)

    Returns:
        Path to the repository root if valid, None otherwise
    """
    try:
        return get_repo_root(path)
    except GitError:
        logger.debug("No repository found for %s", path)
        return None
