"""Utility module for gitxray package."""

from .cli_utils import console, exit_with_error, show_error
from .git_utils import GitError, get_repo_root, validate_repo_path

__all__ = [
	"GitError",
	"console",
	"exit_with_error",
	"get_repo_root",
	"show_error",
	"validate_repo_path",
]
