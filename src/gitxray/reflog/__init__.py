"""HEAD reflog parsing and ghost commit detection."""

from gitxray.reflog.ghosts import (
	find_ghost_candidates,
	find_ghosts,
	recovery_branch_name,
	recovery_command,
)
from gitxray.reflog.models import UNKNOWN_ACTION, ZERO_OID, ReflogEntry
from gitxray.reflog.parser import (
	parse_reflog,
	parse_reflog_history,
	parse_reflog_line,
	read_reflog_history,
)

__all__ = [
	"UNKNOWN_ACTION",
	"ZERO_OID",
	"ReflogEntry",
	"find_ghost_candidates",
	"find_ghosts",
	"parse_reflog",
	"parse_reflog_history",
	"parse_reflog_line",
	"read_reflog_history",
	"recovery_branch_name",
	"recovery_command",
]
