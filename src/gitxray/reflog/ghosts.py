"""
Ghost commit detection.

A ghost is a commit that HEAD pointed to at some point. Every distinct
``new_oid`` in the reflog counts as a candidate, so commits that are still
reachable from a branch are listed too. Telling them apart would need a
reachability walk from every ref, which is not done here.

"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from collections.abc import Iterable

	from gitxray.reflog.models import ReflogEntry

DEFAULT_BRANCH_PREFIX = "recovered"
SHORT_OID_LENGTH = 7


def find_ghosts(entries: Iterable[ReflogEntry]) -> list[ReflogEntry]:
	"""
	Keep the first entry for each distinct ``new_oid``.

	Args:
	    entries: Reflog entries, most recent first

	Returns:
	    One entry per commit HEAD has pointed to, in the input order

	"""
	seen: set[str] = set()
	ghosts: list[ReflogEntry] = []
	for entry in entries:
		if entry.new_oid in seen:
			continue
		seen.add(entry.new_oid)
		ghosts.append(entry)
	return ghosts


def recovery_branch_name(oid: str, prefix: str = DEFAULT_BRANCH_PREFIX, now: float | None = None) -> str:
	"""Suggest a branch name for bringing a ghost commit back."""
	timestamp = int(time.time() if now is None else now)
	return f"{prefix}-{oid[:SHORT_OID_LENGTH]}-{timestamp}"


def recovery_command(oid: str, prefix: str = DEFAULT_BRANCH_PREFIX, now: float | None = None) -> str:
	"""Return the git command that would recover a ghost commit. It is never run here."""
	return f"git checkout -b {recovery_branch_name(oid, prefix, now)} {oid}"


find_ghost_candidates = find_ghosts
