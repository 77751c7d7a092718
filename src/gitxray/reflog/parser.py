"""
Parser for the HEAD reflog.

Each line of ``.git/logs/HEAD`` records one move of HEAD::

    <old-oid> <new-oid> <name> <<email>> <timestamp> <tz>\\t<action>: <message>

Lines that do not follow this shape are kept whenever the two leading oids
can be read, with ``action`` set to ``"unknown"``.

"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from gitxray.reflog.models import UNKNOWN_ACTION, ReflogEntry

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = "logs/HEAD"

HEADER_PATTERN = re.compile(
	r"^(?P<old>[0-9a-f]{40}) (?P<new>[0-9a-f]{40}) (?P<name>.*?) <(?P<email>[^>]*)> "
	r"(?P<timestamp>\d+) (?P<tz>[+-]\d{4})$"
)
ACTION_PATTERN = re.compile(r"^(?P<action>[^:\t]+):\s?(?P<message>.*)$")
OIDS_PATTERN = re.compile(r"^(?P<old>[0-9a-f]{40})\s+(?P<new>[0-9a-f]{40})\s*(?P<rest>.*)$")
IDENTITY_PATTERN = re.compile(r"^(?P<name>.*?)\s*<[^>]*>\s+(?P<timestamp>\d+)(?:\s+[+-]\d{4})?\s*(?P<tail>.*)$")


def _split_action(tail: str) -> tuple[str, str]:
	match = ACTION_PATTERN.match(tail)
	if not match:
		return UNKNOWN_ACTION, tail
	return match.group("action").strip(), match.group("message")


def _parse_loose_line(line: str) -> ReflogEntry | None:
	"""Pull what can be read positionally from a non-canonical line."""
	match = OIDS_PATTERN.match(line)
	if not match:
		return None

	rest = match.group("rest")
	identity = IDENTITY_PATTERN.match(rest)
	if identity:
		name = identity.group("name")
		timestamp = int(identity.group("timestamp"))
		message = identity.group("tail")
	else:
		name = ""
		timestamp = 0
		message = rest

	return ReflogEntry(
		old_oid=match.group("old"),
		new_oid=match.group("new"),
		author_name=name,
		timestamp=timestamp,
		action=UNKNOWN_ACTION,
		message=message,
	)


def parse_reflog_line(line: str) -> ReflogEntry | None:
	"""
	Parse a single reflog line.

	Args:
	    line: One line of the reflog, with or without its newline

	Returns:
	    The parsed entry, or None for blank lines and lines without
	    two leading oids

	"""
	line = line.rstrip("\r\n")
	if not line.strip():
		return None

	header, separator, tail = line.partition("\t")
	match = HEADER_PATTERN.match(header) if separator else None
	if match:
		action, message = _split_action(tail)
		return ReflogEntry(
			old_oid=match.group("old"),
			new_oid=match.group("new"),
			author_name=match.group("name"),
			timestamp=int(match.group("timestamp")),
			action=action,
			message=message,
		)

	entry = _parse_loose_line(line)
	if entry is None:
		logger.warning("Skipping malformed reflog line: %r", line)
	else:
		logger.debug("Reflog line does not follow the action convention: %r", line)
	return entry


def parse_reflog(text: str) -> list[ReflogEntry]:
	"""
	Parse reflog text into entries, most recent first.

	Args:
	    text: Full contents of a reflog file, oldest line first

	Returns:
	    List of entries with index 0 being the latest operation

	"""
	entries = [entry for entry in map(parse_reflog_line, text.split("\n")) if entry is not None]
	entries.reverse()
	return entries


def read_reflog_history(repo_root: Path | str, log_path: str = DEFAULT_LOG_PATH) -> list[ReflogEntry]:
	"""
	Read and parse the HEAD reflog of a repository.

	Args:
	    repo_root: Directory that contains the ``.git`` directory
	    log_path: Reflog location relative to ``.git``

	Returns:
	    Entries most recent first; empty if the reflog does not exist or
	    cannot be read

	"""
	reflog_file = Path(repo_root) / ".git" / log_path
	if not reflog_file.is_file():
		logger.debug("No reflog at %s", reflog_file)
		return []

	try:
		text = reflog_file.read_bytes().decode("utf-8", errors="replace")
	except OSError:
		logger.exception("Failed to read reflog %s", reflog_file)
		return []

	return parse_reflog(text)


parse_reflog_history = read_reflog_history
