"""Reader for the loose objects under ``.git/objects``."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gitxray.objects.codec import (
	BINARY_SCAN_LIMIT,
	classify_content,
	classify_kind,
	inflate,
	parse_commit,
	parse_tree,
	render_tree_listing,
	split_header,
)
from gitxray.objects.errors import CorruptObjectError, InvalidFormatError
from gitxray.objects.models import GitObject, ObjectKind

logger = logging.getLogger(__name__)

OID_PATTERN = re.compile(r"^[0-9a-fA-F]{40}$")
OBJECT_PATH_PATTERN = re.compile(r"objects[/\\]([0-9a-fA-F]{2})[/\\]([0-9a-fA-F]{38})$")


class DecodeStatus(str, Enum):
	"""Outcome of a decode attempt."""

	FOUND = "found"
	NOT_FOUND = "not_found"
	CORRUPT = "corrupt"
	INVALID_FORMAT = "invalid_format"


@dataclass(frozen=True)
class DecodeResult:
	"""Decoded object, or the reason there is none."""

	oid: str
	status: DecodeStatus
	obj: GitObject | None = None
	error: str | None = None

	@property
	def found(self) -> bool:
		return self.status is DecodeStatus.FOUND


def object_path(repo_root: Path | str, oid: str) -> Path:
	"""Return the path of the loose object file for an oid."""
	return Path(repo_root) / ".git" / "objects" / oid[:2] / oid[2:]


def oid_from_object_path(path: Path | str) -> str | None:
	"""
	Recover an oid from a loose object file path.

	Args:
	    path: Path ending in ``objects/<2 hex>/<38 hex>``

	Returns:
	    The lowercase oid, or None if the path does not name a loose object

	"""
	match = OBJECT_PATH_PATTERN.search(str(path))
	if not match:
		return None
	return (match.group(1) + match.group(2)).lower()


class ObjectStoreReader:
	"""
	Decodes loose objects of a single repository.

	The reader keeps no state between calls; every decode reads the object
	file again and builds a new GitObject.

	"""

	def __init__(self, repo_root: Path | str, binary_scan_limit: int = BINARY_SCAN_LIMIT) -> None:
		"""
		Initialize the reader.

		Args:
		    repo_root: Directory that contains the ``.git`` directory
		    binary_scan_limit: Number of leading bytes checked for NUL when
		        classifying blob content

		"""
		self.repo_root = Path(repo_root)
		self.binary_scan_limit = binary_scan_limit

	def inspect(self, oid: str) -> DecodeResult:
		"""
		Decode an object and report how the attempt went.

		Args:
		    oid: 40 character hex object id

		Returns:
		    DecodeResult with the object when found, otherwise the failure status

		"""
		if not OID_PATTERN.match(oid):
			logger.debug("Not a valid object id: %r", oid)
			return DecodeResult(oid=oid, status=DecodeStatus.NOT_FOUND, error="invalid object id")

		oid = oid.lower()

		path = object_path(self.repo_root, oid)
		if not path.is_file():
			logger.debug("Loose object not found: %s", path)
			return DecodeResult(oid=oid, status=DecodeStatus.NOT_FOUND)

		try:
			raw = path.read_bytes()
			obj = self._decode_bytes(oid, raw)
		except (CorruptObjectError, OSError) as e:
			logger.warning("Failed to inflate git object %s: %s", oid, e)
			return DecodeResult(oid=oid, status=DecodeStatus.CORRUPT, error=str(e))
		except InvalidFormatError as e:
			logger.warning("Failed to parse git object %s: %s", oid, e)
			return DecodeResult(oid=oid, status=DecodeStatus.INVALID_FORMAT, error=str(e))

		return DecodeResult(oid=oid, status=DecodeStatus.FOUND, obj=obj)

	def decode(self, oid: str) -> GitObject | None:
		"""Decode an object, returning None when there is nothing to show."""
		return self.inspect(oid).obj

	def _decode_bytes(self, oid: str, raw: bytes) -> GitObject:
		buffer = inflate(raw)
		header = split_header(buffer)
		content = buffer[header.content_offset :]
		kind = classify_kind(header.type_tag)

		if header.size != len(content):
			logger.debug(
				"Declared size %d of %s differs from content length %d", header.size, oid, len(content)
			)

		if kind is ObjectKind.TREE:
			entries = tuple(parse_tree(content))
			return GitObject(
				kind=kind,
				size=header.size,
				oid=oid,
				content=render_tree_listing(entries),
				entries=entries,
			)

		if kind is ObjectKind.COMMIT:
			text = content.decode("utf-8", errors="replace")
			commit = parse_commit(text)
			return GitObject(
				kind=kind,
				size=header.size,
				oid=oid,
				content=text,
				parent_oids=tuple(commit.parent_oids),
				tree_oid=commit.tree_oid,
			)

		return GitObject(
			kind=kind,
			size=header.size,
			oid=oid,
			content=classify_content(content, self.binary_scan_limit),
		)


def decode_object(repo_root: Path | str, oid: str) -> GitObject | None:
	"""
	Decode a loose object of the repository at ``repo_root``.

	Missing objects and decode failures both return None. Failures are
	logged with their cause.

	"""
	return ObjectStoreReader(repo_root).decode(oid)
