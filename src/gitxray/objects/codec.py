"""
Decoding primitives for loose objects.

A loose object on disk is ``zlib(<type> <size>\\0<content>)``. The helpers in
this module each handle one step of turning those bytes back into a
structured value: inflating, splitting the header, classifying the type tag
and parsing blob, tree and commit content.

"""

from __future__ import annotations

import json
import logging
import zlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gitxray.objects.errors import CorruptObjectError, InvalidFormatError
from gitxray.objects.models import BINARY_MARKER, ObjectKind, TreeEntry

if TYPE_CHECKING:
	from collections.abc import Iterable

logger = logging.getLogger(__name__)

BINARY_SCAN_LIMIT = 8000
RAW_OID_LENGTH = 20


@dataclass(frozen=True)
class ObjectHeader:
	"""Parsed ``<type> <size>\\0`` header of a decompressed object."""

	type_tag: str
	size: int
	content_offset: int


@dataclass(frozen=True)
class CommitHeader:
	"""Tree and parent references read from a commit header block."""

	tree_oid: str = ""
	parent_oids: list[str] = field(default_factory=list)


def inflate(raw: bytes) -> bytes:
	"""
	Decompress the raw bytes of a loose object file.

	Args:
	    raw: File contents as read from disk

	Returns:
	    The decompressed buffer

	Raises:
	    CorruptObjectError: If the data is not a valid zlib stream

	"""
	try:
		return zlib.decompress(raw)
	except zlib.error as e:
		msg = f"Could not inflate object data: {e}"
		raise CorruptObjectError(msg) from e


def split_header(buf: bytes) -> ObjectHeader:
	"""
	Locate the space and NUL delimiters of an object header.

	Args:
	    buf: Decompressed object buffer

	Returns:
	    ObjectHeader with the type tag, declared size and content offset

	Raises:
	    InvalidFormatError: If a delimiter is missing or the size is not a number

	"""
	space_index = buf.find(b" ")
	if space_index == -1:
		msg = "Invalid object format: no space after the type tag"
		raise InvalidFormatError(msg)

	null_index = buf.find(b"\0", space_index + 1)
	if null_index == -1:
		msg = "Invalid object format: no NUL after the size"
		raise InvalidFormatError(msg)

	type_tag = buf[:space_index].decode("utf-8", errors="replace")
	size_text = buf[space_index + 1 : null_index].decode("ascii", errors="replace")
	try:
		size = int(size_text, 10)
	except ValueError as e:
		msg = f"Invalid object format: size {size_text!r} is not a decimal number"
		raise InvalidFormatError(msg) from e

	return ObjectHeader(type_tag=type_tag, size=size, content_offset=null_index + 1)


def classify_kind(type_tag: str) -> ObjectKind:
	"""Map a header type tag to an ObjectKind, falling back to UNKNOWN."""
	try:
		return ObjectKind(type_tag)
	except ValueError:
		return ObjectKind.UNKNOWN


def is_binary(data: bytes, scan_limit: int = BINARY_SCAN_LIMIT) -> bool:
	"""
	Guess whether content is binary.

	Only the first ``scan_limit`` bytes are looked at, so a NUL further in
	goes unnoticed.

	"""
	return b"\0" in data[:scan_limit]


def classify_content(data: bytes, scan_limit: int = BINARY_SCAN_LIMIT) -> str:
	"""Return displayable content: decoded text, or BINARY_MARKER."""
	if is_binary(data, scan_limit):
		return BINARY_MARKER
	return data.decode("utf-8", errors="replace")


def parse_tree(data: bytes) -> list[TreeEntry]:
	"""
	Parse the records of a tree object.

	Each record is ``<mode> <path>\\0<20 raw bytes>``. Parsing stops at the
	first record that cannot be read completely, and whatever was parsed up
	to that point is returned.

	Args:
	    data: Tree content with the header already stripped

	Returns:
	    Entries in the order they are stored

	"""
	entries: list[TreeEntry] = []
	cursor = 0
	length = len(data)

	while cursor < length:
		space_index = data.find(b" ", cursor)
		if space_index == -1:
			break
		mode = data[cursor:space_index].decode("ascii", errors="replace")

		null_index = data.find(b"\0", space_index + 1)
		if null_index == -1:
			break
		path = data[space_index + 1 : null_index].decode("utf-8", errors="replace")

		oid_start = null_index + 1
		oid_end = oid_start + RAW_OID_LENGTH
		if oid_end > length:
			break

		entries.append(TreeEntry.from_record(mode, path, data[oid_start:oid_end].hex()))
		cursor = oid_end

	if cursor < length:
		logger.debug("Tree data truncated: %d trailing bytes ignored", length - cursor)

	return entries


def parse_commit(text: str) -> CommitHeader:
	"""
	Read the tree and parent references from a commit.

	Only the header block is scanned; it ends at the first empty line.

	Args:
	    text: Commit content with the object header stripped

	Returns:
	    CommitHeader with the tree oid and parent oids in order

	"""
	tree_oid = ""
	parent_oids: list[str] = []

	for line in text.split("\n"):
		if line == "":
			break
		if line.startswith("tree "):
			tree_oid = line[5:].strip()
		elif line.startswith("parent "):
			parent_oids.append(line[7:].strip())

	return CommitHeader(tree_oid=tree_oid, parent_oids=parent_oids)


def render_tree_listing(entries: Iterable[TreeEntry]) -> str:
	"""Render tree entries as an indented JSON listing."""
	return json.dumps([entry.to_dict() for entry in entries], indent=2)
