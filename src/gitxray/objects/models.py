"""Object model for decoded loose objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

BINARY_MARKER = "<Binary Data>"

TREE_MODES = frozenset({"40000", "040000"})


class ObjectKind(str, Enum):
	"""Kind of a stored object, taken from its header type tag."""

	BLOB = "blob"
	TREE = "tree"
	COMMIT = "commit"
	TAG = "tag"
	UNKNOWN = "unknown"


@dataclass(frozen=True)
class TreeEntry:
	"""
	One child reference inside a tree object.

	The kind is guessed from the mode only. Telling a submodule commit or a
	symlink apart from a regular file needs a decode of the child oid.

	"""

	mode: str
	"""Mode string exactly as stored, e.g. ``100644`` or ``40000``."""

	path: str
	"""Entry name relative to the tree."""

	oid: str
	"""40 character hex id of the child object."""

	kind: ObjectKind = ObjectKind.BLOB
	"""``TREE`` for directory modes, ``BLOB`` otherwise."""

	@classmethod
	def from_record(cls, mode: str, path: str, oid: str) -> TreeEntry:
		"""Build an entry, inferring its kind from the mode."""
		kind = ObjectKind.TREE if mode in TREE_MODES else ObjectKind.BLOB
		return cls(mode=mode, path=path, oid=oid, kind=kind)

	def to_dict(self) -> dict[str, str]:
		"""Convert to a dictionary."""
		return {"mode": self.mode, "path": self.path, "oid": self.oid, "type": self.kind.value}


@dataclass(frozen=True)
class GitObject:
	"""
	A decoded loose object.

	The per-kind payload fields are only populated for their own kind:
	``tree_oid`` and ``parent_oids`` for commits, ``entries`` for trees.
	Related objects are referenced by oid and never held directly.

	"""

	kind: ObjectKind
	size: int
	"""Size declared in the object header. Not checked against the content."""

	oid: str
	content: str
	"""Text content, ``BINARY_MARKER`` for binary data or a JSON listing for trees."""

	parent_oids: tuple[str, ...] = ()
	tree_oid: str | None = None
	entries: tuple[TreeEntry, ...] | None = None

	@property
	def is_binary(self) -> bool:
		return self.content == BINARY_MARKER

	@property
	def is_merge(self) -> bool:
		return len(self.parent_oids) > 1

	def to_dict(self) -> dict[str, Any]:
		"""Convert to a dictionary suitable for JSON output."""
		data: dict[str, Any] = {
			"type": self.kind.value,
			"size": self.size,
			"oid": self.oid,
			"content": self.content,
		}
		if self.kind is ObjectKind.COMMIT:
			data["tree"] = self.tree_oid
			data["parents"] = list(self.parent_oids)
		if self.entries is not None:
			data["entries"] = [entry.to_dict() for entry in self.entries]
		return data
