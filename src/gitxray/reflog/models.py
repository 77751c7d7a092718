"""Reflog entry model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

ZERO_OID = "0" * 40
UNKNOWN_ACTION = "unknown"


@dataclass(frozen=True)
class ReflogEntry:
	"""One line of ``.git/logs/HEAD``."""

	old_oid: str
	"""Value of HEAD before the operation, ZERO_OID if it did not exist."""

	new_oid: str
	"""Value of HEAD after the operation."""

	author_name: str
	timestamp: int
	"""Unix time of the operation, in seconds."""

	action: str = UNKNOWN_ACTION
	"""Operation label such as ``checkout`` or ``commit (amend)``."""

	message: str = ""

	@property
	def when(self) -> datetime:
		return datetime.fromtimestamp(self.timestamp, tz=UTC)

	@property
	def is_creation(self) -> bool:
		return self.old_oid == ZERO_OID

	def to_dict(self) -> dict[str, Any]:
		"""Convert to a dictionary."""
		return {
			"old_oid": self.old_oid,
			"new_oid": self.new_oid,
			"author_name": self.author_name,
			"timestamp": self.timestamp,
			"action": self.action,
			"message": self.message,
		}
