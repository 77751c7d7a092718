"""Short explanations shown next to CLI output with ``--explain``."""

from __future__ import annotations

from dataclasses import dataclass

from gitxray.objects.models import ObjectKind


@dataclass(frozen=True)
class Note:
	"""A titled explanation with the style used to render it."""

	title: str
	content: str
	style: str = "cyan"


OBJECT_NOTES: dict[ObjectKind, Note] = {
	ObjectKind.BLOB: Note(
		title="Blob: content addressed by hash",
		content=(
			"A blob stores file content only. Its name lives in the tree that points to it, "
			"and its id is the SHA-1 of the header and content."
		),
	),
	ObjectKind.TREE: Note(
		title="Tree: a directory snapshot",
		content="Each entry pairs a mode and a name with the id of a blob or of another tree.",
	),
	ObjectKind.COMMIT: Note(
		title="Commit: an immutable snapshot",
		content=(
			"A commit ties a root tree to its parent commits and a message. "
			"Changing any of them produces a different commit id."
		),
		style="green",
	),
	ObjectKind.TAG: Note(
		title="Tag: a named pointer",
		content="An annotated tag points at another object and carries its own message.",
	),
}

GHOST_NOTE = Note(
	title="Ghost commits",
	content=(
		"These are commits HEAD has pointed to. Some may no longer be reachable from any branch "
		"after a reset or checkout; the reflog still remembers them, so they can be recovered."
	),
	style="yellow",
)


def note_for(kind: ObjectKind) -> Note | None:
	return OBJECT_NOTES.get(kind)
