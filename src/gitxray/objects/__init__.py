"""
Loose object decoding.

This package turns the zlib-compressed files under ``.git/objects`` into
GitObject values: blobs, trees, commits and tags.
"""

from gitxray.objects.errors import CorruptObjectError, InvalidFormatError, ObjectDecodeError
from gitxray.objects.models import BINARY_MARKER, GitObject, ObjectKind, TreeEntry
from gitxray.objects.store import (
	DecodeResult,
	DecodeStatus,
	ObjectStoreReader,
	decode_object,
	object_path,
	oid_from_object_path,
)

__all__ = [
	"BINARY_MARKER",
	"CorruptObjectError",
	"DecodeResult",
	"DecodeStatus",
	"GitObject",
	"InvalidFormatError",
	"ObjectDecodeError",
	"ObjectKind",
	"ObjectStoreReader",
	"TreeEntry",
	"decode_object",
	"object_path",
	"oid_from_object_path",
]
