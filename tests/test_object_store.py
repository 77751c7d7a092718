"""Tests for reading loose objects from a repository."""

from __future__ import annotations

import json
import logging
import zlib
from collections.abc import Callable
from pathlib import Path

import pytest

from gitxray.objects import (
	BINARY_MARKER,
	DecodeStatus,
	ObjectKind,
	ObjectStoreReader,
	decode_object,
	object_path,
	oid_from_object_path,
)

TREE_OID = "76a74ef12f97157c91d4e7d442a8bbf37c68a4e1"
PARENT_OID = "a2c3b4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b1"
SECOND_PARENT_OID = "f345d912a90368aa295ef51b7d44c4463a625005"
MISSING_OID = "c0ffee0123456789abcdef0123456789abcdef01"


@pytest.mark.unit
@pytest.mark.git
class TestDecodeObject:
	"""Test cases for decoding each object kind."""

	def test_decode_commit(self, repo: Path, write_object: Callable[..., str]) -> None:
		content = f"tree {TREE_OID}\nparent {PARENT_OID}\n\nInitial commit"
		oid = write_object("commit", content.encode(), oid="c0ffee0123456789abcdef0123456789abcdef02")

		obj = decode_object(repo, oid)

		assert obj is not None
		assert obj.kind is ObjectKind.COMMIT
		assert obj.oid == oid
		assert obj.size == len(content)
		assert obj.tree_oid == TREE_OID
		assert obj.parent_oids == (PARENT_OID,)
		assert obj.content == content
		assert obj.entries is None

	def test_uppercase_oid_is_found(self, repo: Path, write_object: Callable[..., str]) -> None:
		oid = write_object("blob", b"shouting\n", oid="c0ffee0123456789abcdef0123456789abcdef03")

		result = ObjectStoreReader(repo).inspect(oid.upper())

		assert result.status is DecodeStatus.FOUND
		assert result.oid == oid
		assert result.obj is not None
		assert result.obj.oid == oid
		assert result.obj.content == "shouting\n"

	def test_decode_merge_commit(self, repo: Path, write_object: Callable[..., str]) -> None:
		content = f"tree {TREE_OID}\nparent {PARENT_OID}\nparent {SECOND_PARENT_OID}\n\nMerge"
		obj = decode_object(repo, write_object("commit", content.encode()))

		assert obj is not None
		assert obj.parent_oids == (PARENT_OID, SECOND_PARENT_OID)
		assert obj.is_merge

	def test_decode_text_blob(self, repo: Path, write_object: Callable[..., str]) -> None:
		obj = decode_object(repo, write_object("blob", b"print('hello')\n"))

		assert obj is not None
		assert obj.kind is ObjectKind.BLOB
		assert obj.content == "print('hello')\n"
		assert obj.parent_oids == ()
		assert obj.tree_oid is None
		assert obj.entries is None

	def test_decode_binary_blob(self, repo: Path, write_object: Callable[..., str]) -> None:
		obj = decode_object(repo, write_object("blob", b"\x89PNG\r\n\x1a\n\0\0\0\rIHDR"))

		assert obj is not None
		assert obj.content == BINARY_MARKER
		assert obj.is_binary

	def test_decode_tree(
		self,
		repo: Path,
		write_object: Callable[..., str],
		make_tree_record: Callable[[str, str, str], bytes],
	) -> None:
		data = make_tree_record("100644", "README.md", PARENT_OID) + make_tree_record("40000", "src", TREE_OID)

		obj = decode_object(repo, write_object("tree", data))

		assert obj is not None
		assert obj.kind is ObjectKind.TREE
		assert obj.size == len(data)
		assert obj.entries is not None
		assert [(e.mode, e.path, e.oid, e.kind) for e in obj.entries] == [
			("100644", "README.md", PARENT_OID, ObjectKind.BLOB),
			("40000", "src", TREE_OID, ObjectKind.TREE),
		]
		assert json.loads(obj.content)[1]["path"] == "src"

	def test_decode_tag(self, repo: Path, write_object: Callable[..., str]) -> None:
		content = f"object {PARENT_OID}\ntype commit\ntag v1.0\n\nRelease 1.0\n"
		obj = decode_object(repo, write_object("tag", content.encode()))

		assert obj is not None
		assert obj.kind is ObjectKind.TAG
		assert obj.content == content

	def test_unknown_type_is_not_an_error(self, repo: Path, write_object: Callable[..., str]) -> None:
		obj = decode_object(repo, write_object("frobnicate", b"payload"))

		assert obj is not None
		assert obj.kind is ObjectKind.UNKNOWN
		assert obj.content == "payload"

	def test_declared_size_is_not_validated(self, repo: Path, write_object: Callable[..., str]) -> None:
		"""The header size is reported even when it disagrees with the content."""
		obj = decode_object(repo, write_object("blob", b"abc", size=99))

		assert obj is not None
		assert obj.size == 99
		assert obj.content == "abc"

	def test_each_decode_builds_a_new_value(self, repo: Path, write_object: Callable[..., str]) -> None:
		oid = write_object("blob", b"same")

		first = decode_object(repo, oid)
		second = decode_object(repo, oid)

		assert first == second
		assert first is not second


@pytest.mark.unit
@pytest.mark.git
class TestDecodeFailures:
	"""Test cases for missing and damaged objects."""

	def test_missing_object(self, repo: Path) -> None:
		result = ObjectStoreReader(repo).inspect(MISSING_OID)

		assert result.status is DecodeStatus.NOT_FOUND
		assert result.obj is None
		assert decode_object(repo, MISSING_OID) is None

	def test_malformed_oid_is_not_found(self, repo: Path) -> None:
		assert ObjectStoreReader(repo).inspect("nonexistentoid").status is DecodeStatus.NOT_FOUND
		assert ObjectStoreReader(repo).inspect("../../" + "a" * 34).status is DecodeStatus.NOT_FOUND

	def test_corrupt_object(
		self, repo: Path, write_raw_object: Callable[[str, bytes], Path], caplog: pytest.LogCaptureFixture
	) -> None:
		write_raw_object(MISSING_OID, b"not compressed at all")

		with caplog.at_level(logging.WARNING):
			result = ObjectStoreReader(repo).inspect(MISSING_OID)

		assert result.status is DecodeStatus.CORRUPT
		assert result.error
		assert not result.found
		assert MISSING_OID in caplog.text
		assert decode_object(repo, MISSING_OID) is None

	def test_invalid_header(self, repo: Path, write_raw_object: Callable[[str, bytes], Path]) -> None:
		write_raw_object(MISSING_OID, zlib.compress(b"no header delimiters here"))

		result = ObjectStoreReader(repo).inspect(MISSING_OID)

		assert result.status is DecodeStatus.INVALID_FORMAT
		assert decode_object(repo, MISSING_OID) is None

	def test_directory_in_place_of_object(self, repo: Path) -> None:
		object_path(repo, MISSING_OID).mkdir(parents=True)

		assert ObjectStoreReader(repo).inspect(MISSING_OID).status is DecodeStatus.NOT_FOUND


@pytest.mark.unit
class TestObjectPaths:
	"""Test cases for mapping between oids and file paths."""

	def test_object_path(self, tmp_path: Path) -> None:
		assert object_path(tmp_path, MISSING_OID) == tmp_path / ".git" / "objects" / "c0" / MISSING_OID[2:]

	def test_oid_from_object_path(self, tmp_path: Path) -> None:
		assert oid_from_object_path(object_path(tmp_path, MISSING_OID)) == MISSING_OID

	def test_oid_from_windows_path(self) -> None:
		path = "C:\\work\\.git\\objects\\C0\\" + MISSING_OID[2:].upper()
		assert oid_from_object_path(path) == MISSING_OID

	@pytest.mark.parametrize(
		"path",
		[
			"/work/.git/objects/pack/pack-1234.idx",
			"/work/.git/objects/c0/short",
			"/work/.git/refs/heads/main",
			"/work/.git/objects/c0/" + MISSING_OID[2:] + ".lock",
		],
	)
	def test_non_object_paths(self, path: str) -> None:
		assert oid_from_object_path(path) is None

	def test_custom_binary_scan_limit(self, repo: Path, write_object: Callable[..., str]) -> None:
		oid = write_object("blob", b"abcdef\0")

		assert ObjectStoreReader(repo, binary_scan_limit=4).decode(oid).content == "abcdef\0"
		assert ObjectStoreReader(repo).decode(oid).content == BINARY_MARKER
