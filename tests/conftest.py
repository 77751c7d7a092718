"""Global test fixtures and configuration."""

from __future__ import annotations

import hashlib
import os
import zlib
from collections.abc import Callable
from pathlib import Path

import pytest

from gitxray.utils.config_loader import ConfigLoader

ObjectWriter = Callable[..., str]


@pytest.fixture(autouse=True)
def reset_config_singleton() -> None:
	"""Make sure no ConfigLoader instance leaks between tests."""
	yield
	ConfigLoader._instance = None


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
	"""Keep user config files and GITXRAY_ variables out of the tests."""
	for env_var in list(os.environ):
		if env_var.startswith("GITXRAY_"):
			monkeypatch.delenv(env_var)
	monkeypatch.setattr("gitxray.utils.config_loader.xdg_config_home", str(tmp_path / "xdg"))
	monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def repo(tmp_path: Path) -> Path:
	"""Create an empty repository layout with objects and logs directories."""
	root = tmp_path / "repo"
	(root / ".git" / "objects").mkdir(parents=True)
	(root / ".git" / "logs").mkdir(parents=True)
	return root


@pytest.fixture
def write_object(repo: Path) -> ObjectWriter:
	"""
	Return a helper that stores a loose object and returns its oid.

	The header is built from the real content length unless ``size`` is given,
	and the oid is the SHA-1 of the uncompressed data unless ``oid`` is given.
	"""

	def _write(type_tag: str, content: bytes, *, oid: str | None = None, size: int | None = None) -> str:
		declared = len(content) if size is None else size
		data = f"{type_tag} {declared}\0".encode() + content
		oid = oid or hashlib.sha1(data).hexdigest()  # noqa: S324
		path = repo / ".git" / "objects" / oid[:2] / oid[2:]
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_bytes(zlib.compress(data))
		return oid

	return _write


@pytest.fixture
def write_raw_object(repo: Path) -> Callable[[str, bytes], Path]:
	"""Return a helper that writes arbitrary bytes at an object's path."""

	def _write(oid: str, raw: bytes) -> Path:
		path = repo / ".git" / "objects" / oid[:2] / oid[2:]
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_bytes(raw)
		return path

	return _write


@pytest.fixture
def write_reflog(repo: Path) -> Callable[[str], Path]:
	"""Return a helper that writes the HEAD reflog."""

	def _write(text: str) -> Path:
		path = repo / ".git" / "logs" / "HEAD"
		path.write_text(text, encoding="utf-8")
		return path

	return _write


def tree_record(mode: str, path: str, oid: str) -> bytes:
	"""Encode one tree entry the way git stores it."""
	return f"{mode} {path}".encode() + b"\0" + bytes.fromhex(oid)


@pytest.fixture
def make_tree_record() -> Callable[[str, str, str], bytes]:
	return tree_record
