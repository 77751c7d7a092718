"""Implementation of the show command for decoding loose objects."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gitxray.utils.cli_utils import console, exit_with_error

if TYPE_CHECKING:
	from gitxray.objects.models import GitObject

logger = logging.getLogger(__name__)

# --- Command Argument Annotations ---

TargetArg = Annotated[
	str,
	typer.Argument(help="Object id, or path to a loose object file under .git/objects"),
]

RepoOpt = Annotated[
	Path | None,
	typer.Option(
		"--repo",
		"-r",
		help="Repository to read from (defaults to the one containing the current directory)",
	),
]

ConfigOpt = Annotated[
	Path | None,
	typer.Option(
		"--config",
		"-c",
		help="Path to config file",
	),
]

JsonFlag = Annotated[bool, typer.Option("--json", help="Print the decoded object as JSON")]

ExplainFlag = Annotated[bool, typer.Option("--explain", help="Explain what the object kind is")]


def register_command(app: typer.Typer) -> None:
	"""Register the show command with the CLI app."""

	@app.command(name="show")
	def show_command(
		target: TargetArg,
		repo: RepoOpt = None,
		config_file: ConfigOpt = None,
		as_json: JsonFlag = False,
		explain: ExplainFlag = False,
	) -> None:
		"""Decode a loose object and display its contents."""
		_show_command_impl(target=target, repo=repo, config_file=config_file, as_json=as_json, explain=explain)


def resolve_target(target: str) -> str:
	"""Turn a loose object path into its oid; other targets are returned unchanged."""
	from gitxray.objects.store import oid_from_object_path

	return oid_from_object_path(target) or target


def render_object(obj: GitObject) -> None:
	"""Print a decoded object to the console."""
	from gitxray.objects.models import ObjectKind

	summary = Table.grid(padding=(0, 2))
	summary.add_column(style="bold")
	summary.add_column()
	summary.add_row("oid", obj.oid)
	summary.add_row("type", obj.kind.value)
	summary.add_row("size", str(obj.size))

	if obj.kind is ObjectKind.COMMIT:
		summary.add_row("tree", obj.tree_oid or "-")
		summary.add_row("parents", "\n".join(obj.parent_oids) or "(root commit)")

	console.print(summary)

	if obj.entries is not None:
		table = Table(title=f"{len(obj.entries)} entries")
		table.add_column("mode")
		table.add_column("type")
		table.add_column("oid", no_wrap=True)
		table.add_column("path")
		for entry in obj.entries:
			table.add_row(entry.mode, entry.kind.value, entry.oid, entry.path)
		console.print(table)
		return

	console.print(Panel(Text(obj.content), title=obj.kind.value, expand=False))


def _show_command_impl(
	target: str,
	repo: Path | None,
	config_file: Path | None,
	as_json: bool,
	explain: bool,
) -> None:
	"""Actual implementation of the show command."""
	from gitxray.cli.notes import note_for
	from gitxray.objects.store import DecodeStatus, ObjectStoreReader
	from gitxray.utils.config_loader import ConfigError, ConfigLoader
	from gitxray.utils.git_utils import GitError, get_repo_root

	try:
		repo_root = get_repo_root(repo)
		config = ConfigLoader.get_instance(
			str(config_file) if config_file else None, reload=True, repo_root=repo_root
		)
	except GitError as e:
		exit_with_error("Could not open the repository", exception=e)
		return
	except ConfigError as e:
		exit_with_error("Invalid gitxray configuration", exception=e)
		return

	oid = resolve_target(target)
	reader = ObjectStoreReader(repo_root, binary_scan_limit=config.get_binary_scan_limit())
	result = reader.inspect(oid)

	if result.status is DecodeStatus.NOT_FOUND:
		exit_with_error(f"Object {oid} not found as a loose object in {repo_root}", title="Object Not Found")
	elif result.status is not DecodeStatus.FOUND or result.obj is None:
		exit_with_error(
			f"Could not decode object {oid} ({result.status.value}): {result.error}", title="Decode Failed"
		)

	obj = result.obj
	if as_json:
		typer.echo(json.dumps(obj.to_dict(), indent=2))
		return

	render_object(obj)

	if explain:
		note = note_for(obj.kind)
		if note:
			console.print(Panel(note.content, title=note.title, style=note.style))
