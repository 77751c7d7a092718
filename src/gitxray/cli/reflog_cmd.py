"""Commands for browsing the HEAD reflog and listing ghost commits."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.panel import Panel
from rich.table import Table

from gitxray.utils.cli_utils import console, exit_with_error
from gitxray.utils.log_setup import display_skipped_summary

if TYPE_CHECKING:
	from gitxray.reflog.models import ReflogEntry
	from gitxray.utils.config_loader import ConfigLoader

logger = logging.getLogger(__name__)

RepoOpt = Annotated[
	Path | None,
	typer.Option(
		"--repo",
		"-r",
		help="Repository to read from (defaults to the one containing the current directory)",
	),
]

ConfigOpt = Annotated[Path | None, typer.Option("--config", "-c", help="Path to config file")]

LimitOpt = Annotated[
	int | None,
	typer.Option("--limit", "-n", help="Maximum number of entries to show (overrides config, 0 for unlimited)"),
]

JsonFlag = Annotated[bool, typer.Option("--json", help="Print entries as JSON")]

ExplainFlag = Annotated[bool, typer.Option("--explain", help="Explain what ghost commits are")]


def register_command(app: typer.Typer) -> None:
	"""Register the reflog and ghosts commands with the CLI app."""

	@app.command(name="reflog")
	def reflog_command(
		repo: RepoOpt = None,
		config_file: ConfigOpt = None,
		limit: LimitOpt = None,
		as_json: JsonFlag = False,
	) -> None:
		"""Show the HEAD reflog, most recent operation first."""
		repo_root, config = _load_context(repo, config_file)
		entries = _read_entries(repo_root, config)
		entries = _apply_limit(entries, config.get_reflog_limit() if limit is None else limit)

		if as_json:
			typer.echo(json.dumps([entry.to_dict() for entry in entries], indent=2))
			return

		display_skipped_summary("reflog lines")
		if not entries:
			console.print("No reflog entries found.")
			return

		table = Table(title=f"HEAD reflog ({len(entries)} entries)")
		table.add_column("#", justify="right")
		table.add_column("commit", no_wrap=True)
		table.add_column("action")
		table.add_column("message")
		table.add_column("author")
		table.add_column("date", no_wrap=True)
		for index, entry in enumerate(entries):
			table.add_row(
				str(index),
				entry.new_oid[:7],
				entry.action,
				entry.message,
				entry.author_name,
				_format_date(entry),
			)
		console.print(table)

	@app.command(name="ghosts")
	def ghosts_command(
		repo: RepoOpt = None,
		config_file: ConfigOpt = None,
		as_json: JsonFlag = False,
		explain: ExplainFlag = False,
	) -> None:
		"""List commits HEAD has pointed to, with a command to recover each one."""
		from gitxray.cli.notes import GHOST_NOTE
		from gitxray.reflog.ghosts import find_ghost_candidates, recovery_command

		repo_root, config = _load_context(repo, config_file)
		ghosts = find_ghost_candidates(_read_entries(repo_root, config))
		prefix = config.get_branch_prefix()

		if as_json:
			payload = [{**ghost.to_dict(), "recover": recovery_command(ghost.new_oid, prefix)} for ghost in ghosts]
			typer.echo(json.dumps(payload, indent=2))
			return

		display_skipped_summary("reflog lines")
		if not ghosts:
			console.print("No ghost commits found.")
			return

		table = Table(title=f"Ghost candidates ({len(ghosts)})")
		table.add_column("commit", no_wrap=True)
		table.add_column("action")
		table.add_column("message")
		table.add_column("recover with")
		for ghost in ghosts:
			table.add_row(ghost.new_oid[:7], ghost.action, ghost.message, recovery_command(ghost.new_oid, prefix))
		console.print(table)

		if explain:
			console.print(Panel(GHOST_NOTE.content, title=GHOST_NOTE.title, style=GHOST_NOTE.style))


def _load_context(repo: Path | None, config_file: Path | None) -> tuple[Path, ConfigLoader]:
	from gitxray.utils.config_loader import ConfigError, ConfigLoader
	from gitxray.utils.git_utils import GitError, get_repo_root

	try:
		repo_root = get_repo_root(repo)
		config = ConfigLoader.get_instance(
			str(config_file) if config_file else None, reload=True, repo_root=repo_root
		)
	except GitError as e:
		exit_with_error("Could not open the repository", exception=e)
		raise
	except ConfigError as e:
		exit_with_error("Invalid gitxray configuration", exception=e)
		raise

	return repo_root, config


def _read_entries(repo_root: Path, config: ConfigLoader) -> list[ReflogEntry]:
	from gitxray.reflog.parser import parse_reflog_history

	entries = parse_reflog_history(repo_root, config.get_reflog_path())
	logger.debug("Read %d reflog entries from %s", len(entries), repo_root)
	return entries


def _apply_limit(entries: list[ReflogEntry], limit: int) -> list[ReflogEntry]:
	if limit > 0:
		return entries[:limit]
	return entries


def _format_date(entry: ReflogEntry) -> str:
	return entry.when.strftime("%Y-%m-%d %H:%M:%S UTC")
