"""Command-line interface package for gitxray."""

from __future__ import annotations

import datetime
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from gitxray import __version__
from gitxray.utils.log_setup import log_environment_info, setup_logging

from .object_cmd import register_command as register_object_command
from .reflog_cmd import register_command as register_reflog_command

logger = logging.getLogger(__name__)

# Load environment variables from .env.local first, then fall back to .env
env_local = Path(".env.local")
if env_local.exists():
	load_dotenv(dotenv_path=env_local)
elif Path(".env").exists():
	load_dotenv(dotenv_path=Path(".env"))

app = typer.Typer(
	help=f"gitxray - look inside the loose objects and reflog of a git repository\n\nVersion: {__version__}",
	no_args_is_help=True,
	context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"gitxray version: {__version__}")
		raise typer.Exit


@app.callback(invoke_without_command=True)
def global_options(
	ctx: typer.Context,
	is_verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False,
	is_output_log: Annotated[
		bool,
		typer.Option(
			"--save-log",
			help="Enable logging to a file. Logs to logs/gitxray_{datetime}.log.",
		),
	] = False,
	_version: Annotated[
		bool | None,
		typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
	] = None,
) -> None:
	"""Global CLI options and logging setup."""
	ctx.meta["is_verbose"] = is_verbose
	ctx.meta["is_output_log"] = is_output_log

	log_file_path: Path | None = None
	if is_output_log:
		current_time = datetime.datetime.now(tz=datetime.UTC).strftime("%Y-%m-%d_%H-%M-%S")
		log_file_path = Path("logs") / f"gitxray_{current_time}.log"

	setup_logging(is_verbose=is_verbose or is_output_log, log_file_path=log_file_path)
	log_environment_info()


register_object_command(app)
register_reflog_command(app)


def main() -> int:
	"""Run the CLI application."""
	return app()


if __name__ == "__main__":
	sys.exit(main())
