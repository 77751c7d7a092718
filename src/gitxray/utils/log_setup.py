"""
Logging setup for gitxray.

Log records are written to stderr so that ``--json`` output on stdout stays
parseable. Outside verbose mode, warnings about repository data that could
not be read (corrupt objects, malformed reflog lines) are counted instead of
printed, and commands report them with a single summary line.

"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

console = Console()
err_console = Console(stderr=True)

FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d %(message)s"

# Loggers whose warnings describe unreadable repository data
DATA_LOGGERS = ("gitxray.objects", "gitxray.reflog")


def is_data_warning(record: logging.LogRecord) -> bool:
	"""Whether a record is a warning about an object or reflog line that could not be read."""
	return record.name.startswith(DATA_LOGGERS) and logging.WARNING <= record.levelno < logging.ERROR


class DataWarningCounter(logging.Handler):
	"""Count data warnings without printing them."""

	def __init__(self) -> None:
		super().__init__(level=logging.WARNING)
		self.count = 0
		self.addFilter(is_data_warning)

	def emit(self, record: logging.LogRecord) -> None:
		self.count += 1


_data_warnings: DataWarningCounter | None = None


def setup_logging(
	is_verbose: bool = False,
	log_to_console: bool = True,
	log_file_path: Path | str | None = None,
) -> None:
	"""
	Set up logging configuration.

	Args:
	    is_verbose: Show debug records and every data warning
	    log_to_console: Whether to log to stderr
	    log_file_path: Optional file that receives every record at debug level

	"""
	global _data_warnings  # noqa: PLW0603

	log_level = logging.DEBUG if is_verbose else logging.WARNING

	root_logger = logging.getLogger()
	root_logger.setLevel(logging.DEBUG if log_file_path else log_level)

	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)
		handler.close()

	_data_warnings = None
	if log_to_console:
		console_handler = RichHandler(
			level=log_level,
			console=err_console,
			rich_tracebacks=True,
			show_time=is_verbose,
			show_path=is_verbose,
		)
		if not is_verbose:
			console_handler.addFilter(lambda record: not is_data_warning(record))
			_data_warnings = DataWarningCounter()
			root_logger.addHandler(_data_warnings)
		root_logger.addHandler(console_handler)

	if log_file_path:
		file_path = Path(log_file_path)
		try:
			file_path.parent.mkdir(parents=True, exist_ok=True)
			file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8")
		except OSError as e:
			root_logger.error("Could not open log file %s: %s", file_path, e)  # noqa: TRY400
			return
		file_handler.setLevel(logging.DEBUG)
		file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
		root_logger.addHandler(file_handler)
		root_logger.debug("Logging to file: %s", file_path)


def data_warning_count() -> int:
	"""Number of data warnings seen since logging was set up."""
	return _data_warnings.count if _data_warnings else 0


def log_environment_info() -> None:
	"""Log the versions that decoding depends on."""
	logger = logging.getLogger(__name__)

	import platform
	import zlib

	from gitxray import __version__

	logger.debug("gitxray %s on Python %s (%s)", __version__, platform.python_version(), platform.platform())
	logger.debug("zlib runtime %s", zlib.ZLIB_RUNTIME_VERSION)


def display_skipped_summary(what: str) -> None:
	"""
	Print one line about data that was skipped, if any was.

	Args:
	    what: Plural noun for the skipped items, e.g. ``"reflog lines"``

	"""
	count = data_warning_count()
	if count:
		err_console.print(
			f"[yellow]Skipped {count} unreadable {what}. Run with --verbose to see them.[/yellow]",
			highlight=False,
		)


def display_error_summary(error_message: str, title: str = "Error Summary") -> None:
	"""
	Display an error summary with a divider and a title.

	Args:
	        error_message: The error message to display
	        title: Heading shown in the divider

	"""
	console.print()
	console.print(Rule(Text(title, style="bold red"), style="red"))
	console.print(Text(f"\n{error_message}\n"))
	console.print(Rule(style="red"))
	console.print()
