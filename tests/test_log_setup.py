"""Tests for logging setup."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from rich.logging import RichHandler

from gitxray.utils.log_setup import (
	DataWarningCounter,
	data_warning_count,
	display_error_summary,
	display_skipped_summary,
	err_console,
	setup_logging,
)


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
	root_logger = logging.getLogger()
	handlers = root_logger.handlers[:]
	level = root_logger.level
	yield
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)
		handler.close()
	for handler in handlers:
		root_logger.addHandler(handler)
	root_logger.setLevel(level)


@pytest.mark.unit
@pytest.mark.usefixtures("restore_root_logger")
class TestSetupLogging:
	"""Test cases for setup_logging."""

	def test_default_level_is_warning(self) -> None:
		setup_logging()

		root_logger = logging.getLogger()
		assert root_logger.level == logging.WARNING
		rich_handlers = [handler for handler in root_logger.handlers if isinstance(handler, RichHandler)]
		assert len(rich_handlers) == 1
		assert rich_handlers[0].console is err_console

	def test_verbose_level_is_debug(self) -> None:
		setup_logging(is_verbose=True)

		root_logger = logging.getLogger()
		assert root_logger.level == logging.DEBUG
		assert not any(isinstance(handler, DataWarningCounter) for handler in root_logger.handlers)

	def test_repeated_setup_does_not_duplicate_handlers(self) -> None:
		setup_logging()
		setup_logging()

		assert len(logging.getLogger().handlers) == 2

	def test_file_logging(self, tmp_path: Path) -> None:
		log_file = tmp_path / "logs" / "gitxray.log"

		setup_logging(is_verbose=True, log_to_console=False, log_file_path=log_file)
		logging.getLogger("gitxray.test").debug("decoded %s", "abc")

		assert "decoded abc" in log_file.read_text(encoding="utf-8")

	def test_unusable_log_file_is_reported(self, tmp_path: Path) -> None:
		blocker = tmp_path / "not-a-directory"
		blocker.write_text("", encoding="utf-8")

		setup_logging(log_file_path=blocker / "gitxray.log")

		assert not any(isinstance(handler, logging.FileHandler) for handler in logging.getLogger().handlers)


@pytest.mark.unit
@pytest.mark.usefixtures("restore_root_logger")
class TestDataWarnings:
	"""Test cases for counting warnings about unreadable repository data."""

	def test_data_warnings_are_counted_not_printed(self, capsys: pytest.CaptureFixture[str]) -> None:
		setup_logging()

		logging.getLogger("gitxray.reflog.parser").warning("Skipping malformed reflog line: %r", "junk")
		logging.getLogger("gitxray.objects.store").warning("Failed to inflate git object %s", "abc")

		assert data_warning_count() == 2
		assert "Skipping malformed" not in capsys.readouterr().err

	def test_other_warnings_are_printed(self, capsys: pytest.CaptureFixture[str]) -> None:
		setup_logging()

		logging.getLogger("gitxray.cli").warning("Something else went wrong")

		assert data_warning_count() == 0
		assert "Something else went wrong" in capsys.readouterr().err

	def test_errors_from_data_loggers_are_printed(self, capsys: pytest.CaptureFixture[str]) -> None:
		setup_logging()

		logging.getLogger("gitxray.reflog.parser").error("Failed to read reflog")

		assert data_warning_count() == 0
		assert "Failed to read reflog" in capsys.readouterr().err

	def test_verbose_prints_every_warning(self, capsys: pytest.CaptureFixture[str]) -> None:
		setup_logging(is_verbose=True)

		logging.getLogger("gitxray.reflog.parser").warning("Skipping malformed reflog line: %r", "junk")

		assert data_warning_count() == 0
		assert "Skipping malformed" in capsys.readouterr().err

	def test_skipped_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
		setup_logging()
		logging.getLogger("gitxray.reflog.parser").warning("Skipping malformed reflog line: %r", "junk")

		display_skipped_summary("reflog lines")

		assert "Skipped 1 unreadable reflog lines" in capsys.readouterr().err

	def test_no_summary_without_warnings(self, capsys: pytest.CaptureFixture[str]) -> None:
		setup_logging()

		display_skipped_summary("reflog lines")

		assert capsys.readouterr().err == ""


@pytest.mark.unit
def test_error_summary_prints_markup_literally(capsys: pytest.CaptureFixture[str]) -> None:
	display_error_summary("bad value [bold]x[/bold]", title="Decode Failed")

	out = capsys.readouterr().out
	assert "Decode Failed" in out
	assert "[bold]x[/bold]" in out
