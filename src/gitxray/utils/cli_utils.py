"""Utility functions for CLI operations in gitxray."""

from __future__ import annotations

import logging

import typer

from gitxray.utils.log_setup import console, display_error_summary

__all__ = ["console", "exit_with_error", "show_error"]

logger = logging.getLogger(__name__)


def show_error(message: str, exception: Exception | None = None, title: str = "Error Summary") -> None:
	"""
	Display an error summary with standardized formatting.

	Args:
	        message: The error message to display
	        exception: Optional exception that caused the error
	        title: Heading of the summary

	"""
	error_text = message
	if exception:
		error_text += f"\n\nDetails: {exception!s}"
		logger.debug("Error occurred", exc_info=exception)

	display_error_summary(error_text, title)


def exit_with_error(
	message: str,
	exit_code: int = 1,
	exception: Exception | None = None,
	title: str = "Error Summary",
) -> None:
	"""
	Display an error message and exit.

	Args:
	        message: Error message to display
	        exit_code: Exit code to use
	        exception: Optional exception that caused the error
	        title: Heading of the summary

	"""
	show_error(message, exception, title)
	raise typer.Exit(exit_code) from exception
