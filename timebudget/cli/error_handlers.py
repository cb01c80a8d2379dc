"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
import requests
from pydantic import ValidationError

from timebudget.cli.utils.formatters import format_error, format_warning
from timebudget.importers.import_session import ImportSessionError
from timebudget.readers.spreadsheet_reader import UnsupportedFileError
from timebudget.services.api_client import ApiError


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""


class APIError(CLIError):
    """Error related to backend API calls."""


class DataValidationError(CLIError):
    """Error related to import data or command input."""


class ProcessingError(CLIError):
    """Error related to data processing."""


def _echo_cli_error(label: str, error: CLIError) -> None:
    click.echo(format_error(f"{label}: {error.message}"))
    if error.recovery_hint:
        click.echo(format_warning(f"Hint: {error.recovery_hint}"))


def _handle_api_error(error: ApiError) -> int:
    status_code = error.status_code

    if status_code is None:
        click.echo(format_error(f"Backend Unreachable: {error.message}"))
        click.echo(format_warning("Hint: Check API_BASE_URL and your connection"))
        return 9

    if status_code == 401:
        click.echo(format_error("Authentication Failed"))
        click.echo(format_warning("Hint: Check API_TOKEN in your .env file"))
        return 5

    if status_code == 403:
        click.echo(format_error("Permission Denied"))
        click.echo(
            format_warning("Hint: Ensure your token may access projects and entries")
        )
        return 6

    if status_code == 404:
        click.echo(format_error("Resource Not Found"))
        click.echo(format_warning("Hint: Verify API_BASE_URL points at the backend"))
        return 7

    if status_code == 429:
        click.echo(format_error("Rate Limit Exceeded"))
        click.echo(format_warning("Hint: Wait a few minutes before retrying"))
        return 8

    click.echo(format_error(f"API Error (HTTP {status_code})"))
    click.echo(format_warning(f"Details: {error.message}"))
    return 9


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code (1-9 for known error types, 130 on abort, 255 otherwise)
    """
    if isinstance(error, ConfigurationError):
        _echo_cli_error("Configuration Error", error)
        return 1

    elif isinstance(error, APIError):
        _echo_cli_error("API Error", error)
        return 2

    elif isinstance(error, DataValidationError):
        _echo_cli_error("Data Validation Error", error)
        return 3

    elif isinstance(error, ProcessingError):
        _echo_cli_error("Processing Error", error)
        return 4

    elif isinstance(error, ValidationError):
        click.echo(format_error(f"Configuration Error: {error.error_count()} invalid setting(s)"))
        for detail in error.errors():
            location = ".".join(str(part) for part in detail["loc"]) or "settings"
            click.echo(f"  {location}: {detail['msg']}")
        click.echo(format_warning("Hint: Check your environment variables and .env file"))
        return 1

    elif isinstance(error, (UnsupportedFileError, ImportSessionError)):
        click.echo(format_error(f"Data Validation Error: {error}"))
        return 3

    elif isinstance(error, ApiError):
        return _handle_api_error(error)

    elif isinstance(error, requests.exceptions.ConnectionError):
        click.echo(format_error("Backend Unreachable"))
        click.echo(format_warning("Hint: Check API_BASE_URL and your connection"))
        return 9

    # Handle click.Abort (user cancellation)
    elif isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return 130  # Standard exit code for SIGINT

    else:
        click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
        click.echo(str(error))

        if debug:
            click.echo("\nFull stack trace:")
            click.echo(
                "".join(
                    traceback.format_exception(type(error), error, error.__traceback__)
                )
            )
        else:
            click.echo(format_warning("\nRun with --debug flag for full stack trace"))

        return 255


def with_error_handling(debug: bool = False):
    """
    Context manager adding standardized error handling to CLI commands.

    Any exception raised inside the block is reported through
    ``handle_cli_error`` and turned into the matching exit code.

    Example:
        @click.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj["debug"]):
                ...
    """

    class ErrorHandler:
        """Context manager for error handling."""

        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if isinstance(exc_val, Exception) and not isinstance(
                exc_val, click.exceptions.Exit
            ):
                exit_code = handle_cli_error(exc_val, self.show_debug)
                sys.exit(exit_code)
            return False

    return ErrorHandler(debug)
