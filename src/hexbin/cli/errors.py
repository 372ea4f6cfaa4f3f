"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the CLI.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from hexbin.errors import HexBinError


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    CONVERSION_ERROR = 1  # Malformed input, bad checksum or record protocol error
    INVALID_ARGS = 2      # Invalid arguments or missing files
    INTERNAL_ERROR = 3    # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for the CLI.

    Prints the error to stderr, optionally prints a traceback for
    internal errors in verbose mode, and exits with the matching code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, HexBinError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.CONVERSION_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, UnicodeDecodeError):
        # Input is not text in the configured encoding
        click.echo(f"Error: input is not valid text: {error}", err=True)
        sys.exit(ExitCode.CONVERSION_ERROR)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
