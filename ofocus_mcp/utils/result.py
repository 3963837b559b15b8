"""Constructors for the ``CliOutput`` envelope."""

from typing import Any

from ofocus_mcp.enums import ErrorCode
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.results import CliError, CliOutput


def success(data: Any) -> CliOutput:
    """Wrap ``data`` in a successful envelope."""
    return CliOutput(success=True, data=data, error=None)


def failure(error: CliError) -> CliOutput:
    """Wrap ``error`` in a failed envelope."""
    return CliOutput(success=False, data=None, error=error)


def failure_message(message: str, code: ErrorCode = ErrorCode.UNKNOWN_ERROR) -> CliOutput:
    """Shorthand for a failure built from a message and code."""
    return failure(create_error(code, message))
