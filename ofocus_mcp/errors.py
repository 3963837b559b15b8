"""Error construction and classification of raw AppleScript failures."""

from ofocus_mcp.enums import ErrorCode
from ofocus_mcp.models.results import CliError


def create_error(code: ErrorCode, message: str, details: str | None = None) -> CliError:
    """Create a CliError with the given code and message."""
    return CliError(code=code, message=message, details=details)


def _not_found(error_lower: str, kind: str, *extra_patterns: str) -> bool:
    patterns = (f"can't get first flattened {kind}", f"no {kind}", *extra_patterns)
    if any(p in error_lower for p in patterns):
        return True
    return kind in error_lower and "doesn't exist" in error_lower


def parse_applescript_error(raw_error: str) -> CliError:
    """
    Parse an AppleScript error message into a structured CliError.

    Detects common error patterns and maps them to the matching error code.
    The raw message is always preserved in ``details``.

    Args:
        raw_error: stderr text (or exception message) from osascript

    Returns:
        CliError with the most specific code that matches
    """
    error_lower = raw_error.lower()

    if (
        "application isn't running" in error_lower
        or "connection is invalid" in error_lower
        or "not running" in error_lower
    ):
        return create_error(ErrorCode.OMNIFOCUS_NOT_RUNNING, "OmniFocus is not running", raw_error)

    if _not_found(error_lower, "task"):
        return create_error(ErrorCode.TASK_NOT_FOUND, "Task not found", raw_error)

    if _not_found(error_lower, "project"):
        return create_error(ErrorCode.PROJECT_NOT_FOUND, "Project not found", raw_error)

    if _not_found(error_lower, "tag"):
        return create_error(ErrorCode.TAG_NOT_FOUND, "Tag not found", raw_error)

    if _not_found(error_lower, "folder", "can't get folder"):
        return create_error(ErrorCode.FOLDER_NOT_FOUND, "Folder not found", raw_error)

    if _not_found(error_lower, "perspective", "can't get perspective", "perspective not found"):
        return create_error(ErrorCode.PERSPECTIVE_NOT_FOUND, "Perspective not found", raw_error)

    if "can't make" in error_lower and "into type date" in error_lower:
        return create_error(ErrorCode.INVALID_DATE_FORMAT, "Invalid date format", raw_error)

    return create_error(ErrorCode.APPLESCRIPT_ERROR, "AppleScript execution failed", raw_error)
