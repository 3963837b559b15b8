"""AppleScript composition and execution through ``osascript``."""

import json
import logging
import subprocess
from dataclasses import dataclass
from typing import Any

from ofocus_mcp.config import get_settings
from ofocus_mcp.enums import ErrorCode
from ofocus_mcp.errors import create_error, parse_applescript_error
from ofocus_mcp.models.results import CliError

logger = logging.getLogger(__name__)


@dataclass
class AppleScriptResult:
    """Outcome of one script execution: parsed data on success, an error otherwise."""

    success: bool
    data: Any = None
    error: CliError | None = None


def _run_osascript(script: str) -> tuple[bool, str]:
    """
    Execute an AppleScript source string with osascript.

    The script is passed as a single argv element, so no shell quoting
    is involved.

    Args:
        script: Complete AppleScript source

    Returns:
        Tuple of (success: bool, output: str). On failure the output is the
        raw error text.
    """
    settings = get_settings()
    try:
        cmd = [settings.osascript_path, "-e", script]
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=settings.timeout)

        output = result.stdout.strip()
        if result.returncode != 0:
            error = result.stderr.strip() or output
            return False, error

        if result.stderr.strip():
            logger.debug("osascript stderr: %s", result.stderr.strip())
        return True, output

    except subprocess.TimeoutExpired:
        return False, f"Command timed out after {settings.timeout} seconds"
    except FileNotFoundError:
        return False, f"osascript not found at '{settings.osascript_path}'. OFocus requires macOS."
    except OSError as e:
        return False, f"Unexpected error - {type(e).__name__}: {str(e)}"


def run_applescript(script: str) -> AppleScriptResult:
    """
    Run a script and parse its standard output.

    Output is decoded as JSON when possible and returned as a plain string
    otherwise. Empty output counts as a failure.
    """
    logger.debug("Running AppleScript (%d chars)", len(script))
    ok, output = _run_osascript(script)

    if not ok:
        logger.info("AppleScript failed: %s", output)
        return AppleScriptResult(success=False, error=parse_applescript_error(output))

    if output == "":
        return AppleScriptResult(
            success=False,
            error=create_error(ErrorCode.APPLESCRIPT_ERROR, "AppleScript returned empty response"),
        )

    try:
        return AppleScriptResult(success=True, data=json.loads(output))
    except json.JSONDecodeError:
        return AppleScriptResult(success=True, data=output)


def _indent(text: str, prefix: str) -> str:
    return "\n".join(prefix + line if line.strip() else line for line in text.strip("\n").splitlines())


def compose_script(handlers: list[str], body: str) -> str:
    """
    Put handler definitions at top level and ``body`` inside the application tell block.

    Args:
        handlers: Handler source (``on ... end`` blocks)
        body: Statements to run against the default document

    Returns:
        Complete AppleScript source
    """
    app_name = get_settings().app_name
    handlers_code = "\n\n".join(h.strip("\n") for h in handlers)
    return (
        f"{handlers_code}\n\n"
        f'tell application "{app_name}"\n'
        f"\ttell default document\n"
        f"{_indent(body, chr(9) * 2)}\n"
        f"\tend tell\n"
        f"end tell\n"
    )


def run_composed_script(handlers: list[str], body: str) -> AppleScriptResult:
    """Compose and run a script in one step."""
    return run_applescript(compose_script(handlers, body))
