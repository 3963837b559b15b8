"""Utility functions for OFocus MCP."""

from ofocus_mcp.utils.applescript import (
    AppleScriptResult,
    _run_osascript,
    compose_script,
    run_applescript,
    run_composed_script,
)
from ofocus_mcp.utils.formatters import (
    _format_result,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
)

__all__ = [
    "AppleScriptResult",
    "_run_osascript",
    "run_applescript",
    "run_composed_script",
    "compose_script",
    "_format_result",
    "_format_task_concise",
    "_format_task_markdown",
    "_format_tasks_concise",
    "_format_tasks_markdown",
]
