"""Logging configuration for the CLI and the MCP server."""

from __future__ import annotations

import logging
import sys

from ofocus_mcp.config import get_settings


def setup_logging(level: int | str | None = None) -> None:
    """
    Send log records to stderr.

    stdout is reserved for the MCP stdio transport and for CLI JSON output,
    so nothing may ever be logged there. Call this once, early.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    logging.captureWarnings(True)
