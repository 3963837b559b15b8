"""Archiving old completed or dropped tasks and compacting the database."""

import logging

from ofocus_mcp.enums import ErrorCode
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.results import ArchiveResult, CliOutput, CompactResult
from ofocus_mcp.sdk.common import JSON_ONLY, execute
from ofocus_mcp.utils.escape import applescript_date, json_object_expr, quote_applescript
from ofocus_mcp.utils.result import failure
from ofocus_mcp.utils.validation import first_error, validate_date_string, validate_project_name

logger = logging.getLogger(__name__)


def archive_tasks(
    completed_before: str | None = None,
    dropped_before: str | None = None,
    project: str | None = None,
    dry_run: bool = False,
) -> CliOutput:
    """
    Move old completed or dropped tasks into the OmniFocus archive.

    A task qualifies when it was completed before ``completed_before`` or
    dropped (last modified) before ``dropped_before``. OmniFocus moves
    qualifying items itself when the database is compacted, so unless
    ``dry_run`` is set a compact is run whenever anything qualifies.
    ``projectsArchived`` counts completed and dropped projects.

    Returns:
        CliOutput wrapping ArchiveResult
    """
    if error := first_error(
        validate_date_string(completed_before),
        validate_date_string(dropped_before),
        validate_project_name(project),
    ):
        return failure(error)

    conditions = []
    if completed_before:
        conditions.append(
            f"(completion date of t is not missing value and completion date of t < {applescript_date(completed_before)})"
        )
    if dropped_before:
        conditions.append(f"(dropped of t is true and modification date of t < {applescript_date(dropped_before)})")
    if not conditions:
        return failure(
            create_error(ErrorCode.VALIDATION_ERROR, "At least one of completed_before or dropped_before is required")
        )

    project_check = ""
    if project:
        project_check = f"\t\tif name of containing project of t is not {quote_applescript(project)} then set matches to false\n"

    result = json_object_expr(
        [
            ("tasksArchived", "taskCount"),
            ("projectsArchived", "projectCount"),
            ("dryRun", f'"{"true" if dry_run else "false"}"'),
            ("archivePath", '"null"'),
        ]
    )
    matches = " or ".join(conditions)
    compact_step = "" if dry_run else "if taskCount > 0 then compact"
    body = f"""set taskCount to 0
set projectCount to 0
repeat with t in flattened tasks
	try
		set matches to {matches}
{project_check}		if matches then set taskCount to taskCount + 1
	end try
end repeat
{compact_step}
repeat with p in flattened projects
	try
		if status of p is done status or status of p is dropped status then set projectCount to projectCount + 1
	end try
end repeat
return {result}
"""
    logger.debug("Archiving (completed_before=%s, dropped_before=%s, dry_run=%s)", completed_before, dropped_before, dry_run)
    return execute(JSON_ONLY, body, "Failed to archive tasks", ArchiveResult)


def compact_database() -> CliOutput:
    """Compact the database, which also moves archivable items out of it."""
    result = json_object_expr([("compacted", '"true"'), ("message", '"\\"Database compaction triggered\\""')])
    body = f"compact\nreturn {result}\n"
    return execute(JSON_ONLY, body, "Failed to compact database", CompactResult)
