"""Batch task operations. Large ID lists are split into chunks, one script per chunk."""

import logging
from typing import Any

from ofocus_mcp.enums import EntityKind
from ofocus_mcp.models.entities import RepetitionRule
from ofocus_mcp.models.results import BatchDeleteItem, BatchTaskItem, CliOutput, DeferResult
from ofocus_mcp.sdk.common import JSON_ONLY, batch_body, chunked, execute, merge_batches
from ofocus_mcp.sdk.tasks import (
    defer_statement,
    task_update_statements,
    validate_defer,
    validate_task_updates,
)
from ofocus_mcp.utils.escape import applescript_list
from ofocus_mcp.utils.result import failure, success
from ofocus_mcp.utils.validation import validate_ids

logger = logging.getLogger(__name__)

_TASK_ITEM = (
    '"{\\"taskId\\": \\"" & itemId & "\\", \\"taskName\\": \\"" & (my escapeJson(name of theTask)) & "\\"}"'
)


def _run_batch(
    task_ids: list[str], setup: str, per_item: str, succeeded_expr: str, item_type: Any, label: str
) -> CliOutput:
    results = []
    for chunk in chunked(task_ids):
        body = batch_body(applescript_list(chunk), setup, per_item, succeeded_expr)
        results.append((chunk, execute(JSON_ONLY, body, f"Failed to {label} tasks")))
    batch = merge_batches(results, item_type)
    logger.info("Batch %s: %d succeeded, %d failed", label, batch.total_succeeded, batch.total_failed)
    return success(batch)


def complete_tasks(task_ids: list[str]) -> CliOutput:
    """Mark many tasks complete; per-task failures are reported, not raised."""
    if error := validate_ids(task_ids, EntityKind.TASK):
        return failure(error)
    return _run_batch(task_ids, "", "mark complete theTask", _TASK_ITEM, BatchTaskItem, "complete")


def update_tasks(
    task_ids: list[str],
    title: str | None = None,
    note: str | None = None,
    due: str | None = None,
    defer: str | None = None,
    flag: bool | None = None,
    project: str | None = None,
    tags: list[str] | None = None,
    estimated_minutes: int | None = None,
    clear_estimate: bool = False,
    repeat: RepetitionRule | dict | None = None,
    clear_repeat: bool = False,
) -> CliOutput:
    """Apply the same partial update to many tasks."""
    if error := validate_ids(task_ids, EntityKind.TASK):
        return failure(error)
    rule, error = validate_task_updates(due, defer, project, tags, estimated_minutes, repeat)
    if error:
        return failure(error)

    updates = task_update_statements(
        "theTask",
        title=title,
        note=note,
        due=due,
        defer=defer,
        flag=flag,
        project=project,
        tags=tags,
        estimated_minutes=estimated_minutes,
        clear_estimate=clear_estimate,
        repeat=rule,
        clear_repeat=clear_repeat,
    )
    return _run_batch(task_ids, "", updates or "-- no changes", _TASK_ITEM, BatchTaskItem, "update")


def delete_tasks(task_ids: list[str]) -> CliOutput:
    """Permanently delete many tasks."""
    if error := validate_ids(task_ids, EntityKind.TASK):
        return failure(error)
    return _run_batch(
        task_ids,
        "",
        "delete theTask",
        '"{\\"taskId\\": \\"" & itemId & "\\"}"',
        BatchDeleteItem,
        "delete",
    )


def defer_tasks(task_ids: list[str], days: int | None = None, to: str | None = None) -> CliOutput:
    """Defer many tasks by the same number of days or to the same date."""
    if error := validate_ids(task_ids, EntityKind.TASK):
        return failure(error)
    if error := validate_defer(days, to):
        return failure(error)

    per_item = (
        'set prevDefer to ""\n'
        "try\n"
        "\tset prevDefer to (defer date of theTask) as string\n"
        "end try\n"
        "set defer date of theTask to newDefer"
    )
    succeeded = (
        '"{\\"taskId\\": \\"" & itemId & "\\", \\"taskName\\": \\"" & (my escapeJson(name of theTask)) & '
        '"\\", \\"previousDeferDate\\": " & (my jsonString(prevDefer)) & ", \\"newDeferDate\\": \\"" & '
        '(my escapeJson((defer date of theTask) as string)) & "\\"}"'
    )
    setup = "set rightNow to current date\n" + defer_statement(days, to, now_var="rightNow")
    return _run_batch(task_ids, setup, per_item, succeeded, DeferResult, "defer")
