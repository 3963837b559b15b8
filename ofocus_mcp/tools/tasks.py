"""Task MCP tool definitions."""

from mcp.types import ToolAnnotations

from ofocus_mcp import sdk
from ofocus_mcp.models.inputs import (
    DeferTaskInput,
    DuplicateTaskInput,
    InboxAddInput,
    ListTasksInput,
    SearchInput,
    TaskIdInput,
    UpdateTaskInput,
)
from ofocus_mcp.server import mcp
from ofocus_mcp.utils.formatters import _format_result


@mcp.tool(
    name="inbox_add",
    annotations=ToolAnnotations(
        title="Add Task to Inbox",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def inbox_add(params: InboxAddInput) -> str:
    """
    Add a new task to the OmniFocus inbox.

    USE THIS WHEN:
    - Capturing a new task that has not been organized yet
    - Creating a task with dates, flag, tags, estimate or repetition

    DO NOT USE WHEN:
    - The task belongs under an existing task → use subtask_create instead
    - Changing an existing task → use task_update instead

    Args:
        params: InboxAddInput containing title and optional attributes

    Returns:
        JSON of the created task, including its ID

    Examples:
        - Simple task: params with title="Buy milk"
        - With due date: params with title="File taxes", due="2025-04-15"
        - Repeating: params with title="Water plants", repeat={"frequency": "weekly", "days_of_week": [1, 4]}
    """
    result = sdk.add_to_inbox(
        params.title,
        note=params.note,
        due=params.due,
        defer=params.defer,
        flag=params.flag,
        tags=params.tags,
        estimated_minutes=params.estimated_minutes,
        repeat=params.repeat,
    )
    return _format_result(result)


@mcp.tool(
    name="tasks_list",
    annotations=ToolAnnotations(
        title="List Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tasks_list(params: ListTasksInput) -> str:
    """
    List and filter tasks from OmniFocus.

    USE THIS WHEN:
    - Getting tasks for a project or tag
    - Finding tasks due within a date range
    - Listing flagged, completed or available tasks

    DO NOT USE WHEN:
    - Looking for text in names or notes → use search instead
    - Listing the children of one task → use subtasks_list instead

    Results are paginated: check hasMore and pass offset to get the next page.

    Args:
        params: ListTasksInput containing filters, limit, offset and response_format

    Returns:
        Paginated tasks (JSON by default, or markdown / concise)

    Examples:
        - Flagged tasks: params with flagged=True
        - Project tasks: params with project="Website Redesign"
        - Due this year: params with due_before="2025-12-31"
    """
    result = sdk.query_tasks(
        project=params.project,
        tag=params.tag,
        due_before=params.due_before,
        due_after=params.due_after,
        flagged=params.flagged,
        completed=params.completed,
        available=params.available,
        limit=params.limit,
        offset=params.offset,
    )
    return _format_result(result, params.response_format, "Tasks")


@mcp.tool(
    name="task_complete",
    annotations=ToolAnnotations(
        title="Complete Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_complete(params: TaskIdInput) -> str:
    """
    Mark a task as complete.

    Args:
        params: TaskIdInput containing the task_id to complete

    Returns:
        JSON with taskId, taskName and completed
    """
    return _format_result(sdk.complete_task(params.task_id))


@mcp.tool(
    name="task_update",
    annotations=ToolAnnotations(
        title="Update Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_update(params: UpdateTaskInput) -> str:
    """
    Update properties of an existing task.

    USE THIS WHEN:
    - Renaming a task or changing its note
    - Changing dates, flag, project, tags, estimate or repetition

    DO NOT USE WHEN:
    - Several tasks need the same change → use tasks_update_batch instead
    - Only pushing the defer date out → use task_defer instead

    CLEARING VALUES: Use empty string to clear due, defer or project
    (project="" moves the task back to the inbox). tags replaces all tags.

    Args:
        params: UpdateTaskInput containing task_id and the fields to change

    Returns:
        JSON of the updated task

    Examples:
        - Flag it: params with task_id="abc123", flag=True
        - Remove due date: params with task_id="abc123", due=""
        - Stop repeating: params with task_id="abc123", clear_repeat=True
    """
    result = sdk.update_task(
        params.task_id,
        title=params.title,
        note=params.note,
        due=params.due,
        defer=params.defer,
        flag=params.flag,
        project=params.project,
        tags=params.tags,
        estimated_minutes=params.estimated_minutes,
        clear_estimate=params.clear_estimate,
        repeat=params.repeat,
        clear_repeat=params.clear_repeat,
    )
    return _format_result(result)


@mcp.tool(
    name="task_drop",
    annotations=ToolAnnotations(
        title="Drop Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_drop(params: TaskIdInput) -> str:
    """
    Drop (cancel) a task. The task stays in the database, unlike task_delete.

    Args:
        params: TaskIdInput containing the task_id to drop

    Returns:
        JSON with taskId, taskName and dropped
    """
    return _format_result(sdk.drop_task(params.task_id))


@mcp.tool(
    name="task_delete",
    annotations=ToolAnnotations(
        title="Delete Task",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_delete(params: TaskIdInput) -> str:
    """
    Permanently delete a task from OmniFocus.

    This cannot be undone from here. Prefer task_drop to cancel a task
    while keeping its history.

    Args:
        params: TaskIdInput containing the task_id to delete

    Returns:
        JSON with taskId and deleted, or a TASK_NOT_FOUND error
    """
    return _format_result(sdk.delete_task(params.task_id))


@mcp.tool(
    name="task_defer",
    annotations=ToolAnnotations(
        title="Defer Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def task_defer(params: DeferTaskInput) -> str:
    """
    Defer a task to a later date.

    Give either days (relative to now) or to (a fixed date).

    Args:
        params: DeferTaskInput containing task_id and days or to

    Returns:
        JSON with the previous and new defer dates

    Examples:
        - Next week: params with task_id="abc123", days=7
        - Fixed date: params with task_id="abc123", to="2025-01-06"
    """
    return _format_result(sdk.defer_task(params.task_id, days=params.days, to=params.to))


@mcp.tool(
    name="task_duplicate",
    annotations=ToolAnnotations(
        title="Duplicate Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def task_duplicate(params: DuplicateTaskInput) -> str:
    """Duplicate a task, with or without its subtasks."""
    return _format_result(sdk.duplicate_task(params.task_id, include_subtasks=params.include_subtasks))


@mcp.tool(
    name="search",
    annotations=ToolAnnotations(
        title="Search Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def search(params: SearchInput) -> str:
    """
    Search tasks by text (case-insensitive).

    USE THIS WHEN:
    - You remember words from a task's name or note but not its ID

    DO NOT USE WHEN:
    - Filtering by project, tag, flag or dates → use tasks_list instead

    Args:
        params: SearchInput containing query, scope, limit and include_completed

    Returns:
        Matching tasks (JSON by default, or markdown / concise)

    Examples:
        - Names only: params with query="invoice", scope="name"
        - Include done: params with query="dentist", include_completed=True
    """
    result = sdk.search_tasks(
        params.query,
        scope=params.scope,
        limit=params.limit,
        include_completed=params.include_completed,
    )
    return _format_result(result, params.response_format, f"Tasks matching '{params.query}'")
