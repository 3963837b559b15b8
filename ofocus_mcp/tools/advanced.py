"""Batch, subtask, perspective and utility MCP tool definitions."""

from mcp.types import ToolAnnotations

from ofocus_mcp import sdk
from ofocus_mcp.models.inputs import (
    ArchiveInput,
    AttachmentAddInput,
    AttachmentRemoveInput,
    CreateSubtaskInput,
    DeferredInput,
    DeferTasksInput,
    ExportTaskPaperInput,
    FocusInput,
    ForecastInput,
    ImportTaskPaperInput,
    ListPerspectivesInput,
    ListSubtasksInput,
    MoveTaskInput,
    QueryPerspectiveInput,
    QuickAddInput,
    StatsInput,
    TaskIdInput,
    TaskIdsInput,
    UpdateTasksInput,
    UrlInput,
)
from ofocus_mcp.server import mcp
from ofocus_mcp.utils.formatters import _format_result

# ============================================================================
# Batch tools
# ============================================================================


@mcp.tool(
    name="tasks_complete_batch",
    annotations=ToolAnnotations(
        title="Complete Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tasks_complete_batch(params: TaskIdsInput) -> str:
    """
    Complete multiple tasks at once.

    Tasks that cannot be completed are listed under "failed"; the others
    still succeed.

    Args:
        params: TaskIdsInput containing task_ids

    Returns:
        JSON with succeeded, failed, totalSucceeded and totalFailed
    """
    return _format_result(sdk.complete_tasks(params.task_ids))


@mcp.tool(
    name="tasks_update_batch",
    annotations=ToolAnnotations(
        title="Update Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tasks_update_batch(params: UpdateTasksInput) -> str:
    """
    Apply the same update to multiple tasks.

    Accepts the same fields as task_update.

    Args:
        params: UpdateTasksInput containing task_ids and the fields to change

    Returns:
        JSON batch result

    Examples:
        - Flag three tasks: params with task_ids=["a", "b", "c"], flag=True
        - Move to a project: params with task_ids=["a", "b"], project="Errands"
    """
    result = sdk.update_tasks(
        params.task_ids,
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
    name="tasks_delete_batch",
    annotations=ToolAnnotations(
        title="Delete Tasks",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tasks_delete_batch(params: TaskIdsInput) -> str:
    """Permanently delete multiple tasks at once."""
    return _format_result(sdk.delete_tasks(params.task_ids))


@mcp.tool(
    name="tasks_defer_batch",
    annotations=ToolAnnotations(
        title="Defer Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def tasks_defer_batch(params: DeferTasksInput) -> str:
    """
    Defer multiple tasks to the same date.

    Args:
        params: DeferTasksInput containing task_ids and days or to

    Returns:
        JSON batch result with previous and new defer dates per task
    """
    return _format_result(sdk.defer_tasks(params.task_ids, days=params.days, to=params.to))


# ============================================================================
# Subtask tools
# ============================================================================


@mcp.tool(
    name="subtask_create",
    annotations=ToolAnnotations(
        title="Create Subtask",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def subtask_create(params: CreateSubtaskInput) -> str:
    """
    Create a subtask under an existing task.

    The parent becomes an action group. Accepts the same options as inbox_add.

    Args:
        params: CreateSubtaskInput containing title, parent_task_id and options

    Returns:
        JSON of the created task with parentTaskId and childTaskCount
    """
    result = sdk.create_subtask(
        params.title,
        params.parent_task_id,
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
    name="subtasks_list",
    annotations=ToolAnnotations(
        title="List Subtasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def subtasks_list(params: ListSubtasksInput) -> str:
    """List the direct children of a task (paginated)."""
    result = sdk.query_subtasks(
        params.parent_task_id,
        completed=params.completed,
        flagged=params.flagged,
        limit=params.limit,
        offset=params.offset,
    )
    return _format_result(result, params.response_format, "Subtasks")


@mcp.tool(
    name="task_move",
    annotations=ToolAnnotations(
        title="Move Task Under Parent",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_move(params: MoveTaskInput) -> str:
    """
    Move a task under another task, making it a subtask.

    Args:
        params: MoveTaskInput containing task_id and parent_task_id

    Returns:
        JSON of the moved task with its new parent
    """
    return _format_result(sdk.move_task_to_parent(params.task_id, params.parent_task_id))


# ============================================================================
# Perspective tools
# ============================================================================


@mcp.tool(
    name="perspectives_list",
    annotations=ToolAnnotations(
        title="List Perspectives",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def perspectives_list(params: ListPerspectivesInput) -> str:
    """List all perspectives, marking which ones are custom."""
    return _format_result(sdk.list_perspectives(), params.response_format, "Perspectives")


@mcp.tool(
    name="perspective_query",
    annotations=ToolAnnotations(
        title="Query Perspective",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def perspective_query(params: QueryPerspectiveInput) -> str:
    """
    List the tasks of a perspective.

    Flagged, Inbox and Forecast return exactly those tasks. Other
    perspectives cannot be evaluated through AppleScript and fall back to
    all incomplete tasks.

    Args:
        params: QueryPerspectiveInput containing name and limit

    Returns:
        Tasks (JSON by default), or a PERSPECTIVE_NOT_FOUND error
    """
    result = sdk.query_perspective(params.name, limit=params.limit)
    return _format_result(result, params.response_format, f"Perspective: {params.name}")


# ============================================================================
# Forecast and deferred tools
# ============================================================================


@mcp.tool(
    name="forecast",
    annotations=ToolAnnotations(
        title="Forecast",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def forecast(params: ForecastInput) -> str:
    """
    List incomplete tasks due within a date range, like the Forecast view.

    USE THIS WHEN:
    - Planning the coming days ("what's due this week?")
    - Looking at a specific date range

    DO NOT USE WHEN:
    - Filtering by project or tag (use tasks_list with due_before/due_after)

    Args:
        params: ForecastInput containing:
            - start (str): First day, default today
            - end (str): Last day; wins over days
            - days (int): Range length, default 7
            - include_deferred (bool): Also match defer dates in the range

    Returns:
        Tasks (JSON by default)
    """
    result = sdk.query_forecast(
        start=params.start,
        end=params.end,
        days=params.days,
        include_deferred=params.include_deferred,
    )
    return _format_result(result, params.response_format, "Forecast")


@mcp.tool(
    name="deferred_list",
    annotations=ToolAnnotations(
        title="List Deferred Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def deferred_list(params: DeferredInput) -> str:
    """
    List incomplete tasks that have a defer date.

    Set blocked_only to see only tasks that are still waiting to become
    available.

    Args:
        params: DeferredInput containing deferred_after, deferred_before and blocked_only

    Returns:
        Tasks (JSON by default)
    """
    result = sdk.query_deferred(
        deferred_after=params.deferred_after,
        deferred_before=params.deferred_before,
        blocked_only=params.blocked_only,
    )
    return _format_result(result, params.response_format, "Deferred Tasks")


# ============================================================================
# Focus tools
# ============================================================================


@mcp.tool(
    name="focus_set",
    annotations=ToolAnnotations(
        title="Focus on Project or Folder",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def focus_set(params: FocusInput) -> str:
    """
    Focus the OmniFocus window on one project or folder.

    Names are matched against projects first, then folders.

    Args:
        params: FocusInput containing target and by_id

    Returns:
        JSON with focused, targetId, targetName and targetType
    """
    return _format_result(sdk.focus(params.target, by_id=params.by_id))


@mcp.tool(
    name="focus_clear",
    annotations=ToolAnnotations(
        title="Clear Focus",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def focus_clear() -> str:
    """Clear focus so the OmniFocus window shows everything."""
    return _format_result(sdk.unfocus())


@mcp.tool(
    name="focus_get",
    annotations=ToolAnnotations(
        title="Get Focus",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def focus_get() -> str:
    """Report which project or folder the OmniFocus window is focused on, if any."""
    return _format_result(sdk.get_focused())


# ============================================================================
# Capture and reporting tools
# ============================================================================


@mcp.tool(
    name="quick_add",
    annotations=ToolAnnotations(
        title="Quick Add Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def quick_add(params: QuickAddInput) -> str:
    """
    Create a task from one line of shorthand.

    USE THIS WHEN:
    - The user dictates a task in natural shorthand

    DO NOT USE WHEN:
    - You already have structured fields (use inbox_add)

    Shorthand:
        @tag, #project (quote names with spaces: #"Home Office"), ! to flag,
        ~30m or ~1.5h, due:tomorrow, defer:monday, due:2024-12-31,
        repeat:weekly or repeat:"every 2 weeks"

    Args:
        params: QuickAddInput containing input and optional note

    Returns:
        JSON of the created task

    Examples:
        - params with input="Buy milk @errands due:today !"
        - params with input='Send report #Work due:friday ~1h repeat:weekly'
    """
    return _format_result(sdk.quick_capture(params.input, note=params.note))


@mcp.tool(
    name="stats",
    annotations=ToolAnnotations(
        title="Productivity Statistics",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stats(params: StatsInput) -> str:
    """
    Summarize completed, remaining, overdue and flagged tasks plus project counts.

    Only the completed count depends on the period; the other counts
    describe the database as it is now.

    Args:
        params: StatsInput containing period, project, since and until

    Returns:
        JSON with periodStart, periodEnd and the counts
    """
    result = sdk.get_stats(
        project=params.project,
        since=params.since,
        until=params.until,
        period=params.period,
    )
    return _format_result(result)


# ============================================================================
# Sync tools
# ============================================================================


@mcp.tool(
    name="sync_status",
    annotations=ToolAnnotations(
        title="Sync Status",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def sync_status() -> str:
    """Report whether OmniFocus is currently syncing."""
    return _format_result(sdk.get_sync_status())


@mcp.tool(
    name="sync_trigger",
    annotations=ToolAnnotations(
        title="Trigger Sync",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    ),
)
async def sync_trigger() -> str:
    """Start an OmniFocus sync. Returns once the sync has been requested."""
    return _format_result(sdk.trigger_sync())


# ============================================================================
# URL tool
# ============================================================================


@mcp.tool(
    name="generate_url",
    annotations=ToolAnnotations(
        title="Generate OmniFocus URL",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def generate_url(params: UrlInput) -> str:
    """
    Build the omnifocus:/// link for a task, project, folder or tag.

    Args:
        params: UrlInput containing id

    Returns:
        JSON with id, type, url and name
    """
    return _format_result(sdk.generate_url(params.id))


# ============================================================================
# Archive tools
# ============================================================================


@mcp.tool(
    name="archive",
    annotations=ToolAnnotations(
        title="Archive Old Tasks",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def archive(params: ArchiveInput) -> str:
    """
    Move old completed or dropped tasks into the OmniFocus archive.

    Run with dry_run first to see how many tasks qualify.

    Args:
        params: ArchiveInput containing completed_before and/or dropped_before,
            project and dry_run

    Returns:
        JSON with tasksArchived, projectsArchived and dryRun
    """
    result = sdk.archive_tasks(
        completed_before=params.completed_before,
        dropped_before=params.dropped_before,
        project=params.project,
        dry_run=params.dry_run,
    )
    return _format_result(result)


@mcp.tool(
    name="compact_database",
    annotations=ToolAnnotations(
        title="Compact Database",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def compact_database() -> str:
    """Compact the OmniFocus database."""
    return _format_result(sdk.compact_database())


# ============================================================================
# TaskPaper tools
# ============================================================================


@mcp.tool(
    name="export_taskpaper",
    annotations=ToolAnnotations(
        title="Export TaskPaper",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def export_taskpaper(params: ExportTaskPaperInput) -> str:
    """
    Export projects and tasks as TaskPaper text.

    Args:
        params: ExportTaskPaperInput containing project, include_completed and include_dropped

    Returns:
        JSON with content, taskCount and projectCount
    """
    result = sdk.export_taskpaper(
        project=params.project,
        include_completed=params.include_completed,
        include_dropped=params.include_dropped,
    )
    return _format_result(result)


@mcp.tool(
    name="import_taskpaper",
    annotations=ToolAnnotations(
        title="Import TaskPaper",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def import_taskpaper(params: ImportTaskPaperInput) -> str:
    """
    Create tasks (and optionally projects) from TaskPaper text.

    Tasks marked @done or @dropped are skipped. Failures for single items
    are reported in "errors" without stopping the import.

    Args:
        params: ImportTaskPaperInput containing content, default_project and create_projects

    Returns:
        JSON with tasksCreated, projectsCreated and errors
    """
    result = sdk.import_taskpaper(
        params.content,
        default_project=params.default_project,
        create_projects=params.create_projects,
    )
    return _format_result(result)


# ============================================================================
# Attachment tools
# ============================================================================


@mcp.tool(
    name="attachment_add",
    annotations=ToolAnnotations(
        title="Add Attachment",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def attachment_add(params: AttachmentAddInput) -> str:
    """
    Attach a local file to a task.

    Args:
        params: AttachmentAddInput containing task_id and file_path

    Returns:
        JSON with taskId, taskName, fileName and attached
    """
    return _format_result(sdk.add_attachment(params.task_id, params.file_path))


@mcp.tool(
    name="attachments_list",
    annotations=ToolAnnotations(
        title="List Attachments",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def attachments_list(params: TaskIdInput) -> str:
    """List the attachments of a task."""
    return _format_result(sdk.list_attachments(params.task_id))


@mcp.tool(
    name="attachment_remove",
    annotations=ToolAnnotations(
        title="Remove Attachment",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def attachment_remove(params: AttachmentRemoveInput) -> str:
    """
    Remove an attachment from a task.

    Args:
        params: AttachmentRemoveInput containing task_id and attachment (ID or name)

    Returns:
        JSON with taskId, attachmentName and removed
    """
    return _format_result(sdk.remove_attachment(params.task_id, params.attachment))
