"""
MCP Server and CLI for OmniFocus.

This package drives OmniFocus through AppleScript (osascript), exposing
tasks, projects, tags, folders, perspectives, focus, sync, TaskPaper and
attachments as MCP tools and as the ``ofocus`` command-line interface.
Every operation returns a structured ``CliOutput`` result so agents can
rely on consistent JSON.
"""

# Re-export enums
from ofocus_mcp.enums import (
    EntityKind,
    ErrorCode,
    FocusTargetType,
    ProjectStatus,
    RepeatMethod,
    RepetitionFrequency,
    ResponseFormat,
    SearchScope,
    StatsPeriod,
)

# Re-export models
from ofocus_mcp.models import (
    AttachmentModel,
    BatchFailure,
    BatchResult,
    CliError,
    CliOutput,
    CommandInfo,
    FolderModel,
    PaginatedResult,
    PerspectiveModel,
    ProjectModel,
    RepetitionRule,
    TagModel,
    TaskModel,
    TaskWithChildrenModel,
)

# Re-export MCP server instance
from ofocus_mcp.server import mcp

# Re-export tools
from ofocus_mcp.tools import (
    archive,
    attachment_add,
    attachment_remove,
    attachments_list,
    compact_database,
    deferred_list,
    export_taskpaper,
    focus_clear,
    focus_get,
    focus_set,
    folder_create,
    folder_delete,
    folder_update,
    folders_list,
    forecast,
    generate_url,
    import_taskpaper,
    inbox_add,
    perspective_query,
    perspectives_list,
    project_create,
    project_delete,
    project_drop,
    project_review,
    project_review_interval,
    project_update,
    projects_for_review,
    projects_list,
    quick_add,
    search,
    stats,
    subtask_create,
    subtasks_list,
    sync_status,
    sync_trigger,
    tag_create,
    tag_delete,
    tag_update,
    tags_list,
    task_complete,
    task_defer,
    task_delete,
    task_drop,
    task_duplicate,
    task_move,
    task_update,
    tasks_complete_batch,
    tasks_defer_batch,
    tasks_delete_batch,
    tasks_list,
    tasks_update_batch,
)

# Re-export utilities (including private functions used by tests)
from ofocus_mcp.utils import (
    _format_result,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
    _run_osascript,
    run_applescript,
)

__all__ = [
    # Enums
    "EntityKind",
    "ErrorCode",
    "ProjectStatus",
    "RepeatMethod",
    "RepetitionFrequency",
    "ResponseFormat",
    "SearchScope",
    "StatsPeriod",
    "FocusTargetType",
    # Entity models
    "TaskModel",
    "TaskWithChildrenModel",
    "ProjectModel",
    "TagModel",
    "FolderModel",
    "PerspectiveModel",
    "RepetitionRule",
    "AttachmentModel",
    # Result models
    "CliError",
    "CliOutput",
    "PaginatedResult",
    "BatchFailure",
    "BatchResult",
    "CommandInfo",
    # Server
    "mcp",
    # Utility functions
    "_run_osascript",
    "run_applescript",
    "_format_result",
    "_format_task_concise",
    "_format_task_markdown",
    "_format_tasks_concise",
    "_format_tasks_markdown",
    # Task tools
    "inbox_add",
    "tasks_list",
    "task_complete",
    "task_update",
    "task_drop",
    "task_delete",
    "task_defer",
    "task_duplicate",
    "search",
    # Batch and subtask tools
    "tasks_complete_batch",
    "tasks_update_batch",
    "tasks_delete_batch",
    "tasks_defer_batch",
    "subtask_create",
    "subtasks_list",
    "task_move",
    # Project tools
    "projects_list",
    "project_create",
    "project_update",
    "project_delete",
    "project_drop",
    "project_review",
    "projects_for_review",
    "project_review_interval",
    # Tag and folder tools
    "tags_list",
    "tag_create",
    "tag_update",
    "tag_delete",
    "folders_list",
    "folder_create",
    "folder_update",
    "folder_delete",
    # Perspective tools
    "perspectives_list",
    "perspective_query",
    # Forecast, focus and capture tools
    "forecast",
    "deferred_list",
    "stats",
    "focus_set",
    "focus_clear",
    "focus_get",
    "quick_add",
    "export_taskpaper",
    "import_taskpaper",
    # Sync and maintenance tools
    "sync_status",
    "sync_trigger",
    "generate_url",
    "archive",
    "compact_database",
    # Attachment tools
    "attachment_add",
    "attachments_list",
    "attachment_remove",
]
