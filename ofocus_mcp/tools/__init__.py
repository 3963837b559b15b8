"""MCP tool definitions for OFocus."""

# Import all tools to register them with the MCP server
from ofocus_mcp.tools.advanced import (
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
    forecast,
    generate_url,
    import_taskpaper,
    perspective_query,
    perspectives_list,
    quick_add,
    stats,
    subtask_create,
    subtasks_list,
    sync_status,
    sync_trigger,
    task_move,
    tasks_complete_batch,
    tasks_defer_batch,
    tasks_delete_batch,
    tasks_update_batch,
)
from ofocus_mcp.tools.folders import folder_create, folder_delete, folder_update, folders_list
from ofocus_mcp.tools.projects import (
    project_create,
    project_delete,
    project_drop,
    project_review,
    project_review_interval,
    project_update,
    projects_for_review,
    projects_list,
)
from ofocus_mcp.tools.tags import tag_create, tag_delete, tag_update, tags_list
from ofocus_mcp.tools.tasks import (
    inbox_add,
    search,
    task_complete,
    task_defer,
    task_delete,
    task_drop,
    task_duplicate,
    task_update,
    tasks_list,
)

__all__ = [
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
    # Batch tools
    "tasks_complete_batch",
    "tasks_update_batch",
    "tasks_delete_batch",
    "tasks_defer_batch",
    # Subtask tools
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
    # Tag tools
    "tags_list",
    "tag_create",
    "tag_update",
    "tag_delete",
    # Folder tools
    "folders_list",
    "folder_create",
    "folder_update",
    "folder_delete",
    # Perspective tools
    "perspectives_list",
    "perspective_query",
    # Forecast and review tools
    "forecast",
    "deferred_list",
    "stats",
    # Focus tools
    "focus_set",
    "focus_clear",
    "focus_get",
    # Capture tools
    "quick_add",
    "import_taskpaper",
    "export_taskpaper",
    # Sync and maintenance tools
    "sync_status",
    "sync_trigger",
    "archive",
    "compact_database",
    "generate_url",
    # Attachment tools
    "attachment_add",
    "attachments_list",
    "attachment_remove",
]
