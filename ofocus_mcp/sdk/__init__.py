"""OmniFocus SDK: one function per operation, each returning a ``CliOutput``."""

from ofocus_mcp.sdk.archive import archive_tasks, compact_database
from ofocus_mcp.sdk.attachments import add_attachment, list_attachments, remove_attachment
from ofocus_mcp.sdk.batch import complete_tasks, defer_tasks, delete_tasks, update_tasks
from ofocus_mcp.sdk.deferred import query_deferred
from ofocus_mcp.sdk.focus import focus, get_focused, unfocus
from ofocus_mcp.sdk.folders import create_folder, delete_folder, query_folders, update_folder
from ofocus_mcp.sdk.forecast import query_forecast
from ofocus_mcp.sdk.perspectives import BUILT_IN_PERSPECTIVES, list_perspectives, query_perspective
from ofocus_mcp.sdk.projects import (
    create_project,
    delete_project,
    drop_project,
    get_review_interval,
    query_projects,
    query_projects_for_review,
    review_project,
    set_review_interval,
    update_project,
)
from ofocus_mcp.sdk.quick import parse_quick_input, quick_capture
from ofocus_mcp.sdk.repetition import build_clear_repetition_script, build_repetition_rule_script, build_rrule
from ofocus_mcp.sdk.stats import get_stats
from ofocus_mcp.sdk.subtasks import create_subtask, move_task_to_parent, query_subtasks
from ofocus_mcp.sdk.sync import get_sync_status, trigger_sync
from ofocus_mcp.sdk.tags import create_tag, delete_tag, query_tags, update_tag
from ofocus_mcp.sdk.taskpaper import export_taskpaper, import_taskpaper
from ofocus_mcp.sdk.tasks import (
    add_task,
    add_to_inbox,
    complete_task,
    defer_task,
    delete_task,
    drop_task,
    duplicate_task,
    query_tasks,
    search_tasks,
    update_task,
)
from ofocus_mcp.sdk.url import generate_url, open_item

__all__ = [
    # Tasks
    "add_to_inbox",
    "add_task",
    "query_tasks",
    "complete_task",
    "drop_task",
    "delete_task",
    "update_task",
    "search_tasks",
    "defer_task",
    "duplicate_task",
    # Subtasks
    "create_subtask",
    "query_subtasks",
    "move_task_to_parent",
    # Batch
    "complete_tasks",
    "update_tasks",
    "delete_tasks",
    "defer_tasks",
    # Projects
    "query_projects",
    "create_project",
    "update_project",
    "delete_project",
    "drop_project",
    "review_project",
    "query_projects_for_review",
    "get_review_interval",
    "set_review_interval",
    # Tags
    "query_tags",
    "create_tag",
    "update_tag",
    "delete_tag",
    # Folders
    "query_folders",
    "create_folder",
    "update_folder",
    "delete_folder",
    # Perspectives
    "BUILT_IN_PERSPECTIVES",
    "list_perspectives",
    "query_perspective",
    # Repetition
    "build_rrule",
    "build_repetition_rule_script",
    "build_clear_repetition_script",
    # Forecast and deferred
    "query_forecast",
    "query_deferred",
    # Focus
    "focus",
    "unfocus",
    "get_focused",
    # Quick capture
    "parse_quick_input",
    "quick_capture",
    # Statistics
    "get_stats",
    # Sync
    "get_sync_status",
    "trigger_sync",
    # URLs
    "generate_url",
    "open_item",
    # Archive
    "archive_tasks",
    "compact_database",
    # TaskPaper
    "export_taskpaper",
    "import_taskpaper",
    # Attachments
    "add_attachment",
    "list_attachments",
    "remove_attachment",
]
