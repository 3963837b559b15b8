"""``ofocus`` command-line interface: one subcommand per SDK operation."""

import argparse
import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from ofocus_mcp import sdk
from ofocus_mcp.enums import ErrorCode, ProjectStatus, RepeatMethod, RepetitionFrequency, SearchScope, StatsPeriod
from ofocus_mcp.logging_setup import setup_logging
from ofocus_mcp.models.results import CliOutput, CommandInfo, to_jsonable
from ofocus_mcp.utils.formatters import _format_human
from ofocus_mcp.utils.result import failure_message, success

logger = logging.getLogger(__name__)

COMMANDS: list[CommandInfo] = []


def _command(
    sp: argparse._SubParsersAction,
    name: str,
    description: str,
    usage: str,
    func: Callable[[argparse.Namespace], CliOutput],
) -> argparse.ArgumentParser:
    """Register a subcommand and record it for ``list-commands``."""
    parser = sp.add_parser(name, help=description, description=description)
    parser.set_defaults(func=func)
    COMMANDS.append(CommandInfo(name=name, description=description, usage=f"ofocus {usage}".rstrip()))
    return parser


def _days_list(value: str) -> list[int]:
    try:
        return [int(v) for v in value.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {value!r}")


def _bool_filter(on: bool, off: bool) -> bool | None:
    if on:
        return True
    if off:
        return False
    return None


def _add_task_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("-n", "--note", help="Task note")
    p.add_argument("-d", "--due", help="Due date")
    p.add_argument("--defer", help="Defer date")
    p.add_argument("-t", "--tag", action="append", dest="tags", help="Tag to apply (repeatable)")
    p.add_argument("-e", "--estimate", type=int, dest="estimated_minutes", help="Estimated minutes")
    _add_repeat_options(p)


def _add_repeat_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--repeat", choices=[f.value for f in RepetitionFrequency], help="Repeat frequency")
    p.add_argument("--interval", type=int, default=1, help="Repeat every N periods")
    p.add_argument(
        "--repeat-method",
        choices=[m.value for m in RepeatMethod],
        default=RepeatMethod.DUE_AGAIN.value,
        help="Which date moves forward on completion",
    )
    p.add_argument("--days-of-week", type=_days_list, help="Weekdays 0-6 (Sunday=0), comma-separated")
    p.add_argument("--day-of-month", type=int, help="Day of month 1-31")


def _add_update_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--title", help="New title")
    p.add_argument("-n", "--note", help="New note")
    p.add_argument("-d", "--due", help="New due date (empty string clears)")
    p.add_argument("--defer", help="New defer date (empty string clears)")
    flag = p.add_mutually_exclusive_group()
    flag.add_argument("--flag", action="store_true", help="Flag the task")
    flag.add_argument("--unflag", action="store_true", help="Unflag the task")
    p.add_argument("-p", "--project", help="Move to project (empty string moves to inbox)")
    p.add_argument("-t", "--tag", action="append", dest="tags", help="Replace tags (repeatable)")
    p.add_argument("-e", "--estimate", type=int, dest="estimated_minutes", help="Estimated minutes")
    p.add_argument("--clear-estimate", action="store_true", help="Remove the estimate")
    p.add_argument("--clear-repeat", action="store_true", help="Stop repeating")
    _add_repeat_options(p)


def _repeat(args: argparse.Namespace) -> dict | None:
    if not args.repeat:
        return None
    rule = {"frequency": args.repeat, "interval": args.interval, "repeat_method": args.repeat_method}
    if args.days_of_week is not None:
        rule["days_of_week"] = args.days_of_week
    if args.day_of_month is not None:
        rule["day_of_month"] = args.day_of_month
    return rule


def _update_kwargs(args: argparse.Namespace) -> dict:
    return {
        "title": args.title,
        "note": args.note,
        "due": args.due,
        "defer": args.defer,
        "flag": _bool_filter(args.flag, args.unflag),
        "project": args.project,
        "tags": args.tags,
        "estimated_minutes": args.estimated_minutes,
        "clear_estimate": args.clear_estimate,
        "repeat": _repeat(args),
        "clear_repeat": args.clear_repeat,
    }


def _add_pagination(p: argparse.ArgumentParser) -> None:
    p.add_argument("--limit", type=int, help="Maximum items to return (default 100)")
    p.add_argument("--offset", type=int, help="Items to skip (default 0)")


def build_parser() -> argparse.ArgumentParser:
    COMMANDS.clear()
    parser = argparse.ArgumentParser(prog="ofocus", description="OmniFocus CLI for AI agents")
    fmt = parser.add_mutually_exclusive_group()
    fmt.add_argument("--json", dest="human", action="store_false", help="Output as JSON (default)")
    fmt.add_argument("--human", dest="human", action="store_true", help="Output as human-readable text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    parser.set_defaults(human=False)
    sp = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    _command(
        sp, "list-commands", "List all available commands with descriptions", "list-commands",
        lambda a: success(list(COMMANDS)),
    )

    # ---- Tasks ----
    p = _command(
        sp, "inbox", "Add a task to the OmniFocus inbox",
        "inbox <title> [--note <text>] [--due <date>] [--defer <date>] [--flag] [--tag <name>]...",
        lambda a: sdk.add_to_inbox(
            a.title, note=a.note, due=a.due, defer=a.defer, flag=a.flag, tags=a.tags,
            estimated_minutes=a.estimated_minutes, repeat=_repeat(a),
        ),
    )
    p.add_argument("title", help="Task title")
    p.add_argument("-f", "--flag", action="store_true", help="Flag the task")
    _add_task_options(p)

    p = _command(
        sp, "tasks", "Query tasks with filters",
        "tasks [--project <name>] [--tag <name>] [--due-before <date>] [--due-after <date>] "
        "[--flagged] [--completed|--incomplete] [--available] [--limit <n>] [--offset <n>]",
        lambda a: sdk.query_tasks(
            project=a.project, tag=a.tag, due_before=a.due_before, due_after=a.due_after,
            flagged=True if a.flagged else None, completed=_bool_filter(a.completed, a.incomplete),
            available=True if a.available else None, limit=a.limit, offset=a.offset,
        ),
    )
    p.add_argument("-p", "--project", help="Filter by project name")
    p.add_argument("-t", "--tag", help="Filter by tag name")
    p.add_argument("--due-before", help="Only tasks due before this date")
    p.add_argument("--due-after", help="Only tasks due after this date")
    p.add_argument("--flagged", action="store_true", help="Only flagged tasks")
    done = p.add_mutually_exclusive_group()
    done.add_argument("--completed", action="store_true", help="Only completed tasks")
    done.add_argument("--incomplete", action="store_true", help="Only incomplete tasks")
    p.add_argument("--available", action="store_true", help="Only available (actionable) tasks")
    _add_pagination(p)

    for name, description, func in (
        ("complete", "Mark a task as complete", sdk.complete_task),
        ("drop", "Drop (cancel) a task", sdk.drop_task),
        ("delete", "Permanently delete a task", sdk.delete_task),
    ):
        p = _command(sp, name, description, f"{name} <task-id>", lambda a, f=func: f(a.task_id))
        p.add_argument("task_id", help="Task ID")

    p = _command(
        sp, "update", "Update properties of a task",
        "update <task-id> [--title <t>] [--note <n>] [--due <date>] [--defer <date>] [--flag|--unflag] "
        "[--project <name>] [--tag <name>]... [--estimate <min>] [--repeat <freq>] [--clear-repeat]",
        lambda a: sdk.update_task(a.task_id, **_update_kwargs(a)),
    )
    p.add_argument("task_id", help="Task ID")
    _add_update_options(p)

    p = _command(
        sp, "search", "Search tasks by text in name and/or note",
        "search <query> [--scope name|note|both] [--limit <n>] [--include-completed]",
        lambda a: sdk.search_tasks(a.query, scope=a.scope, limit=a.limit, include_completed=a.include_completed),
    )
    p.add_argument("query", help="Text to search for")
    p.add_argument("--scope", choices=[s.value for s in SearchScope], default=SearchScope.BOTH.value)
    p.add_argument("--limit", type=int, help="Maximum results (default 100)")
    p.add_argument("--include-completed", action="store_true", help="Also match completed tasks")

    p = _command(
        sp, "defer", "Defer a task by days or to a date",
        "defer <task-id> (--days <n> | --to <date>)",
        lambda a: sdk.defer_task(a.task_id, days=a.days, to=a.to),
    )
    p.add_argument("task_id", help="Task ID")
    when = p.add_mutually_exclusive_group(required=True)
    when.add_argument("--days", type=int, help="Days from now")
    when.add_argument("--to", help="Date to defer to")

    p = _command(
        sp, "duplicate", "Duplicate a task", "duplicate <task-id> [--no-subtasks]",
        lambda a: sdk.duplicate_task(a.task_id, include_subtasks=not a.no_subtasks),
    )
    p.add_argument("task_id", help="Task ID")
    p.add_argument("--no-subtasks", action="store_true", help="Do not copy subtasks")

    # ---- Subtasks ----
    p = _command(
        sp, "subtask", "Create a subtask under a parent task",
        "subtask <title> --parent <task-id> [--note <text>] [--due <date>] [--flag] [--tag <name>]...",
        lambda a: sdk.create_subtask(
            a.title, a.parent, note=a.note, due=a.due, defer=a.defer, flag=a.flag, tags=a.tags,
            estimated_minutes=a.estimated_minutes, repeat=_repeat(a),
        ),
    )
    p.add_argument("title", help="Subtask title")
    p.add_argument("--parent", required=True, help="Parent task ID")
    p.add_argument("-f", "--flag", action="store_true", help="Flag the task")
    _add_task_options(p)

    p = _command(
        sp, "subtasks", "List subtasks of a parent task",
        "subtasks <parent-task-id> [--completed|--incomplete] [--flagged] [--limit <n>] [--offset <n>]",
        lambda a: sdk.query_subtasks(
            a.parent_task_id, completed=_bool_filter(a.completed, a.incomplete),
            flagged=True if a.flagged else None, limit=a.limit, offset=a.offset,
        ),
    )
    p.add_argument("parent_task_id", help="Parent task ID")
    done = p.add_mutually_exclusive_group()
    done.add_argument("--completed", action="store_true", help="Only completed subtasks")
    done.add_argument("--incomplete", action="store_true", help="Only incomplete subtasks")
    p.add_argument("--flagged", action="store_true", help="Only flagged subtasks")
    _add_pagination(p)

    p = _command(
        sp, "move-to-parent", "Move a task under another task",
        "move-to-parent <task-id> --parent <parent-task-id>",
        lambda a: sdk.move_task_to_parent(a.task_id, a.parent),
    )
    p.add_argument("task_id", help="Task ID")
    p.add_argument("--parent", required=True, help="New parent task ID")

    # ---- Batch ----
    for name, description, func in (
        ("complete-batch", "Complete multiple tasks at once", sdk.complete_tasks),
        ("delete-batch", "Delete multiple tasks at once", sdk.delete_tasks),
    ):
        p = _command(sp, name, description, f"{name} <task-id>...", lambda a, f=func: f(a.task_ids))
        p.add_argument("task_ids", nargs="+", help="Task IDs")

    p = _command(
        sp, "update-batch", "Update multiple tasks with the same properties",
        "update-batch <task-id>... [--flag|--unflag] [--due <date>] [--project <name>] ...",
        lambda a: sdk.update_tasks(a.task_ids, **_update_kwargs(a)),
    )
    p.add_argument("task_ids", nargs="+", help="Task IDs")
    _add_update_options(p)

    p = _command(
        sp, "defer-batch", "Defer multiple tasks to the same date",
        "defer-batch <task-id>... (--days <n> | --to <date>)",
        lambda a: sdk.defer_tasks(a.task_ids, days=a.days, to=a.to),
    )
    p.add_argument("task_ids", nargs="+", help="Task IDs")
    when = p.add_mutually_exclusive_group(required=True)
    when.add_argument("--days", type=int, help="Days from now")
    when.add_argument("--to", help="Date to defer to")

    # ---- Projects ----
    p = _command(
        sp, "projects", "Query projects",
        "projects [--folder <name>] [--status <status>] [--sequential|--parallel] [--limit <n>] [--offset <n>]",
        lambda a: sdk.query_projects(
            folder=a.folder, status=a.status, sequential=_bool_filter(a.sequential, a.parallel),
            limit=a.limit, offset=a.offset,
        ),
    )
    p.add_argument("--folder", help="Filter by folder name")
    p.add_argument("--status", choices=[s.value for s in ProjectStatus], help="Filter by status")
    kind = p.add_mutually_exclusive_group()
    kind.add_argument("--sequential", action="store_true", help="Only sequential projects")
    kind.add_argument("--parallel", action="store_true", help="Only parallel projects")
    _add_pagination(p)

    p = _command(
        sp, "create-project", "Create a new project",
        "create-project <name> [--note <text>] [--folder <name>|--folder-id <id>] [--sequential] "
        "[--status active|on-hold] [--due <date>] [--defer <date>]",
        lambda a: sdk.create_project(
            a.name, note=a.note, folder_id=a.folder_id, folder_name=a.folder, sequential=a.sequential,
            status=a.status, due_date=a.due, defer_date=a.defer,
        ),
    )
    p.add_argument("name", help="Project name")
    p.add_argument("-n", "--note", help="Project note")
    p.add_argument("--folder", help="Folder name")
    p.add_argument("--folder-id", help="Folder ID")
    p.add_argument("--sequential", action="store_true", help="Tasks must be done in order")
    p.add_argument("--status", choices=[ProjectStatus.ACTIVE.value, ProjectStatus.ON_HOLD.value])
    p.add_argument("-d", "--due", help="Due date")
    p.add_argument("--defer", help="Defer date")

    p = _command(
        sp, "update-project", "Update properties of a project",
        "update-project <project-id> [--name <n>] [--note <text>] [--status <status>] "
        "[--folder <name>|--folder-id <id>] [--sequential|--parallel] [--due <date>] [--defer <date>]",
        lambda a: sdk.update_project(
            a.project_id, name=a.name, note=a.note, status=a.status, folder_id=a.folder_id,
            folder_name=a.folder, sequential=_bool_filter(a.sequential, a.parallel),
            due_date=a.due, defer_date=a.defer,
        ),
    )
    p.add_argument("project_id", help="Project ID")
    p.add_argument("--name", help="New name")
    p.add_argument("-n", "--note", help="New note")
    p.add_argument("--status", choices=[s.value for s in ProjectStatus])
    p.add_argument("--folder", help="Move into folder by name")
    p.add_argument("--folder-id", help="Move into folder by ID")
    kind = p.add_mutually_exclusive_group()
    kind.add_argument("--sequential", action="store_true", help="Make sequential")
    kind.add_argument("--parallel", action="store_true", help="Make parallel")
    p.add_argument("-d", "--due", help="New due date (empty string clears)")
    p.add_argument("--defer", help="New defer date (empty string clears)")

    for name, description, func in (
        ("delete-project", "Permanently delete a project", sdk.delete_project),
        ("drop-project", "Drop a project", sdk.drop_project),
        ("review", "Mark a project as reviewed", sdk.review_project),
    ):
        p = _command(sp, name, description, f"{name} <project-id>", lambda a, f=func: f(a.project_id))
        p.add_argument("project_id", help="Project ID")

    _command(
        sp, "projects-for-review", "List projects due for review", "projects-for-review",
        lambda a: sdk.query_projects_for_review(),
    )

    p = _command(
        sp, "review-interval", "Get or set a project's review interval in days",
        "review-interval <project-id> [--set <days>]",
        lambda a: (
            sdk.get_review_interval(a.project_id) if a.set is None else sdk.set_review_interval(a.project_id, a.set)
        ),
    )
    p.add_argument("project_id", help="Project ID")
    p.add_argument("--set", type=int, metavar="DAYS", help="New interval in days")

    # ---- Tags ----
    p = _command(
        sp, "tags", "Query tags", "tags [--parent <name>] [--limit <n>] [--offset <n>]",
        lambda a: sdk.query_tags(parent=a.parent, limit=a.limit, offset=a.offset),
    )
    p.add_argument("--parent", help="Only children of this tag")
    _add_pagination(p)

    p = _command(
        sp, "create-tag", "Create a new tag", "create-tag <name> [--parent <tag-name>|--parent-id <id>]",
        lambda a: sdk.create_tag(a.name, parent_tag_id=a.parent_id, parent_tag_name=a.parent),
    )
    p.add_argument("name", help="Tag name")
    p.add_argument("--parent", help="Parent tag name")
    p.add_argument("--parent-id", help="Parent tag ID")

    p = _command(
        sp, "update-tag", "Update a tag",
        "update-tag <tag-id> [--name <new-name>] [--parent <tag-name>|--parent-id <id>]",
        lambda a: sdk.update_tag(a.tag_id, name=a.name, parent_tag_id=a.parent_id, parent_tag_name=a.parent),
    )
    p.add_argument("tag_id", help="Tag ID")
    p.add_argument("--name", help="New name")
    p.add_argument("--parent", help="New parent tag name")
    p.add_argument("--parent-id", help="New parent tag ID")

    p = _command(sp, "delete-tag", "Delete a tag", "delete-tag <tag-id>", lambda a: sdk.delete_tag(a.tag_id))
    p.add_argument("tag_id", help="Tag ID")

    # ---- Folders ----
    p = _command(
        sp, "folders", "Query folders", "folders [--parent <folder-name>] [--limit <n>] [--offset <n>]",
        lambda a: sdk.query_folders(parent=a.parent, limit=a.limit, offset=a.offset),
    )
    p.add_argument("--parent", help="Only children of this folder")
    _add_pagination(p)

    p = _command(
        sp, "create-folder", "Create a new folder",
        "create-folder <name> [--parent <folder-name>|--parent-id <id>]",
        lambda a: sdk.create_folder(a.name, parent_folder_id=a.parent_id, parent_folder_name=a.parent),
    )
    p.add_argument("name", help="Folder name")
    p.add_argument("--parent", help="Parent folder name")
    p.add_argument("--parent-id", help="Parent folder ID")

    p = _command(
        sp, "update-folder", "Update a folder",
        "update-folder <folder-id> [--name <new-name>] [--parent <folder-name>|--parent-id <id>]",
        lambda a: sdk.update_folder(
            a.folder_id, name=a.name, parent_folder_id=a.parent_id, parent_folder_name=a.parent
        ),
    )
    p.add_argument("folder_id", help="Folder ID")
    p.add_argument("--name", help="New name")
    p.add_argument("--parent", help="New parent folder name")
    p.add_argument("--parent-id", help="New parent folder ID")

    p = _command(
        sp, "delete-folder", "Permanently delete a folder", "delete-folder <folder-id>",
        lambda a: sdk.delete_folder(a.folder_id),
    )
    p.add_argument("folder_id", help="Folder ID")

    # ---- Perspectives ----
    _command(sp, "perspectives", "List perspectives", "perspectives", lambda a: sdk.list_perspectives())

    p = _command(
        sp, "perspective", "Query tasks shown by a perspective", "perspective <name> [--limit <n>]",
        lambda a: sdk.query_perspective(a.name, limit=a.limit),
    )
    p.add_argument("name", help="Perspective name")
    p.add_argument("--limit", type=int, help="Maximum tasks (default 100)")

    _add_utility_commands(sp)
    return parser


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).expanduser().read_text(encoding="utf-8")


def _import_taskpaper(args: argparse.Namespace) -> CliOutput:
    try:
        content = _read_text(args.file)
    except OSError as e:
        return failure_message(f"Cannot read {args.file}: {e}", ErrorCode.VALIDATION_ERROR)
    return sdk.import_taskpaper(content, default_project=args.project, create_projects=args.create_projects)


def _add_utility_commands(sp: argparse._SubParsersAction) -> None:
    # ---- Forecast and deferred ----
    p = _command(
        sp, "forecast", "Show tasks due in a date range",
        "forecast [--start <date>] [--end <date>|--days <n>] [--include-deferred]",
        lambda a: sdk.query_forecast(start=a.start, end=a.end, days=a.days, include_deferred=a.include_deferred),
    )
    p.add_argument("--start", help="First day (default today)")
    p.add_argument("--end", help="Last day")
    p.add_argument("--days", type=int, help="Number of days from start (default 7)")
    p.add_argument("--include-deferred", action="store_true", help="Also match defer dates in the range")

    p = _command(
        sp, "deferred", "List tasks that have a defer date",
        "deferred [--deferred-after <date>] [--deferred-before <date>] [--blocked-only]",
        lambda a: sdk.query_deferred(
            deferred_after=a.deferred_after, deferred_before=a.deferred_before, blocked_only=a.blocked_only
        ),
    )
    p.add_argument("--deferred-after", help="Only tasks deferred until on or after this date")
    p.add_argument("--deferred-before", help="Only tasks deferred until on or before this date")
    p.add_argument("--blocked-only", action="store_true", help="Only tasks still waiting on their defer date")

    # ---- Focus ----
    p = _command(
        sp, "focus", "Focus the window on a project or folder", "focus <name-or-id> [--by-id]",
        lambda a: sdk.focus(a.target, by_id=a.by_id),
    )
    p.add_argument("target", help="Project or folder name (or ID with --by-id)")
    p.add_argument("--by-id", action="store_true", help="Look the target up by ID")

    _command(sp, "unfocus", "Clear focus", "unfocus", lambda a: sdk.unfocus())
    _command(sp, "focused", "Show the current focus", "focused", lambda a: sdk.get_focused())

    # ---- Capture and statistics ----
    p = _command(
        sp, "quick", "Create a task from quick-capture shorthand",
        'quick "<text with @tag #project due:tomorrow ~30m !>" [--note <text>]',
        lambda a: sdk.quick_capture(" ".join(a.text), note=a.note),
    )
    p.add_argument("text", nargs="+", help="Task line with shorthand")
    p.add_argument("-n", "--note", help="Task note")

    p = _command(
        sp, "stats", "Show productivity statistics",
        "stats [--period day|week|month|year] [--since <date> [--until <date>]] [--project <name>]",
        lambda a: sdk.get_stats(project=a.project, since=a.since, until=a.until, period=a.period),
    )
    p.add_argument("--period", choices=[s.value for s in StatsPeriod], help="Predefined period")
    p.add_argument("--since", help="Period start (YYYY-MM-DD)")
    p.add_argument("--until", help="Period end (YYYY-MM-DD)")
    p.add_argument("-p", "--project", help="Only count tasks in this project")

    # ---- Sync, links and maintenance ----
    _command(sp, "sync-status", "Show sync status", "sync-status", lambda a: sdk.get_sync_status())
    _command(sp, "sync", "Trigger a sync", "sync", lambda a: sdk.trigger_sync())

    for name, description, func in (
        ("url", "Print the omnifocus:/// URL of an item", sdk.generate_url),
        ("open", "Reveal an item in OmniFocus", sdk.open_item),
    ):
        p = _command(sp, name, description, f"{name} <id>", lambda a, f=func: f(a.item_id))
        p.add_argument("item_id", help="Task, project, folder or tag ID")

    p = _command(
        sp, "archive", "Archive old completed or dropped tasks",
        "archive (--completed-before <date> | --dropped-before <date>) [--project <name>] [--dry-run]",
        lambda a: sdk.archive_tasks(
            completed_before=a.completed_before, dropped_before=a.dropped_before, project=a.project,
            dry_run=a.dry_run,
        ),
    )
    p.add_argument("--completed-before", help="Tasks completed before this date")
    p.add_argument("--dropped-before", help="Tasks dropped before this date")
    p.add_argument("-p", "--project", help="Only tasks in this project")
    p.add_argument("--dry-run", action="store_true", help="Only count what would be archived")

    _command(sp, "compact", "Compact the database", "compact", lambda a: sdk.compact_database())

    # ---- TaskPaper ----
    p = _command(
        sp, "export-taskpaper", "Export projects and tasks as TaskPaper",
        "export-taskpaper [--project <name>] [--include-completed] [--include-dropped]",
        lambda a: sdk.export_taskpaper(
            project=a.project, include_completed=a.include_completed, include_dropped=a.include_dropped
        ),
    )
    p.add_argument("-p", "--project", help="Only this project")
    p.add_argument("--include-completed", action="store_true", help="Include completed projects and tasks")
    p.add_argument("--include-dropped", action="store_true", help="Include dropped projects")

    p = _command(
        sp, "import-taskpaper", "Create tasks from a TaskPaper file",
        "import-taskpaper <file|-> [--project <name>] [--create-projects]",
        _import_taskpaper,
    )
    p.add_argument("file", help="TaskPaper file, or - for stdin")
    p.add_argument("-p", "--project", help="Project for tasks before any heading")
    p.add_argument("--create-projects", action="store_true", help="Create missing projects from headings")

    # ---- Attachments ----
    p = _command(
        sp, "attach", "Attach a file to a task", "attach <task-id> <file>",
        lambda a: sdk.add_attachment(a.task_id, a.file),
    )
    p.add_argument("task_id", help="Task ID")
    p.add_argument("file", help="Path to the file")

    p = _command(
        sp, "attachments", "List a task's attachments", "attachments <task-id>",
        lambda a: sdk.list_attachments(a.task_id),
    )
    p.add_argument("task_id", help="Task ID")

    p = _command(
        sp, "detach", "Remove an attachment from a task", "detach <task-id> <attachment-id-or-name>",
        lambda a: sdk.remove_attachment(a.task_id, a.attachment),
    )
    p.add_argument("task_id", help="Task ID")
    p.add_argument("attachment", help="Attachment ID or file name")


def emit(output: CliOutput, human: bool) -> None:
    """Print a result: the full JSON envelope, or text for people."""
    if not human:
        print(json.dumps(to_jsonable(output), indent=2))
        return
    text, is_error = _format_human(output)
    print(text, file=sys.stderr if is_error else sys.stdout)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    logger.debug("Running command %s", args.command)
    output = args.func(args)
    emit(output, args.human)
    return 0 if output.success else 1


def main_entry() -> None:
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
