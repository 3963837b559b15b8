"""Formatting utilities for tool and CLI output."""

import json
from typing import Any

from mcp.server.fastmcp.exceptions import ToolError

from ofocus_mcp.enums import ResponseFormat
from ofocus_mcp.models.entities import FolderModel, PerspectiveModel, ProjectModel, TagModel, TaskModel
from ofocus_mcp.models.results import CliOutput, CommandInfo, PaginatedResult, TaskPaperExportResult, to_jsonable

# ============================================================================
# Tasks
# ============================================================================


def _format_task_concise(task: TaskModel) -> str:
    """
    Format a single task in concise format for token efficiency.

    Output: "abc123: Call Bob (flagged, due:2024-12-31, proj:Work)"
    """
    name = task.name[:50] if task.name else "Untitled"

    meta = []
    if task.completed:
        meta.append("done")
    if task.flagged:
        meta.append("flagged")
    if task.due_date:
        meta.append(f"due:{task.due_date}")
    if task.project_name:
        meta.append(f"proj:{task.project_name}")

    if meta:
        return f"{task.id}: {name} ({', '.join(meta)})"
    return f"{task.id}: {name}"


def _format_tasks_concise(tasks: list[TaskModel], title: str | None = None) -> str:
    """
    Format a list of tasks in concise format.

    Output:
    2 task(s) | Inbox
    abc123: Task one (flagged)
    def456: Task two
    """
    if not tasks:
        return "0 tasks"

    header = f"{len(tasks)} task(s)"
    if title:
        header = f"{header} | {title}"
    return "\n".join([header] + [_format_task_concise(t) for t in tasks])


def _format_task_markdown(task: TaskModel) -> str:
    """Format a single task as markdown."""
    icon = "[x]" if task.completed else "[ ]"
    flag = " (flagged)" if task.flagged else ""
    lines = [f"### {icon} {task.name or 'Untitled'}{flag}", f"`{task.id}`"]

    details = []
    if task.project_name:
        details.append(f"**Project**: {task.project_name}")
    if task.due_date:
        details.append(f"**Due**: {task.due_date}")
    if task.defer_date:
        details.append(f"**Defer**: {task.defer_date}")
    if task.tags:
        details.append(f"**Tags**: {', '.join(task.tags)}")
    if task.estimated_minutes:
        details.append(f"**Estimate**: {task.estimated_minutes} min")
    if details:
        lines.append(" | ".join(details))

    if task.note:
        lines.append(f"> {task.note.splitlines()[0][:200]}")

    return "\n".join(lines)


def _format_tasks_markdown(tasks: list[TaskModel], title: str = "Tasks") -> str:
    """Format a list of tasks as markdown."""
    if not tasks:
        return f"# {title}\n\nNo tasks found."

    lines = [f"# {title}", f"*{len(tasks)} task(s)*", ""]
    for task in tasks:
        lines.append(_format_task_markdown(task))
        lines.append("")
    return "\n".join(lines)


# ============================================================================
# Projects, tags, folders, perspectives
# ============================================================================


def _format_project_line(project: ProjectModel) -> str:
    parts = [project.status.value]
    if project.folder_name:
        parts.append(f"folder:{project.folder_name}")
    parts.append(f"{project.remaining_task_count}/{project.task_count} remaining")
    return f"{project.id}: {project.name} ({', '.join(parts)})"


def _format_tag_line(tag: TagModel) -> str:
    name = f"{tag.parent_name} : {tag.name}" if tag.parent_name else tag.name
    return f"{tag.id}: {name} ({tag.available_task_count} available)"


def _format_folder_line(folder: FolderModel) -> str:
    name = f"{folder.parent_name} / {folder.name}" if folder.parent_name else folder.name
    return f"{folder.id}: {name} ({folder.project_count} projects, {folder.folder_count} folders)"


def _format_perspective_line(perspective: PerspectiveModel) -> str:
    kind = "custom" if perspective.custom else "built-in"
    return f"{perspective.id}: {perspective.name} ({kind})"


def _format_command_line(command: CommandInfo) -> str:
    return f"{command.name}: {command.description}\n    usage: {command.usage}"


_LINE_FORMATTERS = {
    ProjectModel: ("project", _format_project_line),
    TagModel: ("tag", _format_tag_line),
    FolderModel: ("folder", _format_folder_line),
    PerspectiveModel: ("perspective", _format_perspective_line),
    CommandInfo: ("command", _format_command_line),
}


def _format_items(items: list[Any], response_format: ResponseFormat, title: str) -> str:
    """Render a homogeneous list of entities as markdown or concise text."""
    if items and isinstance(items[0], TaskModel):
        if response_format == ResponseFormat.CONCISE:
            return _format_tasks_concise(items, title)
        return _format_tasks_markdown(items, title)

    label, line = next(
        ((lbl, fn) for cls, (lbl, fn) in _LINE_FORMATTERS.items() if items and isinstance(items[0], cls)),
        ("item", str),
    )
    if response_format == ResponseFormat.CONCISE:
        return "\n".join([f"{len(items)} {label}(s) | {title}"] + [line(i) for i in items])

    if not items:
        return f"# {title}\n\nNothing found."
    lines = [f"# {title}", f"*{len(items)} {label}(s)*", ""]
    lines.extend(f"- {line(i)}" for i in items)
    return "\n".join(lines)


# ============================================================================
# Result envelopes
# ============================================================================


def _format_error(output: CliOutput) -> str:
    """Render a failed result as ``Error: <message>`` followed by the error JSON."""
    error = output.error
    if error is None:
        return "Error: Unknown error"
    return f"Error: {error.message}\n{json.dumps(to_jsonable(error), indent=2)}"


def _format_result(
    output: CliOutput,
    response_format: ResponseFormat = ResponseFormat.JSON,
    title: str = "Results",
) -> str:
    """
    Render an SDK result for an MCP client.

    JSON returns the data payload. Markdown and concise apply to list and
    paginated results; other payloads fall back to JSON.

    Raises:
        ToolError: If the operation failed. FastMCP reports it to the client
            as a tool result with ``isError`` set, carrying the error text.
    """
    if not output.success:
        raise ToolError(_format_error(output))

    data = output.data
    if response_format != ResponseFormat.JSON:
        if isinstance(data, PaginatedResult):
            text = _format_items(data.items, response_format, title)
            if data.has_more:
                text += f"\n\nShowing {data.returned_count} of {data.total_count}; next offset {data.offset + data.returned_count}"
            return text
        if isinstance(data, list):
            return _format_items(data, response_format, title)

    return json.dumps(to_jsonable(data), indent=2)


def _format_human(output: CliOutput) -> tuple[str, bool]:
    """
    Render a result for a person at a terminal.

    Returns:
        Tuple of (text, is_error). Errors are meant for stderr.
    """
    if not output.success:
        error = output.error
        if error is None:
            return "Error: Unknown error", True
        text = f"Error: {error.message}"
        if error.details:
            text += f"\nDetails: {error.details}"
        return text, True

    data = output.data
    if data is None:
        return "Success (no data)", False
    if isinstance(data, PaginatedResult) or (isinstance(data, list) and data and not isinstance(data[0], dict)):
        return _format_result(output, ResponseFormat.CONCISE, "Results"), False
    if isinstance(data, list) and not data:
        return "No results found.", False
    if isinstance(data, TaskModel):
        return _format_task_markdown(data), False
    if isinstance(data, TaskPaperExportResult):
        return data.content, False
    return json.dumps(to_jsonable(data), indent=2), False
