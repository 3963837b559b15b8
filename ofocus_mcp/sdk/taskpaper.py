"""
TaskPaper export and import.

Exported layout::

    Project Name: @on-hold @sequential
    	Project note
    	- Task name @tag @flagged @due(2024-01-15) @defer(2024-01-10) @estimate(30m)
    		Task note

    Inbox:
    	- Unfiled task

Indentation is a tab per level; four spaces are read as one level on import.
"""

import logging
import re
from dataclasses import dataclass, field

from ofocus_mcp.enums import ProjectStatus
from ofocus_mcp.models.entities import ProjectModel, TaskModel
from ofocus_mcp.models.results import CliOutput, TaskPaperExportResult, TaskPaperImportResult
from ofocus_mcp.sdk.projects import create_project, query_projects
from ofocus_mcp.sdk.tasks import add_task, query_tasks
from ofocus_mcp.utils.dates import parse_applescript_date
from ofocus_mcp.utils.result import failure, success
from ofocus_mcp.utils.validation import MAX_PAGINATION_LIMIT, validate_project_name

logger = logging.getLogger(__name__)

INBOX_HEADING = "Inbox"

_VALUE_TAG = re.compile(r"@(\w+)\(([^)]+)\)")
_SIMPLE_TAG = re.compile(r"@([\w-]+)")
_ESTIMATE = re.compile(r"^(\d+)(m|h)$", re.IGNORECASE)
_LEADING_SPACES = re.compile(r"^( +)")

_PROJECT_STATUS_TAGS = {
    ProjectStatus.ON_HOLD: " @on-hold",
    ProjectStatus.COMPLETED: " @done",
    ProjectStatus.DROPPED: " @dropped",
}


@dataclass
class TaskPaperItem:
    kind: str  # "project", "task" or "note"
    name: str
    indent: int = 0
    tags: list[str] = field(default_factory=list)
    due: str | None = None
    defer: str | None = None
    flagged: bool = False
    completed: bool = False
    dropped: bool = False
    estimate: int | None = None
    notes: list[str] = field(default_factory=list)


# ============================================================================
# Formatting
# ============================================================================


def _flatten(text: str | None) -> str:
    return (text or "").replace("\n", " ").replace("\t", " ")


def _format_date(value: str | None) -> str | None:
    if not value:
        return None
    parsed = parse_applescript_date(value)
    return parsed.date().isoformat() if parsed else value


def format_task_line(task: TaskModel, indent: int = 1) -> str:
    line = "\t" * indent + "- " + _flatten(task.name)
    for tag in task.tags:
        line += f" @{_flatten(tag)}"
    if task.flagged:
        line += " @flagged"
    if task.completed:
        line += " @done"
    if due := _format_date(task.due_date):
        line += f" @due({due})"
    if defer := _format_date(task.defer_date):
        line += f" @defer({defer})"
    if task.estimated_minutes:
        line += f" @estimate({task.estimated_minutes}m)"
    return line


def format_project_line(project: ProjectModel) -> str:
    line = _flatten(project.name) + ":" + _PROJECT_STATUS_TAGS.get(project.status, "")
    return line + (" @sequential" if project.sequential else " @parallel")


def _append_task(lines: list[str], task: TaskModel) -> None:
    lines.append(format_task_line(task))
    if task.note:
        lines.append("\t\t" + _flatten(task.note))


def export_taskpaper(
    project: str | None = None,
    include_completed: bool = False,
    include_dropped: bool = False,
) -> CliOutput:
    """
    Export projects and their tasks as TaskPaper text.

    Active and on-hold projects are always exported; completed projects and
    completed tasks only with ``include_completed``, dropped projects only
    with ``include_dropped``. ``project`` limits the export to one project
    (matched case-insensitively) and leaves out the inbox.

    Returns:
        CliOutput wrapping TaskPaperExportResult
    """
    if error := validate_project_name(project):
        return failure(error)

    projects_output = query_projects(limit=MAX_PAGINATION_LIMIT)
    if not projects_output.success:
        return projects_output

    wanted = {ProjectStatus.ACTIVE, ProjectStatus.ON_HOLD}
    if include_completed:
        wanted.add(ProjectStatus.COMPLETED)
    if include_dropped:
        wanted.add(ProjectStatus.DROPPED)
    projects = [p for p in projects_output.data.items if p.status in wanted]
    if project:
        projects = [p for p in projects if p.name.lower() == project.lower()]

    completed_filter = None if include_completed else False
    lines: list[str] = []
    task_count = 0

    for proj in projects:
        lines.append(format_project_line(proj))
        if proj.note:
            lines.append("\t" + _flatten(proj.note))
        tasks_output = query_tasks(project=proj.name, completed=completed_filter, limit=MAX_PAGINATION_LIMIT)
        if not tasks_output.success:
            return tasks_output
        # the project's root task shares the project's ID
        for task in (t for t in tasks_output.data.items if t.id != proj.id):
            _append_task(lines, task)
            task_count += 1
        lines.append("")

    if not project:
        inbox_output = query_tasks(completed=completed_filter, limit=MAX_PAGINATION_LIMIT)
        if not inbox_output.success:
            return inbox_output
        inbox_tasks = [t for t in inbox_output.data.items if not t.project_name]
        if inbox_tasks:
            lines.append(f"{INBOX_HEADING}:")
            for task in inbox_tasks:
                _append_task(lines, task)
                task_count += 1

    logger.debug("Exported %d project(s), %d task(s)", len(projects), task_count)
    return success(TaskPaperExportResult(content="\n".join(lines), task_count=task_count, project_count=len(projects)))


# ============================================================================
# Parsing and import
# ============================================================================


def parse_line(line: str) -> TaskPaperItem | None:
    """Classify one TaskPaper line; blank lines give None."""
    content = line.lstrip("\t")
    indent = len(line) - len(content)
    if match := _LEADING_SPACES.match(content):
        indent += len(match.group(1)) // 4
        content = content[len(match.group(1)) :]
    content = content.strip()
    if not content:
        return None

    if not content.startswith(("- ", "* ")):
        # "Name:" or "Name: @tag ..." is a project
        name_part, colon, trailing = content.partition(":")
        trailing = trailing.strip()
        if colon and name_part.strip() and ((not trailing and "@" not in content) or trailing.startswith("@")):
            return TaskPaperItem(kind="project", name=name_part.strip(), indent=indent)
        return TaskPaperItem(kind="note", name=content, indent=indent)

    item = TaskPaperItem(kind="task", name="", indent=indent)
    content = content[2:]
    for tag, value in _VALUE_TAG.findall(content):
        tag = tag.lower()
        if tag == "due":
            item.due = value
        elif tag == "defer":
            item.defer = value
        elif tag == "estimate" and (match := _ESTIMATE.match(value)):
            amount = int(match.group(1))
            item.estimate = amount * 60 if match.group(2).lower() == "h" else amount
    content = _VALUE_TAG.sub("", content)

    for tag in _SIMPLE_TAG.findall(content):
        lower = tag.lower()
        if lower == "flagged":
            item.flagged = True
        elif lower == "done":
            item.completed = True
        elif lower == "dropped":
            item.dropped = True
        else:
            item.tags.append(tag)
    item.name = _SIMPLE_TAG.sub("", content).strip()
    return item


def parse_taskpaper(content: str) -> list[TaskPaperItem]:
    """Parse a document into project and task items; note lines attach to the preceding item."""
    items: list[TaskPaperItem] = []
    for line in content.splitlines():
        parsed = parse_line(line)
        if parsed is None:
            continue
        if parsed.kind == "note":
            if items:
                items[-1].notes.append(parsed.name)
            continue
        items.append(parsed)
    return items


def import_taskpaper(
    content: str,
    default_project: str | None = None,
    create_projects: bool = False,
) -> CliOutput:
    """
    Create tasks from TaskPaper text.

    Tasks go into the project heading they sit under, or ``default_project``
    before any heading; tasks under ``Inbox:`` go to the inbox. Tasks tagged
    ``@done`` or ``@dropped`` are skipped. With ``create_projects`` each
    heading is created first unless a project of that name already exists.
    Per-item failures are collected in ``errors`` rather than aborting.

    Returns:
        CliOutput wrapping TaskPaperImportResult
    """
    if error := validate_project_name(default_project):
        return failure(error)

    existing: set[str] = set()
    if create_projects:
        projects_output = query_projects(limit=MAX_PAGINATION_LIMIT)
        if not projects_output.success:
            return projects_output
        existing = {p.name.lower() for p in projects_output.data.items}

    result = TaskPaperImportResult()
    current_project = default_project or None

    for item in parse_taskpaper(content):
        if item.kind == "project":
            if item.name.lower() == INBOX_HEADING.lower():
                current_project = None
                continue
            if create_projects and item.name.lower() not in existing:
                created = create_project(item.name, note="\n".join(item.notes) or None)
                if created.success:
                    result.projects_created += 1
                    existing.add(item.name.lower())
                else:
                    result.errors.append(f'Failed to create project "{item.name}": {created.error.message}')
            current_project = item.name
            continue

        if item.completed or item.dropped:
            continue
        created = add_task(
            item.name,
            note="\n".join(item.notes) or None,
            due=item.due,
            defer=item.defer,
            flag=item.flagged,
            tags=item.tags or None,
            estimated_minutes=item.estimate,
            project=current_project,
        )
        if created.success:
            result.tasks_created += 1
        else:
            message = created.error.message if created.error else "Unknown error"
            result.errors.append(f'Failed to create task "{item.name}": {message}')

    logger.debug("Imported %d task(s), %d project(s)", result.tasks_created, result.projects_created)
    return success(result)
