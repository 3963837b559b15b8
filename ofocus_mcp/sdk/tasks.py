"""Task operations: create, query, mutate and search tasks."""

import logging
from typing import Any

from ofocus_mcp.enums import EntityKind, ErrorCode, SearchScope
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.entities import RepetitionRule, TaskModel
from ofocus_mcp.models.results import (
    CliError,
    CliOutput,
    CompleteResult,
    DeferResult,
    DeleteResult,
    DropResult,
    DuplicateTaskResult,
    PaginatedResult,
)
from ofocus_mcp.sdk.common import (
    JSON_ONLY,
    SEARCH_HANDLERS,
    TASK_HANDLERS,
    execute,
    find_task,
    is_not_found,
    not_found_guard,
    paginated_loop,
)
from ofocus_mcp.sdk.repetition import build_clear_repetition_script, build_repetition_rule_script
from ofocus_mcp.utils.escape import applescript_date, escape_applescript, quote_applescript
from ofocus_mcp.utils.result import failure, success
from ofocus_mcp.utils.validation import (
    coerce_repetition_rule,
    first_error,
    validate_date_string,
    validate_days,
    validate_estimated_minutes,
    validate_id,
    validate_pagination_params,
    validate_project_name,
    validate_search_query,
    validate_tags,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100


# ============================================================================
# Shared statement builders (also used by subtasks and batch operations)
# ============================================================================


def add_tags_script(var: str, tags: list[str]) -> str:
    """Attach existing tags by name; unknown tag names are skipped."""
    lines = []
    for tag_name in tags:
        lines.append(
            "try\n"
            f"\tset theTag to first flattened tag whose name is {quote_applescript(tag_name)}\n"
            f"\tadd theTag to tags of {var}\n"
            "end try"
        )
    return "\n".join(lines)


def task_properties(
    title: str,
    note: str | None = None,
    due: str | None = None,
    defer: str | None = None,
    flag: bool = False,
    estimated_minutes: int | None = None,
) -> str:
    """AppleScript property record for ``make new ... with properties``."""
    props = [f"name:{quote_applescript(title)}"]
    if note is not None:
        props.append(f"note:{quote_applescript(note)}")
    if flag:
        props.append("flagged:true")
    if due:
        props.append(f"due date:{applescript_date(due)}")
    if defer:
        props.append(f"defer date:{applescript_date(defer)}")
    if estimated_minutes is not None:
        props.append(f"estimated minutes:{estimated_minutes}")
    return "{" + ", ".join(props) + "}"


def validate_new_task(
    due: str | None,
    defer: str | None,
    tags: list[str] | None,
    estimated_minutes: int | None,
    repeat: Any,
) -> tuple[RepetitionRule | None, CliError | None]:
    """Validate the options shared by inbox tasks and subtasks."""
    error = first_error(
        validate_date_string(due),
        validate_date_string(defer),
        validate_tags(tags),
        validate_estimated_minutes(estimated_minutes),
    )
    if error:
        return None, error
    return coerce_repetition_rule(repeat)


def validate_task_updates(
    due: str | None = None,
    defer: str | None = None,
    project: str | None = None,
    tags: list[str] | None = None,
    estimated_minutes: int | None = None,
    repeat: Any = None,
) -> tuple[RepetitionRule | None, CliError | None]:
    """Validate update options; returns the coerced repetition rule on success."""
    error = first_error(
        validate_date_string(due),
        validate_date_string(defer),
        validate_tags(tags),
        validate_project_name(project),
        validate_estimated_minutes(estimated_minutes),
    )
    if error:
        return None, error
    return coerce_repetition_rule(repeat)


def task_update_statements(
    var: str,
    title: str | None = None,
    note: str | None = None,
    due: str | None = None,
    defer: str | None = None,
    flag: bool | None = None,
    project: str | None = None,
    tags: list[str] | None = None,
    estimated_minutes: int | None = None,
    clear_estimate: bool = False,
    repeat: RepetitionRule | None = None,
    clear_repeat: bool = False,
) -> str:
    """
    Statements applying a partial update to the task in ``var``.

    ``None`` leaves a field untouched. An empty ``due``, ``defer`` or
    ``project`` clears it; ``tags`` replaces the whole tag set.
    """
    lines = []
    if title is not None:
        lines.append(f"set name of {var} to {quote_applescript(title)}")
    if note is not None:
        lines.append(f"set note of {var} to {quote_applescript(note)}")
    if flag is not None:
        lines.append(f"set flagged of {var} to {'true' if flag else 'false'}")
    if due is not None:
        value = applescript_date(due) if due else "missing value"
        lines.append(f"set due date of {var} to {value}")
    if defer is not None:
        value = applescript_date(defer) if defer else "missing value"
        lines.append(f"set defer date of {var} to {value}")
    if project is not None:
        if project:
            lines.append(f"set theProject to first flattened project whose name is {quote_applescript(project)}")
            lines.append(f"move {var} to end of tasks of theProject")
        else:
            lines.append(f"move {var} to end of inbox tasks")
    if clear_estimate:
        lines.append(f"set estimated minutes of {var} to missing value")
    elif estimated_minutes is not None:
        lines.append(f"set estimated minutes of {var} to {estimated_minutes}")
    if tags is not None:
        lines.append(
            f"set oldTags to tags of {var}\n"
            "repeat with existingTag in oldTags\n"
            f"\tremove existingTag from tags of {var}\n"
            "end repeat"
        )
        if tags:
            lines.append(add_tags_script(var, tags))
    if clear_repeat:
        lines.append(build_clear_repetition_script(var))
    elif repeat is not None:
        lines.append(build_repetition_rule_script(var, repeat))
    return "\n".join(lines)


def defer_statement(days: int | None, to: str | None, now_var: str = "(current date)") -> str:
    """Statement setting ``newDefer`` either relative to now or to a fixed date."""
    if days is not None:
        return f"set newDefer to {now_var} + ({days} * days)"
    return f"set newDefer to {applescript_date(to or '')}"


def validate_defer(days: int | None, to: str | None) -> CliError | None:
    if days is None and not to:
        return create_error(ErrorCode.VALIDATION_ERROR, "Must specify either days or a date to defer to")
    return first_error(validate_days(days), validate_date_string(to))


# ============================================================================
# Operations
# ============================================================================


def add_to_inbox(
    title: str,
    note: str | None = None,
    due: str | None = None,
    defer: str | None = None,
    flag: bool = False,
    tags: list[str] | None = None,
    estimated_minutes: int | None = None,
    repeat: RepetitionRule | dict | None = None,
) -> CliOutput:
    """
    Add a task to the OmniFocus inbox.

    Args:
        title: Task name
        note: Optional note text
        due: Optional due date (ISO or any format AppleScript understands)
        defer: Optional defer date
        flag: Flag the new task
        tags: Names of existing tags to apply
        estimated_minutes: Optional duration estimate
        repeat: Optional repetition rule

    Returns:
        CliOutput wrapping the created TaskModel
    """
    return add_task(
        title,
        note=note,
        due=due,
        defer=defer,
        flag=flag,
        tags=tags,
        estimated_minutes=estimated_minutes,
        repeat=repeat,
    )


def add_task(
    title: str,
    note: str | None = None,
    due: str | None = None,
    defer: str | None = None,
    flag: bool = False,
    tags: list[str] | None = None,
    estimated_minutes: int | None = None,
    repeat: RepetitionRule | dict | None = None,
    project: str | None = None,
) -> CliOutput:
    """
    Create a task, in the inbox or at the end of a named project.

    The project is looked up before the task is made, so an unknown project
    fails with PROJECT_NOT_FOUND without leaving a stray inbox task behind.
    """
    if not title or not title.strip():
        return failure(create_error(ErrorCode.VALIDATION_ERROR, "Task title cannot be empty"))
    if error := validate_project_name(project):
        return failure(error)
    rule, error = validate_new_task(due, defer, tags, estimated_minutes, repeat)
    if error:
        return failure(error)

    lines = []
    if project:
        lines.append(f"set theProject to first flattened project whose name is {quote_applescript(project)}")
    lines.append(
        "set newTask to make new inbox task with properties "
        + task_properties(title, note, due, defer, flag, estimated_minutes)
    )
    if project:
        lines.append("move newTask to end of tasks of theProject")
    if tags:
        lines.append(add_tags_script("newTask", tags))
    if rule is not None:
        lines.append(build_repetition_rule_script("newTask", rule))
    lines.append("return my serializeTask(newTask)")

    logger.debug("Adding task %r (project=%r)", title, project)
    return execute(TASK_HANDLERS, "\n".join(lines), "Failed to add task to inbox", TaskModel)


def query_tasks(
    project: str | None = None,
    tag: str | None = None,
    due_before: str | None = None,
    due_after: str | None = None,
    flagged: bool | None = None,
    completed: bool | None = None,
    available: bool | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> CliOutput:
    """
    Query tasks with optional filters and pagination.

    Returns:
        CliOutput wrapping PaginatedResult[TaskModel]
    """
    error = first_error(
        validate_date_string(due_before),
        validate_date_string(due_after),
        validate_project_name(project),
        validate_tags([tag] if tag else None),
        validate_pagination_params(limit, offset),
    )
    if error:
        return failure(error)

    limit = DEFAULT_LIMIT if limit is None else limit
    offset = 0 if offset is None else offset

    conditions = []
    if completed is True:
        conditions.append("completed is true")
    elif completed is False:
        conditions.append("completed is false")
    if flagged is True:
        conditions.append("flagged is true")
    if available is True:
        conditions.extend(["completed is false", "effectively dropped is false", "blocked is false"])
    source = "flattened tasks"
    if conditions:
        source += " where " + " and ".join(dict.fromkeys(conditions))

    filters = []
    if project:
        filters.append(
            "try\n"
            f"\tif name of containing project of t is not {quote_applescript(project)} then set shouldInclude to false\n"
            "on error\n"
            "\tset shouldInclude to false\n"
            "end try"
        )
    if tag:
        filters.append(
            "if shouldInclude then\n"
            "\tset hasTag to false\n"
            "\trepeat with tg in tags of t\n"
            f"\t\tif name of tg is {quote_applescript(tag)} then set hasTag to true\n"
            "\tend repeat\n"
            "\tif not hasTag then set shouldInclude to false\n"
            "end if"
        )
    for bound, op in ((due_before, ">"), (due_after, "<")):
        if bound:
            filters.append(
                "if shouldInclude then\n"
                "\ttry\n"
                f"\t\tif (due date of t) {op} {applescript_date(bound)} then set shouldInclude to false\n"
                "\ton error\n"
                "\t\tset shouldInclude to false\n"
                "\tend try\n"
                "end if"
            )

    body = paginated_loop(source, "\n".join(filters), "my serializeTask(t)", limit, offset)
    return execute(TASK_HANDLERS, body, "Failed to query tasks", PaginatedResult[TaskModel])


def complete_task(task_id: str) -> CliOutput:
    """Mark a task complete."""
    if error := validate_id(task_id, EntityKind.TASK):
        return failure(error)

    body = f"""{find_task('theTask', task_id)}
mark complete theTask
return "{{\\"taskId\\": \\"{escape_applescript(task_id)}\\", \\"taskName\\": \\"" & (my escapeJson(name of theTask)) & "\\", \\"completed\\": " & (completed of theTask) & "}}"
"""
    return execute(JSON_ONLY, body, "Failed to complete task", CompleteResult)


def drop_task(task_id: str) -> CliOutput:
    """Mark a task dropped (it stays in the database, unlike delete)."""
    if error := validate_id(task_id, EntityKind.TASK):
        return failure(error)

    body = f"""{find_task('theTask', task_id)}
mark dropped theTask
return "{{\\"taskId\\": \\"{escape_applescript(task_id)}\\", \\"taskName\\": \\"" & (my escapeJson(name of theTask)) & "\\", \\"dropped\\": " & (dropped of theTask) & "}}"
"""
    return execute(JSON_ONLY, body, "Failed to drop task", DropResult)


def delete_task(task_id: str) -> CliOutput:
    """Permanently delete a task."""
    if error := validate_id(task_id, EntityKind.TASK):
        return failure(error)

    escaped = escape_applescript(task_id)
    statements = (
        f"{find_task('theTask', task_id)}\n"
        "delete theTask\n"
        f'return "{{\\"taskId\\": \\"{escaped}\\", \\"deleted\\": true}}"'
    )
    body = not_found_guard(statements, f'"{{\\"error\\": \\"not found\\", \\"taskId\\": \\"{escaped}\\"}}"')

    output = execute(JSON_ONLY, body, "Failed to delete task")
    if not output.success:
        return output
    if is_not_found(output.data):
        return failure(create_error(ErrorCode.TASK_NOT_FOUND, f"Task not found: {task_id}"))
    return success(DeleteResult.model_validate(output.data))


def update_task(
    task_id: str,
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
    """
    Update properties of an existing task.

    Fields left as ``None`` are not touched. Pass an empty string for
    ``due``, ``defer`` or ``project`` to clear it.

    Returns:
        CliOutput wrapping the updated TaskModel
    """
    if error := validate_id(task_id, EntityKind.TASK):
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
    body = f"{find_task('theTask', task_id)}\n{updates}\nreturn my serializeTask(theTask)"
    return execute(TASK_HANDLERS, body, "Failed to update task", TaskModel)


def search_tasks(
    query: str,
    scope: SearchScope | str = SearchScope.BOTH,
    limit: int | None = None,
    include_completed: bool = False,
) -> CliOutput:
    """
    Case-insensitive text search over task names and/or notes.

    Returns:
        CliOutput wrapping a list of TaskModel (at most ``limit`` items)
    """
    error = first_error(validate_search_query(query), validate_pagination_params(limit, None))
    if error:
        return failure(error)
    scope = SearchScope(scope)
    limit = DEFAULT_LIMIT if limit is None else limit

    needle = quote_applescript(query.lower())
    if scope == SearchScope.NAME:
        condition = f"my containsText(name of t, {needle})"
    elif scope == SearchScope.NOTE:
        condition = f"my containsText(note of t, {needle})"
    else:
        condition = f"my containsText(name of t, {needle}) or my containsText(note of t, {needle})"

    completed_filter = "" if include_completed else "\t\tif completed of t is true then set shouldInclude to false\n"
    body = (
        'set output to "["\n'
        "set isFirst to true\n"
        "set matchCount to 0\n"
        "repeat with t in flattened tasks\n"
        f"\tif matchCount >= {limit} then exit repeat\n"
        "\tset shouldInclude to false\n"
        "\ttry\n"
        f"\t\tif {condition} then set shouldInclude to true\n"
        f"{completed_filter}"
        "\tend try\n"
        "\tif shouldInclude then\n"
        "\t\tset matchCount to matchCount + 1\n"
        '\t\tif not isFirst then set output to output & ","\n'
        "\t\tset isFirst to false\n"
        "\t\tset output to output & my serializeTask(t)\n"
        "\tend if\n"
        "end repeat\n"
        'return output & "]"'
    )
    return execute(SEARCH_HANDLERS, body, "Failed to search tasks", list[TaskModel])


def defer_task(task_id: str, days: int | None = None, to: str | None = None) -> CliOutput:
    """
    Push a task's defer date forward.

    Args:
        task_id: Task to defer
        days: Defer until this many days from now
        to: Defer until this date (used when ``days`` is not given)
    """
    if error := first_error(validate_id(task_id, EntityKind.TASK), validate_defer(days, to)):
        return failure(error)

    body = f"""{find_task('theTask', task_id)}
set prevDefer to ""
try
	set prevDefer to (defer date of theTask) as string
end try
{defer_statement(days, to)}
set defer date of theTask to newDefer
set newDeferStr to (defer date of theTask) as string
return "{{\\"taskId\\": \\"{escape_applescript(task_id)}\\", \\"taskName\\": \\"" & (my escapeJson(name of theTask)) & "\\", \\"previousDeferDate\\": " & (my jsonString(prevDefer)) & ", \\"newDeferDate\\": \\"" & (my escapeJson(newDeferStr)) & "\\"}}"
"""
    return execute(JSON_ONLY, body, "Failed to defer task", DeferResult)


def duplicate_task(task_id: str, include_subtasks: bool = True) -> CliOutput:
    """Duplicate a task, optionally without its subtasks."""
    if error := validate_id(task_id, EntityKind.TASK):
        return failure(error)

    prune = ""
    if not include_subtasks:
        # reverse order so deleting does not shift the remaining indexes
        prune = "repeat with i from (count of tasks of newTask) to 1 by -1\n\tdelete task i of newTask\nend repeat\n"

    body = f"""{find_task('theTask', task_id)}
set newTask to duplicate theTask
{prune}return "{{\\"originalTaskId\\": \\"{escape_applescript(task_id)}\\", \\"newTaskId\\": \\"" & (id of newTask) & "\\", \\"newTaskName\\": \\"" & (my escapeJson(name of newTask)) & "\\"}}"
"""
    return execute(JSON_ONLY, body, "Failed to duplicate task", DuplicateTaskResult)
