"""Action hierarchy operations: subtasks under a parent task."""

from ofocus_mcp.enums import EntityKind, ErrorCode
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.entities import RepetitionRule, TaskWithChildrenModel
from ofocus_mcp.models.results import CliOutput, PaginatedResult
from ofocus_mcp.sdk.common import TASK_TREE_HANDLERS, execute, find_task, paginated_loop
from ofocus_mcp.sdk.repetition import build_repetition_rule_script
from ofocus_mcp.sdk.tasks import DEFAULT_LIMIT, add_tags_script, task_properties, validate_new_task
from ofocus_mcp.utils.result import failure
from ofocus_mcp.utils.validation import first_error, validate_id, validate_pagination_params


def create_subtask(
    title: str,
    parent_task_id: str,
    note: str | None = None,
    due: str | None = None,
    defer: str | None = None,
    flag: bool = False,
    tags: list[str] | None = None,
    estimated_minutes: int | None = None,
    repeat: RepetitionRule | dict | None = None,
) -> CliOutput:
    """
    Create a task nested under an existing task.

    Returns:
        CliOutput wrapping the new TaskWithChildrenModel
    """
    if error := validate_id(parent_task_id, EntityKind.TASK):
        return failure(error)
    if not title or not title.strip():
        return failure(create_error(ErrorCode.VALIDATION_ERROR, "Task title cannot be empty"))
    rule, error = validate_new_task(due, defer, tags, estimated_minutes, repeat)
    if error:
        return failure(error)

    lines = [
        find_task("parentTask", parent_task_id),
        "set newTask to make new task at end of tasks of parentTask with properties "
        + task_properties(title, note, due, defer, flag, estimated_minutes),
    ]
    if tags:
        lines.append(add_tags_script("newTask", tags))
    if rule is not None:
        lines.append(build_repetition_rule_script("newTask", rule))
    lines.append("return my serializeTaskWithChildren(newTask)")
    return execute(TASK_TREE_HANDLERS, "\n".join(lines), "Failed to create subtask", TaskWithChildrenModel)


def query_subtasks(
    parent_task_id: str,
    completed: bool | None = None,
    flagged: bool | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> CliOutput:
    """
    List the direct children of a task.

    Returns:
        CliOutput wrapping PaginatedResult[TaskWithChildrenModel]
    """
    if error := first_error(
        validate_id(parent_task_id, EntityKind.TASK),
        validate_pagination_params(limit, offset),
    ):
        return failure(error)

    limit = DEFAULT_LIMIT if limit is None else limit
    offset = 0 if offset is None else offset

    conditions = []
    if completed is not None:
        conditions.append(f"completed is {'true' if completed else 'false'}")
    if flagged is True:
        conditions.append("flagged is true")
    source = "tasks of parentTask"
    if conditions:
        source += " where " + " and ".join(conditions)

    body = find_task("parentTask", parent_task_id) + "\n" + paginated_loop(
        source, "", "my serializeTaskWithChildren(t)", limit, offset
    )
    return execute(
        TASK_TREE_HANDLERS, body, "Failed to query subtasks", PaginatedResult[TaskWithChildrenModel]
    )


def move_task_to_parent(task_id: str, parent_task_id: str) -> CliOutput:
    """Move a task so it becomes the last child of another task."""
    if error := first_error(
        validate_id(task_id, EntityKind.TASK),
        validate_id(parent_task_id, EntityKind.TASK),
    ):
        return failure(error)
    if task_id == parent_task_id:
        return failure(create_error(ErrorCode.VALIDATION_ERROR, "A task cannot be moved under itself"))

    body = "\n".join(
        [
            find_task("theTask", task_id),
            find_task("parentTask", parent_task_id),
            "move theTask to end of tasks of parentTask",
            "return my serializeTaskWithChildren(theTask)",
        ]
    )
    return execute(TASK_TREE_HANDLERS, body, "Failed to move task", TaskWithChildrenModel)
