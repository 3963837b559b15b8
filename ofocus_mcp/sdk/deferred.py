"""Deferred tasks: incomplete tasks that carry a defer date."""

from ofocus_mcp.models.entities import TaskModel
from ofocus_mcp.models.results import CliOutput
from ofocus_mcp.sdk.common import TASK_HANDLERS, execute, task_list_loop
from ofocus_mcp.utils.escape import applescript_date
from ofocus_mcp.utils.result import failure
from ofocus_mcp.utils.validation import first_error, validate_date_string


def query_deferred(
    deferred_after: str | None = None,
    deferred_before: str | None = None,
    blocked_only: bool = False,
) -> CliOutput:
    """
    List incomplete, non-dropped tasks that have a defer date.

    ``blocked_only`` keeps only tasks whose defer date is still in the future.

    Returns:
        CliOutput wrapping a list of TaskModel
    """
    if error := first_error(validate_date_string(deferred_after), validate_date_string(deferred_before)):
        return failure(error)

    checks = []
    if blocked_only:
        checks.append("\tif taskDefer <= rightNow then set shouldInclude to false")
    if deferred_after:
        checks.append(f"\tif taskDefer < {applescript_date(deferred_after)} then set shouldInclude to false")
    if deferred_before:
        checks.append(f"\tif taskDefer > {applescript_date(deferred_before)} then set shouldInclude to false")

    filter_block = "\n".join(
        [
            "set taskDefer to missing value",
            "try",
            "\tset taskDefer to defer date of t",
            "end try",
            "if taskDefer is missing value then",
            "\tset shouldInclude to false",
            "else",
            *checks,
            "end if",
        ]
    )

    body = "set rightNow to current date\n" + task_list_loop(
        "flattened tasks where completed is false and effectively dropped is false",
        filter_block,
    )
    return execute(TASK_HANDLERS, body, "Failed to query deferred tasks", list[TaskModel])
