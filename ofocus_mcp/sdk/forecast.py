"""Forecast: incomplete tasks due (or deferred) within a date range."""

from ofocus_mcp.models.entities import TaskModel
from ofocus_mcp.models.results import CliOutput
from ofocus_mcp.sdk.common import TASK_HANDLERS, execute, task_list_loop
from ofocus_mcp.utils.escape import applescript_date
from ofocus_mcp.utils.result import failure
from ofocus_mcp.utils.validation import first_error, validate_date_string, validate_days

DEFAULT_FORECAST_DAYS = 7

TODAY_MIDNIGHT = "(current date) - (time of (current date))"


def _in_range_check(field: str) -> str:
    return (
        "try\n"
        f"\tset d to {field} of t\n"
        "\tif d >= startDate and d <= endDate then set inRange to true\n"
        "end try"
    )


def query_forecast(
    start: str | None = None,
    end: str | None = None,
    days: int | None = None,
    include_deferred: bool = False,
) -> CliOutput:
    """
    List incomplete, non-dropped tasks whose due date falls in a range.

    Args:
        start: First day of the range; defaults to today at midnight
        end: Last moment of the range; wins over ``days`` when both are given
        days: Range length from ``start`` (default 7)
        include_deferred: Also match tasks whose defer date is in the range

    Returns:
        CliOutput wrapping a list of TaskModel
    """
    if error := first_error(
        validate_date_string(start),
        validate_date_string(end),
        validate_days(days),
    ):
        return failure(error)

    setup = [f"set startDate to {applescript_date(start) if start else TODAY_MIDNIGHT}"]
    if end:
        setup.append(f"set endDate to {applescript_date(end)}")
    else:
        setup.append(f"set endDate to startDate + ({days or DEFAULT_FORECAST_DAYS} * days)")

    checks = ["set inRange to false", _in_range_check("due date")]
    if include_deferred:
        checks.append("if not inRange then\n" + _indent_once(_in_range_check("defer date")) + "\nend if")
    checks.append("if not inRange then set shouldInclude to false")

    body = "\n".join(setup) + "\n" + task_list_loop(
        "flattened tasks where completed is false and effectively dropped is false",
        "\n".join(checks),
    )
    return execute(TASK_HANDLERS, body, "Failed to query forecast", list[TaskModel])


def _indent_once(text: str) -> str:
    return "\n".join("\t" + line for line in text.splitlines())
