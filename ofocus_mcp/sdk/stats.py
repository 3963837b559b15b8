"""Productivity statistics computed from task and project queries."""

import logging
from datetime import date, datetime, time, timedelta

from ofocus_mcp.enums import ErrorCode, ProjectStatus, StatsPeriod
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.entities import ProjectModel, TaskModel
from ofocus_mcp.models.results import CliOutput, StatsResult
from ofocus_mcp.sdk.projects import query_projects
from ofocus_mcp.sdk.tasks import query_tasks
from ofocus_mcp.utils.dates import parse_applescript_date
from ofocus_mcp.utils.result import failure, success
from ofocus_mcp.utils.validation import MAX_PAGINATION_LIMIT, validate_project_name

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_DAYS = 7


def _week_start(day: date) -> date:
    # date.weekday() is Monday=0; weeks here start on Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _parse_iso_day(value: str) -> date:
    return datetime.strptime(value[:10], "%Y-%m-%d").date()


def calculate_period(
    period: StatsPeriod | str | None = None,
    since: str | None = None,
    until: str | None = None,
    today: date | None = None,
) -> tuple[datetime, datetime]:
    """
    Resolve the reporting window to ``(start, end)``.

    ``since`` wins over ``period``; ``until`` only applies together with
    ``since``. With neither, the window is the last seven days. The end is
    always the last microsecond of its day.

    Raises:
        ValueError: If ``since``/``until`` is not an ISO date or ``period`` is unknown
    """
    today = today or date.today()
    end_day = today

    if since:
        start_day = _parse_iso_day(since)
        if until:
            end_day = _parse_iso_day(until)
    elif period:
        period = StatsPeriod(period)
        if period == StatsPeriod.DAY:
            start_day = today
        elif period == StatsPeriod.WEEK:
            start_day = _week_start(today)
        elif period == StatsPeriod.MONTH:
            start_day = today.replace(day=1)
        else:
            start_day = today.replace(month=1, day=1)
    else:
        start_day = today - timedelta(days=DEFAULT_PERIOD_DAYS)

    return datetime.combine(start_day, time.min), datetime.combine(end_day, time.max)


def summarize(
    tasks: list[TaskModel],
    available: list[TaskModel],
    projects: list[ProjectModel],
    start: datetime,
    end: datetime,
    today: date | None = None,
    project: str | None = None,
) -> StatsResult:
    """Count tasks and projects into a StatsResult for the given window."""
    today = today or date.today()
    week_start = _week_start(today)
    week_end = week_start + timedelta(days=6)

    counts = dict.fromkeys(
        ("tasks_completed", "tasks_overdue", "tasks_remaining", "tasks_flagged", "tasks_due_today", "tasks_due_this_week"),
        0,
    )
    for task in tasks:
        if task.completed:
            # An unreadable completion date still counts
            completed_at = parse_applescript_date(task.completion_date)
            if completed_at is None or start <= completed_at <= end:
                counts["tasks_completed"] += 1
            continue

        counts["tasks_remaining"] += 1
        if task.flagged:
            counts["tasks_flagged"] += 1
        due = parse_applescript_date(task.due_date)
        if due is None:
            continue
        if due.date() < today:
            counts["tasks_overdue"] += 1
        if due.date() == today:
            counts["tasks_due_today"] += 1
        if week_start <= due.date() <= week_end:
            counts["tasks_due_this_week"] += 1

    return StatsResult(
        period_start=start.date().isoformat(),
        period_end=end.date().isoformat(),
        tasks_available=len(available),
        projects_active=sum(1 for p in projects if p.status == ProjectStatus.ACTIVE),
        projects_on_hold=sum(1 for p in projects if p.status == ProjectStatus.ON_HOLD),
        project_filter=project,
        **counts,
    )


def get_stats(
    project: str | None = None,
    since: str | None = None,
    until: str | None = None,
    period: StatsPeriod | str | None = None,
) -> CliOutput:
    """
    Productivity statistics, optionally restricted to one project.

    Completed tasks are counted when completed within the window. Every
    other count describes the current state, not the window.

    Returns:
        CliOutput wrapping StatsResult
    """
    if error := validate_project_name(project):
        return failure(error)
    try:
        period = StatsPeriod(period) if period is not None else None
    except ValueError:
        valid = ", ".join(p.value for p in StatsPeriod)
        return failure(create_error(ErrorCode.VALIDATION_ERROR, f"Invalid period: {period}", f"Valid periods are: {valid}"))
    try:
        start, end = calculate_period(period, since, until)
    except ValueError as e:
        return failure(create_error(ErrorCode.INVALID_DATE_FORMAT, "Invalid stats period", str(e)))

    all_tasks = query_tasks(project=project, limit=MAX_PAGINATION_LIMIT)
    if not all_tasks.success:
        return all_tasks
    available = query_tasks(project=project, available=True, limit=MAX_PAGINATION_LIMIT)
    if not available.success:
        return available
    projects = query_projects(limit=MAX_PAGINATION_LIMIT)
    if not projects.success:
        return projects

    if all_tasks.data.has_more:
        logger.warning("Stats truncated to the first %d tasks", MAX_PAGINATION_LIMIT)

    return success(
        summarize(all_tasks.data.items, available.data.items, projects.data.items, start, end, project=project)
    )
