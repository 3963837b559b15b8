"""Project operations, including the weekly-review workflow."""

import logging

from ofocus_mcp.enums import EntityKind, ErrorCode, ProjectStatus
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.entities import ProjectModel
from ofocus_mcp.models.results import (
    CliOutput,
    DeleteProjectResult,
    DropProjectResult,
    PaginatedResult,
    ReviewIntervalResult,
    ReviewResult,
)
from ofocus_mcp.sdk.common import (
    JSON_ONLY,
    PROJECT_HANDLERS,
    execute,
    find_folder,
    find_project,
    paginated_loop,
)
from ofocus_mcp.sdk.tasks import DEFAULT_LIMIT
from ofocus_mcp.utils.escape import applescript_date, escape_applescript, quote_applescript
from ofocus_mcp.utils.result import failure
from ofocus_mcp.utils.validation import (
    first_error,
    validate_date_string,
    validate_days,
    validate_folder_name,
    validate_id,
    validate_pagination_params,
    validate_project_name,
    validate_required_name,
)

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400

# wire status -> AppleScript status constant
_STATUS_CONSTANTS = {
    ProjectStatus.ACTIVE: "active status",
    ProjectStatus.ON_HOLD: "on hold status",
    ProjectStatus.COMPLETED: "done status",
    ProjectStatus.DROPPED: "dropped status",
}


def _coerce_status(status: ProjectStatus | str | None) -> tuple[ProjectStatus | None, CliOutput | None]:
    if status is None:
        return None, None
    try:
        return ProjectStatus(status), None
    except ValueError:
        valid = ", ".join(s.value for s in ProjectStatus)
        return None, failure(
            create_error(ErrorCode.VALIDATION_ERROR, f"Invalid project status: {status}", f"Valid statuses are: {valid}")
        )


def _validate_folder_target(folder_id: str | None, folder_name: str | None):
    if folder_id is not None:
        return validate_id(folder_id, EntityKind.FOLDER)
    return validate_folder_name(folder_name)


def _folder_lookup(folder_id: str | None, folder_name: str | None) -> str | None:
    if folder_id:
        return find_folder("targetFolder", folder_id)
    if folder_name:
        return f"set targetFolder to first flattened folder whose name is {quote_applescript(folder_name)}"
    return None


def _date_statement(var: str, field: str, value: str) -> str:
    return f"set {field} of {var} to {applescript_date(value) if value else 'missing value'}"


def query_projects(
    folder: str | None = None,
    status: ProjectStatus | str | None = None,
    sequential: bool | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> CliOutput:
    """
    List projects, optionally filtered by folder name, status or type.

    Returns:
        CliOutput wrapping PaginatedResult[ProjectModel]
    """
    status, status_error = _coerce_status(status)
    if status_error:
        return status_error
    if error := first_error(validate_folder_name(folder), validate_pagination_params(limit, offset)):
        return failure(error)

    limit = DEFAULT_LIMIT if limit is None else limit
    offset = 0 if offset is None else offset

    source = "flattened projects"
    if sequential is not None:
        source += f" where sequential is {'true' if sequential else 'false'}"

    filters = []
    if status is not None:
        filters.append(f'if (my projectStatusString(t)) is not "{status.value}" then set shouldInclude to false')
    if folder:
        filters.append(
            "try\n"
            f"\tif name of folder of t is not {quote_applescript(folder)} then set shouldInclude to false\n"
            "on error\n"
            "\tset shouldInclude to false\n"
            "end try"
        )

    body = paginated_loop(source, "\n".join(filters), "my serializeProject(t)", limit, offset)
    return execute(PROJECT_HANDLERS, body, "Failed to query projects", PaginatedResult[ProjectModel])


def create_project(
    name: str,
    note: str | None = None,
    folder_id: str | None = None,
    folder_name: str | None = None,
    sequential: bool = False,
    status: ProjectStatus | str | None = None,
    due_date: str | None = None,
    defer_date: str | None = None,
) -> CliOutput:
    """
    Create a project, at the top level or inside a folder.

    ``folder_id`` wins over ``folder_name`` when both are given. Only
    ``active`` and ``on-hold`` make sense as an initial status.
    """
    status, status_error = _coerce_status(status)
    if status_error:
        return status_error
    if status not in (None, ProjectStatus.ACTIVE, ProjectStatus.ON_HOLD):
        return failure(
            create_error(ErrorCode.VALIDATION_ERROR, "New projects can only be active or on-hold")
        )
    if error := first_error(
        validate_required_name(name, "project"),
        _validate_folder_target(folder_id, folder_name),
        validate_date_string(due_date),
        validate_date_string(defer_date),
    ):
        return failure(error)

    props = [f"name:{quote_applescript(name)}"]
    if note is not None:
        props.append(f"note:{quote_applescript(note)}")
    if sequential:
        props.append("sequential:true")
    if status == ProjectStatus.ON_HOLD:
        props.append("status:on hold status")
    if due_date:
        props.append(f"due date:{applescript_date(due_date)}")
    if defer_date:
        props.append(f"defer date:{applescript_date(defer_date)}")
    properties = "{" + ", ".join(props) + "}"

    lines = []
    lookup = _folder_lookup(folder_id, folder_name)
    if lookup:
        lines.append(lookup)
        lines.append(f"set newProject to make new project at end of projects of targetFolder with properties {properties}")
    else:
        lines.append(f"set newProject to make new project with properties {properties}")
    lines.append("return my serializeProject(newProject)")

    logger.debug("Creating project %r", name)
    return execute(PROJECT_HANDLERS, "\n".join(lines), "Failed to create project", ProjectModel)


def update_project(
    project_id: str,
    name: str | None = None,
    note: str | None = None,
    status: ProjectStatus | str | None = None,
    folder_id: str | None = None,
    folder_name: str | None = None,
    sequential: bool | None = None,
    due_date: str | None = None,
    defer_date: str | None = None,
) -> CliOutput:
    """
    Update a project's properties. Empty ``due_date`` or ``defer_date`` clears it.

    Returns:
        CliOutput wrapping the updated ProjectModel
    """
    status, status_error = _coerce_status(status)
    if status_error:
        return status_error
    if error := first_error(
        validate_id(project_id, EntityKind.PROJECT),
        validate_project_name(name),
        _validate_folder_target(folder_id, folder_name),
        validate_date_string(due_date),
        validate_date_string(defer_date),
    ):
        return failure(error)

    lines = [find_project("theProject", project_id)]
    if name is not None:
        lines.append(f"set name of theProject to {quote_applescript(name)}")
    if note is not None:
        lines.append(f"set note of theProject to {quote_applescript(note)}")
    if sequential is not None:
        lines.append(f"set sequential of theProject to {'true' if sequential else 'false'}")
    if status is not None:
        lines.append(f"set status of theProject to {_STATUS_CONSTANTS[status]}")
    if due_date is not None:
        lines.append(_date_statement("theProject", "due date", due_date))
    if defer_date is not None:
        lines.append(_date_statement("theProject", "defer date", defer_date))
    lookup = _folder_lookup(folder_id, folder_name)
    if lookup:
        lines.append(lookup)
        lines.append("move theProject to end of projects of targetFolder")
    lines.append("return my serializeProject(theProject)")

    return execute(PROJECT_HANDLERS, "\n".join(lines), "Failed to update project", ProjectModel)


def delete_project(project_id: str) -> CliOutput:
    """Permanently delete a project and its tasks."""
    if error := validate_id(project_id, EntityKind.PROJECT):
        return failure(error)

    body = (
        f"{find_project('theProject', project_id)}\n"
        "delete theProject\n"
        f'return "{{\\"projectId\\": \\"{escape_applescript(project_id)}\\", \\"deleted\\": true}}"'
    )
    return execute(JSON_ONLY, body, "Failed to delete project", DeleteProjectResult)


def drop_project(project_id: str) -> CliOutput:
    """Set a project's status to dropped."""
    if error := validate_id(project_id, EntityKind.PROJECT):
        return failure(error)

    body = (
        f"{find_project('theProject', project_id)}\n"
        "set status of theProject to dropped status\n"
        f'return "{{\\"projectId\\": \\"{escape_applescript(project_id)}\\", \\"projectName\\": \\"" & '
        '(my escapeJson(name of theProject)) & "\\", \\"dropped\\": " & (status of theProject is dropped status) & "}"'
    )
    return execute(JSON_ONLY, body, "Failed to drop project", DropProjectResult)


def review_project(project_id: str) -> CliOutput:
    """Mark a project as reviewed now; OmniFocus computes the next review date."""
    if error := validate_id(project_id, EntityKind.PROJECT):
        return failure(error)

    body = f"""{find_project('theProject', project_id)}
set last review date of theProject to current date
set lastReviewStr to ""
try
	set lastReviewStr to (last review date of theProject) as string
end try
set nextReviewStr to ""
try
	set nextReviewStr to (next review date of theProject) as string
end try
return "{{\\"projectId\\": \\"" & (id of theProject) & "\\", \\"projectName\\": \\"" & (my escapeJson(name of theProject)) & "\\", \\"lastReviewed\\": " & (my jsonString(lastReviewStr)) & ", \\"nextReviewDate\\": " & (my jsonString(nextReviewStr)) & "}}"
"""
    return execute(JSON_ONLY, body, "Failed to review project", ReviewResult)


def query_projects_for_review() -> CliOutput:
    """
    List active or on-hold projects whose next review date has passed.

    Returns:
        CliOutput wrapping a list of ProjectModel
    """
    body = """set output to "["
set isFirst to true
set currentDate to current date
repeat with p in flattened projects
	set shouldInclude to false
	try
		set theStatus to status of p
		if theStatus is not dropped status and theStatus is not done status then
			set nextReview to next review date of p
			if nextReview is not missing value and nextReview <= currentDate then set shouldInclude to true
		end if
	end try
	if shouldInclude then
		if not isFirst then set output to output & ","
		set isFirst to false
		set output to output & my serializeProject(p)
	end if
end repeat
return output & "]"
"""
    return execute(PROJECT_HANDLERS, body, "Failed to query projects for review", list[ProjectModel])


def _interval_result(statements: str) -> str:
    return f"""{statements}
set intervalSecs to 0
try
	set intervalSecs to review interval of theProject
end try
set intervalDays to intervalSecs div {SECONDS_PER_DAY}
return "{{\\"projectId\\": \\"" & (id of theProject) & "\\", \\"projectName\\": \\"" & (my escapeJson(name of theProject)) & "\\", \\"reviewIntervalDays\\": " & intervalDays & "}}"
"""


def get_review_interval(project_id: str) -> CliOutput:
    """Read a project's review interval in whole days."""
    if error := validate_id(project_id, EntityKind.PROJECT):
        return failure(error)
    body = _interval_result(find_project("theProject", project_id))
    return execute(JSON_ONLY, body, "Failed to get review interval", ReviewIntervalResult)


def set_review_interval(project_id: str, days: int) -> CliOutput:
    """Set a project's review interval in days."""
    if error := first_error(
        validate_id(project_id, EntityKind.PROJECT),
        validate_days(days, "Review interval"),
    ):
        return failure(error)
    statements = (
        f"{find_project('theProject', project_id)}\n"
        f"set review interval of theProject to {days * SECONDS_PER_DAY}"
    )
    body = _interval_result(statements)
    return execute(JSON_ONLY, body, "Failed to set review interval", ReviewIntervalResult)
