"""Perspective listing and a best-effort query of a perspective's tasks."""

from ofocus_mcp.enums import ErrorCode
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.entities import PerspectiveModel, TaskModel
from ofocus_mcp.models.results import CliOutput
from ofocus_mcp.sdk.common import JSON_ONLY, TASK_HANDLERS, execute
from ofocus_mcp.sdk.tasks import DEFAULT_LIMIT
from ofocus_mcp.utils.escape import escape_applescript, quote_applescript
from ofocus_mcp.utils.result import failure, success
from ofocus_mcp.utils.validation import first_error, validate_pagination_params, validate_search_query

BUILT_IN_PERSPECTIVES = frozenset(
    {"Inbox", "Projects", "Tags", "Forecast", "Flagged", "Review", "Nearby", "Completed", "Changed"}
)

# perspectives whose tasks can be reproduced from the object model
_TASK_SOURCES = {
    "flagged": "flattened tasks where flagged is true and completed is false",
    "inbox": "inbox tasks",
    "forecast": "flattened tasks where due date is not missing value and completed is false",
}
_FALLBACK_SOURCE = "flattened tasks where completed is false"


def list_perspectives() -> CliOutput:
    """
    List every perspective OmniFocus knows about.

    Returns:
        CliOutput wrapping a list of PerspectiveModel
    """
    body = """set output to "["
set isFirst to true
repeat with p in perspectives
	set perspId to missing value
	try
		set perspId to id of p
	end try
	if perspId is missing value then set perspId to name of p
	if not isFirst then set output to output & ","
	set isFirst to false
	set output to output & "{\\"id\\": " & (my jsonString(perspId)) & ", \\"name\\": \\"" & (my escapeJson(name of p)) & "\\"}"
end repeat
return output & "]"
"""
    output = execute(JSON_ONLY, body, "Failed to list perspectives", list[PerspectiveModel])
    if not output.success:
        return output
    perspectives = [p.model_copy(update={"custom": p.name not in BUILT_IN_PERSPECTIVES}) for p in output.data]
    return success(perspectives)


def query_perspective(name: str, limit: int | None = None) -> CliOutput:
    """
    Return the tasks shown by a perspective.

    Only Flagged, Inbox and Forecast are reproduced exactly; any other
    existing perspective falls back to all incomplete tasks. A perspective
    that does not exist fails with PERSPECTIVE_NOT_FOUND.
    """
    if validate_search_query(name):
        return failure(create_error(ErrorCode.VALIDATION_ERROR, "Perspective name cannot be empty or contain quotes"))
    if error := first_error(validate_pagination_params(limit, None)):
        return failure(error)
    limit = DEFAULT_LIMIT if limit is None else limit

    source = _TASK_SOURCES.get(name.strip().lower(), _FALLBACK_SOURCE)
    escaped = escape_applescript(name)
    body = f"""set perspExists to false
try
	set thePerspective to perspective {quote_applescript(name)}
	set perspExists to true
end try
if not perspExists then error "Perspective not found: {escaped}"
set output to "["
set isFirst to true
set matchCount to 0
repeat with t in ({source})
	if matchCount >= {limit} then exit repeat
	set matchCount to matchCount + 1
	if not isFirst then set output to output & ","
	set isFirst to false
	set output to output & my serializeTask(t)
end repeat
return output & "]"
"""
    return execute(TASK_HANDLERS, body, "Failed to query perspective", list[TaskModel])
