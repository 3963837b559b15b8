"""Shared plumbing for SDK operations: run a script, map the result into ``CliOutput``."""

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ofocus_mcp.config import get_settings
from ofocus_mcp.enums import ErrorCode
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.results import BatchFailure, BatchResult, CliOutput
from ofocus_mcp.utils.applescript import run_composed_script
from ofocus_mcp.utils.assets import (
    FOLDER_SERIALIZER,
    JSON_HELPERS,
    PROJECT_SERIALIZER,
    TAG_SERIALIZER,
    TASK_SERIALIZER,
    TASK_WITH_CHILDREN_SERIALIZER,
    TEXT_HELPERS,
    load_scripts,
)
from ofocus_mcp.utils.escape import escape_applescript
from ofocus_mcp.utils.result import failure, success

logger = logging.getLogger(__name__)

PARSE_FAILURE = "Failed to parse AppleScript output"

# Handler sets, in dependency order.
JSON_ONLY = (JSON_HELPERS,)
TASK_HANDLERS = (JSON_HELPERS, TASK_SERIALIZER)
TASK_TREE_HANDLERS = (JSON_HELPERS, TASK_SERIALIZER, TASK_WITH_CHILDREN_SERIALIZER)
PROJECT_HANDLERS = (JSON_HELPERS, PROJECT_SERIALIZER)
TAG_HANDLERS = (JSON_HELPERS, TAG_SERIALIZER)
FOLDER_HANDLERS = (JSON_HELPERS, FOLDER_SERIALIZER)
SEARCH_HANDLERS = (JSON_HELPERS, TEXT_HELPERS, TASK_SERIALIZER)


def execute(
    handlers: tuple[str, ...],
    body: str,
    failure_message: str,
    result_type: Any = None,
) -> CliOutput:
    """
    Run ``body`` with the named handler files and wrap the outcome.

    Args:
        handlers: Relative paths of handler files to include
        body: Statements for the application tell block
        failure_message: Message used when the script fails without a parsed error
        result_type: Optional type the decoded JSON is validated against

    Returns:
        CliOutput with the validated data or the error
    """
    result = run_composed_script(load_scripts(*handlers), body)

    if not result.success:
        return failure(result.error or create_error(ErrorCode.UNKNOWN_ERROR, failure_message))

    if result.data is None:
        return failure(create_error(ErrorCode.UNKNOWN_ERROR, "No result returned"))

    if result_type is None:
        return success(result.data)

    try:
        return success(TypeAdapter(result_type).validate_python(result.data))
    except ValidationError as e:
        logger.warning("Unexpected script output for %s: %s", result_type, e)
        return failure(
            create_error(ErrorCode.JSON_PARSE_ERROR, PARSE_FAILURE, str(result.data)[:500])
        )


def find_task(var: str, task_id: str) -> str:
    return f'set {var} to first flattened task whose id is "{escape_applescript(task_id)}"'


def find_project(var: str, project_id: str) -> str:
    return f'set {var} to first flattened project whose id is "{escape_applescript(project_id)}"'


def find_tag(var: str, tag_id: str) -> str:
    return f'set {var} to first flattened tag whose id is "{escape_applescript(tag_id)}"'


def find_folder(var: str, folder_id: str) -> str:
    return f'set {var} to first flattened folder whose id is "{escape_applescript(folder_id)}"'


def not_found_guard(statements: str, not_found_json: str) -> str:
    """
    Wrap lookup-then-mutate ``statements`` so a missing object returns ``not_found_json``.

    Any other error is re-raised inside the script and surfaces through stderr.
    """
    return (
        "try\n"
        f"{_indent(statements)}\n"
        "on error errMsg\n"
        '\tif errMsg contains "Can\'t get" or errMsg contains "not found" then\n'
        f"\t\treturn {not_found_json}\n"
        "\telse\n"
        "\t\terror errMsg\n"
        "\tend if\n"
        "end try"
    )


def _indent(text: str) -> str:
    return "\n".join("\t" + line for line in text.strip("\n").splitlines())


def is_not_found(data: Any) -> bool:
    """True when a delete-style script reported that its target does not exist."""
    return isinstance(data, dict) and data.get("error") == "not found"


def paginated_loop(source_expr: str, filter_block: str, serialize_call: str, limit: int, offset: int) -> str:
    """
    Build the body of a paginated query.

    ``filter_block`` may set ``shouldInclude`` to false for the loop variable
    ``t``. ``serialize_call`` is the expression producing one item's JSON.
    """
    return f"""set output to "{{\\"items\\": ["
set isFirst to true
set totalCount to 0
set returnedCount to 0
set currentIndex to 0
set allItems to {source_expr}
repeat with t in allItems
	set shouldInclude to true
{_indent(filter_block) if filter_block.strip() else ""}
	if shouldInclude then
		set totalCount to totalCount + 1
		if currentIndex >= {offset} and returnedCount < {limit} then
			if not isFirst then set output to output & ","
			set isFirst to false
			set returnedCount to returnedCount + 1
			set output to output & {serialize_call}
		end if
		set currentIndex to currentIndex + 1
	end if
end repeat
set hasMore to (totalCount > ({offset} + returnedCount))
return output & "], \\"totalCount\\": " & totalCount & ", \\"returnedCount\\": " & returnedCount & ", \\"hasMore\\": " & hasMore & ", \\"offset\\": {offset}, \\"limit\\": {limit}}}"
"""


def task_list_loop(source_expr: str, filter_block: str) -> str:
    """
    Build the body of an unpaginated task query returning a JSON array.

    Same contract as ``paginated_loop``: ``filter_block`` may set
    ``shouldInclude`` to false for ``t``.
    """
    return f"""set output to "["
set isFirst to true
repeat with t in ({source_expr})
	set shouldInclude to true
{_indent(filter_block)}
	if shouldInclude then
		if not isFirst then set output to output & ","
		set isFirst to false
		set output to output & my serializeTask(t)
	end if
end repeat
return output & "]"
"""


def chunked(ids: list[str], size: int | None = None) -> list[list[str]]:
    """Split ``ids`` into chunks of at most ``size`` (default: configured batch size)."""
    size = size or get_settings().max_batch_size
    return [ids[i : i + size] for i in range(0, len(ids), size)]


def batch_body(id_list_literal: str, setup: str, per_item: str, succeeded_expr: str) -> str:
    """
    Build a batch script body.

    ``per_item`` runs for each ``itemId`` with ``theTask`` bound; its errors
    become per-item failures. ``succeeded_expr`` is the JSON for one success.
    """
    return f"""set idList to {id_list_literal}
set succeededList to {{}}
set failedList to {{}}
{setup}
repeat with idRef in idList
	set itemId to idRef as string
	try
		set theTask to first flattened task whose id is itemId
{_indent(_indent(per_item))}
		set end of succeededList to {succeeded_expr}
	on error errMsg
		set end of failedList to "{{\\"id\\": \\"" & (my escapeJson(itemId)) & "\\", \\"error\\": \\"" & (my escapeJson(errMsg)) & "\\"}}"
	end try
end repeat
set AppleScript's text item delimiters to ","
set successJson to "[" & (succeededList as string) & "]"
set failJson to "[" & (failedList as string) & "]"
set AppleScript's text item delimiters to ""
return "{{\\"succeeded\\": " & successJson & ", \\"failed\\": " & failJson & "}}"
"""


def merge_batches(chunk_results: list[tuple[list[str], CliOutput]], item_type: Any) -> BatchResult:
    """
    Combine per-chunk outputs into one ``BatchResult``.

    A chunk whose script failed outright, or whose output is not a batch
    object, marks every ID in it as failed.
    """
    succeeded: list[Any] = []
    failed: list[BatchFailure] = []
    adapter = TypeAdapter(list[item_type])
    for chunk, output in chunk_results:
        if not output.success:
            message = output.error.message if output.error else "Unknown error"
        elif not isinstance(output.data, dict):
            logger.warning("Non-JSON batch output for %d item(s)", len(chunk))
            message = PARSE_FAILURE
        else:
            try:
                chunk_succeeded = adapter.validate_python(output.data.get("succeeded", []))
                chunk_failed = [BatchFailure.model_validate(f) for f in output.data.get("failed", [])]
            except ValidationError:
                logger.warning("Unparseable batch output for %d item(s)", len(chunk))
                message = PARSE_FAILURE
            else:
                succeeded.extend(chunk_succeeded)
                failed.extend(chunk_failed)
                continue
        failed.extend(BatchFailure(id=task_id, error=message) for task_id in chunk)
    return BatchResult[item_type](
        succeeded=succeeded,
        failed=failed,
        total_succeeded=len(succeeded),
        total_failed=len(failed),
    )
