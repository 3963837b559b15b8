"""File attachments on tasks."""

import logging
from pathlib import Path

from ofocus_mcp.enums import EntityKind, ErrorCode
from ofocus_mcp.models.results import (
    AddAttachmentResult,
    CliOutput,
    ListAttachmentsResult,
    RemoveAttachmentResult,
)
from ofocus_mcp.sdk.common import JSON_ONLY, execute, find_task
from ofocus_mcp.utils.escape import json_object_expr, quote_applescript
from ofocus_mcp.utils.result import failure, failure_message
from ofocus_mcp.utils.validation import validate_id

logger = logging.getLogger(__name__)


def add_attachment(task_id: str, file_path: str) -> CliOutput:
    """
    Attach a local file to a task.

    The path is resolved against the current directory and must name an
    existing regular file.

    Returns:
        CliOutput wrapping AddAttachmentResult
    """
    if error := validate_id(task_id, EntityKind.TASK):
        return failure(error)

    path = Path(file_path).expanduser().resolve()
    if not path.exists():
        return failure_message(f"File not found: {file_path}", ErrorCode.VALIDATION_ERROR)
    if not path.is_file():
        return failure_message(f"Not a file: {file_path}", ErrorCode.VALIDATION_ERROR)

    result = json_object_expr(
        [
            ("taskId", "my jsonString(id of theTask)"),
            ("taskName", "my jsonString(name of theTask)"),
            ("fileName", f"my jsonString({quote_applescript(path.name)})"),
            ("attached", '"true"'),
        ]
    )
    body = f"""{find_task('theTask', task_id)}
set theFile to POSIX file {quote_applescript(str(path))}
tell theTask
	make new attachment with properties {{file:theFile}}
end tell
return {result}
"""
    logger.debug("Attaching %s to %s", path, task_id)
    return execute(JSON_ONLY, body, "Failed to add attachment", AddAttachmentResult)


def list_attachments(task_id: str) -> CliOutput:
    """
    List a task's attachments.

    AppleScript does not report size or type, so both are always null.

    Returns:
        CliOutput wrapping ListAttachmentsResult
    """
    if error := validate_id(task_id, EntityKind.TASK):
        return failure(error)

    item = json_object_expr(
        [
            ("id", "my jsonString(id of att)"),
            ("name", "my jsonString(name of att)"),
            ("size", '"null"'),
            ("type", '"null"'),
        ]
    )
    body = f"""{find_task('theTask', task_id)}
set output to "["
set isFirst to true
repeat with att in attachments of theTask
	if not isFirst then set output to output & ","
	set isFirst to false
	set output to output & {item}
end repeat
set output to output & "]"
return "{{\\"taskId\\": " & (my jsonString(id of theTask)) & ", \\"taskName\\": " & (my jsonString(name of theTask)) & ", \\"attachments\\": " & output & "}}"
"""
    return execute(JSON_ONLY, body, "Failed to list attachments", ListAttachmentsResult)


def remove_attachment(task_id: str, attachment: str) -> CliOutput:
    """
    Remove the first attachment whose ID or name matches ``attachment``.

    Returns:
        CliOutput wrapping RemoveAttachmentResult
    """
    if error := validate_id(task_id, EntityKind.TASK):
        return failure(error)
    if not attachment or not attachment.strip():
        return failure_message("Attachment ID or name cannot be empty", ErrorCode.VALIDATION_ERROR)

    target = quote_applescript(attachment)
    result = json_object_expr(
        [
            ("taskId", "my jsonString(id of theTask)"),
            ("attachmentName", "my jsonString(attName)"),
            ("removed", '"true"'),
        ]
    )
    body = f"""{find_task('theTask', task_id)}
set toRemove to missing value
repeat with att in attachments of theTask
	if id of att is {target} or name of att is {target} then
		set toRemove to contents of att
		exit repeat
	end if
end repeat
if toRemove is missing value then error "Attachment not found: " & {target}
set attName to name of toRemove
delete toRemove
return {result}
"""
    logger.debug("Removing attachment %r from %s", attachment, task_id)
    return execute(JSON_ONLY, body, "Failed to remove attachment", RemoveAttachmentResult)
