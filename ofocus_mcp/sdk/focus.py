"""
Focus the front OmniFocus window on a project or folder.

Focus belongs to the application's document window, not to the document,
so these scripts step out of the ``tell default document`` block to change
or read it and step back in before returning.
"""

import logging

from ofocus_mcp.enums import EntityKind
from ofocus_mcp.models.results import CliOutput, FocusResult
from ofocus_mcp.sdk.common import JSON_ONLY, execute
from ofocus_mcp.utils.escape import json_object_expr, quote_applescript
from ofocus_mcp.utils.result import failure
from ofocus_mcp.utils.validation import validate_id, validate_required_name

logger = logging.getLogger(__name__)

UNFOCUSED_JSON = json_object_expr(
    [("focused", '"false"'), ("targetId", '"null"'), ("targetName", '"null"'), ("targetType", '"null"')]
)
FOCUSED_JSON = json_object_expr(
    [
        ("focused", '"true"'),
        ("targetId", "my jsonString(targetId)"),
        ("targetName", "my jsonString(targetName)"),
        ("targetType", "my jsonString(targetType)"),
    ]
)


def focus(target: str, by_id: bool = False) -> CliOutput:
    """
    Focus on a project or folder, looked up by name or by ID.

    Projects are searched before folders, so a project and a folder sharing
    a name resolve to the project.

    Returns:
        CliOutput wrapping FocusResult
    """
    error = validate_id(target, EntityKind.ITEM) if by_id else validate_required_name(target, "project or folder")
    if error:
        return failure(error)

    key = "id" if by_id else "name"
    missing = f"No project or folder with ID {target}" if by_id else f"No project or folder named {target}"
    body = f"""set targetItem to missing value
set targetType to ""
try
	set targetItem to first flattened project whose {key} is {quote_applescript(target)}
	set targetType to "project"
end try
if targetItem is missing value then
	try
		set targetItem to first flattened folder whose {key} is {quote_applescript(target)}
		set targetType to "folder"
	end try
end if
if targetItem is missing value then error {quote_applescript(missing)}
set targetId to id of targetItem
set targetName to name of targetItem
end tell
set focused of document window 1 to {{targetItem}}
tell default document
return {FOCUSED_JSON}
"""
    logger.debug("Focusing on %r (by_id=%s)", target, by_id)
    return execute(JSON_ONLY, body, "Failed to set focus", FocusResult)


def unfocus() -> CliOutput:
    """Clear focus so the window shows everything again."""
    body = f"""end tell
set focused of document window 1 to {{}}
tell default document
return {UNFOCUSED_JSON}
"""
    return execute(JSON_ONLY, body, "Failed to clear focus", FocusResult)


def get_focused() -> CliOutput:
    """
    Report what the front window is focused on.

    Only the first focused item is reported. An item without a project
    status is taken to be a folder.
    """
    body = f"""end tell
set focusedItems to focused of document window 1
set isFocused to (count of focusedItems) > 0
if isFocused then
	set focusedItem to item 1 of focusedItems
	set targetId to id of focusedItem
	set targetName to name of focusedItem
	set targetType to "folder"
	try
		set testStatus to status of focusedItem
		set targetType to "project"
	end try
end if
tell default document
if not isFocused then return {UNFOCUSED_JSON}
return {FOCUSED_JSON}
"""
    return execute(JSON_ONLY, body, "Failed to get focus state", FocusResult)
