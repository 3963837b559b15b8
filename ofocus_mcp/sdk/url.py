"""``omnifocus:///`` links for tasks, projects, folders and tags."""

import logging

from ofocus_mcp.enums import EntityKind
from ofocus_mcp.models.results import CliOutput, OpenResult, UrlResult
from ofocus_mcp.sdk.common import JSON_ONLY, execute
from ofocus_mcp.utils.escape import json_object_expr, quote_applescript
from ofocus_mcp.utils.result import failure
from ofocus_mcp.utils.validation import validate_id

logger = logging.getLogger(__name__)

URL_PREFIX = "omnifocus:///"

# Lookup order when resolving a bare ID
_LOOKUP_ORDER = (EntityKind.TASK, EntityKind.PROJECT, EntityKind.FOLDER, EntityKind.TAG)


def _resolve_item(item_id: str) -> str:
    """Statements binding theItem, itemType, itemName and itemUrl, or raising if no match."""
    lines = [
        f"set itemId to {quote_applescript(item_id)}",
        "set theItem to missing value",
        'set itemType to ""',
    ]
    for kind in _LOOKUP_ORDER:
        lines += [
            "if theItem is missing value then",
            "\ttry",
            f"\t\tset theItem to first flattened {kind.value} whose id is itemId",
            f'\t\tset itemType to "{kind.value}"',
            "\tend try",
            "end if",
        ]
    lines += [
        'if theItem is missing value then error "Item not found with ID: " & itemId',
        "set itemName to name of theItem",
        f'set itemUrl to "{URL_PREFIX}" & itemType & "/" & itemId',
    ]
    return "\n".join(lines)


def generate_url(item_id: str) -> CliOutput:
    """
    Build the ``omnifocus:///<type>/<id>`` URL for any item.

    Tasks are tried first, then projects, folders and tags.

    Returns:
        CliOutput wrapping UrlResult
    """
    if error := validate_id(item_id, EntityKind.ITEM):
        return failure(error)
    result = json_object_expr(
        [
            ("id", "my jsonString(itemId)"),
            ("type", "my jsonString(itemType)"),
            ("url", "my jsonString(itemUrl)"),
            ("name", "my jsonString(itemName)"),
        ]
    )
    body = f"{_resolve_item(item_id)}\nreturn {result}\n"
    return execute(JSON_ONLY, body, "Failed to generate URL", UrlResult)


def open_item(item_id: str) -> CliOutput:
    """
    Reveal an item in the OmniFocus window by opening its URL.

    Returns:
        CliOutput wrapping OpenResult
    """
    if error := validate_id(item_id, EntityKind.ITEM):
        return failure(error)
    result = json_object_expr(
        [
            ("id", "my jsonString(itemId)"),
            ("type", "my jsonString(itemType)"),
            ("name", "my jsonString(itemName)"),
            ("opened", '"true"'),
        ]
    )
    body = f"""{_resolve_item(item_id)}
end tell
activate
do shell script "open " & quoted form of itemUrl
tell default document
return {result}
"""
    logger.debug("Opening %s", item_id)
    return execute(JSON_ONLY, body, "Failed to open item", OpenResult)
