"""Folder operations."""

from ofocus_mcp.enums import EntityKind, ErrorCode
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.entities import FolderModel
from ofocus_mcp.models.results import CliOutput, DeleteFolderResult, PaginatedResult
from ofocus_mcp.sdk.common import FOLDER_HANDLERS, JSON_ONLY, execute, find_folder, paginated_loop
from ofocus_mcp.sdk.tasks import DEFAULT_LIMIT
from ofocus_mcp.utils.escape import escape_applescript, quote_applescript
from ofocus_mcp.utils.result import failure
from ofocus_mcp.utils.validation import (
    first_error,
    validate_folder_name,
    validate_id,
    validate_pagination_params,
    validate_required_name,
)


def _parent_lookup(parent_folder_id: str | None, parent_folder_name: str | None) -> str | None:
    if parent_folder_id:
        return find_folder("parentFolder", parent_folder_id)
    if parent_folder_name:
        return f"set parentFolder to first flattened folder whose name is {quote_applescript(parent_folder_name)}"
    return None


def _validate_parent(parent_folder_id: str | None, parent_folder_name: str | None):
    if parent_folder_id is not None:
        return validate_id(parent_folder_id, EntityKind.FOLDER)
    return validate_folder_name(parent_folder_name)


def query_folders(parent: str | None = None, limit: int | None = None, offset: int | None = None) -> CliOutput:
    """
    List folders, optionally only the children of the folder named ``parent``.

    Returns:
        CliOutput wrapping PaginatedResult[FolderModel]
    """
    if error := first_error(validate_folder_name(parent), validate_pagination_params(limit, offset)):
        return failure(error)

    limit = DEFAULT_LIMIT if limit is None else limit
    offset = 0 if offset is None else offset

    filter_block = ""
    if parent:
        filter_block = (
            "try\n"
            "\tset parentObj to container of t\n"
            f"\tif class of parentObj is not folder or name of parentObj is not {quote_applescript(parent)} then set shouldInclude to false\n"
            "on error\n"
            "\tset shouldInclude to false\n"
            "end try"
        )

    body = paginated_loop("flattened folders", filter_block, "my serializeFolder(t)", limit, offset)
    return execute(FOLDER_HANDLERS, body, "Failed to query folders", PaginatedResult[FolderModel])


def create_folder(
    name: str, parent_folder_id: str | None = None, parent_folder_name: str | None = None
) -> CliOutput:
    """Create a folder, optionally inside another folder."""
    if error := first_error(
        validate_required_name(name, "folder"),
        _validate_parent(parent_folder_id, parent_folder_name),
    ):
        return failure(error)

    properties = f"{{name:{quote_applescript(name)}}}"
    lines = []
    lookup = _parent_lookup(parent_folder_id, parent_folder_name)
    if lookup:
        lines.append(lookup)
        lines.append(f"set newFolder to make new folder at end of folders of parentFolder with properties {properties}")
    else:
        lines.append(f"set newFolder to make new folder with properties {properties}")
    lines.append("return my serializeFolder(newFolder)")
    return execute(FOLDER_HANDLERS, "\n".join(lines), "Failed to create folder", FolderModel)


def update_folder(
    folder_id: str,
    name: str | None = None,
    parent_folder_id: str | None = None,
    parent_folder_name: str | None = None,
) -> CliOutput:
    """Rename a folder and/or move it into another folder."""
    if error := first_error(
        validate_id(folder_id, EntityKind.FOLDER),
        validate_required_name(name, "folder") if name is not None else None,
        _validate_parent(parent_folder_id, parent_folder_name),
    ):
        return failure(error)
    if parent_folder_id is not None and parent_folder_id == folder_id:
        return failure(create_error(ErrorCode.VALIDATION_ERROR, "A folder cannot be its own parent"))

    lines = [find_folder("theFolder", folder_id)]
    if name is not None:
        lines.append(f"set name of theFolder to {quote_applescript(name)}")
    lookup = _parent_lookup(parent_folder_id, parent_folder_name)
    if lookup:
        lines.append(lookup)
        lines.append("move theFolder to end of folders of parentFolder")
    lines.append("return my serializeFolder(theFolder)")
    return execute(FOLDER_HANDLERS, "\n".join(lines), "Failed to update folder", FolderModel)


def delete_folder(folder_id: str) -> CliOutput:
    """Delete a folder together with everything inside it."""
    if error := validate_id(folder_id, EntityKind.FOLDER):
        return failure(error)

    body = (
        f"{find_folder('theFolder', folder_id)}\n"
        "delete theFolder\n"
        f'return "{{\\"folderId\\": \\"{escape_applescript(folder_id)}\\", \\"deleted\\": true}}"'
    )
    return execute(JSON_ONLY, body, "Failed to delete folder", DeleteFolderResult)
