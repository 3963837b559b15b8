"""Folder MCP tool definitions."""

from mcp.types import ToolAnnotations

from ofocus_mcp import sdk
from ofocus_mcp.models.inputs import CreateFolderInput, FolderIdInput, ListFoldersInput, UpdateFolderInput
from ofocus_mcp.server import mcp
from ofocus_mcp.utils.formatters import _format_result


@mcp.tool(
    name="folders_list",
    annotations=ToolAnnotations(
        title="List Folders",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def folders_list(params: ListFoldersInput) -> str:
    """List folders with their project and subfolder counts."""
    result = sdk.query_folders(parent=params.parent, limit=params.limit, offset=params.offset)
    return _format_result(result, params.response_format, "Folders")


@mcp.tool(
    name="folder_create",
    annotations=ToolAnnotations(
        title="Create Folder",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def folder_create(params: CreateFolderInput) -> str:
    """Create a new folder, optionally inside another folder."""
    result = sdk.create_folder(
        params.name, parent_folder_id=params.parent_folder_id, parent_folder_name=params.parent_folder_name
    )
    return _format_result(result)


@mcp.tool(
    name="folder_update",
    annotations=ToolAnnotations(
        title="Update Folder",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def folder_update(params: UpdateFolderInput) -> str:
    """Rename a folder and/or move it into another folder."""
    result = sdk.update_folder(
        params.folder_id,
        name=params.name,
        parent_folder_id=params.parent_folder_id,
        parent_folder_name=params.parent_folder_name,
    )
    return _format_result(result)


@mcp.tool(
    name="folder_delete",
    annotations=ToolAnnotations(
        title="Delete Folder",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def folder_delete(params: FolderIdInput) -> str:
    """
    Permanently delete a folder.

    Everything inside it (projects, subfolders and their tasks) is deleted too.
    """
    return _format_result(sdk.delete_folder(params.folder_id))
