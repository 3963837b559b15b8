"""Tag MCP tool definitions."""

from mcp.types import ToolAnnotations

from ofocus_mcp import sdk
from ofocus_mcp.models.inputs import CreateTagInput, ListTagsInput, TagIdInput, UpdateTagInput
from ofocus_mcp.server import mcp
from ofocus_mcp.utils.formatters import _format_result


@mcp.tool(
    name="tags_list",
    annotations=ToolAnnotations(
        title="List Tags",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tags_list(params: ListTagsInput) -> str:
    """
    List tags with their number of available tasks.

    Args:
        params: ListTagsInput containing optional parent, limit, offset

    Returns:
        Paginated tags (JSON by default, or markdown / concise)
    """
    result = sdk.query_tags(parent=params.parent, limit=params.limit, offset=params.offset)
    return _format_result(result, params.response_format, "Tags")


@mcp.tool(
    name="tag_create",
    annotations=ToolAnnotations(
        title="Create Tag",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def tag_create(params: CreateTagInput) -> str:
    """
    Create a new tag, optionally nested under another tag.

    Examples:
        - Top-level: params with name="Errands"
        - Nested: params with name="Phone", parent_tag_name="Contexts"
    """
    result = sdk.create_tag(
        params.name, parent_tag_id=params.parent_tag_id, parent_tag_name=params.parent_tag_name
    )
    return _format_result(result)


@mcp.tool(
    name="tag_update",
    annotations=ToolAnnotations(
        title="Update Tag",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tag_update(params: UpdateTagInput) -> str:
    """Rename a tag and/or move it under another tag."""
    result = sdk.update_tag(
        params.tag_id,
        name=params.name,
        parent_tag_id=params.parent_tag_id,
        parent_tag_name=params.parent_tag_name,
    )
    return _format_result(result)


@mcp.tool(
    name="tag_delete",
    annotations=ToolAnnotations(
        title="Delete Tag",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tag_delete(params: TagIdInput) -> str:
    """Delete a tag. Tasks that carried it are kept."""
    return _format_result(sdk.delete_tag(params.tag_id))
