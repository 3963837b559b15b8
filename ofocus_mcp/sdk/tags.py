"""Tag operations."""

from ofocus_mcp.enums import EntityKind, ErrorCode
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.entities import TagModel
from ofocus_mcp.models.results import CliOutput, DeleteTagResult, PaginatedResult
from ofocus_mcp.sdk.common import (
    JSON_ONLY,
    TAG_HANDLERS,
    execute,
    find_tag,
    is_not_found,
    not_found_guard,
    paginated_loop,
)
from ofocus_mcp.sdk.tasks import DEFAULT_LIMIT
from ofocus_mcp.utils.escape import escape_applescript, quote_applescript
from ofocus_mcp.utils.result import failure, success
from ofocus_mcp.utils.validation import (
    first_error,
    validate_id,
    validate_pagination_params,
    validate_required_name,
    validate_tag_name,
)


def _parent_lookup(parent_tag_id: str | None, parent_tag_name: str | None) -> str | None:
    if parent_tag_id:
        return find_tag("parentTag", parent_tag_id)
    if parent_tag_name:
        return f"set parentTag to first flattened tag whose name is {quote_applescript(parent_tag_name)}"
    return None


def _validate_parent(parent_tag_id: str | None, parent_tag_name: str | None):
    if parent_tag_id is not None:
        return validate_id(parent_tag_id, EntityKind.TAG)
    if parent_tag_name:
        return validate_required_name(parent_tag_name, "tag")
    return None


def query_tags(parent: str | None = None, limit: int | None = None, offset: int | None = None) -> CliOutput:
    """
    List tags, optionally only the children of the tag named ``parent``.

    Returns:
        CliOutput wrapping PaginatedResult[TagModel]
    """
    if error := first_error(
        validate_tag_name(parent) if parent else None,
        validate_pagination_params(limit, offset),
    ):
        return failure(error)

    limit = DEFAULT_LIMIT if limit is None else limit
    offset = 0 if offset is None else offset

    filter_block = ""
    if parent:
        filter_block = (
            "try\n"
            "\tset parentObj to container of t\n"
            f"\tif class of parentObj is not tag or name of parentObj is not {quote_applescript(parent)} then set shouldInclude to false\n"
            "on error\n"
            "\tset shouldInclude to false\n"
            "end try"
        )

    body = paginated_loop("flattened tags", filter_block, "my serializeTag(t)", limit, offset)
    return execute(TAG_HANDLERS, body, "Failed to query tags", PaginatedResult[TagModel])


def create_tag(name: str, parent_tag_id: str | None = None, parent_tag_name: str | None = None) -> CliOutput:
    """Create a tag, optionally nested under an existing tag."""
    if error := first_error(validate_tag_name(name), _validate_parent(parent_tag_id, parent_tag_name)):
        return failure(error)

    properties = f"{{name:{quote_applescript(name)}}}"
    lines = []
    lookup = _parent_lookup(parent_tag_id, parent_tag_name)
    if lookup:
        lines.append(lookup)
        lines.append(f"set newTag to make new tag at end of tags of parentTag with properties {properties}")
    else:
        lines.append(f"set newTag to make new tag with properties {properties}")
    lines.append("return my serializeTag(newTag)")
    return execute(TAG_HANDLERS, "\n".join(lines), "Failed to create tag", TagModel)


def update_tag(
    tag_id: str,
    name: str | None = None,
    parent_tag_id: str | None = None,
    parent_tag_name: str | None = None,
) -> CliOutput:
    """Rename a tag and/or move it under another tag."""
    if error := first_error(
        validate_id(tag_id, EntityKind.TAG),
        validate_tag_name(name) if name is not None else None,
        _validate_parent(parent_tag_id, parent_tag_name),
    ):
        return failure(error)
    if parent_tag_id is not None and parent_tag_id == tag_id:
        return failure(create_error(ErrorCode.VALIDATION_ERROR, "A tag cannot be its own parent"))

    lines = [find_tag("theTag", tag_id)]
    if name is not None:
        lines.append(f"set name of theTag to {quote_applescript(name)}")
    lookup = _parent_lookup(parent_tag_id, parent_tag_name)
    if lookup:
        lines.append(lookup)
        lines.append("move theTag to end of tags of parentTag")
    lines.append("return my serializeTag(theTag)")
    return execute(TAG_HANDLERS, "\n".join(lines), "Failed to update tag", TagModel)


def delete_tag(tag_id: str) -> CliOutput:
    """Delete a tag. Tasks keep existing but lose the tag."""
    if error := validate_id(tag_id, EntityKind.TAG):
        return failure(error)

    escaped = escape_applescript(tag_id)
    statements = (
        f"{find_tag('theTag', tag_id)}\n"
        "delete theTag\n"
        f'return "{{\\"tagId\\": \\"{escaped}\\", \\"deleted\\": true}}"'
    )
    body = not_found_guard(statements, f'"{{\\"error\\": \\"not found\\", \\"tagId\\": \\"{escaped}\\"}}"')

    output = execute(JSON_ONLY, body, "Failed to delete tag")
    if not output.success:
        return output
    if is_not_found(output.data):
        return failure(create_error(ErrorCode.TAG_NOT_FOUND, f"Tag not found: {tag_id}"))
    return success(DeleteTagResult.model_validate(output.data))
