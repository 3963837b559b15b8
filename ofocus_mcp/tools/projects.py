"""Project MCP tool definitions."""

from mcp.types import ToolAnnotations

from ofocus_mcp import sdk
from ofocus_mcp.models.inputs import (
    CreateProjectInput,
    ListProjectsInput,
    ProjectIdInput,
    ProjectsForReviewInput,
    ReviewIntervalInput,
    UpdateProjectInput,
)
from ofocus_mcp.server import mcp
from ofocus_mcp.utils.formatters import _format_result


@mcp.tool(
    name="projects_list",
    annotations=ToolAnnotations(
        title="List Projects",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def projects_list(params: ListProjectsInput) -> str:
    """
    List and filter projects.

    USE THIS WHEN:
    - Finding a project's ID before updating it or adding tasks to it
    - Getting projects in a folder or with a given status

    DO NOT USE WHEN:
    - Looking for projects that need a review → use projects_for_review instead

    Args:
        params: ListProjectsInput containing folder, status, sequential, limit, offset

    Returns:
        Paginated projects (JSON by default, or markdown / concise)

    Examples:
        - Active projects: params with status="active"
        - Projects in a folder: params with folder="Work"
    """
    result = sdk.query_projects(
        folder=params.folder,
        status=params.status,
        sequential=params.sequential,
        limit=params.limit,
        offset=params.offset,
    )
    return _format_result(result, params.response_format, "Projects")


@mcp.tool(
    name="project_create",
    annotations=ToolAnnotations(
        title="Create Project",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def project_create(params: CreateProjectInput) -> str:
    """
    Create a new project, optionally inside a folder.

    Args:
        params: CreateProjectInput containing name and optional attributes

    Returns:
        JSON of the created project

    Examples:
        - Top-level project: params with name="Plan vacation"
        - In a folder, sequential: params with name="Launch", folder_name="Work", sequential=True
    """
    result = sdk.create_project(
        params.name,
        note=params.note,
        folder_id=params.folder_id,
        folder_name=params.folder_name,
        sequential=params.sequential,
        status=params.status,
        due_date=params.due_date,
        defer_date=params.defer_date,
    )
    return _format_result(result)


@mcp.tool(
    name="project_update",
    annotations=ToolAnnotations(
        title="Update Project",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def project_update(params: UpdateProjectInput) -> str:
    """
    Update properties of an existing project.

    Setting status to "completed" or "dropped" closes the project. Use an
    empty string for due_date or defer_date to clear it.

    Args:
        params: UpdateProjectInput containing project_id and the fields to change

    Returns:
        JSON of the updated project
    """
    result = sdk.update_project(
        params.project_id,
        name=params.name,
        note=params.note,
        status=params.status,
        folder_id=params.folder_id,
        folder_name=params.folder_name,
        sequential=params.sequential,
        due_date=params.due_date,
        defer_date=params.defer_date,
    )
    return _format_result(result)


@mcp.tool(
    name="project_delete",
    annotations=ToolAnnotations(
        title="Delete Project",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def project_delete(params: ProjectIdInput) -> str:
    """Permanently delete a project and all of its tasks."""
    return _format_result(sdk.delete_project(params.project_id))


@mcp.tool(
    name="project_drop",
    annotations=ToolAnnotations(
        title="Drop Project",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def project_drop(params: ProjectIdInput) -> str:
    """Drop a project (set its status to dropped) without deleting it."""
    return _format_result(sdk.drop_project(params.project_id))


@mcp.tool(
    name="project_review",
    annotations=ToolAnnotations(
        title="Review Project",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def project_review(params: ProjectIdInput) -> str:
    """
    Mark a project as reviewed now.

    Args:
        params: ProjectIdInput containing project_id

    Returns:
        JSON with lastReviewed and nextReviewDate
    """
    return _format_result(sdk.review_project(params.project_id))


@mcp.tool(
    name="projects_for_review",
    annotations=ToolAnnotations(
        title="Projects Due for Review",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def projects_for_review(params: ProjectsForReviewInput) -> str:
    """List active and on-hold projects whose next review date has passed."""
    return _format_result(sdk.query_projects_for_review(), params.response_format, "Projects due for review")


@mcp.tool(
    name="project_review_interval",
    annotations=ToolAnnotations(
        title="Project Review Interval",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def project_review_interval(params: ReviewIntervalInput) -> str:
    """
    Read or set how often a project comes up for review.

    Args:
        params: ReviewIntervalInput containing project_id and, to change it, days

    Returns:
        JSON with reviewIntervalDays

    Examples:
        - Read: params with project_id="abc123"
        - Every two weeks: params with project_id="abc123", days=14
    """
    if params.days is None:
        return _format_result(sdk.get_review_interval(params.project_id))
    return _format_result(sdk.set_review_interval(params.project_id, params.days))
