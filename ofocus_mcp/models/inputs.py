"""Input models for OFocus MCP tools."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ofocus_mcp.enums import ProjectStatus, ResponseFormat, SearchScope, StatsPeriod
from ofocus_mcp.models.entities import RepetitionRule
from ofocus_mcp.utils.validation import MAX_PAGINATION_LIMIT

DATE_HELP = "ISO date ('2024-12-31' or '2024-12-31T17:00') or any date AppleScript understands"


class ToolInput(BaseModel):
    """Base for tool inputs: strips whitespace from strings."""

    model_config = ConfigDict(str_strip_whitespace=True)


class PaginationMixin(BaseModel):
    limit: int = Field(default=100, description="Maximum number of items to return", ge=1, le=MAX_PAGINATION_LIMIT)
    offset: int = Field(default=0, description="Number of matching items to skip", ge=0)


class FormatMixin(BaseModel):
    response_format: ResponseFormat = Field(
        default=ResponseFormat.JSON,
        description="Output format: 'json' (default), 'markdown' for human-readable, 'concise' for minimal",
    )


# ============================================================================
# Task Input Models
# ============================================================================


class InboxAddInput(ToolInput):
    """Input model for adding a task to the inbox."""

    title: str = Field(..., description="Task name (required)", min_length=1, max_length=1000)
    note: str | None = Field(default=None, description="Note text")
    due: str | None = Field(default=None, description=f"Due date: {DATE_HELP}")
    defer: str | None = Field(default=None, description=f"Defer (start) date: {DATE_HELP}")
    flag: bool = Field(default=False, description="Flag the task")
    tags: list[str] | None = Field(default=None, description="Names of existing tags to apply", max_length=50)
    estimated_minutes: int | None = Field(default=None, description="Estimated duration in minutes", ge=0)
    repeat: RepetitionRule | None = Field(default=None, description="Repetition rule for a recurring task")


class ListTasksInput(ToolInput, PaginationMixin, FormatMixin):
    """Input model for listing tasks."""

    project: str | None = Field(default=None, description="Only tasks in the project with this name")
    tag: str | None = Field(default=None, description="Only tasks carrying the tag with this name")
    due_before: str | None = Field(default=None, description=f"Only tasks due on or before: {DATE_HELP}")
    due_after: str | None = Field(default=None, description=f"Only tasks due on or after: {DATE_HELP}")
    flagged: bool | None = Field(default=None, description="Only flagged tasks when true")
    completed: bool | None = Field(default=None, description="Filter on completion state")
    available: bool | None = Field(default=None, description="Only available (not blocked, not dropped) tasks when true")


class TaskIdInput(ToolInput):
    """Input model for operations that take a single task ID."""

    task_id: str = Field(..., description="OmniFocus task ID", min_length=1)


class UpdateFieldsMixin(BaseModel):
    title: str | None = Field(default=None, description="New task name")
    note: str | None = Field(default=None, description="New note text")
    due: str | None = Field(default=None, description=f"New due date ({DATE_HELP}); empty string clears it")
    defer: str | None = Field(default=None, description=f"New defer date ({DATE_HELP}); empty string clears it")
    flag: bool | None = Field(default=None, description="Set or clear the flag")
    project: str | None = Field(default=None, description="Move to the project with this name; empty string moves to inbox")
    tags: list[str] | None = Field(default=None, description="Replace all tags with these tag names")
    estimated_minutes: int | None = Field(default=None, description="New estimated duration in minutes", ge=0)
    clear_estimate: bool = Field(default=False, description="Remove the estimated duration")
    repeat: RepetitionRule | None = Field(default=None, description="New repetition rule")
    clear_repeat: bool = Field(default=False, description="Stop the task from repeating")


class UpdateTaskInput(TaskIdInput, UpdateFieldsMixin):
    """Input model for updating a task."""


class DeferInputMixin(BaseModel):
    days: int | None = Field(default=None, description="Defer until this many days from now", ge=1)
    to: str | None = Field(default=None, description=f"Defer until this date: {DATE_HELP}")

    @model_validator(mode="after")
    def require_days_or_to(self):
        if self.days is None and not self.to:
            raise ValueError("Specify either days or to")
        return self


class DeferTaskInput(TaskIdInput, DeferInputMixin):
    """Input model for deferring a task."""


class DuplicateTaskInput(TaskIdInput):
    """Input model for duplicating a task."""

    include_subtasks: bool = Field(default=True, description="Copy the task's subtasks too")


class SearchInput(ToolInput, FormatMixin):
    """Input model for text search over tasks."""

    query: str = Field(..., description="Text to look for (case-insensitive)", min_length=1)
    scope: SearchScope = Field(default=SearchScope.BOTH, description="Search in 'name', 'note' or 'both'")
    limit: int = Field(default=100, description="Maximum number of matches", ge=1, le=MAX_PAGINATION_LIMIT)
    include_completed: bool = Field(default=False, description="Also match completed tasks")


# ============================================================================
# Batch Input Models
# ============================================================================


class TaskIdsInput(ToolInput):
    """Input model for batch operations over task IDs."""

    task_ids: list[str] = Field(..., description="OmniFocus task IDs", min_length=1)

    @field_validator("task_ids")
    @classmethod
    def validate_task_ids(cls, v: list[str]) -> list[str]:
        cleaned = [tid.strip() for tid in v if tid.strip()]
        if not cleaned:
            raise ValueError("At least one valid task ID is required")
        return cleaned


class UpdateTasksInput(TaskIdsInput, UpdateFieldsMixin):
    """Input model for applying one update to many tasks."""


class DeferTasksInput(TaskIdsInput, DeferInputMixin):
    """Input model for deferring many tasks."""


# ============================================================================
# Subtask Input Models
# ============================================================================


class CreateSubtaskInput(InboxAddInput):
    """Input model for creating a subtask."""

    parent_task_id: str = Field(..., description="ID of the task the new task goes under", min_length=1)


class ListSubtasksInput(ToolInput, PaginationMixin, FormatMixin):
    """Input model for listing a task's children."""

    parent_task_id: str = Field(..., description="ID of the parent task", min_length=1)
    completed: bool | None = Field(default=None, description="Filter on completion state")
    flagged: bool | None = Field(default=None, description="Only flagged subtasks when true")


class MoveTaskInput(TaskIdInput):
    """Input model for moving a task under another task."""

    parent_task_id: str = Field(..., description="ID of the new parent task", min_length=1)


# ============================================================================
# Project Input Models
# ============================================================================


class ListProjectsInput(ToolInput, PaginationMixin, FormatMixin):
    """Input model for listing projects."""

    folder: str | None = Field(default=None, description="Only projects in the folder with this name")
    status: ProjectStatus | None = Field(default=None, description="active, on-hold, completed or dropped")
    sequential: bool | None = Field(default=None, description="Only sequential (true) or parallel (false) projects")


class CreateProjectInput(ToolInput):
    """Input model for creating a project."""

    name: str = Field(..., description="Project name (required)", min_length=1)
    note: str | None = Field(default=None, description="Note text")
    folder_id: str | None = Field(default=None, description="ID of the folder to create it in")
    folder_name: str | None = Field(default=None, description="Name of the folder to create it in")
    sequential: bool = Field(default=False, description="Tasks must be done in order")
    status: ProjectStatus | None = Field(default=None, description="Initial status: active or on-hold")
    due_date: str | None = Field(default=None, description=f"Due date: {DATE_HELP}")
    defer_date: str | None = Field(default=None, description=f"Defer date: {DATE_HELP}")


class ProjectIdInput(ToolInput):
    """Input model for operations that take a single project ID."""

    project_id: str = Field(..., description="OmniFocus project ID", min_length=1)


class UpdateProjectInput(ProjectIdInput):
    """Input model for updating a project."""

    name: str | None = Field(default=None, description="New name")
    note: str | None = Field(default=None, description="New note text")
    status: ProjectStatus | None = Field(default=None, description="active, on-hold, completed or dropped")
    folder_id: str | None = Field(default=None, description="Move into the folder with this ID")
    folder_name: str | None = Field(default=None, description="Move into the folder with this name")
    sequential: bool | None = Field(default=None, description="Sequential (true) or parallel (false)")
    due_date: str | None = Field(default=None, description="New due date; empty string clears it")
    defer_date: str | None = Field(default=None, description="New defer date; empty string clears it")


class ReviewIntervalInput(ProjectIdInput):
    """Input model for reading or setting a project's review interval."""

    days: int | None = Field(default=None, description="New interval in days; omit to read the current one", ge=1)


class ProjectsForReviewInput(ToolInput, FormatMixin):
    """Input model for listing projects due for review."""


# ============================================================================
# Tag / Folder Input Models
# ============================================================================


class ListTagsInput(ToolInput, PaginationMixin, FormatMixin):
    """Input model for listing tags."""

    parent: str | None = Field(default=None, description="Only children of the tag with this name")


class CreateTagInput(ToolInput):
    """Input model for creating a tag."""

    name: str = Field(..., description="Tag name (required)", min_length=1)
    parent_tag_id: str | None = Field(default=None, description="ID of the parent tag")
    parent_tag_name: str | None = Field(default=None, description="Name of the parent tag")


class UpdateTagInput(ToolInput):
    """Input model for updating a tag."""

    tag_id: str = Field(..., description="OmniFocus tag ID", min_length=1)
    name: str | None = Field(default=None, description="New name")
    parent_tag_id: str | None = Field(default=None, description="Move under the tag with this ID")
    parent_tag_name: str | None = Field(default=None, description="Move under the tag with this name")


class TagIdInput(ToolInput):
    """Input model for deleting a tag."""

    tag_id: str = Field(..., description="OmniFocus tag ID", min_length=1)


class ListFoldersInput(ToolInput, PaginationMixin, FormatMixin):
    """Input model for listing folders."""

    parent: str | None = Field(default=None, description="Only children of the folder with this name")


class CreateFolderInput(ToolInput):
    """Input model for creating a folder."""

    name: str = Field(..., description="Folder name (required)", min_length=1)
    parent_folder_id: str | None = Field(default=None, description="ID of the parent folder")
    parent_folder_name: str | None = Field(default=None, description="Name of the parent folder")


class UpdateFolderInput(ToolInput):
    """Input model for updating a folder."""

    folder_id: str = Field(..., description="OmniFocus folder ID", min_length=1)
    name: str | None = Field(default=None, description="New name")
    parent_folder_id: str | None = Field(default=None, description="Move into the folder with this ID")
    parent_folder_name: str | None = Field(default=None, description="Move into the folder with this name")


class FolderIdInput(ToolInput):
    """Input model for deleting a folder."""

    folder_id: str = Field(..., description="OmniFocus folder ID", min_length=1)


# ============================================================================
# Perspective Input Models
# ============================================================================


class ListPerspectivesInput(ToolInput, FormatMixin):
    """Input model for listing perspectives."""


class QueryPerspectiveInput(ToolInput, FormatMixin):
    """Input model for listing the tasks of a perspective."""

    name: str = Field(..., description="Perspective name, e.g. 'Flagged', 'Inbox', 'Forecast'", min_length=1)
    limit: int = Field(default=100, description="Maximum number of tasks", ge=1, le=MAX_PAGINATION_LIMIT)


# ============================================================================
# Forecast / Focus / Capture Input Models
# ============================================================================


class ForecastInput(ToolInput, FormatMixin):
    """Input model for the forecast view."""

    start: str | None = Field(default=None, description=f"First day of the range (default today): {DATE_HELP}")
    end: str | None = Field(default=None, description=f"Last day of the range; wins over days: {DATE_HELP}")
    days: int | None = Field(default=None, description="Range length in days from start (default 7)", ge=1)
    include_deferred: bool = Field(default=False, description="Also include tasks whose defer date falls in the range")


class DeferredInput(ToolInput, FormatMixin):
    """Input model for listing deferred tasks."""

    deferred_after: str | None = Field(default=None, description=f"Only tasks deferred until on or after: {DATE_HELP}")
    deferred_before: str | None = Field(default=None, description=f"Only tasks deferred until on or before: {DATE_HELP}")
    blocked_only: bool = Field(default=False, description="Only tasks whose defer date is still in the future")


class FocusInput(ToolInput):
    """Input model for focusing on a project or folder."""

    target: str = Field(..., description="Project or folder name, or its ID when by_id is true", min_length=1)
    by_id: bool = Field(default=False, description="Treat target as an ID instead of a name")


class QuickAddInput(ToolInput):
    """Input model for quick capture."""

    input: str = Field(
        ...,
        description="Task line with shorthand, e.g. 'Call Bob @phone #Work due:tomorrow ~15m !'",
        min_length=1,
        max_length=2000,
    )
    note: str | None = Field(default=None, description="Note text for the new task")


class StatsInput(ToolInput):
    """Input model for productivity statistics."""

    period: StatsPeriod | None = Field(default=None, description="day, week (since Sunday), month or year")
    project: str | None = Field(default=None, description="Only count tasks in the project with this name")
    since: str | None = Field(default=None, description="Window start (YYYY-MM-DD); wins over period")
    until: str | None = Field(default=None, description="Window end (YYYY-MM-DD); only used with since")


class UrlInput(ToolInput):
    """Input model for building an item's omnifocus:/// URL."""

    id: str = Field(..., description="ID of a task, project, folder or tag", min_length=1)


# ============================================================================
# Archive / TaskPaper / Attachment Input Models
# ============================================================================


class ArchiveInput(ToolInput):
    """Input model for archiving old tasks."""

    completed_before: str | None = Field(default=None, description=f"Archive tasks completed before: {DATE_HELP}")
    dropped_before: str | None = Field(default=None, description=f"Archive tasks dropped before: {DATE_HELP}")
    project: str | None = Field(default=None, description="Only tasks in the project with this name")
    dry_run: bool = Field(default=False, description="Only count what would be archived")

    @model_validator(mode="after")
    def require_a_cutoff(self):
        if not self.completed_before and not self.dropped_before:
            raise ValueError("Specify completed_before or dropped_before")
        return self


class ExportTaskPaperInput(ToolInput):
    """Input model for exporting TaskPaper text."""

    project: str | None = Field(default=None, description="Only export the project with this name (case-insensitive)")
    include_completed: bool = Field(default=False, description="Include completed projects and tasks")
    include_dropped: bool = Field(default=False, description="Include dropped projects")


class ImportTaskPaperInput(ToolInput):
    """Input model for importing TaskPaper text."""

    content: str = Field(..., description="TaskPaper document text", min_length=1)
    default_project: str | None = Field(default=None, description="Project for tasks that appear before any heading")
    create_projects: bool = Field(default=False, description="Create headings that do not exist yet as projects")


class AttachmentAddInput(TaskIdInput):
    """Input model for attaching a file to a task."""

    file_path: str = Field(..., description="Path to a local file", min_length=1)


class AttachmentRemoveInput(TaskIdInput):
    """Input model for removing an attachment from a task."""

    attachment: str = Field(..., description="Attachment ID or file name", min_length=1)
