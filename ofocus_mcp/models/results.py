"""Result envelope and per-operation result models."""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from ofocus_mcp.enums import EntityKind, ErrorCode, FocusTargetType
from ofocus_mcp.models.entities import AttachmentModel, OFModel

T = TypeVar("T")


class CliError(BaseModel):
    """Structured error representation shared by the CLI and the MCP tools."""

    code: ErrorCode
    message: str
    details: str | None = None


class CliOutput(BaseModel, Generic[T]):
    """Standard output envelope for every SDK operation."""

    success: bool
    data: T | None = None
    error: CliError | None = None


class PaginatedResult(OFModel, Generic[T]):
    """Paginated result wrapper with metadata."""

    items: list[T] = Field(default_factory=list)
    total_count: int = 0
    returned_count: int = 0
    has_more: bool = False
    offset: int = 0
    limit: int = 100


class BatchFailure(OFModel):
    """One failed item in a batch operation."""

    id: str
    error: str


class BatchResult(OFModel, Generic[T]):
    """Aggregated result of a batch operation across all chunks."""

    succeeded: list[T] = Field(default_factory=list)
    failed: list[BatchFailure] = Field(default_factory=list)
    total_succeeded: int = 0
    total_failed: int = 0


# ============================================================================
# Task operation results
# ============================================================================


class CompleteResult(OFModel):
    task_id: str
    task_name: str
    completed: bool


class DropResult(OFModel):
    task_id: str
    task_name: str
    dropped: bool


class DeleteResult(OFModel):
    task_id: str
    deleted: Literal[True] = True


class DeferResult(OFModel):
    task_id: str
    task_name: str
    previous_defer_date: str | None = None
    new_defer_date: str


class DuplicateTaskResult(OFModel):
    original_task_id: str
    new_task_id: str
    new_task_name: str


class BatchTaskItem(OFModel):
    task_id: str
    task_name: str


class BatchDeleteItem(OFModel):
    task_id: str


# ============================================================================
# Project / tag / folder operation results
# ============================================================================


class DeleteProjectResult(OFModel):
    project_id: str
    deleted: Literal[True] = True


class DropProjectResult(OFModel):
    project_id: str
    project_name: str
    dropped: bool


class ReviewResult(OFModel):
    project_id: str
    project_name: str
    last_reviewed: str | None = None
    next_review_date: str | None = None


class ReviewIntervalResult(OFModel):
    project_id: str
    project_name: str
    review_interval_days: int


class DeleteTagResult(OFModel):
    tag_id: str
    deleted: Literal[True] = True


class DeleteFolderResult(OFModel):
    folder_id: str
    deleted: Literal[True] = True


# ============================================================================
# Advanced operation results
# ============================================================================


class FocusResult(OFModel):
    focused: bool
    target_id: str | None = None
    target_name: str | None = None
    target_type: FocusTargetType | None = None


class StatsResult(OFModel):
    """Productivity counts for a period, optionally limited to one project."""

    period_start: str
    period_end: str
    tasks_completed: int = 0
    tasks_overdue: int = 0
    tasks_available: int = 0
    tasks_remaining: int = 0
    tasks_flagged: int = 0
    projects_active: int = 0
    projects_on_hold: int = 0
    tasks_due_today: int = 0
    tasks_due_this_week: int = 0
    project_filter: str | None = None


class SyncStatus(OFModel):
    syncing: bool = False
    last_sync: str | None = None
    account_name: str | None = None
    sync_enabled: bool = False


class SyncResult(OFModel):
    triggered: bool
    message: str


class UrlResult(OFModel):
    id: str
    type: EntityKind
    url: str
    name: str


class OpenResult(OFModel):
    id: str
    type: EntityKind
    name: str
    opened: Literal[True] = True


class ArchiveResult(OFModel):
    tasks_archived: int = 0
    projects_archived: int = 0
    dry_run: bool = False
    archive_path: str | None = None


class CompactResult(OFModel):
    compacted: bool
    message: str


class TaskPaperExportResult(OFModel):
    content: str
    task_count: int = 0
    project_count: int = 0


class TaskPaperImportResult(OFModel):
    tasks_created: int = 0
    projects_created: int = 0
    errors: list[str] = Field(default_factory=list)


class AddAttachmentResult(OFModel):
    task_id: str
    task_name: str
    file_name: str
    attached: bool


class ListAttachmentsResult(OFModel):
    task_id: str
    task_name: str
    attachments: list[AttachmentModel] = Field(default_factory=list)


class RemoveAttachmentResult(OFModel):
    task_id: str
    attachment_name: str
    removed: bool


class CommandInfo(BaseModel):
    """Metadata about a CLI command for discovery by agents."""

    name: str
    description: str
    usage: str


def to_jsonable(value: Any) -> Any:
    """Convert models (and lists of models) to plain JSON-ready data using wire aliases."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    return value
