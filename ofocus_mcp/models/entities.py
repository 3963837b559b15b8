"""Entity models for OmniFocus objects as returned by the AppleScript serializers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ofocus_mcp.enums import ProjectStatus, RepeatMethod, RepetitionFrequency


class OFModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class TaskModel(OFModel):
    """Model representing an OmniFocus task."""

    id: str
    name: str = ""
    note: str | None = None
    flagged: bool = False
    completed: bool = False
    due_date: str | None = None
    defer_date: str | None = None
    completion_date: str | None = None
    project_id: str | None = None
    project_name: str | None = None
    tags: list[str] = Field(default_factory=list)
    estimated_minutes: int | None = None


class TaskWithChildrenModel(TaskModel):
    """A task together with its place in the action hierarchy."""

    parent_task_id: str | None = None
    parent_task_name: str | None = None
    child_task_count: int = 0
    is_action_group: bool = False


class ProjectModel(OFModel):
    """Model representing an OmniFocus project."""

    id: str
    name: str = ""
    note: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    sequential: bool = False
    folder_id: str | None = None
    folder_name: str | None = None
    task_count: int = 0
    remaining_task_count: int = 0


class TagModel(OFModel):
    """Model representing an OmniFocus tag."""

    id: str
    name: str = ""
    parent_id: str | None = None
    parent_name: str | None = None
    available_task_count: int = 0


class FolderModel(OFModel):
    """Model representing an OmniFocus folder."""

    id: str
    name: str = ""
    parent_id: str | None = None
    parent_name: str | None = None
    project_count: int = 0
    folder_count: int = 0


class PerspectiveModel(OFModel):
    """Model representing an OmniFocus perspective."""

    id: str
    name: str = ""
    custom: bool = True


class RepetitionRule(OFModel):
    """Repetition rule for recurring tasks.

    Bounds are checked by ``validate_repetition_rule`` rather than here, so a
    bad rule coming from the SDK is reported as a structured error instead of
    a pydantic exception.
    """

    frequency: RepetitionFrequency
    interval: int = 1
    repeat_method: RepeatMethod = RepeatMethod.DUE_AGAIN
    days_of_week: list[int] | None = None
    day_of_month: int | None = None


class AttachmentModel(OFModel):
    """A file attached to a task. OmniFocus does not report size or type."""

    id: str
    name: str = ""
    size: int | None = None
    type: str | None = None
