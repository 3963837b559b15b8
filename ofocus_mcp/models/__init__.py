"""Pydantic models for OFocus MCP."""

from ofocus_mcp.models.entities import (
    AttachmentModel,
    FolderModel,
    OFModel,
    PerspectiveModel,
    ProjectModel,
    RepetitionRule,
    TagModel,
    TaskModel,
    TaskWithChildrenModel,
)
from ofocus_mcp.models.results import (
    BatchFailure,
    BatchResult,
    CliError,
    CliOutput,
    CommandInfo,
    PaginatedResult,
    to_jsonable,
)

__all__ = [
    # Entities
    "OFModel",
    "TaskModel",
    "TaskWithChildrenModel",
    "ProjectModel",
    "TagModel",
    "FolderModel",
    "PerspectiveModel",
    "AttachmentModel",
    "RepetitionRule",
    # Results
    "CliError",
    "CliOutput",
    "PaginatedResult",
    "BatchFailure",
    "BatchResult",
    "CommandInfo",
    "to_jsonable",
]
