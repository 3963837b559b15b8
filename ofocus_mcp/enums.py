"""Enums for OFocus MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    JSON = "json"  # Machine-readable with all fields (default)
    MARKDOWN = "markdown"  # Human-readable
    CONCISE = "concise"  # Minimal output for chaining


class ErrorCode(str, Enum):
    """Error codes for semantic error handling."""

    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    TAG_NOT_FOUND = "TAG_NOT_FOUND"
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"
    PERSPECTIVE_NOT_FOUND = "PERSPECTIVE_NOT_FOUND"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    OMNIFOCUS_NOT_RUNNING = "OMNIFOCUS_NOT_RUNNING"
    INVALID_DATE_FORMAT = "INVALID_DATE_FORMAT"
    INVALID_ID_FORMAT = "INVALID_ID_FORMAT"
    INVALID_REPETITION_RULE = "INVALID_REPETITION_RULE"
    APPLESCRIPT_ERROR = "APPLESCRIPT_ERROR"
    JSON_PARSE_ERROR = "JSON_PARSE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ProjectStatus(str, Enum):
    """Project status values as exposed on the wire."""

    ACTIVE = "active"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    DROPPED = "dropped"


class RepetitionFrequency(str, Enum):
    """How often a repeating task recurs."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class RepeatMethod(str, Enum):
    """Which date OmniFocus moves forward when a repeating task is completed."""

    DUE_AGAIN = "due-again"
    DEFER_ANOTHER = "defer-another"


class SearchScope(str, Enum):
    """Which task fields a text search looks at."""

    NAME = "name"
    NOTE = "note"
    BOTH = "both"


class EntityKind(str, Enum):
    """Kinds of objects an ID can refer to (used in validation messages)."""

    TASK = "task"
    PROJECT = "project"
    TAG = "tag"
    FOLDER = "folder"
    ITEM = "item"


class StatsPeriod(str, Enum):
    """Predefined reporting periods for statistics."""

    DAY = "day"
    WEEK = "week"  # Since Sunday
    MONTH = "month"
    YEAR = "year"


class FocusTargetType(str, Enum):
    """Kinds of container the OmniFocus window can be focused on."""

    PROJECT = "project"
    FOLDER = "folder"
