"""Input validation for values that end up inside generated AppleScript.

Every validator returns ``None`` when the value is acceptable, or a
``CliError`` describing the problem.
"""

import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ofocus_mcp.enums import EntityKind, ErrorCode
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.entities import RepetitionRule
from ofocus_mcp.models.results import CliError

MAX_PAGINATION_LIMIT = 10000
"""Upper bound for ``limit`` on paginated queries."""

_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
_DATE_PATTERN = re.compile(r"^[a-zA-Z0-9\s/:,.-]+$")


def _has_unsafe_chars(value: str) -> bool:
    return '"' in value or "\\" in value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_id(value: str, kind: EntityKind | str) -> CliError | None:
    """Validate an OmniFocus ID (alphanumeric, dashes, underscores)."""
    kind_name = kind.value if isinstance(kind, EntityKind) else kind
    if not value or not value.strip():
        return create_error(ErrorCode.INVALID_ID_FORMAT, f"{kind_name.capitalize()} ID cannot be empty")

    if not _ID_PATTERN.match(value):
        return create_error(
            ErrorCode.INVALID_ID_FORMAT,
            f"Invalid {kind_name} ID format: {value}",
            "IDs must contain only alphanumeric characters, dashes, and underscores",
        )
    return None


def validate_ids(values: list[str], kind: EntityKind | str) -> CliError | None:
    """Validate a non-empty list of IDs; the first bad ID wins."""
    if not values:
        return create_error(ErrorCode.VALIDATION_ERROR, f"No {EntityKind(kind).value} IDs provided")
    for value in values:
        if error := validate_id(value, kind):
            return error
    return None


def validate_date_string(value: str | None) -> CliError | None:
    """
    Validate a date string before it is embedded in ``date "..."``.

    Empty strings are valid (they clear a date). Parsing is left to
    AppleScript; this only rejects obviously malformed or unsafe input.
    """
    if not value or not value.strip():
        return None

    if _has_unsafe_chars(value):
        return create_error(
            ErrorCode.INVALID_DATE_FORMAT,
            "Invalid characters in date string",
            "Date strings cannot contain quotes or backslashes",
        )

    if not _DATE_PATTERN.match(value):
        return create_error(ErrorCode.INVALID_DATE_FORMAT, f"Invalid date format: {value}")
    return None


def validate_tags(tags: list[str] | None) -> CliError | None:
    """Validate a list of tag names to apply to a task."""
    for tag in tags or []:
        if not tag or not tag.strip():
            return create_error(ErrorCode.VALIDATION_ERROR, "Tag name cannot be empty")
        if _has_unsafe_chars(tag):
            return create_error(
                ErrorCode.VALIDATION_ERROR,
                f"Invalid characters in tag name: {tag}",
                "Tag names cannot contain quotes or backslashes",
            )
    return None


def _validate_optional_name(name: str | None, label: str) -> CliError | None:
    if not name or not name.strip():
        return None
    if _has_unsafe_chars(name):
        return create_error(
            ErrorCode.VALIDATION_ERROR,
            f"Invalid characters in {label} name: {name}",
            f"{label.capitalize()} names cannot contain quotes or backslashes",
        )
    return None


def validate_project_name(name: str | None) -> CliError | None:
    """Validate an optional project name (empty is allowed)."""
    return _validate_optional_name(name, "project")


def validate_folder_name(name: str | None) -> CliError | None:
    """Validate an optional folder name (empty is allowed)."""
    return _validate_optional_name(name, "folder")


def validate_required_name(name: str | None, label: str) -> CliError | None:
    """Validate a name that must be present, e.g. when creating an object."""
    if not name or not name.strip():
        return create_error(ErrorCode.VALIDATION_ERROR, f"{label.capitalize()} name cannot be empty")
    return _validate_optional_name(name, label)


def validate_tag_name(name: str | None) -> CliError | None:
    """Validate a tag name for creation or rename."""
    return validate_required_name(name, "tag")


def validate_search_query(query: str | None) -> CliError | None:
    """Validate a free-text search query."""
    if not query or not query.strip():
        return create_error(ErrorCode.VALIDATION_ERROR, "Search query cannot be empty")
    if _has_unsafe_chars(query):
        return create_error(
            ErrorCode.VALIDATION_ERROR,
            "Invalid characters in search query",
            "Search queries cannot contain quotes or backslashes",
        )
    return None


def validate_estimated_minutes(minutes: int | None) -> CliError | None:
    """Validate an estimated duration in minutes."""
    if minutes is None:
        return None
    if not _is_int(minutes) or minutes < 0:
        return create_error(
            ErrorCode.VALIDATION_ERROR,
            f"Invalid estimated minutes: {minutes}",
            "Estimated minutes must be a non-negative integer",
        )
    return None


def coerce_repetition_rule(
    rule: RepetitionRule | Mapping[str, Any] | None,
) -> tuple[RepetitionRule | None, CliError | None]:
    """
    Turn a rule given as a model or a plain mapping into a validated RepetitionRule.

    Returns:
        Tuple of (rule or None, error or None)
    """
    if rule is None:
        return None, None

    if not isinstance(rule, RepetitionRule):
        try:
            rule = RepetitionRule.model_validate(dict(rule))
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first["loc"])
            return None, create_error(
                ErrorCode.INVALID_REPETITION_RULE,
                f"Invalid repetition rule field '{field}': {first['msg']}",
                "Valid frequencies are: daily, weekly, monthly, yearly; "
                "valid methods are: due-again, defer-another",
            )

    if error := validate_repetition_rule(rule):
        return None, error
    return rule, None


def validate_repetition_rule(rule: RepetitionRule | None) -> CliError | None:
    """Check the numeric bounds of a repetition rule."""
    if rule is None:
        return None

    if not _is_int(rule.interval) or rule.interval < 1:
        return create_error(
            ErrorCode.INVALID_REPETITION_RULE,
            f"Invalid repetition interval: {rule.interval}",
            "Interval must be a positive integer",
        )

    if rule.days_of_week is not None:
        if not rule.days_of_week:
            return create_error(ErrorCode.INVALID_REPETITION_RULE, "daysOfWeek must be a non-empty array")
        for day in rule.days_of_week:
            if not _is_int(day) or day < 0 or day > 6:
                return create_error(
                    ErrorCode.INVALID_REPETITION_RULE,
                    f"Invalid day of week: {day}",
                    "Days of week must be integers 0-6 (Sunday=0, Saturday=6)",
                )

    if rule.day_of_month is not None:
        if not _is_int(rule.day_of_month) or rule.day_of_month < 1 or rule.day_of_month > 31:
            return create_error(
                ErrorCode.INVALID_REPETITION_RULE,
                f"Invalid day of month: {rule.day_of_month}",
                "Day of month must be an integer 1-31",
            )
    return None


def validate_pagination_params(limit: int | None, offset: int | None) -> CliError | None:
    """Validate limit (1..MAX_PAGINATION_LIMIT) and offset (>= 0)."""
    if limit is not None:
        if not _is_int(limit) or limit < 1:
            return create_error(
                ErrorCode.VALIDATION_ERROR,
                f"Invalid limit: {limit}",
                "Limit must be a positive integer",
            )
        if limit > MAX_PAGINATION_LIMIT:
            return create_error(
                ErrorCode.VALIDATION_ERROR,
                f"Limit exceeds maximum allowed value: {limit}",
                f"Maximum limit is {MAX_PAGINATION_LIMIT}",
            )

    if offset is not None and (not _is_int(offset) or offset < 0):
        return create_error(
            ErrorCode.VALIDATION_ERROR,
            f"Invalid offset: {offset}",
            "Offset must be a non-negative integer",
        )
    return None


def validate_days(days: int | None, label: str = "Days") -> CliError | None:
    """Validate a positive whole number of days."""
    if days is None:
        return None
    if not _is_int(days) or days < 1:
        return create_error(ErrorCode.VALIDATION_ERROR, f"{label} must be a positive integer")
    return None


def first_error(*errors: CliError | None) -> CliError | None:
    """Return the first non-None error, evaluating nothing lazily."""
    for error in errors:
        if error is not None:
            return error
    return None
