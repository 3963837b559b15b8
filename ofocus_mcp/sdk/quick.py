"""
Quick capture: create a task from one line of shorthand.

Recognized tokens, anywhere in the line::

    @tag            add an existing tag (repeatable)
    #project        file the task into a project
    ! or !!         flag
    ~30m, ~1.5h     estimated duration
    due:<date>      due date; today, tomorrow, yesterday or a weekday name
    defer:<date>    defer date; same keywords as due:
    repeat:<rule>   daily, weekly, monthly, yearly/annually or "every N units"

Quotes group words into one token, e.g. ``#"Home Office"``. Everything
else becomes the title.
"""

import re
from dataclasses import dataclass, field
from datetime import date, timedelta

from ofocus_mcp.enums import ErrorCode, RepetitionFrequency
from ofocus_mcp.errors import create_error
from ofocus_mcp.models.entities import RepetitionRule
from ofocus_mcp.models.results import CliOutput
from ofocus_mcp.sdk.tasks import add_task
from ofocus_mcp.utils.result import failure

_DURATION = re.compile(r"^(\d+(?:\.\d+)?)(m|min|minutes?|h|hours?)$", re.IGNORECASE)
_EVERY = re.compile(r"^every\s+(\d+)\s+(day|week|month|year)s?$")
_FLAG = re.compile(r"^!+$")

_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_NAMED_FREQUENCIES = {
    "daily": RepetitionFrequency.DAILY,
    "weekly": RepetitionFrequency.WEEKLY,
    "monthly": RepetitionFrequency.MONTHLY,
    "yearly": RepetitionFrequency.YEARLY,
    "annually": RepetitionFrequency.YEARLY,
}
_UNIT_FREQUENCIES = {
    "day": RepetitionFrequency.DAILY,
    "week": RepetitionFrequency.WEEKLY,
    "month": RepetitionFrequency.MONTHLY,
    "year": RepetitionFrequency.YEARLY,
}


@dataclass
class ParsedQuickInput:
    title: str = ""
    due: str | None = None
    defer: str | None = None
    flagged: bool = False
    tags: list[str] = field(default_factory=list)
    project: str | None = None
    estimated_minutes: int | None = None
    repeat: RepetitionRule | None = None


def tokenize(text: str) -> list[str]:
    """Split on spaces, keeping quoted runs together and dropping the quotes."""
    tokens = []
    current = ""
    quote = None
    for char in text:
        if quote is None and char in "\"'":
            quote = char
        elif char == quote:
            quote = None
        elif char == " " and quote is None:
            if current:
                tokens.append(current)
            current = ""
        else:
            current += char
    if current:
        tokens.append(current)
    return tokens


def resolve_date_keyword(value: str, today: date | None = None) -> str:
    """
    Turn a date keyword into an ISO date; other values pass through unchanged.

    Weekday names resolve to the next such day strictly after today.
    """
    today = today or date.today()
    key = value.lower()
    if key == "today":
        return today.isoformat()
    if key == "tomorrow":
        return (today + timedelta(days=1)).isoformat()
    if key == "yesterday":
        return (today - timedelta(days=1)).isoformat()
    if key in _WEEKDAYS:
        ahead = (_WEEKDAYS.index(key) - today.weekday()) % 7 or 7
        return (today + timedelta(days=ahead)).isoformat()
    return value


def parse_duration(value: str) -> int | None:
    """``30m`` -> 30, ``1.5h`` -> 90; None when not a duration."""
    match = _DURATION.match(value)
    if not match:
        return None
    amount = float(match.group(1))
    if match.group(2).lower().startswith("h"):
        amount *= 60
    return round(amount)


def parse_repetition(value: str) -> RepetitionRule | None:
    normalized = value.lower().strip()
    if normalized in _NAMED_FREQUENCIES:
        return RepetitionRule(frequency=_NAMED_FREQUENCIES[normalized])
    match = _EVERY.match(normalized)
    if match:
        return RepetitionRule(frequency=_UNIT_FREQUENCIES[match.group(2)], interval=int(match.group(1)))
    return None


def parse_quick_input(text: str, today: date | None = None) -> ParsedQuickInput:
    """Parse a quick-capture line. Unrecognized tokens become part of the title."""
    parsed = ParsedQuickInput()
    title_parts = []

    for token in tokenize(text):
        lower = token.lower()
        if token.startswith("@"):
            if token[1:]:
                parsed.tags.append(token[1:])
            continue
        if token.startswith("#"):
            if token[1:]:
                parsed.project = token[1:]
            continue
        if _FLAG.match(token):
            parsed.flagged = True
            continue
        if token.startswith("~") and (minutes := parse_duration(token[1:])) is not None:
            parsed.estimated_minutes = minutes
            continue
        if lower.startswith("due:"):
            parsed.due = resolve_date_keyword(token[4:], today)
            continue
        if lower.startswith("defer:"):
            parsed.defer = resolve_date_keyword(token[6:], today)
            continue
        if lower.startswith("repeat:") and (rule := parse_repetition(token[7:])) is not None:
            parsed.repeat = rule
            continue
        title_parts.append(token)

    parsed.title = " ".join(title_parts).strip()
    return parsed


def quick_capture(text: str, note: str | None = None) -> CliOutput:
    """
    Create a task from quick-capture shorthand.

    The task lands in the project named by ``#project`` when present,
    otherwise in the inbox.

    Returns:
        CliOutput wrapping the created TaskModel
    """
    if not text or not text.strip():
        return failure(create_error(ErrorCode.VALIDATION_ERROR, "Input cannot be empty"))

    parsed = parse_quick_input(text)
    if not parsed.title:
        return failure(create_error(ErrorCode.VALIDATION_ERROR, "Task title cannot be empty"))

    return add_task(
        parsed.title,
        note=note,
        due=parsed.due,
        defer=parsed.defer,
        flag=parsed.flagged,
        tags=parsed.tags or None,
        estimated_minutes=parsed.estimated_minutes,
        repeat=parsed.repeat,
        project=parsed.project,
    )
