"""String-construction helpers for building AppleScript source text."""

import re
from collections.abc import Iterable, Sequence

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(T(\d{2}):(\d{2}):?(\d{2})?)?")


def escape_applescript(value: str) -> str:
    """Escape a string for use inside an AppleScript double-quoted literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def quote_applescript(value: str) -> str:
    """Return ``value`` as a complete AppleScript string literal."""
    return f'"{escape_applescript(value)}"'


def to_applescript_date(date_str: str) -> str:
    """
    Convert an ISO date to a form AppleScript's ``date "..."`` coercion accepts.

    ``2024-01-15`` becomes ``01/15/2024`` and ``2024-01-15T14:30`` becomes
    ``01/15/2024 2:30 PM``. Anything that is not ISO is returned unchanged,
    since it may already be in a format AppleScript understands.
    """
    match = _ISO_DATE.match(date_str)
    if not match:
        return date_str

    year, month, day = match.group(1), match.group(2), match.group(3)
    hours, minutes, seconds = match.group(5), match.group(6), match.group(7)

    result = f"{month}/{day}/{year}"
    if hours and minutes:
        hour = int(hours)
        period = "PM" if hour >= 12 else "AM"
        hour12 = 12 if hour == 0 else hour - 12 if hour > 12 else hour
        result += f" {hour12}:{minutes}"
        if seconds:
            result += f":{seconds}"
        result += f" {period}"
    return result


def applescript_date(date_str: str) -> str:
    """Return an AppleScript ``date "..."`` expression for a validated date string."""
    return f"date {quote_applescript(to_applescript_date(date_str))}"


def applescript_list(values: Iterable[str]) -> str:
    """Build an AppleScript list literal of strings, e.g. ``{"a", "b"}``."""
    return "{" + ", ".join(quote_applescript(v) for v in values) + "}"


def json_key(key: str, first: bool = False) -> str:
    """AppleScript literal for a JSON object key, e.g. ``",\\"name\\": "``."""
    prefix = "" if first else ","
    return f'"{prefix}\\"{key}\\": "'


def json_object_expr(fields: Sequence[tuple[str, str]]) -> str:
    """
    Build an AppleScript expression that evaluates to a JSON object.

    Args:
        fields: ``(key, value_expression)`` pairs. Each value expression must
            already evaluate to JSON text, for example ``my jsonString(x)``,
            a boolean or number variable, or ``"null"``.

    Returns:
        Expression such as ``"{" & "\\"id\\": " & ... & "}"``
    """
    parts = ['"{"']
    for index, (key, value_expr) in enumerate(fields):
        parts.append(json_key(key, first=index == 0))
        parts.append(value_expr)
    parts.append('"}"')
    return " & ".join(parts)
