"""Reading the date strings AppleScript prints for OmniFocus dates."""

from datetime import datetime

# ``(due date of t) as string`` follows the user's locale; these cover the
# common English forms, with and without the "at" macOS 13 added.
_APPLESCRIPT_FORMATS = (
    "%A, %B %d, %Y at %I:%M:%S %p",
    "%A, %B %d, %Y %I:%M:%S %p",
    "%A, %d %B %Y at %H:%M:%S",
    "%A, %d %B %Y %H:%M:%S",
    "%m/%d/%Y",
)


def parse_applescript_date(value: str | None) -> datetime | None:
    """
    Parse a date printed by AppleScript, or an ISO date.

    Returns:
        Naive local datetime, or None if the string is empty or unrecognized
    """
    if not value:
        return None

    # newer macOS puts a narrow no-break space before AM/PM
    text = value.replace("\u202f", " ").replace("\xa0", " ").strip()
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        pass
    for fmt in _APPLESCRIPT_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None
