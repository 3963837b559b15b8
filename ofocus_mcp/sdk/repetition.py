"""Translation of repetition rules into iCalendar RRULEs and AppleScript statements."""

from ofocus_mcp.enums import RepeatMethod
from ofocus_mcp.models.entities import RepetitionRule
from ofocus_mcp.utils.escape import quote_applescript

_DAY_CODES = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")


def build_rrule(rule: RepetitionRule) -> str:
    """
    Build an RRULE string, e.g. ``FREQ=WEEKLY;INTERVAL=2;BYDAY=MO,FR``.

    ``INTERVAL`` is only emitted when it is greater than one.
    """
    parts = [f"FREQ={rule.frequency.value.upper()}"]
    if rule.interval > 1:
        parts.append(f"INTERVAL={rule.interval}")
    if rule.days_of_week:
        parts.append("BYDAY=" + ",".join(_DAY_CODES[d] for d in rule.days_of_week))
    if rule.day_of_month is not None:
        parts.append(f"BYMONTHDAY={rule.day_of_month}")
    return ";".join(parts)


def build_repetition_rule_script(var: str, rule: RepetitionRule) -> str:
    """Statement that applies ``rule`` to the task held in ``var``."""
    method = "due again" if rule.repeat_method == RepeatMethod.DUE_AGAIN else "defer another"
    recurrence = quote_applescript(build_rrule(rule))
    return f"set repetition rule of {var} to {{repetition method:{method}, recurrence:{recurrence}}}"


def build_clear_repetition_script(var: str) -> str:
    """Statement that removes any repetition from the task held in ``var``."""
    return f"set repetition rule of {var} to missing value"
