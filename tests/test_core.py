"""Tests for escaping, validation, error parsing, settings and repetition rules."""

import pytest

from ofocus_mcp.config import Settings, get_settings
from ofocus_mcp.enums import EntityKind, ErrorCode, RepeatMethod, RepetitionFrequency
from ofocus_mcp.errors import create_error, parse_applescript_error
from ofocus_mcp.models.entities import RepetitionRule
from ofocus_mcp.sdk.repetition import build_clear_repetition_script, build_repetition_rule_script, build_rrule
from ofocus_mcp.utils.escape import (
    applescript_date,
    applescript_list,
    escape_applescript,
    json_object_expr,
    quote_applescript,
    to_applescript_date,
)
from ofocus_mcp.utils.validation import (
    MAX_PAGINATION_LIMIT,
    coerce_repetition_rule,
    first_error,
    validate_date_string,
    validate_days,
    validate_estimated_minutes,
    validate_id,
    validate_ids,
    validate_pagination_params,
    validate_project_name,
    validate_required_name,
    validate_search_query,
    validate_tags,
)

# ============================================================================
# Escaping
# ============================================================================


class TestEscape:
    """Tests for AppleScript string construction."""

    def test_escapes_quotes_and_backslashes(self):
        """Quotes and backslashes are escaped, backslashes first."""
        assert escape_applescript('say "hi"') == 'say \\"hi\\"'
        assert escape_applescript("C:\\temp") == "C:\\\\temp"
        assert escape_applescript('\\"') == '\\\\\\"'

    def test_quote_wraps_in_double_quotes(self):
        assert quote_applescript("Buy milk") == '"Buy milk"'
        assert quote_applescript('a"b') == '"a\\"b"'

    def test_list_literal(self):
        """IDs are passed to batch scripts as an AppleScript list."""
        assert applescript_list(["a1", "b2"]) == '{"a1", "b2"}'
        assert applescript_list([]) == "{}"

    def test_json_object_expr(self):
        expr = json_object_expr([("id", "my jsonString(x)"), ("flagged", "isFlagged")])
        assert expr.startswith('"{" & "\\"id\\": " & my jsonString(x)')
        assert '",\\"flagged\\": " & isFlagged' in expr
        assert expr.endswith('"}"')


class TestDateConversion:
    """Tests for ISO to AppleScript date conversion."""

    def test_date_only(self):
        assert to_applescript_date("2024-01-15") == "01/15/2024"

    def test_afternoon_time(self):
        assert to_applescript_date("2024-01-15T14:30") == "01/15/2024 2:30 PM"

    def test_midnight_and_noon(self):
        assert to_applescript_date("2024-01-15T00:05") == "01/15/2024 12:05 AM"
        assert to_applescript_date("2024-01-15T12:00") == "01/15/2024 12:00 PM"

    def test_seconds_kept(self):
        assert to_applescript_date("2024-01-15T09:30:45") == "01/15/2024 9:30:45 AM"

    def test_non_iso_passes_through(self):
        assert to_applescript_date("next monday") == "next monday"

    def test_date_expression(self):
        assert applescript_date("2024-12-31") == 'date "12/31/2024"'


# ============================================================================
# Validation
# ============================================================================


class TestValidateId:
    """Tests for ID validation."""

    def test_valid_ids(self):
        assert validate_id("kXf2-abc_9", EntityKind.TASK) is None

    def test_empty_id(self):
        error = validate_id("  ", EntityKind.PROJECT)
        assert error.code == ErrorCode.INVALID_ID_FORMAT
        assert error.message == "Project ID cannot be empty"

    def test_injection_rejected(self):
        error = validate_id('abc" & do shell script "rm', "task")
        assert error.code == ErrorCode.INVALID_ID_FORMAT
        assert "Invalid task ID format" in error.message

    def test_id_list(self):
        assert validate_ids(["a", "b"], EntityKind.TASK) is None
        assert validate_ids([], EntityKind.TASK).message == "No task IDs provided"
        assert validate_ids(["a", "b c"], EntityKind.TASK).code == ErrorCode.INVALID_ID_FORMAT


class TestValidateValues:
    """Tests for date, name, tag and number validation."""

    @pytest.mark.parametrize("value", [None, "", "2024-12-31", "Dec 31, 2024 5:00 PM", "12/31/2024"])
    def test_valid_dates(self, value):
        assert validate_date_string(value) is None

    def test_date_with_quote(self):
        error = validate_date_string('2024"-01')
        assert error.code == ErrorCode.INVALID_DATE_FORMAT
        assert error.message == "Invalid characters in date string"

    def test_date_with_odd_characters(self):
        assert validate_date_string("2024;01").code == ErrorCode.INVALID_DATE_FORMAT

    def test_tags(self):
        assert validate_tags(None) is None
        assert validate_tags(["home", "Errands @ town"]) is None
        assert validate_tags([""]).message == "Tag name cannot be empty"
        assert validate_tags(["a\\b"]).code == ErrorCode.VALIDATION_ERROR

    def test_optional_and_required_names(self):
        assert validate_project_name(None) is None
        assert validate_project_name("") is None
        assert validate_project_name('x"y').code == ErrorCode.VALIDATION_ERROR
        assert validate_required_name("", "folder").message == "Folder name cannot be empty"

    def test_search_query(self):
        assert validate_search_query("invoice") is None
        assert validate_search_query("   ").message == "Search query cannot be empty"

    def test_estimated_minutes(self):
        assert validate_estimated_minutes(None) is None
        assert validate_estimated_minutes(0) is None
        assert validate_estimated_minutes(-5).code == ErrorCode.VALIDATION_ERROR

    def test_pagination(self):
        assert validate_pagination_params(None, None) is None
        assert validate_pagination_params(MAX_PAGINATION_LIMIT, 0) is None
        assert validate_pagination_params(0, None).message == "Invalid limit: 0"
        assert "exceeds maximum" in validate_pagination_params(MAX_PAGINATION_LIMIT + 1, None).message
        assert validate_pagination_params(10, -1).message == "Invalid offset: -1"

    def test_days(self):
        assert validate_days(None) is None
        assert validate_days(3) is None
        assert validate_days(0, "Review interval").message == "Review interval must be a positive integer"

    def test_first_error(self):
        a = create_error(ErrorCode.VALIDATION_ERROR, "a")
        b = create_error(ErrorCode.VALIDATION_ERROR, "b")
        assert first_error(None, a, b) is a
        assert first_error(None, None) is None


class TestRepetitionRuleValidation:
    """Tests for coercing and bounds-checking repetition rules."""

    def test_none(self):
        assert coerce_repetition_rule(None) == (None, None)

    def test_from_dict_with_snake_or_camel_keys(self):
        rule, error = coerce_repetition_rule({"frequency": "weekly", "daysOfWeek": [1, 3]})
        assert error is None
        assert rule.days_of_week == [1, 3]
        rule, error = coerce_repetition_rule({"frequency": "daily", "repeat_method": "defer-another"})
        assert error is None
        assert rule.repeat_method == RepeatMethod.DEFER_ANOTHER

    def test_unknown_frequency(self):
        rule, error = coerce_repetition_rule({"frequency": "hourly"})
        assert rule is None
        assert error.code == ErrorCode.INVALID_REPETITION_RULE

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"frequency": "daily", "interval": 0}, "Invalid repetition interval: 0"),
            ({"frequency": "weekly", "days_of_week": []}, "daysOfWeek must be a non-empty array"),
            ({"frequency": "weekly", "days_of_week": [7]}, "Invalid day of week: 7"),
            ({"frequency": "monthly", "day_of_month": 32}, "Invalid day of month: 32"),
        ],
    )
    def test_out_of_range(self, data, message):
        rule, error = coerce_repetition_rule(data)
        assert rule is None
        assert error.code == ErrorCode.INVALID_REPETITION_RULE
        assert error.message == message


# ============================================================================
# Repetition scripts
# ============================================================================


class TestRepetitionScripts:
    """Tests for RRULE and repetition statement generation."""

    def test_daily_default_interval(self):
        assert build_rrule(RepetitionRule(frequency=RepetitionFrequency.DAILY)) == "FREQ=DAILY"

    def test_weekly_with_days(self):
        rule = RepetitionRule(frequency="weekly", interval=2, days_of_week=[1, 5])
        assert build_rrule(rule) == "FREQ=WEEKLY;INTERVAL=2;BYDAY=MO,FR"

    def test_monthly_day(self):
        rule = RepetitionRule(frequency="monthly", day_of_month=15)
        assert build_rrule(rule) == "FREQ=MONTHLY;BYMONTHDAY=15"

    def test_apply_statement(self):
        rule = RepetitionRule(frequency="yearly", repeat_method="defer-another")
        assert build_repetition_rule_script("newTask", rule) == (
            'set repetition rule of newTask to {repetition method:defer another, recurrence:"FREQ=YEARLY"}'
        )

    def test_clear_statement(self):
        assert build_clear_repetition_script("theTask") == "set repetition rule of theTask to missing value"


# ============================================================================
# Error parsing
# ============================================================================


class TestParseAppleScriptError:
    """Tests for mapping raw osascript errors to error codes."""

    @pytest.mark.parametrize(
        "raw, code",
        [
            ("OmniFocus got an error: Application isn't running. (-600)", ErrorCode.OMNIFOCUS_NOT_RUNNING),
            ("Connection is invalid. (-609)", ErrorCode.OMNIFOCUS_NOT_RUNNING),
            ("Can't get first flattened task whose id is \"x\". (-1728)", ErrorCode.TASK_NOT_FOUND),
            ("Can't get first flattened project whose id is \"x\". (-1728)", ErrorCode.PROJECT_NOT_FOUND),
            ("Can't get first flattened tag whose name is \"x\".", ErrorCode.TAG_NOT_FOUND),
            ("Can't get first flattened folder whose id is \"x\".", ErrorCode.FOLDER_NOT_FOUND),
            ("Perspective not found: Weekly", ErrorCode.PERSPECTIVE_NOT_FOUND),
            ("Can't make \"someday\" into type date. (-1700)", ErrorCode.INVALID_DATE_FORMAT),
            ("Expected end of line but found identifier. (-2741)", ErrorCode.APPLESCRIPT_ERROR),
        ],
    )
    def test_classification(self, raw, code):
        error = parse_applescript_error(raw)
        assert error.code == code
        assert error.details == raw

    def test_fallback_message(self):
        assert parse_applescript_error("boom").message == "AppleScript execution failed"


# ============================================================================
# Settings
# ============================================================================


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.app_name == "OmniFocus"
        assert settings.osascript_path == "osascript"
        assert settings.timeout == 30
        assert settings.max_batch_size == 50
        assert settings.log_level == "WARNING"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("OFOCUS_APP_NAME", "OmniFocus 3")
        monkeypatch.setenv("OFOCUS_TIMEOUT", "90")
        monkeypatch.setenv("OFOCUS_LOG_LEVEL", "debug")
        get_settings.cache_clear()
        settings = get_settings()
        assert settings.app_name == "OmniFocus 3"
        assert settings.timeout == 90
        assert settings.log_level == "DEBUG"

    def test_bad_numbers_fall_back(self, monkeypatch):
        monkeypatch.setenv("OFOCUS_TIMEOUT", "soon")
        monkeypatch.setenv("OFOCUS_MAX_BATCH_SIZE", "0")
        settings = Settings.from_env()
        assert settings.timeout == 30
        assert settings.max_batch_size == 50
