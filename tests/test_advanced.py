"""Tests for forecast, focus, quick capture, stats, sync, URL, archive, TaskPaper and attachment operations."""

from datetime import date, datetime, time
from unittest.mock import MagicMock

import pytest
from conftest import osascript_output, paginated, script_of

from ofocus_mcp import sdk
from ofocus_mcp.enums import EntityKind, ErrorCode, FocusTargetType, RepetitionFrequency, StatsPeriod
from ofocus_mcp.models import ProjectModel, TaskModel
from ofocus_mcp.models.results import (
    AddAttachmentResult,
    ArchiveResult,
    FocusResult,
    ListAttachmentsResult,
    StatsResult,
    TaskPaperExportResult,
    TaskPaperImportResult,
    UrlResult,
)
from ofocus_mcp.sdk.quick import parse_duration, resolve_date_keyword, tokenize
from ofocus_mcp.sdk.stats import calculate_period, summarize
from ofocus_mcp.sdk.taskpaper import format_project_line, format_task_line, parse_line, parse_taskpaper
from ofocus_mcp.utils.dates import parse_applescript_date

# A Wednesday
TODAY = date(2024, 1, 10)


def script_error(message):
    return MagicMock(returncode=1, stdout="", stderr=f"execution error: {message} (-2700)")


# ============================================================================
# Dates
# ============================================================================


class TestParseAppleScriptDate:
    """Tests for reading AppleScript date strings."""

    def test_long_english_form(self):
        assert parse_applescript_date("Tuesday, December 31, 2024 at 5:00:00 PM") == datetime(2024, 12, 31, 17, 0)

    def test_narrow_space_before_meridiem(self):
        assert parse_applescript_date("Tuesday, December 31, 2024 at 5:00:00\u202fPM") == datetime(2024, 12, 31, 17, 0)

    def test_form_without_at(self):
        assert parse_applescript_date("Monday, January 1, 2024 9:30:00 AM") == datetime(2024, 1, 1, 9, 30)

    def test_iso_with_offset_is_naive(self):
        assert parse_applescript_date("2024-12-31T17:00:00+01:00") == datetime(2024, 12, 31, 17, 0)

    @pytest.mark.parametrize("value", [None, "", "sometime soon"])
    def test_unreadable(self, value):
        assert parse_applescript_date(value) is None


# ============================================================================
# Forecast and deferred
# ============================================================================


class TestForecast:
    """Tests for query_forecast."""

    def test_defaults_to_next_seven_days(self, mock_osascript, sample_tasks):
        mock_osascript.return_value = osascript_output(sample_tasks)
        output = sdk.query_forecast()

        assert output.success is True
        assert [t.id for t in output.data] == ["kXf2abc", "mN3def"]
        script = script_of(mock_osascript)
        assert "set startDate to (current date) - (time of (current date))" in script
        assert "set endDate to startDate + (7 * days)" in script
        assert "flattened tasks where completed is false and effectively dropped is false" in script
        assert "set d to due date of t" in script
        assert "set d to defer date of t" not in script

    def test_start_and_days(self, mock_osascript):
        mock_osascript.return_value = osascript_output([])
        sdk.query_forecast(start="2024-12-01", days=3)

        script = script_of(mock_osascript)
        assert 'set startDate to date "12/01/2024"' in script
        assert "set endDate to startDate + (3 * days)" in script

    def test_end_wins_over_days(self, mock_osascript):
        mock_osascript.return_value = osascript_output([])
        sdk.query_forecast(end="2024-12-31", days=3)

        script = script_of(mock_osascript)
        assert 'set endDate to date "12/31/2024"' in script
        assert "(3 * days)" not in script

    def test_include_deferred(self, mock_osascript):
        mock_osascript.return_value = osascript_output([])
        sdk.query_forecast(include_deferred=True)
        assert "set d to defer date of t" in script_of(mock_osascript)

    def test_bad_days(self, mock_osascript):
        output = sdk.query_forecast(days=0)
        assert output.error.code == ErrorCode.VALIDATION_ERROR
        assert output.error.message == "Days must be a positive integer"
        mock_osascript.assert_not_called()

    def test_bad_date(self, mock_osascript):
        output = sdk.query_forecast(start='2024-01-01" & quit')
        assert output.error.code == ErrorCode.INVALID_DATE_FORMAT
        mock_osascript.assert_not_called()


class TestDeferred:
    """Tests for query_deferred."""

    def test_all_deferred(self, mock_osascript, sample_tasks):
        mock_osascript.return_value = osascript_output(sample_tasks)
        output = sdk.query_deferred()

        assert output.success is True
        assert len(output.data) == 2
        script = script_of(mock_osascript)
        assert "set taskDefer to defer date of t" in script
        assert "if taskDefer is missing value then" in script
        assert "rightNow then set shouldInclude" not in script

    def test_filters(self, mock_osascript):
        mock_osascript.return_value = osascript_output([])
        sdk.query_deferred(deferred_after="2024-01-01", deferred_before="2024-02-01", blocked_only=True)

        script = script_of(mock_osascript)
        assert "if taskDefer <= rightNow then set shouldInclude to false" in script
        assert 'if taskDefer < date "01/01/2024" then set shouldInclude to false' in script
        assert 'if taskDefer > date "02/01/2024" then set shouldInclude to false' in script


# ============================================================================
# Focus
# ============================================================================


class TestFocus:
    """Tests for focus, unfocus and get_focused."""

    def test_focus_by_name(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"focused": True, "targetId": "pJ9", "targetName": "Work", "targetType": "project"}
        )
        output = sdk.focus("Work")

        assert isinstance(output.data, FocusResult)
        assert output.data.target_type == FocusTargetType.PROJECT
        script = script_of(mock_osascript)
        assert 'first flattened project whose name is "Work"' in script
        assert 'first flattened folder whose name is "Work"' in script
        assert "set focused of document window 1 to {targetItem}" in script
        # the window is changed outside the document block
        assert script.index("end tell") < script.index("set focused of document window 1")

    def test_focus_by_id(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"focused": True, "targetId": "fA1", "targetName": "Areas", "targetType": "folder"}
        )
        output = sdk.focus("fA1", by_id=True)

        assert output.data.target_type == FocusTargetType.FOLDER
        assert 'first flattened folder whose id is "fA1"' in script_of(mock_osascript)

    def test_unknown_target(self, mock_osascript):
        mock_osascript.return_value = script_error("No project or folder named Nope")
        output = sdk.focus("Nope")
        assert output.error.code == ErrorCode.PROJECT_NOT_FOUND

    def test_bad_id(self, mock_osascript):
        output = sdk.focus("bad id!", by_id=True)
        assert output.error.code == ErrorCode.INVALID_ID_FORMAT
        mock_osascript.assert_not_called()

    def test_empty_name(self, mock_osascript):
        output = sdk.focus("  ")
        assert output.error.code == ErrorCode.VALIDATION_ERROR
        mock_osascript.assert_not_called()

    def test_unfocus(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"focused": False, "targetId": None, "targetName": None, "targetType": None}
        )
        output = sdk.unfocus()

        assert output.data.focused is False
        assert "set focused of document window 1 to {}" in script_of(mock_osascript)

    def test_get_focused(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"focused": True, "targetId": "pJ9", "targetName": "Work", "targetType": "project"}
        )
        output = sdk.get_focused()

        assert output.data.target_name == "Work"
        assert "set focusedItems to focused of document window 1" in script_of(mock_osascript)


# ============================================================================
# Quick capture
# ============================================================================


class TestQuickParsing:
    """Tests for the quick-capture parser."""

    def test_everything(self):
        parsed = sdk.parse_quick_input("Call Bob @phone #Work due:tomorrow ~15m !", today=TODAY)

        assert parsed.title == "Call Bob"
        assert parsed.tags == ["phone"]
        assert parsed.project == "Work"
        assert parsed.due == "2024-01-11"
        assert parsed.estimated_minutes == 15
        assert parsed.flagged is True

    def test_quoted_project(self):
        parsed = sdk.parse_quick_input('File taxes #"Home Office" @"Low energy"')
        assert parsed.project == "Home Office"
        assert parsed.tags == ["Low energy"]
        assert parsed.title == "File taxes"

    @pytest.mark.parametrize(
        ("keyword", "expected"),
        [
            ("today", "2024-01-10"),
            ("yesterday", "2024-01-09"),
            ("friday", "2024-01-12"),
            ("wednesday", "2024-01-17"),
            ("Monday", "2024-01-15"),
            ("2024-03-01", "2024-03-01"),
        ],
    )
    def test_date_keywords(self, keyword, expected):
        assert resolve_date_keyword(keyword, TODAY) == expected

    @pytest.mark.parametrize(("text", "minutes"), [("30m", 30), ("1.5h", 90), ("2hours", 120), ("45min", 45)])
    def test_durations(self, text, minutes):
        assert parse_duration(text) == minutes

    def test_not_a_duration_stays_in_title(self):
        parsed = sdk.parse_quick_input("Ship it ~soon")
        assert parsed.estimated_minutes is None
        assert parsed.title == "Ship it ~soon"

    def test_repeat_every(self):
        parsed = sdk.parse_quick_input('Water plants repeat:"every 2 weeks"')
        assert parsed.repeat.frequency == RepetitionFrequency.WEEKLY
        assert parsed.repeat.interval == 2
        assert parsed.title == "Water plants"

    def test_repeat_annually(self):
        parsed = sdk.parse_quick_input("Renew passport repeat:annually")
        assert parsed.repeat.frequency == RepetitionFrequency.YEARLY

    def test_unknown_repeat_stays_in_title(self):
        parsed = sdk.parse_quick_input("Dance repeat:sometimes")
        assert parsed.repeat is None
        assert parsed.title == "Dance repeat:sometimes"

    def test_defer_and_double_bang(self):
        parsed = sdk.parse_quick_input("Plan trip defer:saturday !!", today=TODAY)
        assert parsed.defer == "2024-01-13"
        assert parsed.flagged is True

    def test_tokenize_drops_quotes(self):
        assert tokenize("a 'b c'  d") == ["a", "b c", "d"]


class TestQuickCapture:
    """Tests for quick_capture."""

    def test_creates_task_in_project(self, mock_osascript, sample_task):
        mock_osascript.return_value = osascript_output(sample_task)
        output = sdk.quick_capture("Call Bob #Work @phone due:2024-12-31 !", note="About the invoice")

        assert output.success is True
        assert output.data.id == "kXf2abc"
        script = script_of(mock_osascript)
        assert 'set theProject to first flattened project whose name is "Work"' in script
        assert "move newTask to end of tasks of theProject" in script
        assert 'name:"Call Bob"' in script
        assert 'note:"About the invoice"' in script
        assert 'due date:date "12/31/2024"' in script
        assert "flagged:true" in script
        assert 'first flattened tag whose name is "phone"' in script

    def test_inbox_without_project(self, mock_osascript, sample_task):
        mock_osascript.return_value = osascript_output(sample_task)
        sdk.quick_capture("Buy milk")
        assert "theProject" not in script_of(mock_osascript)

    def test_unknown_project(self, mock_osascript):
        mock_osascript.return_value = script_error(
            'OmniFocus got an error: Can\'t get first flattened project whose name is "Nope".'
        )
        output = sdk.quick_capture("Call Bob #Nope")
        assert output.error.code == ErrorCode.PROJECT_NOT_FOUND
        # the project is looked up before the task is made
        script = script_of(mock_osascript)
        assert script.index("set theProject") < script.index("make new inbox task")

    def test_empty_input(self, mock_osascript):
        output = sdk.quick_capture("   ")
        assert output.error.message == "Input cannot be empty"
        mock_osascript.assert_not_called()

    def test_only_shorthand(self, mock_osascript):
        output = sdk.quick_capture("@phone #Work !")
        assert output.error.message == "Task title cannot be empty"
        mock_osascript.assert_not_called()


# ============================================================================
# Statistics
# ============================================================================


class TestStatsPeriod:
    """Tests for calculate_period."""

    @pytest.mark.parametrize(
        ("period", "start"),
        [
            (StatsPeriod.DAY, date(2024, 1, 10)),
            (StatsPeriod.WEEK, date(2024, 1, 7)),
            (StatsPeriod.MONTH, date(2024, 1, 1)),
            (StatsPeriod.YEAR, date(2024, 1, 1)),
            (None, date(2024, 1, 3)),
        ],
    )
    def test_periods(self, period, start):
        begin, end = calculate_period(period, today=TODAY)
        assert begin == datetime.combine(start, time.min)
        assert end.date() == TODAY
        assert end.hour == 23

    def test_since_until(self):
        begin, end = calculate_period(StatsPeriod.DAY, since="2023-12-01", until="2023-12-31", today=TODAY)
        assert begin == datetime(2023, 12, 1)
        assert end.date() == date(2023, 12, 31)

    def test_until_needs_since(self):
        _, end = calculate_period(until="2023-12-31", today=TODAY)
        assert end.date() == TODAY

    def test_bad_since(self):
        with pytest.raises(ValueError):
            calculate_period(since="last tuesday", today=TODAY)


class TestStats:
    """Tests for summarize and get_stats."""

    def test_summarize(self):
        tasks = [
            TaskModel(id="c1", completed=True, completion_date="2024-01-08T09:00:00"),
            TaskModel(id="c2", completed=True, completion_date="2023-06-01T09:00:00"),
            TaskModel(id="c3", completed=True),
            TaskModel(id="t1", flagged=True, due_date="2024-01-09T10:00:00"),
            TaskModel(id="t2", due_date="Wednesday, January 10, 2024 at 5:00:00 PM"),
            TaskModel(id="t3"),
        ]
        projects = [
            ProjectModel(id="p1", status="active"),
            ProjectModel(id="p2", status="on-hold"),
            ProjectModel(id="p3", status="dropped"),
        ]
        start, end = calculate_period(today=TODAY)
        result = summarize(tasks, tasks[3:5], projects, start, end, today=TODAY, project="Work")

        assert isinstance(result, StatsResult)
        assert result.period_start == "2024-01-03"
        assert result.period_end == "2024-01-10"
        assert result.tasks_completed == 2
        assert result.tasks_remaining == 3
        assert result.tasks_flagged == 1
        assert result.tasks_overdue == 1
        assert result.tasks_due_today == 1
        assert result.tasks_due_this_week == 2
        assert result.tasks_available == 2
        assert result.projects_active == 1
        assert result.projects_on_hold == 1
        assert result.project_filter == "Work"

    def test_get_stats_runs_three_queries(self, mock_osascript, sample_tasks, sample_task, sample_project):
        mock_osascript.side_effect = [
            osascript_output(paginated(sample_tasks)),
            osascript_output(paginated([sample_task])),
            osascript_output(paginated([sample_project])),
        ]
        output = sdk.get_stats(project="Work", period="week")

        assert output.success is True
        assert output.data.tasks_remaining == 2
        assert output.data.tasks_available == 1
        assert output.data.projects_active == 1
        assert mock_osascript.call_count == 3
        assert 'is not "Work"' in script_of(mock_osascript, 0)
        assert "blocked is false" in script_of(mock_osascript, 1)

    def test_query_failure_is_returned(self, mock_subprocess_error):
        output = sdk.get_stats()
        assert output.success is False
        assert mock_subprocess_error.call_count == 1

    def test_bad_period(self, mock_osascript):
        output = sdk.get_stats(period="fortnight")
        assert output.error.code == ErrorCode.VALIDATION_ERROR
        mock_osascript.assert_not_called()

    def test_bad_since(self, mock_osascript):
        output = sdk.get_stats(since="yesterday")
        assert output.error.code == ErrorCode.INVALID_DATE_FORMAT
        mock_osascript.assert_not_called()


# ============================================================================
# Sync and URLs
# ============================================================================


class TestSync:
    """Tests for sync status and trigger."""

    def test_status(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"syncing": True, "lastSync": None, "accountName": None, "syncEnabled": False}
        )
        output = sdk.get_sync_status()

        assert output.data.syncing is True
        assert "set isSyncing to synchronizing" in script_of(mock_osascript)

    def test_trigger(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"triggered": True, "message": "Synchronization started"})
        output = sdk.trigger_sync()

        assert output.data.triggered is True
        assert "\t\tsynchronize\n" in script_of(mock_osascript)


class TestUrl:
    """Tests for generate_url and open_item."""

    def test_generate(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"id": "kXf2abc", "type": "task", "url": "omnifocus:///task/kXf2abc", "name": "Call Bob"}
        )
        output = sdk.generate_url("kXf2abc")

        assert isinstance(output.data, UrlResult)
        assert output.data.type == EntityKind.TASK
        script = script_of(mock_osascript)
        assert 'set itemId to "kXf2abc"' in script
        for kind in ("task", "project", "folder", "tag"):
            assert f"first flattened {kind} whose id is itemId" in script
        # tasks are tried first
        assert script.index("flattened task ") < script.index("flattened project ")
        assert 'set itemUrl to "omnifocus:///" & itemType & "/" & itemId' in script

    def test_not_found(self, mock_osascript):
        mock_osascript.return_value = script_error("Item not found with ID: zzz")
        output = sdk.generate_url("zzz")
        assert output.error.code == ErrorCode.APPLESCRIPT_ERROR
        assert "Item not found" in output.error.details

    def test_bad_id(self, mock_osascript):
        output = sdk.generate_url("a b")
        assert output.error.code == ErrorCode.INVALID_ID_FORMAT
        mock_osascript.assert_not_called()

    def test_open(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"id": "pJ9", "type": "project", "name": "Work", "opened": True})
        output = sdk.open_item("pJ9")

        assert output.data.opened is True
        script = script_of(mock_osascript)
        assert "activate" in script
        assert 'do shell script "open " & quoted form of itemUrl' in script


# ============================================================================
# Archive
# ============================================================================


class TestArchive:
    """Tests for archive_tasks and compact_database."""

    def test_completed_before(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"tasksArchived": 3, "projectsArchived": 1, "dryRun": False, "archivePath": None}
        )
        output = sdk.archive_tasks(completed_before="2024-01-01")

        assert isinstance(output.data, ArchiveResult)
        assert output.data.tasks_archived == 3
        script = script_of(mock_osascript)
        assert 'completion date of t < date "01/01/2024"' in script
        assert "if taskCount > 0 then compact" in script
        assert "status of p is done status or status of p is dropped status" in script

    def test_dry_run_does_not_compact(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"tasksArchived": 3, "projectsArchived": 0, "dryRun": True, "archivePath": None}
        )
        output = sdk.archive_tasks(dropped_before="2024-01-01", project="Work", dry_run=True)

        assert output.data.dry_run is True
        script = script_of(mock_osascript)
        assert "then compact" not in script
        assert 'dropped of t is true and modification date of t < date "01/01/2024"' in script
        assert 'if name of containing project of t is not "Work" then set matches to false' in script

    def test_needs_a_cutoff(self, mock_osascript):
        output = sdk.archive_tasks(project="Work")
        assert output.error.code == ErrorCode.VALIDATION_ERROR
        mock_osascript.assert_not_called()

    def test_compact(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"compacted": True, "message": "Database compaction triggered"})
        output = sdk.compact_database()

        assert output.data.compacted is True
        assert "\t\tcompact\n" in script_of(mock_osascript)


# ============================================================================
# TaskPaper
# ============================================================================


class TestTaskPaperFormat:
    """Tests for TaskPaper line formatting and parsing."""

    def test_task_line(self, sample_task):
        line = format_task_line(TaskModel.model_validate(sample_task))
        assert line == "\t- Call Bob @phone @urgent @flagged @due(2024-12-31) @estimate(15m)"

    def test_project_lines(self, sample_project):
        assert format_project_line(ProjectModel.model_validate(sample_project)) == "Work: @parallel"
        held = ProjectModel(id="p2", name="Errands", status="on-hold", sequential=True)
        assert format_project_line(held) == "Errands: @on-hold @sequential"

    @pytest.mark.parametrize("line", ["Work:", "Work: @parallel", "Work: @on-hold @sequential"])
    def test_project(self, line):
        item = parse_line(line)
        assert item.kind == "project"
        assert item.name == "Work"

    def test_task(self):
        item = parse_line("\t- Call Bob @phone @flagged @due(2024-12-31) @defer(2024-12-30) @estimate(1h)")

        assert item.kind == "task"
        assert item.name == "Call Bob"
        assert item.indent == 1
        assert item.tags == ["phone"]
        assert item.flagged is True
        assert item.due == "2024-12-31"
        assert item.defer == "2024-12-30"
        assert item.estimate == 60

    def test_space_indent(self):
        assert parse_line("        * Nested").indent == 2

    def test_task_with_colon(self):
        item = parse_line("- Call Bob:")
        assert item.kind == "task"
        assert item.name == "Call Bob:"

    def test_done_and_dropped(self):
        assert parse_line("- Old @done").completed is True
        assert parse_line("- Gone @dropped").dropped is True

    def test_note(self):
        item = parse_line("\t\tRemember: bring the invoice")
        assert item.kind == "note"

    def test_blank(self):
        assert parse_line("   \t") is None

    def test_notes_attach_to_previous_item(self):
        items = parse_taskpaper("Work:\n\tProject note\n\t- Call Bob\n\t\tAbout the invoice\n\t\tand the receipt\n")
        assert [i.kind for i in items] == ["project", "task"]
        assert items[0].notes == ["Project note"]
        assert items[1].notes == ["About the invoice", "and the receipt"]


class TestTaskPaperExport:
    """Tests for export_taskpaper."""

    def test_export(self, mock_osascript, sample_project, sample_task, sample_tasks):
        errands = {"id": "p2", "name": "Errands", "status": "on-hold", "sequential": True}
        dropped = {"id": "p3", "name": "Old", "status": "dropped"}
        root_task = {"id": "pJ9", "name": "Work"}
        mock_osascript.side_effect = [
            osascript_output(paginated([sample_project, errands, dropped])),
            osascript_output(paginated([root_task, sample_task])),
            osascript_output(paginated([])),
            osascript_output(paginated(sample_tasks)),
        ]
        output = sdk.export_taskpaper()

        assert isinstance(output.data, TaskPaperExportResult)
        assert output.data.content.splitlines() == [
            "Work: @parallel",
            "\t- Call Bob @phone @urgent @flagged @due(2024-12-31) @estimate(15m)",
            "\t\tAbout the invoice",
            "",
            "Errands: @on-hold @sequential",
            "",
            "Inbox:",
            "\t- Buy milk",
        ]
        assert output.data.project_count == 2
        assert output.data.task_count == 2
        assert mock_osascript.call_count == 4
        assert "completed is false" in script_of(mock_osascript, 1)

    def test_single_project_skips_inbox(self, mock_osascript, sample_project):
        mock_osascript.side_effect = [
            osascript_output(paginated([sample_project])),
            osascript_output(paginated([])),
        ]
        output = sdk.export_taskpaper(project="work", include_completed=True)

        assert output.data.project_count == 1
        assert mock_osascript.call_count == 2
        assert "completed is" not in script_of(mock_osascript, 1)

    def test_include_dropped(self, mock_osascript):
        dropped = {"id": "p3", "name": "Old", "status": "dropped"}
        mock_osascript.side_effect = [
            osascript_output(paginated([dropped])),
            osascript_output(paginated([])),
            osascript_output(paginated([])),
        ]
        output = sdk.export_taskpaper(include_dropped=True)
        assert output.data.content.startswith("Old: @dropped @parallel")


class TestTaskPaperImport:
    """Tests for import_taskpaper."""

    def test_import_assigns_projects(self, mock_osascript, sample_task):
        mock_osascript.return_value = osascript_output(sample_task)
        content = (
            "- Loose task\n"
            "Work:\n"
            "\t- Call Bob @phone @flagged\n"
            "\t\tAbout the invoice\n"
            "\t- Old thing @done\n"
            "Inbox:\n"
            "\t- Buy milk\n"
        )
        output = sdk.import_taskpaper(content, default_project="Someday")

        assert isinstance(output.data, TaskPaperImportResult)
        assert output.data.tasks_created == 3
        assert output.data.errors == []
        assert mock_osascript.call_count == 3
        assert 'whose name is "Someday"' in script_of(mock_osascript, 0)
        second = script_of(mock_osascript, 1)
        assert 'whose name is "Work"' in second
        assert 'note:"About the invoice"' in second
        assert "flagged:true" in second
        assert "theProject" not in script_of(mock_osascript, 2)

    def test_create_missing_projects(self, mock_osascript, sample_task, sample_project):
        home = dict(sample_project, id="pH1", name="Home")
        mock_osascript.side_effect = [
            osascript_output(paginated([sample_project])),
            osascript_output(sample_task),
            osascript_output(home),
            osascript_output(sample_task),
        ]
        output = sdk.import_taskpaper("Work:\n\t- A\nHome:\n\t- B\n", create_projects=True)

        assert output.data.projects_created == 1
        assert output.data.tasks_created == 2
        assert 'make new project with properties {name:"Home"}' in script_of(mock_osascript, 2)

    def test_errors_are_collected(self, mock_osascript, sample_task):
        mock_osascript.return_value = osascript_output(sample_task)
        output = sdk.import_taskpaper("- Bad @due(soon!)\n- Good\n")

        assert output.success is True
        assert output.data.tasks_created == 1
        assert output.data.errors == ['Failed to create task "Bad": Invalid date format: soon!']
        assert mock_osascript.call_count == 1


# ============================================================================
# Attachments
# ============================================================================


class TestAttachments:
    """Tests for add, list and remove attachment."""

    def test_add(self, mock_osascript, tmp_path):
        attachment = tmp_path / "notes.txt"
        attachment.write_text("hello")
        mock_osascript.return_value = osascript_output(
            {"taskId": "kXf2abc", "taskName": "Call Bob", "fileName": "notes.txt", "attached": True}
        )
        output = sdk.add_attachment("kXf2abc", str(attachment))

        assert isinstance(output.data, AddAttachmentResult)
        script = script_of(mock_osascript)
        assert f'set theFile to POSIX file "{attachment.resolve()}"' in script
        assert "make new attachment with properties {file:theFile}" in script
        assert 'my jsonString("notes.txt")' in script

    def test_add_missing_file(self, mock_osascript, tmp_path):
        output = sdk.add_attachment("kXf2abc", str(tmp_path / "nope.txt"))
        assert output.error.code == ErrorCode.VALIDATION_ERROR
        assert output.error.message.startswith("File not found")
        mock_osascript.assert_not_called()

    def test_add_directory(self, mock_osascript, tmp_path):
        output = sdk.add_attachment("kXf2abc", str(tmp_path))
        assert output.error.message.startswith("Not a file")
        mock_osascript.assert_not_called()

    def test_list(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {
                "taskId": "kXf2abc",
                "taskName": "Call Bob",
                "attachments": [{"id": "a1", "name": "notes.txt", "size": None, "type": None}],
            }
        )
        output = sdk.list_attachments("kXf2abc")

        assert isinstance(output.data, ListAttachmentsResult)
        assert output.data.attachments[0].name == "notes.txt"
        assert "repeat with att in attachments of theTask" in script_of(mock_osascript)

    def test_remove(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"taskId": "kXf2abc", "attachmentName": "notes.txt", "removed": True}
        )
        output = sdk.remove_attachment("kXf2abc", "notes.txt")

        assert output.data.removed is True
        script = script_of(mock_osascript)
        assert 'if id of att is "notes.txt" or name of att is "notes.txt" then' in script
        assert "delete toRemove" in script

    def test_remove_unknown(self, mock_osascript):
        mock_osascript.return_value = script_error("Attachment not found: x.pdf")
        output = sdk.remove_attachment("kXf2abc", "x.pdf")
        assert output.success is False
        assert "Attachment not found" in output.error.details

    def test_remove_needs_attachment(self, mock_osascript):
        output = sdk.remove_attachment("kXf2abc", " ")
        assert output.error.code == ErrorCode.VALIDATION_ERROR
        mock_osascript.assert_not_called()
