"""Tests for project, tag, folder and perspective SDK operations."""

from conftest import osascript_output, paginated, script_of

from ofocus_mcp import sdk
from ofocus_mcp.enums import ErrorCode, ProjectStatus
from ofocus_mcp.models import FolderModel, PerspectiveModel, ProjectModel, TagModel

# ============================================================================
# Projects
# ============================================================================


class TestQueryProjects:
    """Tests for query_projects."""

    def test_all_projects(self, mock_osascript, sample_project):
        mock_osascript.return_value = osascript_output(paginated([sample_project]))
        output = sdk.query_projects()

        project = output.data.items[0]
        assert isinstance(project, ProjectModel)
        assert project.status == ProjectStatus.ACTIVE
        assert project.remaining_task_count == 3
        assert "on projectStatusString(p)" in script_of(mock_osascript)

    def test_filters(self, mock_osascript):
        mock_osascript.return_value = osascript_output(paginated([]))
        sdk.query_projects(folder="Areas", status="on-hold", sequential=True)

        script = script_of(mock_osascript)
        assert "flattened projects where sequential is true" in script
        assert 'if (my projectStatusString(t)) is not "on-hold"' in script
        assert 'name of folder of t is not "Areas"' in script

    def test_unknown_status(self, mock_osascript):
        output = sdk.query_projects(status="paused")
        assert output.error.code == ErrorCode.VALIDATION_ERROR
        assert "active, on-hold, completed, dropped" in output.error.details
        mock_osascript.assert_not_called()


class TestProjectMutations:
    """Tests for creating, updating, dropping and deleting projects."""

    def test_create_top_level(self, mock_osascript, sample_project):
        mock_osascript.return_value = osascript_output(sample_project)
        output = sdk.create_project("Work", sequential=True, status="on-hold", due_date="2025-03-01")

        assert output.data.name == "Work"
        script = script_of(mock_osascript)
        assert (
            'make new project with properties {name:"Work", sequential:true, '
            'status:on hold status, due date:date "03/01/2025"}'
        ) in script

    def test_create_in_folder_by_id_wins(self, mock_osascript, sample_project):
        mock_osascript.return_value = osascript_output(sample_project)
        sdk.create_project("Work", folder_id="fA1", folder_name="Ignored")

        script = script_of(mock_osascript)
        assert 'set targetFolder to first flattened folder whose id is "fA1"' in script
        assert "make new project at end of projects of targetFolder" in script
        assert "Ignored" not in script

    def test_create_completed_rejected(self, mock_osascript):
        output = sdk.create_project("Work", status="completed")
        assert output.error.message == "New projects can only be active or on-hold"
        mock_osascript.assert_not_called()

    def test_create_without_name(self, mock_osascript):
        output = sdk.create_project("")
        assert output.error.message == "Project name cannot be empty"

    def test_update(self, mock_osascript, sample_project):
        mock_osascript.return_value = osascript_output(sample_project)
        sdk.update_project("pJ9", name="Job", status="dropped", sequential=False, defer_date="", folder_name="Areas")

        script = script_of(mock_osascript)
        assert 'set theProject to first flattened project whose id is "pJ9"' in script
        assert 'set name of theProject to "Job"' in script
        assert "set status of theProject to dropped status" in script
        assert "set sequential of theProject to false" in script
        assert "set defer date of theProject to missing value" in script
        assert "move theProject to end of projects of targetFolder" in script

    def test_update_missing_project(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            "", returncode=1, stderr="Can't get first flattened project whose id is \"nope\". (-1728)"
        )
        output = sdk.update_project("nope", name="x")
        assert output.error.code == ErrorCode.PROJECT_NOT_FOUND

    def test_delete(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"projectId": "pJ9", "deleted": True})
        output = sdk.delete_project("pJ9")
        assert output.data.project_id == "pJ9"
        assert "delete theProject" in script_of(mock_osascript)

    def test_drop(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"projectId": "pJ9", "projectName": "Work", "dropped": True})
        output = sdk.drop_project("pJ9")
        assert output.data.dropped is True
        assert "set status of theProject to dropped status" in script_of(mock_osascript)


class TestReview:
    """Tests for the project review workflow."""

    def test_review(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"projectId": "pJ9", "projectName": "Work", "lastReviewed": "today", "nextReviewDate": "next week"}
        )
        output = sdk.review_project("pJ9")
        assert output.data.next_review_date == "next week"
        assert "set last review date of theProject to current date" in script_of(mock_osascript)

    def test_projects_for_review(self, mock_osascript, sample_project):
        mock_osascript.return_value = osascript_output([sample_project])
        output = sdk.query_projects_for_review()
        assert [p.id for p in output.data] == ["pJ9"]
        assert "nextReview <= currentDate" in script_of(mock_osascript)

    def test_get_interval(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"projectId": "pJ9", "projectName": "Work", "reviewIntervalDays": 7})
        output = sdk.get_review_interval("pJ9")
        assert output.data.review_interval_days == 7
        script = script_of(mock_osascript)
        assert "intervalSecs div 86400" in script
        assert "set review interval of" not in script

    def test_set_interval_in_seconds(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            {"projectId": "pJ9", "projectName": "Work", "reviewIntervalDays": 14}
        )
        sdk.set_review_interval("pJ9", 14)
        assert "set review interval of theProject to 1209600" in script_of(mock_osascript)

    def test_set_interval_must_be_positive(self, mock_osascript):
        output = sdk.set_review_interval("pJ9", 0)
        assert output.error.message == "Review interval must be a positive integer"
        mock_osascript.assert_not_called()


# ============================================================================
# Tags
# ============================================================================


class TestTags:
    """Tests for tag operations."""

    def test_query_children(self, mock_osascript):
        tag = {"id": "t1", "name": "Calls", "parentId": "t0", "parentName": "Contexts", "availableTaskCount": 2}
        mock_osascript.return_value = osascript_output(paginated([tag]))
        output = sdk.query_tags(parent="Contexts")

        assert isinstance(output.data.items[0], TagModel)
        assert 'name of parentObj is not "Contexts"' in script_of(mock_osascript)

    def test_create_nested_by_name(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"id": "t1", "name": "Calls"})
        sdk.create_tag("Calls", parent_tag_name="Contexts")
        script = script_of(mock_osascript)
        assert 'set parentTag to first flattened tag whose name is "Contexts"' in script
        assert 'make new tag at end of tags of parentTag with properties {name:"Calls"}' in script

    def test_update_own_parent(self, mock_osascript):
        output = sdk.update_tag("t1", parent_tag_id="t1")
        assert output.error.message == "A tag cannot be its own parent"
        mock_osascript.assert_not_called()

    def test_rename(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"id": "t1", "name": "Phone"})
        output = sdk.update_tag("t1", name="Phone")
        assert output.data.name == "Phone"
        assert 'set name of theTag to "Phone"' in script_of(mock_osascript)

    def test_delete_not_found(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"error": "not found", "tagId": "t1"})
        output = sdk.delete_tag("t1")
        assert output.error.code == ErrorCode.TAG_NOT_FOUND
        assert output.error.message == "Tag not found: t1"

    def test_delete(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"tagId": "t1", "deleted": True})
        assert sdk.delete_tag("t1").data.tag_id == "t1"


# ============================================================================
# Folders
# ============================================================================


class TestFolders:
    """Tests for folder operations."""

    def test_query(self, mock_osascript):
        folder = {"id": "fA1", "name": "Areas", "projectCount": 3, "folderCount": 1}
        mock_osascript.return_value = osascript_output(paginated([folder]))
        output = sdk.query_folders()
        assert isinstance(output.data.items[0], FolderModel)
        assert output.data.items[0].project_count == 3

    def test_create_inside_parent(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"id": "fB2", "name": "Home"})
        sdk.create_folder("Home", parent_folder_id="fA1")
        script = script_of(mock_osascript)
        assert 'set parentFolder to first flattened folder whose id is "fA1"' in script
        assert "make new folder at end of folders of parentFolder" in script

    def test_update(self, mock_osascript):
        mock_osascript.return_value = osascript_output({"id": "fB2", "name": "House"})
        sdk.update_folder("fB2", name="House", parent_folder_name="Areas")
        script = script_of(mock_osascript)
        assert 'set name of theFolder to "House"' in script
        assert "move theFolder to end of folders of parentFolder" in script

    def test_update_own_parent(self, mock_osascript):
        output = sdk.update_folder("fB2", parent_folder_id="fB2")
        assert output.error.message == "A folder cannot be its own parent"

    def test_delete_missing(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            "", returncode=1, stderr="Can't get first flattened folder whose id is \"fZ\". (-1728)"
        )
        output = sdk.delete_folder("fZ")
        assert output.error.code == ErrorCode.FOLDER_NOT_FOUND


# ============================================================================
# Perspectives
# ============================================================================


class TestPerspectives:
    """Tests for perspective operations."""

    def test_list_falls_back_to_name_for_id(self, mock_osascript):
        mock_osascript.return_value = osascript_output([])
        sdk.list_perspectives()
        assert "if perspId is missing value then set perspId to name of p" in script_of(mock_osascript)

    def test_list_custom_flag(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            [{"id": "Forecast", "name": "Forecast"}, {"id": "pv1", "name": "Weekly Review"}]
        )
        output = sdk.list_perspectives()
        assert all(isinstance(p, PerspectiveModel) for p in output.data)
        assert [p.custom for p in output.data] == [False, True]

    def test_query_flagged(self, mock_osascript, sample_tasks):
        mock_osascript.return_value = osascript_output(sample_tasks)
        output = sdk.query_perspective("Flagged", limit=10)
        assert len(output.data) == 2
        script = script_of(mock_osascript)
        assert "set thePerspective to perspective \"Flagged\"" in script
        assert "flattened tasks where flagged is true and completed is false" in script
        assert "if matchCount >= 10 then exit repeat" in script

    def test_query_custom_falls_back(self, mock_osascript):
        mock_osascript.return_value = osascript_output([])
        sdk.query_perspective("Weekly Review")
        assert "repeat with t in (flattened tasks where completed is false)" in script_of(mock_osascript)

    def test_query_missing(self, mock_osascript):
        mock_osascript.return_value = osascript_output(
            "", returncode=1, stderr="execution error: Perspective not found: Nope (-2700)"
        )
        output = sdk.query_perspective("Nope")
        assert output.error.code == ErrorCode.PERSPECTIVE_NOT_FOUND

    def test_query_bad_name(self, mock_osascript):
        output = sdk.query_perspective('a"b')
        assert output.error.code == ErrorCode.VALIDATION_ERROR
        mock_osascript.assert_not_called()
