"""Pytest configuration and fixtures for ofocus-mcp tests."""

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from ofocus_mcp.config import get_settings
from ofocus_mcp.utils.assets import clear_script_cache


def osascript_output(data, returncode=0, stderr=""):
    """Build a fake CompletedProcess for osascript printing ``data``."""
    stdout = data if isinstance(data, str) else json.dumps(data)
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


def script_of(mock_run, call_index=-1):
    """Return the AppleScript source passed to osascript in a recorded call."""
    cmd = mock_run.call_args_list[call_index][0][0]
    assert cmd[1] == "-e"
    return cmd[2]


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from OFOCUS_* variables in the developer's environment."""
    for name in ("APP_NAME", "OSASCRIPT", "TIMEOUT", "MAX_BATCH_SIZE", "LOG_LEVEL"):
        monkeypatch.delenv(f"OFOCUS_{name}", raising=False)
    get_settings.cache_clear()
    clear_script_cache()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_subprocess_success():
    """Mock subprocess.run to return an empty successful result."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value = osascript_output("")
        yield mock_run


@pytest.fixture
def mock_osascript():
    """Mock subprocess.run; tests set ``return_value`` with ``osascript_output``."""
    with patch("subprocess.run") as mock_run:
        yield mock_run


@pytest.fixture
def mock_subprocess_error():
    """Mock subprocess.run to simulate an AppleScript runtime error."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value = MagicMock(
            returncode=1,
            stdout="",
            stderr="execution error: OmniFocus got an error: Can't get first flattened task whose id is \"zzz\". (-1728)",
        )
        yield mock_run


@pytest.fixture
def mock_subprocess_timeout():
    """Mock subprocess.run to simulate a timeout."""
    with patch("subprocess.run") as mock_run:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="osascript", timeout=30)
        yield mock_run


@pytest.fixture
def sample_task():
    """A serialized task as the AppleScript serializer prints it."""
    return {
        "id": "kXf2abc",
        "name": "Call Bob",
        "note": "About the invoice",
        "flagged": True,
        "completed": False,
        "dueDate": "Tuesday, December 31, 2024 at 5:00:00 PM",
        "deferDate": None,
        "completionDate": None,
        "projectId": "pJ9",
        "projectName": "Work",
        "tags": ["phone", "urgent"],
        "estimatedMinutes": 15,
    }


@pytest.fixture
def sample_tasks(sample_task):
    second = {
        "id": "mN3def",
        "name": "Buy milk",
        "note": None,
        "flagged": False,
        "completed": False,
        "dueDate": None,
        "deferDate": None,
        "completionDate": None,
        "projectId": None,
        "projectName": None,
        "tags": [],
        "estimatedMinutes": None,
    }
    return [sample_task, second]


@pytest.fixture
def sample_project():
    return {
        "id": "pJ9",
        "name": "Work",
        "note": "",
        "status": "active",
        "sequential": False,
        "folderId": "fA1",
        "folderName": "Areas",
        "taskCount": 4,
        "remainingTaskCount": 3,
    }


def paginated(items, total=None, offset=0, limit=100):
    """Envelope printed by paginated query scripts."""
    total = len(items) if total is None else total
    return {
        "items": items,
        "totalCount": total,
        "returnedCount": len(items),
        "hasMore": total > offset + len(items),
        "offset": offset,
        "limit": limit,
    }
