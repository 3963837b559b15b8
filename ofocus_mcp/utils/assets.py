"""Loading of the bundled AppleScript handler library."""

from functools import lru_cache
from importlib.resources import files
from pathlib import PurePosixPath

JSON_HELPERS = "helpers/json.applescript"
TEXT_HELPERS = "helpers/text.applescript"
TASK_SERIALIZER = "serializers/task.applescript"
TASK_WITH_CHILDREN_SERIALIZER = "serializers/task-with-children.applescript"
PROJECT_SERIALIZER = "serializers/project.applescript"
TAG_SERIALIZER = "serializers/tag.applescript"
FOLDER_SERIALIZER = "serializers/folder.applescript"


def _scripts_dir():
    return files("ofocus_mcp").joinpath("scripts")


def get_script_path(relative_path: str):
    """
    Resolve a path relative to the bundled scripts directory.

    Raises:
        ValueError: If the path is absolute or climbs out of the scripts directory
    """
    parts = PurePosixPath(relative_path).parts
    if not parts or PurePosixPath(relative_path).is_absolute() or ".." in parts:
        raise ValueError(f"Invalid script path: {relative_path}")
    return _scripts_dir().joinpath(*parts)


@lru_cache(maxsize=None)
def load_script(relative_path: str) -> str:
    """Read a bundled script; subsequent calls for the same path are served from memory."""
    return get_script_path(relative_path).read_text(encoding="utf-8")


def load_scripts(*relative_paths: str) -> list[str]:
    """Load several handler files in order."""
    return [load_script(p) for p in relative_paths]


def clear_script_cache() -> None:
    """Forget every cached script (useful in tests)."""
    load_script.cache_clear()
