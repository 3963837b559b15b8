"""Settings for OFocus MCP, loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

ENV_PREFIX = "OFOCUS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Host application ----
    app_name: str
    osascript_path: str
    timeout: int

    # ---- Batching ----
    max_batch_size: int

    # ---- Logging ----
    log_level: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "OmniFocus"),
            osascript_path=_env(_k("OSASCRIPT"), "osascript"),
            timeout=_env_int(_k("TIMEOUT"), 30),
            max_batch_size=_env_int(_k("MAX_BATCH_SIZE"), 50),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings (call ``get_settings.cache_clear()`` to reload)."""
    return Settings.from_env()
