"""Sync state and manual synchronization."""

from ofocus_mcp.models.results import CliOutput, SyncResult, SyncStatus
from ofocus_mcp.sdk.common import JSON_ONLY, execute
from ofocus_mcp.utils.escape import json_object_expr


def get_sync_status() -> CliOutput:
    """
    Report whether a sync is running.

    AppleScript exposes only the ``synchronizing`` flag, so ``lastSync`` and
    ``accountName`` are always null and ``syncEnabled`` is always false.
    """
    result = json_object_expr(
        [
            ("syncing", "(isSyncing as string)"),
            ("lastSync", '"null"'),
            ("accountName", '"null"'),
            ("syncEnabled", '"false"'),
        ]
    )
    body = f"""set isSyncing to false
try
	set isSyncing to synchronizing
end try
return {result}
"""
    return execute(JSON_ONLY, body, "Failed to get sync status", SyncStatus)


def trigger_sync() -> CliOutput:
    """Start a synchronization; returns as soon as it has been requested."""
    result = json_object_expr([("triggered", '"true"'), ("message", '"\\"Synchronization started\\""')])
    body = f"synchronize\nreturn {result}\n"
    return execute(JSON_ONLY, body, "Failed to trigger sync", SyncResult)
