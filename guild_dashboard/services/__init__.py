"""Command synchronization and lookup services."""

from .command_admin import CommandAdminService
from .command_query import CommandQueryService
from .command_store import CommandStore
from .command_sync import CommandSyncService, SyncResult
from .discord_client import DiscordClient
from .reconciler import UpsertInstruction, reconcile
from .snapshot import validate_snapshot

__all__ = [
    "CommandAdminService",
    "CommandQueryService",
    "CommandStore",
    "CommandSyncService",
    "SyncResult",
    "DiscordClient",
    "UpsertInstruction",
    "reconcile",
    "validate_snapshot",
]
