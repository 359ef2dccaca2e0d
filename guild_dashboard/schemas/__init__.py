"""Pydantic Schemas Package."""

from .commands import (
    CommandListResponse,
    CommandSyncResponse,
    GuildCommandResponse,
    GuildCommandUpdate,
    SnapshotEntry,
)

__all__ = [
    "CommandListResponse",
    "CommandSyncResponse",
    "GuildCommandResponse",
    "GuildCommandUpdate",
    "SnapshotEntry",
]
