"""Synchronize a bot-reported command snapshot into the command store."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

from guild_dashboard.core.config import EnablePolicy
from guild_dashboard.core.logging import get_logger
from guild_dashboard.services.command_store import CommandStore
from guild_dashboard.services.reconciler import reconcile, require_guild_id
from guild_dashboard.services.snapshot import validate_snapshot

logger = get_logger(__name__)


@dataclass(frozen=True)
class SyncResult:
    """Summary of one synchronization."""

    records_affected: int
    command_names: list[str] = field(default_factory=list)


class CommandSyncService:
    """Validates, reconciles and persists command snapshots for one request.

    Concurrent syncs for the same guild are not serialized here. Each record
    upsert is atomic at the store, so two overlapping syncs interleave per
    record, never within one. A failed sync is not retried.
    """

    def __init__(
        self,
        store: CommandStore,
        enable_policy: EnablePolicy = EnablePolicy.PRESERVE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.enable_policy = enable_policy
        self.clock = clock

    async def synchronize(self, guild_id: Optional[str], raw_payload: Any) -> SyncResult:
        """Merge a snapshot into the stored state of a guild.

        Args:
            guild_id: Guild the snapshot was reported for
            raw_payload: Decoded request body, expected ``{"commands": [...]}``

        Returns:
            SyncResult with the number of distinct commands written

        Raises:
            MissingGuildIdentifier: If the guild id is blank; nothing is written
            InvalidPayloadKind: If the payload is malformed; nothing is written
            StorePersistenceFailure: If the store rejects the batch; nothing is applied
        """
        guild_id = require_guild_id(guild_id)
        entries = validate_snapshot(raw_payload)
        batch = reconcile(
            guild_id,
            entries,
            enable_policy=self.enable_policy,
            now=self.clock() if self.clock else None,
        )

        await self.store.upsert_batch(batch)

        names = [instruction.command_name for instruction in batch]
        logger.info(
            "Commands synchronized",
            guild_id=guild_id,
            received=len(entries),
            synced=len(batch),
            enable_policy=self.enable_policy.value,
        )
        return SyncResult(records_affected=len(batch), command_names=names)
