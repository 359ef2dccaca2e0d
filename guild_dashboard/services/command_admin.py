"""Explicit administrator edits and usage events for single commands."""

from datetime import datetime, timezone
from typing import Optional

from guild_dashboard.core.exceptions import CommandNotFound
from guild_dashboard.core.logging import get_logger
from guild_dashboard.models.guild_command import GuildCommand
from guild_dashboard.services.command_store import CommandStore
from guild_dashboard.services.reconciler import require_guild_id

logger = get_logger(__name__)


class CommandAdminService:
    """Mutations that bypass snapshot reconciliation.

    These are the only paths that may lower a usage counter or remove a record.
    """

    def __init__(self, store: CommandStore):
        self.store = store

    async def update_command(
        self,
        guild_id: Optional[str],
        command_name: str,
        is_enabled: Optional[bool] = None,
        reset_usage: bool = False,
    ) -> GuildCommand:
        """Toggle a command and/or reset its counter, creating it if needed."""
        guild_id = require_guild_id(guild_id)
        now = datetime.now(timezone.utc)

        command = await self.store.get(guild_id, command_name)
        if command is None:
            command = GuildCommand(
                guild_id=guild_id,
                command_name=command_name,
                is_enabled=True,
                usage_count=0,
            )

        if is_enabled is not None:
            command.is_enabled = is_enabled
        if reset_usage:
            command.usage_count = 0
        command.updated_at = now

        command = await self.store.save(command)
        logger.info(
            "Command updated",
            guild_id=guild_id,
            command=command_name,
            is_enabled=command.is_enabled,
            reset_usage=reset_usage,
        )
        return command

    async def remove_command(self, guild_id: Optional[str], command_name: str) -> None:
        guild_id = require_guild_id(guild_id)
        if not await self.store.delete(guild_id, command_name):
            raise CommandNotFound(guild_id, command_name)
        logger.info("Command removed", guild_id=guild_id, command=command_name)

    async def record_usage(self, guild_id: Optional[str], command_name: str) -> GuildCommand:
        """Count one invocation of a command."""
        guild_id = require_guild_id(guild_id)
        if not await self.store.increment_usage(guild_id, command_name):
            raise CommandNotFound(guild_id, command_name)
        command = await self.store.get(guild_id, command_name)
        if command is None:
            raise CommandNotFound(guild_id, command_name)
        return command
