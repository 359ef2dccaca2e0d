"""Read access to guild command lists for the dashboard."""

from collections.abc import Iterable, Sequence
from typing import Optional

from guild_dashboard.core.exceptions import CommandNotFound
from guild_dashboard.models.guild_command import GuildCommand
from guild_dashboard.services.command_store import CommandStore
from guild_dashboard.services.reconciler import require_guild_id


def display_order(command: GuildCommand) -> tuple:
    """Sort key: category ascending with missing categories last, then name.

    Python string comparison is by code point, which gives the same order as
    comparing UTF-8 bytes and does not depend on the database collation.
    """
    category = command.category or ""
    return (category == "", category, command.command_name)


def sort_for_display(commands: Iterable[GuildCommand]) -> list[GuildCommand]:
    return sorted(commands, key=display_order)


class CommandQueryService:
    """Read-only view over the command store."""

    def __init__(self, store: CommandStore):
        self.store = store

    async def list_commands(
        self, guild_id: Optional[str], command_names: Optional[Sequence[str]] = None
    ) -> list[GuildCommand]:
        """Return a guild's commands in display order.

        An unknown guild yields an empty list.
        """
        guild_id = require_guild_id(guild_id)
        return sort_for_display(await self.store.fetch(guild_id, command_names))

    async def get_command(self, guild_id: Optional[str], command_name: str) -> GuildCommand:
        guild_id = require_guild_id(guild_id)
        command = await self.store.get(guild_id, command_name)
        if command is None:
            raise CommandNotFound(guild_id, command_name)
        return command
