"""Database Models Package."""

from .guild_command import GUILD_ID_MAX_LENGTH, GuildCommand

__all__ = [
    "GUILD_ID_MAX_LENGTH",
    "GuildCommand",
]
