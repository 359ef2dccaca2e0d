"""Tests for the read-side command listing."""

import pytest

from guild_dashboard.core.exceptions import CommandNotFound, MissingGuildIdentifier
from guild_dashboard.services.command_query import CommandQueryService


@pytest.fixture
def query(store) -> CommandQueryService:
    return CommandQueryService(store)


class TestListCommands:
    """Tests for list ordering and empty results."""

    async def test_unknown_guild_returns_empty_list(self, query):
        assert await query.list_commands("no-such-guild") == []

    async def test_blank_guild_is_rejected(self, query):
        with pytest.raises(MissingGuildIdentifier):
            await query.list_commands("")

    async def test_orders_by_category_then_name_with_missing_last(self, query, seed_command):
        await seed_command("g1", "warn", category="moderation")
        await seed_command("g1", "ban", category="moderation")
        await seed_command("g1", "help")
        await seed_command("g1", "about", category="")
        await seed_command("g1", "reload", category="Admin")
        await seed_command("g1", "Zap", category="fun")
        await seed_command("g1", "avatar", category="fun")

        names = [c.command_name for c in await query.list_commands("g1")]

        # Byte order: uppercase sorts before lowercase
        assert names == ["reload", "Zap", "avatar", "ban", "warn", "about", "help"]

    async def test_only_lists_requested_guild(self, query, seed_command):
        await seed_command("g1", "ping")
        await seed_command("g2", "ban")

        assert [c.command_name for c in await query.list_commands("g1")] == ["ping"]


class TestGetCommand:
    """Tests for single command lookup."""

    async def test_get_existing(self, query, seed_command):
        await seed_command("g1", "ping", usage_count=3)

        command = await query.get_command("g1", "ping")
        assert command.usage_count == 3

    async def test_get_is_case_sensitive(self, query, seed_command):
        await seed_command("g1", "ping")

        with pytest.raises(CommandNotFound) as exc_info:
            await query.get_command("g1", "Ping")
        assert exc_info.value.status_code == 404
