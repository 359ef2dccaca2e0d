"""Tests for snapshot reconciliation into upsert instructions."""

from datetime import datetime, timezone

import pytest

from guild_dashboard.core.config import EnablePolicy
from guild_dashboard.core.exceptions import InvalidPayloadKind, MissingGuildIdentifier
from guild_dashboard.schemas.commands import SnapshotEntry
from guild_dashboard.services.reconciler import reconcile

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def entries(*items: dict) -> list[SnapshotEntry]:
    return [SnapshotEntry.model_validate(item) for item in items]


class TestGuildIdentifier:
    """Tests for guild id checks."""

    @pytest.mark.parametrize("guild_id", [None, "", "   "])
    def test_missing_guild_id(self, guild_id):
        with pytest.raises(MissingGuildIdentifier):
            reconcile(guild_id, entries({"name": "ping"}), now=NOW)

    def test_over_long_guild_id(self):
        with pytest.raises(InvalidPayloadKind):
            reconcile("1" * 33, entries({"name": "ping"}), now=NOW)

    def test_guild_id_at_column_width(self):
        [instruction] = reconcile("1" * 32, entries({"name": "ping"}), now=NOW)
        assert instruction.guild_id == "1" * 32


class TestFieldPolicy:
    """Tests for per-field merge rules."""

    def test_defaults_for_new_command(self):
        [instruction] = reconcile("g1", entries({"name": "ping"}), now=NOW)
        assert instruction.guild_id == "g1"
        assert instruction.command_name == "ping"
        assert instruction.is_enabled is True
        assert instruction.usage_count == 0
        assert instruction.category is None
        assert instruction.updated_at == NOW

    def test_explicit_values_are_used(self):
        [instruction] = reconcile(
            "g1",
            entries({"name": "ban", "enabled": False, "usageCount": 12, "category": "moderation"}),
            now=NOW,
        )
        assert instruction.is_enabled is False
        assert instruction.overwrite_enabled is True
        assert instruction.usage_count == 12
        assert instruction.category == "moderation"

    def test_negative_usage_count_is_ignored(self):
        [instruction] = reconcile("g1", entries({"name": "ping", "usageCount": -3}), now=NOW)
        assert instruction.usage_count == 0

    def test_timestamp_defaults_to_now_utc(self):
        [instruction] = reconcile("g1", entries({"name": "ping"}))
        assert instruction.updated_at.tzinfo is not None


class TestEnablePolicy:
    """Documents how entries without ``enabled`` are written under each policy."""

    def test_preserve_does_not_overwrite_stored_state(self):
        [instruction] = reconcile(
            "g1", entries({"name": "ping"}), enable_policy=EnablePolicy.PRESERVE, now=NOW
        )
        assert instruction.is_enabled is True
        assert instruction.overwrite_enabled is False

    def test_reset_overwrites_stored_state(self):
        [instruction] = reconcile(
            "g1", entries({"name": "ping"}), enable_policy=EnablePolicy.RESET, now=NOW
        )
        assert instruction.is_enabled is True
        assert instruction.overwrite_enabled is True

    def test_explicit_enabled_always_overwrites(self):
        [instruction] = reconcile(
            "g1",
            entries({"name": "ping", "enabled": True}),
            enable_policy=EnablePolicy.PRESERVE,
            now=NOW,
        )
        assert instruction.overwrite_enabled is True


class TestDuplicates:
    """Tests for repeated names within one snapshot."""

    def test_one_instruction_per_name_in_first_seen_order(self):
        batch = reconcile(
            "g1",
            entries({"name": "ping"}, {"name": "ban"}, {"name": "ping"}, {"name": "kick"}),
            now=NOW,
        )
        assert [i.command_name for i in batch] == ["ping", "ban", "kick"]

    def test_repeated_counter_keeps_highest(self):
        [instruction] = reconcile(
            "g1",
            entries({"name": "ping", "usageCount": 5}, {"name": "ping", "usageCount": 2}),
            now=NOW,
        )
        assert instruction.usage_count == 5

    def test_other_repeated_fields_take_last_value(self):
        [instruction] = reconcile(
            "g1",
            entries(
                {"name": "ping", "enabled": True, "usageCount": 9, "category": "fun"},
                {"name": "ping", "enabled": False, "usageCount": 3, "category": "utility"},
            ),
            now=NOW,
        )
        assert instruction.is_enabled is False
        assert instruction.category == "utility"
        assert instruction.usage_count == 9

    def test_fields_not_set_later_are_kept(self):
        [instruction] = reconcile(
            "g1",
            entries(
                {"name": "ping", "enabled": False, "usageCount": 1, "category": "utility"},
                {"name": "ping", "usageCount": 4},
            ),
            now=NOW,
        )
        assert instruction.is_enabled is False
        assert instruction.overwrite_enabled is True
        assert instruction.usage_count == 4
        assert instruction.category == "utility"

    def test_names_are_case_sensitive(self):
        batch = reconcile("g1", entries({"name": "ping"}, {"name": "Ping"}), now=NOW)
        assert [i.command_name for i in batch] == ["ping", "Ping"]

    def test_empty_snapshot(self):
        assert reconcile("g1", [], now=NOW) == []
