"""Merge a command snapshot into per-guild upsert instructions."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional

from guild_dashboard.core.config import EnablePolicy
from guild_dashboard.core.exceptions import InvalidPayloadKind, MissingGuildIdentifier
from guild_dashboard.core.logging import get_logger
from guild_dashboard.models.guild_command import GUILD_ID_MAX_LENGTH
from guild_dashboard.schemas.commands import SnapshotEntry

logger = get_logger(__name__)


@dataclass(frozen=True)
class UpsertInstruction:
    """Values to write for one (guild, command) pair.

    ``usage_count`` is merged with the stored counter by taking the greater
    value, never written blindly. ``category`` and ``description`` of ``None``
    leave the stored value in place. ``is_enabled`` only replaces a stored
    value when ``overwrite_enabled`` is set; new records always receive it.
    """

    guild_id: str
    command_name: str
    is_enabled: bool
    overwrite_enabled: bool
    usage_count: int
    category: Optional[str]
    description: Optional[str]
    updated_at: datetime

    def as_row(self) -> dict:
        return {
            "guild_id": self.guild_id,
            "command_name": self.command_name,
            "is_enabled": self.is_enabled,
            "usage_count": self.usage_count,
            "category": self.category,
            "description": self.description,
            "updated_at": self.updated_at,
        }


def require_guild_id(guild_id: Optional[str]) -> str:
    """Return the guild id, rejecting absent, blank or over-long values."""
    if guild_id is None or not str(guild_id).strip():
        raise MissingGuildIdentifier()
    guild_id = str(guild_id)
    if len(guild_id) > GUILD_ID_MAX_LENGTH:
        raise InvalidPayloadKind(f"Guild ID must be at most {GUILD_ID_MAX_LENGTH} characters")
    return guild_id


def reconcile(
    guild_id: Optional[str],
    entries: Iterable[SnapshotEntry],
    *,
    enable_policy: EnablePolicy = EnablePolicy.PRESERVE,
    now: Optional[datetime] = None,
) -> list[UpsertInstruction]:
    """Build one upsert instruction per distinct command name.

    Instructions keep the order in which each name first appears. When a name
    repeats, every field the later entry sets explicitly replaces the earlier
    value, except the usage counter, which keeps the highest value supplied.
    Fields a later entry leaves out keep what earlier entries supplied.

    Args:
        guild_id: Guild the snapshot belongs to
        entries: Validated snapshot entries
        enable_policy: Whether entries without ``enabled`` overwrite stored state
        now: Reconciliation timestamp, defaults to the current UTC time

    Returns:
        Upsert instructions, sized to the number of distinct names

    Raises:
        MissingGuildIdentifier: If the guild id is absent or blank
    """
    guild_id = require_guild_id(guild_id)
    timestamp = now or datetime.now(timezone.utc)

    merged: dict[str, dict] = {}
    for entry in entries:
        fields = merged.setdefault(entry.name, {})
        if entry.enabled is not None:
            fields["enabled"] = entry.enabled
        if entry.usage_count is not None:
            if entry.usage_count < 0:
                logger.warning(
                    "Ignoring negative usage count",
                    guild_id=guild_id,
                    command=entry.name,
                    usage_count=entry.usage_count,
                )
            else:
                fields["usage_count"] = max(fields.get("usage_count", 0), entry.usage_count)
        if entry.category is not None:
            fields["category"] = entry.category
        if entry.description is not None:
            fields["description"] = entry.description

    batch = []
    for name, fields in merged.items():
        explicit_enabled = "enabled" in fields
        batch.append(
            UpsertInstruction(
                guild_id=guild_id,
                command_name=name,
                is_enabled=fields.get("enabled", True),
                overwrite_enabled=explicit_enabled or enable_policy == EnablePolicy.RESET,
                usage_count=fields.get("usage_count", 0),
                category=fields.get("category"),
                description=fields.get("description"),
                updated_at=timestamp,
            )
        )
    return batch
