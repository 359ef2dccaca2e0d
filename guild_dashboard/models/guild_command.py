"""Per-guild command state model."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from guild_dashboard.core.database import Base

GUILD_ID_MAX_LENGTH = 32


class GuildCommand(Base):
    """Enabled state and usage history of one bot command in one guild."""

    __tablename__ = "guild_commands"
    __table_args__ = (
        UniqueConstraint("guild_id", "command_name", name="uq_guild_commands_guild_cmd"),
        CheckConstraint("usage_count >= 0", name="usage_count_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    guild_id: Mapped[str] = mapped_column(String(GUILD_ID_MAX_LENGTH), index=True)
    command_name: Mapped[str] = mapped_column(String(100))

    # Administrator override
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=True)

    # Never lowered by a sync, only by an explicit reset
    usage_count: Mapped[int] = mapped_column(Integer, default=0)
    last_used_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Display metadata reported by the bot
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self) -> str:
        return (
            f"<GuildCommand(guild={self.guild_id}, cmd='{self.command_name}', "
            f"enabled={self.is_enabled}, usage={self.usage_count})>"
        )
