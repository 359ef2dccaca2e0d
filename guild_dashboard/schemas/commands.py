"""Guild command Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, StrictInt, field_validator


class SnapshotEntry(BaseModel):
    """One command as reported by the bot in a sync snapshot."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    enabled: Optional[StrictBool] = None
    usage_count: Optional[StrictInt] = Field(
        default=None,
        validation_alias=AliasChoices("usageCount", "usage_count"),
    )
    category: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        # Kept verbatim: command names are case- and whitespace-sensitive
        if not v.strip():
            raise ValueError("Command name must not be blank")
        return v


class GuildCommandResponse(BaseModel):
    """Schema for a stored guild command."""

    guild_id: str
    command_name: str
    is_enabled: bool
    usage_count: int
    category: Optional[str] = None
    description: Optional[str] = None
    last_used_at: Optional[datetime] = None
    updated_at: datetime

    class Config:
        from_attributes = True


class GuildCommandUpdate(BaseModel):
    """Schema for an administrator edit of one command."""

    is_enabled: Optional[bool] = None
    reset_usage: bool = Field(default=False, description="Set the usage counter back to zero")


class CommandListResponse(BaseModel):
    """Schema for the ordered command list of a guild."""

    guild_id: str
    commands: list[GuildCommandResponse]
    total: int


class CommandSyncResponse(BaseModel):
    """Schema for the outcome of a command sync."""

    success: bool = True
    synced: int
    commands: list[GuildCommandResponse]
