"""Guild command API routes (sync, listing, administrator edits)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from guild_dashboard.core.dependencies import (
    get_admin_service,
    get_query_service,
    get_sync_service,
)
from guild_dashboard.core.exceptions import InvalidPayloadKind, MissingGuildIdentifier
from guild_dashboard.core.rate_limiter import limit_api, limit_bot
from guild_dashboard.schemas.commands import (
    CommandListResponse,
    CommandSyncResponse,
    GuildCommandResponse,
    GuildCommandUpdate,
)
from guild_dashboard.services.command_admin import CommandAdminService
from guild_dashboard.services.command_query import CommandQueryService
from guild_dashboard.services.command_sync import CommandSyncService

router = APIRouter()


# =====================================================================
# Empty guild segment
# =====================================================================

# "/guilds//commands" never matches "/{guild_id}/commands"
@router.get("//commands", include_in_schema=False)
@router.post("//commands/sync", include_in_schema=False)
async def reject_missing_guild(request: Request) -> None:
    raise MissingGuildIdentifier()


# =====================================================================
# Listing
# =====================================================================

@router.get("/{guild_id}/commands")
@limit_api()
async def list_guild_commands(
    guild_id: str,
    request: Request,
    query: Annotated[CommandQueryService, Depends(get_query_service)],
) -> CommandListResponse:
    """List a guild's commands ordered by category, then name."""
    commands = await query.list_commands(guild_id)
    return CommandListResponse(
        guild_id=guild_id,
        commands=[GuildCommandResponse.model_validate(c) for c in commands],
        total=len(commands),
    )


@router.get("/{guild_id}/commands/{command_name}")
@limit_api()
async def get_guild_command(
    guild_id: str,
    command_name: str,
    request: Request,
    query: Annotated[CommandQueryService, Depends(get_query_service)],
) -> GuildCommandResponse:
    """Get one command of a guild."""
    command = await query.get_command(guild_id, command_name)
    return GuildCommandResponse.model_validate(command)


# =====================================================================
# Bot sync
# =====================================================================

@router.post("/{guild_id}/commands/sync")
@limit_bot()
async def sync_guild_commands(
    guild_id: str,
    request: Request,
    sync: Annotated[CommandSyncService, Depends(get_sync_service)],
    query: Annotated[CommandQueryService, Depends(get_query_service)],
) -> CommandSyncResponse:
    """Merge the bot's current command list into the guild's stored state.

    Commands missing from the list are left untouched.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidPayloadKind("Request body must be valid JSON")

    result = await sync.synchronize(guild_id, payload)
    commands = await query.list_commands(guild_id, result.command_names) if result.command_names else []

    return CommandSyncResponse(
        success=True,
        synced=result.records_affected,
        commands=[GuildCommandResponse.model_validate(c) for c in commands],
    )


@router.post("/{guild_id}/commands/{command_name}/usage")
@limit_bot()
async def record_command_usage(
    guild_id: str,
    command_name: str,
    request: Request,
    admin: Annotated[CommandAdminService, Depends(get_admin_service)],
) -> GuildCommandResponse:
    """Count one invocation of a command."""
    command = await admin.record_usage(guild_id, command_name)
    return GuildCommandResponse.model_validate(command)


# =====================================================================
# Administrator edits
# =====================================================================

@router.put("/{guild_id}/commands/{command_name}")
@limit_api("10/minute")
async def update_guild_command(
    guild_id: str,
    command_name: str,
    request: Request,
    update_data: GuildCommandUpdate,
    admin: Annotated[CommandAdminService, Depends(get_admin_service)],
) -> dict:
    """Enable/disable a command or reset its usage counter."""
    command = await admin.update_command(
        guild_id,
        command_name,
        is_enabled=update_data.is_enabled,
        reset_usage=update_data.reset_usage,
    )
    return {
        "success": True,
        "command": GuildCommandResponse.model_validate(command).model_dump(mode="json"),
    }


@router.delete("/{guild_id}/commands/{command_name}")
@limit_api("10/minute")
async def delete_guild_command(
    guild_id: str,
    command_name: str,
    request: Request,
    admin: Annotated[CommandAdminService, Depends(get_admin_service)],
) -> dict:
    """Remove a stale command record and its usage history."""
    await admin.remove_command(guild_id, command_name)
    return {"success": True, "deleted": command_name}
