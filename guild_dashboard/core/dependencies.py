"""Request-scoped dependencies built from application state."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from guild_dashboard.core.config import Settings
from guild_dashboard.core.database import get_db
from guild_dashboard.services.command_admin import CommandAdminService
from guild_dashboard.services.command_query import CommandQueryService
from guild_dashboard.services.command_store import CommandStore
from guild_dashboard.services.command_sync import CommandSyncService
from guild_dashboard.services.discord_client import DiscordClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_command_store(db: Annotated[AsyncSession, Depends(get_db)]) -> CommandStore:
    return CommandStore(db)


def get_sync_service(
    store: Annotated[CommandStore, Depends(get_command_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CommandSyncService:
    return CommandSyncService(store, enable_policy=settings.command_sync_enable_policy)


def get_query_service(
    store: Annotated[CommandStore, Depends(get_command_store)],
) -> CommandQueryService:
    return CommandQueryService(store)


def get_admin_service(
    store: Annotated[CommandStore, Depends(get_command_store)],
) -> CommandAdminService:
    return CommandAdminService(store)


def get_discord_client(request: Request) -> DiscordClient:
    return request.app.state.discord_client
