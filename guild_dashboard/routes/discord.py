"""Discord lookup API routes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from guild_dashboard.core.dependencies import get_discord_client
from guild_dashboard.core.rate_limiter import limit_api
from guild_dashboard.services.discord_client import DiscordClient

router = APIRouter()


@router.get("/users/{user_id}")
@limit_api()
async def get_discord_user(
    user_id: str,
    request: Request,
    discord: Annotated[DiscordClient, Depends(get_discord_client)],
) -> dict[str, Any]:
    """Fetch a Discord user; upstream error statuses are passed through."""
    return await discord.fetch_user(user_id)
