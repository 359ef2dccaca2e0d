"""API Routes Package."""

from fastapi import APIRouter
from .commands import router as commands_router
from .discord import router as discord_router

api_router = APIRouter()

api_router.include_router(commands_router, prefix="/guilds", tags=["Guild Commands"])
api_router.include_router(discord_router, prefix="/discord", tags=["Discord"])

__all__ = ["api_router"]
