"""Minimal Discord REST client for user lookups."""

from typing import Any, Optional

import httpx

from guild_dashboard.core.config import Settings
from guild_dashboard.core.exceptions import ConfigurationError, UpstreamAPIFailure
from guild_dashboard.core.logging import get_logger

logger = get_logger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v10"


class DiscordClient:
    """Authenticates as the bot and passes upstream errors through unchanged."""

    def __init__(
        self,
        bot_token: str,
        base_url: str = DISCORD_API_BASE,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Discord client.

        Args:
            bot_token: Discord bot token, may be empty until a call is made
            base_url: Discord REST API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.bot_token = bot_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "DiscordClient":
        return cls(
            bot_token=settings.discord_bot_token,
            base_url=settings.discord_api_base,
            timeout=settings.discord_timeout_seconds,
        )

    def _headers(self) -> dict[str, str]:
        if not self.bot_token:
            raise ConfigurationError("Discord bot token not configured (DISCORD_BOT_TOKEN)")
        return {
            "Authorization": f"Bot {self.bot_token}",
            "Content-Type": "application/json",
        }

    async def fetch_user(self, user_id: str) -> dict[str, Any]:
        """Fetch a Discord user by id.

        Raises:
            ConfigurationError: If no bot token is configured
            UpstreamAPIFailure: If Discord answers with an error or is unreachable
        """
        headers = self._headers()
        url = f"{self.base_url}/users/{user_id}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Discord API connection error", url=url, error=str(e))
            raise UpstreamAPIFailure(503, f"Discord API unreachable: {e}") from e

        if response.is_error:
            logger.error(
                "Discord API error",
                user_id=user_id,
                status=response.status_code,
                body=response.text,
            )
            raise UpstreamAPIFailure(response.status_code, "Failed to fetch user from Discord")

        return response.json()
