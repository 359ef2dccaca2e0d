"""Domain errors surfaced to API callers."""

from typing import Optional


class DashboardError(Exception):
    """Base class for errors with a machine-readable kind and an HTTP status."""

    kind: str = "DashboardError"
    status_code: int = 500

    def __init__(self, detail: str, status_code: Optional[int] = None):
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(f"{self.kind}: {detail}")

    def to_dict(self) -> dict[str, str]:
        return {"error": self.kind, "detail": self.detail}


class InvalidPayloadKind(DashboardError):
    """The request payload does not have the expected shape."""

    kind = "InvalidPayloadKind"
    status_code = 400


class MissingGuildIdentifier(DashboardError):
    """The guild identifier is absent or blank."""

    kind = "MissingGuildIdentifier"
    status_code = 400

    def __init__(self, detail: str = "Guild ID is required"):
        super().__init__(detail)


class CommandNotFound(DashboardError):
    """No record exists for the (guild, command) pair."""

    kind = "CommandNotFound"
    status_code = 404

    def __init__(self, guild_id: str, command_name: str):
        self.guild_id = guild_id
        self.command_name = command_name
        super().__init__(f"Command '{command_name}' not found in guild {guild_id}")


class StorePersistenceFailure(DashboardError):
    """The command store rejected a write or read; nothing was applied."""

    kind = "StorePersistenceFailure"
    status_code = 500

    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(detail)


class UpstreamAPIFailure(DashboardError):
    """An upstream HTTP API answered with an error status."""

    kind = "UpstreamAPIFailure"

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail, status_code=status_code)


class ConfigurationError(DashboardError):
    """Required configuration is missing. Not retryable."""

    kind = "ConfigurationError"
    status_code = 500
