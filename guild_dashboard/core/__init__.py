"""API Core Package."""

from .config import EnablePolicy, Settings, get_settings, load_settings
from .database import Base, Database, get_db
from .exceptions import (
    CommandNotFound,
    ConfigurationError,
    DashboardError,
    InvalidPayloadKind,
    MissingGuildIdentifier,
    StorePersistenceFailure,
    UpstreamAPIFailure,
)

__all__ = [
    "EnablePolicy",
    "Settings",
    "get_settings",
    "load_settings",
    "Base",
    "Database",
    "get_db",
    "CommandNotFound",
    "ConfigurationError",
    "DashboardError",
    "InvalidPayloadKind",
    "MissingGuildIdentifier",
    "StorePersistenceFailure",
    "UpstreamAPIFailure",
]
