"""Shape validation for bot-reported command snapshots."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from guild_dashboard.core.exceptions import InvalidPayloadKind
from guild_dashboard.schemas.commands import SnapshotEntry


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "entry"
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


def validate_snapshot(payload: Any) -> list[SnapshotEntry]:
    """Validate a sync payload and return its entries in submitted order.

    The payload must be an object whose ``commands`` field is an array. Each
    element is either an object with at least a ``name`` or a bare string,
    which is taken as the name. Optional fields may be missing but must have
    the right type when present.

    Args:
        payload: Decoded request body

    Returns:
        Normalized snapshot entries, duplicates included

    Raises:
        InvalidPayloadKind: If the container or any element has the wrong shape
    """
    if not isinstance(payload, Mapping):
        raise InvalidPayloadKind("Request body must be an object with a 'commands' array")

    commands = payload.get("commands")
    if not isinstance(commands, (list, tuple)):
        raise InvalidPayloadKind("Commands array is required")

    entries: list[SnapshotEntry] = []
    for index, item in enumerate(commands):
        if isinstance(item, str):
            item = {"name": item}
        if not isinstance(item, Mapping):
            raise InvalidPayloadKind(f"commands[{index}] must be an object with a 'name'")
        try:
            entries.append(SnapshotEntry.model_validate(item))
        except ValidationError as exc:
            raise InvalidPayloadKind(f"commands[{index}] {_describe(exc)}") from exc

    return entries
