"""Persistence adapter for per-guild command records."""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from guild_dashboard.core.exceptions import StorePersistenceFailure
from guild_dashboard.core.logging import get_logger
from guild_dashboard.models.guild_command import GuildCommand
from guild_dashboard.services.reconciler import UpsertInstruction

logger = get_logger(__name__)

CONFLICT_TARGET = ["guild_id", "command_name"]

# Dialect -> (INSERT constructor with ON CONFLICT support, two-argument max)
_UPSERT_DIALECTS = {
    "postgresql": (pg_insert, func.greatest),
    "sqlite": (sqlite_insert, func.max),
}

_STORE_ERRORS = (SQLAlchemyError, OSError)


class CommandStore:
    """Reads and writes ``guild_commands`` through one async session.

    Each write method runs in its own transaction and either commits
    completely or rolls back and raises ``StorePersistenceFailure``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _dialect(self):
        name = self.session.get_bind().dialect.name
        try:
            return _UPSERT_DIALECTS[name]
        except KeyError:
            raise StorePersistenceFailure(f"Unsupported store dialect: {name}") from None

    async def _fail(self, action: str, exc: BaseException) -> StorePersistenceFailure:
        await self.session.rollback()
        logger.error("Command store operation failed", action=action, error=str(exc))
        return StorePersistenceFailure(f"Failed to {action}: {exc}", cause=exc)

    # ======================================================================
    # WRITES
    # ======================================================================

    async def upsert_batch(self, batch: Sequence[UpsertInstruction]) -> None:
        """Apply a reconciled batch as one atomic conditional upsert.

        Conflicts on (guild_id, command_name) update the existing row: the
        usage counter becomes the greater of stored and incoming, category and
        description are only replaced by non-null values, and ``is_enabled``
        is only replaced for instructions that ask for it.
        """
        if not batch:
            return

        insert, greatest = self._dialect()
        table = GuildCommand.__table__

        overwrite_rows = [i.as_row() for i in batch if i.overwrite_enabled]
        preserve_rows = [i.as_row() for i in batch if not i.overwrite_enabled]

        try:
            for rows, overwrite_enabled in ((overwrite_rows, True), (preserve_rows, False)):
                if not rows:
                    continue
                stmt = insert(table).values(rows)
                excluded = stmt.excluded
                set_ = {
                    "usage_count": greatest(table.c.usage_count, excluded.usage_count),
                    "category": func.coalesce(excluded.category, table.c.category),
                    "description": func.coalesce(excluded.description, table.c.description),
                    "updated_at": excluded.updated_at,
                }
                if overwrite_enabled:
                    set_["is_enabled"] = excluded.is_enabled
                stmt = stmt.on_conflict_do_update(index_elements=CONFLICT_TARGET, set_=set_)
                await self.session.execute(stmt)
            await self.session.commit()
        except _STORE_ERRORS as exc:
            raise await self._fail("sync commands", exc) from exc

    async def save(self, command: GuildCommand) -> GuildCommand:
        """Persist a new or modified record."""
        try:
            self.session.add(command)
            await self.session.commit()
            await self.session.refresh(command)
        except _STORE_ERRORS as exc:
            raise await self._fail("save command", exc) from exc
        return command

    async def delete(self, guild_id: str, command_name: str) -> bool:
        """Delete one record. Returns False when nothing matched."""
        try:
            result = await self.session.execute(
                delete(GuildCommand).where(
                    and_(
                        GuildCommand.guild_id == guild_id,
                        GuildCommand.command_name == command_name,
                    )
                )
            )
            await self.session.commit()
        except _STORE_ERRORS as exc:
            raise await self._fail("delete command", exc) from exc
        return result.rowcount > 0

    async def increment_usage(
        self, guild_id: str, command_name: str, used_at: Optional[datetime] = None
    ) -> bool:
        """Atomically add one to a command's usage counter.

        Returns False when no record matched.
        """
        used_at = used_at or datetime.now(timezone.utc)
        try:
            result = await self.session.execute(
                update(GuildCommand)
                .where(
                    and_(
                        GuildCommand.guild_id == guild_id,
                        GuildCommand.command_name == command_name,
                    )
                )
                .values(
                    usage_count=GuildCommand.usage_count + 1,
                    last_used_at=used_at,
                    updated_at=used_at,
                )
                .execution_options(synchronize_session=False)
            )
            await self.session.commit()
        except _STORE_ERRORS as exc:
            raise await self._fail("record command usage", exc) from exc
        return result.rowcount > 0

    # ======================================================================
    # READS
    # ======================================================================

    async def fetch(
        self, guild_id: str, command_names: Optional[Sequence[str]] = None
    ) -> list[GuildCommand]:
        """Load a guild's records, optionally restricted to some names."""
        query = select(GuildCommand).where(GuildCommand.guild_id == guild_id)
        if command_names is not None:
            query = query.where(GuildCommand.command_name.in_(list(command_names)))
        try:
            result = await self.session.execute(
                query.execution_options(populate_existing=True)
            )
        except _STORE_ERRORS as exc:
            raise await self._fail("fetch commands", exc) from exc
        return list(result.scalars().all())

    async def get(self, guild_id: str, command_name: str) -> Optional[GuildCommand]:
        """Load one record or None."""
        try:
            result = await self.session.execute(
                select(GuildCommand)
                .where(
                    and_(
                        GuildCommand.guild_id == guild_id,
                        GuildCommand.command_name == command_name,
                    )
                )
                .execution_options(populate_existing=True)
            )
        except _STORE_ERRORS as exc:
            raise await self._fail("fetch command", exc) from exc
        return result.scalar_one_or_none()
