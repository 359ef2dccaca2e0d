"""Create guild_commands table.

Revision ID: 001_guild_commands
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_guild_commands"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "guild_commands",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("guild_id", sa.String(length=32), nullable=False),
        sa.Column("command_name", sa.String(length=100), nullable=False),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_guild_commands")),
        sa.UniqueConstraint("guild_id", "command_name", name="uq_guild_commands_guild_cmd"),
        sa.CheckConstraint("usage_count >= 0", name=op.f("ck_guild_commands_usage_count_non_negative")),
    )
    op.create_index(op.f("ix_guild_commands_guild_id"), "guild_commands", ["guild_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_guild_commands_guild_id"), table_name="guild_commands")
    op.drop_table("guild_commands")
