"""Create guild_configs and registrations tables

Revision ID: 5c1e7a9d3b20
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e7a9d3b20"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the per-guild config table and the registration log."""
    op.create_table(
        "guild_configs",
        sa.Column("guild_id", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column("registration_channel", sa.BigInteger(), nullable=False),
        sa.Column("manual_channel", sa.BigInteger(), nullable=False),
        sa.Column("admin_channel", sa.BigInteger(), nullable=False),
        sa.Column("admin_role", sa.BigInteger(), nullable=False),
        sa.Column("advanced_role", sa.BigInteger(), nullable=False),
    )

    op.create_table(
        "registrations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("age", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_registrations_guild", "registrations", ["guild_id"])


def downgrade() -> None:
    """Drop both tables."""
    op.drop_index("ix_registrations_guild", table_name="registrations")
    op.drop_table("registrations")
    op.drop_table("guild_configs")
