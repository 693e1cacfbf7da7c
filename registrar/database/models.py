"""
registrar.database.models — SQLAlchemy 2.0 Data Models
========================================================

Tables:
- guild_configs  — One row per guild: which channels/roles the bot uses
- registrations  — Append-only log of accepted registration forms
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, Integer, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all Registrar ORM models."""


# ---------------------------------------------------------------------------
# GuildConfigRow — per-guild wiring, replaced wholesale by !setconfig
# ---------------------------------------------------------------------------
class GuildConfigRow(Base):
    __tablename__ = "guild_configs"

    guild_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    registration_channel: Mapped[int] = mapped_column(BigInteger, nullable=False)
    manual_channel: Mapped[int] = mapped_column(BigInteger, nullable=False)
    admin_channel: Mapped[int] = mapped_column(BigInteger, nullable=False)
    admin_role: Mapped[int] = mapped_column(BigInteger, nullable=False)
    advanced_role: Mapped[int] = mapped_column(BigInteger, nullable=False)

    def __repr__(self) -> str:
        return f"<GuildConfigRow guild={self.guild_id}>"


# ---------------------------------------------------------------------------
# Registration — one row per accepted form, never read back by the bot
# ---------------------------------------------------------------------------
class Registration(Base):
    __tablename__ = "registrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    guild_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    user_id: Mapped[int | None] = mapped_column(BigInteger, default=None)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    age: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_registrations_guild", "guild_id"),
    )

    def __repr__(self) -> str:
        return f"<Registration id={self.id} guild={self.guild_id} name={self.name!r}>"
