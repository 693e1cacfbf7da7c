"""
registrar.services.config_service — Per-Guild Config Store
============================================================

Typed read/write access to the ``guild_configs`` table.

Reads are forgiving: a missing row and a failed query both come back as
``None`` so the processor simply drops the message.  Writes raise
:class:`~registrar.errors.StorageError` so the command handler can tell the
admin something went wrong.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from registrar.database.engine import get_session
from registrar.database.models import GuildConfigRow
from registrar.errors import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GuildConfig:
    """Channel and role wiring for one guild."""

    guild_id: int
    registration_channel: int
    manual_channel: int
    admin_channel: int
    admin_role: int
    advanced_role: int

    @classmethod
    def from_row(cls, row: GuildConfigRow) -> GuildConfig:
        return cls(
            guild_id=row.guild_id,
            registration_channel=row.registration_channel,
            manual_channel=row.manual_channel,
            admin_channel=row.admin_channel,
            admin_role=row.admin_role,
            advanced_role=row.advanced_role,
        )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_guild_config(engine, guild_id: int) -> GuildConfig | None:
    """Fetch the config for *guild_id*, or ``None`` if absent or unreadable."""
    try:
        with Session(engine) as session:
            row = session.get(GuildConfigRow, guild_id)
            return GuildConfig.from_row(row) if row is not None else None
    except SQLAlchemyError:
        logger.exception("Failed to read guild config for guild %d", guild_id)
        return None


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def upsert_guild_config(
    engine,
    guild_id: int,
    *,
    registration_channel: int,
    manual_channel: int,
    admin_channel: int,
    admin_role: int,
    advanced_role: int,
) -> GuildConfig:
    """Insert or fully overwrite the config row for *guild_id*.

    Every field is replaced; nothing from a previous row is kept.

    Raises
    ------
    StorageError
        If the write fails for any database reason.
    """
    config = GuildConfig(
        guild_id=guild_id,
        registration_channel=registration_channel,
        manual_channel=manual_channel,
        admin_channel=admin_channel,
        admin_role=admin_role,
        advanced_role=advanced_role,
    )
    try:
        with get_session(engine) as session:
            session.merge(GuildConfigRow(
                guild_id=config.guild_id,
                registration_channel=config.registration_channel,
                manual_channel=config.manual_channel,
                admin_channel=config.admin_channel,
                admin_role=config.admin_role,
                advanced_role=config.advanced_role,
            ))
    except SQLAlchemyError as exc:
        raise StorageError(f"Could not save config for guild {guild_id}") from exc

    logger.info("Guild config saved for guild %d", guild_id)
    return config
