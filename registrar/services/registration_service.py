"""
registrar.services.registration_service — Registration Writer
===============================================================

Appends accepted registration forms to the ``registrations`` table.  No
deduplication and no validation: a member who submits twice gets two rows.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from registrar.database.engine import get_session
from registrar.database.models import Registration
from registrar.errors import StorageError

logger = logging.getLogger(__name__)


def save_registration(
    engine,
    guild_id: int,
    name: str,
    age: str,
    *,
    user_id: int | None = None,
) -> None:
    """Insert one registration row.  Raises :class:`StorageError` on failure."""
    try:
        with get_session(engine) as session:
            session.add(Registration(guild_id=guild_id, user_id=user_id, name=name, age=age))
    except SQLAlchemyError as exc:
        raise StorageError(f"Could not save registration for guild {guild_id}") from exc

    logger.debug("Registration stored for guild %d (user=%s)", guild_id, user_id)
