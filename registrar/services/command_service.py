"""
registrar.services.command_service — ``!setconfig`` Handling
==============================================================

Validates and applies the admin-only config command::

    !setconfig <registration_channel> <manual_channel> <admin_channel> <admin_role> <advanced_role>

Discord-free so it can be unit tested; the cog in
:mod:`registrar.bot.cogs.admin` supplies ``is_admin`` and sends the reply.

Every outcome produces a reply for the invoking admin: permission denied,
usage (wrong arity *or* a non-numeric id), storage failure, or success.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from registrar.constants import (
    SETCONFIG_FIELDS,
    SETCONFIG_TOKEN_COUNT,
    SNOWFLAKE_MAX,
)
from registrar.errors import StorageError
from registrar.services.config_service import GuildConfig, upsert_guild_config

logger = logging.getLogger(__name__)


class CommandStatus(enum.StrEnum):
    OK = "ok"
    PERMISSION_DENIED = "permission_denied"
    USAGE = "usage"
    STORAGE_FAILED = "storage_failed"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """What happened, and what to tell the invoker."""

    status: CommandStatus
    reply: str
    config: GuildConfig | None = None


class SnowflakeOutOfRange(ValueError):
    """An id is numeric but too large to store."""

    def __init__(self, field_name: str, token: str) -> None:
        super().__init__(f"{field_name}={token} exceeds {SNOWFLAKE_MAX}")
        self.field_name = field_name
        self.token = token


def _parse_snowflake(field_name: str, token: str) -> int | None:
    if not (token.isascii() and token.isdigit()):
        return None
    value = int(token)
    if value > SNOWFLAKE_MAX:
        raise SnowflakeOutOfRange(field_name, token)
    return value


def parse_setconfig_args(content: str) -> dict[str, int] | None:
    """Split *content* on whitespace and map the five ids to field names.

    Returns ``None`` if there are not exactly six tokens or an id is not an
    unsigned integer.  Raises :class:`SnowflakeOutOfRange` for an id above
    :data:`~registrar.constants.SNOWFLAKE_MAX`.
    """
    tokens = content.split()
    if len(tokens) != SETCONFIG_TOKEN_COUNT:
        return None

    values: dict[str, int] = {}
    for field_name, token in zip(SETCONFIG_FIELDS, tokens[1:]):
        value = _parse_snowflake(field_name, token)
        if value is None:
            return None
        values[field_name] = value
    return values


def run_setconfig(
    engine,
    guild_id: int,
    content: str,
    *,
    is_admin: bool,
    messages: Mapping[str, str],
    prefix: str = "!",
) -> CommandResult:
    """Check permission, validate arguments, and upsert the guild config."""
    if not is_admin:
        return CommandResult(CommandStatus.PERMISSION_DENIED, messages["permission_denied"])

    try:
        args = parse_setconfig_args(content)
    except SnowflakeOutOfRange as exc:
        logger.debug("Rejected setconfig in guild %d: %s", guild_id, exc)
        reply = messages["setconfig_out_of_range"].format(
            field=exc.field_name, value=exc.token, max=SNOWFLAKE_MAX,
        )
        return CommandResult(CommandStatus.USAGE, reply)

    if args is None:
        logger.debug("Rejected malformed setconfig in guild %d: %r", guild_id, content)
        return CommandResult(
            CommandStatus.USAGE, messages["setconfig_usage"].format(prefix=prefix)
        )

    try:
        config = upsert_guild_config(engine, guild_id, **args)
    except StorageError:
        logger.exception("setconfig failed for guild %d", guild_id)
        return CommandResult(CommandStatus.STORAGE_FAILED, messages["config_failed"])

    return CommandResult(CommandStatus.OK, messages["config_saved"], config)
