"""
registrar.services.processor — Queued Message Processing
==========================================================

Consumes one :class:`~registrar.engine.events.QueuedMessage` at a time.

Pipeline:
1. Load the guild config (no config → drop, no reply).
2. Resolve the channel route once.
3. Registration channel → parse → store → grant advanced role → confirm.
4. Manual channel → parse → alert admins → confirm.
5. Anything else → ignore.

Feedback policy:
- Text that does not parse as the channel's form is ignored silently;
  these channels also carry ordinary chat.
- A failure that stops the member's request from completing gets a
  generic error reply (storage failure, alert delivery failure).
- A failed role grant is logged for the operators only.  The registration
  is already stored at that point; the confirmation is sent only when the
  grant succeeds.

Nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from registrar.database.engine import run_db
from registrar.engine.events import QueuedMessage
from registrar.engine.forms import parse_manual_review, parse_registration
from registrar.engine.routing import ChannelRoute, resolve_route
from registrar.errors import StorageError
from registrar.services.config_service import GuildConfig, get_guild_config
from registrar.services.registration_service import save_registration

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from registrar.bot.gateway import ChatGateway

logger = logging.getLogger(__name__)


class MessageProcessor:
    """Routes queued messages to the registration or manual-review path.

    Parameters
    ----------
    engine:
        SQLAlchemy engine for config lookups and registration writes.
    gateway:
        Outbound Discord calls (see :class:`~registrar.bot.gateway.ChatGateway`).
    messages:
        Reply texts, normally ``RegistrarConfig.messages``.
    """

    def __init__(
        self, engine: Engine, gateway: ChatGateway, messages: Mapping[str, str]
    ) -> None:
        self.engine = engine
        self.gateway = gateway
        self.messages = messages

    async def process(self, qmsg: QueuedMessage) -> ChannelRoute | None:
        """Handle one message.  Returns the route taken, or ``None`` if dropped."""
        config = await run_db(get_guild_config, self.engine, qmsg.guild_id)
        if config is None:
            logger.debug("No config for guild %d — dropping message", qmsg.guild_id)
            return None

        route = resolve_route(config, qmsg.channel_id)
        if route is ChannelRoute.REGISTRATION:
            await self._handle_registration(qmsg, config)
        elif route is ChannelRoute.MANUAL_REVIEW:
            await self._handle_manual_review(qmsg, config)
        return route

    # -----------------------------------------------------------------------
    # Registration channel
    # -----------------------------------------------------------------------
    async def _handle_registration(self, qmsg: QueuedMessage, config: GuildConfig) -> None:
        form = parse_registration(qmsg.content)
        if form is None:
            logger.debug("Ignoring non-form message %s in registration channel", qmsg.message_id)
            return
        name, age = form

        try:
            await run_db(
                save_registration,
                self.engine,
                qmsg.guild_id,
                name,
                age,
                user_id=qmsg.author_id,
            )
        except StorageError:
            logger.exception(
                "Failed to store registration from user %d in guild %d",
                qmsg.author_id, qmsg.guild_id,
            )
            await self._reply(qmsg, self.messages["storage_error"])
            return

        try:
            await self.gateway.add_role(qmsg.guild_id, qmsg.author_id, config.advanced_role)
        except Exception:
            logger.exception(
                "Failed to grant advanced role %d to user %d in guild %d",
                config.advanced_role, qmsg.author_id, qmsg.guild_id,
            )
            return

        logger.info("Registration complete: user %d in guild %d", qmsg.author_id, qmsg.guild_id)
        await self._reply(qmsg, self.messages["registration_complete"])

    # -----------------------------------------------------------------------
    # Manual-review channel
    # -----------------------------------------------------------------------
    async def _handle_manual_review(self, qmsg: QueuedMessage, config: GuildConfig) -> None:
        application = parse_manual_review(qmsg.content)
        if application is None:
            logger.debug("Ignoring non-form message %s in manual channel", qmsg.message_id)
            return

        alert = self.messages["manual_alert"].format(
            admin_role=f"<@&{config.admin_role}>",
            author=f"<@{qmsg.author_id}>",
            content=application,
        )
        try:
            await self.gateway.send(
                config.admin_channel,
                alert,
                mention_roles=(config.admin_role,),
                mention_users=(qmsg.author_id,),
            )
        except Exception:
            logger.exception(
                "Failed to post manual review alert to channel %d in guild %d",
                config.admin_channel, qmsg.guild_id,
            )
            await self._reply(qmsg, self.messages["manual_failed"])
            return

        logger.info("Manual review submitted: user %d in guild %d", qmsg.author_id, qmsg.guild_id)
        await self._reply(qmsg, self.messages["manual_submitted"])

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------
    async def _reply(self, qmsg: QueuedMessage, content: str) -> None:
        try:
            await self.gateway.reply(qmsg, content)
        except Exception:
            logger.exception("Failed to reply in channel %d", qmsg.channel_id)
