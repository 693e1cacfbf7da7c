"""
registrar.bot.core — Bot Instance & Cog Loader
================================================

**Why this file exists:**
Defines :class:`RegistrarBot`, a ``commands.Bot`` subclass that owns the
shared handles every cog needs:

1. ``bot.cfg`` — the parsed :class:`~registrar.config.RegistrarConfig`.
2. ``bot.engine`` — the SQLAlchemy engine.
3. ``bot.queue`` — the bounded :class:`~registrar.engine.queue.MessageQueue`.
4. ``bot.processor`` — the :class:`~registrar.services.processor.MessageProcessor`
   wired to a :class:`~registrar.bot.gateway.DiscordGateway` on this client.

Cogs read them via ``self.bot.*``; nothing is module-global.
"""

from __future__ import annotations

import logging

import discord
from discord.ext import commands
from sqlalchemy import Engine

from registrar.bot.gateway import DiscordGateway
from registrar.config import RegistrarConfig
from registrar.engine.events import QueuedMessage
from registrar.engine.queue import MessageQueue
from registrar.services.processor import MessageProcessor

logger = logging.getLogger(__name__)

# Cog modules to load on startup.
EXTENSIONS: list[str] = [
    "registrar.bot.cogs.intake",
    "registrar.bot.cogs.admin",
]


class RegistrarBot(commands.Bot):
    """Custom Bot subclass that carries project-wide state.

    Parameters
    ----------
    cfg:
        The parsed :class:`RegistrarConfig`.
    engine:
        A SQLAlchemy :class:`Engine`.
    """

    def __init__(self, cfg: RegistrarConfig, engine: Engine) -> None:
        # Privileged intents (must be enabled in the Developer Portal):
        #   MESSAGE_CONTENT — form parsing
        #   GUILD_MEMBERS   — resolve members for role grants
        intents = discord.Intents.default()
        intents.message_content = True
        intents.members = True
        intents.presences = False

        super().__init__(
            command_prefix=cfg.bot_prefix,
            intents=intents,
            help_command=None,
            description="Registration and manual-review intake",
        )

        self.cfg = cfg
        self.engine = engine
        self.queue: MessageQueue[QueuedMessage] = MessageQueue(
            capacity=cfg.queue_capacity,
            put_timeout=cfg.queue_put_timeout,
        )
        self.processor = MessageProcessor(engine, DiscordGateway(self), cfg.messages)

    # -----------------------------------------------------------------------
    # Lifecycle hooks
    # -----------------------------------------------------------------------
    async def setup_hook(self) -> None:
        """Load all cog extensions before connecting.

        A cog that fails to load is logged and skipped.
        """
        for ext in EXTENSIONS:
            try:
                await self.load_extension(ext)
                logger.info("Loaded extension: %s", ext)
            except Exception as exc:
                logger.error("Failed to load extension %s: %s", ext, exc)

    async def on_ready(self) -> None:
        """Fired when the bot has connected and the cache is populated."""
        assert self.user is not None  # guaranteed after on_ready
        logger.info("Logged in as %s (ID: %s)", self.user.name, self.user.id)
        logger.info("Serving %d guild(s)", len(self.guilds))

    async def on_command_error(
        self, ctx: commands.Context, error: commands.CommandError
    ) -> None:
        """Plain chat that happens to start with the prefix is not an error."""
        if isinstance(error, commands.CommandNotFound):
            return
        logger.error(
            "Command %s failed in guild %s",
            ctx.command, ctx.guild.id if ctx.guild else None,
            exc_info=error,
        )
