"""
registrar.bot.cogs.intake — Message Intake
============================================

Listens for on_message events and feeds them through the queue.

Pipeline:
1. on_message fires → gate checks (bot, DM, config command)
2. Build a QueuedMessage and enqueue it
3. Drain the queue right away through the MessageProcessor

There is no background worker: the drain runs inside the same callback.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from registrar.engine.events import QueuedMessage
from registrar.errors import QueueFullError

if TYPE_CHECKING:
    from registrar.bot.core import RegistrarBot

logger = logging.getLogger(__name__)


def _is_setconfig(content: str, literal: str) -> bool:
    """True when *content* opens with the command as a whole word.

    Mirrors how discord.py dispatches prefix commands: ``!setconfigure`` and
    `` !setconfig`` are not the command and go through the queue instead.
    """
    if not content.startswith(literal):
        return False
    rest = content[len(literal):]
    return not rest or rest[0].isspace()


class Intake(commands.Cog, name="Intake"):
    """Queues guild messages and processes registration / manual forms."""

    def __init__(self, bot: RegistrarBot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        """Fires on every message the bot can see."""
        try:
            await self._handle_message(message)
        except Exception:
            logger.exception(
                "Error processing message %s from user %s",
                message.id,
                message.author.id,
            )

    async def _handle_message(self, message: discord.Message) -> None:
        """Inner message handler (separated for error isolation)."""

        # Gate 1: Ignore bots
        if message.author.bot:
            return

        # Gate 2: Ignore DMs
        if message.guild is None:
            return

        # Gate 3: The config command is handled by the Admin cog
        if _is_setconfig(message.content, self.bot.cfg.setconfig_literal):
            return

        qmsg = QueuedMessage.from_message(message)
        try:
            await self.bot.queue.put(qmsg)
        except QueueFullError:
            logger.warning(
                "Queue full — dropping message %s from user %s in guild %s",
                message.id, message.author.id, message.guild.id,
            )

        await self.bot.queue.drain(self.bot.processor.process)


async def setup(bot: RegistrarBot) -> None:
    await bot.add_cog(Intake(bot))
