"""
registrar.bot.cogs.admin — Admin Prefix Commands
==================================================

- ``!setconfig`` — wire the registration, manual, and admin channels plus
  the admin and advanced roles for this guild.

Requires the Discord *Administrator* permission.  Validation and storage
live in :mod:`registrar.services.command_service`; this cog only collects
the invoker's permission and sends the reply.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from registrar.constants import SETCONFIG_COMMAND
from registrar.database.engine import run_db
from registrar.services.command_service import CommandStatus, run_setconfig

if TYPE_CHECKING:
    from registrar.bot.core import RegistrarBot

logger = logging.getLogger(__name__)


class Admin(commands.Cog, name="Admin"):
    """Server administration commands for Registrar."""

    def __init__(self, bot: RegistrarBot) -> None:
        self.bot = bot

    @commands.command(name=SETCONFIG_COMMAND)
    @commands.guild_only()
    async def setconfig(self, ctx: commands.Context) -> None:
        """Save the channel/role configuration for this guild."""
        assert ctx.guild is not None  # guild_only
        is_admin = (
            isinstance(ctx.author, discord.Member)
            and ctx.author.guild_permissions.administrator
        )

        result = await run_db(
            run_setconfig,
            self.bot.engine,
            ctx.guild.id,
            ctx.message.content,
            is_admin=is_admin,
            messages=self.bot.cfg.messages,
            prefix=self.bot.cfg.bot_prefix,
        )
        if result.status is CommandStatus.OK:
            logger.info("Config updated for guild %s by %s", ctx.guild.id, ctx.author.id)
        elif result.status is CommandStatus.PERMISSION_DENIED:
            logger.info(
                "Denied setconfig for non-admin %s in guild %s", ctx.author.id, ctx.guild.id
            )

        try:
            await ctx.reply(result.reply)
        except discord.DiscordException:
            logger.exception("Failed to reply to setconfig in guild %s", ctx.guild.id)


async def setup(bot: RegistrarBot) -> None:
    await bot.add_cog(Admin(bot))
