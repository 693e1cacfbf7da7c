"""
registrar.bot.gateway — Outbound Discord Calls
================================================

The message processor only needs three things from Discord: post to a
channel, reply to a message, and add a role to a member.  They sit behind
the :class:`ChatGateway` protocol so the processor can be driven by mocks
in tests; :class:`DiscordGateway` is the real implementation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

import discord
from discord.abc import Messageable

from registrar.engine.events import QueuedMessage

logger = logging.getLogger(__name__)


class ChatGateway(Protocol):
    async def send(
        self,
        channel_id: int,
        content: str,
        *,
        mention_roles: Sequence[int] = (),
        mention_users: Sequence[int] = (),
    ) -> None: ...

    async def reply(self, qmsg: QueuedMessage, content: str) -> None: ...

    async def add_role(self, guild_id: int, user_id: int, role_id: int) -> None: ...


class DiscordGateway:
    """:class:`ChatGateway` backed by a live ``discord.Client``.

    Lookups hit the client cache first and fall back to the REST API.
    Errors (``discord.Forbidden``, ``discord.NotFound``, …) propagate to
    the caller.
    """

    def __init__(self, client: discord.Client) -> None:
        self.client = client

    async def _resolve_channel(self, channel_id: int) -> Messageable:
        channel = self.client.get_channel(channel_id)
        if channel is None:
            channel = await self.client.fetch_channel(channel_id)
        if not isinstance(channel, Messageable):
            raise TypeError(f"Channel {channel_id} cannot receive messages")
        return channel

    async def send(
        self,
        channel_id: int,
        content: str,
        *,
        mention_roles: Sequence[int] = (),
        mention_users: Sequence[int] = (),
    ) -> None:
        """Post *content*; only the listed roles and users are pinged."""
        channel = await self._resolve_channel(channel_id)
        await channel.send(
            content,
            allowed_mentions=discord.AllowedMentions(
                everyone=False,
                roles=[discord.Object(id=r) for r in mention_roles],
                users=[discord.Object(id=u) for u in mention_users],
            ),
        )

    async def reply(self, qmsg: QueuedMessage, content: str) -> None:
        """Reply in the message's channel, referencing it if we know its id."""
        channel = await self._resolve_channel(qmsg.channel_id)
        reference = None
        if qmsg.message_id is not None:
            reference = discord.MessageReference(
                message_id=qmsg.message_id,
                channel_id=qmsg.channel_id,
                guild_id=qmsg.guild_id,
                fail_if_not_exists=False,
            )
        await channel.send(content, reference=reference)

    async def add_role(self, guild_id: int, user_id: int, role_id: int) -> None:
        guild = self.client.get_guild(guild_id)
        if guild is None:
            guild = await self.client.fetch_guild(guild_id)
        member = guild.get_member(user_id)
        if member is None:
            member = await guild.fetch_member(user_id)
        await member.add_roles(
            discord.Object(id=role_id),
            reason="Registrar: registration form accepted",
        )
        logger.info("Granted role %d to member %d in guild %d", role_id, user_id, guild_id)
