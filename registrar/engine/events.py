"""
registrar.engine.events — QueuedMessage envelope
==================================================

Every guild message that is not a command is normalized into a
:class:`QueuedMessage` before it enters the queue.  The processor never
touches ``discord.Message`` directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import discord

__all__ = ["QueuedMessage"]


@dataclass(frozen=True, slots=True)
class QueuedMessage:
    """Snapshot of an inbound guild message, consumed exactly once."""

    guild_id: int
    channel_id: int
    content: str
    author_id: int
    message_id: int | None = None

    @classmethod
    def from_message(cls, message: discord.Message) -> QueuedMessage:
        """Build from a guild message.  Raises ``ValueError`` for DMs."""
        if message.guild is None:
            raise ValueError(f"Message {message.id} was not sent in a guild")
        return cls(
            guild_id=message.guild.id,
            channel_id=message.channel.id,
            content=message.content,
            author_id=message.author.id,
            message_id=message.id,
        )
