"""
registrar.engine.routing — Channel Routing
============================================

Decides, once per message, which intake path a channel belongs to.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from registrar.services.config_service import GuildConfig

__all__ = ["ChannelRoute", "resolve_route"]


class ChannelRoute(enum.StrEnum):
    """Which intake path a message takes."""
    REGISTRATION = "registration"
    MANUAL_REVIEW = "manual_review"
    UNMATCHED = "unmatched"


def resolve_route(config: GuildConfig, channel_id: int) -> ChannelRoute:
    """Map *channel_id* to a :class:`ChannelRoute` using the guild's config.

    If an admin points both form channels at the same channel, registration
    takes precedence.
    """
    if channel_id == config.registration_channel:
        return ChannelRoute.REGISTRATION
    if channel_id == config.manual_channel:
        return ChannelRoute.MANUAL_REVIEW
    return ChannelRoute.UNMATCHED
