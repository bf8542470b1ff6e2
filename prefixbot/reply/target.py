"""
Reply target resolution.

Decides which channel a reply goes to, and whether it should be sent as a
threaded reply to the command message.
"""

from __future__ import annotations

from typing import Any, NamedTuple

import discord

from prefixbot.config.logging import get_logger

logger = get_logger(__name__)


class TargetDecision(NamedTuple):
    """Where a reply goes and whether it references the command message.

    ``channel`` is None when a channel override doesn't exist in the guild.
    """

    channel: Any
    should_reference: bool


def _parse_channel_id(channel_id: int | str) -> int | None:
    try:
        return int(channel_id)
    except (TypeError, ValueError):
        return None


def resolve_target(
    message: discord.Message, channel_id: int | str | None = None
) -> TargetDecision:
    """
    Resolve the destination channel for a reply.

    Without an override the reply goes back to the command's channel and
    references the command message. With an override the channel is looked
    up in the command channel's guild and the reply never references the
    command message, even when the override names that same channel.

    Args:
        message: The inbound command message
        channel_id: Optional channel ID override (int or numeric string)

    Returns:
        TargetDecision; its channel is None if the override didn't resolve
    """
    if not channel_id:
        return TargetDecision(message.channel, True)

    guild = getattr(message.channel, "guild", None)
    parsed = _parse_channel_id(channel_id)
    channel = None
    if guild is not None and parsed is not None:
        channel = guild.get_channel_or_thread(parsed)

    if channel is None:
        logger.debug(f"Channel override {channel_id!r} not found in guild {getattr(guild, 'id', None)}")
    return TargetDecision(channel, False)
