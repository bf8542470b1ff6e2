"""
Reply assembly.

Layers addressing metadata (reply reference, mention suppression) under a
normalized payload, then adapts the result to ``Messageable.send`` kwargs.
"""

from __future__ import annotations

import inspect
from typing import Any

import discord

from prefixbot.config.logging import get_logger

logger = get_logger(__name__)

# Keyword arguments Messageable.send accepts; anything else is dropped
SEND_KWARGS = frozenset(
    name for name in inspect.signature(discord.abc.Messageable.send).parameters if name != "self"
)


def reply_defaults(message: discord.Message, should_reference: bool) -> dict[str, Any]:
    """Addressing metadata for a reply to ``message``."""
    defaults: dict[str, Any] = {}
    if should_reference:
        defaults["message_reference"] = {"message_id": message.id}
    # Replies never ping the author of the command message
    defaults["allowed_mentions"] = {"replied_user": False}
    return defaults


def assemble(
    message: discord.Message, payload: dict[str, Any], should_reference: bool
) -> dict[str, Any]:
    """
    Merge addressing metadata under a normalized payload.

    Keys present in ``payload`` always win, so a handler can pass
    ``message_reference=None`` to send a plain (non-threaded) message, or
    its own ``allowed_mentions``. Neither argument is mutated.

    Args:
        message: The inbound command message
        payload: Output of ``normalize()``
        should_reference: Whether to thread the reply onto ``message``

    Returns:
        New dict with the final outbound payload
    """
    return {**reply_defaults(message, should_reference), **payload}


def _to_reference(message: discord.Message, reference: Any) -> Any:
    if not isinstance(reference, dict):
        # Already a discord.MessageReference / Message / PartialMessage
        return reference

    channel = message.channel
    guild = getattr(channel, "guild", None)
    return discord.MessageReference(
        message_id=reference["message_id"],
        channel_id=reference.get("channel_id", channel.id),
        guild_id=reference.get("guild_id", getattr(guild, "id", None)),
        fail_if_not_exists=False,
    )


def to_send_kwargs(message: discord.Message, payload: dict[str, Any]) -> dict[str, Any]:
    """
    Adapt a final payload to keyword arguments for ``Messageable.send``.

    ``message_reference`` becomes the ``reference`` kwarg (dropped when None),
    ``allowed_mentions`` becomes a ``discord.AllowedMentions``. Other keys
    that ``send`` accepts pass through untouched. Keys it doesn't know (a
    handler's own bookkeeping riding along with ``content``) are dropped.
    """
    kwargs = dict(payload)

    unknown = [key for key in kwargs if key not in SEND_KWARGS and key != "message_reference"]
    if unknown:
        logger.debug(f"Dropping unsupported reply fields: {', '.join(sorted(map(str, unknown)))}")
        for key in unknown:
            del kwargs[key]

    reference = kwargs.pop("message_reference", None)
    if reference is not None:
        kwargs["reference"] = _to_reference(message, reference)

    mentions = kwargs.pop("allowed_mentions", None)
    if isinstance(mentions, dict):
        kwargs["allowed_mentions"] = discord.AllowedMentions(**mentions)
    elif mentions is not None:
        kwargs["allowed_mentions"] = mentions

    return kwargs
