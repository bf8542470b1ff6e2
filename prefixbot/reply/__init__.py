"""
Reply Pipeline.

Turns whatever a command handler passes to ``ctx.reply()`` into an outbound
Discord message:

    normalize(content)                  ->  payload dict
    resolve_target(message, channel)    ->  TargetDecision(channel, should_reference)
    assemble(message, payload, ref)     ->  final payload dict
    to_send_kwargs(message, final)      ->  channel.send(**kwargs)

Everything here is pure and never raises; failures surface when discord.py
validates the send.
"""

from prefixbot.reply.assemble import assemble, reply_defaults, to_send_kwargs
from prefixbot.reply.content import (
    Primitive,
    RawObject,
    ReplyContent,
    StructuredMessage,
    classify,
    normalize,
)
from prefixbot.reply.target import TargetDecision, resolve_target

__all__ = [
    "assemble",
    "classify",
    "normalize",
    "Primitive",
    "RawObject",
    "reply_defaults",
    "ReplyContent",
    "resolve_target",
    "StructuredMessage",
    "TargetDecision",
    "to_send_kwargs",
]
