"""Exceptions raised by the bot layer."""

from __future__ import annotations


class PrefixBotError(Exception):
    """Base class for prefixbot errors."""


class ChannelNotFound(PrefixBotError):
    """A reply's channel override does not exist in the command's guild."""

    def __init__(self, channel_id: int | str):
        self.channel_id = channel_id
        super().__init__(f"Channel {channel_id!r} not found in this guild")


class HandlerEvaluationError(PrefixBotError):
    """Code passed to the eval command failed to compile."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class HandlerRuntimeError(PrefixBotError):
    """Code passed to the eval command raised while running."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause
