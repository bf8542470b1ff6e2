"""
Command definition model.

Every command module exposes its commands as CommandDefinition instances,
which are registered explicitly at startup (see bot/commands/__init__.py).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CommandDefinition(BaseModel):
    """
    A single prefix command.

    Example:
        >>> async def ping(ctx):
        ...     return await ctx.reply("pong")
        >>> CommandDefinition(
        ...     name="ping",
        ...     description="Replies with pong",
        ...     usage="<None>",
        ...     handler=ping,
        ... )
    """

    name: str = Field(min_length=1, description="Unique command name typed after the prefix")
    description: str = Field(description="One-line summary shown by help")
    usage: str = Field(description='Argument synopsis, e.g. "<message...>"')
    level: int | None = Field(
        None,
        ge=0,
        description="Minimum admin level needed to run the command. None means anyone.",
    )
    category: str = Field(default="general", description="Group the command is listed under")
    handler: Callable[..., Awaitable[Any]] = Field(
        description="async handler(ctx) invoked with a CommandContext"
    )

    model_config = ConfigDict(frozen=True)
