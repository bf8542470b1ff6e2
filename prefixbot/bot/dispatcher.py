"""
Prefix command dispatcher.

Per inbound message:

    prefix check -> split args -> registry lookup -> privilege policy
                 -> build CommandContext -> await handler

Messages without the prefix, unknown commands and denied commands are
dropped silently. Handler exceptions are *not* caught here; they propagate
to discord.py's ``on_error``, which logs them.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import discord

from prefixbot.bot.context import CommandContext
from prefixbot.bot.levels import LevelPolicy
from prefixbot.bot.models import CommandDefinition
from prefixbot.bot.registry import CommandRegistry
from prefixbot.config.logging import get_logger
from prefixbot.config.settings import BotSettings

logger = get_logger(__name__)

# (command, ctx) -> whether the command may run
CommandPolicy = Callable[[CommandDefinition, CommandContext], bool]


def parse_command(content: str, prefix: str) -> tuple[str, list[str]] | None:
    """
    Split a prefixed message into (command name, args).

    Splits on single spaces without collapsing runs, so ``"!say a  b"``
    yields ``("say", ["a", "", "b"])``.

    Returns:
        None if ``content`` doesn't start with ``prefix``
    """
    if not content.startswith(prefix):
        return None
    name, *args = content[len(prefix):].split(" ")
    return name, args


class CommandDispatcher:
    """
    Routes prefixed messages to registered command handlers.

    Args:
        bot: The discord client (exposed to handlers as ``ctx.bot``)
        registry: Frozen command registry
        config: Bot settings (prefix, levels, ...)
        policy: Optional privilege hook; defaults to LevelPolicy(config)
    """

    def __init__(
        self,
        bot: discord.Client,
        registry: CommandRegistry,
        config: BotSettings,
        policy: CommandPolicy | None = None,
    ) -> None:
        self.bot = bot
        self.registry = registry
        self.config = config
        self.policy = policy if policy is not None else LevelPolicy(config)

    def parse(self, content: str) -> tuple[str, list[str]] | None:
        return parse_command(content, self.config.prefix)

    async def dispatch(self, message: discord.Message) -> Any:
        """
        Handle one inbound message.

        Returns:
            Whatever the handler returned, or None if the message was dropped
        """
        if self.config.ignore_bots and message.author.bot:
            return None

        parsed = self.parse(message.content)
        if parsed is None:
            return None

        name, args = parsed
        command = self.registry.get(name)
        if command is None:
            logger.debug(f"Ignoring unknown command {name!r}")
            return None

        ctx = CommandContext(
            args=args,
            bot=self.bot,
            msg=message,
            config=self.config,
            command=command,
        )
        if not self.policy(command, ctx):
            return None

        logger.info(f"Running {command.name!r} for {message.author} in #{message.channel}")
        return await command.handler(ctx)
