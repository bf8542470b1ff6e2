"""
PrefixBot: the discord.py client.

Manages the bot lifecycle:
- Builds and freezes the command registry once at startup, before any
  message event is handled
- Routes every inbound message through the CommandDispatcher
- Answers bare @mentions with the configured command prefix
"""

from __future__ import annotations

from collections.abc import Iterable

import discord

from prefixbot.bot.commands import builtin_commands
from prefixbot.bot.dispatcher import CommandDispatcher
from prefixbot.bot.models import CommandDefinition
from prefixbot.bot.registry import CommandRegistry
from prefixbot.config.logging import get_logger
from prefixbot.config.settings import Settings

logger = get_logger(__name__)


class PrefixBot(discord.Client):
    """
    Discord client that dispatches prefix commands.

    Args:
        settings: Full application settings (bot token, prefix, levels, etc.)
        commands: Command definitions to register; defaults to the built-ins
    """

    def __init__(
        self,
        settings: Settings,
        commands: Iterable[CommandDefinition] | None = None,
    ) -> None:
        intents = discord.Intents.default()
        intents.message_content = True  # Required to read command text
        super().__init__(intents=intents)
        self.settings = settings
        self._definitions = list(commands) if commands is not None else None
        self.registry: CommandRegistry | None = None
        self.dispatcher: CommandDispatcher | None = None

    async def setup_hook(self) -> None:
        """
        Called after login, before connecting to the Gateway.

        Builds the command registry so it is complete and frozen before the
        first messageCreate event arrives.
        """
        definitions = self._definitions if self._definitions is not None else builtin_commands()
        self.registry = CommandRegistry.from_definitions(definitions)
        self.dispatcher = CommandDispatcher(self, self.registry, self.settings.bot)
        logger.info(f"Command prefix: {self.settings.bot.prefix!r}")

    async def on_ready(self) -> None:
        """Called when the bot successfully connects to Discord."""
        logger.info(f"Logged in as {self.user} (id: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    async def on_message(self, message: discord.Message) -> None:
        """Dispatch prefixed commands; acknowledge bare mentions."""
        if self.dispatcher is None:
            return

        if self.dispatcher.parse(message.content) is None:
            await self._acknowledge_mention(message)
            return

        await self.dispatcher.dispatch(message)

    async def _acknowledge_mention(self, message: discord.Message) -> None:
        """
        Reply with the command prefix when someone @mentions the bot.

        Send failures (missing permissions, Discord outage) are logged and
        otherwise ignored.
        """
        config = self.settings.bot
        if not config.mention_ack or message.author.bot:
            return
        if self.user is None or not self.user.mentioned_in(message):
            return
        # A reply to one of our messages pings us too; that isn't a request
        if message.reference is not None:
            resolved = message.reference.resolved
            if isinstance(resolved, discord.Message) and resolved.author == self.user:
                return

        try:
            await message.reply(
                f"My prefix is `{config.prefix}`. Try `{config.prefix}help`.",
                mention_author=False,
            )
        except discord.HTTPException as e:
            logger.warning(f"Could not acknowledge mention in #{message.channel}: {e}")
