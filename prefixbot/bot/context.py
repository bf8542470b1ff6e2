"""
Per-invocation command context.

A fresh CommandContext is built for every dispatched command and handed to
its handler. ``reply()`` runs the reply pipeline (normalize -> resolve
target -> assemble) and sends the result.
"""

from __future__ import annotations

from typing import Any

import discord

from prefixbot.bot.errors import ChannelNotFound
from prefixbot.bot.levels import resolve_level
from prefixbot.bot.models import CommandDefinition
from prefixbot.config.logging import get_logger
from prefixbot.config.settings import BotSettings
from prefixbot.reply import assemble, normalize, resolve_target, to_send_kwargs

logger = get_logger(__name__)


class CommandContext:
    """
    Context object passed to command handlers.

    Attributes:
        args: Positional arguments typed after the command name
        bot: The discord client the command arrived on
        msg: The inbound command message
        config: Bot settings (prefix, levels, admin IDs, ...)
        command: Definition of the command being run
        level: Admin level of the message author, resolved at dispatch time
    """

    def __init__(
        self,
        *,
        args: list[str],
        bot: discord.Client,
        msg: discord.Message,
        config: BotSettings,
        command: CommandDefinition,
    ):
        self.args = args
        self.bot = bot
        self.msg = msg
        self.config = config
        self.command = command
        self.level = resolve_level(config, msg.author)

    async def reply(self, content: Any, channel: int | str | None = None) -> discord.Message:
        """
        Send a reply to the command.

        Without ``channel`` the reply is threaded onto the command message
        in the same channel. With ``channel`` it's sent as a plain message to
        that channel of the same guild. Mentions of the replied-to user are
        suppressed either way.

        Args:
            content: str, number, bool, list, dict of data, or a message
                payload dict (content/embeds/file plus any send() kwargs)
            channel: Optional channel ID to send to instead

        Returns:
            The sent discord.Message

        Raises:
            ChannelNotFound: If ``channel`` isn't a channel of this guild
            discord.HTTPException: If Discord rejects the message
        """
        payload = normalize(content)
        target = resolve_target(self.msg, channel)
        if target.channel is None:
            raise ChannelNotFound(channel)

        final = assemble(self.msg, payload, target.should_reference)
        return await target.channel.send(**to_send_kwargs(self.msg, final))
