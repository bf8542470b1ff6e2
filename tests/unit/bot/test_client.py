"""
Tests for PrefixBot event handling.

The event handlers are exercised without a Discord connection.
The bot is created with __new__ so discord.Client.__init__ (HTTP session,
gateway state) never runs.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from prefixbot.bot.client import PrefixBot
from prefixbot.bot.dispatcher import CommandDispatcher
from prefixbot.bot.models import CommandDefinition
from prefixbot.config.settings import BotSettings, Settings


def _make_bot(definitions=None, **bot_config) -> PrefixBot:
    """Create a PrefixBot with a mocked logged-in user."""
    settings = Settings(bot=BotSettings(**bot_config))
    bot = PrefixBot.__new__(PrefixBot)
    bot.settings = settings
    bot._definitions = definitions
    bot.registry = None
    bot.dispatcher = None
    # discord.Client.user reads the connection state's user
    bot._connection = MagicMock()
    bot._connection.user = MagicMock()
    bot._connection.user.mentioned_in.return_value = True
    return bot


def _make_message(content="hey @PrefixBot", is_bot=False):
    message = MagicMock()
    message.id = 1001
    message.content = content
    message.author = MagicMock()
    message.author.bot = is_bot
    message.author.roles = []
    message.reference = None
    message.reply = AsyncMock()
    message.channel = MagicMock()
    message.channel.send = AsyncMock()
    return message


class TestSetupHook:
    @pytest.mark.asyncio
    async def test_builds_frozen_registry_of_builtins(self):
        bot = _make_bot()
        await bot.setup_hook()
        assert bot.registry.frozen
        assert "ping" in bot.registry
        assert isinstance(bot.dispatcher, CommandDispatcher)

    @pytest.mark.asyncio
    async def test_uses_supplied_definitions(self):
        definition = CommandDefinition(
            name="only", description="d", usage="<None>", handler=AsyncMock()
        )
        bot = _make_bot(definitions=[definition])
        await bot.setup_hook()
        assert list(bot.registry.commands) == ["only"]


class TestOnMessage:
    @pytest.mark.asyncio
    async def test_messages_before_setup_are_ignored(self):
        bot = _make_bot()
        message = _make_message("!ping")
        await bot.on_message(message)
        message.reply.assert_not_called()

    @pytest.mark.asyncio
    async def test_prefixed_message_is_dispatched(self):
        handler = AsyncMock()
        definition = CommandDefinition(
            name="ping", description="d", usage="<None>", handler=handler
        )
        bot = _make_bot(definitions=[definition])
        await bot.setup_hook()

        await bot.on_message(_make_message("!ping"))

        handler.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_prefixed_message_is_not_acknowledged(self):
        bot = _make_bot()
        await bot.setup_hook()
        message = _make_message("!unknown @PrefixBot")
        await bot.on_message(message)
        message.reply.assert_not_called()


class TestMentionAcknowledgment:
    @pytest.mark.asyncio
    async def test_mention_replies_with_prefix(self):
        bot = _make_bot(prefix="?")
        await bot.setup_hook()
        message = _make_message()

        await bot.on_message(message)

        message.reply.assert_awaited_once()
        text = message.reply.call_args[0][0]
        assert "`?`" in text
        assert message.reply.call_args.kwargs["mention_author"] is False

    @pytest.mark.asyncio
    async def test_no_reply_without_mention(self):
        bot = _make_bot()
        bot.user.mentioned_in.return_value = False
        await bot.setup_hook()
        message = _make_message("just chatting")
        await bot.on_message(message)
        message.reply.assert_not_called()

    @pytest.mark.asyncio
    async def test_bots_are_not_acknowledged(self):
        bot = _make_bot()
        await bot.setup_hook()
        message = _make_message(is_bot=True)
        await bot.on_message(message)
        message.reply.assert_not_called()

    @pytest.mark.asyncio
    async def test_can_be_disabled(self):
        bot = _make_bot(mention_ack=False)
        await bot.setup_hook()
        message = _make_message()
        await bot.on_message(message)
        message.reply.assert_not_called()

    @pytest.mark.asyncio
    async def test_reply_to_own_message_is_not_acknowledged(self):
        bot = _make_bot()
        await bot.setup_hook()
        message = _make_message()
        own = MagicMock(spec=discord.Message)
        own.author = bot.user
        message.reference = MagicMock()
        message.reference.resolved = own

        await bot.on_message(message)

        message.reply.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_failure_is_logged_not_raised(self):
        bot = _make_bot()
        await bot.setup_hook()
        message = _make_message()
        response = MagicMock(status=403, reason="Forbidden")
        message.reply.side_effect = discord.Forbidden(response, "Missing Permissions")

        await bot.on_message(message)  # must not raise

        message.reply.assert_awaited_once()
