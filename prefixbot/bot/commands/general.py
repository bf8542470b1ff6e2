"""General commands: say and help."""

from __future__ import annotations

import discord

from prefixbot.bot.context import CommandContext
from prefixbot.bot.models import CommandDefinition
from prefixbot.config.logging import get_logger

logger = get_logger(__name__)

_CHANNEL_FLAG = "--channel="


async def say(ctx: CommandContext) -> discord.Message:
    """
    Repeat the arguments as the bot and delete the command message.

    ``--channel=<id>`` as the first argument sends to another channel of
    the same guild instead.
    """
    args = list(ctx.args)
    channel = None
    if args and args[0].startswith(_CHANNEL_FLAG):
        channel = args.pop(0)[len(_CHANNEL_FLAG):]

    text = " ".join(args)
    if not text.strip():
        return await ctx.reply(f"Usage: `{ctx.config.prefix}say {ctx.command.usage}`")

    try:
        await ctx.msg.delete()
    except discord.HTTPException as e:
        logger.warning(f"Could not delete say command message {ctx.msg.id}: {e}")

    # The command message is gone, so don't thread the reply onto it
    return await ctx.reply({"content": text, "message_reference": None}, channel)


def _command_list_embed(ctx: CommandContext) -> discord.Embed:
    prefix = ctx.config.prefix
    embed = discord.Embed(title="Commands", color=discord.Color.blurple())
    for category, commands in ctx.bot.registry.by_category().items():
        lines = "\n".join(f"`{prefix}{c.name}` {c.description}" for c in commands)
        embed.add_field(name=category.title(), value=lines[:1024], inline=False)
    embed.set_footer(text=f"{prefix}help <command> for usage")
    return embed


def _command_embed(ctx: CommandContext, command: CommandDefinition) -> discord.Embed:
    embed = discord.Embed(
        title=f"{ctx.config.prefix}{command.name}",
        description=command.description,
        color=discord.Color.blurple(),
    )
    embed.add_field(name="Usage", value=f"`{ctx.config.prefix}{command.name} {command.usage}`", inline=False)
    if command.level is not None:
        embed.add_field(name="Required level", value=str(command.level))
    return embed


async def help_command(ctx: CommandContext) -> discord.Message:
    """List all commands, or show the usage of one."""
    name = ctx.args[0] if ctx.args and ctx.args[0] else None
    if name is None:
        return await ctx.reply({"embeds": [_command_list_embed(ctx)]})

    command = ctx.bot.registry.get(name)
    if command is None:
        return await ctx.reply(f"Unknown command `{name}`")
    return await ctx.reply({"embeds": [_command_embed(ctx, command)]})


COMMANDS = [
    CommandDefinition(
        name="say",
        description="Says a message",
        usage="[--channel=<id>] <message...>",
        level=5,
        category="general",
        handler=say,
    ),
    CommandDefinition(
        name="help",
        description="Lists commands or shows how to use one",
        usage="[command]",
        category="general",
        handler=help_command,
    ),
]
