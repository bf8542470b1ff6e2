"""
Discord Bot Layer.

Handles prefix parsing, command lookup, per-invocation contexts and admin
levels for the PrefixBot client.
"""

from prefixbot.bot.client import PrefixBot
from prefixbot.bot.context import CommandContext
from prefixbot.bot.dispatcher import CommandDispatcher, parse_command
from prefixbot.bot.models import CommandDefinition
from prefixbot.bot.registry import CommandRegistry

__all__ = [
    "CommandContext",
    "CommandDefinition",
    "CommandDispatcher",
    "CommandRegistry",
    "parse_command",
    "PrefixBot",
]
