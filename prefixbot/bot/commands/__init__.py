"""
Built-in commands.

Commands are registered explicitly: each category module exposes a
``COMMANDS`` list and the categories below are registered in order. Adding
a command means adding its CommandDefinition to one of those lists.
"""

from prefixbot.bot.commands import debug, general
from prefixbot.bot.models import CommandDefinition

# Registered in this order; on a name clash the later category wins
CATEGORIES: dict[str, list[CommandDefinition]] = {
    "debug": debug.COMMANDS,
    "general": general.COMMANDS,
}


def builtin_commands() -> list[CommandDefinition]:
    """All built-in command definitions, in registration order."""
    return [command for commands in CATEGORIES.values() for command in commands]
