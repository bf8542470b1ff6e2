"""
Admin levels and command privilege policy.

A member's admin level is the highest level configured for any role they
hold (``BotSettings.levels`` maps role ID -> level). Levels are computed on
every lookup from the member's current roles; nothing is cached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from prefixbot.config.logging import get_logger
from prefixbot.config.settings import BotSettings

if TYPE_CHECKING:
    from prefixbot.bot.context import CommandContext
    from prefixbot.bot.models import CommandDefinition

logger = get_logger(__name__)


def _role_id(role: Any) -> int | None:
    # discord.Member.roles holds Role objects; plain int or str IDs are accepted too
    try:
        return int(getattr(role, "id", role))
    except (TypeError, ValueError):
        return None


def resolve_level(config: BotSettings, member: Any) -> int:
    """
    Get the admin level of a member based on their roles.

    Unmapped roles are ignored and a member with no mapped roles (or a
    plain discord.User, which has no roles) is level 0. The result does not
    depend on role order.

    Args:
        config: Bot settings holding the role -> level table
        member: The discord.Member to query

    Returns:
        The integer admin level of the member
    """
    level = 0
    for role in getattr(member, "roles", None) or ():
        role_level = config.levels.get(_role_id(role))
        if role_level is not None:
            level = max(level, role_level)
    return level


class LevelPolicy:
    """
    Gate command execution on the invoking member's admin level.

    With ``enforce_levels`` off every command runs; levels are still
    resolved and exposed on the context for handlers that want them.
    """

    def __init__(self, config: BotSettings):
        self.config = config

    def __call__(self, command: CommandDefinition, ctx: CommandContext) -> bool:
        if not self.config.enforce_levels or command.level is None:
            return True
        if ctx.level >= command.level:
            return True

        logger.debug(
            f"Denied {command.name!r} for {ctx.msg.author} "
            f"(level {ctx.level} < required {command.level})"
        )
        return False
