"""
Debug commands: ping and eval.

eval runs arbitrary Python inside the bot process. It is gated at level 5,
so only members holding a role configured at that level or above can run it
(unless BOT__ENFORCE_LEVELS is turned off).
"""

from __future__ import annotations

import asyncio
import textwrap
from collections.abc import Awaitable, Callable
from typing import Any

import discord

from prefixbot.bot.context import CommandContext
from prefixbot.bot.errors import HandlerEvaluationError, HandlerRuntimeError
from prefixbot.bot.models import CommandDefinition
from prefixbot.config.logging import get_logger

logger = get_logger(__name__)

_EVAL_FUNCTION = "_eval_body"


async def ping(ctx: CommandContext) -> discord.Message:
    """Reply with the time between the command being sent and now."""
    latency = discord.utils.utcnow() - ctx.msg.created_at
    return await ctx.reply({"content": f"{round(latency.total_seconds() * 1000)} ms"})


def strip_code_block(code: str) -> str:
    """Remove a surrounding ``` fence (with optional language tag) from code."""
    code = code.strip()
    if code.startswith("```") and code.endswith("```") and len(code) >= 6:
        code = code[3:-3]
        first_line, newline, rest = code.partition("\n")
        # ```py\n...``` -> drop the language tag line
        if newline and first_line.strip().isidentifier():
            code = rest
    return code.strip("\n")


def compile_snippet(code: str, namespace: dict[str, Any]) -> Callable[[], Awaitable[Any]]:
    """
    Compile code as the body of an async function.

    The body can ``await`` and must ``return`` a value to produce a result.

    Raises:
        HandlerEvaluationError: If the code doesn't compile
    """
    source = f"async def {_EVAL_FUNCTION}():\n" + textwrap.indent(code or "pass", "    ")
    try:
        exec(compile(source, "<eval>", "exec"), namespace)
    except SyntaxError as e:
        raise HandlerEvaluationError(f"{type(e).__name__}: {e}", cause=e) from e
    return namespace[_EVAL_FUNCTION]


async def run_snippet(function: Callable[[], Awaitable[Any]]) -> Any:
    """
    Await a compiled snippet.

    Raises:
        HandlerRuntimeError: If the snippet raises
    """
    try:
        return await function()
    except Exception as e:
        raise HandlerRuntimeError(f"{type(e).__name__}: {e}", cause=e) from e


async def eval_code(ctx: CommandContext) -> discord.Message:
    """Evaluate the command arguments as Python and reply with the result."""
    code = strip_code_block(" ".join(ctx.args))
    logger.info(f"eval requested by {ctx.msg.author} (level {ctx.level})")

    namespace = {
        "asyncio": asyncio,
        "bot": ctx.bot,
        "ctx": ctx,
        "discord": discord,
        "msg": ctx.msg,
    }

    try:
        function = compile_snippet(code, namespace)
    except HandlerEvaluationError as e:
        return await ctx.reply(f"Error evaluating:\n```py\n{e}\n```")

    try:
        result = await run_snippet(function)
    except HandlerRuntimeError as e:
        return await ctx.reply(f"Error running:\n```py\n{e}\n```")

    return await ctx.reply(f"Result: \n```py\n{result}\n```")


COMMANDS = [
    CommandDefinition(
        name="ping",
        description="Gets the latency of the bot in ms",
        usage="<None>",
        category="debug",
        handler=ping,
    ),
    CommandDefinition(
        name="eval",
        description="Evaluate Python code",
        usage="<code>",
        level=5,
        category="debug",
        handler=eval_code,
    ),
]
