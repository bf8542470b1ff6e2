"""
PrefixBot CLI entry point.

Provides command-line interface for running the bot and utility commands.
"""

import argparse
import sys
from pathlib import Path

from prefixbot import __version__
from prefixbot.config.logging import get_logger, setup_logging
from prefixbot.config.settings import Settings, load_settings


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="prefixbot",
        description="Prefix-command Discord bot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"PrefixBot {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help='JSON config file, e.g. {"token": ..., "prefix": "!", "levels": {...}}. '
             "Overrides environment variables.",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "run",
        help="Connect to Discord and start handling commands",
    )

    subparsers.add_parser(
        "config",
        help="Show current configuration",
    )

    subparsers.add_parser(
        "commands",
        help="List the registered bot commands",
    )

    return parser


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== PrefixBot Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nBot Name: {settings.bot.name}")
    logger.info(f"Bot Token: {'Set' if settings.bot.token else 'Not set'}")
    logger.info(f"Command Prefix: {settings.bot.prefix}")
    logger.info(f"Admin IDs: {settings.bot.admin_ids or 'None'}")
    logger.info(f"Role Levels: {settings.bot.levels or 'None (everyone is level 0)'}")
    logger.info(f"Enforce Levels: {settings.bot.enforce_levels}")
    logger.info(f"Mention Acknowledgment: {settings.bot.mention_ack}")
    logger.info(f"Ignore Bots: {settings.bot.ignore_bots}")

    return 0


def cmd_commands(settings: Settings) -> int:
    """List registered commands grouped by category."""
    from prefixbot.bot.commands import builtin_commands
    from prefixbot.bot.registry import CommandRegistry

    logger = get_logger(__name__)
    registry = CommandRegistry.from_definitions(builtin_commands())
    prefix = settings.bot.prefix

    for category, commands in registry.by_category().items():
        logger.info(f"\n[{category}]")
        for command in commands:
            level = f" (level {command.level}+)" if command.level is not None else ""
            logger.info(f"  {prefix}{command.name} {command.usage}{level}")
            logger.info(f"      {command.description}")

    return 0


def cmd_run(settings: Settings) -> int:
    """Start the Discord bot."""
    logger = get_logger(__name__)

    if not settings.bot.token:
        logger.error(
            "Discord bot token not set. Add BOT__TOKEN=<your-token> to your .env file "
            'or "token" to your --config file.'
        )
        return 1

    if settings.bot.enforce_levels and not settings.bot.levels:
        logger.warning(
            "No role levels configured (BOT__LEVELS). "
            "Commands that require a level will be denied for everyone."
        )

    from prefixbot.bot import PrefixBot

    bot = PrefixBot(settings)
    logger.info(f"Starting {settings.bot.name}...")
    # log_handler=None: disable discord.py's default logging setup and use ours
    bot.run(settings.bot.token, log_handler=None)
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file, config_file=args.config)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)

    if args.command == "config":
        return cmd_config(settings)
    elif args.command == "run":
        return cmd_run(settings)
    elif args.command == "commands":
        return cmd_commands(settings)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
