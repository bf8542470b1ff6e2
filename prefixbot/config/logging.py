"""
Logging configuration and setup.

Provides colored console output and optional file output for the
``prefixbot`` logger tree, and routes discord.py's own logger through the
same handlers.
"""

import logging
import sys
from pathlib import Path

from prefixbot.config.settings import Settings


class ColoredFormatter(logging.Formatter):
    """Formatter that adds color to console output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with color."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # Records are shared between handlers; keep the file handler uncolored
            record.levelname = levelname


def _build_handlers(settings: Settings) -> list[logging.Handler]:
    level = getattr(logging, settings.log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        ColoredFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    handlers: list[logging.Handler] = [console_handler]

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    return handlers


def setup_logging(settings: Settings) -> None:
    """
    Configure logging based on settings.

    Args:
        settings: Application settings containing log configuration
    """
    handlers = _build_handlers(settings)

    # Our own tree follows the configured level; discord.py stays at INFO
    # or above so gateway chatter doesn't drown the console in DEBUG mode.
    for name, level in (
        ("prefixbot", settings.log_level),
        ("discord", max(logging.INFO, getattr(logging, settings.log_level))),
    ):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    root_logger = logging.getLogger("prefixbot")
    root_logger.info(f"Logging initialized - Level: {settings.log_level}")
    if settings.log_file:
        root_logger.info(f"Logging to file: {settings.log_file}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    if name == "prefixbot" or name.startswith("prefixbot."):
        return logging.getLogger(name)
    return logging.getLogger(f"prefixbot.{name}")
