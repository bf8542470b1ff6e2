"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
Settings can additionally be read from a JSON config file in the flat
``{"token", "prefix", "adminIds", "levels"}`` layout.
"""

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotSettings(BaseSettings):
    """Discord bot configuration."""

    name: str = Field(default="PrefixBot", description="Bot display name")
    token: str = Field(default="", description="Discord bot token")
    prefix: str = Field(default="!", description="String a message must start with to be a command")
    admin_ids: dict[str, int] = Field(
        default_factory=dict,
        description="Label -> Discord user ID of the bot's administrators. "
                    "Set via BOT__ADMIN_IDS='{\"owner\": 1234}'",
    )
    levels: dict[int, int] = Field(
        default_factory=dict,
        description="Role ID -> integer privilege level. "
                    "Set via BOT__LEVELS='{\"111\": 2, \"222\": 5}'",
    )
    enforce_levels: bool = Field(
        default=True,
        description="If True, commands with a minimum level only run for members "
                    "whose resolved admin level reaches it.",
    )
    mention_ack: bool = Field(
        default=True,
        description="Reply with the command prefix when the bot is @mentioned",
    )
    ignore_bots: bool = Field(
        default=True, description="Ignore messages authored by bot accounts"
    )

    model_config = SettingsConfigDict(env_prefix="BOT_")


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    bot: BotSettings = Field(default_factory=BotSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Keys of the flat JSON config file and the BotSettings field each maps onto
_CONFIG_FILE_KEYS = {
    "token": "token",
    "prefix": "prefix",
    "adminIds": "admin_ids",
    "admin_ids": "admin_ids",
    "levels": "levels",
}


def read_config_file(path: str | Path) -> dict[str, Any]:
    """
    Read a JSON config file into Settings keyword arguments.

    Recognized bot keys are nested under ``bot``; anything else at the top
    level (``log_level``, ``environment``, ...) is passed through as-is.

    Args:
        path: Path to the JSON config file

    Returns:
        Keyword arguments suitable for ``Settings(**kwargs)``

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON object
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    bot: dict[str, Any] = dict(data.pop("bot", None) or {})
    for key in list(data):
        if key in _CONFIG_FILE_KEYS:
            bot[_CONFIG_FILE_KEYS[key]] = data.pop(key)

    if bot:
        data["bot"] = bot
    return data


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(
    env_file: str | Path | None = None,
    config_file: str | Path | None = None,
) -> Settings:
    """
    Load settings from file and environment.

    Values from ``config_file`` take precedence over environment variables,
    which take precedence over the .env file.

    Args:
        env_file: Path to .env file (optional)
        config_file: Path to a JSON config file (optional)

    Returns:
        Loaded settings instance
    """
    global _settings
    overrides = read_config_file(config_file) if config_file else {}
    if env_file:
        _settings = Settings(_env_file=env_file, **overrides)
    else:
        _settings = Settings(**overrides)
    return _settings
