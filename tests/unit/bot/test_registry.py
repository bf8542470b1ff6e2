"""
Tests for CommandDefinition and CommandRegistry.
"""

from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from prefixbot.bot.commands import CATEGORIES, builtin_commands
from prefixbot.bot.models import CommandDefinition
from prefixbot.bot.registry import CommandRegistry


def _definition(name="ping", category="debug", **kwargs):
    defaults = dict(
        name=name,
        description=f"{name} command",
        usage="<None>",
        category=category,
        handler=AsyncMock(),
    )
    defaults.update(kwargs)
    return CommandDefinition(**defaults)


class TestCommandDefinition:
    def test_level_defaults_to_none(self):
        assert _definition().level is None

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            _definition(name="")

    def test_negative_level_rejected(self):
        with pytest.raises(ValidationError):
            _definition(level=-1)

    def test_handler_must_be_callable(self):
        with pytest.raises(ValidationError):
            _definition(handler="not a function")

    def test_definitions_are_frozen(self):
        definition = _definition()
        with pytest.raises(ValidationError):
            definition.name = "other"


class TestCommandRegistry:
    def test_lookup_by_name(self):
        ping = _definition("ping")
        registry = CommandRegistry.from_definitions([ping, _definition("say")])
        assert registry.get("ping") is ping
        assert "say" in registry
        assert len(registry) == 2

    def test_unknown_name_returns_none(self):
        registry = CommandRegistry.from_definitions([_definition("ping")])
        assert registry.get("pong") is None
        assert "pong" not in registry

    def test_lookup_is_case_sensitive(self):
        registry = CommandRegistry.from_definitions([_definition("ping")])
        assert registry.get("PING") is None

    def test_last_registration_wins_on_collision(self):
        first = _definition("say", category="debug")
        second = _definition("say", category="general", level=5)
        registry = CommandRegistry.from_definitions([first, second])
        assert registry.get("say") is second
        assert len(registry) == 1

    def test_collision_logs_warning(self):
        registry = CommandRegistry()
        registry.register(_definition("say", category="debug"))
        with patch("prefixbot.bot.registry.logger") as mock_logger:
            registry.register(_definition("say", category="general"))
        mock_logger.warning.assert_called_once()
        assert "replaces" in mock_logger.warning.call_args[0][0]

    def test_frozen_registry_rejects_registration(self):
        registry = CommandRegistry.from_definitions([_definition("ping")])
        assert registry.frozen
        with pytest.raises(RuntimeError):
            registry.register(_definition("say"))

    def test_commands_view_is_read_only(self):
        registry = CommandRegistry.from_definitions([_definition("ping")])
        with pytest.raises(TypeError):
            registry.commands["say"] = _definition("say")

    def test_commands_view_is_stable(self):
        registry = CommandRegistry.from_definitions([_definition("ping")])
        assert registry.commands is registry.commands

    def test_freeze_is_idempotent(self):
        registry = CommandRegistry()
        registry.register(_definition("ping"))
        registry.freeze()
        registry.freeze()
        assert registry.frozen
        assert registry.get("ping") is not None

    def test_unfrozen_registry_accepts_registration(self):
        registry = CommandRegistry()
        assert not registry.frozen
        registry.register(_definition("ping"))
        assert "ping" in registry.commands

    def test_by_category_groups_and_sorts(self):
        registry = CommandRegistry.from_definitions(
            [
                _definition("say", category="general"),
                _definition("ping", category="debug"),
                _definition("help", category="general"),
            ]
        )
        grouped = registry.by_category()
        assert list(grouped) == ["debug", "general"]
        assert [c.name for c in grouped["general"]] == ["help", "say"]


class TestBuiltinCommands:
    def test_builtins_register_without_collisions(self):
        definitions = builtin_commands()
        registry = CommandRegistry.from_definitions(definitions)
        assert len(registry) == len(definitions)
        assert {"ping", "eval", "say", "help"} <= set(registry.commands)

    def test_categories_match_definitions(self):
        for category, commands in CATEGORIES.items():
            assert all(command.category == category for command in commands)

    def test_privileged_builtins_have_levels(self):
        registry = CommandRegistry.from_definitions(builtin_commands())
        assert registry.get("eval").level == 5
        assert registry.get("say").level == 5
        assert registry.get("ping").level is None
