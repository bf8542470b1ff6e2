"""
Command registry.

Built once at startup from an explicit list of command definitions, then
frozen. Lookups after that are read-only, so concurrent message handlers
can share it without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from prefixbot.bot.models import CommandDefinition
from prefixbot.config.logging import get_logger

logger = get_logger(__name__)


class CommandRegistry:
    """
    Name -> CommandDefinition mapping.

    Registration order matters: when two definitions share a name the one
    registered last wins (a warning is logged). Once ``freeze()`` has been
    called, further registration raises RuntimeError.

    Example::

        registry = CommandRegistry.from_definitions(builtin_commands())
        command = registry.get("ping")
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandDefinition] = {}
        self._view: Mapping[str, CommandDefinition] = MappingProxyType(self._commands)
        self._frozen = False

    @classmethod
    def from_definitions(cls, definitions: Iterable[CommandDefinition]) -> CommandRegistry:
        """Register every definition in order and return the frozen registry."""
        registry = cls()
        for definition in definitions:
            registry.register(definition)
        registry.freeze()
        return registry

    def register(self, definition: CommandDefinition) -> None:
        """Add a command, replacing any earlier command with the same name."""
        if self._frozen:
            raise RuntimeError("Command registry is frozen; register commands before startup")

        previous = self._commands.get(definition.name)
        if previous is not None:
            logger.warning(
                f"Command {definition.name!r} from category {definition.category!r} "
                f"replaces the one from {previous.category!r}"
            )
        self._commands[definition.name] = definition

    def freeze(self) -> None:
        """Stop accepting registrations."""
        if not self._frozen:
            self._frozen = True
            logger.info(f"Loaded {len(self._commands)} command(s)")

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def commands(self) -> Mapping[str, CommandDefinition]:
        """Read-only view of the registered commands."""
        return self._view

    def get(self, name: str) -> CommandDefinition | None:
        """Look up a command by exact name; None if unknown."""
        return self._view.get(name)

    def by_category(self) -> dict[str, list[CommandDefinition]]:
        """Commands grouped by category, each group sorted by name."""
        grouped: dict[str, list[CommandDefinition]] = {}
        for definition in self._commands.values():
            grouped.setdefault(definition.category, []).append(definition)
        return {
            category: sorted(commands, key=lambda c: c.name)
            for category, commands in sorted(grouped.items())
        }

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[CommandDefinition]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)
