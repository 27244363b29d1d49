"""Command registry: loads command definitions and resolves typed input."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.constants import HELP_HINT
from ..core.exceptions import (
    ConfigValidationError, EmptyCommandError, UnknownCommandError, WrongArgumentCountError
)
from ..data import read_toml
from .command import CommandDefinition, CommandExecution, ParsedCommand, to_execution


class CommandRegistry:
    """Command definitions grouped by command name and alias."""

    def __init__(self, definitions: List[CommandDefinition]):
        self._ordered = list(definitions)
        self.definitions: Dict[str, List[CommandDefinition]] = {}
        for definition in self._ordered:
            for key in (definition.name, *definition.aliases):
                self.definitions.setdefault(key.lower(), []).append(definition)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommandRegistry":
        """Build a registry from a parsed `[[commands]]` table."""
        entries = data.get("commands")
        if not isinstance(entries, list):
            raise ConfigValidationError(
                "Command configuration must contain a [[commands]] list",
                error_code="MISSING_COMMANDS"
            )
        return cls([_definition_from_dict(entry) for entry in entries])

    @classmethod
    def load(cls, path: Union[str, Path]) -> "CommandRegistry":
        """Load the commands TOML file."""
        registry = cls.from_dict(read_toml(path, "command"))
        logging.info(f"Loaded {len(registry._ordered)} command definitions from {path}")
        return registry

    def get_command_definitions(self, command_name: str) -> Optional[List[CommandDefinition]]:
        """Definitions registered under a name or alias."""
        return self.definitions.get(command_name.lower())

    def get_all_command_definitions(self) -> List[CommandDefinition]:
        """Every definition, in configuration order."""
        return list(self._ordered)

    def parse(self, text: str) -> CommandExecution:
        """Resolve raw input into a typed command after checking its argument count."""
        parts = text.split()
        if not parts:
            raise EmptyCommandError(f"No command provided. {HELP_HINT}", error_code="EMPTY_COMMAND")

        command_name = parts[0].lower()
        args = parts[1:]

        possible = self.get_command_definitions(command_name)
        if not possible:
            raise UnknownCommandError(
                f"Unknown command: '{command_name}'. {HELP_HINT}",
                error_code="UNKNOWN_COMMAND",
                context={"command": command_name}
            )

        for definition in possible:
            if definition.expected_args == len(args):
                return to_execution(ParsedCommand(command_name, definition, args))

        expected = " or ".join(str(d.expected_args) for d in possible)
        raise WrongArgumentCountError(
            f"Wrong number of arguments for command '{command_name}'. "
            f"Got {len(args)}, expected {expected}.",
            error_code="WRONG_ARG_COUNT",
            context={"command": command_name, "got": len(args)}
        )


def _definition_from_dict(entry: Any) -> CommandDefinition:
    if not isinstance(entry, dict):
        raise ConfigValidationError("Each command must be a table", error_code="INVALID_COMMAND")

    for required in ("name", "description", "expected_args"):
        if required not in entry:
            raise ConfigValidationError(
                f"Command is missing '{required}'",
                error_code="MISSING_FIELD",
                context={"command": entry.get("name", "?"), "field": required}
            )

    expected_args = entry["expected_args"]
    if isinstance(expected_args, bool) or not isinstance(expected_args, int) or expected_args < 0:
        raise ConfigValidationError(
            f"expected_args must be a non-negative integer, got {expected_args!r}",
            error_code="INVALID_COMMAND",
            context={"command": entry["name"]}
        )

    return CommandDefinition(
        name=str(entry["name"]).lower(),
        description=str(entry["description"]),
        expected_args=expected_args,
        aliases=tuple(str(alias).lower() for alias in entry.get("aliases", [])),
        arg_hints=tuple(str(hint) for hint in entry.get("arg_hints", [])),
    )
