"""Command definitions, registry and typed commands."""

from .command import (
    CommandDefinition, ParsedCommand, CommandExecution, HelpCommand, StatusCommand,
    BuildCommand, EndTurnCommand, QuitCommand, UnknownInternalCommand, to_execution
)
from .registry import CommandRegistry

__all__ = [
    "CommandDefinition", "ParsedCommand", "CommandExecution", "HelpCommand", "StatusCommand",
    "BuildCommand", "EndTurnCommand", "QuitCommand", "UnknownInternalCommand",
    "CommandRegistry", "to_execution",
]
