"""Typed commands produced by the command registry."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..core.enums import CommandKind
from ..core.exceptions import WrongArgumentCountError


@dataclass(frozen=True)
class CommandDefinition:
    """One configured command signature."""
    name: str
    description: str
    expected_args: int
    aliases: Tuple[str, ...] = ()
    arg_hints: Tuple[str, ...] = ()

    @property
    def kind(self) -> CommandKind:
        return CommandKind.from_definition_name(self.name)

    def usage(self) -> str:
        """Usage line such as 'build <building> <planet>'."""
        hints = " ".join(f"<{hint}>" for hint in self.arg_hints)
        return f"{self.name} {hints}".rstrip()

    def format_help(self) -> List[str]:
        """Help text for this definition."""
        lines = [f"Command: {self.usage()}"]
        if self.aliases:
            lines.append(f"Aliases: {', '.join(self.aliases)}")
        lines.append(self.description)
        return lines


@dataclass
class ParsedCommand:
    """Command text matched against a definition with the right argument count."""
    name: str
    definition: CommandDefinition
    args: List[str] = field(default_factory=list)


@dataclass
class CommandExecution:
    """Base class for commands the engine can dispatch."""
    parsed: ParsedCommand

    kind = CommandKind.UNKNOWN_INTERNAL
    arg_range = (0, None)

    def __post_init__(self):
        """Reject definitions whose argument count the command cannot use."""
        count = len(self.parsed.args)
        low, high = self.arg_range
        if count < low or (high is not None and count > high):
            raise WrongArgumentCountError(
                f"Command '{self.parsed.definition.name}' cannot take {count} argument(s)",
                error_code="WRONG_ARG_COUNT",
                context={"command": self.parsed.definition.name, "args": count}
            )

    @property
    def name(self) -> str:
        return self.parsed.name


@dataclass
class HelpCommand(CommandExecution):
    """Show all commands, or the definitions of one command."""
    kind = CommandKind.HELP
    arg_range = (0, 1)

    @property
    def topic(self) -> Optional[str]:
        return self.parsed.args[0].lower() if self.parsed.args else None


@dataclass
class StatusCommand(CommandExecution):
    """Show the current player's planets."""
    kind = CommandKind.STATUS
    arg_range = (0, 0)


@dataclass
class BuildCommand(CommandExecution):
    """Upgrade one building on one planet."""
    kind = CommandKind.BUILD
    arg_range = (2, 2)

    @property
    def building(self) -> str:
        return self.parsed.args[0]

    @property
    def planet(self) -> str:
        return self.parsed.args[1]


@dataclass
class EndTurnCommand(CommandExecution):
    """Finish the turn and collect production."""
    kind = CommandKind.END_TURN
    arg_range = (0, 0)


@dataclass
class QuitCommand(CommandExecution):
    """Stop the game loop."""
    kind = CommandKind.QUIT
    arg_range = (0, 0)


@dataclass
class UnknownInternalCommand(CommandExecution):
    """Configured command without execution logic."""
    kind = CommandKind.UNKNOWN_INTERNAL


_COMMAND_CLASSES = {
    CommandKind.HELP: HelpCommand,
    CommandKind.STATUS: StatusCommand,
    CommandKind.BUILD: BuildCommand,
    CommandKind.END_TURN: EndTurnCommand,
    CommandKind.QUIT: QuitCommand,
}


def to_execution(parsed: ParsedCommand) -> CommandExecution:
    """Wrap a parsed command in the typed command for its definition."""
    command_class = _COMMAND_CLASSES.get(parsed.definition.kind, UnknownInternalCommand)
    return command_class(parsed)
