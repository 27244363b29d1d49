"""Command execution engine for Star Colony."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..commands import BuildCommand, CommandExecution, CommandRegistry
from ..core.constants import (
    DEFAULT_CHART_DIR, DEFAULT_PLANET_NAMES, DEFAULT_PLAYER_NAME, STARTING_TURN
)
from ..core.enums import BuildingTypeId, CommandKind, Resource
from ..core.exceptions import (
    PlanetNotFoundError, PlayerNotFoundError, StarColonyError, UnknownInternalCommandError,
    UnrecognizedBuildingError
)
from ..data import BuildingsConfig
from ..entities.planet import Planet, PlanetStatus
from ..entities.player import Player, create_starting_player
from ..utils.validation import GameValidator, Validator
from .turn import Turn


@dataclass
class GameSettings:
    """Start-up options for a game session."""

    player_name: str = DEFAULT_PLAYER_NAME
    planet_names: List[str] = field(default_factory=lambda: list(DEFAULT_PLANET_NAMES))
    consume_resources_on_build: bool = True
    starting_turn: int = STARTING_TURN
    chart_output_dir: str = DEFAULT_CHART_DIR

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Validate settings."""
        GameValidator.validate_player_name(self.player_name)
        Validator.validate_type(self.planet_names, list, "planet_names")
        for planet_name in self.planet_names:
            GameValidator.validate_planet_name(planet_name)
        Validator.validate_unique_list(self.planet_names, "planet_names")
        Validator.validate_type(self.consume_resources_on_build, bool, "consume_resources_on_build")
        Validator.validate_type(self.starting_turn, int, "starting_turn")
        Validator.validate_range(self.starting_turn, 1, 10**6, "starting_turn")
        Validator.validate_type(self.chart_output_dir, str, "chart_output_dir")


StockpileSnapshot = Tuple[int, Dict[Resource, int]]


class GameCore:
    """Owns all game state and applies one command at a time."""

    def __init__(self, command_registry: CommandRegistry, buildings_config: BuildingsConfig,
                 settings: Optional[GameSettings] = None):
        self.command_registry = command_registry
        self.buildings_config = buildings_config
        self.settings = settings or GameSettings()

        self.turn = Turn(self.settings.starting_turn)
        player = create_starting_player(
            self.settings.player_name, self.settings.planet_names, buildings_config
        )
        self.players: Dict[str, Player] = {player.name: player}
        self.current_player = player.name
        self.running = True
        self.stockpile_history: List[StockpileSnapshot] = []

        self.handlers: Dict[CommandKind, Callable[[CommandExecution], Optional[str]]] = {}
        self._setup_default_handlers()

        logging.info(f"Game started for {player.name} with {player.planet_count} planet(s)")

    @classmethod
    def from_config_files(cls, buildings_path: Union[str, Path], commands_path: Union[str, Path],
                          settings: Optional[GameSettings] = None) -> "GameCore":
        """Create the engine from the buildings and commands TOML files."""
        buildings_config = BuildingsConfig.load(buildings_path)
        command_registry = CommandRegistry.load(commands_path)
        return cls(command_registry, buildings_config, settings)

    def _setup_default_handlers(self) -> None:
        self.register_handler(CommandKind.HELP, self._handle_help)
        self.register_handler(CommandKind.STATUS, self._handle_status)
        self.register_handler(CommandKind.BUILD, self._handle_build)
        self.register_handler(CommandKind.END_TURN, self._handle_end_turn)
        self.register_handler(CommandKind.QUIT, self._handle_quit)
        self.register_handler(CommandKind.UNKNOWN_INTERNAL, self._handle_unknown_internal)

    def register_handler(self, kind: CommandKind,
                         handler: Callable[[CommandExecution], Optional[str]]) -> None:
        """Register or replace the handler for a command kind."""
        self.handlers[kind] = handler

    # Command execution

    def execute_command(self, text: str) -> Optional[str]:
        """Resolve raw input through the registry and execute it."""
        return self.execute(self.command_registry.parse(text))

    def execute(self, command: CommandExecution) -> Optional[str]:
        """Execute an already resolved command."""
        handler = self.handlers.get(command.kind, self._handle_unknown_internal)
        try:
            return handler(command)
        except StarColonyError as e:
            logging.info(f"Command '{command.name}' failed: {e}")
            raise

    def _handle_help(self, command: CommandExecution) -> Optional[str]:
        return "Help command executed."

    def _handle_status(self, command: CommandExecution) -> Optional[str]:
        player = self.get_current_player()
        lines = [f"Turn {self.turn.turn_number}, {player}"]
        production = ", ".join(f"{r.value} +{v}" for r, v in player.get_total_production().items())
        lines.append(f"Production per turn: {production}")
        for planet_name in player.get_planet_names():
            lines.extend(self.get_current_player_planet_status(planet_name).to_lines())
        return "\n".join(lines)

    def _handle_build(self, command: BuildCommand) -> Optional[str]:
        type_id = BuildingTypeId.from_name(command.building)
        if type_id is None:
            raise UnrecognizedBuildingError(
                f"Command '{command.building}' not recognized",
                error_code="UNRECOGNIZED_BUILDING",
                context={"building": command.building}
            )

        planet = self._require_planet(command.planet)
        building = planet.build(
            type_id,
            self.buildings_config.get(type_id),
            consume_resources=self.settings.consume_resources_on_build,
        )
        return f"{building.name} on {planet.name} upgraded to level {building.level}."

    def _handle_end_turn(self, command: CommandExecution) -> Optional[str]:
        player = self.get_current_player()
        player.process_turn_end()
        finished = self.turn.next_turn()
        self.stockpile_history.append((finished, player.get_total_stockpile()))
        logging.info(f"Turn {finished} ended")
        return f"Turn {finished} ended."

    def _handle_quit(self, command: CommandExecution) -> Optional[str]:
        self.running = False
        logging.info("Quit requested")
        return "Quitting game."

    def _handle_unknown_internal(self, command: CommandExecution) -> Optional[str]:
        raise UnknownInternalCommandError(
            f"Command '{command.parsed.definition.name}' has no execution logic",
            error_code="UNKNOWN_INTERNAL",
            context={"command": command.parsed.definition.name}
        )

    def _require_planet(self, planet_name: str) -> Planet:
        planet = self.get_current_player().get_mut_planet(planet_name)
        if planet is None:
            raise PlanetNotFoundError(
                f"Planet '{planet_name}' not found",
                error_code="PLANET_NOT_FOUND",
                context={"player": self.current_player, "planet": planet_name}
            )
        return planet

    # Read-only accessors

    def get_current_player(self) -> Player:
        player = self.players.get(self.current_player)
        if player is None:
            raise PlayerNotFoundError(
                f"Player {self.current_player} not found",
                error_code="PLAYER_NOT_FOUND",
                context={"player": self.current_player}
            )
        return player

    def get_current_turn(self) -> int:
        return self.turn.turn_number

    def get_current_player_name(self) -> str:
        return self.current_player

    def get_current_player_planet_names(self) -> List[str]:
        return self.get_current_player().get_planet_names()

    def get_current_player_planet_status(self, planet_name: str) -> PlanetStatus:
        """Status snapshot of one of the current player's planets."""
        player = self.get_current_player()
        return self._require_planet(planet_name).get_status(player.planet_count)

    def get_planet_count(self) -> int:
        return self.get_current_player().planet_count

    def is_running(self) -> bool:
        return self.running

    def get_stockpile_history(self) -> List[StockpileSnapshot]:
        """(finished turn, total stockpile) recorded at every end of turn."""
        return list(self.stockpile_history)
