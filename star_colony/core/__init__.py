"""Core game engine components."""

from .enums import *
from .exceptions import *
from .constants import *

__all__ = [
    # Enums
    "Resource", "BuildingRole", "BuildingTypeId", "CommandKind",
    # Exceptions
    "StarColonyError", "ConfigurationError", "BuildingError", "CommandError", "ValidationError",
    # Constants
    "STARTING_TURN", "DEFAULT_PLAYER_NAME", "DEFAULT_PLANET_NAMES",
    "DEFAULT_BUILDINGS_CONFIG", "DEFAULT_COMMANDS_CONFIG",
]
