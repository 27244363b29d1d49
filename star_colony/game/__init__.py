"""Game orchestration: turn counter and command execution engine."""

from .turn import Turn
from .game_core import GameCore, GameSettings

__all__ = ["Turn", "GameCore", "GameSettings"]
