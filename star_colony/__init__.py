"""
Star Colony - a turn-based colony economy engine.

This package provides buildings with per-level production and storage tables,
planets and players that accumulate resources every turn, and a command engine
that turns typed input into state changes.
"""

__version__ = "0.1.0"
__author__ = "Star Colony Team"

from .game.game_core import GameCore, GameSettings
from .entities.player import Player
from .entities.planet import Planet

__all__ = ["GameCore", "GameSettings", "Player", "Planet"]
