"""Game entity definitions."""

from .base import BaseEntity
from .building import Building, BaseBuilding, Productor, Storage, create_building
from .planet import Planet, PlanetStatus
from .player import Player, create_starting_player

__all__ = [
    "BaseEntity", "Building", "BaseBuilding", "Productor", "Storage", "create_building",
    "Planet", "PlanetStatus", "Player", "create_starting_player",
]
