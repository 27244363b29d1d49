"""Player entity for Star Colony."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.enums import Resource
from ..core.exceptions import DuplicatePlanetError, ValidationError
from ..data import BuildingsConfig
from ..utils.validation import GameValidator
from .base import BaseEntity
from .planet import Planet


@dataclass
class Player(BaseEntity):
    """Represents a player and the planets they own."""

    name: str = ""
    planets: Dict[str, Planet] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate player state."""
        GameValidator.validate_player_name(self.name)
        for planet_name, planet in self.planets.items():
            if planet.name != planet_name:
                raise ValidationError(f"Planet {planet.name} is registered as {planet_name}")

    @property
    def planet_count(self) -> int:
        return len(self.planets)

    def add_planet(self, planet: Planet) -> None:
        """Add a planet to this player."""
        if planet.name in self.planets:
            raise DuplicatePlanetError(
                f"Player {self.name} already owns a planet named {planet.name}",
                error_code="DUPLICATE_PLANET",
                context={"player": self.name, "planet": planet.name}
            )
        self.planets[planet.name] = planet

    def get_planet(self, name: str) -> Optional[Planet]:
        """Get planet by name."""
        return self.planets.get(name)

    def get_mut_planet(self, name: str) -> Optional[Planet]:
        """Get a planet for modification; planets are shared references."""
        return self.planets.get(name)

    def get_planet_names(self) -> List[str]:
        """Names of owned planets in colonisation order."""
        return list(self.planets)

    def get_total_stockpile(self) -> Dict[Resource, int]:
        """Stored resources summed over every planet."""
        totals = {resource: 0 for resource in Resource}
        for planet in self.planets.values():
            for resource, amount in planet.get_stockpile().items():
                totals[resource] += amount
        return totals

    def get_total_production(self) -> Dict[Resource, int]:
        """Production per turn summed over every planet."""
        totals = {resource: 0 for resource in Resource}
        for planet in self.planets.values():
            for resource, rate in planet.get_production_rates().items():
                totals[resource] += rate
        return totals

    def process_turn_end(self) -> Dict[str, Dict[Resource, int]]:
        """Generate one turn of resources on every planet.

        The first failing planet aborts the loop; planets processed before it keep
        their production.
        """
        results = {}
        for planet in self.planets.values():
            results[planet.name] = planet.generate_resources()

        logging.info(f"Turn end processed for {self.name} on {len(results)} planet(s)")
        return results

    def to_dict(self) -> Dict[str, Any]:
        """Convert player to dictionary representation."""
        return {
            "name": self.name,
            "planets": [planet.to_dict() for planet in self.planets.values()],
            "stockpile": {r.value: v for r, v in self.get_total_stockpile().items()},
        }

    def __str__(self) -> str:
        return f"Player {self.name} ({self.planet_count} planet{'s' if self.planet_count != 1 else ''})"


def create_starting_player(name: str, planet_names: List[str],
                           buildings_config: BuildingsConfig) -> Player:
    """Create a player owning fresh planets with every building at level 0."""
    player = Player(name=name)
    for planet_name in planet_names:
        player.add_planet(Planet.create(planet_name, buildings_config))
    return player
