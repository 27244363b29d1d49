"""Planet entity for Star Colony."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..core.enums import BuildingTypeId, Resource, get_producer_types
from ..core.exceptions import (
    BuildingNotBuiltError, IncorrectBuildingTypeError, MaxLevelReachedError,
    WrongBuildingConfigurationError, raise_if_insufficient_resources
)
from ..data import BuildingConfig, BuildingsConfig
from ..utils.validation import GameValidator
from .base import BaseEntity
from .building import Building, Productor, Storage, create_building


@dataclass
class PlanetStatus:
    """Read-only snapshot of a planet for display."""
    name: str
    buildings: List[Tuple[str, int]]
    production: Dict[Resource, int]
    storage: Dict[Resource, Tuple[int, int]]
    planet_count: int = 1

    def to_lines(self) -> List[str]:
        """Render the snapshot as plain text lines."""
        lines = [f"Planet {self.name} ({self.planet_count} planet{'s' if self.planet_count != 1 else ''})"]
        lines.append("  Buildings:")
        for building_name, level in self.buildings:
            lines.append(f"    {building_name}: level {level}")
        lines.append("  Resources:")
        for resource in Resource:
            current, capacity = self.storage.get(resource, (0, 0))
            rate = self.production.get(resource, 0)
            lines.append(f"    {resource.value}: {current}/{capacity} (+{rate}/turn)")
        return lines


@dataclass
class Planet(BaseEntity):
    """A colonised planet holding exactly one building of every type."""

    name: str = ""
    buildings: Dict[BuildingTypeId, Building] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate planet state, including the one-building-per-type invariant."""
        GameValidator.validate_planet_name(self.name)
        for type_id, building in self.buildings.items():
            if building.type_id != type_id:
                raise IncorrectBuildingTypeError(
                    f"Slot {type_id.value} holds {building.type_id.value}",
                    error_code="INCORRECT_BUILDING_TYPE",
                    context={"planet": self.name, "slot": type_id.value}
                )

    @classmethod
    def create(cls, name: str, buildings_config: BuildingsConfig) -> "Planet":
        """Create a planet with every building type at level 0."""
        buildings = {
            type_id: create_building(buildings_config.get(type_id))
            for type_id in BuildingTypeId
        }
        return cls(name=name, buildings=buildings)

    def get_building(self, building_id: BuildingTypeId) -> Building:
        """Get the building occupying a slot."""
        building = self.buildings.get(building_id)
        if building is None:
            raise BuildingNotBuiltError(
                f"{building_id.display_name} is not built on {self.name}",
                error_code="BUILDING_NOT_BUILT",
                context={"planet": self.name, "building": building_id.value}
            )
        return building

    def get_storage(self, resource: Resource) -> Storage:
        """Get the storage building holding a resource."""
        storage_id = BuildingTypeId.storage_for(resource)
        building = self.get_building(storage_id)
        if not isinstance(building, Storage):
            raise IncorrectBuildingTypeError(
                f"{storage_id.display_name} on {self.name} is not a storage building",
                error_code="INCORRECT_BUILDING_TYPE",
                context={"planet": self.name, "building": storage_id.value}
            )
        return building

    def get_production_rates(self) -> Dict[Resource, int]:
        """Total production per resource; every resource is present."""
        rates = {resource: 0 for resource in Resource}
        for type_id in get_producer_types():
            building = self.get_building(type_id)
            if not isinstance(building, Productor):
                raise IncorrectBuildingTypeError(
                    f"{type_id.display_name} on {self.name} is not a producer",
                    error_code="INCORRECT_BUILDING_TYPE",
                    context={"planet": self.name, "building": type_id.value}
                )
            rates[building.resource] += building.production_rate
        return rates

    def get_stockpile(self) -> Dict[Resource, int]:
        """Amount currently stored per resource."""
        return {resource: self.get_storage(resource).current_amount for resource in Resource}

    def generate_resources(self) -> Dict[Resource, int]:
        """Move one turn of production into storage, returning the amounts stored."""
        stored = {}
        for resource, rate in self.get_production_rates().items():
            if rate <= 0:
                continue
            stored[resource] = self.get_storage(resource).add_resource(rate)

        logging.debug(f"Planet {self.name} stored {stored}")
        return stored

    def get_upgrade_cost(self, building_id: BuildingTypeId,
                         building_config: BuildingConfig) -> Dict[Resource, int]:
        """Cost of taking a building from its current level to the next one."""
        level = self.get_building(building_id).level
        cost = {}
        for resource in Resource:
            table = building_config.upgrade_cost.for_resource(resource)
            if not table:
                cost[resource] = 0
            elif level < len(table):
                cost[resource] = table[level]
            else:
                raise WrongBuildingConfigurationError(
                    building_config.name,
                    f"no {resource.value} cost for level {level}"
                )
        return cost

    def has_enough_resources(self, cost: Dict[Resource, int]) -> bool:
        """Check if the planet's storages cover the given cost."""
        return all(
            self.get_storage(resource).current_amount >= amount
            for resource, amount in cost.items()
        )

    def build(self, building_id: BuildingTypeId, building_config: BuildingConfig,
              consume_resources: bool = True) -> Building:
        """Upgrade a building by one level if the planet can afford it.

        Nothing is changed when any check fails. When `consume_resources` is set the
        cost is taken from the planet's storages after a successful upgrade.
        """
        if building_config.type_id != building_id:
            raise WrongBuildingConfigurationError(
                building_config.name,
                f"configuration for {building_config.type_id.value} used to build {building_id.value}"
            )

        building = self.get_building(building_id)
        if building.is_max_level:
            raise MaxLevelReachedError(building.level, building.max_level)

        cost = self.get_upgrade_cost(building_id, building_config)
        if not self.has_enough_resources(cost):
            for resource, required in cost.items():
                raise_if_insufficient_resources(
                    required, self.get_storage(resource).current_amount, resource.value
                )

        building.upgrade()

        if consume_resources:
            for resource, amount in cost.items():
                if amount:
                    self.get_storage(resource).remove_resource(amount)

        logging.info(f"{building.name} on {self.name} upgraded to level {building.level}")
        return building

    def get_status(self, total_planet_count: int) -> PlanetStatus:
        """Snapshot of buildings, production and storage."""
        storage = {}
        for resource in Resource:
            silo = self.get_storage(resource)
            storage[resource] = (silo.current_amount, silo.capacity)

        return PlanetStatus(
            name=self.name,
            buildings=[(b.name, b.level) for b in self.buildings.values()],
            production=self.get_production_rates(),
            storage=storage,
            planet_count=total_planet_count,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert planet to dictionary representation."""
        return {
            "name": self.name,
            "buildings": [b.to_dict() for b in self.buildings.values()],
            "production": {r.value: v for r, v in self.get_production_rates().items()},
        }

    def __str__(self) -> str:
        built = sum(1 for b in self.buildings.values() if b.level > 0)
        return f"Planet {self.name} with {built}/{len(self.buildings)} buildings constructed"
