"""Core enumerations for the Star Colony engine."""

from enum import Enum
from typing import Optional


class Resource(Enum):
    """Tradable commodities produced and stored on planets."""
    ENERGY = "Energy"
    MINERALS = "Minerals"
    GAS = "Gas"

    @property
    def cost_key(self) -> str:
        """Key used for this resource in upgrade cost tables."""
        return self.value.lower()


class BuildingRole(Enum):
    """Economic role of a building type."""
    BASE = "base"
    PRODUCER = "producer"
    STORAGE = "storage"


class BuildingTypeId(Enum):
    """Every building a planet can hold, keyed by its configuration name."""
    COMMAND_CENTER = "command_center"
    ORBITAL_SHIPYARD = "orbital_shipyard"
    RESEARCH_LAB = "research_lab"
    FUSION_REACTOR = "fusion_reactor"
    GAS_EXTRACTOR = "gas_extractor"
    MINERAL_MINE = "mineral_mine"
    BATTERY_ARRAY = "battery_array"
    GAS_TANK = "gas_tank"
    MINERAL_SILO = "mineral_silo"

    @property
    def display_name(self) -> str:
        """Human readable name, e.g. 'Command Center'."""
        return self.value.replace("_", " ").title()

    @property
    def role(self) -> BuildingRole:
        """Economic role of this building type."""
        if self in _PRODUCER_RESOURCES:
            return BuildingRole.PRODUCER
        if self in _STORAGE_RESOURCES:
            return BuildingRole.STORAGE
        return BuildingRole.BASE

    @property
    def resource(self) -> Optional[Resource]:
        """Resource bound to a producer or storage, None for base buildings."""
        return _PRODUCER_RESOURCES.get(self) or _STORAGE_RESOURCES.get(self)

    @classmethod
    def from_name(cls, name: str) -> Optional["BuildingTypeId"]:
        """Resolve a user supplied building name, ignoring case and separators."""
        wanted = _normalize(name)
        if not wanted:
            return None
        for type_id in cls:
            if wanted in (_normalize(type_id.value), _normalize(type_id.display_name)):
                return type_id
        return None

    @classmethod
    def storage_for(cls, resource: Resource) -> "BuildingTypeId":
        """Storage building type holding the given resource."""
        for type_id, bound in _STORAGE_RESOURCES.items():
            if bound == resource:
                return type_id
        raise KeyError(resource)


class CommandKind(Enum):
    """Command kinds the engine knows how to execute."""
    HELP = "help"
    STATUS = "status"
    BUILD = "build"
    END_TURN = "endturn"
    QUIT = "quit"
    UNKNOWN_INTERNAL = "unknown_internal"

    @classmethod
    def from_definition_name(cls, name: str) -> "CommandKind":
        """Map a configured command name to its kind."""
        for kind in cls:
            if kind is not cls.UNKNOWN_INTERNAL and kind.value == name.lower():
                return kind
        return cls.UNKNOWN_INTERNAL


_PRODUCER_RESOURCES = {
    BuildingTypeId.FUSION_REACTOR: Resource.ENERGY,
    BuildingTypeId.GAS_EXTRACTOR: Resource.GAS,
    BuildingTypeId.MINERAL_MINE: Resource.MINERALS,
}

_STORAGE_RESOURCES = {
    BuildingTypeId.BATTERY_ARRAY: Resource.ENERGY,
    BuildingTypeId.GAS_TANK: Resource.GAS,
    BuildingTypeId.MINERAL_SILO: Resource.MINERALS,
}


def _normalize(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch not in " _-")


# Utility functions for enum operations
def get_producer_types():
    """Get building types that generate resources."""
    return list(_PRODUCER_RESOURCES)

