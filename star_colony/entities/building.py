"""Building entities: the upgrade state machine of a planet's structures."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..core.enums import BuildingRole, BuildingTypeId, Resource
from ..core.exceptions import (
    ConfigValidationError, WrongBuildingConfigurationError, raise_if_max_level
)
from ..data import BuildingConfig, level_value
from ..utils.validation import Validator
from .base import BaseEntity


def derived_value(per_level: Tuple[int, ...], level: int, building_name: str) -> int:
    """Production rate or capacity at `level`, raising if the table has no entry."""
    value = level_value(per_level, level)
    if value is None:
        raise WrongBuildingConfigurationError(
            building_name, f"no per-level entry for level {level}"
        )
    return value


@dataclass
class Building(BaseEntity):
    """A single upgradeable structure bound to its building configuration.

    Subclasses recompute their derived economic field in `_refresh` whenever the
    level changes.
    """

    config: Optional[BuildingConfig] = None
    level: int = 0

    def validate(self) -> None:
        """Validate building state."""
        if self.config is None:
            raise ConfigValidationError("Building requires a configuration", error_code="MISSING_CONFIG")
        Validator.validate_range(self.level, 0, self.max_level, "level")

    @property
    def type_id(self) -> BuildingTypeId:
        return self.config.type_id

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def max_level(self) -> int:
        return self.config.max_level

    @property
    def is_max_level(self) -> bool:
        """Check if the building cannot be upgraded any further."""
        return self.level >= self.max_level

    def upgrade(self) -> None:
        """Raise the level by one and refresh derived values.

        Raises MaxLevelReachedError at max level. If the configuration has no entry
        for the new level the upgrade is rolled back and
        WrongBuildingConfigurationError is raised.
        """
        raise_if_max_level(self.level, self.max_level)

        previous = self.level
        self.level += 1
        try:
            self._refresh()
        except WrongBuildingConfigurationError:
            self.level = previous
            raise

        logging.debug(f"{self.name} upgraded to level {self.level}")

    def _refresh(self) -> None:
        """Recompute fields derived from the configuration at the current level."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert building to dictionary representation."""
        return {
            "type_id": self.type_id.value,
            "name": self.name,
            "level": self.level,
            "max_level": self.max_level,
        }

    def __str__(self) -> str:
        return f"{self.name} (level {self.level}/{self.max_level})"


@dataclass
class BaseBuilding(Building):
    """Leveled building with no economic output (command center, shipyard, lab)."""
    pass


@dataclass
class Productor(Building):
    """Building producing one resource each turn."""

    production_rate: int = field(default=0, init=False)

    def __post_init__(self):
        super().__post_init__()
        self._refresh()

    @property
    def resource(self) -> Resource:
        return self.config.production.resource

    def _refresh(self) -> None:
        production = self.config.production
        if production is None:
            raise WrongBuildingConfigurationError(self.name, "missing production table")
        self.production_rate = derived_value(production.rate_per_level, self.level, self.name)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"resource": self.resource.value, "production_rate": self.production_rate})
        return data


@dataclass
class Storage(Building):
    """Building holding up to `capacity` units of one resource."""

    capacity: int = field(default=0, init=False)
    current_amount: int = 0

    def __post_init__(self):
        super().__post_init__()
        self._refresh()
        Validator.validate_range(self.current_amount, 0, self.capacity, "current_amount")

    @property
    def resource(self) -> Resource:
        return self.config.storage.resource

    @property
    def free_capacity(self) -> int:
        return max(0, self.capacity - self.current_amount)

    def _refresh(self) -> None:
        storage = self.config.storage
        if storage is None:
            raise WrongBuildingConfigurationError(self.name, "missing storage table")
        self.capacity = derived_value(storage.capacity_per_level, self.level, self.name)

    def add_resource(self, amount: int) -> int:
        """Store as much of `amount` as fits and return the amount actually stored."""
        Validator.validate_non_negative(amount, "amount")
        added = min(amount, self.free_capacity)
        self.current_amount += added
        return added

    def remove_resource(self, amount: int) -> int:
        """Take up to `amount` out of storage and return the amount removed."""
        Validator.validate_non_negative(amount, "amount")
        removed = min(amount, self.current_amount)
        self.current_amount -= removed
        return removed

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "resource": self.resource.value,
            "capacity": self.capacity,
            "current_amount": self.current_amount,
        })
        return data

    def __str__(self) -> str:
        return f"{super().__str__()} {self.current_amount}/{self.capacity}"


_BUILDING_CLASSES = {
    BuildingRole.BASE: BaseBuilding,
    BuildingRole.PRODUCER: Productor,
    BuildingRole.STORAGE: Storage,
}


def create_building(config: BuildingConfig, level: int = 0) -> Building:
    """Create the building shape matching the configured type."""
    building_class = _BUILDING_CLASSES[config.type_id.role]
    return building_class(config=config, level=level)
