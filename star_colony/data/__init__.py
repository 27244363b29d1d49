"""Configuration data structures and loaders for Star Colony."""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from ..core.enums import BuildingRole, BuildingTypeId, Resource
from ..core.exceptions import ConfigLoadError, ConfigValidationError
from ..utils.validation import ConfigValidator


_BUILDING_FIELDS = {"name", "max_level", "upgrade_cost", "building_time", "production", "storage"}
_COST_FIELDS = {"energy", "minerals", "gas"}


@dataclass(frozen=True)
class UpgradeCost:
    """Per-level upgrade costs; index is the level before the upgrade."""
    energy: Tuple[int, ...] = ()
    minerals: Tuple[int, ...] = ()
    gas: Tuple[int, ...] = ()

    def for_resource(self, resource: Resource) -> Tuple[int, ...]:
        """Cost table for one resource."""
        return getattr(self, resource.cost_key)


@dataclass(frozen=True)
class ProductionInfo:
    """Production table of a producer building."""
    resource: Resource
    rate_per_level: Tuple[int, ...] = ()

    def get_rate_for_level(self, level: int) -> Optional[int]:
        """Production rate once `level` is reached, None if the table has no entry."""
        return level_value(self.rate_per_level, level)


@dataclass(frozen=True)
class StorageInfo:
    """Capacity table of a storage building."""
    resource: Resource
    capacity_per_level: Tuple[int, ...] = ()

    def get_capacity_for_level(self, level: int) -> Optional[int]:
        """Capacity once `level` is reached, None if the table has no entry."""
        return level_value(self.capacity_per_level, level)


@dataclass(frozen=True)
class BuildingConfig:
    """Static configuration of one building type."""
    type_id: BuildingTypeId
    name: str
    max_level: int
    upgrade_cost: UpgradeCost = field(default_factory=UpgradeCost)
    production: Optional[ProductionInfo] = None
    storage: Optional[StorageInfo] = None
    building_time: Tuple[int, ...] = ()

    def __post_init__(self):
        """Validate table lengths and resource bindings."""
        key = self.type_id.value
        if isinstance(self.max_level, bool) or not isinstance(self.max_level, int) or self.max_level < 0:
            raise ConfigValidationError(
                f"max_level must be a non-negative integer, got {self.max_level!r}",
                error_code="INVALID_MAX_LEVEL",
                context={"building": key}
            )

        for resource in Resource:
            ConfigValidator.validate_level_table(
                self.upgrade_cost.for_resource(resource), self.max_level,
                f"{resource.value} cost", key, allow_empty=True
            )
        ConfigValidator.validate_level_table(
            self.building_time, self.max_level, "Building time", key, allow_empty=True
        )
        if self.production is not None:
            ConfigValidator.validate_level_table(
                self.production.rate_per_level, self.max_level, "Production rate", key, allow_empty=True
            )
        if self.storage is not None:
            ConfigValidator.validate_level_table(
                self.storage.capacity_per_level, self.max_level, "Storage capacity", key, allow_empty=True
            )

        self._validate_role()

    def _validate_role(self) -> None:
        role = self.type_id.role
        key = self.type_id.value
        if role == BuildingRole.PRODUCER:
            if self.production is None or self.production.resource != self.type_id.resource:
                raise ConfigValidationError(
                    f"{key} must declare production of {self.type_id.resource.value}",
                    error_code="RESOURCE_BINDING",
                    context={"building": key}
                )
        elif self.production is not None:
            raise ConfigValidationError(
                f"{key} cannot declare production", error_code="RESOURCE_BINDING", context={"building": key}
            )

        if role == BuildingRole.STORAGE:
            if self.storage is None or self.storage.resource != self.type_id.resource:
                raise ConfigValidationError(
                    f"{key} must declare storage of {self.type_id.resource.value}",
                    error_code="RESOURCE_BINDING",
                    context={"building": key}
                )
        elif self.storage is not None:
            raise ConfigValidationError(
                f"{key} cannot declare storage", error_code="RESOURCE_BINDING", context={"building": key}
            )

    @classmethod
    def from_dict(cls, type_id: BuildingTypeId, data: Dict[str, Any]) -> "BuildingConfig":
        """Create a building configuration from a parsed TOML table."""
        key = type_id.value
        _reject_unknown_fields(data, _BUILDING_FIELDS, key)
        for required in ("name", "max_level", "upgrade_cost"):
            if required not in data:
                raise ConfigValidationError(
                    f"{key} is missing '{required}'", error_code="MISSING_FIELD",
                    context={"building": key, "field": required}
                )

        cost_data = data["upgrade_cost"]
        _reject_unknown_fields(cost_data, _COST_FIELDS, f"{key}.upgrade_cost")
        upgrade_cost = UpgradeCost(**{
            name: _int_tuple(cost_data.get(name, []), f"upgrade_cost.{name}", key)
            for name in _COST_FIELDS
        })

        production = None
        if "production" in data:
            prod = data["production"]
            _reject_unknown_fields(prod, {"resource", "rate_per_level"}, f"{key}.production")
            production = ProductionInfo(
                resource=_parse_resource(prod.get("resource"), key),
                rate_per_level=_int_tuple(prod.get("rate_per_level", []), "production.rate_per_level", key),
            )

        storage = None
        if "storage" in data:
            stor = data["storage"]
            _reject_unknown_fields(stor, {"resource", "capacity_per_level"}, f"{key}.storage")
            storage = StorageInfo(
                resource=_parse_resource(stor.get("resource"), key),
                capacity_per_level=_int_tuple(stor.get("capacity_per_level", []), "storage.capacity_per_level", key),
            )

        building_time = ()
        if "building_time" in data:
            time_data = data["building_time"]
            _reject_unknown_fields(time_data, {"time"}, f"{key}.building_time")
            building_time = _int_tuple(time_data.get("time", []), "building_time.time", key)

        if not isinstance(data["name"], str):
            raise ConfigValidationError(
                f"{key}.name must be a string", error_code="INVALID_NAME", context={"building": key}
            )

        return cls(
            type_id=type_id,
            name=data["name"],
            max_level=data["max_level"],
            upgrade_cost=upgrade_cost,
            production=production,
            storage=storage,
            building_time=building_time,
        )


@dataclass(frozen=True)
class BuildingsConfig:
    """Validated configuration table for every building type."""
    buildings: Dict[BuildingTypeId, BuildingConfig]

    def __post_init__(self):
        """Every building type must be configured."""
        missing = [t.value for t in BuildingTypeId if t not in self.buildings]
        if missing:
            raise ConfigValidationError(
                f"Missing building configuration for: {', '.join(missing)}",
                error_code="MISSING_BUILDING",
                context={"missing": missing}
            )

    def get(self, type_id: BuildingTypeId) -> BuildingConfig:
        """Configuration of one building type."""
        return self.buildings[type_id]

    def __iter__(self) -> Iterator[BuildingConfig]:
        return iter(self.buildings.values())

    def __len__(self) -> int:
        return len(self.buildings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuildingsConfig":
        """Build the table from parsed TOML, keyed by building configuration name."""
        buildings: Dict[BuildingTypeId, BuildingConfig] = {}
        for key, table in data.items():
            try:
                type_id = BuildingTypeId(key)
            except ValueError:
                raise ConfigValidationError(
                    f"Unknown building '{key}'", error_code="UNKNOWN_BUILDING", context={"building": key}
                ) from None
            if not isinstance(table, dict):
                raise ConfigValidationError(
                    f"{key} must be a table", error_code="INVALID_TABLE", context={"building": key}
                )
            buildings[type_id] = BuildingConfig.from_dict(type_id, table)
        return cls(buildings)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "BuildingsConfig":
        """Load and validate the buildings TOML file."""
        data = read_toml(path, "buildings")
        config = cls.from_dict(data)
        logging.info(f"Loaded {len(config)} building configurations from {path}")
        return config


def level_value(per_level: Tuple[int, ...], level: int) -> Optional[int]:
    """Value reached at `level`: 0 at level 0, otherwise the entry at index level - 1."""
    if level == 0:
        return 0
    if 0 < level <= len(per_level):
        return per_level[level - 1]
    return None


def read_toml(path: Union[str, Path], description: str) -> Dict[str, Any]:
    """Read a TOML file, wrapping I/O and syntax errors in ConfigLoadError."""
    path = Path(path)
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as e:
        raise ConfigLoadError(
            f"Failed to read {description} configuration file: {e}",
            error_code="CONFIG_IO",
            context={"path": str(path)}
        ) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigLoadError(
            f"Failed to parse {description} configuration file (TOML): {e}",
            error_code="CONFIG_TOML",
            context={"path": str(path)}
        ) from e


def _reject_unknown_fields(data: Any, allowed: set, where: str) -> None:
    if not isinstance(data, dict):
        raise ConfigValidationError(f"{where} must be a table", error_code="INVALID_TABLE")
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigValidationError(
            f"Unknown field(s) in {where}: {', '.join(unknown)}",
            error_code="UNKNOWN_FIELD",
            context={"where": where}
        )


def _int_tuple(values: Any, table_name: str, building_name: str) -> Tuple[int, ...]:
    ConfigValidator.validate_int_list(values, table_name, building_name)
    return tuple(values)


def _parse_resource(value: Any, building_name: str) -> Resource:
    try:
        return Resource(value)
    except ValueError:
        raise ConfigValidationError(
            f"Unknown resource {value!r}",
            error_code="UNKNOWN_RESOURCE",
            context={"building": building_name}
        ) from None


__all__ = [
    "UpgradeCost", "ProductionInfo", "StorageInfo", "BuildingConfig", "BuildingsConfig",
    "level_value", "read_toml",
]
