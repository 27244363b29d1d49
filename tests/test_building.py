"""Tests for the building upgrade state machine."""
import pytest

from star_colony.core.enums import (
    BuildingTypeId, Resource, get_producer_types
)
from star_colony.core.exceptions import (
    MaxLevelReachedError, RangeValidationError, WrongBuildingConfigurationError
)
from star_colony.data import BuildingConfig, ProductionInfo, StorageInfo
from star_colony.entities import BaseBuilding, Productor, Storage, create_building


def _storage(buildings_config, level: int = 1) -> Storage:
    return create_building(buildings_config.get(BuildingTypeId.MINERAL_SILO), level=level)


def test_create_building_picks_class_by_role(buildings_config) -> None:
    assert isinstance(create_building(buildings_config.get(BuildingTypeId.COMMAND_CENTER)), BaseBuilding)
    assert isinstance(create_building(buildings_config.get(BuildingTypeId.FUSION_REACTOR)), Productor)
    assert isinstance(create_building(buildings_config.get(BuildingTypeId.GAS_TANK)), Storage)


def test_new_buildings_start_at_level_zero(buildings_config) -> None:
    mine = create_building(buildings_config.get(BuildingTypeId.MINERAL_MINE))
    silo = create_building(buildings_config.get(BuildingTypeId.MINERAL_SILO))

    assert mine.level == 0
    assert mine.production_rate == 0
    assert silo.capacity == 0
    assert silo.current_amount == 0


def test_upgrade_refreshes_production_rate(buildings_config) -> None:
    mine = create_building(buildings_config.get(BuildingTypeId.MINERAL_MINE))

    mine.upgrade()
    assert (mine.level, mine.production_rate) == (1, 10)
    assert mine.resource == Resource.MINERALS

    mine.upgrade()
    assert (mine.level, mine.production_rate) == (2, 20)
    assert mine.is_max_level


def test_upgrade_refreshes_capacity(buildings_config) -> None:
    silo = create_building(buildings_config.get(BuildingTypeId.MINERAL_SILO))
    silo.upgrade()
    assert silo.capacity == 1000
    silo.upgrade()
    assert silo.capacity == 2000


def test_upgrade_at_max_level_fails_and_keeps_level(buildings_config) -> None:
    center = create_building(buildings_config.get(BuildingTypeId.COMMAND_CENTER), level=2)

    with pytest.raises(MaxLevelReachedError) as excinfo:
        center.upgrade()

    assert excinfo.value.current == 2
    assert excinfo.value.max_level == 2
    assert excinfo.value.message == "Cannot upgrade: level 2 is at max 2"
    assert center.level == 2


def test_level_outside_range_is_rejected(buildings_config) -> None:
    with pytest.raises(RangeValidationError):
        create_building(buildings_config.get(BuildingTypeId.RESEARCH_LAB), level=3)


def test_missing_table_entry_rolls_back_upgrade() -> None:
    config = BuildingConfig(
        type_id=BuildingTypeId.FUSION_REACTOR,
        name="Fusion Reactor",
        max_level=2,
        production=ProductionInfo(Resource.ENERGY, ()),
    )
    reactor = create_building(config)
    assert reactor.production_rate == 0

    with pytest.raises(WrongBuildingConfigurationError) as excinfo:
        reactor.upgrade()

    assert excinfo.value.message.startswith("Wrong building configuration")
    assert reactor.level == 0
    assert reactor.production_rate == 0


@pytest.mark.parametrize(
    "start, requested, added, final",
    [
        (0, 600, 600, 600),
        (600, 600, 400, 1000),
        (1000, 50, 0, 1000),
        (250, 0, 0, 250),
    ],
)
def test_add_resource_clamps_to_capacity(buildings_config, start, requested, added, final) -> None:
    silo = _storage(buildings_config)
    silo.current_amount = start

    assert silo.add_resource(requested) == added
    assert silo.current_amount == final
    assert 0 <= silo.current_amount <= silo.capacity


def test_add_resource_at_level_zero_stores_nothing(buildings_config) -> None:
    silo = _storage(buildings_config, level=0)
    assert silo.add_resource(10) == 0
    assert silo.current_amount == 0


def test_negative_amounts_are_rejected(buildings_config) -> None:
    silo = _storage(buildings_config)
    with pytest.raises(RangeValidationError):
        silo.add_resource(-5)
    with pytest.raises(RangeValidationError):
        silo.remove_resource(-5)


def test_remove_resource_never_goes_negative(buildings_config) -> None:
    silo = _storage(buildings_config)
    silo.add_resource(30)

    assert silo.remove_resource(20) == 20
    assert silo.remove_resource(20) == 10
    assert silo.current_amount == 0
    assert silo.free_capacity == 1000


def test_storage_rejects_amount_above_capacity() -> None:
    config = BuildingConfig(
        type_id=BuildingTypeId.GAS_TANK,
        name="Gas Tank",
        max_level=1,
        storage=StorageInfo(Resource.GAS, (100,)),
    )
    with pytest.raises(RangeValidationError):
        Storage(config=config, level=1, current_amount=101)


def test_to_dict_includes_derived_fields(buildings_config) -> None:
    tank = create_building(buildings_config.get(BuildingTypeId.GAS_TANK), level=1)
    tank.add_resource(12)

    data = tank.to_dict()
    assert data["type_id"] == "gas_tank"
    assert data["resource"] == "Gas"
    assert data["capacity"] == 800
    assert data["current_amount"] == 12
    assert str(tank) == "Gas Tank (level 1/2) 12/800"


def test_building_types_are_grouped_by_role() -> None:
    assert get_producer_types() == [
        BuildingTypeId.FUSION_REACTOR, BuildingTypeId.GAS_EXTRACTOR, BuildingTypeId.MINERAL_MINE
    ]
    assert BuildingTypeId.storage_for(Resource.GAS) == BuildingTypeId.GAS_TANK
    assert BuildingTypeId.from_name("Command Center") == BuildingTypeId.COMMAND_CENTER
    assert BuildingTypeId.from_name("") is None
