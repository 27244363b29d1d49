"""Tests for the command execution engine."""
import pytest

from star_colony.commands import CommandRegistry
from star_colony.core.constants import DEFAULT_BUILDINGS_CONFIG, DEFAULT_COMMANDS_CONFIG
from star_colony.core.enums import BuildingTypeId, CommandKind, Resource
from star_colony.core.exceptions import (
    InsufficientResourcesError, InvalidInputError, MaxLevelReachedError, PlanetNotFoundError,
    RangeValidationError, UnknownCommandError, UnknownInternalCommandError,
    UnrecognizedBuildingError
)
from star_colony.game import GameCore, GameSettings, Turn


def _minerals(core: GameCore, planet_name: str = "planet1") -> int:
    status = core.get_current_player_planet_status(planet_name)
    return status.storage[Resource.MINERALS][0]


def test_turn_counter() -> None:
    turn = Turn()
    assert turn.turn_number == 1
    assert turn.next_turn() == 1
    assert turn.turn_number == 2


def test_initial_state(core) -> None:
    assert core.get_current_turn() == 1
    assert core.get_current_player_name() == "Commander"
    assert core.get_current_player_planet_names() == ["planet1", "planet2"]
    assert core.get_planet_count() == 2
    assert core.is_running()
    assert core.get_stockpile_history() == []


def test_build_upgrades_the_named_building(core) -> None:
    message = core.execute_command("build mineralmine planet1")

    assert message == "Mineral Mine on planet1 upgraded to level 1."
    status = core.get_current_player_planet_status("planet1")
    assert ("Mineral Mine", 1) in status.buildings
    assert ("Mineral Mine", 0) in core.get_current_player_planet_status("planet2").buildings


@pytest.mark.parametrize("building_name", ["MineralMine", "mineral_mine", "Mineral-Mine", "MINERALMINE"])
def test_building_names_ignore_case_and_separators(core, building_name) -> None:
    core.execute_command(f"build {building_name} planet1")
    assert core.get_current_player().get_planet("planet1").get_building(BuildingTypeId.MINERAL_MINE).level == 1


def test_unknown_building_is_not_recognized(core) -> None:
    with pytest.raises(UnrecognizedBuildingError) as excinfo:
        core.execute_command("build unknownthing planet1")

    assert excinfo.value.message == "Command 'unknownthing' not recognized"
    planet = core.get_current_player().get_planet("planet1")
    assert all(b.level == 0 for b in planet.buildings.values())


def test_unknown_planet_is_rejected(core) -> None:
    with pytest.raises(PlanetNotFoundError):
        core.execute_command("build mineralmine pluto")


def test_build_at_max_level_leaves_turn_unchanged(core) -> None:
    core.execute_command("build commandcenter planet1")
    core.execute_command("build commandcenter planet1")

    with pytest.raises(MaxLevelReachedError) as excinfo:
        core.execute_command("build commandcenter planet1")

    assert excinfo.value.message == "Cannot upgrade: level 2 is at max 2"
    assert core.get_current_turn() == 1


def test_build_surfaces_insufficient_resources(core) -> None:
    with pytest.raises(InsufficientResourcesError):
        core.execute_command("build researchlab planet1")


def test_end_turn_scenario_mineral_mine_and_silo(core) -> None:
    core.execute_command("build mineralmine planet1")
    core.execute_command("build mineralsilo planet1")

    assert core.execute_command("endturn") == "Turn 1 ended."
    assert _minerals(core) == 10
    assert core.get_current_turn() == 2

    for _ in range(100):
        core.execute_command("endturn")

    assert _minerals(core) == 1000
    assert core.get_current_turn() == 102
    assert _minerals(core, "planet2") == 0


def test_end_turn_records_stockpile_history(core) -> None:
    core.execute_command("build gasextractor planet1")
    core.execute_command("build gastank planet1")
    core.execute_command("end")
    core.execute_command("end")

    history = core.get_stockpile_history()
    assert [turn for turn, _ in history] == [1, 2]
    assert history[-1][1] == {Resource.ENERGY: 0, Resource.MINERALS: 0, Resource.GAS: 16}


def test_build_spends_resources_by_default(core) -> None:
    for text in ("build mineralmine planet1", "build mineralsilo planet1",
                 "build fusionreactor planet1", "build batteryarray planet1"):
        core.execute_command(text)
    for _ in range(3):
        core.execute_command("endturn")

    core.execute_command("build mineralmine planet1")

    assert _minerals(core) == 0
    status = core.get_current_player_planet_status("planet1")
    assert status.storage[Resource.ENERGY][0] == 45 - 20


def test_build_can_be_configured_not_to_spend(registry, buildings_config) -> None:
    core = GameCore(registry, buildings_config, GameSettings(consume_resources_on_build=False))
    for text in ("build mineralmine planet1", "build mineralsilo planet1",
                 "build fusionreactor planet1", "build batteryarray planet1"):
        core.execute_command(text)
    for _ in range(3):
        core.execute_command("endturn")

    core.execute_command("build mineralmine planet1")

    assert _minerals(core) == 30


def test_quit_stops_the_game(core) -> None:
    assert core.execute_command("quit") == "Quitting game."
    assert not core.is_running()


def test_help_is_acknowledged(core) -> None:
    assert core.execute_command("help") == "Help command executed."
    assert core.execute_command("help build") == "Help command executed."


def test_status_lists_every_planet(core) -> None:
    text = core.execute_command("status")

    assert text.splitlines()[0] == "Turn 1, Player Commander (2 planets)"
    assert text.splitlines()[1] == "Production per turn: Energy +0, Minerals +0, Gas +0"
    assert "Planet planet1 (2 planets)" in text
    assert "Planet planet2 (2 planets)" in text


def test_registry_errors_propagate(core) -> None:
    with pytest.raises(UnknownCommandError):
        core.execute_command("warp")


def test_commands_without_logic_raise(buildings_config) -> None:
    registry = CommandRegistry.from_dict({"commands": [
        {"name": "dance", "description": "Dance.", "expected_args": 0},
    ]})
    core = GameCore(registry, buildings_config)

    with pytest.raises(UnknownInternalCommandError):
        core.execute_command("dance")


def test_handlers_can_be_replaced(core) -> None:
    core.register_handler(CommandKind.HELP, lambda command: "custom help")
    assert core.execute_command("h") == "custom help"


def test_from_config_files_uses_shipped_tables() -> None:
    settings = GameSettings(player_name="Ada", planet_names=["home"], starting_turn=5)
    core = GameCore.from_config_files(DEFAULT_BUILDINGS_CONFIG, DEFAULT_COMMANDS_CONFIG, settings)

    assert core.get_current_player_name() == "Ada"
    assert core.get_current_player_planet_names() == ["home"]
    assert core.get_current_turn() == 5
    assert core.execute_command("build fusionreactor home") == "Fusion Reactor on home upgraded to level 1."


@pytest.mark.parametrize("kwargs, error", [
    ({"planet_names": ["a", "a"]}, InvalidInputError),
    ({"planet_names": ["two words"]}, InvalidInputError),
    ({"player_name": ""}, RangeValidationError),
    ({"starting_turn": 0}, RangeValidationError),
])
def test_invalid_settings_are_rejected(kwargs, error) -> None:
    with pytest.raises(error):
        GameSettings(**kwargs)


def test_status_reports_total_production(core) -> None:
    core.execute_command("build mineralmine planet1")
    core.execute_command("build mineralmine planet2")
    core.execute_command("build fusionreactor planet2")

    lines = core.execute_command("status").splitlines()

    assert lines[1] == "Production per turn: Energy +15, Minerals +20, Gas +0"
