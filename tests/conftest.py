"""Shared fixtures: small in-memory building tables and the shipped command set."""
import copy
from pathlib import Path
from typing import Any, Dict

import pytest

from star_colony.commands import CommandRegistry
from star_colony.core.constants import DEFAULT_COMMANDS_CONFIG
from star_colony.data import BuildingsConfig
from star_colony.game import GameCore, GameSettings


def _zeros(count: int) -> Dict[str, Any]:
    return {"energy": [0] * count, "minerals": [0] * count, "gas": []}


TEST_BUILDINGS: Dict[str, Dict[str, Any]] = {
    "command_center": {"name": "Command Center", "max_level": 2, "upgrade_cost": _zeros(2)},
    "orbital_shipyard": {
        "name": "Orbital Shipyard",
        "max_level": 1,
        "upgrade_cost": {"energy": [10], "minerals": [10], "gas": [10]},
    },
    "research_lab": {
        "name": "Research Lab",
        "max_level": 2,
        "upgrade_cost": {"energy": [40, 80], "minerals": [25, 50], "gas": []},
        "building_time": {"time": [2, 3]},
    },
    "fusion_reactor": {
        "name": "Fusion Reactor",
        "max_level": 2,
        "upgrade_cost": _zeros(2),
        "production": {"resource": "Energy", "rate_per_level": [15, 30]},
    },
    "gas_extractor": {
        "name": "Gas Extractor",
        "max_level": 2,
        "upgrade_cost": _zeros(2),
        "production": {"resource": "Gas", "rate_per_level": [8, 16]},
    },
    "mineral_mine": {
        "name": "Mineral Mine",
        "max_level": 2,
        "upgrade_cost": {"energy": [0, 20], "minerals": [0, 30], "gas": []},
        "production": {"resource": "Minerals", "rate_per_level": [10, 20]},
    },
    "battery_array": {
        "name": "Battery Array",
        "max_level": 2,
        "upgrade_cost": _zeros(2),
        "storage": {"resource": "Energy", "capacity_per_level": [1000, 2000]},
    },
    "gas_tank": {
        "name": "Gas Tank",
        "max_level": 2,
        "upgrade_cost": _zeros(2),
        "storage": {"resource": "Gas", "capacity_per_level": [800, 1600]},
    },
    "mineral_silo": {
        "name": "Mineral Silo",
        "max_level": 2,
        "upgrade_cost": _zeros(2),
        "storage": {"resource": "Minerals", "capacity_per_level": [1000, 2000]},
    },
}


@pytest.fixture
def buildings_data() -> Dict[str, Dict[str, Any]]:
    return copy.deepcopy(TEST_BUILDINGS)


@pytest.fixture
def buildings_config(buildings_data) -> BuildingsConfig:
    return BuildingsConfig.from_dict(buildings_data)


@pytest.fixture
def registry() -> CommandRegistry:
    return CommandRegistry.load(DEFAULT_COMMANDS_CONFIG)


@pytest.fixture
def core(registry, buildings_config) -> GameCore:
    return GameCore(registry, buildings_config, GameSettings())


@pytest.fixture
def write_file(tmp_path):
    """Write text into tmp_path and return the file path."""
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
