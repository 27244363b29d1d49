"""Game constants for the Star Colony engine."""

from pathlib import Path


# Game Configuration Constants
STARTING_TURN = 1
DEFAULT_PLAYER_NAME = "Commander"
DEFAULT_PLANET_NAMES = ("planet1", "planet2")
MAX_PLAYER_NAME_LENGTH = 32
MAX_PLANET_NAME_LENGTH = 32
VALID_NAME_PATTERN = r"^\S+$"  # Planet names are single command tokens

# Bundled configuration tables
DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_BUILDINGS_CONFIG = DATA_DIR / "buildings.toml"
DEFAULT_COMMANDS_CONFIG = DATA_DIR / "commands.toml"

# Output
DEFAULT_CHART_DIR = "output/charts"

# Front-end
PROMPT = "Game > "
HELP_HINT = "Type 'help' for available commands."
