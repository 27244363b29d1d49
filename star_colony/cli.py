"""Line-oriented front-end for Star Colony."""

import logging
import os
import sys
from typing import Callable, List, Optional

from .commands import HelpCommand
from .core.constants import DEFAULT_BUILDINGS_CONFIG, DEFAULT_COMMANDS_CONFIG, PROMPT
from .core.exceptions import ConfigurationError, StarColonyError
from .game import GameCore, GameSettings


def format_help(core: GameCore, command: HelpCommand) -> List[str]:
    """Help listing for every command, or for the definitions of one command."""
    registry = core.command_registry
    if command.topic is None:
        definitions = registry.get_all_command_definitions()
    else:
        definitions = registry.get_command_definitions(command.topic)
        if not definitions:
            return [f"Error: Command '{command.topic}' not found."]

    lines = []
    for definition in definitions:
        lines.extend(definition.format_help())
        lines.append("")
    return lines


def run_game(core: GameCore, input_func: Callable[[str], str] = input,
             output_func: Callable[[str], None] = print) -> None:
    """Read one command per line until the game stops running."""
    while core.is_running():
        try:
            text = input_func(PROMPT)
        except EOFError:
            logging.info("Input closed, leaving game loop")
            break

        try:
            command = core.command_registry.parse(text)
            result = core.execute(command)
        except StarColonyError as e:
            output_func(f"Error: {e.message}")
            continue

        if isinstance(command, HelpCommand):
            for line in format_help(core, command):
                output_func(line)
        elif result:
            output_func(result)


def show_help():
    print("Star Colony - turn-based colony economy")
    print()
    print("Usage: star-colony [--verbose] [--chart]")
    print()
    print("  --verbose   Log engine activity at INFO level")
    print("  --chart     Save a stockpile history chart (SVG) when the game ends")
    print("  --help, -h  Show this message")


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = sys.argv[1:] if argv is None else argv

    if any(arg in ('--help', '-h') for arg in args):
        show_help()
        return 0

    unknown = [arg for arg in args if arg not in ('--verbose', '--chart')]
    if unknown:
        print(f"Error: Unknown option(s): {' '.join(unknown)}")
        print("Use --help for usage information.")
        return 2

    logging.basicConfig(level=logging.INFO if '--verbose' in args else logging.WARNING)

    settings = GameSettings()
    try:
        core = GameCore.from_config_files(DEFAULT_BUILDINGS_CONFIG, DEFAULT_COMMANDS_CONFIG, settings)
    except ConfigurationError as e:
        logging.error(f"Could not start game: {e}")
        print(f"Error: {e.message}")
        return 1

    print(f"Welcome, {core.get_current_player_name()}. Type 'help' for available commands.")
    run_game(core)

    if '--chart' in args and core.get_stockpile_history():
        # Imported here so the game loop does not pay for matplotlib start-up
        from .utils.economy_chart import EconomyChartGenerator

        save_path = os.path.join(
            settings.chart_output_dir, f"stockpile_turn_{core.get_current_turn() - 1}.svg"
        )
        EconomyChartGenerator().create_stockpile_chart(
            core.get_stockpile_history(), save_path, core.get_current_player_name()
        )
        print(f"Stockpile chart saved: {save_path}")

    return 0
