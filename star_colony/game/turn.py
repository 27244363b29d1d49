"""Turn counter for the Star Colony engine."""

from dataclasses import dataclass

from ..core.constants import STARTING_TURN
from ..utils.validation import Validator


@dataclass
class Turn:
    """Discrete simulation step, advanced only by an explicit end-turn command."""

    turn_number: int = STARTING_TURN

    def __post_init__(self):
        Validator.validate_type(self.turn_number, int, "turn_number")
        Validator.validate_non_negative(self.turn_number, "turn_number")

    def next_turn(self) -> int:
        """Advance the counter and return the turn that just finished."""
        finished = self.turn_number
        self.turn_number += 1
        return finished
