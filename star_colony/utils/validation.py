"""Input validation utilities for the Star Colony engine."""

import re
from typing import Any, List, Type, Union

from ..core.exceptions import (
    ConfigValidationError, InvalidInputError, RangeValidationError, TypeValidationError
)
from ..core.constants import MAX_PLANET_NAME_LENGTH, MAX_PLAYER_NAME_LENGTH, VALID_NAME_PATTERN


class Validator:
    """Base validator class with common validation methods."""

    @staticmethod
    def validate_type(value: Any, expected_type: Type, field_name: str = "value") -> None:
        """Validate that value is of expected type."""
        if not isinstance(value, expected_type):
            raise TypeValidationError(
                f"{field_name} must be of type {expected_type.__name__}, got {type(value).__name__}",
                error_code="TYPE_MISMATCH",
                context={"field": field_name, "expected": expected_type.__name__, "actual": type(value).__name__}
            )

    @staticmethod
    def validate_range(value: Union[int, float], min_val: Union[int, float],
                       max_val: Union[int, float], field_name: str = "value") -> None:
        """Validate that value is within specified range."""
        if not min_val <= value <= max_val:
            raise RangeValidationError(
                f"{field_name} must be between {min_val} and {max_val}, got {value}",
                error_code="OUT_OF_RANGE",
                context={"field": field_name, "value": value, "min": min_val, "max": max_val}
            )

    @staticmethod
    def validate_non_negative(value: Union[int, float], field_name: str = "value") -> None:
        """Validate that value is non-negative."""
        if value < 0:
            raise RangeValidationError(
                f"{field_name} must be non-negative, got {value}",
                error_code="NEGATIVE",
                context={"field": field_name, "value": value}
            )

    @staticmethod
    def validate_string_length(value: str, max_length: int, min_length: int = 0,
                               field_name: str = "value") -> None:
        """Validate string length."""
        if not min_length <= len(value) <= max_length:
            raise RangeValidationError(
                f"{field_name} length must be between {min_length} and {max_length}, got {len(value)}",
                error_code="INVALID_LENGTH",
                context={"field": field_name, "length": len(value), "min": min_length, "max": max_length}
            )

    @staticmethod
    def validate_pattern(value: str, pattern: str, field_name: str = "value") -> None:
        """Validate string matches pattern."""
        if not re.match(pattern, value):
            raise InvalidInputError(
                f"{field_name} does not match required pattern {pattern}: {value}",
                error_code="PATTERN_MISMATCH",
                context={"field": field_name, "value": value, "pattern": pattern}
            )

    @staticmethod
    def validate_unique_list(value: List, field_name: str = "list") -> None:
        """Validate that list contains unique items."""
        if len(value) != len(set(value)):
            raise InvalidInputError(
                f"{field_name} must contain unique items",
                error_code="DUPLICATE_ITEMS",
                context={"field": field_name, "length": len(value), "unique_count": len(set(value))}
            )


class GameValidator(Validator):
    """Validator for game-specific inputs."""

    @staticmethod
    def validate_player_name(name: str) -> None:
        """Validate player name."""
        GameValidator.validate_type(name, str, "player_name")
        GameValidator.validate_string_length(name, MAX_PLAYER_NAME_LENGTH, 1, "player_name")

    @staticmethod
    def validate_planet_name(name: str) -> None:
        """Validate planet name; it must be usable as a single command argument."""
        GameValidator.validate_type(name, str, "planet_name")
        GameValidator.validate_string_length(name, MAX_PLANET_NAME_LENGTH, 1, "planet_name")
        GameValidator.validate_pattern(name, VALID_NAME_PATTERN, "planet_name")


class ConfigValidator:
    """Checks applied to configuration tables while they are loaded."""

    @staticmethod
    def validate_level_table(values: List[int], max_level: int, table_name: str,
                             building_name: str, allow_empty: bool = False) -> None:
        """A per-level table must have exactly max_level entries (or none when allowed)."""
        if allow_empty and not values:
            return
        if len(values) != max_level:
            raise ConfigValidationError(
                f"{table_name} mismatch: {len(values)} doesn't match max_level {max_level}",
                error_code="LEVEL_TABLE_MISMATCH",
                context={"building": building_name, "table": table_name,
                         "length": len(values), "max_level": max_level}
            )

    @staticmethod
    def validate_int_list(values: Any, table_name: str, building_name: str) -> None:
        """Tables must be lists of non-negative integers."""
        if not isinstance(values, list) or not all(
            isinstance(v, int) and not isinstance(v, bool) and v >= 0 for v in values
        ):
            raise ConfigValidationError(
                f"{table_name} must be a list of non-negative integers",
                error_code="INVALID_TABLE",
                context={"building": building_name, "table": table_name}
            )
