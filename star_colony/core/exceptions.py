"""Custom exceptions for the Star Colony engine."""


class StarColonyError(Exception):
    """Base exception for all Star Colony errors."""

    def __init__(self, message: str, error_code: str = None, context: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self):
        base_msg = self.message
        if self.error_code:
            base_msg = f"[{self.error_code}] {base_msg}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg = f"{base_msg} (Context: {context_str})"
        return base_msg


# Configuration Exceptions
class ConfigurationError(StarColonyError):
    """Errors related to configuration tables."""
    pass


class ConfigLoadError(ConfigurationError):
    """Configuration file could not be read or parsed."""
    pass


class ConfigValidationError(ConfigurationError):
    """Configuration file was parsed but its content is inconsistent."""
    pass


# Building Exceptions
class BuildingError(StarColonyError):
    """Errors related to buildings and upgrades."""
    pass


class WrongBuildingConfigurationError(BuildingError):
    """A per-level configuration entry required by the engine is missing."""

    def __init__(self, building_name: str, detail: str = ""):
        message = "Wrong building configuration"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(
            message,
            error_code="WRONG_BUILDING_CONFIG",
            context={"building": building_name},
        )
        self.building_name = building_name


class MaxLevelReachedError(BuildingError):
    """Building cannot be upgraded past its maximum level."""

    def __init__(self, current: int, max_level: int):
        super().__init__(
            f"Cannot upgrade: level {current} is at max {max_level}",
            error_code="MAX_LEVEL_REACHED",
            context={"current": current, "max": max_level},
        )
        self.current = current
        self.max_level = max_level


class InsufficientResourcesError(BuildingError):
    """Planet storages do not hold enough of a resource for an upgrade."""

    def __init__(self, required: int, available: int, resource_type: str = ""):
        prefix = f"Insufficient {resource_type}" if resource_type else "Insufficient resources"
        super().__init__(
            f"{prefix}: need {required}, have {available}",
            error_code="INSUFFICIENT_RESOURCES",
            context={"required": required, "available": available, "resource_type": resource_type},
        )
        self.required = required
        self.available = available
        self.resource_type = resource_type


class BuildingNotBuiltError(BuildingError):
    """A building slot expected on a planet is missing."""
    pass


class IncorrectBuildingTypeError(BuildingError):
    """A building slot holds a building of an unexpected shape."""
    pass


# Planet / Player Exceptions
class PlanetError(StarColonyError):
    """Errors related to planets."""
    pass


class DuplicatePlanetError(PlanetError):
    """A player already owns a planet with this name."""
    pass


class PlayerError(StarColonyError):
    """Errors related to players."""
    pass


class PlayerNotFoundError(PlayerError):
    """The requested player does not exist."""
    pass


# Command Exceptions
class CommandError(StarColonyError):
    """Errors related to resolving or executing commands."""
    pass


class EmptyCommandError(CommandError):
    """No command text was provided."""
    pass


class UnknownCommandError(CommandError):
    """Command name is not present in the registry."""
    pass


class WrongArgumentCountError(CommandError):
    """No definition of the command accepts the given number of arguments."""
    pass


class UnrecognizedBuildingError(CommandError):
    """Building name in a command does not match any building type."""
    pass


class PlanetNotFoundError(CommandError):
    """Planet name in a command does not belong to the current player."""
    pass


class UnknownInternalCommandError(CommandError):
    """A registry command has no execution logic in the engine."""
    pass


# Validation Exceptions
class ValidationError(StarColonyError):
    """Errors related to input validation."""
    pass


class InvalidInputError(ValidationError):
    """Invalid input provided."""
    pass


class RangeValidationError(ValidationError):
    """Value outside valid range."""
    pass


class TypeValidationError(ValidationError):
    """Invalid type provided."""
    pass


# Utility functions for exception handling
def raise_if_insufficient_resources(required: int, available: int, resource_type: str):
    """Raise InsufficientResourcesError if not enough resources."""
    if available < required:
        raise InsufficientResourcesError(required, available, resource_type)


def raise_if_max_level(current: int, max_level: int):
    """Raise MaxLevelReachedError if a building cannot level up any more."""
    if current >= max_level:
        raise MaxLevelReachedError(current, max_level)
