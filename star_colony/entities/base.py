"""Base entity classes for Star Colony domain objects."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class BaseEntity(ABC):
    """Base class for all game entities with common functionality."""

    def __post_init__(self):
        """Post-initialization validation."""
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate entity state. Must be implemented by subclasses."""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary representation."""
        pass
