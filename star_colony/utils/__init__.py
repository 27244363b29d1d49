"""Utility helpers."""

from .validation import Validator, GameValidator, ConfigValidator

__all__ = ["Validator", "GameValidator", "ConfigValidator"]
