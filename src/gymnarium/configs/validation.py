from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class ConfigValidationError(ValueError):
    """Custom exception for configuration validation errors."""


# ---------------------------------------------------------------------------
# Scalar validators
# ---------------------------------------------------------------------------


def validate_positive_int(value: int, field_name: str) -> None:
    """Validate that a value is a positive integer."""
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"{field_name} must be an integer, got {type(value).__name__}"
        raise ConfigValidationError(msg)
    if value <= 0:
        msg = f"{field_name} must be positive, got {value}"
        raise ConfigValidationError(msg)


def validate_number(value: float, field_name: str) -> None:
    """Validate that a value is an int or float (booleans excluded)."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        msg = f"{field_name} must be a number, got {type(value).__name__}"
        raise ConfigValidationError(msg)


def validate_string_choice(
    value: str, field_name: str, choices: tuple[str, ...]
) -> None:
    """Validate that a string value is one of the allowed choices."""
    if not isinstance(value, str):
        msg = f"{field_name} must be a string, got {type(value).__name__}"
        raise ConfigValidationError(msg)
    if value not in choices:
        msg = f"{field_name} must be one of {choices}, got '{value}'"
        raise ConfigValidationError(msg)


# ---------------------------------------------------------------------------
# Compound validators
# ---------------------------------------------------------------------------


def validate_shape(value: tuple[Any, ...], field_name: str) -> list[str]:
    """Validate a shape tuple of positive extents. Returns a list of error strings."""
    errors: list[str] = []
    if not isinstance(value, tuple):
        errors.append(f"{field_name} must be a tuple, got {type(value).__name__}")
        return errors
    if not value:
        errors.append(f"{field_name} cannot be empty")
        return errors
    for i, extent in enumerate(value):
        try:
            validate_positive_int(extent, f"{field_name}[{i}]")
        except ConfigValidationError as e:
            errors.append(str(e))
    return errors


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------


def ensure_tuple(
    value: Any, *, default: tuple[Any, ...], of_type: type = str
) -> tuple[Any, ...]:
    """Convert *value* to a tuple, handling lists, single values, and iterables.

    Used by config ``__init__`` methods that accept lists from OmegaConf/YAML
    and must store tuples for Equinox hashability.
    """
    if value is None:
        return default
    if isinstance(value, tuple):
        return value
    if isinstance(value, of_type):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(value)
    return default


def check_hashable(obj: Any, class_name: str) -> None:
    """Shared ``__check_init__`` logic for all config classes."""
    try:
        hash(obj)
    except TypeError as e:
        msg = f"{class_name} must be hashable for JAX compatibility: {e}"
        raise ValueError(msg) from e
