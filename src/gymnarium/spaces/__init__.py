"""Spaces, positions and the formats that name regions inside them."""

from __future__ import annotations

from .dimensions import DimensionBoundaries, DimensionKind, DimensionValue
from .format import (
    Format,
    FormatError,
    GivenSpaceDoesNotFitError,
    KeyAlreadyExistsInFormatError,
    KeyNotFoundInFormatError,
    PositionCreationError,
    PositionIndexError,
    SpaceCreationError,
    SpaceIndexError,
)
from .space import (
    GivenDimensionsDoNotMatchError,
    IndexOutOfBoundsError,
    Position,
    Space,
    SpaceError,
    calculate_index,
)

__all__ = [
    "DimensionBoundaries",
    "DimensionKind",
    "DimensionValue",
    "Format",
    "FormatError",
    "GivenDimensionsDoNotMatchError",
    "GivenSpaceDoesNotFitError",
    "IndexOutOfBoundsError",
    "KeyAlreadyExistsInFormatError",
    "KeyNotFoundInFormatError",
    "Position",
    "PositionCreationError",
    "PositionIndexError",
    "Space",
    "SpaceCreationError",
    "SpaceError",
    "SpaceIndexError",
    "calculate_index",
]
