"""
Named regions inside one flat ``Space`` or ``Position``.

Irregular, nested structures such as

```json
{
  "sensors": {
    "position": Space.all(DimensionBoundaries.from_range(-100.0, 100.0), (3,)),
    "front_cam": (Space.all(..., (10, 10, 3)), Space.all(..., (10, 10, 3))),
  },
  "ext_controller": Space.simple([...]),
}
```

(compare ``gym.spaces.Dict``) are flattened by registering every leaf under a
dotted key. Each ``add`` appends a disjoint, contiguous range at the end of the
buffer, so the order of registration defines the flat layout.

Examples:
    ```python
    import jax
    from gymnarium.spaces import DimensionBoundaries, Format, Space

    space_format = Format()
    space_format.add("sensors.position", (3,))
    space_format.add("ext_controller", (3,))

    space = space_format.new_space()
    space_format.set_subspace(
        space,
        "sensors.position",
        Space.all(DimensionBoundaries.from_range(-100.0, 100.0), (3,)),
    )
    space_format.set_subspace(
        space,
        "ext_controller",
        Space.simple([DimensionBoundaries.from_scalar(n) for n in (4, 1, 1)]),
    )

    position = space.sample_with(jax.random.PRNGKey(0))
    sensors = space_format.get_subposition(position, "sensors.position")
    button = space_format.get_value(position, "ext_controller", (2,))
    ```

Notes:
    A format and the space it indexes are only linked by their flat length.
    Nothing stops a format from being applied to a space it did not create;
    regions beyond that space's end surface as creation errors when read
    as a whole and as ``GivenSpaceDoesNotFitError`` on every write or
    single-cell access, before any cell is touched.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from typing import NamedTuple

from loguru import logger

from .dimensions import DimensionBoundaries, DimensionValue
from .space import Index, Position, Space, SpaceError, calculate_index

PLACEHOLDER_BOUNDARIES = DimensionBoundaries.integer(0, 0)
PLACEHOLDER_VALUE = DimensionValue.integer(0)


# =============================================================================
# Errors
# =============================================================================


class FormatError(Exception):
    """Errors raised by the checked accessors of ``Format``."""


class KeyAlreadyExistsInFormatError(FormatError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f'Key "{key}" has already been added to this format')


class KeyNotFoundInFormatError(FormatError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f'Key "{key}" not found in format')


class GivenSpaceDoesNotFitError(FormatError):
    """Raised when a sub-space or sub-position has the wrong number of cells,
    or when a space or position ends before the region being accessed."""

    def __init__(self, needed: int, given: int):
        self.needed = needed
        self.given = given
        super().__init__(f"Given space ({given}) does not fit needed ({needed})")


class _WrappedSpaceError(FormatError):
    action = "handling"

    def __init__(self, space_error: SpaceError):
        self.space_error = space_error
        super().__init__(
            f'Space Error "{space_error}" occurred while {self.action}'
        )


class SpaceCreationError(_WrappedSpaceError):
    action = "creation of space"


class PositionCreationError(_WrappedSpaceError):
    action = "creation of position"


class SpaceIndexError(_WrappedSpaceError):
    action = "indexing of space"


class PositionIndexError(_WrappedSpaceError):
    action = "indexing of position"


# =============================================================================
# Format
# =============================================================================


class _SubFormat(NamedTuple):
    offset: int
    shape: tuple[int, ...]
    length: int


class Format:
    """
    Registry mapping dotted keys to disjoint ranges of a flat buffer.

    The format itself is only mutated by ``add``. All other methods read or
    write the ``Space``/``Position`` passed in by the caller and report
    problems as ``FormatError`` subclasses.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _SubFormat] = {}
        self._length = 0

    # Registration

    def add(self, key: str, shape: Sequence[int]) -> None:
        """Append a region of the given shape under ``key``.

        Raises:
            KeyAlreadyExistsInFormatError: If ``key`` has been added before.
        """
        if key in self._entries:
            raise KeyAlreadyExistsInFormatError(key)
        shape = tuple(int(d) for d in shape)
        sub_format = _SubFormat(self._length, shape, math.prod(shape))
        self._entries[key] = sub_format
        self._length += sub_format.length
        logger.debug(
            f"Registered '{key}' with shape {shape} at offset {sub_format.offset}"
        )

    def contains(self, key: str) -> bool:
        return key in self._entries

    __contains__ = contains

    def shape_of(self, key: str) -> tuple[int, ...] | None:
        """Registered shape of ``key``, or None if unknown."""
        sub_format = self._entries.get(key)
        return sub_format.shape if sub_format is not None else None

    def offset_of(self, key: str) -> int | None:
        """Flat offset of the region of ``key``, or None if unknown."""
        sub_format = self._entries.get(key)
        return sub_format.offset if sub_format is not None else None

    def keys(self) -> list[str]:
        """Registered keys in registration (and thus flat) order."""
        return list(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def length(self) -> int:
        """Total number of flat cells covered by all regions."""
        return self._length

    def _lookup(self, key: str) -> _SubFormat:
        try:
            return self._entries[key]
        except KeyError:
            raise KeyNotFoundInFormatError(key) from None

    @staticmethod
    def _require_cells(cells: Space | Position, sf: _SubFormat) -> None:
        if sf.offset + sf.length > len(cells):
            raise GivenSpaceDoesNotFitError(
                needed=sf.offset + sf.length, given=len(cells)
            )

    # Allocation

    def new_space(self) -> Space:
        """Allocate a space covering every region.

        Every cell starts as the zero-width ``INTEGER[0, 0]`` placeholder and
        has to be overwritten through ``set_subspace``/``set_boundaries``;
        ``unpopulated_keys`` lists the regions that still are not.
        """
        return Space.simple_all(PLACEHOLDER_BOUNDARIES, self._length)

    def new_position(self) -> Position:
        """Allocate a position covering every region, filled with ``INTEGER(0)``."""
        return Position.simple_all(PLACEHOLDER_VALUE, self._length)

    def unpopulated_keys(self, space: Space) -> list[str]:
        """Keys whose region still consists of placeholder boundaries only."""
        boundaries = space.boundaries
        return [
            key
            for key, sf in self._entries.items()
            if all(
                b == PLACEHOLDER_BOUNDARIES
                for b in boundaries[sf.offset : sf.offset + sf.length]
            )
        ]

    # Spaces

    def get_subspace(self, space: Space, key: str) -> Space:
        """Copy the region of ``key`` out of ``space`` as a standalone space."""
        sf = self._lookup(key)
        try:
            return Space(space.boundaries[sf.offset : sf.offset + sf.length], sf.shape)
        except SpaceError as e:
            raise SpaceCreationError(e) from e

    def set_subspace(self, space: Space, key: str, subspace: Space) -> None:
        """Overwrite the region of ``key`` in ``space`` with the cells of ``subspace``.

        Raises:
            GivenSpaceDoesNotFitError: If ``subspace`` has a different number of cells
                or ``space`` ends before the region does.
        """
        sf = self._lookup(key)
        if len(subspace) != sf.length:
            raise GivenSpaceDoesNotFitError(needed=sf.length, given=len(subspace))
        self._require_cells(space, sf)
        for index, boundaries in enumerate(subspace):
            space._cells[sf.offset + index] = boundaries

    def get_boundaries(self, space: Space, key: str, index: int | Index) -> DimensionBoundaries:
        """Boundaries at ``index``, local to the shape of ``key``."""
        sf = self._lookup(key)
        try:
            offset = calculate_index(sf.shape, index)
        except SpaceError as e:
            raise SpaceIndexError(e) from e
        self._require_cells(space, sf)
        return space._cells[sf.offset + offset]

    def set_boundaries(
        self,
        space: Space,
        key: str,
        index: int | Index,
        boundaries: DimensionBoundaries,
    ) -> None:
        sf = self._lookup(key)
        try:
            offset = calculate_index(sf.shape, index)
        except SpaceError as e:
            raise SpaceIndexError(e) from e
        self._require_cells(space, sf)
        space._cells[sf.offset + offset] = boundaries

    # Positions

    def get_subposition(self, position: Position, key: str) -> Position:
        """Copy the region of ``key`` out of ``position`` as a standalone position."""
        sf = self._lookup(key)
        try:
            return Position(position.values[sf.offset : sf.offset + sf.length], sf.shape)
        except SpaceError as e:
            raise PositionCreationError(e) from e

    def set_subposition(self, position: Position, key: str, subposition: Position) -> None:
        sf = self._lookup(key)
        if len(subposition) != sf.length:
            raise GivenSpaceDoesNotFitError(needed=sf.length, given=len(subposition))
        self._require_cells(position, sf)
        for index, value in enumerate(subposition):
            position._cells[sf.offset + index] = value

    def get_value(self, position: Position, key: str, index: int | Index) -> DimensionValue:
        """Value at ``index``, local to the shape of ``key``."""
        sf = self._lookup(key)
        try:
            offset = calculate_index(sf.shape, index)
        except SpaceError as e:
            raise PositionIndexError(e) from e
        self._require_cells(position, sf)
        return position._cells[sf.offset + offset]

    def set_value(
        self,
        position: Position,
        key: str,
        index: int | Index,
        value: DimensionValue,
    ) -> None:
        sf = self._lookup(key)
        try:
            offset = calculate_index(sf.shape, index)
        except SpaceError as e:
            raise PositionIndexError(e) from e
        self._require_cells(position, sf)
        position._cells[sf.offset + offset] = value

    def __repr__(self) -> str:
        entries = ", ".join(
            f"{key!r}: {sf.shape}@{sf.offset}" for key, sf in self._entries.items()
        )
        return f"Format({{{entries}}}, length={self._length})"
