"""
Shaped, flat-backed containers of dimension boundaries and values.

A ``Space`` is the set of valid positions: one ``DimensionBoundaries`` per cell.
A ``Position`` is one point inside a space: one ``DimensionValue`` per cell.
Both store their cells in a single flat list together with an explicit shape
(``dimensions``) whose product equals the number of cells.

Multi-dimensional indices are mapped onto the flat list by ``calculate_index``:

    offset = index[0] + index[1] * dims[0] + index[2] * dims[1] + ...

The first component is used unscaled and every later component is scaled by
the extent of the *preceding* dimension. This is not row-major order and it is
kept bit-for-bit for compatibility with existing flat layouts.

Examples:
    ```python
    import jax
    from gymnarium.spaces import DimensionBoundaries, Space

    # D-pad (0..4) plus the A and B buttons (0..1)
    gameboy = Space.simple([
        DimensionBoundaries.from_scalar(4),
        DimensionBoundaries.from_scalar(1),
        DimensionBoundaries.from_scalar(1),
    ])
    action = gameboy.sample_with(jax.random.PRNGKey(0))
    assert gameboy.contains(action)

    # A 2x2 RGB image
    image = Space.all(DimensionBoundaries.from_scalar(255), (2, 2, 3))
    ```
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from typing import Generic, TypeVar

import jax
import numpy as np

from gymnarium.seed import Seed
from gymnarium.utils.jax_types import PRNGKey

from .dimensions import (
    DimensionBoundaries,
    DimensionKind,
    DimensionValue,
    sample_floats,
    sample_integers,
)

T = TypeVar("T", DimensionBoundaries, DimensionValue)

Index = Sequence[int]


# =============================================================================
# Errors
# =============================================================================


class SpaceError(Exception):
    """General errors for spaces and positions."""


class GivenDimensionsDoNotMatchError(SpaceError, ValueError):
    """Raised when the product of the dimensions differs from the number of cells."""

    def __init__(self, dimensions: Sequence[int], length: int):
        self.dimensions = tuple(dimensions)
        self.length = length
        message = (
            f"Given dimensions do not match: {self.dimensions} describe "
            f"{math.prod(self.dimensions)} cells but {length} were given"
        )
        super().__init__(message)


class IndexOutOfBoundsError(SpaceError, IndexError):
    """Raised when an index component is outside of its dimension."""

    def __init__(self, dimensions: Sequence[int], index: Sequence[int]):
        self.dimensions = tuple(dimensions)
        self.index = tuple(index)
        message = (
            f"Given index {self.index} is out of bounds for dimensions {self.dimensions}"
        )
        super().__init__(message)


# =============================================================================
# Index arithmetic
# =============================================================================


def calculate_index(shape: Sequence[int], index: int | Index) -> int:
    """Calculate the flat offset of a multi-dimensional index.

    Args:
        shape: Extent of every dimension
        index: One component per dimension; trailing components may be omitted
            and count as zero. A bare int is treated as a one-component index.

    Returns:
        ``index[0] + sum(index[i] * shape[i - 1] for i >= 1)``, or 0 for an
        empty index.

    Raises:
        IndexOutOfBoundsError: If a component is negative, not smaller than
            its extent, or has no dimension to index into.
    """
    if isinstance(index, (int, np.integer)):
        index = (int(index),)
    if len(index) > len(shape) or any(
        component < 0 or component >= extent
        for component, extent in zip(index, shape)
    ):
        raise IndexOutOfBoundsError(shape, index)
    if len(index) == 0:
        return 0
    offset = index[0]
    for i in range(1, len(index)):
        offset += index[i] * shape[i - 1]
    return int(offset)


# =============================================================================
# Shared flat storage
# =============================================================================


class _ShapedCells(Generic[T]):
    """Flat list of cells plus the shape describing them."""

    __slots__ = ("_cells", "_dimensions")

    def __init__(self, cells: Iterable[T], dimensions: Sequence[int]):
        cells = list(cells)
        dimensions = tuple(int(d) for d in dimensions)
        if math.prod(dimensions) != len(cells):
            raise GivenDimensionsDoNotMatchError(dimensions, len(cells))
        self._cells: list[T] = cells
        self._dimensions: tuple[int, ...] = dimensions

    @classmethod
    def all(cls, cell: T, dimensions: Sequence[int]):
        """Fill every cell of the given shape with ``cell``."""
        return cls([cell] * math.prod(dimensions), dimensions)

    @classmethod
    def simple(cls, cells: Iterable[T]):
        """One-dimensional container with one cell per given element."""
        cells = list(cells)
        return cls(cells, (len(cells),))

    @classmethod
    def simple_all(cls, cell: T, times: int):
        """One-dimensional container of ``times`` identical cells."""
        return cls([cell] * times, (times,))

    @property
    def dimensions(self) -> tuple[int, ...]:
        return self._dimensions

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[T]:
        return iter(self._cells)

    def __getitem__(self, index: int | Index) -> T:
        return self._cells[calculate_index(self._dimensions, index)]

    def __setitem__(self, index: int | Index, cell: T) -> None:
        self._cells[calculate_index(self._dimensions, index)] = cell

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._dimensions == other._dimensions and self._cells == other._cells

    __hash__ = None

    def copy(self):
        return type(self)(self._cells, self._dimensions)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._cells!r}, dimensions={self._dimensions})"


# =============================================================================
# Space
# =============================================================================


class Space(_ShapedCells[DimensionBoundaries]):
    """
    Defines a space in which states or actions can be placed.

    Use ``Space(boundaries, dimensions)`` when both are known (raises
    ``GivenDimensionsDoNotMatchError`` if they disagree), or one of the
    ``all``, ``simple`` and ``simple_all`` constructors which derive one from
    the other.

    Indexing with ``space[index]`` is the unchecked path: an invalid index
    raises ``IndexOutOfBoundsError`` straight to the caller.
    """

    __slots__ = ()

    @property
    def boundaries(self) -> tuple[DimensionBoundaries, ...]:
        """All boundaries in flat storage order."""
        return tuple(self._cells)

    def get_boundary(self, index: int | Index) -> DimensionBoundaries:
        return self[index]

    def set_boundary(self, index: int | Index, boundaries: DimensionBoundaries) -> None:
        self[index] = boundaries

    def sample(self) -> Position:
        """Sample a position using a fresh key from operating system entropy."""
        return self.sample_with(Seed.new_random().to_prng_key())

    def sample_with(self, key: PRNGKey) -> Position:
        """Sample every cell independently with the given JAX PRNG key.

        The key is split once into an integer stream and a float stream; each
        stream draws its cells in flat storage order. A cell's value therefore
        depends on the number and boundaries of the cells of its own kind, and
        not on its flat position alone or on cells of the other kind.
        The resulting position has the same dimensions as this space and depends
        only on the space and the key.
        """
        integer_key, float_key = jax.random.split(key)
        integer_cells = [
            i for i, b in enumerate(self._cells) if b.kind == DimensionKind.INTEGER
        ]
        float_cells = [
            i for i, b in enumerate(self._cells) if b.kind == DimensionKind.FLOAT
        ]

        values: list[DimensionValue | None] = [None] * len(self._cells)
        if integer_cells:
            drawn = sample_integers(
                integer_key,
                [self._cells[i].minimum for i in integer_cells],
                [self._cells[i].maximum for i in integer_cells],
            )
            for cell, value in zip(integer_cells, np.asarray(drawn).tolist()):
                values[cell] = DimensionValue.integer(value)
        if float_cells:
            drawn = sample_floats(
                float_key,
                [self._cells[i].minimum for i in float_cells],
                [self._cells[i].maximum for i in float_cells],
            )
            for cell, value in zip(float_cells, np.asarray(drawn).tolist()):
                values[cell] = DimensionValue.float32(value)

        return Position(values, self._dimensions)

    def matches(self, other: Space) -> bool:
        """Same dimensions and every pair of boundaries is of the same kind."""
        return self._dimensions == other._dimensions and all(
            a.matches(b) for a, b in zip(self._cells, other._cells)
        )

    def contains(self, position: Position) -> bool:
        """Same dimensions and every boundary contains its value."""
        return self._dimensions == position._dimensions and all(
            boundaries.contains(value)
            for boundaries, value in zip(self._cells, position._cells)
        )


# =============================================================================
# Position
# =============================================================================


class Position(_ShapedCells[DimensionValue]):
    """
    Defines a state or action inside a space.

    Positions share the flat layout, shape invariant and index arithmetic of
    ``Space``. They are usually produced by ``Space.sample_with`` and replaced
    every step.
    """

    __slots__ = ()

    @property
    def values(self) -> tuple[DimensionValue, ...]:
        """All values in flat storage order."""
        return tuple(self._cells)

    def get_value(self, index: int | Index) -> DimensionValue:
        return self[index]

    def set_value(self, index: int | Index, value: DimensionValue) -> None:
        self[index] = value

    def matches(self, other: Position) -> bool:
        """Same dimensions and every pair of values is of the same kind."""
        return self._dimensions == other._dimensions and all(
            a.matches(b) for a, b in zip(self._cells, other._cells)
        )
