"""
Property-based testing utilities using Hypothesis for gymnarium.

Strategies for shapes, boundaries and spaces. Float limits are drawn as float32
values so that boundaries keep them exactly.
"""

from __future__ import annotations

import math

from hypothesis import strategies as st

from gymnarium.spaces import DimensionBoundaries, Space
from gymnarium.utils.jax_types import INT32_MAX, INT32_MIN


def shapes(max_rank: int = 3, max_extent: int = 4) -> st.SearchStrategy[tuple[int, ...]]:
    """Generate shapes with at least one dimension and positive extents."""
    return st.lists(
        st.integers(min_value=1, max_value=max_extent), min_size=1, max_size=max_rank
    ).map(tuple)


def shape_and_index(
    max_rank: int = 3, max_extent: int = 4
) -> st.SearchStrategy[tuple[tuple[int, ...], tuple[int, ...]]]:
    """Generate a shape together with a full in-bounds index into it."""
    return shapes(max_rank, max_extent).flatmap(
        lambda shape: st.tuples(
            st.just(shape),
            st.tuples(*(st.integers(min_value=0, max_value=d - 1) for d in shape)),
        )
    )


@st.composite
def integer_boundaries(draw, min_value: int = INT32_MIN, max_value: int = INT32_MAX - 1):
    a = draw(st.integers(min_value=min_value, max_value=max_value))
    b = draw(st.integers(min_value=min_value, max_value=max_value))
    return DimensionBoundaries.integer(min(a, b), max(a, b))


@st.composite
def float_boundaries(draw, limit: float = 1e6):
    values = st.floats(
        min_value=-limit,
        max_value=limit,
        allow_nan=False,
        allow_infinity=False,
        width=32,
    )
    a = draw(values)
    b = draw(values)
    return DimensionBoundaries.float32(min(a, b), max(a, b))


def dimension_boundaries() -> st.SearchStrategy[DimensionBoundaries]:
    return st.one_of(integer_boundaries(), float_boundaries())


@st.composite
def spaces(draw, max_rank: int = 3, max_extent: int = 4):
    """Generate spaces with mixed INTEGER and FLOAT cells."""
    shape = draw(shapes(max_rank, max_extent))
    cells = draw(
        st.lists(
            dimension_boundaries(),
            min_size=math.prod(shape),
            max_size=math.prod(shape),
        )
    )
    return Space(cells, shape)
