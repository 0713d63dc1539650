"""
Atomic dimension types: inclusive boundaries and the values drawn from them.

Both ``DimensionBoundaries`` and ``DimensionValue`` are closed two-variant
unions tagged by ``DimensionKind``:

- ``INTEGER``: discrete cells, bounds and values are int32-ranged Python ints.
- ``FLOAT``: continuous cells, bounds and values are float32-rounded Python floats.

A boundary only ever contains a value of its own kind. An INTEGER boundary
never contains a FLOAT value and vice versa, whatever the numbers are.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

import chex
import jax
import jax.numpy as jnp
import numpy as np

from gymnarium.seed import Seed
from gymnarium.utils.jax_types import (
    INT32_MAX,
    INT32_MIN,
    UINT32_MAX,
    FloatSamples,
    IntegerSamples,
    PRNGKey,
)


class DimensionKind(IntEnum):
    """Tag of a dimension: discrete or continuous."""

    INTEGER = 0
    FLOAT = 1


def to_float32(value: float) -> float:
    """Round a Python number to the nearest float32 and return it as float."""
    return float(np.float32(value))


def to_int32(value: int) -> int:
    """Return ``value`` as a Python int; raises ValueError outside the int32 range."""
    value = int(value)
    if not INT32_MIN <= value <= INT32_MAX:
        msg = f"Integer dimensions must fit into int32, got {value}"
        raise ValueError(msg)
    return value


def kind_of_scalar(value: int | float) -> DimensionKind:
    """Return the dimension kind a bare Python or NumPy scalar converts to."""
    if isinstance(value, (bool, np.bool_)):
        msg = f"Booleans are not dimension scalars, got {value!r}"
        raise TypeError(msg)
    if isinstance(value, (int, np.integer)):
        return DimensionKind.INTEGER
    if isinstance(value, (float, np.floating)):
        return DimensionKind.FLOAT
    msg = f"Expected an int or float scalar, got {type(value).__name__}"
    raise TypeError(msg)


# =============================================================================
# Vectorized sampling
# =============================================================================


def sample_integers(
    key: PRNGKey, minima: Sequence[int], maxima: Sequence[int]
) -> IntegerSamples:
    """Draw one integer per ``[minimum, maximum]`` pair, both bounds inclusive.

    Every cell draws an offset in ``[0, maximum - minimum]`` as uint32, which
    covers any int32 range. The full int32 range has 2**32 values and takes
    raw 32-bit draws instead.
    """
    low = np.asarray(minima, dtype=np.int64)
    span = np.maximum(np.asarray(maxima, dtype=np.int64) - low, 0)
    full_range = span == UINT32_MAX

    offset_key, bits_key = jax.random.split(key)
    offsets = jax.random.randint(
        offset_key,
        low.shape,
        np.zeros(low.shape, dtype=np.uint32),
        np.where(full_range, UINT32_MAX, span + 1).astype(np.uint32),
        dtype=jnp.uint32,
    )
    bits = jax.random.bits(bits_key, low.shape, dtype=jnp.uint32)
    offsets = np.where(full_range, np.asarray(bits), np.asarray(offsets))
    return jnp.asarray((low + offsets.astype(np.int64)).astype(np.int32))


def sample_floats(
    key: PRNGKey, minima: Sequence[float], maxima: Sequence[float]
) -> FloatSamples:
    """Draw one float32 per ``[minimum, maximum]`` pair, both bounds inclusive.

    A weight ``u`` in ``[0, 1]`` blends the bounds as ``low * (1 - u) + high * u``
    so the width of the range is never formed and cannot overflow float32.
    """
    low = jnp.asarray(minima, dtype=jnp.float32)
    high = jnp.asarray(maxima, dtype=jnp.float32)
    one = jnp.float32(1.0)
    weights = jax.random.uniform(
        key,
        low.shape,
        dtype=jnp.float32,
        minval=0.0,
        maxval=jnp.nextafter(one, jnp.float32(jnp.inf)),
    )
    weights = jnp.clip(weights, 0.0, one)
    return jnp.clip(low * (one - weights) + high * weights, low, high)


# =============================================================================
# Boundaries
# =============================================================================


@chex.dataclass(frozen=True)
class DimensionBoundaries:
    """
    The inclusive lower and upper bound of one dimension cell.

    Attributes:
        kind: Whether the cell is discrete (INTEGER) or continuous (FLOAT)
        minimum: Inclusive lower bound
        maximum: Inclusive upper bound

    Notes:
        ``minimum <= maximum`` is not enforced by ``integer``/``float32``;
        ``from_scalar`` and ``from_range`` normalize the order.
    """

    kind: DimensionKind
    minimum: int | float
    maximum: int | float

    @classmethod
    def integer(cls, minimum: int, maximum: int) -> DimensionBoundaries:
        """Discrete boundaries ``[minimum, maximum]``; both must fit into int32."""
        return cls(
            kind=DimensionKind.INTEGER,
            minimum=to_int32(minimum),
            maximum=to_int32(maximum),
        )

    @classmethod
    def float32(cls, minimum: float, maximum: float) -> DimensionBoundaries:
        """Continuous boundaries ``[minimum, maximum]`` in float32 precision."""
        return cls(
            kind=DimensionKind.FLOAT,
            minimum=to_float32(minimum),
            maximum=to_float32(maximum),
        )

    @classmethod
    def from_scalar(cls, value: int | float) -> DimensionBoundaries:
        """Boundaries spanning zero and ``value``: ``4`` gives ``[0, 4]``, ``-1.5`` gives ``[-1.5, 0.0]``."""
        if kind_of_scalar(value) is DimensionKind.INTEGER:
            return cls.integer(min(0, value), max(0, value))
        return cls.float32(min(0.0, value), max(0.0, value))

    @classmethod
    def from_range(cls, start: int | float, end: int | float) -> DimensionBoundaries:
        """Boundaries of the inclusive range between ``start`` and ``end`` in either order.

        The range is continuous as soon as one endpoint is a float.
        """
        kinds = {kind_of_scalar(start), kind_of_scalar(end)}
        low, high = min(start, end), max(start, end)
        if DimensionKind.FLOAT in kinds:
            return cls.float32(low, high)
        return cls.integer(low, high)

    def sample(self) -> DimensionValue:
        """Draw a value using a fresh key from operating system entropy."""
        return self.sample_with(Seed.new_random().to_prng_key())

    def sample_with(self, key: PRNGKey) -> DimensionValue:
        """Draw a value uniformly from ``[minimum, maximum]`` with the given key."""
        if self.kind == DimensionKind.INTEGER:
            drawn = sample_integers(key, [self.minimum], [self.maximum])
            return DimensionValue.integer(int(drawn[0]))
        drawn = sample_floats(key, [self.minimum], [self.maximum])
        return DimensionValue.float32(float(drawn[0]))

    def matches(self, other: DimensionBoundaries) -> bool:
        """Whether both boundaries are of the same kind. Bound values are ignored."""
        return self.kind == other.kind

    def contains(self, value: DimensionValue) -> bool:
        """Whether ``value`` is of the same kind and lies within the bounds."""
        return self.kind == value.kind and self.minimum <= value.value <= self.maximum

    def expect_integer(self) -> tuple[int, int]:
        """Return ``(minimum, maximum)``; raises TypeError for FLOAT boundaries."""
        if self.kind != DimensionKind.INTEGER:
            msg = f"{self!r} is not INTEGER as expected"
            raise TypeError(msg)
        return self.minimum, self.maximum

    def expect_float(self) -> tuple[float, float]:
        """Return ``(minimum, maximum)``; raises TypeError for INTEGER boundaries."""
        if self.kind != DimensionKind.FLOAT:
            msg = f"{self!r} is not FLOAT as expected"
            raise TypeError(msg)
        return self.minimum, self.maximum

    def __repr__(self) -> str:
        return f"{DimensionKind(self.kind).name}[{self.minimum}, {self.maximum}]"


# =============================================================================
# Values
# =============================================================================


@chex.dataclass(frozen=True)
class DimensionValue:
    """
    A value inside one dimension cell.

    Attributes:
        kind: Whether the value is discrete (INTEGER) or continuous (FLOAT)
        value: The value itself
    """

    kind: DimensionKind
    value: int | float

    @classmethod
    def integer(cls, value: int) -> DimensionValue:
        return cls(kind=DimensionKind.INTEGER, value=to_int32(value))

    @classmethod
    def float32(cls, value: float) -> DimensionValue:
        return cls(kind=DimensionKind.FLOAT, value=to_float32(value))

    @classmethod
    def from_scalar(cls, value: int | float) -> DimensionValue:
        """INTEGER for ints, FLOAT for floats."""
        if kind_of_scalar(value) is DimensionKind.INTEGER:
            return cls.integer(value)
        return cls.float32(value)

    def matches(self, other: DimensionValue) -> bool:
        """Whether both values are of the same kind."""
        return self.kind == other.kind

    def expect_integer(self) -> int:
        if self.kind != DimensionKind.INTEGER:
            msg = f"{self!r} is not INTEGER as expected"
            raise TypeError(msg)
        return self.value

    def expect_float(self) -> float:
        if self.kind != DimensionKind.FLOAT:
            msg = f"{self!r} is not FLOAT as expected"
            raise TypeError(msg)
        return self.value

    def __repr__(self) -> str:
        return f"{DimensionKind(self.kind).name}({self.value})"
