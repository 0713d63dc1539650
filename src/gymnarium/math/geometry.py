"""
Plain 2D and 3D geometry value types.

Positions are points, vectors are displacements between points and sizes are
extents. Positions only move by vectors: ``position + vector`` and
``position - vector`` yield positions, ``a.vector_to(b)`` yields the vector
from ``a`` to ``b``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import chex

from .matrices import multiply_vector_1x3_and_matrix_3x3

if TYPE_CHECKING:
    from .transformations import Transformation2D, Transformations2D


# =============================================================================
# Vectors
# =============================================================================


@chex.dataclass(frozen=True)
class Vector2D:
    x: float
    y: float

    @classmethod
    def zero(cls) -> Vector2D:
        return cls(x=0.0, y=0.0)

    @classmethod
    def one(cls) -> Vector2D:
        return cls(x=1.0, y=1.0)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vector2D:
        """Vector of the same direction and length one (NaN for the zero vector)."""
        length = self.length()
        if length == 0.0:
            return Vector2D(x=math.nan, y=math.nan)
        return self / length

    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(x=self.x - other.x, y=self.y - other.y)

    def __mul__(self, factor: float) -> Vector2D:
        return Vector2D(x=self.x * factor, y=self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector2D:
        return Vector2D(x=self.x / divisor, y=self.y / divisor)

    def __neg__(self) -> Vector2D:
        return Vector2D(x=-self.x, y=-self.y)


@chex.dataclass(frozen=True)
class Vector3D:
    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Vector3D:
        return cls(x=0.0, y=0.0, z=0.0)

    @classmethod
    def one(cls) -> Vector3D:
        return cls(x=1.0, y=1.0, z=1.0)

    def length(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalized(self) -> Vector3D:
        length = self.length()
        if length == 0.0:
            return Vector3D(x=math.nan, y=math.nan, z=math.nan)
        return self / length

    def __add__(self, other: Vector3D) -> Vector3D:
        return Vector3D(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __sub__(self, other: Vector3D) -> Vector3D:
        return Vector3D(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)

    def __mul__(self, factor: float) -> Vector3D:
        return Vector3D(x=self.x * factor, y=self.y * factor, z=self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector3D:
        return Vector3D(x=self.x / divisor, y=self.y / divisor, z=self.z / divisor)

    def __neg__(self) -> Vector3D:
        return Vector3D(x=-self.x, y=-self.y, z=-self.z)


# =============================================================================
# Positions
# =============================================================================


@chex.dataclass(frozen=True)
class Position2D:
    x: float
    y: float

    @classmethod
    def zero(cls) -> Position2D:
        return cls(x=0.0, y=0.0)

    @classmethod
    def one(cls) -> Position2D:
        return cls(x=1.0, y=1.0)

    def vector_to(self, other: Position2D) -> Vector2D:
        return Vector2D(x=other.x - self.x, y=other.y - self.y)

    def distance_to(self, other: Position2D) -> float:
        return self.vector_to(other).length()

    def transform(
        self, transformations: Transformations2D | Transformation2D
    ) -> Position2D:
        """Apply the homogeneous matrix of ``transformations`` to this point."""
        transformed = multiply_vector_1x3_and_matrix_3x3(
            [self.x, self.y, 1.0], transformations.transformation_matrix()
        )
        return Position2D(x=float(transformed[0]), y=float(transformed[1]))

    def __add__(self, vector: Vector2D) -> Position2D:
        return Position2D(x=self.x + vector.x, y=self.y + vector.y)

    def __sub__(self, vector: Vector2D) -> Position2D:
        return Position2D(x=self.x - vector.x, y=self.y - vector.y)


@chex.dataclass(frozen=True)
class Position3D:
    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Position3D:
        return cls(x=0.0, y=0.0, z=0.0)

    @classmethod
    def one(cls) -> Position3D:
        return cls(x=1.0, y=1.0, z=1.0)

    def vector_to(self, other: Position3D) -> Vector3D:
        return Vector3D(x=other.x - self.x, y=other.y - self.y, z=other.z - self.z)

    def distance_to(self, other: Position3D) -> float:
        return self.vector_to(other).length()

    def __add__(self, vector: Vector3D) -> Position3D:
        return Position3D(x=self.x + vector.x, y=self.y + vector.y, z=self.z + vector.z)

    def __sub__(self, vector: Vector3D) -> Position3D:
        return Position3D(x=self.x - vector.x, y=self.y - vector.y, z=self.z - vector.z)


# =============================================================================
# Sizes
# =============================================================================


@chex.dataclass(frozen=True)
class Size2D:
    width: float
    height: float

    @classmethod
    def zero(cls) -> Size2D:
        return cls(width=0.0, height=0.0)

    @classmethod
    def one(cls) -> Size2D:
        return cls(width=1.0, height=1.0)

    def scale(self, width_factor: float, height_factor: float) -> Size2D:
        return Size2D(width=self.width * width_factor, height=self.height * height_factor)


@chex.dataclass(frozen=True)
class Size3D:
    width: float
    height: float
    length: float

    @classmethod
    def zero(cls) -> Size3D:
        return cls(width=0.0, height=0.0, length=0.0)

    @classmethod
    def one(cls) -> Size3D:
        return cls(width=1.0, height=1.0, length=1.0)

    def scale(
        self, width_factor: float, height_factor: float, length_factor: float
    ) -> Size3D:
        return Size3D(
            width=self.width * width_factor,
            height=self.height * height_factor,
            length=self.length * length_factor,
        )
