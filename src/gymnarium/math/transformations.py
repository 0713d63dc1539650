"""
Affine 2D transformations as homogeneous 3x3 matrices.

``Transformation2D`` is a closed union tagged by ``TransformationKind``. Use the
factory classmethods to build one; ``transformation_matrix`` dispatches on the
tag. Matrices are row-major with the translation in the third column, so a point
``(x, y)`` is transformed as the column vector ``(x, y, 1)``.

Examples:
    ```python
    from gymnarium.math import Position2D, Transformation2D, Transformations2D

    quarter_turn = Transformation2D.rotation_around_position(
        Position2D(x=1.0, y=1.0), 90.0
    )
    moved = Position2D(x=2.0, y=1.0).transform(Transformations2D.of(quarter_turn))
    # Position2D(x=1.0, y=2.0), up to rounding
    ```
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from enum import IntEnum
from functools import reduce

import chex
import numpy as np

from .geometry import Position2D, Vector2D
from .matrices import (
    Matrix3x2,
    Matrix3x3,
    degrees_to_radians,
    identity_matrix_3x3,
    inverse_of_matrix_3x3,
    matrix_3x3_as_matrix_3x2,
    multiply_matrices_3x3,
)


class TransformationKind(IntEnum):
    TRANSLATION = 0
    IDENTITY = 1
    ROTATION = 2
    SCALE = 3
    ISOTROPIC_SCALE = 4
    REFLECTION_X = 5
    REFLECTION_Y = 6
    SHEAR_X = 7
    SHEAR_Y = 8
    SHEAR_X_DEGREE = 9
    SHEAR_Y_DEGREE = 10
    COMPOSITION = 11
    CUSTOM = 12


# Names of the entries of ``Transformation2D.parameters`` per kind.
PARAMETER_NAMES: dict[TransformationKind, tuple[str, ...]] = {
    TransformationKind.TRANSLATION: ("x", "y"),
    TransformationKind.IDENTITY: (),
    TransformationKind.ROTATION: ("angle_in_degree",),
    TransformationKind.SCALE: ("x_factor", "y_factor"),
    TransformationKind.ISOTROPIC_SCALE: ("factor",),
    TransformationKind.REFLECTION_X: (),
    TransformationKind.REFLECTION_Y: (),
    TransformationKind.SHEAR_X: ("amount",),
    TransformationKind.SHEAR_Y: ("amount",),
    TransformationKind.SHEAR_X_DEGREE: ("degree",),
    TransformationKind.SHEAR_Y_DEGREE: ("degree",),
    TransformationKind.COMPOSITION: (),
    TransformationKind.CUSTOM: (),
}


def _compose(matrices: Iterable[Matrix3x3]) -> Matrix3x3:
    return reduce(multiply_matrices_3x3, matrices, identity_matrix_3x3())


@chex.dataclass(frozen=True)
class Transformation2D:
    """
    One affine transformation of the plane.

    Attributes:
        kind: Which transformation this is
        parameters: Scalars of the transformation, see ``PARAMETER_NAMES``
        name: Name of a composition or custom matrix
        transformations: Elements of a composition, applied first to last
        matrix: Rows of a custom matrix
    """

    kind: TransformationKind
    parameters: tuple[float, ...] = ()
    name: str = ""
    transformations: tuple[Transformation2D, ...] = ()
    matrix: tuple[tuple[float, ...], ...] = ()

    # Factories

    @classmethod
    def translation(cls, direction: Vector2D) -> Transformation2D:
        return cls(
            kind=TransformationKind.TRANSLATION,
            parameters=(float(direction.x), float(direction.y)),
        )

    @classmethod
    def identity(cls) -> Transformation2D:
        return cls(kind=TransformationKind.IDENTITY)

    @classmethod
    def rotation(cls, angle_in_degree: float) -> Transformation2D:
        """Counter-clockwise rotation around the origin."""
        return cls(kind=TransformationKind.ROTATION, parameters=(float(angle_in_degree),))

    @classmethod
    def scale(cls, x_factor: float, y_factor: float) -> Transformation2D:
        return cls(
            kind=TransformationKind.SCALE, parameters=(float(x_factor), float(y_factor))
        )

    @classmethod
    def isotropic_scale(cls, factor: float) -> Transformation2D:
        return cls(kind=TransformationKind.ISOTROPIC_SCALE, parameters=(float(factor),))

    @classmethod
    def reflection_x(cls) -> Transformation2D:
        """Mirror along the y axis (negates x)."""
        return cls(kind=TransformationKind.REFLECTION_X)

    @classmethod
    def reflection_y(cls) -> Transformation2D:
        """Mirror along the x axis (negates y)."""
        return cls(kind=TransformationKind.REFLECTION_Y)

    @classmethod
    def shear_x(cls, amount: float) -> Transformation2D:
        return cls(kind=TransformationKind.SHEAR_X, parameters=(float(amount),))

    @classmethod
    def shear_y(cls, amount: float) -> Transformation2D:
        return cls(kind=TransformationKind.SHEAR_Y, parameters=(float(amount),))

    @classmethod
    def shear_x_degree(cls, degree: float) -> Transformation2D:
        return cls(kind=TransformationKind.SHEAR_X_DEGREE, parameters=(float(degree),))

    @classmethod
    def shear_y_degree(cls, degree: float) -> Transformation2D:
        return cls(kind=TransformationKind.SHEAR_Y_DEGREE, parameters=(float(degree),))

    @classmethod
    def composition(
        cls, name: str, transformations: Sequence[Transformation2D]
    ) -> Transformation2D:
        """Named sequence applied first to last. An empty one is the identity."""
        return cls(
            kind=TransformationKind.COMPOSITION,
            name=name,
            transformations=tuple(transformations),
        )

    @classmethod
    def custom(cls, name: str, matrix: Matrix3x3) -> Transformation2D:
        rows = np.asarray(matrix, dtype=np.float64)
        if rows.shape != (3, 3):
            msg = f"Custom transformation needs a 3x3 matrix, got shape {rows.shape}"
            raise ValueError(msg)
        return cls(
            kind=TransformationKind.CUSTOM,
            name=name,
            matrix=tuple(tuple(float(v) for v in row) for row in rows),
        )

    @classmethod
    def rotation_around_position(
        cls, rotation_position: Position2D, angle: float
    ) -> Transformation2D:
        """Rotate by ``angle`` degrees around ``rotation_position`` instead of the origin."""
        origin = Position2D.zero()
        return cls.composition(
            "RotationAroundPosition",
            [
                cls.translation(rotation_position.vector_to(origin)),
                cls.rotation(angle),
                cls.translation(origin.vector_to(rotation_position)),
            ],
        )

    # Matrices

    def transformation_matrix(self) -> Matrix3x3:
        return _MATRIX_BUILDERS[TransformationKind(self.kind)](self)

    def transformation_matrix_as_3x2(self) -> Matrix3x2:
        return matrix_3x3_as_matrix_3x2(self.transformation_matrix())

    def reverse(self) -> Transformation2D:
        """The transformation undoing this one.

        A composition reverses every element and their order. Any other
        transformation becomes a custom one holding the inverse matrix.

        Raises:
            ZeroDivisionError: If the matrix is singular, e.g. a zero scale.
        """
        if self.kind == TransformationKind.COMPOSITION:
            return Transformation2D.composition(
                f"Reverse-{self.name}",
                [transformation.reverse() for transformation in reversed(self.transformations)],
            )
        return Transformation2D.custom(
            f"Reverse-{self!r}", inverse_of_matrix_3x3(self.transformation_matrix())
        )

    def __repr__(self) -> str:
        kind = TransformationKind(self.kind)
        label = "".join(part.capitalize() for part in kind.name.split("_"))
        if kind == TransformationKind.COMPOSITION:
            return f"{label}({self.name!r}, {list(self.transformations)!r})"
        if kind == TransformationKind.CUSTOM:
            return f"{label}({self.name!r}, {[list(row) for row in self.matrix]})"
        arguments = ", ".join(
            f"{name}={value}" for name, value in zip(PARAMETER_NAMES[kind], self.parameters)
        )
        return f"{label}({arguments})"


def _translation(t: Transformation2D) -> Matrix3x3:
    x, y = t.parameters
    return np.array([[1.0, 0.0, x], [0.0, 1.0, y], [0.0, 0.0, 1.0]])


def _rotation(t: Transformation2D) -> Matrix3x3:
    radians = degrees_to_radians(t.parameters[0])
    cos, sin = math.cos(radians), math.sin(radians)
    return np.array([[cos, -sin, 0.0], [sin, cos, 0.0], [0.0, 0.0, 1.0]])


def _scale(t: Transformation2D) -> Matrix3x3:
    x_factor, y_factor = t.parameters
    return np.diag([x_factor, y_factor, 1.0])


def _isotropic_scale(t: Transformation2D) -> Matrix3x3:
    factor = t.parameters[0]
    return np.diag([factor, factor, 1.0])


def _shear_x(amount: float) -> Matrix3x3:
    return np.array([[1.0, amount, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])


def _shear_y(amount: float) -> Matrix3x3:
    return np.array([[1.0, 0.0, 0.0], [amount, 1.0, 0.0], [0.0, 0.0, 1.0]])


_MATRIX_BUILDERS: dict[TransformationKind, Callable[[Transformation2D], Matrix3x3]] = {
    TransformationKind.TRANSLATION: _translation,
    TransformationKind.IDENTITY: lambda t: identity_matrix_3x3(),
    TransformationKind.ROTATION: _rotation,
    TransformationKind.SCALE: _scale,
    TransformationKind.ISOTROPIC_SCALE: _isotropic_scale,
    TransformationKind.REFLECTION_X: lambda t: np.diag([-1.0, 1.0, 1.0]),
    TransformationKind.REFLECTION_Y: lambda t: np.diag([1.0, -1.0, 1.0]),
    TransformationKind.SHEAR_X: lambda t: _shear_x(t.parameters[0]),
    TransformationKind.SHEAR_Y: lambda t: _shear_y(t.parameters[0]),
    TransformationKind.SHEAR_X_DEGREE: lambda t: _shear_x(
        math.tan(degrees_to_radians(t.parameters[0]))
    ),
    TransformationKind.SHEAR_Y_DEGREE: lambda t: _shear_y(
        math.tan(degrees_to_radians(t.parameters[0]))
    ),
    TransformationKind.COMPOSITION: lambda t: _compose(
        element.transformation_matrix() for element in t.transformations
    ),
    TransformationKind.CUSTOM: lambda t: np.array(t.matrix, dtype=np.float64),
}


@chex.dataclass(frozen=True)
class Transformations2D:
    """Unnamed sequence of transformations, applied first to last."""

    transformations: tuple[Transformation2D, ...] = ()

    @classmethod
    def of(cls, *transformations: Transformation2D) -> Transformations2D:
        return cls(transformations=tuple(transformations))

    def then(self, transformation: Transformation2D) -> Transformations2D:
        """Copy with ``transformation`` appended."""
        return Transformations2D(transformations=(*self.transformations, transformation))

    def transformation_matrix(self) -> Matrix3x3:
        return _compose(t.transformation_matrix() for t in self.transformations)

    def transformation_matrix_as_3x2(self) -> Matrix3x2:
        return matrix_3x3_as_matrix_3x2(self.transformation_matrix())

    def reverse(self) -> Transformations2D:
        """Sequence undoing this one: reversed order, every element reversed."""
        return Transformations2D(
            transformations=tuple(t.reverse() for t in reversed(self.transformations))
        )
