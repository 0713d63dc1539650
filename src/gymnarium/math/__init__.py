"""Geometry value types and affine 2D transformations."""

from __future__ import annotations

from .geometry import Position2D, Position3D, Size2D, Size3D, Vector2D, Vector3D
from .matrices import (
    degrees_to_radians,
    determinant_of_matrix_3x3,
    inverse_of_matrix_3x3,
    matrix_3x2_as_homogeneous_matrix_3x3,
    matrix_3x3_as_matrix_3x2,
    multiply_matrices_3x3,
    multiply_vector_1x3_and_matrix_3x3,
    radians_to_degrees,
    vector_1x2_as_homogeneous_vector_1x3,
    vector_1x3_as_vector_1x2,
)
from .transformations import Transformation2D, Transformations2D, TransformationKind

__all__ = [
    "Position2D",
    "Position3D",
    "Size2D",
    "Size3D",
    "Transformation2D",
    "TransformationKind",
    "Transformations2D",
    "Vector2D",
    "Vector3D",
    "degrees_to_radians",
    "determinant_of_matrix_3x3",
    "inverse_of_matrix_3x3",
    "matrix_3x2_as_homogeneous_matrix_3x3",
    "matrix_3x3_as_matrix_3x2",
    "multiply_matrices_3x3",
    "multiply_vector_1x3_and_matrix_3x3",
    "radians_to_degrees",
    "vector_1x2_as_homogeneous_vector_1x3",
    "vector_1x3_as_vector_1x2",
]
