"""
Row-major 3x3 homogeneous matrix helpers.

Matrices are ``(3, 3)`` float64 NumPy arrays with the translation in the third
column and ``[0, 0, 1]`` as the third row. Vectors are ``(3,)`` arrays whose
third component is the homogeneous coordinate.
"""

from __future__ import annotations

import math

import numpy as np
from jaxtyping import Float

Matrix3x3 = Float[np.ndarray, "3 3"]
Matrix3x2 = Float[np.ndarray, "2 3"]
Vector1x3 = Float[np.ndarray, "3"]
Vector1x2 = Float[np.ndarray, "2"]


def radians_to_degrees(radians: float) -> float:
    return (radians * 180.0) / math.pi


def degrees_to_radians(degree: float) -> float:
    return (degree * math.pi) / 180.0


def identity_matrix_3x3() -> Matrix3x3:
    return np.eye(3, dtype=np.float64)


def multiply_matrices_3x3(matrix_a: Matrix3x3, matrix_b: Matrix3x3) -> Matrix3x3:
    """Return ``matrix_b @ matrix_a``.

    Reducing a sequence of transformation matrices with this function yields a
    matrix that applies the first element first.
    """
    return np.asarray(matrix_b, dtype=np.float64) @ np.asarray(matrix_a, dtype=np.float64)


def multiply_vector_1x3_and_matrix_3x3(vector: Vector1x3, matrix: Matrix3x3) -> Vector1x3:
    """Apply ``matrix`` to the column vector ``vector``."""
    return np.asarray(matrix, dtype=np.float64) @ np.asarray(vector, dtype=np.float64)


def matrix_3x3_as_matrix_3x2(matrix: Matrix3x3) -> Matrix3x2:
    """Drop the constant third row."""
    return np.array(matrix, dtype=np.float64)[:2]


def matrix_3x2_as_homogeneous_matrix_3x3(matrix: Matrix3x2) -> Matrix3x3:
    return np.vstack([np.asarray(matrix, dtype=np.float64), [0.0, 0.0, 1.0]])


def vector_1x3_as_vector_1x2(vector: Vector1x3) -> Vector1x2:
    return np.array(vector, dtype=np.float64)[:2]


def vector_1x2_as_homogeneous_vector_1x3(vector: Vector1x2) -> Vector1x3:
    return np.append(np.asarray(vector, dtype=np.float64), 1.0)


def determinant_of_matrix_3x3(matrix: Matrix3x3) -> float:
    """Determinant by the rule of Sarrus."""
    m = np.asarray(matrix, dtype=np.float64)
    return float(
        m[0, 0] * m[1, 1] * m[2, 2]
        + m[0, 1] * m[1, 2] * m[2, 0]
        + m[0, 2] * m[1, 0] * m[2, 1]
        - m[0, 2] * m[1, 1] * m[2, 0]
        - m[0, 0] * m[1, 2] * m[2, 1]
        - m[0, 1] * m[1, 0] * m[2, 2]
    )


def inverse_of_matrix_3x3(matrix: Matrix3x3) -> Matrix3x3:
    """Inverse through the adjugate.

    Raises:
        ZeroDivisionError: If the matrix is singular.
    """
    m = np.asarray(matrix, dtype=np.float64)
    determinant = determinant_of_matrix_3x3(m)
    if determinant == 0.0:
        msg = "Matrix is singular and has no inverse"
        raise ZeroDivisionError(msg)
    adjugate = np.array(
        [
            [
                m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1],
                m[0, 2] * m[2, 1] - m[0, 1] * m[2, 2],
                m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1],
            ],
            [
                m[1, 2] * m[2, 0] - m[1, 0] * m[2, 2],
                m[0, 0] * m[2, 2] - m[0, 2] * m[2, 0],
                m[0, 2] * m[1, 0] - m[0, 0] * m[1, 2],
            ],
            [
                m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0],
                m[0, 1] * m[2, 0] - m[0, 0] * m[2, 1],
                m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0],
            ],
        ]
    )
    return adjugate / determinant
