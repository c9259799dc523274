"""Structural predicates and the scalar sign function."""

import numpy as np

from matrixqr.core.matrix import Matrix

HERMITIAN_TOLERANCE = 0.0


def sign(x: complex) -> complex:
    """
    Sign of a scalar.

    Returns -1, 0 or +1 for real input. For complex input returns the unit
    phase ``x / |x|``, or 0 when ``x == 0``.
    """
    if np.iscomplexobj(x):
        magnitude = abs(x)
        return x / magnitude if magnitude != 0 else 0
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0


def is_hermitian(matrix: Matrix, tolerance: float = HERMITIAN_TOLERANCE) -> bool:
    """Check that a non-empty square matrix equals its conjugate transpose."""
    if matrix.rows == 0 or matrix.rows != matrix.columns:
        return False
    arr = matrix.to_array()
    return bool(np.all(np.abs(arr - arr.conj().T) <= tolerance))


def is_symmetric(matrix: Matrix) -> bool:
    """Exact check that a square matrix equals its plain transpose."""
    return matrix.rows == matrix.columns and matrix == Matrix.transposed(matrix)


def is_upper_bidiagonal(matrix: Matrix, tolerance: float = 0.0) -> bool:
    """Check that only the main and first super-diagonal hold non-zeros."""
    arr = matrix.to_array()
    outside = np.tril(arr, -1) + np.triu(arr, 2)
    return bool(np.all(np.abs(outside) <= tolerance))
