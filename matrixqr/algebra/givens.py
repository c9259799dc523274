"""Givens plane rotations applied in place to rows or columns of a Matrix."""

import numpy as np

from matrixqr.core.exceptions import OutOfBoundsError, PreconditionError
from matrixqr.core.matrix import Matrix


def givens_coefficients(a: complex, b: complex) -> tuple[complex, complex]:
    """
    Coefficients of the rotation taking ``(a, b)`` to ``(r, 0)``.

    With ``r = sqrt(|a|^2 + |b|^2)``, ``c = a / r`` and ``s = b / r`` the
    rotation is ``G = [[conj(c), conj(s)], [-s, c]]``, which is unitary.
    A zero pair gives the identity rotation.

    Args:
        a: Component that is kept
        b: Component that is eliminated

    Returns:
        (c, s) tuple
    """
    r = np.hypot(abs(a), abs(b))
    if r == 0:
        return 1.0, 0.0
    return a / r, b / r


def _check_pair(i: int, j: int, extent: int, axis: str) -> None:
    if i == j:
        raise PreconditionError(
            f"Givens rotation needs two distinct {axis}s, got {i} twice",
            requirement="distinct indices",
        )
    for idx in (i, j):
        if not 0 <= idx < extent:
            raise OutOfBoundsError(
                f"Givens rotation {axis} {idx} is outside [0, {extent})",
                index=idx,
                bounds=extent,
            )


def givens_left_rotation(
    matrix: Matrix, i: int, j: int, a: complex, b: complex
) -> None:
    """
    Apply ``G`` from the left to rows `i` and `j` of `matrix`.

    When ``(a, b) == (matrix[i, k], matrix[j, k])`` this zeroes
    ``matrix[j, k]``.
    """
    _check_pair(i, j, matrix.rows, "row")
    c, s = givens_coefficients(a, b)

    for k in range(matrix.columns):
        x, y = matrix[i, k], matrix[j, k]
        matrix[i, k] = np.conj(c) * x + np.conj(s) * y
        matrix[j, k] = -s * x + c * y


def givens_right_rotation(
    matrix: Matrix, i: int, j: int, a: complex, b: complex
) -> None:
    """
    Apply ``G^T`` from the right to columns `i` and `j` of `matrix`.

    When ``(a, b) == (matrix[k, i], matrix[k, j])`` this zeroes
    ``matrix[k, j]``.
    """
    _check_pair(i, j, matrix.columns, "column")
    c, s = givens_coefficients(a, b)

    for k in range(matrix.rows):
        x, y = matrix[k, i], matrix[k, j]
        matrix[k, i] = np.conj(c) * x + np.conj(s) * y
        matrix[k, j] = -s * x + c * y
