"""Protocols for the factorizations consumed by the QR algorithms."""

from typing import Protocol, Tuple

from matrixqr.core.matrix import Matrix


class QRFactorization(Protocol):
    """
    Protocol for QR factorization routines.
    Allows swapping the Householder routine for another unitary factorization.
    """

    def __call__(self, matrix: Matrix) -> Tuple[Matrix, Matrix]:
        """
        Factor a matrix into unitary and upper triangular parts.

        Args:
            matrix: Matrix to factor (rows, columns)

        Returns:
            (Q, R) with Q unitary (rows, rows), R upper triangular
            (rows, columns) and Q R equal to the input
        """
        ...
