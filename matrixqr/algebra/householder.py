"""Householder QR factorization using SciPy."""

from dataclasses import dataclass
from typing import Iterator

import scipy.linalg

from matrixqr.core.exceptions import DimensionMismatchError
from matrixqr.core.matrix import Matrix


@dataclass
class QRPair:
    """Unitary factor Q and upper triangular factor R with Q R = M."""

    Q: Matrix
    R: Matrix

    def __iter__(self) -> Iterator[Matrix]:
        return iter((self.Q, self.R))


def householder_qr(matrix: Matrix) -> QRPair:
    """
    Full QR factorization by Householder reflections (LAPACK geqrf).

    Args:
        matrix: Non-empty matrix (rows, columns)

    Returns:
        QRPair with Q of shape (rows, rows) and R of shape (rows, columns)
    """
    if matrix.rows == 0:
        raise DimensionMismatchError(
            "Cannot factor an empty matrix", expected="non-empty", actual=matrix.shape
        )

    Q, R = scipy.linalg.qr(matrix.to_array(), mode="full")
    return QRPair(Q=Matrix.from_array(Q), R=Matrix.from_array(R))
