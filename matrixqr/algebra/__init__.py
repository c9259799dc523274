"""Orthogonal transformations and structural checks."""

from matrixqr.algebra.protocols import QRFactorization
from matrixqr.algebra.householder import QRPair, householder_qr
from matrixqr.algebra.givens import (
    givens_coefficients,
    givens_left_rotation,
    givens_right_rotation,
)
from matrixqr.algebra.checks import (
    sign,
    is_hermitian,
    is_symmetric,
    is_upper_bidiagonal,
)

__all__ = [
    "QRFactorization",
    "QRPair",
    "householder_qr",
    "givens_coefficients",
    "givens_left_rotation",
    "givens_right_rotation",
    "sign",
    "is_hermitian",
    "is_symmetric",
    "is_upper_bidiagonal",
]
