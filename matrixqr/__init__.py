"""
matrixqr: dense matrices and QR iterations for eigen and singular values.

This library provides:
- A dense row-major Matrix over real or complex floating point scalars
- Shifted QR iteration for the spectral decomposition of Hermitian matrices
- Implicit-shift QR sweeps for the SVD of upper bidiagonal matrices
- Householder QR and Givens rotations used by both algorithms
"""

__version__ = "0.1.0"

from matrixqr.core.matrix import Matrix
from matrixqr.core.exceptions import (
    MatrixQRError,
    ValidationError,
    DimensionMismatchError,
    OutOfBoundsError,
    PreconditionError,
    ElementTypeError,
)
from matrixqr.algorithms.qr_algorithm import (
    SpectralPair,
    DiagBasisQR,
    get_wilkinson_shift,
    get_real_spec_decomposition,
    bidiagonal_algorithm_qr,
)

__all__ = [
    "Matrix",
    "MatrixQRError",
    "ValidationError",
    "DimensionMismatchError",
    "OutOfBoundsError",
    "PreconditionError",
    "ElementTypeError",
    "SpectralPair",
    "DiagBasisQR",
    "get_wilkinson_shift",
    "get_real_spec_decomposition",
    "bidiagonal_algorithm_qr",
]
