"""Matrix type and error hierarchy."""

from matrixqr.core.matrix import Matrix, ROUND_ZERO_TOLERANCE
from matrixqr.core.exceptions import (
    MatrixQRError,
    ValidationError,
    DimensionMismatchError,
    OutOfBoundsError,
    PreconditionError,
    ElementTypeError,
)

__all__ = [
    "Matrix",
    "ROUND_ZERO_TOLERANCE",
    "MatrixQRError",
    "ValidationError",
    "DimensionMismatchError",
    "OutOfBoundsError",
    "PreconditionError",
    "ElementTypeError",
]
