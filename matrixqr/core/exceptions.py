"""
Exception hierarchy for matrixqr.

All exceptions inherit from MatrixQRError so callers can catch any
library-specific error in one place. Precondition checks are always on:
shape, index and structure violations are reported by raising, never by
assertions that can be disabled.

The iterative algorithms never raise for non-convergence. They run a fixed
iteration budget and return whatever the last iteration produced.
"""


class MatrixQRError(Exception):
    """Base exception for all matrixqr errors."""
    pass


class ValidationError(MatrixQRError):
    """
    Input validation failed.

    Raised when user-provided matrices or arguments fail validation checks.
    """
    pass


class DimensionMismatchError(ValidationError):
    """
    Matrix dimensions are incompatible or invalid.

    Raised for mismatched shapes in addition, subtraction and products,
    for ragged literal rows, and for non-positive construction sizes.

    Attributes:
        expected: Expected shape or size, if known
        actual: Shape or size that was given
    """

    def __init__(
        self,
        message: str,
        expected: object | None = None,
        actual: object | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class OutOfBoundsError(ValidationError):
    """
    An element, row, column or submatrix index is outside the matrix.

    Attributes:
        index: The offending index or range
        bounds: The valid extent it was checked against
    """

    def __init__(
        self,
        message: str,
        index: object | None = None,
        bounds: object | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bounds = bounds


class PreconditionError(ValidationError):
    """
    A structural requirement on an input is not met.

    Raised for non-Hermitian input to the eigensolver, non-symmetric or
    non-2x2 input to the Wilkinson shift, non-bidiagonal input to the SVD
    sweep, and invalid algorithm arguments.

    Attributes:
        requirement: Short name of the violated requirement
    """

    def __init__(self, message: str, requirement: str | None = None):
        super().__init__(message)
        self.requirement = requirement


class ElementTypeError(ValidationError):
    """
    Matrix element type is not real or complex floating point.

    Attributes:
        dtype: The rejected numpy dtype
    """

    def __init__(self, message: str, dtype: object | None = None):
        super().__init__(message)
        self.dtype = dtype
