"""
QR iterations for Hermitian eigenvalues and bidiagonal singular values.

Both algorithms run a fixed number of iterations and never check for
convergence. How close the result is to diagonal depends only on the
iteration budget and on the separation of the eigen/singular values; a
poorly converged result is returned as-is rather than reported as an error.
"""

import logging
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from matrixqr.algebra.checks import is_hermitian, is_upper_bidiagonal, sign
from matrixqr.algebra.givens import givens_left_rotation, givens_right_rotation
from matrixqr.algebra.householder import householder_qr
from matrixqr.algebra.protocols import QRFactorization
from matrixqr.core.exceptions import PreconditionError
from matrixqr.core.matrix import Matrix

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 100


@dataclass
class SpectralPair:
    """Approximately diagonal D and the accumulated eigenvector basis Q."""

    D: Matrix
    Q: Matrix

    def __iter__(self) -> Iterator[Matrix]:
        return iter((self.D, self.Q))


@dataclass
class DiagBasisQR:
    """Factors of U S VT with S approximately diagonal."""

    U: Matrix
    S: Matrix
    VT: Matrix

    def __iter__(self) -> Iterator[Matrix]:
        return iter((self.U, self.S, self.VT))


def _check_iterations(it_cnt: int) -> None:
    is_integer = isinstance(it_cnt, (int, np.integer)) and not isinstance(it_cnt, bool)
    if not is_integer or it_cnt < 0:
        raise PreconditionError(
            f"Iteration count must be a non-negative integer, got {it_cnt!r}",
            requirement="non-negative iteration count",
        )


def _off_diagonal_magnitude(matrix: Matrix) -> float:
    off = matrix.to_array()
    np.fill_diagonal(off, 0)
    return float(np.abs(off).max(initial=0.0))


def get_wilkinson_shift(matrix: Matrix):
    """
    Eigenvalue of a symmetric 2x2 matrix ``[[a, b], [b, c]]`` nearest to c.

    Computed as ``c - sign(d) * b^2 / (|d| + sqrt(d^2 + b^2))`` with
    ``d = (a - c) / 2``. ``sign(0)`` counts as +1. When both d and b are
    zero the correction term is zero and the shift is c.

    Raises:
        PreconditionError: If the matrix is not 2x2 or not symmetric
    """
    if matrix.shape != (2, 2):
        raise PreconditionError(
            f"Wilkinson shift needs a 2x2 matrix, got "
            f"{matrix.rows}x{matrix.columns}",
            requirement="2x2",
        )
    if matrix[0, 1] != matrix[1, 0]:
        raise PreconditionError(
            "Wilkinson shift needs a symmetric matrix, got "
            f"m[0, 1]={matrix[0, 1]} and m[1, 0]={matrix[1, 0]}",
            requirement="symmetric",
        )

    a, b, c = matrix[0, 0], matrix[0, 1], matrix[1, 1]
    d = (a - c) / 2
    coefficient = abs(d) + np.sqrt(d * d + b * b)
    if coefficient == 0:
        return c

    d_sign = sign(d) if d != 0 else 1
    return c - (d_sign * b * b) / coefficient


def get_real_spec_decomposition(
    matrix: Matrix,
    shift: complex = 0.0,
    it_cnt: int = DEFAULT_ITERATIONS,
    qr: QRFactorization = householder_qr,
) -> SpectralPair:
    """
    Spectral decomposition of a Hermitian matrix by shifted QR iteration.

    Each iteration factors ``D - shift*I = Q R``, sets ``D = R Q + shift*I``,
    accumulates ``transform = transform Q`` and rounds near-zero entries of D.
    The shift is the same in every iteration and nothing is deflated.

    Args:
        matrix: Hermitian matrix (n, n)
        shift: Constant shift subtracted and re-added in every iteration
        it_cnt: Number of iterations to run
        qr: QR factorization routine

    Returns:
        SpectralPair (D, Q) where D approximates a diagonal matrix of
        eigenvalues and the columns of Q are the matching eigenvectors,
        so that ``Q D Q^H`` approximates the input

    Raises:
        PreconditionError: If the matrix is not Hermitian
    """
    if not is_hermitian(matrix):
        raise PreconditionError(
            "Spectral decomposition needs a Hermitian matrix",
            requirement="hermitian",
        )
    _check_iterations(it_cnt)

    logger.debug(
        "Shifted QR on %dx%d matrix: shift=%s, iterations=%d",
        matrix.rows, matrix.columns, shift, it_cnt,
    )

    D = matrix.copy()
    shift_I = Matrix.identity(D.rows, shift)
    transform = Matrix.identity(D.rows)

    for _ in range(it_cnt):
        Q, R = qr(D - shift_I)
        D = R * Q + shift_I
        transform *= Q

        D.round_zeroes()

    logger.debug(
        "Shifted QR finished: largest off-diagonal magnitude %.3e",
        _off_diagonal_magnitude(D),
    )
    return SpectralPair(D=D, Q=transform)


def bidiagonal_algorithm_qr(
    B: Matrix, it_cnt: int = DEFAULT_ITERATIONS
) -> DiagBasisQR:
    """
    Singular value decomposition of an upper bidiagonal matrix.

    Runs `it_cnt` implicit-shift QR sweeps. Each sweep takes the Wilkinson
    shift of the trailing 2x2 block of ``S^T S`` (formed from the bidiagonal
    entries only), then chases the bulge down the diagonal: a column rotation
    starts or pushes the bulge below the diagonal and a row rotation moves
    it back above. ``S^T S`` and ``S S^T`` are never formed.

    Args:
        B: Upper bidiagonal matrix (r, c) with r, c >= 2
        it_cnt: Number of sweeps to run

    Returns:
        DiagBasisQR (U, S, VT) with U (r, r) and VT (c, c) unitary and
        ``U S VT`` approximating B. Singular values on the diagonal of S are
        neither sorted nor sign-normalised.

    Raises:
        PreconditionError: If B is smaller than 2x2 or not upper bidiagonal
    """
    if B.rows < 2 or B.columns < 2:
        raise PreconditionError(
            f"Bidiagonal QR needs at least a 2x2 matrix, got {B.rows}x{B.columns}",
            requirement="at least 2x2",
        )
    if not is_upper_bidiagonal(B):
        raise PreconditionError(
            "Bidiagonal QR needs an upper bidiagonal matrix",
            requirement="upper bidiagonal",
        )
    _check_iterations(it_cnt)

    S = B.copy()
    r, c = S.rows, S.columns
    size = min(r, c)

    U = Matrix.identity(r, dtype=S.dtype)
    VT = Matrix.identity(c, dtype=S.dtype)

    logger.debug("Bidiagonal QR on %dx%d matrix: sweeps=%d", r, c, it_cnt)

    for _ in range(it_cnt):
        minor = S.get_submatrix((r - 2, r), (c - 2, c))
        BB = Matrix(2, dtype=S.dtype)

        BB[0, 0] = minor[0, 0] * minor[0, 0] + (
            S[r - 3, c - 2] * S[r - 3, c - 2] if r >= 3 else 0
        )
        BB[1, 0] = minor[0, 0] * minor[0, 1]
        BB[0, 1] = BB[1, 0]
        BB[1, 1] = minor[0, 1] * minor[0, 1] + minor[1, 1] * minor[1, 1]

        shift = get_wilkinson_shift(BB)

        for i in range(size):
            if i + 1 < c:
                if i > 0:
                    f_elem, s_elem = S[i - 1, i], S[i - 1, i + 1]
                else:
                    f_elem, s_elem = S[0, 0] * S[0, 0] - shift, S[0, 1] * S[0, 0]

                givens_left_rotation(VT, i, i + 1, np.conj(f_elem), np.conj(s_elem))
                givens_right_rotation(S, i, i + 1, f_elem, s_elem)

            if i + 1 < r:
                f_elem, s_elem = S[i, i], S[i + 1, i]

                givens_right_rotation(U, i, i + 1, np.conj(f_elem), np.conj(s_elem))
                givens_left_rotation(S, i, i + 1, f_elem, s_elem)

        S.round_zeroes()

    logger.debug(
        "Bidiagonal QR finished: largest off-diagonal magnitude %.3e",
        _off_diagonal_magnitude(S),
    )
    return DiagBasisQR(U=U, S=S, VT=VT)
