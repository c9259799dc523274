"""QR-based eigenvalue and singular value algorithms."""

from matrixqr.algorithms.qr_algorithm import (
    DEFAULT_ITERATIONS,
    SpectralPair,
    DiagBasisQR,
    get_wilkinson_shift,
    get_real_spec_decomposition,
    bidiagonal_algorithm_qr,
)

__all__ = [
    "DEFAULT_ITERATIONS",
    "SpectralPair",
    "DiagBasisQR",
    "get_wilkinson_shift",
    "get_real_spec_decomposition",
    "bidiagonal_algorithm_qr",
]
