"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from matrixqr import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def rect_matrix():
    """2x3 matrix with distinct entries."""
    return Matrix.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


@pytest.fixture
def symmetric_3x3():
    """Symmetric tridiagonal matrix with eigenvalues 3 - sqrt(3), 3, 3 + sqrt(3)."""
    return Matrix.from_rows([
        [4.0, 1.0, 0.0],
        [1.0, 3.0, 1.0],
        [0.0, 1.0, 2.0],
    ])


@pytest.fixture
def bidiagonal_3x3():
    """Upper bidiagonal matrix with well separated singular values."""
    return Matrix.from_rows([
        [4.0, 1.0, 0.0],
        [0.0, 3.0, 1.0],
        [0.0, 0.0, 1.0],
    ])
