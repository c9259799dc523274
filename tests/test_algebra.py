"""Tests for Givens rotations, Householder QR and structural checks."""

import numpy as np
import pytest

from matrixqr import Matrix, OutOfBoundsError, PreconditionError, DimensionMismatchError
from matrixqr.algebra import (
    givens_coefficients,
    givens_left_rotation,
    givens_right_rotation,
    householder_qr,
    is_hermitian,
    is_symmetric,
    is_upper_bidiagonal,
    sign,
)


def test_sign_real():
    assert sign(3.5) == 1
    assert sign(-0.1) == -1
    assert sign(0.0) == 0


def test_sign_complex():
    assert np.isclose(sign(3 + 4j), 0.6 + 0.8j)
    assert sign(0j) == 0


def test_is_hermitian():
    assert is_hermitian(Matrix.from_rows([[2.0, 1.0], [1.0, 2.0]]))
    assert is_hermitian(Matrix.from_rows([[2, 1j], [-1j, 3]]))

    # complex symmetric is not Hermitian
    assert not is_hermitian(Matrix.from_rows([[2, 1j], [1j, 3]]))
    assert not is_hermitian(Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]]))
    assert not is_hermitian(Matrix(2, 3))
    assert not is_hermitian(Matrix())


def test_is_hermitian_tolerance():
    m = Matrix.from_rows([[1.0, 2.0], [2.0 + 1e-10, 1.0]])

    assert not is_hermitian(m)
    assert is_hermitian(m, tolerance=1e-8)


def test_is_symmetric():
    assert is_symmetric(Matrix.from_rows([[1.0, 5.0], [5.0, 2.0]]))
    assert not is_symmetric(Matrix.from_rows([[1.0, 5.0], [4.0, 2.0]]))
    assert not is_symmetric(Matrix(2, 3))


def test_is_upper_bidiagonal():
    assert is_upper_bidiagonal(Matrix.from_rows([[1.0, 2.0, 0.0], [0.0, 3.0, 4.0]]))
    assert not is_upper_bidiagonal(Matrix.from_rows([[1.0, 2.0, 5.0], [0.0, 3.0, 4.0]]))
    assert not is_upper_bidiagonal(Matrix.from_rows([[1.0, 0.0], [1.0, 3.0]]))


def test_givens_coefficients():
    c, s = givens_coefficients(3.0, 4.0)

    assert np.isclose(c, 0.6)
    assert np.isclose(s, 0.8)
    assert givens_coefficients(0.0, 0.0) == (1.0, 0.0)


def test_left_rotation_zeroes_target(rng):
    A = rng.standard_normal((4, 3))
    m = Matrix.from_array(A)

    givens_left_rotation(m, 1, 3, m[1, 0], m[3, 0])

    assert abs(m[3, 0]) < 1e-14
    assert np.isclose(abs(m[1, 0]), np.hypot(A[1, 0], A[3, 0]))
    # untouched rows stay the same, column norms are preserved
    assert np.array_equal(m.get_row(0).to_array(), A[[0], :])
    assert np.allclose(np.linalg.norm(m.to_array(), axis=0), np.linalg.norm(A, axis=0))


def test_right_rotation_zeroes_target(rng):
    A = rng.standard_normal((3, 4))
    m = Matrix.from_array(A)

    givens_right_rotation(m, 0, 2, m[1, 0], m[1, 2])

    assert abs(m[1, 2]) < 1e-14
    assert np.allclose(np.linalg.norm(m.to_array(), axis=1), np.linalg.norm(A, axis=1))


def test_complex_rotation_is_unitary():
    a, b = 1 + 2j, -0.5 + 1j
    m = Matrix.from_rows([[a, 1j], [b, 2.0]])

    givens_left_rotation(m, 0, 1, a, b)

    assert abs(m[1, 0]) < 1e-14
    assert np.isclose(abs(m[0, 0]), np.sqrt(abs(a) ** 2 + abs(b) ** 2))
    assert np.isclose(np.linalg.norm(m.to_array()[:, 1]), np.sqrt(5.0))


def test_rotation_index_checks():
    m = Matrix(3)

    with pytest.raises(OutOfBoundsError):
        givens_left_rotation(m, 0, 3, 1.0, 1.0)
    with pytest.raises(OutOfBoundsError):
        givens_right_rotation(m, -1, 1, 1.0, 1.0)
    with pytest.raises(PreconditionError):
        givens_left_rotation(m, 1, 1, 1.0, 1.0)


@pytest.mark.parametrize("shape", [(3, 3), (4, 3), (3, 5)])
def test_householder_qr(rng, shape):
    A = rng.standard_normal(shape)

    Q, R = householder_qr(Matrix.from_array(A))

    assert Q.shape == (shape[0], shape[0])
    assert R.shape == shape
    assert np.allclose((Q * R).to_array(), A)
    assert np.allclose((Matrix.transposed(Q) * Q).to_array(), np.eye(shape[0]))
    assert np.allclose(np.tril(R.to_array(), -1), 0.0)


def test_householder_qr_complex():
    A = np.array([[1 + 1j, 2.0], [0.5j, -1.0]])

    qr = householder_qr(Matrix.from_array(A))

    assert qr.Q.is_complex
    assert np.allclose((qr.Q * qr.R).to_array(), A)
    assert np.allclose((Matrix.conjugated(qr.Q) * qr.Q).to_array(), np.eye(2))


def test_householder_qr_empty():
    with pytest.raises(DimensionMismatchError):
        householder_qr(Matrix())
