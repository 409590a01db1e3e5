"""
Tests for Householder QR.
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import DimensionError, LinearlyDependentColumnsError
from pylinalg.decompositions import qr_decomposition


class TestQRComplete:

    def test_reconstruction(self, tall_matrix):
        qr = qr_decomposition(tall_matrix)
        np.testing.assert_allclose(qr.Q @ qr.R, tall_matrix, atol=1e-12)

    def test_shapes(self, tall_matrix):
        qr = qr_decomposition(tall_matrix)
        assert qr.Q.shape == (8, 8)
        assert qr.R.shape == (8, 3)

    def test_q_orthonormal(self, tall_matrix):
        Q = qr_decomposition(tall_matrix).Q
        np.testing.assert_allclose(Q.T @ Q, np.eye(8), atol=1e-12)

    def test_r_exactly_upper_triangular(self, tall_matrix):
        R = qr_decomposition(tall_matrix).R
        np.testing.assert_array_equal(np.tril(R, -1), 0.0)

    def test_r_matches_numpy_up_to_sign(self, tall_matrix):
        R = qr_decomposition(tall_matrix, mode='reduced').R
        R_ref = np.linalg.qr(tall_matrix, mode='r')
        np.testing.assert_allclose(np.abs(R), np.abs(R_ref), atol=1e-12)

    def test_square(self, general_matrix):
        qr = qr_decomposition(general_matrix)
        np.testing.assert_allclose(qr.Q @ qr.R, general_matrix, atol=1e-12)


class TestQRReduced:

    def test_shapes_and_reconstruction(self, tall_matrix):
        qr = qr_decomposition(tall_matrix, mode='reduced')
        assert qr.Q.shape == (8, 3)
        assert qr.R.shape == (3, 3)
        np.testing.assert_allclose(qr.Q @ qr.R, tall_matrix, atol=1e-12)
        np.testing.assert_allclose(qr.Q.T @ qr.Q, np.eye(3), atol=1e-12)

    def test_float32(self, tall_matrix):
        qr = qr_decomposition(tall_matrix.astype(np.float32), mode='reduced')
        assert qr.Q.dtype == np.float32
        np.testing.assert_allclose(qr.Q @ qr.R, tall_matrix, atol=1e-4)


class TestQRErrors:

    def test_wide_matrix(self):
        with pytest.raises(DimensionError, match="at least 3 rows"):
            qr_decomposition(np.ones((2, 3)))

    def test_zero_column(self):
        A = np.array([[0.0, 1.0], [0.0, 2.0], [0.0, 3.0]])
        with pytest.raises(LinearlyDependentColumnsError) as exc_info:
            qr_decomposition(A)
        assert exc_info.value.column == 0

    def test_repeated_column(self):
        A = np.array([[1.0, 1.0], [0.0, 0.0], [0.0, 0.0]])
        with pytest.raises(LinearlyDependentColumnsError) as exc_info:
            qr_decomposition(A)
        assert exc_info.value.column == 1

    def test_unknown_mode(self, tall_matrix):
        with pytest.raises(ValueError, match="mode"):
            qr_decomposition(tall_matrix, mode='economic')
