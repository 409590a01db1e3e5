"""
Tests for lstsq().

Tests the complete pipeline: design construction, backend selection,
the Cholesky-to-SVD fallback and solution properties.
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import (
    DimensionError,
    NotPositiveDefiniteError,
    ValidationError,
)
from pylinalg.lstsq import LstsqDesign, LstsqSolution, lstsq
from pylinalg.lstsq.backends import CPUCholeskyBackend, CPUSVDBackend


@pytest.fixture
def ill_conditioned(rng):
    """Full-rank 20 x 2 matrix with condition number 1e7."""
    Q, _ = np.linalg.qr(rng.standard_normal((20, 2)))
    A = Q @ np.diag([1.0, 1e-7])
    b = rng.standard_normal(20)
    return A, b


@pytest.fixture
def small_singular_value():
    """Full-rank 3 x 2 system whose least-squares solution is [1, 1]."""
    A = np.array([[1.0, 0.0], [0.0, 1e-7], [0.0, 0.0]])
    b = np.array([1.0, 1e-7, 1.0])
    return A, b


class TestDesign:

    def test_vector_rhs_stored_as_column(self, overdetermined_system):
        A, b, _ = overdetermined_system
        design = LstsqDesign.from_arrays(A, b)
        assert design.vector_rhs
        assert design.b.shape == (50, 1)
        assert (design.m, design.n) == (50, 3)
        assert design.restore_shape(np.zeros((3, 1))).shape == (3,)

    def test_matrix_rhs_kept(self, tall_matrix):
        design = LstsqDesign.from_arrays(tall_matrix, np.ones((8, 2)))
        assert not design.vector_rhs
        assert design.restore_shape(np.zeros((3, 2))).shape == (3, 2)

    def test_normal_equations(self, tall_matrix):
        design = LstsqDesign.from_arrays(tall_matrix, np.ones(8))
        np.testing.assert_allclose(design.AtA(), tall_matrix.T @ tall_matrix)
        np.testing.assert_allclose(design.Atb(), tall_matrix.T @ np.ones((8, 1)))

    def test_row_mismatch(self, tall_matrix):
        with pytest.raises(DimensionError):
            LstsqDesign.from_arrays(tall_matrix, np.ones(7))

    def test_non_finite(self, tall_matrix):
        b = np.ones(8)
        b[3] = np.nan
        with pytest.raises(ValidationError):
            LstsqDesign.from_arrays(tall_matrix, b)


class TestLstsqAuto:

    def test_well_conditioned_uses_cholesky(self, overdetermined_system):
        A, b, _ = overdetermined_system
        result = lstsq(A, b)
        assert isinstance(result, LstsqSolution)
        assert result.method == 'cholesky'
        assert result.backend_name == 'cpu_cholesky'
        assert result.rank == 3
        assert 'fallback' not in result.info
        assert result.singular_values is None

    def test_matches_numpy(self, overdetermined_system):
        A, b, _ = overdetermined_system
        x_ref, res_ref, _, _ = np.linalg.lstsq(A, b, rcond=None)
        result = lstsq(A, b)
        np.testing.assert_allclose(result.x, x_ref, atol=1e-10)
        assert result.residuals == pytest.approx(float(res_ref[0]), rel=1e-8)

    def test_rank_deficient_falls_back(self, rank_deficient):
        result = lstsq(rank_deficient, [1.0, 2.0, 4.0])
        assert result.method == 'svd'
        assert 'fallback' in result.info
        assert result.rank == 2
        assert result.has_warning("Rank deficient")

    def test_ill_conditioned_full_rank_solution(self, ill_conditioned):
        A, b = ill_conditioned
        result = lstsq(A, b)
        np.testing.assert_allclose(
            result.x, np.linalg.lstsq(A, b, rcond=None)[0], rtol=1e-6,
        )
        assert result.rank == 2
        assert not result.has_warning("Rank deficient")

    def test_small_singular_direction_is_kept(self, small_singular_value):
        A, b = small_singular_value
        result = lstsq(A, b)
        assert result.method == 'cholesky'
        np.testing.assert_allclose(result.x, [1.0, 1.0], rtol=1e-9)
        assert result.residuals == pytest.approx(1.0)

    def test_underdetermined_goes_straight_to_svd(self, rng):
        A = rng.standard_normal((2, 4))
        result = lstsq(A, rng.standard_normal(2))
        assert result.method == 'svd'
        assert 'fallback' not in result.info
        assert result.residuals == pytest.approx(0.0, abs=1e-12)

    def test_matrix_rhs(self, tall_matrix, rng):
        B = rng.standard_normal((8, 2))
        result = lstsq(tall_matrix, B)
        assert result.x.shape == (3, 2)
        assert result.residuals.shape == (2,)
        np.testing.assert_allclose(
            result.x, np.linalg.lstsq(tall_matrix, B, rcond=None)[0], atol=1e-10,
        )


class TestLstsqMethods:

    def test_svd_matches_cholesky(self, overdetermined_system):
        A, b, _ = overdetermined_system
        x_chol = lstsq(A, b, method='cholesky').x
        svd_result = lstsq(A, b, method='svd')
        np.testing.assert_allclose(svd_result.x, x_chol, atol=1e-8)
        np.testing.assert_allclose(
            svd_result.singular_values, np.linalg.svd(A, compute_uv=False), atol=1e-8,
        )
        assert svd_result.warnings == ()

    def test_forced_cholesky_raises_on_rank_deficiency(self, rank_deficient):
        with pytest.raises(NotPositiveDefiniteError):
            lstsq(rank_deficient, np.ones(3), method='cholesky')

    def test_forced_cholesky_raises_on_wide(self, rng):
        with pytest.raises(NotPositiveDefiniteError, match="underdetermined"):
            lstsq(rng.standard_normal((2, 3)), np.ones(2), method='cholesky')

    def test_forced_cholesky_refuses_ill_conditioned(self, small_singular_value):
        A, b = small_singular_value
        with pytest.raises(NotPositiveDefiniteError, match="ill-conditioned"):
            lstsq(A, b, method='cholesky')

    def test_svd_keeps_small_singular_value(self, small_singular_value):
        A, b = small_singular_value
        result = lstsq(A, b, method='svd')
        assert result.rank == 2
        np.testing.assert_allclose(result.singular_values, [1.0, 1e-7], rtol=1e-12)
        np.testing.assert_allclose(result.x, [1.0, 1.0], rtol=1e-9)
        assert result.warnings == ()

    def test_svd_resolves_tiny_singular_value(self, rng):
        Q1, _ = np.linalg.qr(rng.standard_normal((6, 3)))
        Q2, _ = np.linalg.qr(rng.standard_normal((3, 3)))
        A = Q1 @ np.diag([1.0, 1e-2, 1e-9]) @ Q2.T
        b = rng.standard_normal(6)
        result = lstsq(A, b, method='svd')
        assert result.rank == 3
        np.testing.assert_allclose(
            result.x, np.linalg.lstsq(A, b, rcond=None)[0], rtol=1e-4,
        )

    def test_rcond_truncates(self):
        A = np.diag([1.0, 1e-3, 1.0])[:, :2]
        result = lstsq(A, [1.0, 1.0, 0.0], method='svd', rcond=1e-2)
        assert result.rank == 1
        np.testing.assert_allclose(result.x, [1.0, 0.0], atol=1e-12)

    def test_unknown_method(self, tall_matrix):
        with pytest.raises(ValueError, match="method"):
            lstsq(tall_matrix, np.ones(8), method='qr')

    def test_negative_rcond(self, tall_matrix):
        with pytest.raises(ValidationError, match="rcond"):
            lstsq(tall_matrix, np.ones(8), rcond=-1.0)


class TestBackends:

    def test_cholesky_condition_threshold(self, tall_matrix):
        design = LstsqDesign.from_arrays(tall_matrix, np.ones(8))
        with pytest.raises(NotPositiveDefiniteError, match="ill-conditioned"):
            CPUCholeskyBackend(condition_threshold=1.0).solve(design)

    def test_cholesky_without_threshold_accepts_ill_conditioned(self, small_singular_value):
        A, b = small_singular_value
        result = CPUCholeskyBackend().solve(LstsqDesign.from_arrays(A, b))
        assert result.info['condition_estimate'] == pytest.approx(1e14, rel=1e-6)
        np.testing.assert_allclose(result.params.x[:, 0], [1.0, 1.0], rtol=1e-9)

    def test_cholesky_numerically_singular_normal_equations(self, rank_deficient):
        design = LstsqDesign.from_arrays(rank_deficient, np.ones(3))
        with pytest.raises(NotPositiveDefiniteError, match="not positive definite"):
            CPUCholeskyBackend().solve(design)

    def test_cholesky_timing_sections(self, tall_matrix):
        design = LstsqDesign.from_arrays(tall_matrix, np.ones(8))
        result = CPUCholeskyBackend().solve(design)
        for section in ('total_seconds', 'normal_equations', 'cholesky', 'substitution'):
            assert section in result.timing
        assert result.info['condition_estimate'] >= 1.0

    def test_svd_info(self, tall_matrix):
        design = LstsqDesign.from_arrays(tall_matrix, np.ones(8))
        result = CPUSVDBackend().solve(design)
        assert result.info['method'] == 'svd'
        assert result.info['rank'] == 3
        assert result.info['cutoff'] > 0
        assert 'svd' in result.timing


class TestSolutionSummary:

    def test_summary_contents(self, overdetermined_system):
        A, b, _ = overdetermined_system
        text = lstsq(A, b).summary()
        assert "Least Squares Results" in text
        assert "Method: cholesky" in text
        assert "Rank: 3" in text

    def test_summary_reports_fallback(self, rank_deficient):
        text = lstsq(rank_deficient, np.ones(3)).summary()
        assert "Fallback:" in text
        assert "Rank deficient" in text
