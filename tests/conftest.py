"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def general_matrix(rng):
    """Well-conditioned non-symmetric 5 x 5 matrix."""
    return rng.standard_normal((5, 5)) + 5.0 * np.eye(5)


@pytest.fixture
def spd_matrix(rng):
    """Symmetric positive-definite 5 x 5 matrix."""
    M = rng.standard_normal((5, 5))
    return M @ M.T + 5.0 * np.eye(5)


@pytest.fixture
def symmetric_indefinite(rng):
    """Symmetric matrix with eigenvalues of both signs."""
    Q, _ = np.linalg.qr(rng.standard_normal((4, 4)))
    return Q @ np.diag([4.0, -3.0, 2.0, -1.0]) @ Q.T


@pytest.fixture
def tall_matrix(rng):
    """Full column rank 8 x 3 matrix."""
    return rng.standard_normal((8, 3))


@pytest.fixture
def rank_deficient():
    """3 x 3 matrix of rank 2."""
    return np.array([
        [1.0, 2.0, 3.0],
        [4.0, 5.0, 6.0],
        [7.0, 8.0, 9.0],
    ])


@pytest.fixture
def overdetermined_system(rng):
    """Overdetermined system with a known low-noise solution."""
    m, n = 50, 3
    A = rng.standard_normal((m, n))
    x_true = np.array([1.0, -2.0, 0.5])
    b = A @ x_true + rng.standard_normal(m) * 0.01
    return A, b, x_true
