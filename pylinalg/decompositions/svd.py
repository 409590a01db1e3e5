"""
Singular value decomposition through the symmetric eigen-solver.

The right (or left) singular vectors are the eigenvectors of a Gram
matrix, A'A or AA'; the singular values are the square roots of its
eigenvalues. Squaring the matrix halves the attainable relative accuracy
of small singular values.

Rank decisions (least squares, matrix_rank, orth, null_space) instead use
_one_sided_jacobi, which orthogonalizes the columns of A itself and
resolves singular values down to about eps times the largest one. Their
cutoff is therefore eps-scaled (see default_rcond).
"""

from dataclasses import dataclass
from typing import Any
import warnings
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.precision import machine_epsilon, working_dtype
from pylinalg.core.tolerances import DEFAULT_TOL, DEFAULT_MAX_ITER
from pylinalg.core.validation import (
    check_array,
    check_1d,
    check_finite,
    check_matrix,
    check_tolerance,
)
from pylinalg.decompositions.eigen import _jacobi


@dataclass(frozen=True)
class SVDResult:
    """
    Result of a singular value decomposition A = U diag(S) V'.

    With k = min(m, n):

    Attributes:
        U: Left singular vectors (m x m when complete, m x k when reduced)
        S: k singular values, non-negative and descending
        V: Right singular vectors (n x n when complete, n x k when reduced)
    """
    U: NDArray[np.floating[Any]]
    S: NDArray[np.floating[Any]]
    V: NDArray[np.floating[Any]]

    def reconstruct(self) -> NDArray[np.floating[Any]]:
        """Rebuild U diag(S) V' from the factors."""
        return self.U @ diag_svd(self.S, self.U.shape[1], self.V.shape[1]) @ self.V.T


def svd_decomposition(
    A: ArrayLike,
    full_matrices: bool = True,
    tol: float = DEFAULT_TOL,
) -> SVDResult:
    """
    Singular value decomposition.

    Reduced mode diagonalizes the smaller Gram matrix (A'A when n <= m,
    otherwise AA'). Complete mode diagonalizes the Gram matrix whose
    eigenbasis is the square factor (A'A when m <= n, otherwise AA').
    The complementary factor is A V (or A' U) normalized column by column;
    a column whose singular value is at or below machine epsilon is left as
    a zero vector.

    Args:
        A: Matrix (m x n)
        full_matrices: If True, U is m x m and V is n x n
        tol: Convergence tolerance of the Jacobi eigen-solver on the Gram
            matrix (absolute, in units of A squared)

    Returns:
        SVDResult with U, S and V

    Warns:
        RuntimeWarning: If the Jacobi iteration does not converge
    """
    A_arr = check_matrix(A, 'A')
    check_tolerance(tol)
    return _svd(A_arr, full_matrices, tol)


def singular_values(
    A: ArrayLike,
    tol: float = DEFAULT_TOL,
) -> NDArray[np.floating[Any]]:
    """Singular values of A, non-negative and descending."""
    A_arr = check_matrix(A, 'A')
    check_tolerance(tol)
    return _svd(A_arr, full_matrices=False, tol=tol).S


def diag_svd(S: ArrayLike, m: int, n: int) -> NDArray[np.floating[Any]]:
    """
    Rectangular m x n matrix with S on its main diagonal.

    Raises:
        ValidationError: If S has more entries than min(m, n)
    """
    S_arr = check_array(S, 'S')
    check_1d(S_arr, 'S')
    check_finite(S_arr, 'S')
    if m < 0 or n < 0:
        raise ValidationError(f"diag_svd: m and n must be non-negative, got ({m}, {n})")
    if S_arr.shape[0] > min(m, n):
        raise ValidationError(
            f"S: {S_arr.shape[0]} values do not fit the diagonal of a "
            f"{m} x {n} matrix"
        )
    out = np.zeros((m, n), dtype=working_dtype(S_arr))
    k = S_arr.shape[0]
    out[np.arange(k), np.arange(k)] = S_arr
    return out


def default_rcond(shape: tuple[int, int], dtype: np.dtype) -> float:
    """Default relative cutoff for rank decisions: 10 max(m, n) eps."""
    return 10.0 * max(shape) * machine_epsilon(dtype)


def orthogonality_tolerance(shape: tuple[int, int], dtype: np.dtype) -> float:
    """Default column orthogonality tolerance of _one_sided_jacobi: max(m, n) eps."""
    return max(shape) * machine_epsilon(dtype)


def singular_value_cutoff(
    S: NDArray[np.floating[Any]],
    rcond: float,
) -> float:
    """Absolute threshold below which a singular value counts as zero."""
    eps = machine_epsilon(working_dtype(S))
    largest = float(S[0]) if S.size else 0.0
    return max(eps, rcond * largest)


def _gram_eigh(
    G: NDArray[np.floating[Any]],
    tol: float,
    max_iter: int = DEFAULT_MAX_ITER,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Eigenpairs of a Gram matrix sorted by descending eigenvalue."""
    result = _jacobi(G, tol, max_iter)
    if not result.converged:
        warnings.warn(
            f"Jacobi iteration on the Gram matrix did not converge after "
            f"{result.iterations} rotations (tol={tol}).",
            RuntimeWarning,
            stacklevel=2,
        )
    # Stable sort keeps equal eigenvalues in rotation order
    order = np.argsort(-result.D, kind='stable')
    return result.D[order], result.V[:, order]


def _svd(
    A: NDArray[np.floating[Any]],
    full_matrices: bool,
    tol: float,
    max_iter: int = DEFAULT_MAX_ITER,
) -> SVDResult:
    """SVD kernel on a validated matrix."""
    m, n = A.shape
    if (full_matrices and m <= n) or (not full_matrices and m >= n):
        return _svd_right_gram(A, full_matrices, tol, max_iter)

    flipped = _svd_right_gram(A.T, full_matrices, tol, max_iter)
    return SVDResult(U=flipped.V, S=flipped.S, V=flipped.U)


def _svd_right_gram(
    A: NDArray[np.floating[Any]],
    full_matrices: bool,
    tol: float,
    max_iter: int,
) -> SVDResult:
    """SVD from the eigen-decomposition of A'A."""
    m, n = A.shape
    k = min(m, n)
    dtype = working_dtype(A)
    eps = machine_epsilon(dtype)

    D, V = _gram_eigh(A.T @ A, tol, max_iter)
    S = np.sqrt(np.maximum(D[:k], 0.0)).astype(dtype, copy=False)

    U = A @ V[:, :k]
    nonzero = S > eps
    U[:, nonzero] /= S[nonzero]
    U[:, ~nonzero] = 0.0

    if not full_matrices:
        V = V[:, :k]
    return SVDResult(U=U, S=S, V=V)


def _one_sided_jacobi(
    A: NDArray[np.floating[Any]],
    tol: float,
    max_iter: int = DEFAULT_MAX_ITER,
) -> SVDResult:
    """
    SVD by one-sided (Hestenes) Jacobi rotations applied to the columns of A.

    Each rotation makes a pair of columns of W = A V orthogonal. A sweep
    visits every pair; iteration stops after a sweep with no rotation, or
    after max_iter sweeps. A pair is left alone when
    |w_p . w_q| <= tol ||w_p|| ||w_q||, or when either column has norm at
    or below max(m, n) eps ||A||_F (numerically zero).

    Returns:
        SVDResult with U (m x k), S (k values, descending) and the complete
        n x n V, k = min(m, n). V[:, k:] and the columns of V paired with
        zero singular values span the null space of A.

    Warns:
        RuntimeWarning: If max_iter sweeps leave a pair unconverged
    """
    m, n = A.shape
    k = min(m, n)
    dtype = working_dtype(A)
    eps = machine_epsilon(dtype)
    W = np.array(A, dtype=dtype, copy=True)
    V = np.eye(n, dtype=dtype)

    floor = (max(m, n) * eps) ** 2 * float(np.sum(W * W))
    converged = False
    sweeps = 0

    while sweeps < max_iter:
        sweeps += 1
        rotated = False
        for p in range(n - 1):
            for q in range(p + 1, n):
                alpha = W[:, p] @ W[:, p]
                beta = W[:, q] @ W[:, q]
                gamma = W[:, p] @ W[:, q]
                if min(alpha, beta) <= floor:
                    continue
                if abs(gamma) <= tol * np.sqrt(alpha * beta):
                    continue

                zeta = (beta - alpha) / (2.0 * gamma)
                t = (1.0 if zeta >= 0 else -1.0) / (abs(zeta) + np.hypot(1.0, zeta))
                c = 1.0 / np.sqrt(1.0 + t * t)
                s = c * t

                w_p, w_q = W[:, p].copy(), W[:, q].copy()
                W[:, p] = c * w_p - s * w_q
                W[:, q] = s * w_p + c * w_q

                v_p, v_q = V[:, p].copy(), V[:, q].copy()
                V[:, p] = c * v_p - s * v_q
                V[:, q] = s * v_p + c * v_q

                rotated = True
        if not rotated:
            converged = True
            break

    if not converged:
        warnings.warn(
            f"One-sided Jacobi SVD did not converge after {sweeps} sweeps "
            f"(tol={tol}).",
            RuntimeWarning,
            stacklevel=2,
        )

    norms = np.sqrt(np.sum(W * W, axis=0))
    order = np.argsort(-norms, kind='stable')
    S = norms[order][:k].astype(dtype, copy=False)
    U = W[:, order[:k]]
    nonzero = S > eps
    U[:, nonzero] /= S[nonzero]
    U[:, ~nonzero] = 0.0

    return SVDResult(U=U, S=S, V=V[:, order])
