"""
Eigenvalue solvers.

General square matrices: unshifted QR iteration down to quasi-triangular
form, eigenvalues read off its 1x1 and 2x2 diagonal blocks.

Symmetric matrices: greedy Jacobi rotations, producing eigenvalues and an
orthonormal eigenvector basis.

Both are iterative. Running out of iterations is not an error: the current
approximation is returned and a RuntimeWarning is emitted.
"""

from dataclasses import dataclass
from typing import Any
import warnings
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.precision import complex_dtype, working_dtype
from pylinalg.core.tolerances import DEFAULT_TOL, DEFAULT_MAX_ITER
from pylinalg.core.validation import (
    check_square_matrix,
    check_tolerance,
    check_max_iter,
)
from pylinalg.decompositions.qr import _householder_qr


@dataclass(frozen=True)
class EigenSymmetricResult:
    """
    Result of a symmetric eigen-decomposition A = V diag(D) V'.

    Attributes:
        V: Orthonormal eigenvectors, one per column
        D: Eigenvalues, unordered; D[i] pairs with V[:, i]
        iterations: Number of Jacobi rotations applied
        converged: False if the iteration budget ran out first
    """
    V: NDArray[np.floating[Any]]
    D: NDArray[np.floating[Any]]
    iterations: int
    converged: bool


def eigenvalues(
    A: ArrayLike,
    max_iter: int = DEFAULT_MAX_ITER,
    tol: float = DEFAULT_TOL,
) -> NDArray[np.complexfloating[Any, Any]]:
    """
    Eigenvalues of a general square matrix.

    Unshifted QR iteration: B is factored as Q R and replaced by R Q until
    every entry strictly below the subdiagonal is within tol of zero and
    no two consecutive subdiagonal entries exceed tol.

    Args:
        A: Square matrix (n x n)
        max_iter: Maximum number of QR steps
        tol: Absolute threshold for a negligible sub-diagonal entry

    Returns:
        n eigenvalues in no particular order, as a complex array.
        Complex-conjugate pairs appear next to each other.

    Raises:
        DimensionError: If A is not square
        LinearlyDependentColumnsError: If an iterate is singular, which
            the QR step cannot factor

    Warns:
        RuntimeWarning: If max_iter steps do not reach quasi-triangular form

    Example:
        >>> eigenvalues([[0.0, -1.0], [1.0, 0.0]])
        array([0.-1.j, 0.+1.j])
    """
    A_arr = check_square_matrix(A, 'A')
    check_max_iter(max_iter)
    check_tolerance(tol)

    B, iterations, converged = _qr_iteration(A_arr, tol, max_iter)
    if not converged:
        warnings.warn(
            f"QR iteration did not reach quasi-triangular form after "
            f"{iterations} iterations (tol={tol}). Returning the current "
            f"approximation.",
            RuntimeWarning,
            stacklevel=2,
        )
    return _read_eigenvalues(B, tol)


def eigen_symmetric(
    A: ArrayLike,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
) -> EigenSymmetricResult:
    """
    Eigen-decomposition of a symmetric matrix by Jacobi rotations.

    A is symmetrized from its lower triangle. Each rotation zeroes the
    largest off-diagonal entry; iteration stops once that entry is within
    tol of zero.

    Args:
        A: Symmetric matrix (n x n); only the lower triangle is read
        tol: Absolute threshold for a negligible off-diagonal entry
        max_iter: Number of sweeps allowed, one sweep being n(n-1)/2
            rotations

    Returns:
        EigenSymmetricResult with V, D and convergence diagnostics

    Warns:
        RuntimeWarning: If the rotation budget runs out first
    """
    A_arr = check_square_matrix(A, 'A')
    check_tolerance(tol)
    check_max_iter(max_iter)

    result = _jacobi(A_arr, tol, max_iter)
    if not result.converged:
        warnings.warn(
            f"Jacobi eigenvalue iteration did not converge after "
            f"{result.iterations} rotations (tol={tol}). Returning the "
            f"current approximation.",
            RuntimeWarning,
            stacklevel=2,
        )
    return result


def eigenvalues_symmetric(
    A: ArrayLike,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
) -> NDArray[np.floating[Any]]:
    """Eigenvalues of a symmetric matrix, unordered."""
    A_arr = check_square_matrix(A, 'A')
    check_tolerance(tol)
    check_max_iter(max_iter)

    result = _jacobi(A_arr, tol, max_iter)
    if not result.converged:
        warnings.warn(
            f"Jacobi eigenvalue iteration did not converge after "
            f"{result.iterations} rotations (tol={tol}).",
            RuntimeWarning,
            stacklevel=2,
        )
    return result.D


def _is_quasi_triangular(B: NDArray[np.floating[Any]], tol: float) -> bool:
    """True if B is upper triangular up to isolated 2x2 diagonal blocks."""
    if np.any(np.abs(np.tril(B, -2)) > tol):
        return False
    big = np.abs(np.diag(B, -1)) > tol
    return not np.any(big[:-1] & big[1:])


def _qr_iteration(
    A: NDArray[np.floating[Any]],
    tol: float,
    max_iter: int,
) -> tuple[NDArray[np.floating[Any]], int, bool]:
    B = np.array(A, dtype=working_dtype(A), copy=True)
    for iteration in range(max_iter):
        if _is_quasi_triangular(B, tol):
            return B, iteration, True
        Q, R = _householder_qr(B, matrix_name='B')
        B = R @ Q
    return B, max_iter, _is_quasi_triangular(B, tol)


def _read_eigenvalues(
    B: NDArray[np.floating[Any]],
    tol: float,
) -> NDArray[np.complexfloating[Any, Any]]:
    """Eigenvalues of the 1x1 and 2x2 diagonal blocks of a quasi-triangular B."""
    n = B.shape[0]
    values = np.zeros(n, dtype=complex_dtype(B.dtype))

    i = 0
    while i < n:
        if i + 1 < n and abs(B[i + 1, i]) > tol:
            a, b = B[i, i], B[i, i + 1]
            c, d = B[i + 1, i], B[i + 1, i + 1]
            trace = a + d
            det = a * d - b * c
            root = np.sqrt(complex(trace * trace - 4.0 * det))
            values[i] = (trace - root) / 2.0
            values[i + 1] = (trace + root) / 2.0
            i += 2
        else:
            values[i] = B[i, i]
            i += 1

    return values


def _jacobi(
    A: NDArray[np.floating[Any]],
    tol: float,
    max_iter: int,
) -> EigenSymmetricResult:
    """Greedy Jacobi kernel on a validated square matrix."""
    n = A.shape[0]
    dtype = working_dtype(A)
    B = np.array(np.tril(A) + np.tril(A, -1).T, dtype=dtype)
    V = np.eye(n, dtype=dtype)

    rows, cols = np.tril_indices(n, -1)
    max_rotations = max_iter * (n * (n - 1) // 2)
    rotations = 0
    converged = True

    while rows.size:
        k = int(np.argmax(np.abs(B[rows, cols])))
        i, j = int(cols[k]), int(rows[k])
        b_ij = B[i, j]
        if abs(b_ij) <= tol:
            break
        if rotations >= max_rotations:
            converged = False
            break

        b_ii, b_jj = B[i, i], B[j, j]
        delta = (b_jj - b_ii) / (2.0 * b_ij)
        t = (1.0 if delta >= 0 else -1.0) / (abs(delta) + np.hypot(1.0, delta))
        c = 1.0 / np.sqrt(1.0 + t * t)
        s = c * t

        col_i, col_j = B[:, i].copy(), B[:, j].copy()
        new_i = c * col_i - s * col_j
        new_j = s * col_i + c * col_j
        B[:, i] = new_i
        B[i, :] = new_i
        B[:, j] = new_j
        B[j, :] = new_j
        B[i, i] = b_ii - t * b_ij
        B[j, j] = b_jj + t * b_ij
        B[i, j] = 0.0
        B[j, i] = 0.0

        v_i, v_j = V[:, i].copy(), V[:, j].copy()
        V[:, i] = c * v_i - s * v_j
        V[:, j] = s * v_i + c * v_j

        rotations += 1

    return EigenSymmetricResult(
        V=V,
        D=np.diag(B).copy(),
        iterations=rotations,
        converged=converged,
    )
