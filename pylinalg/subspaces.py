"""
Vector norms, rank and the fundamental subspaces of a matrix.

Rank decisions use the same cutoff as least squares: a singular value
counts as zero when it is at or below max(eps, rcond * S[0]).
"""

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.validation import (
    check_array,
    check_1d,
    check_finite,
    check_matrix,
    check_tolerance,
)
from pylinalg.decompositions.svd import (
    _one_sided_jacobi,
    default_rcond,
    orthogonality_tolerance,
    singular_value_cutoff,
)


def norm(v: ArrayLike, ord: float = 2) -> float:
    """
    Vector p-norm.

    Args:
        v: Vector (n,)
        ord: p >= 1, or np.inf for the maximum norm

    Raises:
        ValueError: If ord < 1
    """
    if ord < 1:
        raise ValueError(f"ord must be >= 1 or inf, got {ord!r}")

    v_arr = check_array(v, 'v')
    check_1d(v_arr, 'v')
    check_finite(v_arr, 'v')

    a = np.abs(v_arr)
    if a.size == 0:
        return 0.0
    if ord == np.inf:
        return float(a.max())
    if ord == 1:
        return float(a.sum())
    if ord == 2:
        return float(np.sqrt(a @ a))
    return float(np.sum(a ** ord) ** (1.0 / ord))


def matrix_rank(
    A: ArrayLike,
    rcond: float | None = None,
    tol: float | None = None,
) -> int:
    """Number of singular values above the cutoff."""
    A_arr, rcond, tol = _prepare(A, rcond, tol)
    S = _one_sided_jacobi(A_arr, tol).S
    return _rank(S, rcond)


def orth(
    A: ArrayLike,
    rcond: float | None = None,
    tol: float | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Orthonormal basis for the range of A.

    Returns:
        m x r matrix whose columns are the left singular vectors of the
        r retained singular values
    """
    A_arr, rcond, tol = _prepare(A, rcond, tol)
    svd = _one_sided_jacobi(A_arr, tol)
    return svd.U[:, :_rank(svd.S, rcond)]


def null_space(
    A: ArrayLike,
    rcond: float | None = None,
    tol: float | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Orthonormal basis for the null space of A.

    Taken from the complete right factor V of the one-sided Jacobi SVD,
    so the basis is orthonormal even where A itself gives no direction to
    normalize.

    Returns:
        n x (n - r) matrix; zero columns if A has full column rank
    """
    A_arr, rcond, tol = _prepare(A, rcond, tol)
    svd = _one_sided_jacobi(A_arr, tol)
    return svd.V[:, _rank(svd.S, rcond):]


def _prepare(
    A: ArrayLike,
    rcond: float | None,
    tol: float | None,
) -> tuple[NDArray[np.floating[Any]], float, float]:
    """Validate A and resolve the default cutoff and orthogonality tolerance."""
    A_arr = check_matrix(A, 'A')
    if rcond is None:
        rcond = default_rcond(A_arr.shape, A_arr.dtype)
    else:
        check_tolerance(rcond, 'rcond')
    if tol is None:
        tol = orthogonality_tolerance(A_arr.shape, A_arr.dtype)
    else:
        check_tolerance(tol)
    return A_arr, rcond, tol


def _rank(S: NDArray[np.floating[Any]], rcond: float) -> int:
    return int(np.count_nonzero(S > singular_value_cutoff(S, rcond)))
