"""
Composite solvers built on the factorizations.

    solve(A, b, assume_a='gen')   LU, LDL' or Cholesky depending on assume_a
    inverse(A)                    solve(A, I)
    determinant(A)                sign(P) * prod(diag(U))
    linear_lstsq(A, b)            least squares, Cholesky with SVD fallback
    pseudoinverse(A)              linear_lstsq(A, I)
"""

from typing import Literal, Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.validation import check_square_matrix, check_rhs, check_matrix
from pylinalg.decompositions.lu import _lu_factor, _lu_solve
from pylinalg.decompositions.cholesky import (
    _cholesky_factor,
    _cholesky_solve,
    _ldl_factor,
    _ldl_solve,
)
from pylinalg.lstsq.solvers import lstsq


AssumeA = Literal['gen', 'sym', 'pos']


def solve(
    A: ArrayLike,
    b: ArrayLike,
    assume_a: AssumeA = 'gen',
) -> NDArray[np.floating[Any]]:
    """
    Solve the square system A x = b.

    Args:
        A: Square coefficient matrix (n x n)
        b: Right-hand side, vector (n,) or matrix (n, k)
        assume_a: Structure of A:
            - 'gen': general matrix, pivoted LU
            - 'sym': symmetric matrix, LDL' (lower triangle read)
            - 'pos': symmetric positive-definite matrix, Cholesky
              (lower triangle read)

    Returns:
        Solution x with the same shape as b

    Raises:
        DimensionError: If A is not square or b has the wrong row count
        SingularMatrixError: If A is singular ('gen', 'sym')
        NotPositiveDefiniteError: If A is not positive definite ('pos')
        ValueError: If assume_a is unknown

    Example:
        >>> solve([[3.0, 1.0], [1.0, 2.0]], [9.0, 8.0])
        array([2., 3.])
    """
    if assume_a not in ('gen', 'sym', 'pos'):
        raise ValueError(f"Unknown assume_a: {assume_a!r}. Use 'gen', 'sym' or 'pos'.")

    A_arr = check_square_matrix(A, 'A')
    b_arr = check_rhs(b, A_arr.shape[0], 'b')

    if assume_a == 'gen':
        return _lu_solve(_lu_factor(A_arr), b_arr)
    if assume_a == 'sym':
        L, D = _ldl_factor(A_arr)
        return _ldl_solve(L, D, b_arr)
    return _cholesky_solve(_cholesky_factor(A_arr), b_arr)


def inverse(A: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Inverse of a non-singular square matrix.

    Raises:
        DimensionError: If A is not square
        SingularMatrixError: If A is singular
    """
    A_arr = check_square_matrix(A, 'A')
    n = A_arr.shape[0]
    return _lu_solve(_lu_factor(A_arr), np.eye(n, dtype=A_arr.dtype))


def determinant(A: ArrayLike) -> float:
    """
    Determinant of a square matrix from its pivoted LU decomposition.

    A singular matrix gives 0 (or a value on the order of round-off)
    rather than an error.

    Example:
        >>> round(determinant([[7, 3, 1, 5], [1, 5, 2, 2], [-2, 1, 0, -1], [5, 2, 4, 0]]), 6)
        63.0
    """
    A_arr = check_square_matrix(A, 'A')
    lu = _lu_factor(A_arr)
    return float(lu.sign * np.prod(np.diag(lu.combined)))


def linear_lstsq(
    A: ArrayLike,
    b: ArrayLike,
    *,
    rcond: float | None = None,
    tol: float | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Least-squares solution of A x = b.

    Cholesky on the normal equations when A has at least as many rows as
    columns and A'A factorizes; otherwise the SVD minimum-norm solution.
    See pylinalg.lstsq.lstsq for diagnostics.

    Returns:
        x with shape (n,) for a vector b or (n, k) for a matrix b
    """
    return lstsq(A, b, method='auto', rcond=rcond, tol=tol).x


def pseudoinverse(
    A: ArrayLike,
    *,
    rcond: float | None = None,
    tol: float | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Moore-Penrose pseudoinverse, the least-squares solution of A X = I.

    Returns:
        n x m matrix A+ with A A+ A = A and A+ A A+ = A+
    """
    A_arr = check_matrix(A, 'A')
    m = A_arr.shape[0]
    return linear_lstsq(A_arr, np.eye(m, dtype=A_arr.dtype), rcond=rcond, tol=tol)
