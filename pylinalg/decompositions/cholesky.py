"""
Cholesky and LDL' decompositions of symmetric matrices.

Both factorizations read only the lower triangle of their input, so a
matrix whose upper half holds garbage factorizes the same as its
symmetric completion.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import (
    NotPositiveDefiniteError,
    SingularMatrixError,
    ValidationError,
)
from pylinalg.core.precision import machine_epsilon, working_dtype
from pylinalg.core.validation import check_square_matrix, check_rhs
from pylinalg.decompositions.triangular import _substitute


@dataclass(frozen=True)
class CholeskyResult:
    """
    Result of a Cholesky decomposition A = L L'.

    Attributes:
        L: Lower-triangular factor with strictly positive diagonal;
           entries above the diagonal are exactly zero
    """
    L: NDArray[np.floating[Any]]


@dataclass(frozen=True)
class LDLResult:
    """
    Result of an LDL' decomposition A = L diag(D) L'.

    Attributes:
        L: Unit lower-triangular factor
        D: Diagonal of the middle factor
    """
    L: NDArray[np.floating[Any]]
    D: NDArray[np.floating[Any]]


def cholesky_decomposition(A: ArrayLike) -> CholeskyResult:
    """
    Cholesky decomposition of a symmetric positive-definite matrix.

    Computed column by column:
        L[j, j] = sqrt(A[j, j] - sum_k L[j, k]^2)
        L[i, j] = (A[i, j] - sum_k L[i, k] L[j, k]) / L[j, j],  i > j

    Args:
        A: Symmetric matrix (n x n); only the lower triangle is read

    Returns:
        CholeskyResult with the lower-triangular factor

    Raises:
        DimensionError: If A is not square
        NotPositiveDefiniteError: If a radicand is negative or its square
            root is at or below machine epsilon
    """
    A_arr = check_square_matrix(A, 'A')
    return CholeskyResult(L=_cholesky_factor(A_arr))


def solve_cholesky(chol: CholeskyResult, b: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Solve A x = b given the Cholesky decomposition of A.

    Solves L y = b, then L' x = y.

    Args:
        chol: Result of cholesky_decomposition(A)
        b: Right-hand side, vector (n,) or matrix (n, k)

    Returns:
        Solution x with the same shape as b
    """
    if not isinstance(chol, CholeskyResult):
        raise ValidationError(
            f"chol: expected CholeskyResult, got {type(chol).__name__}"
        )
    b_arr = check_rhs(b, chol.L.shape[0], 'b')
    return _cholesky_solve(chol.L, b_arr)


def ldl_decomposition(A: ArrayLike) -> LDLResult:
    """
    LDL' decomposition of a symmetric matrix.

    Unlike Cholesky this does not need positive definiteness. A column
    whose pivot D[j] is at or below machine epsilon is skipped (its
    multipliers stay zero); solving against it raises SingularMatrixError.

    Args:
        A: Symmetric matrix (n x n); only the lower triangle is read

    Returns:
        LDLResult with unit lower-triangular L and diagonal D

    Raises:
        DimensionError: If A is not square
    """
    A_arr = check_square_matrix(A, 'A')
    L, D = _ldl_factor(A_arr)
    return LDLResult(L=L, D=D)


def solve_ldl(ldl: LDLResult, b: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Solve A x = b given the LDL' decomposition of A.

    Raises:
        SingularMatrixError: If an entry of D is at or below machine epsilon
    """
    if not isinstance(ldl, LDLResult):
        raise ValidationError(
            f"ldl: expected LDLResult, got {type(ldl).__name__}"
        )
    b_arr = check_rhs(b, ldl.L.shape[0], 'b')
    return _ldl_solve(ldl.L, ldl.D, b_arr)


def _cholesky_factor(
    A: NDArray[np.floating[Any]],
    matrix_name: str = 'A',
    rtol: float = 0.0,
) -> NDArray[np.floating[Any]]:
    """
    Cholesky kernel on a validated square matrix.

    With rtol > 0 a radicand at or below rtol * A[j, j] also fails: the
    pivot is then lost in the round-off of its own diagonal entry.
    """
    n = A.shape[0]
    dtype = working_dtype(A)
    eps = machine_epsilon(dtype)
    L = np.zeros((n, n), dtype=dtype)

    for j in range(n):
        radicand = A[j, j] - L[j, :j] @ L[j, :j]
        if radicand < 0 or np.sqrt(radicand) <= eps or radicand <= rtol * A[j, j]:
            raise NotPositiveDefiniteError(
                f"{matrix_name} is not positive definite: pivot {j} has "
                f"radicand {float(radicand):.3e}",
                matrix_name=matrix_name,
                pivot_index=j,
                pivot_value=float(radicand),
            )
        L[j, j] = np.sqrt(radicand)
        L[j + 1:, j] = (A[j + 1:, j] - L[j + 1:, :j] @ L[j, :j]) / L[j, j]

    return L


def _cholesky_solve(
    L: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    matrix_name: str = 'L',
) -> NDArray[np.floating[Any]]:
    y = _substitute(L, b, lower=True, matrix_name=matrix_name)
    return _substitute(L, y, lower=True, transpose=True, matrix_name=matrix_name)


def _ldl_factor(
    A: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """LDL' kernel on a validated square matrix."""
    n = A.shape[0]
    dtype = working_dtype(A)
    eps = machine_epsilon(dtype)
    L = np.eye(n, dtype=dtype)
    D = np.zeros(n, dtype=dtype)

    for j in range(n):
        D[j] = A[j, j] - (L[j, :j] * L[j, :j]) @ D[:j]
        if abs(D[j]) <= eps:
            continue
        L[j + 1:, j] = (A[j + 1:, j] - (L[j + 1:, :j] * D[:j]) @ L[j, :j]) / D[j]

    return L, D


def _ldl_solve(
    L: NDArray[np.floating[Any]],
    D: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    eps = machine_epsilon(working_dtype(L, D))
    x = _substitute(L, b, lower=True, unit_diagonal=True, matrix_name='L')

    small = np.flatnonzero(np.abs(D) <= eps)
    if small.size:
        i = int(small[0])
        raise SingularMatrixError(
            f"D is singular: entry {i} is {float(D[i]):.3e} "
            f"(machine epsilon {eps:.3e})",
            matrix_name='D',
            pivot_index=i,
        )

    x = x / (D if x.ndim == 1 else D[:, np.newaxis])
    return _substitute(L, x, lower=True, unit_diagonal=True, transpose=True, matrix_name='L')
