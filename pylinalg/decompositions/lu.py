"""
LU decomposition with partial pivoting.

The factorization is stored in one combined matrix: multipliers of the
unit lower-triangular L strictly below the diagonal, U on and above it.
The row permutation satisfies P A = L U.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.precision import machine_epsilon, working_dtype
from pylinalg.core.validation import check_square_matrix, check_rhs
from pylinalg.decompositions.triangular import _substitute


@dataclass(frozen=True)
class LUResult:
    """
    Result of a pivoted LU decomposition.

    Attributes:
        combined: n x n matrix; strictly lower part holds L (unit diagonal
            implied, not stored), upper part including diagonal holds U
        permutation: Row i of P A is row permutation[i] of A
        sign: Parity of the permutation (+1 or -1)
    """
    combined: NDArray[np.floating[Any]]
    permutation: NDArray[np.intp]
    sign: int

    @property
    def L(self) -> NDArray[np.floating[Any]]:
        """Unit lower-triangular factor."""
        n = self.combined.shape[0]
        return np.tril(self.combined, -1) + np.eye(n, dtype=self.combined.dtype)

    @property
    def U(self) -> NDArray[np.floating[Any]]:
        """Upper-triangular factor."""
        return np.triu(self.combined)

    @property
    def P(self) -> NDArray[np.floating[Any]]:
        """Permutation matrix with P A = L U."""
        n = self.combined.shape[0]
        return np.eye(n, dtype=self.combined.dtype)[self.permutation]


def lu_decomposition(A: ArrayLike) -> LUResult:
    """
    Pivoted LU decomposition of a square matrix.

    At step k the row with the largest magnitude in column k (among rows
    k and below) becomes the pivot row. A column whose best pivot is at or
    below machine epsilon is skipped rather than rejected; solving against
    such a factorization later raises SingularMatrixError.

    Args:
        A: Square matrix (n x n)

    Returns:
        LUResult with combined factors, permutation and its sign

    Raises:
        DimensionError: If A is not square

    Example:
        >>> lu = lu_decomposition([[1.0, 2.0], [3.0, 4.0]])
        >>> lu.permutation
        array([1, 0])
        >>> lu.sign
        -1
    """
    A_arr = check_square_matrix(A, 'A')
    return _lu_factor(A_arr)


def solve_lu(lu: LUResult, b: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Solve A x = b given the LU decomposition of A.

    The factorization can be reused for any number of right-hand sides.

    Args:
        lu: Result of lu_decomposition(A)
        b: Right-hand side, vector (n,) or matrix (n, k)

    Returns:
        Solution x with the same shape as b

    Raises:
        DimensionError: If b has the wrong row count
        SingularMatrixError: If U has a negligible diagonal entry
    """
    if not isinstance(lu, LUResult):
        raise ValidationError(
            f"lu: expected LUResult, got {type(lu).__name__}"
        )
    b_arr = check_rhs(b, lu.combined.shape[0], 'b')
    return _lu_solve(lu, b_arr)


def _lu_factor(A: NDArray[np.floating[Any]]) -> LUResult:
    """Gaussian elimination with partial pivoting on a validated matrix."""
    LU = np.array(A, dtype=working_dtype(A), copy=True)
    n = LU.shape[0]
    eps = machine_epsilon(LU.dtype)
    permutation = np.arange(n)
    sign = 1

    for k in range(n):
        # argmax keeps the first of equal candidates
        pivot = k + int(np.argmax(np.abs(LU[k:, k])))
        if abs(LU[pivot, k]) <= eps:
            continue

        if pivot != k:
            LU[[k, pivot]] = LU[[pivot, k]]
            permutation[[k, pivot]] = permutation[[pivot, k]]
            sign = -sign

        LU[k + 1:, k] /= LU[k, k]
        LU[k + 1:, k + 1:] -= np.outer(LU[k + 1:, k], LU[k, k + 1:])

    return LUResult(combined=LU, permutation=permutation, sign=sign)


def _lu_solve(
    lu: LUResult,
    b: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """Permute b, then forward (unit L) and back (U) substitution."""
    x = b[lu.permutation]
    x = _substitute(lu.combined, x, lower=True, unit_diagonal=True)
    x = _substitute(lu.combined, x, lower=False, matrix_name='U')
    return x
