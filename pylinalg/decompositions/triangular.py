"""
Triangular solves.

Forward substitution for lower-triangular systems, back substitution for
upper-triangular ones. Every other solver in the package ends up here.
"""

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import SingularMatrixError
from pylinalg.core.precision import machine_epsilon, working_dtype
from pylinalg.core.validation import check_square_matrix, check_rhs


def solve_triangular(
    A: ArrayLike,
    b: ArrayLike,
    lower: bool,
    unit_diagonal: bool = False,
    transpose: bool = False,
) -> NDArray[np.floating[Any]]:
    """
    Solve A x = b assuming A is triangular.

    Only the triangle selected by ``lower`` is read; the other half of A
    is ignored.

    Args:
        A: Square triangular matrix (n x n)
        b: Right-hand side, vector (n,) or matrix (n, k)
        lower: True if A is lower triangular, False if upper
        unit_diagonal: If True, the diagonal of A is assumed to be all ones
            and is never read
        transpose: If True, solve A' x = b instead

    Returns:
        Solution x with the same shape as b

    Raises:
        DimensionError: If A is not square or b has the wrong row count
        SingularMatrixError: If a diagonal entry is at or below machine epsilon

    Example:
        >>> L = np.array([[2.0, 0.0], [1.0, 1.0]])
        >>> solve_triangular(L, [2.0, 3.0], lower=True)
        array([1., 2.])
    """
    A_arr = check_square_matrix(A, 'A')
    b_arr = check_rhs(b, A_arr.shape[0], 'b')
    return _substitute(A_arr, b_arr, lower, unit_diagonal, transpose)


def _substitute(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    lower: bool,
    unit_diagonal: bool = False,
    transpose: bool = False,
    matrix_name: str = 'A',
) -> NDArray[np.floating[Any]]:
    """
    Substitution kernel on validated arrays.

    All right-hand-side columns are advanced together: row i of x is
    b[i] minus the dot product of row i of A with the already-solved rows,
    divided by the diagonal.
    """
    dtype = working_dtype(A, b)
    eps = machine_epsilon(dtype)

    # Transposing turns a lower-triangular read into an upper one
    M = A.T if transpose else A
    if transpose:
        lower = not lower

    n = M.shape[0]
    x = np.array(b, dtype=dtype, copy=True)
    order = range(n) if lower else range(n - 1, -1, -1)

    for i in order:
        if lower:
            x[i] -= M[i, :i] @ x[:i]
        else:
            x[i] -= M[i, i + 1:] @ x[i + 1:]

        if not unit_diagonal:
            pivot = M[i, i]
            if abs(pivot) <= eps:
                raise SingularMatrixError(
                    f"{matrix_name} is singular: diagonal entry {i} is "
                    f"{float(pivot):.3e} (machine epsilon {eps:.3e})",
                    matrix_name=matrix_name,
                    pivot_index=i,
                )
            x[i] /= pivot

    return x
