"""
Solver dispatch for least squares.

This module provides the lstsq() function (public API) and backend selection.
"""

from dataclasses import replace
from typing import Literal
from numpy.typing import ArrayLike

from pylinalg.core.exceptions import NotPositiveDefiniteError
from pylinalg.core.result import Result
from pylinalg.core.tolerances import CHOLESKY_CONDITION_THRESHOLD
from pylinalg.core.validation import check_tolerance
from pylinalg.lstsq.design import LstsqDesign
from pylinalg.lstsq.solution import LstsqParams, LstsqSolution
from pylinalg.lstsq.backends.cpu import CPUCholeskyBackend, CPUSVDBackend


# Type alias for method selection
MethodChoice = Literal['auto', 'cholesky', 'svd']


def lstsq(
    A: ArrayLike,
    b: ArrayLike,
    *,
    method: MethodChoice = 'auto',
    rcond: float | None = None,
    tol: float | None = None,
) -> LstsqSolution:
    """
    Solve the linear least-squares problem min ||A x - b||.

    Args:
        A: Coefficient matrix (m x n)
        b: Right-hand side, vector (m,) or matrix (m, k)
        method: Algorithm to use:
            - 'auto': Cholesky on the normal equations when m >= n, falling
              back to SVD if the factorization of A'A fails; SVD when m < n
            - 'cholesky': Normal equations only; also refuses problems
              whose estimated cond(A'A) exceeds 1e12
            - 'svd': SVD with a singular value cutoff
        rcond: Relative singular value cutoff for the SVD path
        tol: Column orthogonality tolerance for the SVD path

    Returns:
        LstsqSolution with x, residuals, rank and diagnostics

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If b has the wrong row count
        NotPositiveDefiniteError: If method='cholesky' and the normal
            equations cannot be solved reliably
        ValueError: If method is unknown

    Example:
        >>> A = np.array([[1.0, 1.0], [1.0, 2.0], [1.0, 3.0]])
        >>> result = lstsq(A, [1.0, 2.0, 2.0])
        >>> result.method
        'cholesky'
    """
    if method not in ('auto', 'cholesky', 'svd'):
        raise ValueError(f"Unknown method: {method!r}. Use 'auto', 'cholesky' or 'svd'.")
    if rcond is not None:
        check_tolerance(rcond, 'rcond')
    if tol is not None:
        check_tolerance(tol)

    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    design = LstsqDesign.from_arrays(A, b)

    # === Solve ===
    result = _solve(design, method, rcond, tol)

    # === Wrap and Return ===
    return LstsqSolution(_result=result, _design=design)


def _solve(
    design: LstsqDesign,
    method: MethodChoice,
    rcond: float | None,
    tol: float | None,
) -> Result[LstsqParams]:
    """Run the selected backend, with the SVD fallback for 'auto'."""
    svd_backend = CPUSVDBackend(rcond=rcond, tol=tol)

    if method == 'svd':
        return svd_backend.solve(design)

    if method == 'cholesky':
        backend = CPUCholeskyBackend(condition_threshold=CHOLESKY_CONDITION_THRESHOLD)
        return backend.solve(design)

    if design.m < design.n:
        return svd_backend.solve(design)

    try:
        return CPUCholeskyBackend().solve(design)
    except NotPositiveDefiniteError as e:
        result = svd_backend.solve(design)
        return replace(result, info={**result.info, 'fallback': str(e)})
