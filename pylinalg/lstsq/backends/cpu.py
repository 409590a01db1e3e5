"""
CPU backends for least squares.

CPUCholeskyBackend solves the normal equations A'A x = A'b. It is fast but
squares the condition number. A pivot that is negligible next to its
diagonal entry of A'A means the columns of A are numerically dependent,
and the factorization fails with NotPositiveDefiniteError. An optional
condition threshold additionally refuses ill-conditioned problems.

CPUSVDBackend uses a one-sided Jacobi SVD of A. Singular values at or
below a relative cutoff contribute nothing, which gives the minimum-norm
solution for rank-deficient and underdetermined systems.
"""

from typing import Any
import numpy as np

from pylinalg.core.exceptions import NotPositiveDefiniteError
from pylinalg.core.precision import machine_epsilon
from pylinalg.core.result import Result
from pylinalg.core.timing import Timer
from pylinalg.core.tolerances import DEFAULT_MAX_ITER
from pylinalg.decompositions.cholesky import _cholesky_factor, _cholesky_solve
from pylinalg.decompositions.svd import (
    _one_sided_jacobi,
    default_rcond,
    orthogonality_tolerance,
    singular_value_cutoff,
)
from pylinalg.lstsq.design import LstsqDesign
from pylinalg.lstsq.solution import LstsqParams


class CPUCholeskyBackend:
    """
    CPU backend using Cholesky decomposition of the normal equations.

    Implements the Backend protocol for LstsqDesign -> LstsqParams.
    """

    def __init__(self, condition_threshold: float | None = None):
        """
        Args:
            condition_threshold: Largest estimated condition number of A'A
                accepted before the backend refuses. None accepts any
                problem whose normal equations factorize.
        """
        self.condition_threshold = condition_threshold

    @property
    def name(self) -> str:
        return 'cpu_cholesky'

    def solve(self, design: LstsqDesign) -> Result[LstsqParams]:
        """
        Solve least squares via the normal equations.

        Algorithm:
            1. Form A'A and A'b
            2. Factor A'A = L L', failing on a pivot at or below
               10 n eps times its diagonal entry
            3. Estimate cond(A'A) as (max diag L / min diag L)^2
            4. Solve L y = A'b, then L' x = y

        Raises:
            NotPositiveDefiniteError: If A has fewer rows than columns,
                A'A is numerically singular, or the condition estimate
                exceeds condition_threshold
        """
        timer = Timer()
        timer.start()

        A, b = design.A, design.b
        n = design.n

        if design.m < n:
            timer.stop()
            raise NotPositiveDefiniteError(
                f"A'A is singular: A has {design.m} rows and {n} columns, "
                f"so the normal equations are underdetermined",
                matrix_name="A'A",
            )

        # === Normal Equations ===
        with timer.section('normal_equations'):
            AtA = design.AtA()
            Atb = design.Atb()

        with timer.section('cholesky'):
            rtol = 10.0 * n * machine_epsilon(AtA.dtype)
            L = _cholesky_factor(AtA, matrix_name="A'A", rtol=rtol)

        # === Condition Check ===
        with timer.section('condition_check'):
            diag = np.diag(L)
            cond = float((diag.max() / diag.min()) ** 2)

        if self.condition_threshold is not None and cond > self.condition_threshold:
            timer.stop()
            raise NotPositiveDefiniteError(
                f"A'A is ill-conditioned (estimated condition number "
                f"{cond:.2e} exceeds {self.condition_threshold:.0e}). "
                f"Cholesky on the normal equations is numerically unreliable; "
                f"use method='svd'.",
                matrix_name="A'A",
            )

        with timer.section('substitution'):
            x = _cholesky_solve(L, Atb)

        with timer.section('residuals'):
            r = b - A @ x
            residuals = np.sum(r * r, axis=0)

        timer.stop()

        params = LstsqParams(x=x, residuals=residuals, rank=n)

        info: dict[str, Any] = {
            'method': 'cholesky',
            'rank': n,
            'condition_estimate': cond,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )


class CPUSVDBackend:
    """
    CPU backend using the singular value decomposition of A.

    Implements the Backend protocol for LstsqDesign -> LstsqParams.
    Handles rank-deficient and underdetermined systems.
    """

    def __init__(
        self,
        rcond: float | None = None,
        tol: float | None = None,
        max_iter: int = DEFAULT_MAX_ITER,
    ):
        """
        Args:
            rcond: Relative cutoff; singular values at or below
                rcond * S[0] count as zero. None uses default_rcond.
            tol: Column orthogonality tolerance of the one-sided Jacobi
                SVD. None uses orthogonality_tolerance.
            max_iter: Jacobi sweep budget
        """
        self.rcond = rcond
        self.tol = tol
        self.max_iter = max_iter

    @property
    def name(self) -> str:
        return 'cpu_svd'

    def solve(self, design: LstsqDesign) -> Result[LstsqParams]:
        """
        Solve least squares via SVD.

        Algorithm:
            1. Compute A = U diag(S) V' by one-sided Jacobi
            2. Drop singular values at or below the cutoff
            3. x = V diag(1/S) U' b over the retained values
        """
        timer = Timer()
        timer.start()

        A, b = design.A, design.b
        k = min(design.m, design.n)
        tol = self.tol if self.tol is not None else orthogonality_tolerance(A.shape, A.dtype)
        rcond = self.rcond if self.rcond is not None else default_rcond(A.shape, A.dtype)

        with timer.section('svd'):
            svd = _one_sided_jacobi(A, tol, self.max_iter)

        S = svd.S
        cutoff = singular_value_cutoff(S, rcond)
        keep = S > cutoff
        rank = int(np.count_nonzero(keep))

        with timer.section('substitution'):
            inv_S = np.zeros_like(S)
            inv_S[keep] = 1.0 / S[keep]
            x = svd.V[:, :k] @ (inv_S[:, np.newaxis] * (svd.U.T @ b))

        with timer.section('residuals'):
            r = b - A @ x
            residuals = np.sum(r * r, axis=0)

        timer.stop()

        warnings_list: list[str] = []
        if rank < k:
            warnings_list.append(
                f"Rank deficient: rank {rank} < {k}; singular values at or "
                f"below {cutoff:.3e} were treated as zero"
            )

        params = LstsqParams(
            x=x,
            residuals=residuals,
            rank=rank,
            singular_values=S,
        )

        info: dict[str, Any] = {
            'method': 'svd',
            'rank': rank,
            'rcond': rcond,
            'cutoff': cutoff,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
