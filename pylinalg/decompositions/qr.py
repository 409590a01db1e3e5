"""
QR decomposition via Householder reflections.

Provides the factorization A = QR for matrices with at least as many rows
as columns. Also supplies the per-step factorization of the QR eigenvalue
iteration.
"""

from dataclasses import dataclass
from typing import Literal, Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import LinearlyDependentColumnsError
from pylinalg.core.precision import machine_epsilon, working_dtype
from pylinalg.core.validation import check_matrix, check_min_rows


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthonormal matrix (m x m for complete mode, m x n for reduced)
        R: Upper triangular matrix (m x n for complete mode, n x n for reduced);
           entries below the diagonal are exactly zero
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]


def qr_decomposition(
    A: ArrayLike,
    mode: Literal['complete', 'reduced'] = 'complete',
) -> QRResult:
    """
    Householder QR decomposition.

    Computes A = QR where Q is orthonormal and R is upper triangular.

    Args:
        A: Matrix to decompose (m x n) with m >= n and independent columns
        mode: 'complete' for square Q (m x m) and R (m x n),
              'reduced' for economy Q (m x n) and R (n x n)

    Returns:
        QRResult with Q and R

    Raises:
        DimensionError: If A has fewer rows than columns
        LinearlyDependentColumnsError: If a Householder reflector has
            negligible norm
        ValueError: If mode is unknown
    """
    if mode not in ('complete', 'reduced'):
        raise ValueError(f"Unknown mode: {mode!r}. Use 'complete' or 'reduced'.")

    A_arr = check_matrix(A, 'A')
    n = A_arr.shape[1]
    check_min_rows(A_arr, n, 'A')

    Q, R = _householder_qr(A_arr)
    if mode == 'reduced':
        Q = Q[:, :n].copy()
        R = R[:n, :].copy()
    return QRResult(Q=Q, R=R)


def _householder_qr(
    A: NDArray[np.floating[Any]],
    matrix_name: str = 'A',
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Complete Householder QR of a validated matrix with rows >= columns.

    For column k the reflector is v = x + sign(x_0) ||x|| e_0 where x is
    the sub-column R[k:, k]; matching the sign of the pivot avoids
    cancellation. H = I - 2 v v' / ||v||^2 is applied as a rank-one update
    to the trailing block of R and accumulated into Q.
    """
    m, n = A.shape
    dtype = working_dtype(A)
    eps = machine_epsilon(dtype)
    R = np.array(A, dtype=dtype, copy=True)
    Q = np.eye(m, dtype=dtype)

    for k in range(n):
        v = R[k:, k].copy()
        alpha = np.sqrt(v @ v)
        v[0] += alpha if v[0] >= 0 else -alpha

        v_norm_sq = v @ v
        if np.sqrt(v_norm_sq) <= eps:
            raise LinearlyDependentColumnsError(
                f"{matrix_name} has linearly dependent columns: "
                f"Householder reflector for column {k} has negligible norm",
                matrix_name=matrix_name,
                column=k,
            )

        scale = 2.0 / v_norm_sq
        R[k:, k:] -= np.outer(v, scale * (v @ R[k:, k:]))
        Q[:, k:] -= np.outer(Q[:, k:] @ v, scale * v)

    # Cancel round-off below the diagonal
    return Q, np.triu(R)
