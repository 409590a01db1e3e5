"""
Least-squares design.

LstsqDesign holds the validated coefficient matrix A and right-hand side
b of the problem min ||A x - b||. Backends receive a design and never
re-validate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.precision import working_dtype
from pylinalg.core.validation import check_matrix, check_rhs


@dataclass(frozen=True)
class LstsqDesign:
    """
    Least-squares problem specification.

    The right-hand side is always stored as a matrix (m x k); a vector b
    is kept as a single column and restored on the way out.

    Construction:
        LstsqDesign.from_arrays(A, b)
    """
    _A: NDArray[np.floating[Any]]
    _b: NDArray[np.floating[Any]]
    _m: int
    _n: int
    _vector_rhs: bool

    @classmethod
    def from_arrays(cls, A: ArrayLike, b: ArrayLike) -> LstsqDesign:
        """
        Build a design from array-likes.

        Raises:
            ValidationError: If A or b is non-numeric, empty or non-finite
            DimensionError: If b does not have one row per row of A
        """
        A_arr = check_matrix(A, 'A')
        b_arr = check_rhs(b, A_arr.shape[0], 'b')

        vector_rhs = b_arr.ndim == 1
        if vector_rhs:
            b_arr = b_arr.reshape(-1, 1)

        dtype = working_dtype(A_arr, b_arr)
        m, n = A_arr.shape
        return cls(
            _A=A_arr.astype(dtype, copy=False),
            _b=b_arr.astype(dtype, copy=False),
            _m=m,
            _n=n,
            _vector_rhs=vector_rhs,
        )

    # === Properties ===

    @property
    def A(self) -> NDArray[np.floating[Any]]:
        """Coefficient matrix (m x n)."""
        return self._A

    @property
    def b(self) -> NDArray[np.floating[Any]]:
        """Right-hand side as a matrix (m x k)."""
        return self._b

    @property
    def m(self) -> int:
        """Number of equations."""
        return self._m

    @property
    def n(self) -> int:
        """Number of unknowns."""
        return self._n

    @property
    def vector_rhs(self) -> bool:
        """True if b was given as a vector."""
        return self._vector_rhs

    def AtA(self) -> NDArray[np.floating[Any]]:
        """Compute A'A."""
        return self._A.T @ self._A

    def Atb(self) -> NDArray[np.floating[Any]]:
        """Compute A'b."""
        return self._A.T @ self._b

    def restore_shape(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Drop the column axis again when b was a vector."""
        return x[:, 0] if self._vector_rhs else x
