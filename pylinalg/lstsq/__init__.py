"""
Linear least squares.

Public API:
    lstsq(A, b, ...) -> LstsqSolution

The lstsq() function is the only entry point. It handles:
    - Input validation
    - Design construction
    - Backend selection and the Cholesky-to-SVD fallback
    - Result wrapping

Example:
    >>> from pylinalg.lstsq import lstsq
    >>> result = lstsq(A, b)
    >>> print(result.x)
    >>> print(result.summary())
"""

from pylinalg.lstsq.design import LstsqDesign
from pylinalg.lstsq.solution import LstsqSolution, LstsqParams
from pylinalg.lstsq.solvers import lstsq

__all__ = [
    "lstsq",
    "LstsqDesign",
    "LstsqSolution",
    "LstsqParams",
]
