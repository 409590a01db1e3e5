"""
Core infrastructure for PyLinalg.

This module provides shared abstractions and utilities used by the
factorizations, the composite solvers and the least-squares domain.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    precision: Machine epsilon and dtype helpers
    tolerances: Default tolerances and iteration budgets
    result: Generic Result[P] envelope
    protocols: Backend protocol
    timing: Section timer
"""

from pylinalg.core.protocols import Backend
from pylinalg.core.result import Result
from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    LinearlyDependentColumnsError,
)
from pylinalg.core.tolerances import (
    DEFAULT_TOL,
    DEFAULT_MAX_ITER,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "LinearlyDependentColumnsError",
    # Configuration
    "DEFAULT_TOL",
    "DEFAULT_MAX_ITER",
]
