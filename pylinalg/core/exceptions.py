"""
Exception hierarchy for PyLinalg.

All exceptions inherit from PyLinalgError to allow catching any
library-specific error. Shape problems are validation errors; failures
detected while factorizing are numerical errors.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinalgError(Exception):
    """Base exception for all PyLinalg errors."""
    pass


class ValidationError(PyLinalgError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a square matrix is required but not given, when the row
    counts of a matrix and its right-hand side disagree, or when a
    factorization needs at least as many rows as columns.
    """
    pass


class NumericalError(PyLinalgError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a substitution step meets a pivot whose magnitude is at or
    below machine epsilon.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Row/column index of the negligible pivot, if known
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.rank = rank
        self.expected_rank = expected_rank


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when a Cholesky radicand is negative or its square root is
    negligible, or when the normal equations are too ill-conditioned to
    trust a Cholesky solve.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Column at which the factorization broke down
        pivot_value: The offending radicand, if available
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot_value: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value


class LinearlyDependentColumnsError(NumericalError):
    """
    Householder reflector has negligible norm.

    Raised by QR when the sub-column below (and including) the diagonal
    vanishes, meaning the leading columns are linearly dependent.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        column: Column index at which the reflector collapsed
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        column: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.column = column
