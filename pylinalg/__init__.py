"""
PyLinalg: dense numerical linear algebra in NumPy.

Factorizations, eigen-solvers, singular value decomposition and the
solvers built on them, each validated at the boundary and returning
immutable results.

Submodules:
    decompositions: LU, Cholesky, LDL', QR, eigen, SVD, triangular solves
    lstsq: Least squares with Cholesky and SVD backends
    solvers: solve, inverse, determinant, linear_lstsq, pseudoinverse
    subspaces: norm, matrix_rank, orth, null_space
"""

__version__ = "0.1.0"
__author__ = "Hai-Shuo"
__email__ = "contact@sgcx.org"

from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    LinearlyDependentColumnsError,
)
from pylinalg.decompositions import (
    solve_triangular,
    LUResult,
    lu_decomposition,
    solve_lu,
    CholeskyResult,
    LDLResult,
    cholesky_decomposition,
    ldl_decomposition,
    solve_cholesky,
    solve_ldl,
    QRResult,
    qr_decomposition,
    EigenSymmetricResult,
    eigenvalues,
    eigen_symmetric,
    eigenvalues_symmetric,
    SVDResult,
    svd_decomposition,
    singular_values,
    diag_svd,
)
from pylinalg.solvers import (
    solve,
    inverse,
    determinant,
    linear_lstsq,
    pseudoinverse,
)
from pylinalg.lstsq import lstsq, LstsqSolution
from pylinalg.subspaces import norm, matrix_rank, orth, null_space

__all__ = [
    "__version__",
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "LinearlyDependentColumnsError",
    # Decompositions
    "solve_triangular",
    "LUResult",
    "lu_decomposition",
    "solve_lu",
    "CholeskyResult",
    "LDLResult",
    "cholesky_decomposition",
    "ldl_decomposition",
    "solve_cholesky",
    "solve_ldl",
    "QRResult",
    "qr_decomposition",
    "EigenSymmetricResult",
    "eigenvalues",
    "eigen_symmetric",
    "eigenvalues_symmetric",
    "SVDResult",
    "svd_decomposition",
    "singular_values",
    "diag_svd",
    # Solvers
    "solve",
    "inverse",
    "determinant",
    "linear_lstsq",
    "pseudoinverse",
    "lstsq",
    "LstsqSolution",
    # Subspaces
    "norm",
    "matrix_rank",
    "orth",
    "null_space",
]
