"""
Matrix factorizations.

Each factorization validates its input once at the public boundary and
returns an immutable result dataclass. The underscore-prefixed kernels
trust their arguments and are shared between modules.
"""

from pylinalg.decompositions.triangular import solve_triangular
from pylinalg.decompositions.lu import LUResult, lu_decomposition, solve_lu
from pylinalg.decompositions.cholesky import (
    CholeskyResult,
    LDLResult,
    cholesky_decomposition,
    ldl_decomposition,
    solve_cholesky,
    solve_ldl,
)
from pylinalg.decompositions.qr import QRResult, qr_decomposition
from pylinalg.decompositions.eigen import (
    EigenSymmetricResult,
    eigenvalues,
    eigen_symmetric,
    eigenvalues_symmetric,
)
from pylinalg.decompositions.svd import (
    SVDResult,
    svd_decomposition,
    singular_values,
    diag_svd,
)

__all__ = [
    # Triangular
    "solve_triangular",
    # LU
    "LUResult",
    "lu_decomposition",
    "solve_lu",
    # Cholesky / LDL'
    "CholeskyResult",
    "LDLResult",
    "cholesky_decomposition",
    "ldl_decomposition",
    "solve_cholesky",
    "solve_ldl",
    # QR
    "QRResult",
    "qr_decomposition",
    # Eigen
    "EigenSymmetricResult",
    "eigenvalues",
    "eigen_symmetric",
    "eigenvalues_symmetric",
    # SVD
    "SVDResult",
    "svd_decomposition",
    "singular_values",
    "diag_svd",
]
