"""
Default tolerances and iteration budgets.

Every routine takes its tolerance and iteration budget as explicit
parameters; the values here are only the defaults threaded into those
signatures, so tests can exercise edge tolerances deterministically.
"""


# Convergence threshold for iterative eigen-solvers (absolute)
DEFAULT_TOL: float = 1e-6

# Iteration budget: QR sweeps for the general eigenvalue solver,
# Jacobi sweeps (n(n-1)/2 rotations each) for the symmetric solver
DEFAULT_MAX_ITER: int = 1000

# Condition number threshold for lstsq(method='cholesky').
# cond(A'A) = cond(A)^2, so at cond(A) = 1e6, cond(A'A) = 1e12, near
# float64 epsilon. Estimated from the diagonal of the Cholesky factor.
CHOLESKY_CONDITION_THRESHOLD: float = 1e12
