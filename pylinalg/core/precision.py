"""
Numerical precision constants and utilities.

Provides machine epsilon and dtype helpers used by every factorization.
The engine works in the floating precision of its input: float32 in,
float32 out; anything else is carried in float64.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def working_dtype(*arrays: NDArray[np.floating[Any]]) -> np.dtype:
    """
    Floating dtype in which a computation over the given arrays runs.

    Follows numpy promotion, so mixing float32 and float64 gives float64.
    """
    dtype = np.result_type(*arrays)
    if not np.issubdtype(dtype, np.floating):
        return np.dtype(np.float64)
    return dtype


def complex_dtype(dtype: np.dtype | type) -> np.dtype:
    """Complex dtype with the same precision as a real floating dtype."""
    return np.result_type(dtype, np.complex64)
