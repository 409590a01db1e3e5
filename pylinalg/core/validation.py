"""
Input validation utilities for PyLinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes and
      integer -> float64 promotion)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinalg.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data)
    and complex inputs, which the engine does not factorize.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype} is not supported, expected real data"
        )

    # Ensure floating point for numerical stability
    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_nonempty(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array has at least one element along every axis.

    Raises:
        ValidationError: If any dimension has length zero
    """
    if 0 in array.shape:
        raise ValidationError(f"{name}: empty array with shape {array.shape}")


def check_square(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a 2D array is square.

    Raises:
        DimensionError: If rows != columns
    """
    rows, columns = array.shape
    if rows != columns:
        raise DimensionError(
            f"{name}: expected square matrix, got shape ({rows}, {columns})"
        )


def check_min_rows(array: NDArray[np.floating[Any]], min_rows: int, name: str) -> None:
    """
    Verify a 2D array has at least the given number of rows.

    Raises:
        DimensionError: If array has fewer than min_rows rows
    """
    n = array.shape[0]
    if n < min_rows:
        raise DimensionError(
            f"{name}: requires at least {min_rows} rows, got {n}"
        )


def check_tolerance(tol: float, name: str = 'tol') -> None:
    """
    Verify a convergence tolerance is a finite, non-negative number.

    Raises:
        ValidationError: If tol is negative, NaN or infinite
    """
    if not np.isfinite(tol) or tol < 0:
        raise ValidationError(f"{name}: must be finite and non-negative, got {tol!r}")


def check_max_iter(max_iter: int, name: str = 'max_iter') -> None:
    """
    Verify an iteration budget is a non-negative integer.

    Raises:
        ValidationError: If max_iter is not an integer or is negative
    """
    if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)):
        raise ValidationError(f"{name}: expected integer, got {type(max_iter).__name__}")
    if max_iter < 0:
        raise ValidationError(f"{name}: must be non-negative, got {max_iter}")


def check_matrix(A: ArrayLike, name: str = 'A') -> NDArray[np.floating[Any]]:
    """
    Boundary validation for a matrix operand.

    Converts to a floating array and verifies it is a finite, non-empty
    2D matrix. Every public factorization starts here.
    """
    arr = check_array(A, name)
    check_2d(arr, name)
    check_nonempty(arr, name)
    check_finite(arr, name)
    return arr


def check_square_matrix(A: ArrayLike, name: str = 'A') -> NDArray[np.floating[Any]]:
    """Boundary validation for an operand that must be a square matrix."""
    arr = check_matrix(A, name)
    check_square(arr, name)
    return arr


def check_rhs(
    b: ArrayLike,
    rows: int,
    name: str = 'b',
) -> NDArray[np.floating[Any]]:
    """
    Boundary validation for a right-hand side.

    Accepts a vector (rows,) or a matrix (rows, k).

    Raises:
        DimensionError: If b is not 1D/2D or its row count differs from rows
    """
    arr = check_array(b, name)
    if arr.ndim not in (1, 2):
        raise DimensionError(
            f"{name}: expected 1D or 2D array, got {arr.ndim}D with shape {arr.shape}"
        )
    check_finite(arr, name)
    if arr.shape[0] != rows:
        raise DimensionError(
            f"{name}: expected {rows} rows to match the matrix, got {arr.shape[0]}"
        )
    return arr
