"""
Least-squares solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylinalg.core.result import Result

if TYPE_CHECKING:
    from pylinalg.lstsq.design import LstsqDesign


@dataclass(frozen=True)
class LstsqParams:
    """
    Parameter payload for least squares.

    This is the immutable data computed by backends. Right-hand sides are
    columns, so x is n x k and residuals has one entry per column.
    """
    x: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rank: int
    singular_values: NDArray[np.floating[Any]] | None = None


@dataclass
class LstsqSolution:
    """
    User-facing least-squares results.

    Wraps the backend Result and gives x and the residuals back in the
    shape of the original right-hand side.
    """
    _result: Result[LstsqParams]
    _design: 'LstsqDesign'

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Solution, (n,) for a vector b or (n, k) for a matrix b."""
        return self._design.restore_shape(self._result.params.x)

    @property
    def residuals(self) -> float | NDArray[np.floating[Any]]:
        """Squared residual norm ||A x - b||^2, per right-hand side column."""
        residuals = self._result.params.residuals
        if self._design.vector_rhs:
            return float(residuals[0])
        return residuals

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def singular_values(self) -> NDArray[np.floating[Any]] | None:
        """Singular values of A, or None if the SVD was not computed."""
        return self._result.params.singular_values

    @property
    def method(self) -> str:
        return self._result.info['method']

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def has_warning(self, substring: str) -> bool:
        return self._result.has_warning(substring)

    def summary(self) -> str:
        """Plain-text summary of the solve."""
        lines = [
            "Least Squares Results",
            "=" * 60,
            f"Equations: {self._design.m}",
            f"Unknowns: {self._design.n}",
            f"Right-hand sides: {self._design.b.shape[1]}",
            f"Method: {self.method}",
            f"Rank: {self.rank}",
        ]
        if 'condition_estimate' in self.info:
            lines.append(f"Condition estimate (A'A): {self.info['condition_estimate']:.3e}")
        if 'cutoff' in self.info:
            lines.append(f"Singular value cutoff: {self.info['cutoff']:.3e}")
        if 'fallback' in self.info:
            lines.append(f"Fallback: {self.info['fallback']}")

        residuals = np.atleast_1d(self._result.params.residuals)
        lines.append("")
        lines.append("Squared residual norms:")
        for i, r in enumerate(residuals):
            lines.append(f"  b[:, {i}]: {r:.6e}")

        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            for w in self.warnings:
                lines.append(f"  - {w}")

        if self.timing:
            lines.append("")
            lines.append(f"Time: {self.timing['total_seconds']:.4f}s")

        return "\n".join(lines)
