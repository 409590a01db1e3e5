"""
Least-squares backends.

Available backends:
    CPUCholeskyBackend: Normal equations with a condition guard
    CPUSVDBackend: SVD with a singular value cutoff
"""

from pylinalg.lstsq.backends.cpu import CPUCholeskyBackend, CPUSVDBackend

__all__ = [
    "CPUCholeskyBackend",
    "CPUSVDBackend",
]
