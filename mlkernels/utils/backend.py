"""Backend abstraction for NumPy/CuPy GPU acceleration.

Only the dense symmetric eigendecomposition used by the Nyström
approximation is offloaded. CuPy is optional; without it every call runs on
NumPy.

Usage:
    from mlkernels.utils.backend import eigh, is_gpu_available

    eigenvalues, eigenvectors = eigh(W, use_gpu=is_gpu_available())
"""

from typing import Any, Tuple

import numpy as np
from numpy.typing import NDArray

# Try to import CuPy
try:
    import cupy as cp
    CUPY_AVAILABLE = True
except ImportError:
    cp = None
    CUPY_AVAILABLE = False


def is_gpu_available() -> bool:
    """Check if GPU acceleration is available via CuPy."""
    return CUPY_AVAILABLE


def to_numpy(arr: Any) -> NDArray:
    """Convert array to numpy (CPU) array.

    Parameters
    ----------
    arr : array-like
        Input array (numpy or cupy)

    Returns
    -------
    result : ndarray
        NumPy array on CPU
    """
    if CUPY_AVAILABLE and isinstance(arr, cp.ndarray):
        return cp.asnumpy(arr)
    return np.asarray(arr)


def eigh(K: Any, use_gpu: bool = False) -> Tuple[NDArray, NDArray]:
    """Eigendecomposition of a symmetric matrix with optional GPU.

    Parameters
    ----------
    K : array-like
        Symmetric matrix
    use_gpu : bool
        Whether to use GPU; ignored when CuPy is not installed

    Returns
    -------
    eigenvalues : ndarray
        Eigenvalues in ascending order (numpy array)
    eigenvectors : ndarray
        Corresponding eigenvectors as columns (numpy array)
    """
    if use_gpu and CUPY_AVAILABLE:
        eigenvalues, eigenvectors = cp.linalg.eigh(cp.asarray(K))
        return to_numpy(eigenvalues), to_numpy(eigenvectors)
    return np.linalg.eigh(K)
