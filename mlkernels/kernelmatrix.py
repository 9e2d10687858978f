"""Kernel matrix assembly and centering.

Observation matrices carry an orientation: with ``orientation="row"`` each
row is one observation, with ``orientation="col"`` each column is.

For a single data matrix the kernel matrix is symmetric. Only the diagonal
and the upper triangle are evaluated and the lower triangle is a mirror
copy, so K[i, j] == K[j, i] holds exactly and each pair is evaluated once.
The fill proceeds in row blocks; each block owns a disjoint set of rows of
the upper triangle.
"""

from typing import Iterator, Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from tqdm import tqdm

from .errors import DimensionMismatch
from .kernels.base import Kernel

ORIENTATIONS = ('row', 'col')


def _observations(X, orientation: str) -> NDArray:
    """Return X with one observation per row."""
    if orientation not in ORIENTATIONS:
        raise ValueError(f"Unknown orientation: {orientation}. Use 'row' or 'col'.")
    X = np.asarray(X)
    if X.ndim != 2:
        raise DimensionMismatch(f"data matrix must be 2-D, got shape {X.shape}")
    return X if orientation == 'row' else X.T


def _promote(kernel: Kernel, *arrays: NDArray) -> Tuple[np.dtype, list]:
    """Cast data to the element type the kernel is evaluated in.

    Integer and boolean data take the kernel's dtype; floating data is
    promoted together with it.
    """
    floating = [a.dtype for a in arrays if np.issubdtype(a.dtype, np.floating)]
    dtype = np.result_type(kernel.dtype, *floating)
    return dtype, [np.asarray(a, dtype=dtype) for a in arrays]


def _blocks(n: int, block_size: Optional[int],
            show_progress: bool) -> Iterator[Tuple[int, int]]:
    if block_size is None:
        block_size = max(n, 1)
    if block_size < 1:
        raise ValueError(f"block_size must be positive, got {block_size}")
    starts = range(0, n, block_size)
    if show_progress:
        starts = tqdm(starts, desc="Kernel matrix", unit="block")
    for start in starts:
        yield start, min(start + block_size, n)


def _expected_shape(kernel: Kernel, X: NDArray, Y: Optional[NDArray]) -> Tuple[int, int]:
    kernel.check_features(X.shape[1])
    if Y is None:
        return X.shape[0], X.shape[0]
    if X.shape[1] != Y.shape[1]:
        raise DimensionMismatch(
            f"X and Y must have the same number of features, "
            f"got {X.shape[1]} and {Y.shape[1]}"
        )
    return X.shape[0], Y.shape[0]


def _fill_symmetric(K: NDArray, kernel: Kernel, X: NDArray, symmetrize: bool,
                    block_size: Optional[int], show_progress: bool) -> NDArray:
    n = X.shape[0]
    for start, stop in _blocks(n, block_size, show_progress):
        diagonal, upper = kernel._triangle(X[start:stop])
        rows, cols = np.triu_indices(stop - start, k=1)
        idx = np.arange(start, stop)
        K[idx, idx] = diagonal
        K[rows + start, cols + start] = upper
        if symmetrize:
            K[cols + start, rows + start] = K[rows + start, cols + start]
        if stop < n:
            K[start:stop, stop:] = kernel._cross(X[start:stop], X[stop:])
            if symmetrize:
                K[stop:, start:stop] = K[start:stop, stop:].T
    return K


def _fill_cross(K: NDArray, kernel: Kernel, X: NDArray, Y: NDArray,
                block_size: Optional[int], show_progress: bool) -> NDArray:
    for start, stop in _blocks(X.shape[0], block_size, show_progress):
        K[start:stop] = kernel._cross(X[start:stop], Y)
    return K


def kernel(kernel: Kernel, x, y):
    """Evaluate the kernel on a single pair of observation vectors.

    Parameters
    ----------
    kernel : Kernel
        Kernel function
    x, y : array-like
        Observation vectors of equal length

    Returns
    -------
    value : numpy scalar
        κ(x, y)
    """
    x = np.asarray(x)
    y = np.asarray(y)
    if x.ndim != 1 or x.shape != y.shape:
        raise DimensionMismatch(
            f"x and y must be vectors of equal length, got shapes {x.shape} and {y.shape}"
        )
    kernel.check_features(x.shape[0])
    dtype, (x, y) = _promote(kernel, x, y)
    return np.asarray(kernel._pair(x, y), dtype=dtype)[()]


def kernel_matrix(
    kernel: Kernel,
    X,
    Y=None,
    orientation: str = 'row',
    symmetrize: bool = True,
    block_size: Optional[int] = None,
    show_progress: bool = False
) -> NDArray:
    """Compute the kernel matrix.

    With only ``X``, returns the symmetric (n, n) matrix of all pairwise
    kernel values among its observations. With ``Y`` as well, returns the
    rectangular (n, m) cross matrix K[i, j] = κ(x_i, y_j).

    Parameters
    ----------
    kernel : Kernel
        Kernel function
    X : array-like
        Data matrix with n observations
    Y : array-like, optional
        Second data matrix with m observations
    orientation : str
        'row' if observations are rows, 'col' if they are columns
    symmetrize : bool
        Mirror the upper triangle into the lower one. If False, the lower
        triangle is left at zero. Ignored when Y is given.
    block_size : int, optional
        Number of rows evaluated at once (default: all)
    show_progress : bool
        Show a progress bar over row blocks

    Returns
    -------
    K : ndarray
        Kernel matrix of shape (n, n) or (n, m)
    """
    X = _observations(X, orientation)
    if Y is None:
        dtype, (X,) = _promote(kernel, X)
        K = np.zeros(_expected_shape(kernel, X, None), dtype=dtype)
        return _fill_symmetric(K, kernel, X, symmetrize, block_size, show_progress)

    Y = _observations(Y, orientation)
    dtype, (X, Y) = _promote(kernel, X, Y)
    K = np.empty(_expected_shape(kernel, X, Y), dtype=dtype)
    return _fill_cross(K, kernel, X, Y, block_size, show_progress)


def kernel_matrix_inplace(
    K: NDArray,
    kernel: Kernel,
    X,
    Y=None,
    orientation: str = 'row',
    symmetrize: bool = True,
    block_size: Optional[int] = None,
    show_progress: bool = False
) -> NDArray:
    """Compute the kernel matrix into a caller-supplied array.

    Same computation as ``kernel_matrix``. With ``symmetrize=False`` and no
    ``Y``, the strict lower triangle of ``K`` is not touched.

    Parameters
    ----------
    K : ndarray
        Destination of shape (n, n), or (n, m) when Y is given
    kernel, X, Y, orientation, symmetrize, block_size, show_progress
        See ``kernel_matrix``

    Returns
    -------
    K : ndarray
        The destination array, filled
    """
    X = _observations(X, orientation)
    if Y is not None:
        Y = _observations(Y, orientation)
    shape = _expected_shape(kernel, X, Y)
    if np.shape(K) != shape:
        raise DimensionMismatch(
            f"destination must have shape {shape}, got {np.shape(K)}"
        )
    if Y is None:
        _, (X,) = _promote(kernel, X)
        return _fill_symmetric(K, kernel, X, symmetrize, block_size, show_progress)
    _, (X, Y) = _promote(kernel, X, Y)
    return _fill_cross(K, kernel, X, Y, block_size, show_progress)


def center_kernel_matrix_inplace(K: NDArray) -> NDArray:
    """Center a kernel matrix in place: K ← HKH with H = I - 11ᵀ/n.

    Subtracts the row means and the column means and adds back the grand
    mean, so every row and column of the result sums to zero.

    Parameters
    ----------
    K : ndarray
        Square kernel matrix of shape (n, n), floating dtype

    Returns
    -------
    K : ndarray
        The same array, centered
    """
    if K.ndim != 2 or K.shape[0] != K.shape[1]:
        raise DimensionMismatch(f"kernel matrix must be square, got shape {K.shape}")
    if not np.issubdtype(K.dtype, np.floating):
        raise ValueError(
            f"kernel matrix must have a floating point dtype to be centered in place, "
            f"got {K.dtype}; use center_kernel_matrix for a converted copy"
        )
    row_means = K.mean(axis=1, keepdims=True)
    col_means = K.mean(axis=0, keepdims=True)
    grand_mean = row_means.mean()

    K -= row_means
    K -= col_means
    K += grand_mean
    return K


def center_kernel_matrix(K) -> NDArray:
    """Return the centered kernel matrix HKH, leaving K untouched.

    Parameters
    ----------
    K : array-like
        Square kernel matrix of shape (n, n)

    Returns
    -------
    K_centered : ndarray
        Centered copy
    """
    K = np.array(K)
    if not np.issubdtype(K.dtype, np.floating):
        K = K.astype(np.float64)
    return center_kernel_matrix_inplace(K)
