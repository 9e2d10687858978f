"""Nyström low-rank approximation of kernel matrices.

Samples m of the n observations, eigendecomposes the (m, m) kernel matrix W
of the sample and keeps the (n, m) cross matrix C between all observations
and the sample. Then

    K ≈ C V Λ⁻¹ Vᵀ Cᵀ

where (Λ, V) are the eigenpairs of W above a tolerance. The approximate
feature map of a point x is κ(x, samples) V Λ^(-1/2).

Supports GPU acceleration of the eigendecomposition via CuPy when
use_gpu=True.
"""

import math
import warnings
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .errors import DimensionMismatch, NystromDegenerateError
from .kernelmatrix import _observations, kernel_matrix
from .kernels.base import Kernel
from .utils.backend import eigh

DEFAULT_SAMPLE_FRACTION = 0.15


def sample_indices(
    n: int,
    sample: Union[int, float, Sequence[int]] = DEFAULT_SAMPLE_FRACTION,
    seed: Optional[Union[int, np.random.Generator]] = None
) -> NDArray:
    """Choose the observations that form the Nyström sample.

    Parameters
    ----------
    n : int
        Number of observations
    sample : int, float or sequence of int
        Sample size (int), fraction of n in (0, 1) (float, rounded up), or
        an explicit sequence of unique indices
    seed : int or numpy.random.Generator, optional
        Random state for uniform sampling without replacement

    Returns
    -------
    indices : ndarray
        Sorted sample indices of shape (m,), 1 ≤ m < n
    """
    if isinstance(sample, Integral):
        m = int(sample)
    elif isinstance(sample, Real):
        if not 0 < sample < 1:
            raise ValueError(f"sample fraction must be in (0, 1), got {sample}")
        m = math.ceil(n * sample)
    else:
        indices = np.asarray(sample)
        if indices.size == 0:
            _check_sample_size(0, n)
        if indices.ndim != 1 or not np.issubdtype(indices.dtype, np.integer):
            raise ValueError("sample indices must be a 1-D sequence of integers")
        m = indices.shape[0]
        _check_sample_size(m, n)
        if np.any(indices < 0) or np.any(indices >= n):
            raise ValueError(f"sample indices must lie in [0, {n})")
        if np.unique(indices).shape[0] != m:
            raise ValueError("sample indices must be unique")
        return indices

    _check_sample_size(m, n)
    rng = np.random.default_rng(seed)
    return np.sort(rng.choice(n, size=m, replace=False))


def _check_sample_size(m: int, n: int):
    if m < 1 or m >= n:
        raise DimensionMismatch(
            f"sample size must satisfy 1 ≤ m < n, got m = {m} and n = {n}"
        )


@dataclass(frozen=True, eq=False)
class NystromFactorization:
    """Nyström factorization of a kernel matrix.

    Attributes
    ----------
    kernel : Kernel
        Kernel the factorization was built with
    indices : ndarray
        Indices of the sampled observations, shape (m,)
    samples : ndarray
        Sampled observations, one per row, shape (m, d)
    eigenvalues : ndarray
        Retained eigenvalues of W in descending order, shape (r,)
    eigenvectors : ndarray
        Corresponding eigenvectors as columns, shape (m, r)
    cross : ndarray
        Cross kernel matrix C between all observations and the sample, (n, m)
    tolerance : float
        Eigenvalues below this value were discarded
    orientation : str
        Orientation of the data the factorization was built from
    """
    kernel: Kernel
    indices: NDArray
    samples: NDArray
    eigenvalues: NDArray
    eigenvectors: NDArray
    cross: NDArray
    tolerance: float
    orientation: str = 'row'

    def __post_init__(self):
        for name in ('indices', 'samples', 'eigenvalues', 'eigenvectors', 'cross'):
            getattr(self, name).flags.writeable = False

    @property
    def rank(self) -> int:
        """Number of retained eigenpairs."""
        return self.eigenvalues.shape[0]

    def _projection(self) -> NDArray:
        return self.eigenvectors / np.sqrt(self.eigenvalues)

    def embedding(self) -> NDArray:
        """Approximate feature map of the training observations, shape (n, r).

        ``embedding() @ embedding().T`` is the approximate kernel matrix.
        """
        return self.cross @ self._projection()

    def transform(self, X) -> NDArray:
        """Approximate feature map of new observations.

        Parameters
        ----------
        X : array-like
            Data matrix in the factorization's orientation

        Returns
        -------
        features : ndarray
            Features of shape (n_new, r)
        """
        X = _observations(X, self.orientation)
        C = kernel_matrix(self.kernel, X, self.samples, orientation='row')
        return C @ self._projection()

    def kernel_matrix(self) -> NDArray:
        """Reconstruct the approximate (n, n) kernel matrix C V Λ⁻¹ Vᵀ Cᵀ.

        The upper triangle is mirrored so the result is exactly symmetric.
        """
        F = self.embedding()
        K = F @ F.T
        rows, cols = np.triu_indices(K.shape[0], k=1)
        K[cols, rows] = K[rows, cols]
        return K


def nystrom(
    kernel: Kernel,
    X,
    sample: Union[int, float, Sequence[int]] = DEFAULT_SAMPLE_FRACTION,
    orientation: str = 'row',
    tolerance: Optional[float] = None,
    seed: Optional[Union[int, np.random.Generator]] = None,
    use_gpu: bool = False
) -> NystromFactorization:
    """Build a Nyström factorization of the kernel matrix of X.

    Parameters
    ----------
    kernel : Kernel
        Kernel function; should be a Mercer kernel
    X : array-like
        Data matrix with n observations
    sample : int, float or sequence of int
        Sample size, sample fraction, or explicit sample indices
        (default: 15% of the observations)
    orientation : str
        'row' if observations are rows, 'col' if they are columns
    tolerance : float, optional
        Eigenvalues of W below this are discarded
        (default: machine epsilon · m · largest eigenvalue)
    seed : int or numpy.random.Generator, optional
        Random state for sampling
    use_gpu : bool
        If True, use GPU acceleration via CuPy for the eigendecomposition

    Returns
    -------
    factorization : NystromFactorization
    """
    if not kernel.is_mercer:
        warnings.warn(
            f"{kernel} is not a Mercer kernel; its sampled kernel matrix may "
            f"have negative eigenvalues, which are discarded"
        )
    X = _observations(X, orientation)
    n = X.shape[0]
    indices = sample_indices(n, sample, seed)
    samples = X[indices]

    W = kernel_matrix(kernel, samples, orientation='row')
    C = kernel_matrix(kernel, X, samples, orientation='row')

    eigenvalues, eigenvectors = eigh(W, use_gpu=use_gpu)
    order = np.argsort(eigenvalues)[::-1]
    eigenvalues = eigenvalues[order]
    eigenvectors = eigenvectors[:, order]

    if tolerance is None:
        tolerance = np.finfo(W.dtype).eps * W.shape[0] * max(eigenvalues[0], 0)
    keep = eigenvalues > tolerance
    if not np.any(keep):
        raise NystromDegenerateError(
            f"no eigenvalue of the sampled kernel matrix exceeds the tolerance "
            f"{tolerance}; retry with a different or larger sample"
        )

    return NystromFactorization(
        kernel=kernel,
        indices=np.array(indices),
        samples=np.array(samples),
        eigenvalues=eigenvalues[keep],
        eigenvectors=eigenvectors[:, keep],
        cross=C,
        tolerance=float(tolerance),
        orientation=orientation,
    )
