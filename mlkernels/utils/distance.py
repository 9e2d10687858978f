"""Base functions: pairwise scalars between observation vectors.

A kernel never looks at raw observations directly. It asks its base function
for a scalar per pair of observations (a squared distance or a dot product)
and maps that scalar through its ``kappa`` transform.

Every base function offers four views of the same computation:

- ``pair(x, y)``: a single scalar for two vectors
- ``cross(X, Y)``: the full (n, m) matrix for row-oriented X and Y
- ``condensed(X)``: the strict upper triangle of ``cross(X, X)`` in
  ``scipy.spatial.distance.pdist`` order (i < j, row by row)
- ``diagonal(X)``: the values ``d(x_i, x_i)``

All four are commutative in their arguments and free of side effects.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import cdist, pdist

from ..errors import DimensionMismatch


class BaseFunctionKind(Enum):
    """Strategy tag stored on every kernel at construction time."""
    SQUARED_EUCLIDEAN = "sqeuclidean"
    WEIGHTED_SQUARED_EUCLIDEAN = "weighted_sqeuclidean"
    SCALAR_PRODUCT = "scalarproduct"
    SINE_SQUARED = "sinesquared"


class BaseFunction(ABC):
    """Abstract pairwise scalar function."""

    kind: BaseFunctionKind
    stationary: bool = True
    isotropic: bool = False

    @property
    def n_features(self) -> Optional[int]:
        """Required feature dimension, or None when any dimension is accepted."""
        return None

    def check_dimension(self, d: int):
        expected = self.n_features
        if expected is not None and expected != d:
            raise DimensionMismatch(
                f"{type(self).__name__} expects {expected} features, got {d}"
            )

    @abstractmethod
    def pair(self, x: NDArray, y: NDArray):
        pass

    @abstractmethod
    def cross(self, X: NDArray, Y: NDArray) -> NDArray:
        pass

    @abstractmethod
    def condensed(self, X: NDArray) -> NDArray:
        pass

    @abstractmethod
    def diagonal(self, X: NDArray) -> NDArray:
        pass

    def astype(self, dtype) -> "BaseFunction":
        return self

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f"{type(self).__name__}()"


class SquaredEuclidean(BaseFunction):
    """d(x, y) = Σ (x_i - y_i)²."""

    kind = BaseFunctionKind.SQUARED_EUCLIDEAN
    isotropic = True

    def pair(self, x, y):
        diff = np.asarray(x) - np.asarray(y)
        return np.sum(diff * diff)

    def cross(self, X, Y):
        return cdist(X, Y, metric='sqeuclidean').astype(_result_dtype(X, Y), copy=False)

    def condensed(self, X):
        return pdist(X, metric='sqeuclidean').astype(X.dtype, copy=False)

    def diagonal(self, X):
        return np.zeros(X.shape[0], dtype=X.dtype)


class WeightedSquaredEuclidean(SquaredEuclidean):
    """d(x, y) = Σ w_i (x_i - y_i)².

    The weights are applied by rescaling each feature with √w_i before the
    unweighted computation, so unit weights reproduce ``SquaredEuclidean``
    exactly.

    Parameters
    ----------
    weights : ndarray
        Non-negative per-feature weights of shape (d,)
    """

    kind = BaseFunctionKind.WEIGHTED_SQUARED_EUCLIDEAN
    isotropic = False

    def __init__(self, weights: NDArray):
        weights = np.array(weights)
        if weights.ndim != 1:
            raise ValueError(f"weights must be a vector, got shape {weights.shape}")
        if np.any(weights < 0):
            raise ValueError("weights must be non-negative")
        self.weights = weights
        self._scale = np.sqrt(weights)
        self.weights.flags.writeable = False

    @property
    def n_features(self):
        return self.weights.shape[0]

    def pair(self, x, y):
        diff = self._scale * (np.asarray(x) - np.asarray(y))
        return np.sum(diff * diff)

    def cross(self, X, Y):
        return super().cross(X * self._scale, Y * self._scale)

    def condensed(self, X):
        return super().condensed(X * self._scale)

    def astype(self, dtype):
        return WeightedSquaredEuclidean(self.weights.astype(dtype))

    def __eq__(self, other):
        return (type(self) is type(other)
                and np.array_equal(self.weights, other.weights))

    def __hash__(self):
        return hash((type(self), self.weights.tobytes()))

    def __repr__(self):
        return f"WeightedSquaredEuclidean({self.weights.tolist()})"


class ScalarProduct(BaseFunction):
    """d(x, y) = Σ x_i y_i."""

    kind = BaseFunctionKind.SCALAR_PRODUCT
    stationary = False

    def pair(self, x, y):
        return np.dot(np.asarray(x), np.asarray(y))

    def cross(self, X, Y):
        return X @ Y.T

    def condensed(self, X):
        G = X @ X.T
        return G[np.triu_indices(X.shape[0], k=1)]

    def diagonal(self, X):
        return np.einsum('ij,ij->i', X, X)


class SineSquared(BaseFunction):
    """d(x, y) = Σ sin²(π (x_i - y_i) / p_i), used by periodic kernels.

    Parameters
    ----------
    period : float or ndarray
        Positive period, scalar or per feature
    """

    kind = BaseFunctionKind.SINE_SQUARED

    def __init__(self, period: Union[float, NDArray] = 1.0):
        self.period = period

    @property
    def n_features(self):
        return np.shape(self.period)[0] if np.ndim(self.period) == 1 else None

    def _reduce(self, diff):
        s = np.sin(np.pi * diff / self.period)
        return np.sum(s * s, axis=-1)

    def pair(self, x, y):
        return self._reduce(np.asarray(x) - np.asarray(y))

    def cross(self, X, Y):
        return self._reduce(X[:, np.newaxis, :] - Y[np.newaxis, :, :])

    def condensed(self, X):
        i, j = np.triu_indices(X.shape[0], k=1)
        return self._reduce(X[i] - X[j])

    def diagonal(self, X):
        return np.zeros(X.shape[0], dtype=X.dtype)

    def astype(self, dtype):
        return SineSquared(np.asarray(self.period).astype(dtype)[()])

    def __eq__(self, other):
        return (type(self) is type(other)
                and np.array_equal(self.period, other.period))

    def __hash__(self):
        return hash((type(self), np.asarray(self.period).tobytes()))

    def __repr__(self):
        return f"SineSquared({np.asarray(self.period).tolist()})"


def _result_dtype(X: NDArray, Y: NDArray):
    return np.result_type(X.dtype, Y.dtype)
