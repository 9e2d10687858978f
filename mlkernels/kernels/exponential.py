"""Exponential kernel family.

    ExponentialKernel:         κ(x, y) = exp(-α‖x - y‖)
    SquaredExponentialKernel:  κ(x, y) = exp(-α‖x - y‖²)
    GammaExponentialKernel:    κ(x, y) = exp(-α‖x - y‖^(2γ))

A vector α is folded into a weighted squared Euclidean distance, with the
weights chosen so that the scalar formula holds per feature.
"""

import numpy as np

from .base import (
    StationaryMercerKernel,
    cast_parameter,
    check_arg,
    promote_float,
)
from ..utils.distance import SquaredEuclidean, WeightedSquaredEuclidean


class AbstractExponentialKernel(StationaryMercerKernel):
    """Common parent of the exponential kernels."""


class ExponentialKernel(AbstractExponentialKernel):
    """Exponential (Laplacian) kernel.

    κ(x, y) = exp(-α‖x - y‖),  α > 0
    """

    _parameters = ('alpha',)

    def __init__(self, alpha=1.0, dtype=None):
        if dtype is None:
            dtype = promote_float(alpha)
        self.alpha = cast_parameter(alpha, dtype)
        check_arg(type(self).__name__, 'alpha', self.alpha, self.alpha > 0, "α > 0")
        if np.ndim(self.alpha) == 0:
            base = SquaredEuclidean()
        else:
            base = WeightedSquaredEuclidean(self.alpha * self.alpha)
        super().__init__(base, dtype)

    def kappa(self, z):
        if np.ndim(self.alpha) == 0:
            return np.exp(-self.alpha * np.sqrt(z))
        return np.exp(-np.sqrt(z))


LaplacianKernel = ExponentialKernel


class SquaredExponentialKernel(AbstractExponentialKernel):
    """Squared exponential (Gaussian, RBF) kernel.

    κ(x, y) = exp(-α‖x - y‖²),  α > 0
    """

    _parameters = ('alpha',)

    def __init__(self, alpha=1.0, dtype=None):
        if dtype is None:
            dtype = promote_float(alpha)
        self.alpha = cast_parameter(alpha, dtype)
        check_arg(type(self).__name__, 'alpha', self.alpha, self.alpha > 0, "α > 0")
        if np.ndim(self.alpha) == 0:
            base = SquaredEuclidean()
        else:
            base = WeightedSquaredEuclidean(self.alpha)
        super().__init__(base, dtype)

    def kappa(self, z):
        if np.ndim(self.alpha) == 0:
            return np.exp(-self.alpha * z)
        return np.exp(-z)


GaussianKernel = SquaredExponentialKernel
RadialBasisKernel = SquaredExponentialKernel


class GammaExponentialKernel(AbstractExponentialKernel):
    """Gamma-exponential kernel.

    κ(x, y) = exp(-α‖x - y‖^(2γ)),  α > 0, γ ∈ (0, 1]
    """

    _parameters = ('alpha', 'gamma')

    def __init__(self, alpha=1.0, gamma=None, dtype=None):
        if dtype is None:
            dtype = promote_float(alpha, gamma)
        name = type(self).__name__
        self.alpha = cast_parameter(alpha, dtype)
        self.gamma = cast_parameter(1.0 if gamma is None else gamma, dtype)
        check_arg(name, 'alpha', self.alpha, self.alpha > 0, "∀ α > 0")
        check_arg(name, 'gamma', self.gamma,
                  np.ndim(self.gamma) == 0 and 0 < self.gamma <= 1, "γ ∈ (0,1]")
        if np.ndim(self.alpha) == 0:
            base = SquaredEuclidean()
        else:
            base = WeightedSquaredEuclidean(np.power(self.alpha, 1 / self.gamma))
        super().__init__(base, dtype)

    def kappa(self, z):
        if np.ndim(self.alpha) == 0:
            return np.exp(-self.alpha * np.power(z, self.gamma))
        return np.exp(-np.power(z, self.gamma))
