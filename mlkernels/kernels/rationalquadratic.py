"""Rational-quadratic kernel family.

    RationalQuadraticKernel:       κ(x, y) = (1 + α‖x - y‖²)^(-β)
    GammaRationalQuadraticKernel:  κ(x, y) = (1 + α‖x - y‖^(2γ))^(-β)

Both are isotropic Mercer kernels. The gamma variant reduces to the plain
one when γ = 1.

When α is a vector, the per-feature scaling is moved into the distance: the
kernel uses a weighted squared Euclidean distance (weights α for the plain
kernel, α^(-γ) for the gamma variant) and ``kappa`` no longer multiplies by α.
"""

import numpy as np

from .base import (
    StationaryMercerKernel,
    cast_parameter,
    check_arg,
    promote_float,
)
from ..utils.distance import SquaredEuclidean, WeightedSquaredEuclidean


class AbstractRationalQuadraticKernel(StationaryMercerKernel):
    """Common parent of the rational-quadratic kernels."""


class RationalQuadraticKernel(AbstractRationalQuadraticKernel):
    """Rational-quadratic kernel.

    κ(x, y) = (1 + α‖x - y‖²)^(-β)

    Parameters
    ----------
    alpha : float or array-like
        Scale parameter, α > 0. A vector gives one scale per feature.
    beta : float, optional
        Shape parameter, β > 0 (default: 1 in the type of α)
    dtype : numpy dtype, optional
        Element type. Inferred from the typed arguments when omitted.

    Examples
    --------
    >>> str(RationalQuadraticKernel())
    'RationalQuadraticKernel{float64}(1.0,1.0)'
    >>> str(RationalQuadraticKernel(np.float32(2.0)))
    'RationalQuadraticKernel{float32}(2.0,1.0)'
    >>> str(RationalQuadraticKernel(np.float32(2.0), 2.0))
    'RationalQuadraticKernel{float64}(2.0,2.0)'
    """

    _parameters = ('alpha', 'beta')

    def __init__(self, alpha=1.0, beta=None, dtype=None):
        if dtype is None:
            dtype = promote_float(alpha, beta)
        name = type(self).__name__
        self.alpha = cast_parameter(alpha, dtype)
        self.beta = cast_parameter(1.0 if beta is None else beta, dtype)
        check_arg(name, 'alpha', self.alpha, self.alpha > 0, "α > 0")
        check_arg(name, 'beta', self.beta, np.ndim(self.beta) == 0 and self.beta > 0, "β > 0")
        if np.ndim(self.alpha) == 0:
            base = SquaredEuclidean()
        else:
            base = WeightedSquaredEuclidean(self.alpha)
        super().__init__(base, dtype)

    def kappa(self, z):
        if np.ndim(self.alpha) == 0:
            return np.power(1 + self.alpha * z, -self.beta)
        return np.power(1 + z, -self.beta)


class GammaRationalQuadraticKernel(AbstractRationalQuadraticKernel):
    """Gamma-rational-quadratic kernel.

    κ(x, y) = (1 + α‖x - y‖^(2γ))^(-β)

    Parameters
    ----------
    alpha : float or array-like
        Scale parameter, α > 0. A vector gives one scale per feature.
    beta : float
        Shape parameter, β > 0
    gamma : float
        Shape parameter of the distance, γ ∈ (0, 1]
    dtype : numpy dtype, optional
        Element type. Inferred from the typed arguments when omitted.
    """

    _parameters = ('alpha', 'beta', 'gamma')

    def __init__(self, alpha=1.0, beta=None, gamma=None, dtype=None):
        if dtype is None:
            dtype = promote_float(alpha, beta, gamma)
        name = type(self).__name__
        self.alpha = cast_parameter(alpha, dtype)
        self.beta = cast_parameter(1.0 if beta is None else beta, dtype)
        self.gamma = cast_parameter(1.0 if gamma is None else gamma, dtype)
        check_arg(name, 'alpha', self.alpha, self.alpha > 0, "∀ α > 0")
        check_arg(name, 'beta', self.beta, np.ndim(self.beta) == 0 and self.beta > 0, "β > 0")
        check_arg(name, 'gamma', self.gamma,
                  np.ndim(self.gamma) == 0 and 0 < self.gamma <= 1, "γ ∈ (0,1]")
        if np.ndim(self.alpha) == 0:
            base = SquaredEuclidean()
        else:
            base = WeightedSquaredEuclidean(np.power(self.alpha, -self.gamma))
        super().__init__(base, dtype)

    def kappa(self, z):
        if np.ndim(self.alpha) == 0:
            return np.power(1 + self.alpha * np.power(z, self.gamma), -self.beta)
        return np.power(1 + np.power(z, self.gamma), -self.beta)
