"""Negative-definite kernels.

These satisfy Σᵢⱼ cᵢcⱼκ(xᵢ, xⱼ) ≤ 0 whenever Σᵢ cᵢ = 0. Their Gram matrices
are not positive semi-definite, so they are not suitable for the Nyström
approximation.
"""

import numpy as np

from .base import (
    NegativeDefiniteKernel,
    cast_parameter,
    check_arg,
    promote_float,
)
from ..utils.distance import SquaredEuclidean


class _IsotropicNegativeDefiniteKernel(NegativeDefiniteKernel):
    is_stationary = True
    is_isotropic = True


class PowerKernel(_IsotropicNegativeDefiniteKernel):
    """Power kernel.

    κ(x, y) = ‖x - y‖^(2γ),  γ ∈ (0, 1]
    """

    _parameters = ('gamma',)

    def __init__(self, gamma=1.0, dtype=None):
        if dtype is None:
            dtype = promote_float(gamma)
        self.gamma = cast_parameter(gamma, dtype)
        check_arg(type(self).__name__, 'gamma', self.gamma,
                  np.ndim(self.gamma) == 0 and 0 < self.gamma <= 1, "γ ∈ (0,1]")
        super().__init__(SquaredEuclidean(), dtype)

    def kappa(self, z):
        return np.power(z, self.gamma)


class LogKernel(_IsotropicNegativeDefiniteKernel):
    """Log kernel.

    κ(x, y) = log(1 + α‖x - y‖^(2γ)),  α > 0, γ ∈ (0, 1]
    """

    _parameters = ('alpha', 'gamma')

    def __init__(self, alpha=1.0, gamma=None, dtype=None):
        if dtype is None:
            dtype = promote_float(alpha, gamma)
        name = type(self).__name__
        self.alpha = cast_parameter(alpha, dtype)
        self.gamma = cast_parameter(1.0 if gamma is None else gamma, dtype)
        check_arg(name, 'alpha', self.alpha,
                  np.ndim(self.alpha) == 0 and self.alpha > 0, "α > 0")
        check_arg(name, 'gamma', self.gamma,
                  np.ndim(self.gamma) == 0 and 0 < self.gamma <= 1, "γ ∈ (0,1]")
        super().__init__(SquaredEuclidean(), dtype)

    def kappa(self, z):
        return np.log1p(self.alpha * np.power(z, self.gamma))
