"""Periodic kernel."""

import numpy as np

from .base import MercerKernel, cast_parameter, check_arg, promote_float
from ..utils.distance import SineSquared


class PeriodicKernel(MercerKernel):
    """Periodic kernel.

    κ(x, y) = exp(-α Σᵢ sin²(π(xᵢ - yᵢ)/p)),  α > 0, p > 0

    Stationary but not isotropic: it depends on the difference vector, not on
    its Euclidean length. ``p`` may be a per-feature vector.
    """

    is_stationary = True

    _parameters = ('alpha', 'p')

    def __init__(self, alpha=1.0, p=None, dtype=None):
        if dtype is None:
            dtype = promote_float(alpha, p)
        name = type(self).__name__
        self.alpha = cast_parameter(alpha, dtype)
        self.p = cast_parameter(1.0 if p is None else p, dtype)
        check_arg(name, 'alpha', self.alpha,
                  np.ndim(self.alpha) == 0 and self.alpha > 0, "α > 0")
        check_arg(name, 'p', self.p, self.p > 0, "p > 0")
        super().__init__(SineSquared(self.p), dtype)

    def kappa(self, z):
        return np.exp(-self.alpha * z)
