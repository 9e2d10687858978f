"""Matérn kernel."""

import numpy as np
from scipy.special import gammaln, kve

from .base import (
    StationaryMercerKernel,
    cast_parameter,
    check_arg,
    promote_float,
)
from ..utils.distance import SquaredEuclidean


class MaternKernel(StationaryMercerKernel):
    """Matérn kernel.

    κ(x, y) = 2^(1-ν)/Γ(ν) · (√(2ν)‖x - y‖/ρ)^ν · K_ν(√(2ν)‖x - y‖/ρ)

    with κ = 1 at zero distance. K_ν is the modified Bessel function of the
    second kind. The product is evaluated in log space with the exponentially
    scaled Bessel function, so large distances underflow to 0 instead of
    producing ``inf * 0``. Near zero the scaled Bessel function itself
    overflows for large ν; there κ takes its limit 1. Values never exceed 1.

    Parameters
    ----------
    nu : float
        Smoothness, ν > 0
    rho : float
        Length scale, ρ > 0
    """

    _parameters = ('nu', 'rho')

    def __init__(self, nu=1.0, rho=None, dtype=None):
        if dtype is None:
            dtype = promote_float(nu, rho)
        name = type(self).__name__
        self.nu = cast_parameter(nu, dtype)
        self.rho = cast_parameter(1.0 if rho is None else rho, dtype)
        check_arg(name, 'nu', self.nu, np.ndim(self.nu) == 0 and self.nu > 0, "ν > 0")
        check_arg(name, 'rho', self.rho, np.ndim(self.rho) == 0 and self.rho > 0, "ρ > 0")
        super().__init__(SquaredEuclidean(), dtype)

    def kappa(self, z):
        z = np.asarray(z)
        nu = float(self.nu)
        v = np.sqrt(2 * nu * z) / float(self.rho)
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            log_k = ((1 - nu) * np.log(2) - gammaln(nu)
                     + nu * np.log(v) - v + np.log(kve(nu, v)))
            result = np.minimum(np.exp(log_k), 1.0)
        # kve overflows as v -> 0, where κ tends to 1
        result = np.where((v == 0) | (log_k == np.inf), 1.0, result)
        result = np.where(np.isposinf(v), 0.0, result)
        return result.astype(np.result_type(z.dtype, self.dtype), copy=False)[()]
