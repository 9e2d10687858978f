"""Kernels built on the scalar product xᵀy.

None of these are stationary: they depend on the inputs themselves, not only
on their difference.
"""

import numpy as np

from .base import (
    Kernel,
    MercerKernel,
    cast_parameter,
    check_arg,
    promote_float,
)
from ..utils.distance import ScalarProduct


def _check_scalar(name, param, value, condition, constraint):
    check_arg(name, param, value, np.ndim(value) == 0 and condition, constraint)


class LinearKernel(MercerKernel):
    """Linear kernel.

    κ(x, y) = a xᵀy + c,  a > 0, c ≥ 0
    """

    _parameters = ('a', 'c')

    def __init__(self, a=1.0, c=None, dtype=None):
        if dtype is None:
            dtype = promote_float(a, c)
        name = type(self).__name__
        self.a = cast_parameter(a, dtype)
        self.c = cast_parameter(1.0 if c is None else c, dtype)
        _check_scalar(name, 'a', self.a, self.a > 0, "a > 0")
        _check_scalar(name, 'c', self.c, self.c >= 0, "c ≥ 0")
        super().__init__(ScalarProduct(), dtype)

    def kappa(self, z):
        return self.a * z + self.c


class PolynomialKernel(MercerKernel):
    """Polynomial kernel.

    κ(x, y) = (a xᵀy + c)^d,  a > 0, c ≥ 0, d ∈ ℤ⁺

    The degree ``d`` is kept as an integer and is not affected by ``dtype``.
    """

    _parameters = ('a', 'c', 'd')

    def __init__(self, a=1.0, c=None, d=3, dtype=None):
        if dtype is None:
            dtype = promote_float(a, c)
        name = type(self).__name__
        self.a = cast_parameter(a, dtype)
        self.c = cast_parameter(1.0 if c is None else c, dtype)
        _check_scalar(name, 'a', self.a, self.a > 0, "a > 0")
        _check_scalar(name, 'c', self.c, self.c >= 0, "c ≥ 0")
        _check_scalar(name, 'd', d, d > 0 and d == int(d), "d ∈ ℤ⁺")
        self.d = int(d)
        super().__init__(ScalarProduct(), dtype)

    def kappa(self, z):
        return np.power(self.a * z + self.c, self.d)


class ExponentiatedKernel(MercerKernel):
    """Exponentiated kernel.

    κ(x, y) = exp(a xᵀy),  a > 0
    """

    _parameters = ('a',)

    def __init__(self, a=1.0, dtype=None):
        if dtype is None:
            dtype = promote_float(a)
        self.a = cast_parameter(a, dtype)
        _check_scalar(type(self).__name__, 'a', self.a, self.a > 0, "a > 0")
        super().__init__(ScalarProduct(), dtype)

    def kappa(self, z):
        return np.exp(self.a * z)


class SigmoidKernel(Kernel):
    """Sigmoid (hyperbolic tangent) kernel.

    κ(x, y) = tanh(a xᵀy + c),  a > 0, c ≥ 0

    Neither Mercer nor negative-definite.
    """

    _parameters = ('a', 'c')

    def __init__(self, a=1.0, c=None, dtype=None):
        if dtype is None:
            dtype = promote_float(a, c)
        name = type(self).__name__
        self.a = cast_parameter(a, dtype)
        self.c = cast_parameter(1.0 if c is None else c, dtype)
        _check_scalar(name, 'a', self.a, self.a > 0, "a > 0")
        _check_scalar(name, 'c', self.c, self.c >= 0, "c ≥ 0")
        super().__init__(ScalarProduct(), dtype)

    def kappa(self, z):
        return np.tanh(self.a * z + self.c)
