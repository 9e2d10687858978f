"""Composite kernels: sums, products and affine transforms of kernels.

A composite is an explicit expression tree over its operand kernels.
Operands are evaluated left to right, in construction order. Nested sums
and nested products are flattened, and nested affine transforms collapse
into one, so the tree never grows deeper than the expression that built it.

When every operand shares the same base function, the base values are
computed once and the operands' ``kappa`` outputs are combined directly.
Otherwise each operand evaluates its own base function.
"""

from functools import reduce
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .base import Kernel, cast_parameter, check_arg, _format_value
from ..utils.distance import BaseFunction


def _common_dtype(kernels) -> np.dtype:
    return np.result_type(*[k.dtype for k in kernels])


def _shared_base(kernels) -> Optional[BaseFunction]:
    first = kernels[0].base_function
    if first is None:
        return None
    if all(k.base_function == first for k in kernels[1:]):
        return first
    return None


class CompositeKernel(Kernel):
    """Kernel combining the outputs of one or more operand kernels."""

    def __init__(self, kernels: Tuple[Kernel, ...]):
        dtype = _common_dtype(kernels)
        self.kernels = tuple(k if k.dtype == dtype else k.astype(dtype) for k in kernels)
        super().__init__(_shared_base(self.kernels), dtype)

    def _combine(self, values):
        raise NotImplementedError

    def kappa(self, z):
        if self.base_function is None:
            raise TypeError(
                f"{type(self).__name__} mixes base functions and has no single kappa"
            )
        return self._combine([k.kappa(z) for k in self.kernels])

    def check_features(self, n_features: int):
        for k in self.kernels:
            k.check_features(n_features)

    def _pair(self, x, y):
        if self.base_function is not None:
            return super()._pair(x, y)
        return self._combine([k._pair(x, y) for k in self.kernels])

    def _cross(self, X, Y):
        if self.base_function is not None:
            return super()._cross(X, Y)
        return self._combine([k._cross(X, Y) for k in self.kernels])

    def _triangle(self, X):
        if self.base_function is not None:
            return super()._triangle(X)
        parts = [k._triangle(X) for k in self.kernels]
        return (self._combine([d for d, _ in parts]),
                self._combine([u for _, u in parts]))

    @property
    def parameters(self):
        return {'kernels': self.kernels}

    def astype(self, dtype):
        return type(self)(*[k.astype(dtype) for k in self.kernels])

    def __eq__(self, other):
        return type(self) is type(other) and self.kernels == other.kernels

    def __hash__(self):
        return hash((type(self), self.kernels))


class KernelSum(CompositeKernel):
    """κ(x, y) = κ₁(x, y) + κ₂(x, y) + ...

    Sums of Mercer kernels are Mercer; sums of negative-definite kernels are
    negative-definite.
    """

    def __init__(self, *kernels: Kernel):
        flat = []
        for k in kernels:
            flat.extend(k.kernels if isinstance(k, KernelSum) else (k,))
        if len(flat) < 2:
            raise ValueError("KernelSum needs at least two kernels")
        super().__init__(tuple(flat))

    @property
    def is_mercer(self):
        return all(k.is_mercer for k in self.kernels)

    @property
    def is_negdef(self):
        return all(k.is_negdef for k in self.kernels)

    @property
    def is_stationary(self):
        return all(k.is_stationary for k in self.kernels)

    @property
    def is_isotropic(self):
        return all(k.is_isotropic for k in self.kernels)

    def _combine(self, values):
        return reduce(np.add, values)

    def __str__(self):
        return "(" + " + ".join(str(k) for k in self.kernels) + ")"

    def __repr__(self):
        return "KernelSum(" + ", ".join(repr(k) for k in self.kernels) + ")"


class KernelProduct(CompositeKernel):
    """κ(x, y) = κ₁(x, y) · κ₂(x, y) · ...

    Products of Mercer kernels are Mercer (Schur product theorem). Products
    of negative-definite kernels are not negative-definite in general.
    """

    def __init__(self, *kernels: Kernel):
        flat = []
        for k in kernels:
            flat.extend(k.kernels if isinstance(k, KernelProduct) else (k,))
        if len(flat) < 2:
            raise ValueError("KernelProduct needs at least two kernels")
        super().__init__(tuple(flat))

    @property
    def is_mercer(self):
        return all(k.is_mercer for k in self.kernels)

    @property
    def is_stationary(self):
        return all(k.is_stationary for k in self.kernels)

    @property
    def is_isotropic(self):
        return all(k.is_isotropic for k in self.kernels)

    def _combine(self, values):
        return reduce(np.multiply, values)

    def __str__(self):
        return "(" + " * ".join(str(k) for k in self.kernels) + ")"

    def __repr__(self):
        return "KernelProduct(" + ", ".join(repr(k) for k in self.kernels) + ")"


class KernelAffinity(CompositeKernel):
    """κ(x, y) = a·κ₀(x, y) + c,  a > 0, c ≥ 0

    Positive scaling and a non-negative shift preserve both the Mercer and
    the negative-definite property of the operand.

    Parameters
    ----------
    kernel : Kernel
        Operand kernel
    a : float
        Scale, a > 0
    c : float
        Shift, c ≥ 0
    """

    def __init__(self, kernel: Kernel, a=1.0, c=0.0):
        if isinstance(kernel, KernelAffinity):
            a, c = a * kernel.a, a * kernel.c + c
            kernel = kernel.kernels[0]
        dtype = kernel.dtype
        a = cast_parameter(a, dtype)
        c = cast_parameter(c, dtype)
        check_arg("KernelAffinity", 'a', a, np.ndim(a) == 0 and a > 0, "a > 0")
        check_arg("KernelAffinity", 'c', c, np.ndim(c) == 0 and c >= 0, "c ≥ 0")
        self.a = a
        self.c = c
        super().__init__((kernel,))

    @property
    def kernel(self) -> Kernel:
        return self.kernels[0]

    @property
    def is_mercer(self):
        return self.kernel.is_mercer

    @property
    def is_negdef(self):
        return self.kernel.is_negdef

    @property
    def is_stationary(self):
        return self.kernel.is_stationary

    @property
    def is_isotropic(self):
        return self.kernel.is_isotropic

    def _combine(self, values):
        return self.a * values[0] + self.c

    @property
    def parameters(self):
        return {'kernel': self.kernel, 'a': self.a, 'c': self.c}

    def astype(self, dtype):
        return KernelAffinity(self.kernel.astype(dtype), self.a, self.c)

    def __eq__(self, other):
        return (type(self) is type(other) and self.kernel == other.kernel
                and self.a == other.a and self.c == other.c)

    def __hash__(self):
        return hash((type(self), self.kernel, float(self.a), float(self.c)))

    def __str__(self):
        return f"({_format_value(self.a)}*{self.kernel} + {_format_value(self.c)})"

    def __repr__(self):
        return (f"KernelAffinity({self.kernel!r}, a={_format_value(self.a)}, "
                f"c={_format_value(self.c)})")
