"""Abstract base classes for kernel functions.

Every kernel follows the same two-layer evaluation protocol:

1. its base function (see ``mlkernels.utils.distance``) reduces a pair of
   observations to one scalar, a squared distance or a dot product
2. ``kappa`` maps that scalar to the kernel value

Kernels are immutable once constructed. Parameters are cast to a single
floating point element type (``dtype``) and validated against their domain
in the constructor; a violation raises ``ArgumentError`` and nothing is ever
clamped.

The four property flags (``is_mercer``, ``is_negdef``, ``is_stationary``,
``is_isotropic``) are class attributes, so every instance of a family reports
the same values.
"""

from abc import ABC, abstractmethod
from numbers import Real
from typing import Dict, Tuple

import numpy as np
from numpy.typing import NDArray

from ..errors import ArgumentError
from ..utils.distance import BaseFunction


def promote_float(*values) -> np.dtype:
    """Common floating point dtype for a set of parameter values.

    Python floats count as float64. Plain Python ints and None (an omitted
    parameter) do not take part, so ``RationalQuadraticKernel(np.float32(2.0))``
    stays in single precision while ``RationalQuadraticKernel(np.float32(2.0), 2.0)``
    is float64. Integer dtypes are promoted to float64.

    Parameters
    ----------
    *values
        Scalars, sequences or arrays; None is ignored

    Returns
    -------
    dtype : numpy.dtype
        Floating point dtype, float64 when nothing typed was given
    """
    typed = [np.asarray(v).dtype for v in values
             if v is not None and type(v) not in (int, bool)]
    if not typed:
        return np.dtype(np.float64)
    dtype = np.result_type(*typed)
    if not np.issubdtype(dtype, np.floating):
        dtype = np.promote_types(dtype, np.float64)
    return dtype


def cast_parameter(value, dtype):
    """Cast a scalar or vector parameter to ``dtype``.

    Vectors are copied and made read-only.
    """
    if np.ndim(value) == 0:
        return np.dtype(dtype).type(value)
    arr = np.array(value, dtype=dtype)
    if arr.ndim != 1:
        raise ValueError(f"vector parameters must be 1-D, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


def check_arg(kernel_name: str, name: str, value, condition, constraint: str):
    """Raise ``ArgumentError`` unless ``condition`` holds for every element."""
    if not np.all(condition):
        raise ArgumentError(kernel_name, name, _format_value(value), constraint)


def _format_value(value) -> str:
    if np.ndim(value) == 0:
        return str(value)
    return "[" + ",".join(str(v) for v in np.asarray(value)) + "]"


class Kernel(ABC):
    """Abstract kernel function.

    Subclasses set ``self.base_function`` and implement ``kappa``. The
    matrix engine only talks to kernels through ``_pair``, ``_cross`` and
    ``_triangle``, which composite kernels override.

    Kernels support ``+`` and ``*`` with other kernels and with non-negative
    scalars, producing ``KernelSum``, ``KernelProduct`` and
    ``KernelAffinity`` instances.
    """

    is_mercer: bool = False
    is_negdef: bool = False
    is_stationary: bool = False
    is_isotropic: bool = False

    # Constructor argument names, in display order
    _parameters: Tuple[str, ...] = ()

    def __init__(self, base_function: BaseFunction, dtype):
        dtype = np.dtype(dtype)
        if not np.issubdtype(dtype, np.floating):
            raise ValueError(f"dtype must be a floating point type, got {dtype}")
        self.base_function = base_function
        self.dtype = dtype
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, '_frozen', False):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    @abstractmethod
    def kappa(self, z):
        """Map a base-function value (scalar or array) to the kernel value."""
        pass

    @property
    def parameters(self) -> Dict[str, object]:
        """Constructor arguments of this instance, in display order."""
        return {name: getattr(self, name) for name in self._parameters}

    def astype(self, dtype) -> "Kernel":
        """Return an equivalent kernel with all parameters cast to ``dtype``."""
        return type(self)(**self.parameters, dtype=dtype)

    def check_features(self, n_features: int):
        """Raise ``DimensionMismatch`` if vector parameters do not fit the data."""
        self.base_function.check_dimension(n_features)

    def _pair(self, x: NDArray, y: NDArray):
        return self.kappa(self.base_function.pair(x, y))

    def _cross(self, X: NDArray, Y: NDArray) -> NDArray:
        return self.kappa(self.base_function.cross(X, Y))

    def _triangle(self, X: NDArray) -> Tuple[NDArray, NDArray]:
        """Kernel values on the diagonal and on the strict upper triangle.

        The upper triangle is returned in condensed (``pdist``) order.
        """
        base = self.base_function
        return self.kappa(base.diagonal(X)), self.kappa(base.condensed(X))

    # Composition -------------------------------------------------------

    def __add__(self, other):
        from .composite import KernelSum, KernelAffinity
        if isinstance(other, Kernel):
            return KernelSum(self, other)
        if isinstance(other, Real):
            return KernelAffinity(self, 1, other)
        return NotImplemented

    def __radd__(self, other):
        from .composite import KernelAffinity
        if isinstance(other, Real):
            return KernelAffinity(self, 1, other)
        return NotImplemented

    def __mul__(self, other):
        from .composite import KernelProduct, KernelAffinity
        if isinstance(other, Kernel):
            return KernelProduct(self, other)
        if isinstance(other, Real):
            return KernelAffinity(self, other, 0)
        return NotImplemented

    def __rmul__(self, other):
        from .composite import KernelAffinity
        if isinstance(other, Real):
            return KernelAffinity(self, other, 0)
        return NotImplemented

    # Display and comparison --------------------------------------------

    def __str__(self):
        values = ",".join(_format_value(v) for v in self.parameters.values())
        return f"{type(self).__name__}{{{self.dtype.name}}}({values})"

    def __repr__(self):
        args = ", ".join(f"{k}={_format_value(v)}" for k, v in self.parameters.items())
        sep = ", " if args else ""
        return f"{type(self).__name__}({args}{sep}dtype={self.dtype.name})"

    def __eq__(self, other):
        if type(self) is not type(other) or self.dtype != other.dtype:
            return False
        return all(np.array_equal(a, b) for a, b in
                   zip(self.parameters.values(), other.parameters.values()))

    def __hash__(self):
        return hash((type(self), self.dtype.str,
                     tuple(np.asarray(v).tobytes() for v in self.parameters.values())))


class MercerKernel(Kernel):
    """Kernel whose Gram matrices are positive semi-definite."""

    is_mercer = True


class NegativeDefiniteKernel(Kernel):
    """Conditionally negative-definite kernel."""

    is_negdef = True


class StationaryMercerKernel(MercerKernel):
    """Mercer kernel depending only on ‖x - y‖, through a squared distance."""

    is_stationary = True
    is_isotropic = True
