"""Kernel function families and kernel composition."""

from .base import (
    Kernel,
    MercerKernel,
    NegativeDefiniteKernel,
    promote_float,
)
from .exponential import (
    AbstractExponentialKernel,
    ExponentialKernel,
    LaplacianKernel,
    SquaredExponentialKernel,
    GaussianKernel,
    RadialBasisKernel,
    GammaExponentialKernel,
)
from .rationalquadratic import (
    AbstractRationalQuadraticKernel,
    RationalQuadraticKernel,
    GammaRationalQuadraticKernel,
)
from .matern import MaternKernel
from .dotproduct import (
    LinearKernel,
    PolynomialKernel,
    ExponentiatedKernel,
    SigmoidKernel,
)
from .periodic import PeriodicKernel
from .negdef import PowerKernel, LogKernel
from .composite import (
    CompositeKernel,
    KernelSum,
    KernelProduct,
    KernelAffinity,
)

__all__ = [
    "Kernel",
    "MercerKernel",
    "NegativeDefiniteKernel",
    "promote_float",
    "AbstractExponentialKernel",
    "ExponentialKernel",
    "LaplacianKernel",
    "SquaredExponentialKernel",
    "GaussianKernel",
    "RadialBasisKernel",
    "GammaExponentialKernel",
    "AbstractRationalQuadraticKernel",
    "RationalQuadraticKernel",
    "GammaRationalQuadraticKernel",
    "MaternKernel",
    "LinearKernel",
    "PolynomialKernel",
    "ExponentiatedKernel",
    "SigmoidKernel",
    "PeriodicKernel",
    "PowerKernel",
    "LogKernel",
    "CompositeKernel",
    "KernelSum",
    "KernelProduct",
    "KernelAffinity",
]
