"""mlkernels: kernel functions and kernel matrices for machine learning.

Computes Gram matrices of observation vectors under a chosen kernel,
centers them for kernel PCA style algorithms, and approximates large
kernel matrices with the Nyström method.

Main components:
- kernels: Kernel families, property flags and kernel composition
- kernelmatrix: Pairwise kernel evaluation and matrix centering
- nystrom: Nyström low-rank approximation
- utils: Base functions (distances, dot products) and GPU backend
"""

__version__ = "0.1.0"

# Kernels
from .kernels import (
    Kernel,
    MercerKernel,
    NegativeDefiniteKernel,
    ExponentialKernel,
    LaplacianKernel,
    SquaredExponentialKernel,
    GaussianKernel,
    RadialBasisKernel,
    GammaExponentialKernel,
    RationalQuadraticKernel,
    GammaRationalQuadraticKernel,
    MaternKernel,
    LinearKernel,
    PolynomialKernel,
    ExponentiatedKernel,
    SigmoidKernel,
    PeriodicKernel,
    PowerKernel,
    LogKernel,
    KernelSum,
    KernelProduct,
    KernelAffinity,
)

# Kernel matrices
from .kernelmatrix import (
    kernel,
    kernel_matrix,
    kernel_matrix_inplace,
    center_kernel_matrix,
    center_kernel_matrix_inplace,
)

# Nyström approximation
from .nystrom import (
    NystromFactorization,
    nystrom,
    sample_indices,
)

# Errors
from .errors import (
    ArgumentError,
    DimensionMismatch,
    NystromDegenerateError,
)

__all__ = [
    # Version
    "__version__",
    # Kernels
    "Kernel",
    "MercerKernel",
    "NegativeDefiniteKernel",
    "ExponentialKernel",
    "LaplacianKernel",
    "SquaredExponentialKernel",
    "GaussianKernel",
    "RadialBasisKernel",
    "GammaExponentialKernel",
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
    "KernelSum",
    "KernelProduct",
    "KernelAffinity",
    # Kernel matrices
    "kernel",
    "kernel_matrix",
    "kernel_matrix_inplace",
    "center_kernel_matrix",
    "center_kernel_matrix_inplace",
    # Nyström
    "NystromFactorization",
    "nystrom",
    "sample_indices",
    # Errors
    "ArgumentError",
    "DimensionMismatch",
    "NystromDegenerateError",
]
