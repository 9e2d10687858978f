"""Utility functions for mlkernels."""

from .distance import (
    BaseFunctionKind,
    BaseFunction,
    SquaredEuclidean,
    WeightedSquaredEuclidean,
    ScalarProduct,
    SineSquared,
)
from .backend import (
    is_gpu_available,
    to_numpy,
    eigh,
    CUPY_AVAILABLE,
)

__all__ = [
    # Base functions
    "BaseFunctionKind",
    "BaseFunction",
    "SquaredEuclidean",
    "WeightedSquaredEuclidean",
    "ScalarProduct",
    "SineSquared",
    # GPU backend
    "is_gpu_available",
    "to_numpy",
    "eigh",
    "CUPY_AVAILABLE",
]
