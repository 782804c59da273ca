"""
Domain layer: backend-agnostic contracts and errors.
"""

from ._errors import (
    ConstructionLengthError,
    DimensionMismatchError,
    FeatureDimensionError,
    GraphReleasedError,
    InvalidApiKeyError,
    NotScalarError,
    RankMismatchError,
    ShapeMismatchError,
)
from ._function import Function
from ._module import IModule
from ._optimizers import IOptimizer
from ._parameter import IParameter
from ._tensor import ITensor

__all__ = [
    ConstructionLengthError.__name__,
    DimensionMismatchError.__name__,
    FeatureDimensionError.__name__,
    GraphReleasedError.__name__,
    InvalidApiKeyError.__name__,
    NotScalarError.__name__,
    RankMismatchError.__name__,
    ShapeMismatchError.__name__,
    Function.__name__,
    IModule.__name__,
    IOptimizer.__name__,
    IParameter.__name__,
    ITensor.__name__,
]
