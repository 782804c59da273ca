"""
SynapGrad: a small reverse-mode automatic differentiation engine with just
enough layers, losses and optimizers to train a feed-forward network.
"""

from .domain import (
    ConstructionLengthError,
    DimensionMismatchError,
    FeatureDimensionError,
    GraphReleasedError,
    InvalidApiKeyError,
    NotScalarError,
    RankMismatchError,
    ShapeMismatchError,
)
from .infrastructure import (
    SGD,
    History,
    Linear,
    MSELoss,
    Model,
    Module,
    Parameter,
    PredictionService,
    ReLU,
    Sequential,
    Tensor,
    make_linear_regression_data,
    mse_loss,
)

__version__ = "0.1.0"
