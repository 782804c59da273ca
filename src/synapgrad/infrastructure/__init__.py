"""
Infrastructure layer: NumPy-backed tensors, ops, layers and training.
"""

from ._activations import ReLU
from ._function import add, matmul, mean, mul, relu, sub, sum
from ._linear import Linear, linear
from ._losses import MSELoss, mse_loss
from ._module import Module
from ._parameter import Parameter
from .models import History, Model, Sequential, make_linear_regression_data
from .optimizers import SGD
from .serving import PredictionService
from .tensor import Context, Tensor

__all__ = [
    Context.__name__,
    History.__name__,
    Linear.__name__,
    MSELoss.__name__,
    Model.__name__,
    Module.__name__,
    Parameter.__name__,
    PredictionService.__name__,
    ReLU.__name__,
    SGD.__name__,
    Sequential.__name__,
    Tensor.__name__,
    add.__name__,
    linear.__name__,
    make_linear_regression_data.__name__,
    matmul.__name__,
    mean.__name__,
    mse_loss.__name__,
    mul.__name__,
    relu.__name__,
    sub.__name__,
    sum.__name__,
]
