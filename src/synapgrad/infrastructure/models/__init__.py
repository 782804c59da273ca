from ._datasets import make_linear_regression_data
from ._history import History
from ._models import Model
from ._sequential import Sequential

__all__ = [
    History.__name__,
    Model.__name__,
    Sequential.__name__,
    make_linear_regression_data.__name__,
]
