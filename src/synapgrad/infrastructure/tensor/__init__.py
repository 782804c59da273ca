from ._tensor_context import Context
from ._tensor import Tensor
from ._engine import run_backward, topological_order

__all__ = [
    Context.__name__,
    Tensor.__name__,
    run_backward.__name__,
    topological_order.__name__,
]
