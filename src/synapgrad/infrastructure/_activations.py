"""
Module-based activation layers.

This module provides infrastructure-level `Module` wrappers around the
function-style ops in `._function`, so activations can be stacked into
containers such as `Sequential` alongside trainable layers.
"""

from ._function import relu
from ._module import Module
from .tensor._tensor import Tensor


class ReLU(Module):
    """
    ReLU activation module.

    This layer applies the rectified linear unit elementwise:

        relu(x) = max(0, x)

    Notes
    -----
    Stateless: it owns no parameters. If `x.requires_grad` is True, the
    returned tensor carries a `ReLUFn` graph node.
    """

    def forward(self, x: Tensor) -> Tensor:
        return relu(x)

    def __repr__(self) -> str:
        return "ReLU()"
