"""
Concrete trainable parameter implementation.

This module defines `Parameter`, an infrastructure-level implementation of the
domain contract `IParameter`. A `Parameter` is a leaf `Tensor` intended to be
optimized by training algorithms (e.g., SGD).

Design notes
------------
- `Parameter` subclasses `Tensor` to reuse storage, shape behavior and every
  tensor operation.
- Parameters default to `requires_grad=True`; the gradient buffer is the
  tensor's own accumulator, populated by the autograd engine.
- The `requires_grad` flag enables freezing/unfreezing parameters without
  changing module structure.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

from ..domain._parameter import IParameter
from .tensor._tensor import Tensor


class Parameter(Tensor, IParameter):
    """
    Trainable tensor.

    Parameters
    ----------
    shape : int | tuple[int, ...]
        Parameter shape.
    data : array-like, optional
        Initial values (row-major, exactly `prod(shape)` elements). Zeros when
        omitted.
    requires_grad : bool, optional
        Whether this parameter should accumulate gradients. Defaults to True.

    Notes
    -----
    `Parameter` exists to make trainable state explicit and to serve as the
    object type collected by `Module.parameters()`.
    """

    def __init__(
        self,
        shape: Union[int, Sequence[int]],
        data: Any = None,
        *,
        requires_grad: bool = True,
    ) -> None:
        super().__init__(shape, data, requires_grad=requires_grad)

    def __repr__(self) -> str:
        return f"Parameter(shape={self.shape}, requires_grad={self.requires_grad})"
