"""
Affine transform op and Linear (fully-connected) layer.

This module provides the fused affine op `linear(x, weight, bias)` and the
trainable `Linear` module built on it:

    y = x @ W^T + b

Shape conventions
-----------------
- x : (batch, in_features)
- W : (out_features, in_features)
- b : (1, out_features)
- y : (batch, out_features)

Autograd integration
--------------------
`LinearFn` carries its own gradient rule instead of being assembled from
`matmul` and an add; bias addition would otherwise need broadcasting, which
the framework does not implement. The net gradients are exactly those of the
composition:

- dL/dx = up @ W
- dL/dW = up^T @ x
- dL/db = sum(up, axis=0)

Parents are ordered (x, weight, bias).
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from ..domain._function import Function
from ..domain._errors import (
    DimensionMismatchError,
    RankMismatchError,
    ShapeMismatchError,
)
from ._function import _check_tensor, apply_function
from ._module import Module
from ._parameter import Parameter
from .tensor._tensor import Tensor
from .tensor._tensor_context import Context


class LinearFn(Function):
    """
    Fused affine transform `y = x @ W^T + b`.

    Notes
    -----
    Each parent that does not require gradients gets `None`, so frozen
    weights or constant inputs cost nothing in the backward pass.
    """

    @staticmethod
    def forward(ctx: Context, x: Tensor, weight: Tensor, bias: Tensor) -> Tensor:
        """
        Compute the affine transform.

        Parameters
        ----------
        ctx : Context
            Autograd context (nothing extra is saved; the rule reads the
            parents' data at sweep time).
        x : Tensor
            Input of shape (batch, in_features).
        weight : Tensor
            Weight of shape (out_features, in_features).
        bias : Tensor
            Bias of shape (1, out_features).

        Returns
        -------
        Tensor
            Output of shape (batch, out_features).
        """
        return Tensor.from_numpy(x._array() @ weight._array().T + bias._array())

    @staticmethod
    def backward(
        ctx: Context, grad_out: np.ndarray
    ) -> Tuple[Optional[np.ndarray], Optional[np.ndarray], Optional[np.ndarray]]:
        """
        Distribute the upstream gradient to input, weight and bias.

        Parameters
        ----------
        ctx : Context
            Context populated during the forward pass.
        grad_out : numpy.ndarray
            Upstream gradient of shape (batch, out_features).

        Returns
        -------
        tuple
            `(dx, dW, db)` shaped like `(x, weight, bias)`, or None entries
            for parents that do not require gradients.
        """
        x, weight, bias = ctx.parents
        grad_x = grad_out @ weight._array() if x.requires_grad else None
        grad_w = grad_out.T @ x._array() if weight.requires_grad else None
        grad_b = grad_out.sum(axis=0, keepdims=True) if bias.requires_grad else None
        return grad_x, grad_w, grad_b


def linear(x: Tensor, weight: Tensor, bias: Tensor) -> Tensor:
    """
    Apply the fused affine transform `x @ weight^T + bias`.

    Parameters
    ----------
    x : Tensor
        Input of shape (batch, in_features).
    weight : Tensor
        Weight of shape (out_features, in_features).
    bias : Tensor
        Bias of shape (1, out_features).

    Returns
    -------
    Tensor
        Output of shape (batch, out_features).

    Raises
    ------
    TypeError
        If an operand is not a `Tensor`.
    RankMismatchError
        If `x` or `weight` is not rank 2.
    DimensionMismatchError
        If `x.shape[1] != weight.shape[1]`.
    ShapeMismatchError
        If `bias.shape != (1, out_features)`.
    """
    _check_tensor("linear", x, weight, bias)
    if x.ndim != 2:
        raise RankMismatchError("linear", x.shape, 2)
    if weight.ndim != 2:
        raise RankMismatchError("linear", weight.shape, 2)

    out_features, in_features = weight.shape
    if x.shape[1] != in_features:
        raise DimensionMismatchError("linear", in_features, x.shape[1])
    if bias.shape != (1, out_features):
        raise ShapeMismatchError("linear", (1, out_features), bias.shape)

    return apply_function(LinearFn, x, weight, bias)


class Linear(Module):
    """
    Fully-connected (dense) layer performing an affine transform: y = x @ W^T + b.

    Parameters
    ----------
    in_features : int
        Number of input features per example.
    out_features : int
        Number of output features per example.
    rng : numpy.random.Generator, optional
        Generator used for weight initialization. Pass a seeded generator for
        reproducible models.

    Attributes
    ----------
    weight : Parameter
        Trainable weight matrix of shape (out_features, in_features).
    bias : Parameter
        Trainable bias of shape (1, out_features).

    Raises
    ------
    ValueError
        If `in_features` or `out_features` is not a positive integer.

    Notes
    -----
    - Weights use He (Kaiming) normal initialization, `N(0, 2 / in_features)`,
      which suits the ReLU networks this layer is usually stacked into.
    - Bias is initialized to zeros.
    """

    def __init__(
        self,
        in_features: int,
        out_features: int,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__()
        if in_features <= 0 or out_features <= 0:
            raise ValueError("in_features and out_features must be positive integers")

        self.in_features = int(in_features)
        self.out_features = int(out_features)

        self.weight = Parameter((self.out_features, self.in_features))
        self.bias = Parameter((1, self.out_features))

        self._reset_parameters(rng)

    def _reset_parameters(self, rng: Optional[np.random.Generator] = None) -> None:
        rng = rng if rng is not None else np.random.default_rng()
        std = np.sqrt(2.0 / self.in_features)
        self.weight.data[:] = rng.standard_normal(self.weight.size) * std
        self.bias.data[:] = 0.0

    def forward(self, x: Tensor) -> Tensor:
        """
        Apply the affine transform to a 2D input tensor.

        Parameters
        ----------
        x : Tensor
            Input tensor of shape (batch, in_features).

        Returns
        -------
        Tensor
            Output tensor of shape (batch, out_features).

        Raises
        ------
        RankMismatchError
            If `x` is not 2D.
        DimensionMismatchError
            If the second dimension of `x` does not match `in_features`.
        """
        return linear(x, self.weight, self.bias)

    def __repr__(self) -> str:
        return f"Linear(in_features={self.in_features}, out_features={self.out_features})"
