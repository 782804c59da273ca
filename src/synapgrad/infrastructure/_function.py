"""
Differentiable primitive operations.

This module contains the infrastructure-level implementations of the core
differentiable ops, expressed in a function-style autograd API:

- Each op kind is a `Function` subclass with `forward(ctx, ...)` and
  `backward(ctx, grad_out)` static methods.
- A `Context` instance stores the parents, the op kind and anything saved
  for the backward computation (`save_for_backward`, `saved_meta`).
- Public functional wrappers (`add`, `sub`, `mul`, `relu`, `sum`, `mean`,
  `matmul`) are responsible for:
  - validating inputs before anything is allocated,
  - constructing the `Context`,
  - invoking `forward`,
  - attaching the context to the output when gradients are required.

Notes
-----
- Computations are vectorised NumPy over the tensors' shaped views.
- No broadcasting: elementwise ops require identical shapes.
- `backward` returns plain arrays; the engine adds them into the parents'
  gradient accumulators, so every rule here is purely additive.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple, Type

import numpy as np

from ..domain._function import Function
from ..domain._errors import (
    DimensionMismatchError,
    RankMismatchError,
    ShapeMismatchError,
)
from .tensor._tensor import Tensor
from .tensor._tensor_context import Context


def _check_tensor(op: str, *xs: Any) -> None:
    for x in xs:
        if not isinstance(x, Tensor):
            raise TypeError(f"{op} expects Tensor operands, got {type(x)!r}")


def _binary_op_shape_check(op: str, a: Tensor, b: Tensor) -> None:
    """
    Validate shape compatibility for binary elementwise operations.

    Raises
    ------
    ShapeMismatchError
        If shapes do not match exactly.
    """
    if a.shape != b.shape:
        raise ShapeMismatchError(op, a.shape, b.shape)


def apply_function(fn: Type[Function], *inputs: Tensor, **kwargs: Any) -> Tensor:
    """
    Run `fn.forward` and record a graph node on the output when needed.

    Parameters
    ----------
    fn : type[Function]
        Op kind to apply.
    *inputs : Tensor
        Already-validated operands; they become the node's parents.
    **kwargs
        Extra non-tensor arguments forwarded to `fn.forward`.

    Returns
    -------
    Tensor
        Output tensor. It requires grad (and carries a `Context`) only if at
        least one input requires grad.
    """
    ctx = Context(parents=inputs, fn=fn)
    out = fn.forward(ctx, *inputs, **kwargs)

    if Tensor._result_requires_grad(*inputs):
        out.requires_grad = True
        out._set_ctx(ctx)

    return out


# ---------------------------------------------------------------------------
# Elementwise binary ops
# ---------------------------------------------------------------------------
class AddFn(Function):
    """
    Elementwise addition.

    Backward:

        d(a + b)/da = 1,  d(a + b)/db = 1
    """

    @staticmethod
    def forward(ctx: Context, a: Tensor, b: Tensor) -> Tensor:
        return Tensor.from_numpy(a._array() + b._array())

    @staticmethod
    def backward(ctx: Context, grad_out: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        return grad_out, grad_out


class SubFn(Function):
    """
    Elementwise subtraction.

    Backward:

        d(a - b)/da = 1,  d(a - b)/db = -1
    """

    @staticmethod
    def forward(ctx: Context, a: Tensor, b: Tensor) -> Tensor:
        return Tensor.from_numpy(a._array() - b._array())

    @staticmethod
    def backward(ctx: Context, grad_out: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        return grad_out, -grad_out


class MulFn(Function):
    """
    Elementwise multiplication.

    Backward:

        d(a * b)/da = b,  d(a * b)/db = a

    Notes
    -----
    Operands are not snapshotted: the rule reads each operand's data as it is
    when the sweep runs. Mutating an operand between forward and backward
    therefore corrupts the gradient.
    """

    @staticmethod
    def forward(ctx: Context, a: Tensor, b: Tensor) -> Tensor:
        return Tensor.from_numpy(a._array() * b._array())

    @staticmethod
    def backward(
        ctx: Context, grad_out: np.ndarray
    ) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
        a, b = ctx.parents
        grad_a = grad_out * b._array() if a.requires_grad else None
        grad_b = grad_out * a._array() if b.requires_grad else None
        return grad_a, grad_b


def add(a: Tensor, b: Tensor) -> Tensor:
    """
    Elementwise `a + b` for tensors of identical shape.

    Raises
    ------
    TypeError
        If an operand is not a `Tensor`.
    ShapeMismatchError
        If the shapes differ.
    """
    _check_tensor("add", a, b)
    _binary_op_shape_check("add", a, b)
    return apply_function(AddFn, a, b)


def sub(a: Tensor, b: Tensor) -> Tensor:
    """
    Elementwise `a - b` for tensors of identical shape.

    Raises
    ------
    TypeError
        If an operand is not a `Tensor`.
    ShapeMismatchError
        If the shapes differ.
    """
    _check_tensor("sub", a, b)
    _binary_op_shape_check("sub", a, b)
    return apply_function(SubFn, a, b)


def mul(a: Tensor, b: Tensor) -> Tensor:
    """
    Elementwise `a * b` for tensors of identical shape.

    Raises
    ------
    TypeError
        If an operand is not a `Tensor`.
    ShapeMismatchError
        If the shapes differ.
    """
    _check_tensor("mul", a, b)
    _binary_op_shape_check("mul", a, b)
    return apply_function(MulFn, a, b)


# ---------------------------------------------------------------------------
# Rectification
# ---------------------------------------------------------------------------
class ReLUFn(Function):
    """
    ReLU activation function.

    Implements:

        relu(x) = max(0, x)

    Backward:

        d(relu)/dx = 1 if x > 0 else 0

    Notes
    -----
    The mask `x > 0` is computed in the forward pass and kept in
    `ctx.saved_meta`. The sub-gradient at exactly zero is 0.
    """

    @staticmethod
    def forward(ctx: Context, x: Tensor) -> Tensor:
        xa = x._array()
        mask = xa > 0
        ctx.saved_meta["mask"] = mask
        return Tensor.from_numpy(np.where(mask, xa, 0.0))

    @staticmethod
    def backward(ctx: Context, grad_out: np.ndarray) -> Tuple[np.ndarray]:
        mask = ctx.saved_meta["mask"]
        return (np.where(mask, grad_out, 0.0),)


def relu(x: Tensor) -> Tensor:
    """
    Elementwise `max(0, x)`.
    """
    _check_tensor("relu", x)
    return apply_function(ReLUFn, x)


# ---------------------------------------------------------------------------
# Reductions
# ---------------------------------------------------------------------------
class SumFn(Function):
    """
    Full sum reduction.

    Implements:

        out = sum_i x[i]          (shape (1,))

    Backward:

        dx[i] += grad_out[0]      for every i
    """

    @staticmethod
    def forward(ctx: Context, x: Tensor) -> Tensor:
        ctx.saved_meta["shape"] = x.shape
        return Tensor.from_scalar(float(np.sum(x.data)))

    @staticmethod
    def backward(ctx: Context, grad_out: np.ndarray) -> Tuple[np.ndarray]:
        g = float(np.asarray(grad_out).reshape(-1)[0])
        return (np.full(ctx.saved_meta["shape"], g),)


class MeanFn(SumFn):
    """
    Mean reduction, expressed as a named composition over `SumFn`.

    Forward runs `SumFn.forward` and scales the result by `1 / size`.
    Backward pre-scales the upstream value by the same factor and delegates
    to `SumFn.backward`. The pair behaves as a single node in the graph.
    """

    @staticmethod
    def forward(ctx: Context, x: Tensor) -> Tensor:
        out = SumFn.forward(ctx, x)
        scale = 1.0 / x.size
        ctx.saved_meta["scale"] = scale
        out.data[0] *= scale
        return out

    @staticmethod
    def backward(ctx: Context, grad_out: np.ndarray) -> Tuple[np.ndarray]:
        return SumFn.backward(ctx, np.asarray(grad_out) * ctx.saved_meta["scale"])


def sum(x: Tensor) -> Tensor:  # noqa: A001 - mirrors Tensor.sum
    """
    Sum all elements of `x` into a tensor of shape `(1,)`.
    """
    _check_tensor("sum", x)
    return apply_function(SumFn, x)


def mean(x: Tensor) -> Tensor:
    """
    Average all elements of `x` into a tensor of shape `(1,)`.
    """
    _check_tensor("mean", x)
    return apply_function(MeanFn, x)


# ---------------------------------------------------------------------------
# Matrix product
# ---------------------------------------------------------------------------
class MatMulFn(Function):
    """
    Dense 2-D matrix product: out = A @ B.

    Backward
    --------
    If out = A @ B and `up` is the upstream gradient of shape [m, n]:
    - dL/dA = up @ B^T     (shape [m, k])
    - dL/dB = A^T @ up     (shape [k, n])
    """

    @staticmethod
    def forward(ctx: Context, a: Tensor, b: Tensor) -> Tensor:
        return Tensor.from_numpy(a._array() @ b._array())

    @staticmethod
    def backward(
        ctx: Context, grad_out: np.ndarray
    ) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
        a, b = ctx.parents
        grad_a = grad_out @ b._array().T if a.requires_grad else None
        grad_b = a._array().T @ grad_out if b.requires_grad else None
        return grad_a, grad_b


def matmul(a: Tensor, b: Tensor) -> Tensor:
    """
    Matrix multiplication (2D): `[m, k] @ [k, n] -> [m, n]`.

    Raises
    ------
    TypeError
        If an operand is not a `Tensor`.
    RankMismatchError
        If either operand is not rank 2.
    DimensionMismatchError
        If the inner dimensions differ.
    """
    _check_tensor("matmul", a, b)
    for t in (a, b):
        if t.ndim != 2:
            raise RankMismatchError("matmul", t.shape, 2)

    k1 = a.shape[1]
    k2 = b.shape[0]
    if k1 != k2:
        raise DimensionMismatchError("matmul", k1, k2)

    return apply_function(MatMulFn, a, b)
