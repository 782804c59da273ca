"""
Loss functions for SynapGrad.

Losses are composed from the differentiable primitives in `._function`
rather than carrying their own gradient rule: the graph built for
`mean((pred - target) * (pred - target))` already yields the MSE gradient.

These losses return tensors of shape `(1,)` and are intended to be used as
the final operation before invoking backpropagation.
"""

from ..domain._errors import ShapeMismatchError
from ._function import mean, mul, sub
from .tensor._tensor import Tensor


def mse_loss(pred: Tensor, target: Tensor) -> Tensor:
    """
    Mean Squared Error over all elements.

    Computes the scalar loss:

        MSE(pred, target) = mean((pred - target)^2)

    Parameters
    ----------
    pred : Tensor
        Predicted values.
    target : Tensor
        Ground-truth values; usually a constant (`requires_grad=False`).

    Returns
    -------
    Tensor
        Tensor of shape (1,) holding the loss.

    Raises
    ------
    ShapeMismatchError
        If `pred` and `target` shapes differ.
    """
    if pred.shape != target.shape:
        raise ShapeMismatchError("mse_loss", pred.shape, target.shape)
    diff = sub(pred, target)
    return mean(mul(diff, diff))


class MSELoss:
    """
    Callable wrapper around `mse_loss`, usable wherever a
    `loss(y_pred, y_true)` callable is expected (e.g. `Model.fit`).
    """

    def __call__(self, pred: Tensor, target: Tensor) -> Tensor:
        return mse_loss(pred, target)

    def __repr__(self) -> str:
        return "MSELoss()"
