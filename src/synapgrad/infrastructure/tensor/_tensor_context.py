from typing import Any, Optional, Sequence, Type
from dataclasses import dataclass, field

from ...domain._function import Function
from ...domain._tensor import ITensor


@dataclass
class Context:
    """
    Backward context attached to a Tensor produced by an operation.

    A `Context` is the graph node record of an op output: it holds the edges
    to the op's inputs and names the `Function` whose `backward` distributes
    the output's gradient to them.

    Attributes
    ----------
    parents : Sequence[Tensor]
        The input tensors (and/or parameters) used to compute the output tensor,
        in operand order. Gradients are produced for these parents during the
        backward pass.
    fn : type[Function]
        The op kind. The engine calls `fn.backward(ctx, grad_out)`, which must
        return one contribution per `parents` entry, in the same order.
    saved_tensors : list[ITensor]
        Tensors explicitly saved during the forward pass for use in backward.
    saved_meta : dict[str, Any]
        Non-tensor values required for backward (e.g., masks, scale factors).
    released : bool
        Set by the engine once this node's rule has run. A released node may
        not be swept again.
    """

    parents: Sequence["ITensor"]
    fn: Type[Function]
    saved_tensors: list["ITensor"] = field(default_factory=list)
    saved_meta: dict[str, Any] = field(default_factory=dict)
    released: bool = False

    def save_for_backward(self, *tensors: "ITensor") -> None:
        """
        Save tensors for use during the backward computation.

        Parameters
        ----------
        *tensors : Tensor
            Any number of tensors to be stored in `saved_tensors`.
        """
        self.saved_tensors.extend(tensors)

    def apply_backward(self, grad_out: Any) -> Sequence[Optional[Any]]:
        """
        Run this node's gradient rule on an upstream gradient.

        Parameters
        ----------
        grad_out : numpy.ndarray
            Gradient with respect to the node's output, shaped like it.

        Returns
        -------
        Sequence[Optional[numpy.ndarray]]
            One contribution per parent (or None).
        """
        return self.fn.backward(self, grad_out)
