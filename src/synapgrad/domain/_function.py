"""
Autograd function interface definitions.

This module defines the abstract base class for differentiable operations
used in the automatic differentiation system. Concrete subclasses of
`Function` implement both the forward computation and the rule that
distributes an upstream gradient to the operation's inputs.

Each op kind is one `Function` subclass. The backward engine never calls a
per-node closure: it looks up the `Function` recorded on a node's context and
dispatches to its `backward` static method, which keeps every gradient rule
inspectable and testable in isolation.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from ._tensor import ITensor


class Function(ABC):
    """
    Abstract base class for differentiable operations.

    A `Function` represents one kind of node in the computation graph and
    encapsulates both:
    - the forward computation
    - the backward (gradient-distribution) rule

    Subclasses must implement both `forward` and `backward` as static methods.
    Any intermediate values required for gradient computation should be stored
    on the provided `ctx` object during the forward pass.

    Notes
    -----
    - Methods are declared as `@staticmethod` to avoid implicit state on the
      function object itself.
    - The `ctx` argument acts as a per-invocation context, allowing safe reuse
      of `Function` classes across multiple computation graphs.
    """

    @staticmethod
    @abstractmethod
    def forward(ctx, *inputs: Any) -> ITensor:
        """
        Perform the forward computation.

        Parameters
        ----------
        ctx : Context
            A mutable context object used to store intermediate values
            required for gradient computation.
        *inputs : Tensor
            Input tensor(s) to the operation. Inputs have already been
            validated by the functional wrapper.

        Returns
        -------
        Tensor
            The output tensor resulting from the forward computation.
        """
        ...

    @staticmethod
    @abstractmethod
    def backward(ctx, grad_out: Any) -> Sequence[Optional[Any]]:
        """
        Compute gradient contributions for each parent.

        Parameters
        ----------
        ctx : Context
            The context object populated during the forward pass.
        grad_out : numpy.ndarray
            Gradient of the loss with respect to the output, shaped like the
            output.

        Returns
        -------
        tuple[numpy.ndarray | None, ...]
            One contribution per entry of `ctx.parents`, shaped like that
            parent. Entries may be None for parents that do not require
            gradients. The engine adds contributions into the parents' `grad`
            accumulators; rules never write into gradients themselves.
        """
        ...
