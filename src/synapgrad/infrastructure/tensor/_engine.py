"""
Reverse-mode autodiff engine.

The computation graph is implicit: every tensor produced by a differentiable
op (with at least one operand requiring gradients) carries a `Context` whose
`parents` are the op's operands. A backward sweep from a scalar root:

1. checks that the root holds exactly one element,
2. seeds the root's gradient with 1.0,
3. orders every tensor reachable from the root so that each one appears
   after all of its parents (post-order DFS with a visited set keyed by
   tensor identity, so shared tensors are listed once),
4. walks that order in reverse, so every consumer of a tensor has pushed its
   contribution into the tensor's `grad` before the tensor's own rule runs,
5. releases every swept context; graphs are single-use.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING

import numpy as np

from ...domain._errors import GraphReleasedError, NotScalarError

if TYPE_CHECKING:
    from ._tensor import Tensor


def topological_order(root: "Tensor") -> list["Tensor"]:
    """
    Return every tensor reachable from `root`, parents before children.

    Parameters
    ----------
    root : Tensor
        Tensor to start the traversal from.

    Returns
    -------
    list[Tensor]
        Post-order of the graph rooted at `root`; `root` is last. Each
        distinct tensor appears exactly once, regardless of fan-out.

    Notes
    -----
    The traversal is iterative, so long op chains do not hit Python's
    recursion limit.
    """
    order: list["Tensor"] = []
    visited: set[int] = set()
    stack: list[tuple["Tensor", bool]] = [(root, False)]

    while stack:
        node, expanded = stack.pop()
        if expanded:
            order.append(node)
            continue
        if id(node) in visited:
            continue
        visited.add(id(node))

        stack.append((node, True))
        # reversed so parents are emitted in operand order
        for parent in reversed(node.parents):
            if id(parent) not in visited:
                stack.append((parent, False))

    return order


def run_backward(root: "Tensor") -> None:
    """
    Run one backward sweep from a scalar root.

    Parameters
    ----------
    root : Tensor
        Scalar (size == 1) tensor to differentiate.

    Raises
    ------
    NotScalarError
        If `root` holds more than one element.
    GraphReleasedError
        If any node reachable from `root` was already swept.
    RuntimeError
        If a gradient rule returns the wrong number of contributions or a
        contribution whose shape differs from its parent's.

    Notes
    -----
    - Contributions are added into parents' `grad` (never assigned), and only
      into parents with `requires_grad=True`.
    - Multiply-style rules read operand data at sweep time; operands must not
      be mutated between the forward pass and the sweep.
    """
    if root.size != 1:
        raise NotScalarError(root.shape)

    order = topological_order(root)
    for node in order:
        ctx = node._get_ctx()
        if ctx is not None and ctx.released:
            raise GraphReleasedError()

    if not root.requires_grad:
        warnings.warn(
            "backward() called on a tensor that does not require grad; "
            "no gradients will be propagated.",
            RuntimeWarning,
            stacklevel=3,
        )

    # Seed
    root.grad.fill(0.0)
    root.grad[0] = 1.0

    for node in reversed(order):
        ctx = node._get_ctx()
        if ctx is None:
            continue

        parent_grads = ctx.apply_backward(node._grad_array())
        if len(parent_grads) != len(ctx.parents):
            raise RuntimeError(
                f"{ctx.fn.__name__}.backward must return one grad per parent. "
                f"Got {len(parent_grads)} grads for {len(ctx.parents)} parents."
            )

        for parent, g in zip(ctx.parents, parent_grads):
            if g is None or not parent.requires_grad:
                continue
            g = np.asarray(g)
            if g.shape != parent.shape:
                raise RuntimeError(
                    f"{ctx.fn.__name__}: gradient shape mismatch for parent, "
                    f"expected {parent.shape}, got {g.shape}"
                )
            parent._accumulate_grad_(g)

        ctx.released = True
