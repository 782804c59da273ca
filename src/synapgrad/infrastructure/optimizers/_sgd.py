"""
Stochastic Gradient Descent (SGD) optimizer implementation.

This module provides a minimal SGD optimizer for SynapGrad. The optimizer
updates `Parameter` instances in-place using their accumulated gradients and
a fixed learning rate.

Design notes
------------
- Optimizers operate on parameters and read gradients from `p.grad`.
- Frozen parameters (`requires_grad=False`) are skipped.
- Updates are applied in-place on `p.data`, keeping the optimizer
  independent from graph construction and autograd internals.
- Momentum, weight decay and other SGD variants are intentionally omitted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .._parameter import Parameter


@dataclass
class SGD:
    """
    Stochastic Gradient Descent (SGD) optimizer.

    Update rule
    -----------
    For each parameter ``p`` with gradient ``g`` and every index ``i``:

        ``p.data[i] -= lr * g[i]``

    Parameters
    ----------
    params : Sequence[Parameter]
        Parameters to be optimized.
    lr : float, optional
        Learning rate. Must be positive. Defaults to 1e-3.
    """

    params: Sequence[Parameter]
    lr: float = 1e-3

    def __init__(self, params: Iterable[Parameter], *, lr: float = 1e-3) -> None:
        """
        Construct an SGD optimizer.

        Parameters
        ----------
        params : Iterable[Parameter]
            Iterable of parameters to optimize. The iterable is consumed and
            stored internally, so generators (e.g. `model.parameters()`) are
            fine.
        lr : float, optional
            Learning rate. Must be > 0. Defaults to 1e-3.

        Raises
        ------
        ValueError
            If ``lr <= 0``.
        """
        self.params = list(params)
        self.lr = float(lr)

        if self.lr <= 0.0:
            raise ValueError(f"lr must be > 0, got {self.lr}")

    def zero_grad(self) -> None:
        """
        Reset gradients for all managed parameters to zeros.

        Notes
        -----
        Training loops call `zero_grad()` before each backward sweep, since
        gradients accumulate.
        """
        for p in self.params:
            p.zero_grad()

    def step(self) -> None:
        """
        Apply one SGD update step to all managed parameters, in-place.
        """
        for p in self.params:
            if not p.requires_grad:
                continue
            p.data[:] -= self.lr * p.grad
