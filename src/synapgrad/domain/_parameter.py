"""
Trainable parameter interface definitions.

This module defines the domain-level interface for trainable parameters used
by optimization algorithms. A parameter is a leaf tensor whose gradient is
zeroed before each backward sweep and consumed by the update rule after it.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IParameter(Protocol):
    """
    Domain-level interface for trainable parameters.

    Notes
    -----
    - Parameters may be frozen or unfrozen via the `requires_grad` flag.
    - Optimizers rely on this interface to discover and update parameters.
    """

    @property
    def requires_grad(self) -> bool:
        """
        Indicate whether this parameter should accumulate gradients.

        Returns
        -------
        bool
            True if gradients should be accumulated for this parameter,
            False if the parameter is frozen.
        """
        ...

    @requires_grad.setter
    def requires_grad(self, value: bool) -> None:
        """
        Enable or disable gradient accumulation for this parameter.

        Parameters
        ----------
        value : bool
            If True, gradients will be accumulated during backpropagation.
        """
        ...

    @property
    def data(self) -> Any:
        """Flat, mutable parameter storage updated in-place by optimizers."""
        ...

    @property
    def grad(self) -> Any:
        """Flat gradient accumulator, same length as `data`."""
        ...

    def zero_grad(self) -> None:
        """
        Reset the gradient accumulator of this parameter to zeros.
        """
        ...
