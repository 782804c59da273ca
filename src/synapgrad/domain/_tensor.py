"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. The interface captures the minimal, backend-agnostic
properties required for tensors to participate in computation graphs,
modules, and optimization workflows.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, Union, runtime_checkable

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` is a fixed-shape numeric buffer that participates in
    numerical computation and, optionally, automatic differentiation.

    Notes
    -----
    - Storage is flat and row-major; `data` and `grad` always have exactly
      `size` elements.
    - `grad` is an additive accumulator. It is never `None`; `zero_grad()`
      resets it to zeros.
    """

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the tensor.

        Returns
        -------
        tuple[int, ...]
            The tensor's shape.
        """
        ...

    @property
    def size(self) -> int:
        """
        Return the number of elements (product of `shape`).

        Returns
        -------
        int
            Element count.
        """
        ...

    @property
    def data(self) -> Any:
        """
        Return the flat backing storage of the tensor.

        Returns
        -------
        Any
            Backend-native flat array (a NumPy ndarray in the current backend).
        """
        ...

    @property
    def requires_grad(self) -> bool:
        """
        Indicate whether this tensor should accumulate gradients.

        Returns
        -------
        bool
            True if gradients should be tracked/accumulated, False otherwise.
        """
        ...

    @requires_grad.setter
    def requires_grad(self, value: bool) -> None:
        """
        Enable or disable gradient tracking for this tensor.

        Parameters
        ----------
        value : bool
            If True, differentiable operations consuming this tensor record a
            graph node on their output.
        """
        ...

    @property
    def grad(self) -> Any:
        """
        Return the flat gradient accumulator of this tensor.

        Returns
        -------
        Any
            Backend-native flat array, same length as `data`.
        """
        ...

    @property
    def parents(self) -> Sequence["ITensor"]:
        """
        Return the tensors this tensor was derived from.

        Returns
        -------
        Sequence[ITensor]
            Ordered parents; empty for leaves and for outputs that do not
            require gradients.
        """
        ...

    def zero_grad(self) -> None:
        """
        Reset the gradient accumulator to zeros (data is untouched).
        """
        ...

    def backward(self) -> None:
        """
        Backpropagate from this (scalar) tensor through the recorded graph.

        Raises
        ------
        NotScalarError
            If the tensor has more than one element.
        """
        ...

    def to_numpy(self) -> Any:
        """
        Return a shaped copy of the tensor data as a backend-native array.

        Returns
        -------
        Any
            Array of shape `self.shape`.
        """
        ...
