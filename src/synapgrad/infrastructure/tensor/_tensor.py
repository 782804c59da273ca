"""
Concrete Tensor implementation (NumPy backend).

This module provides a concrete `Tensor` implementation that satisfies the
domain-level `ITensor` protocol. A tensor is a fixed-shape numeric buffer:

- `data` : flat, row-major float64 storage of length `size`
- `grad` : an independent flat float64 accumulator of the same length,
  zero-initialised and only ever added into by the autograd engine

Design notes
------------
- Automatic differentiation is expressed by attaching an optional `Context`
  to output tensors. The engine in `._engine` traverses `Context.parents`
  links backward to propagate gradients.
- Broadcasting is intentionally not implemented; binary ops require exact
  shape matches.
- Operator overloads (`+`, `-`, `*`, `@`) and the `relu`/`sum`/`mean`
  methods are thin sugar over the functional API in `.._function`; those
  imports are local to avoid an import cycle.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Union

import numpy as np

from ...domain._tensor import ITensor
from ...domain._errors import ConstructionLengthError
from ._tensor_context import Context

Number = Union[int, float]

DTYPE = np.float64


def _normalize_shape(shape: Union[int, Iterable[int]]) -> tuple[int, ...]:
    """
    Convert a shape-like value into a tuple of positive Python ints.

    Parameters
    ----------
    shape : int | Iterable[int]
        A single dimension or a sequence of dimensions.

    Returns
    -------
    tuple[int, ...]
        Normalised shape.

    Raises
    ------
    ValueError
        If the shape is empty or any dimension is not a positive integer.
    """
    if isinstance(shape, (int, np.integer)) and not isinstance(shape, bool):
        dims = (shape,)
    else:
        dims = tuple(shape)

    if len(dims) == 0:
        raise ValueError("shape must have at least one dimension")

    out = []
    for d in dims:
        if isinstance(d, bool) or not isinstance(d, (int, np.integer)):
            raise ValueError(f"shape entries must be integers, got {dims!r}")
        if d <= 0:
            raise ValueError(f"shape entries must be positive, got {dims!r}")
        out.append(int(d))
    return tuple(out)


def _size_of(shape: tuple[int, ...]) -> int:
    n = 1
    for d in shape:
        n *= d
    return n


def _count_elements(data: Any) -> int:
    """
    Count scalar leaves in a possibly ragged nested sequence.
    """
    if isinstance(data, (list, tuple)):
        return sum(_count_elements(d) for d in data)
    if isinstance(data, np.ndarray):
        return int(data.size)
    return 1


class Tensor(ITensor):
    """
    Concrete tensor implementation (NumPy CPU backend).

    Parameters
    ----------
    shape : int | tuple[int, ...]
        Tensor shape. Every dimension must be a positive integer.
    data : array-like, optional
        Initial values. Any array-like is accepted and read in row-major
        order; it must contain exactly `prod(shape)` elements. When omitted,
        the tensor is zero-filled.
    requires_grad : bool, optional
        Whether this tensor should accumulate gradients during backprop.
        Defaults to False.
    ctx : Optional[Context], optional
        Backward context for autograd graph traversal. Set internally by
        differentiable operations. Defaults to None.

    Raises
    ------
    ValueError
        If `shape` is invalid.
    ConstructionLengthError
        If `data` is given and its length differs from the shape's size,
        counting scalar leaves when `data` is a ragged nested sequence.

    Notes
    -----
    - `data` is copied on construction; the tensor never aliases caller
      storage.
    - Gradients are stored in `_grad`, allocated up front and never replaced.
    """

    def __init__(
        self,
        shape: Union[int, Sequence[int]],
        data: Any = None,
        *,
        requires_grad: bool = False,
        ctx: Optional[Context] = None,
    ) -> None:
        self._shape = _normalize_shape(shape)
        self._size = _size_of(self._shape)

        if data is None:
            self._data = np.zeros(self._size, dtype=DTYPE)
        else:
            try:
                flat = np.array(data, dtype=DTYPE).reshape(-1)
            except ValueError:
                # ragged nesting: NumPy cannot build a rectangular array
                got = _count_elements(data)
                if got == self._size:
                    raise
                raise ConstructionLengthError(self._shape, self._size, got) from None
            if flat.size != self._size:
                raise ConstructionLengthError(self._shape, self._size, flat.size)
            self._data = flat

        # --- autograd fields ---
        self._grad = np.zeros(self._size, dtype=DTYPE)
        self._requires_grad: bool = bool(requires_grad)
        self._ctx: Optional[Context] = ctx

    # ----------------------------
    # Factories
    # ----------------------------
    @staticmethod
    def zeros(
        shape: Union[int, Sequence[int]], *, requires_grad: bool = False
    ) -> "Tensor":
        """
        Create a zero-filled tensor.

        Parameters
        ----------
        shape : int | tuple[int, ...]
            Shape of the output tensor.
        requires_grad : bool, optional
            Whether the tensor should track gradients.

        Returns
        -------
        Tensor
            Newly created tensor filled with zeros.
        """
        return Tensor(shape, requires_grad=requires_grad)

    @staticmethod
    def randn(
        shape: Union[int, Sequence[int]],
        *,
        scale: float = 0.01,
        rng: Optional[np.random.Generator] = None,
        requires_grad: bool = False,
    ) -> "Tensor":
        """
        Create a tensor filled with small Gaussian noise.

        Parameters
        ----------
        shape : int | tuple[int, ...]
            Shape of the output tensor.
        scale : float, optional
            Standard deviation of the noise. Defaults to 0.01.
        rng : numpy.random.Generator, optional
            Random generator to draw from. A fresh default generator is used
            when omitted; pass a seeded one for reproducible results.
        requires_grad : bool, optional
            Whether the tensor should track gradients.

        Returns
        -------
        Tensor
            Tensor with i.i.d. `N(0, scale**2)` entries.
        """
        shape = _normalize_shape(shape)
        rng = rng if rng is not None else np.random.default_rng()
        values = rng.standard_normal(_size_of(shape)) * float(scale)
        return Tensor(shape, values, requires_grad=requires_grad)

    @staticmethod
    def from_scalar(value: Number, *, requires_grad: bool = False) -> "Tensor":
        """
        Create a single-element tensor of shape `(1,)`.
        """
        return Tensor((1,), [float(value)], requires_grad=requires_grad)

    @staticmethod
    def from_numpy(arr: Any, *, requires_grad: bool = False) -> "Tensor":
        """
        Create a tensor from an array-like, taking its shape from the array.

        Parameters
        ----------
        arr : array-like
            Source values. 0-d inputs become shape `(1,)`.
        requires_grad : bool, optional
            Whether the tensor should track gradients.

        Returns
        -------
        Tensor
            A tensor holding a copy of `arr`.
        """
        a = np.asarray(arr, dtype=DTYPE)
        shape = a.shape if a.ndim > 0 else (1,)
        return Tensor(shape, a, requires_grad=requires_grad)

    # ----------------------------
    # Core properties
    # ----------------------------
    def __repr__(self) -> str:
        return (
            f"Tensor(shape={self._shape}, requires_grad={self._requires_grad}, "
            f"data={self.to_numpy().tolist()})"
        )

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the tensor shape.

        Returns
        -------
        tuple[int, ...]
            The tensor's shape.
        """
        return self._shape

    @property
    def size(self) -> int:
        """
        Return the total number of elements in the tensor.

        Returns
        -------
        int
            Product of all dimensions in the tensor shape.
        """
        return self._size

    def numel(self) -> int:
        return self._size

    @property
    def ndim(self) -> int:
        return len(self._shape)

    @property
    def data(self) -> np.ndarray:
        """
        Return the flat backing storage of this tensor.

        Returns
        -------
        numpy.ndarray
            1-D float64 array of length `size`, row-major. Mutations are
            visible to the tensor; do not mutate a tensor that already takes
            part in a graph before its backward sweep has run.
        """
        return self._data

    @property
    def grad(self) -> np.ndarray:
        """
        Return the flat gradient accumulator of this tensor.

        Returns
        -------
        numpy.ndarray
            1-D float64 array of length `size`.
        """
        return self._grad

    @property
    def requires_grad(self) -> bool:
        """
        Indicate whether this tensor should accumulate gradients.

        Returns
        -------
        bool
            True if gradients should be tracked/accumulated, False otherwise.
        """
        return self._requires_grad

    @requires_grad.setter
    def requires_grad(self, value: bool) -> None:
        """
        Enable or disable gradient tracking for this tensor.

        Parameters
        ----------
        value : bool
            If True, ops consuming this tensor afterwards record graph nodes.
            If False, any attached context is dropped so the tensor behaves as
            a detached constant.

        Notes
        -----
        Changing the flag never affects outputs that were already computed.
        """
        self._requires_grad = bool(value)
        if not self._requires_grad:
            self._ctx = None

    def set_requires_grad(self, flag: bool = True) -> "Tensor":
        """
        Set `requires_grad` and return `self` for chaining.

        Examples
        --------
        >>> w = Tensor.randn((3, 2)).set_requires_grad(True)
        """
        self.requires_grad = flag
        return self

    @property
    def parents(self) -> tuple["Tensor", ...]:
        """
        Return the tensors this tensor was derived from.

        Returns
        -------
        tuple[Tensor, ...]
            Ordered op operands for graph nodes; empty for leaves.
        """
        if self._ctx is None:
            return ()
        return tuple(self._ctx.parents)

    @property
    def is_leaf(self) -> bool:
        return self._ctx is None

    def zero_grad(self) -> None:
        """
        Reset the gradient accumulator to zeros.

        Notes
        -----
        Only `grad` is touched; `data` is left as is. Training loops call this
        on every trainable leaf before a new backward sweep.
        """
        self._grad.fill(0.0)

    def _set_ctx(self, ctx: Optional[Context]) -> None:
        """
        Attach or detach the backward context.

        Parameters
        ----------
        ctx : Optional[Context]
            Context to attach. Use None to detach.

        Notes
        -----
        This is an internal hook intended for use by differentiable operations
        and the autograd engine.
        """
        self._ctx = ctx

    def _get_ctx(self) -> Optional[Context]:
        """
        Return the backward context attached to this tensor, if any.

        Returns
        -------
        Optional[Context]
            The attached context, or None if this tensor is a leaf or has no
            autograd history.
        """
        return self._ctx

    # ----------------------------
    # Internal helpers
    # ----------------------------
    @staticmethod
    def _result_requires_grad(*parents: "Tensor") -> bool:
        """
        Determine whether an operation result should require gradients.

        Parameters
        ----------
        *parents : Tensor
            Parent tensors participating in an operation.

        Returns
        -------
        bool
            True if any parent requires gradients, False otherwise.
        """
        return any(p.requires_grad for p in parents)

    def _array(self) -> np.ndarray:
        """
        Return a shaped *view* of the data (no copy). Internal use only.
        """
        return self._data.reshape(self._shape)

    def _grad_array(self) -> np.ndarray:
        """
        Return a shaped *view* of the gradient (no copy). Internal use only.
        """
        return self._grad.reshape(self._shape)

    def _accumulate_grad_(self, g: np.ndarray) -> None:
        """
        In-place add a gradient contribution into `grad`.

        Parameters
        ----------
        g : numpy.ndarray
            Contribution with the same number of elements as this tensor.
        """
        self._grad += np.asarray(g, dtype=DTYPE).reshape(-1)

    # ----------------------------
    # Host interop
    # ----------------------------
    def to_numpy(self) -> np.ndarray:
        """
        Return a shaped copy of the tensor data.

        Returns
        -------
        numpy.ndarray
            Array of shape `self.shape` and dtype float64.
        """
        return self._array().copy()

    def grad_numpy(self) -> np.ndarray:
        """
        Return a shaped copy of the accumulated gradient.

        Returns
        -------
        numpy.ndarray
            Array of shape `self.shape` and dtype float64.
        """
        return self._grad_array().copy()

    def detach(self) -> "Tensor":
        """
        Return a copy of this tensor that does not track gradients.

        Returns
        -------
        Tensor
            New leaf with the same shape and a copy of the data, no context
            and `requires_grad=False`. The graph behind `self` is not
            referenced by the copy.
        """
        return Tensor(self._shape, self._data, requires_grad=False)

    def tolist(self) -> list:
        return self.to_numpy().tolist()

    def item(self) -> float:
        """
        Return the value of a single-element tensor as a Python float.

        Raises
        ------
        ValueError
            If the tensor holds more than one element.
        """
        if self._size != 1:
            raise ValueError(f"item() requires a single-element tensor, got {self._shape}")
        return float(self._data[0])

    # ----------------------------
    # Autograd entry point
    # ----------------------------
    def backward(self) -> None:
        """
        Backpropagate gradients from this scalar tensor through the graph.

        Raises
        ------
        NotScalarError
            If this tensor does not hold exactly one element.
        GraphReleasedError
            If the graph has already been swept once.

        Notes
        -----
        See `run_backward` for the traversal contract. Gradients are
        accumulated into every reachable tensor that requires grad; zero the
        trainable leaves beforehand.
        """
        from ._engine import run_backward

        run_backward(self)

    # ----------------------------
    # Operator sugar
    # ----------------------------
    def __add__(self, other: "Tensor") -> "Tensor":
        from .._function import add

        return add(self, other)

    def __sub__(self, other: "Tensor") -> "Tensor":
        from .._function import sub

        return sub(self, other)

    def __mul__(self, other: "Tensor") -> "Tensor":
        from .._function import mul

        return mul(self, other)

    def __matmul__(self, other: "Tensor") -> "Tensor":
        from .._function import matmul

        return matmul(self, other)

    def relu(self) -> "Tensor":
        from .._function import relu

        return relu(self)

    def sum(self) -> "Tensor":
        """
        Sum all elements into a tensor of shape `(1,)`.
        """
        from .._function import sum as _sum

        return _sum(self)

    def mean(self) -> "Tensor":
        """
        Average all elements into a tensor of shape `(1,)`.
        """
        from .._function import mean

        return mean(self)
