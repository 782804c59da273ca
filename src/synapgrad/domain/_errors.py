"""
Validation and graph-lifecycle exceptions for SynapGrad.

This module defines the custom errors raised by tensor construction, the
differentiable operations, the backward engine and the serving boundary.
Every error is raised synchronously at the call that violates a
precondition, before any output buffer is allocated or any gradient is
mutated, so a failed call never leaves partially-updated state behind.

Shape-related errors subclass `ValueError` so callers that already catch
`ValueError` (the convention for bad arguments in this code base) keep
working.
"""

from __future__ import annotations


class ShapeMismatchError(ValueError):
    """
    Raised when operand shapes are incompatible for an elementwise operation.

    Broadcasting is not supported, so binary elementwise operations require
    exactly equal shapes.

    Attributes
    ----------
    op : str
        Name of the operation that was attempted (e.g., "add", "mul").
    shape_a : tuple[int, ...]
        Shape of the first operand.
    shape_b : tuple[int, ...]
        Shape of the second operand.
    """

    def __init__(
        self, op: str, shape_a: tuple[int, ...], shape_b: tuple[int, ...]
    ) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        op : str
            Operation name.
        shape_a : tuple[int, ...]
            Shape of the first operand.
        shape_b : tuple[int, ...]
            Shape of the second operand.
        """
        super().__init__(f"{op}: shape mismatch {shape_a} vs {shape_b}.")
        self.op = op
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)


class RankMismatchError(ValueError):
    """
    Raised when an operand has the wrong rank for a rank-sensitive operation.

    Attributes
    ----------
    op : str
        Name of the operation that was attempted (e.g., "matmul", "linear").
    shape : tuple[int, ...]
        Shape of the offending operand.
    expected_rank : int
        Rank required by the operation.
    """

    def __init__(self, op: str, shape: tuple[int, ...], expected_rank: int = 2) -> None:
        super().__init__(
            f"{op}: expected a rank-{expected_rank} tensor, got shape {shape} "
            f"(rank {len(shape)})."
        )
        self.op = op
        self.shape = tuple(shape)
        self.expected_rank = int(expected_rank)


class DimensionMismatchError(ValueError):
    """
    Raised when ranks are compatible but an inner dimension is not.

    Typical causes are `[m, k] @ [k2, n]` with `k != k2`, or an affine input
    whose feature dimension does not match the weight.

    Attributes
    ----------
    op : str
        Name of the operation that was attempted.
    expected : int
        Dimension size required by the operation.
    got : int
        Dimension size actually supplied.
    """

    def __init__(self, op: str, expected: int, got: int) -> None:
        super().__init__(
            f"{op}: inner dimension mismatch, expected {expected}, got {got}."
        )
        self.op = op
        self.expected = int(expected)
        self.got = int(got)


class NotScalarError(ValueError):
    """
    Raised when `backward()` is invoked on a tensor with more than one element.

    Attributes
    ----------
    shape : tuple[int, ...]
        Shape of the tensor `backward()` was called on.
    """

    def __init__(self, shape: tuple[int, ...]) -> None:
        super().__init__(
            f"backward() expects a scalar root (size == 1), got shape {shape}."
        )
        self.shape = tuple(shape)


class ConstructionLengthError(ValueError):
    """
    Raised when explicit tensor data does not match the declared shape's size.

    Attributes
    ----------
    shape : tuple[int, ...]
        Declared shape.
    expected : int
        Number of elements implied by `shape`.
    got : int
        Number of elements supplied.
    """

    def __init__(self, shape: tuple[int, ...], expected: int, got: int) -> None:
        super().__init__(
            f"data length {got} does not match shape {shape} (size {expected})."
        )
        self.shape = tuple(shape)
        self.expected = int(expected)
        self.got = int(got)


class GraphReleasedError(RuntimeError):
    """
    Raised when a backward sweep reaches a graph node that was already swept.

    Computation graphs are single-use: after one sweep every node reached by
    it is released. Rebuild the forward pass to differentiate again.
    """

    def __init__(self) -> None:
        super().__init__(
            "Trying to backward through a graph that has already been swept. "
            "Graphs are single-use; run the forward pass again."
        )


class FeatureDimensionError(ValueError):
    """
    Raised by the serving boundary when an inference payload has the wrong
    number of feature columns (or ragged rows).

    Attributes
    ----------
    expected : int
        Feature dimension the served model accepts.
    got : int
        Feature dimension found in the payload.
    """

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"expected {expected} features per row, got {got}.")
        self.expected = int(expected)
        self.got = int(got)


class InvalidApiKeyError(PermissionError):
    """Raised by the serving boundary when a request carries an unknown API key."""

    def __init__(self) -> None:
        super().__init__("Invalid API key.")
