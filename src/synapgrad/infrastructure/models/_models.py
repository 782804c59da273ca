"""
High-level model utilities.

This module defines the `Model` base class, which extends the core `Module`
abstraction with conveniences expected at the "top-level network" boundary:

- Inference helper (`predict`)
- Lightweight, Keras-like training helpers (`train_on_batch`, `fit`)

The training helpers wire the whole loop together: zero gradients, forward,
loss, one backward sweep on a freshly built graph, optimizer step.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, Optional, Tuple

import numpy as np

from ._history import History
from .._module import Module
from ..tensor._tensor import Tensor


def _as_tensor(x: Any) -> Tensor:
    """
    Wrap an array-like into a constant `Tensor`; tensors pass through.
    """
    if isinstance(x, Tensor):
        return x
    return Tensor.from_numpy(np.asarray(x, dtype=np.float64))


def _iter_minibatches_xy(
    x: np.ndarray,
    y: np.ndarray,
    *,
    batch_size: int,
    shuffle: bool = True,
    rng: Optional[np.random.Generator] = None,
) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
    """
    Yield mini-batches from array `(x, y)` datasets.

    Parameters
    ----------
    x : numpy.ndarray
        Dataset inputs, first axis is the sample axis.
    y : numpy.ndarray
        Dataset targets, same number of samples as `x`.
    batch_size : int
        Desired mini-batch size. The last batch may be smaller.
    shuffle : bool, optional
        If True, shuffle sample indices (not the storage) each call.
    rng : numpy.random.Generator, optional
        Generator used for shuffling.

    Raises
    ------
    ValueError
        If `x` and `y` have different lengths.
    """
    n = len(x)
    if len(y) != n:
        raise ValueError(
            f"x and y must have same length, got len(x)={n}, len(y)={len(y)}"
        )

    idxs = np.arange(n)
    if shuffle:
        rng = rng if rng is not None else np.random.default_rng()
        rng.shuffle(idxs)

    for start in range(0, n, batch_size):
        batch_ids = idxs[start : start + batch_size]
        yield x[batch_ids], y[batch_ids]


class Model(Module):
    """
    Base class for top-level neural network models.

    `Model` is a semantic specialization of `Module` intended to represent
    complete networks rather than individual layers.

    Notes
    -----
    Optimizers are duck-typed and only expected to expose `zero_grad()` and
    `step()`.
    """

    def predict(self, x: Any) -> Tensor:
        """
        Perform an inference-style forward pass.

        Parameters
        ----------
        x : Tensor | array-like
            Model input. Array-likes are wrapped into a constant tensor.

        Returns
        -------
        Tensor
            Output produced by the model's forward computation. No backward
            sweep is run.
        """
        return self.forward(_as_tensor(x))

    def train_on_batch(
        self,
        x_batch: Any,
        y_batch: Any,
        *,
        loss: Callable[[Tensor, Tensor], Tensor],
        optimizer: Any,
    ) -> Dict[str, float]:
        """
        Run a single training step on one mini-batch.

        The step is: `optimizer.zero_grad()` -> forward -> loss ->
        `loss.backward()` -> `optimizer.step()`.

        Parameters
        ----------
        x_batch, y_batch : Tensor | array-like
            One mini-batch of inputs and targets.
        loss : Callable[[Tensor, Tensor], Tensor]
            Callable producing a scalar loss: `loss(y_pred, y_true)`.
        optimizer : Any
            Optimizer-like object exposing `zero_grad()` and `step()`.

        Returns
        -------
        Dict[str, float]
            Batch logs, e.g. `{"loss": 0.123}`.
        """
        optimizer.zero_grad()

        y_pred = self(_as_tensor(x_batch))
        loss_tensor = loss(y_pred, _as_tensor(y_batch))
        loss_tensor.backward()

        optimizer.step()
        return {"loss": loss_tensor.item()}

    def fit(
        self,
        x: Any,
        y: Any,
        *,
        loss: Callable[[Tensor, Tensor], Tensor],
        optimizer: Any,
        batch_size: int = 32,
        epochs: int = 1,
        shuffle: bool = True,
        verbose: int = 1,
        rng: Optional[np.random.Generator] = None,
    ) -> History:
        """
        Train the model for a fixed number of epochs.

        Parameters
        ----------
        x : array-like
            Dataset inputs of shape (n_samples, in_features).
        y : array-like
            Dataset targets of shape (n_samples, out_features).
        loss : Callable[[Tensor, Tensor], Tensor]
            Callable producing a scalar loss: `loss(y_pred, y_true)`.
        optimizer : Any
            Optimizer-like object, expected to expose `zero_grad()` and `step()`.
        batch_size : int, optional
            Mini-batch size. Default is 32.
        epochs : int, optional
            Number of epochs to train for. Default is 1.
        shuffle : bool, optional
            Whether to shuffle the dataset each epoch. Default is True.
        verbose : int, optional
            If non-zero, prints a one-line summary per epoch. Default is 1.
        rng : numpy.random.Generator, optional
            Generator used for shuffling.

        Returns
        -------
        History
            Per-epoch mean loss, weighted by batch size.

        Raises
        ------
        ValueError
            If `epochs < 1` or `batch_size < 1`.
        """
        if epochs < 1:
            raise ValueError("epochs must be >= 1")
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")

        x_np = np.asarray(x, dtype=np.float64)
        y_np = np.asarray(y, dtype=np.float64)
        rng = rng if rng is not None else np.random.default_rng()

        hist = History()

        for epoch_idx in range(epochs):
            sums: Dict[str, float] = {}
            seen = 0

            for xb, yb in _iter_minibatches_xy(
                x_np, y_np, batch_size=batch_size, shuffle=shuffle, rng=rng
            ):
                logs = self.train_on_batch(xb, yb, loss=loss, optimizer=optimizer)

                bs = len(xb)
                seen += bs
                for k, v in logs.items():
                    sums[k] = sums.get(k, 0.0) + float(v) * bs

            epoch_logs = {k: s / max(seen, 1) for k, s in sums.items()}
            hist.append_epoch(epoch_idx, epoch_logs)

            if verbose:
                parts = [f"Epoch {epoch_idx + 1}/{epochs}"]
                for k, v in epoch_logs.items():
                    parts.append(f"{k}: {v:.6f}")
                parts.append(f"seen: {seen}")
                print(" - ".join(parts))

        return hist
