"""
Synthetic datasets.

`make_linear_regression_data` draws inputs from a standard normal and maps
them through a fixed random linear map, `y = x @ A + b`. A network with
enough capacity can fit it exactly, which makes it a convenient smoke test
for the whole forward/backward/update loop.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np


def make_linear_regression_data(
    n_samples: int,
    in_features: int,
    out_features: int,
    *,
    seed: int = 42,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate a linear-target regression dataset.

    Parameters
    ----------
    n_samples : int
        Number of rows.
    in_features : int
        Number of input columns.
    out_features : int
        Number of target columns.
    seed : int, optional
        Seed for the generator that draws the map and the inputs.

    Returns
    -------
    tuple[numpy.ndarray, numpy.ndarray]
        `(x, y)` with shapes (n_samples, in_features) and
        (n_samples, out_features), float64.

    Raises
    ------
    ValueError
        If any size is not positive.
    """
    if n_samples <= 0 or in_features <= 0 or out_features <= 0:
        raise ValueError("n_samples, in_features and out_features must be positive")

    rng = np.random.default_rng(seed)
    a = rng.standard_normal((in_features, out_features))
    b = rng.standard_normal(out_features)

    x = rng.standard_normal((n_samples, in_features))
    y = x @ a + b
    return x, y
