"""
Training history utilities.

This module defines a lightweight container used to record per-epoch
training metrics, in a manner similar to Keras' `History` object. It is
returned by `Model.fit()`.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Union


Number = Union[int, float]


@dataclass
class History:
    """
    Container for per-epoch training metrics.

    Attributes
    ----------
    history : Dict[str, List[float]]
        Mapping from metric name to a list of per-epoch values, ordered by
        epoch index.
    epoch : List[int]
        Epoch indices (0-based) corresponding to entries in `history`.

    Notes
    -----
    This object is passive: it performs no aggregation beyond appending
    values supplied by the training loop.
    """

    history: Dict[str, List[float]] = field(default_factory=dict)
    epoch: List[int] = field(default_factory=list)

    def append_epoch(self, epoch_idx: int, logs: Mapping[str, Number]) -> None:
        """
        Append metrics for a completed epoch.

        Parameters
        ----------
        epoch_idx : int
            Zero-based index of the completed epoch.
        logs : Mapping[str, Number]
            Mapping from metric name to aggregated epoch value. Values are
            coerced to `float`.
        """
        self.epoch.append(int(epoch_idx))
        for k, v in logs.items():
            self.history.setdefault(k, []).append(float(v))

    def last(self) -> Dict[str, float]:
        """
        Return metrics from the most recent epoch.

        Returns
        -------
        Dict[str, float]
            Mapping from metric name to its latest recorded value. Metrics
            with no recorded values are omitted.
        """
        return {k: float(vs[-1]) for k, vs in self.history.items() if vs}
