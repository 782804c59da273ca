"""
Inference front-end for trained models.

`PredictionService` wraps a model and exposes the request/response contract
used by HTTP front-ends:

    request  : {"input":  [[f, f, ...], ...]}
    response : {"output": [[f, f, ...], ...]}

The service never runs a backward sweep and never mutates parameters; it is
a pure forward pass over a constant input tensor.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

import numpy as np

from ...domain._errors import FeatureDimensionError, InvalidApiKeyError
from ..tensor._tensor import Tensor


class PredictionService:
    """
    Serve batched predictions from a model.

    Parameters
    ----------
    model : Callable[[Tensor], Tensor]
        Trained model. Anything callable on a `(batch, in_features)` tensor
        works, typically a `Model` or `Sequential`.
    in_features : int
        Number of columns every input row must have.
    api_keys : Iterable[str], optional
        Accepted keys for `handle`. When None, `handle` accepts any key.

    Raises
    ------
    ValueError
        If `in_features` is not positive.
    """

    def __init__(
        self,
        model: Any,
        in_features: int,
        *,
        api_keys: Optional[Iterable[str]] = None,
    ) -> None:
        if in_features <= 0:
            raise ValueError("in_features must be a positive integer")
        self.model = model
        self.in_features = int(in_features)
        self._api_keys = frozenset(api_keys) if api_keys is not None else None

    def _validate_rows(self, rows: Sequence[Sequence[float]]) -> np.ndarray:
        if not isinstance(rows, (list, tuple, np.ndarray)):
            raise ValueError(f"input must be a sequence of rows, got {type(rows)!r}")
        if len(rows) == 0:
            raise ValueError("input must contain at least one row")
        for row in rows:
            if np.ndim(row) != 1:
                raise ValueError(
                    f"each row must be a flat sequence of {self.in_features} "
                    f"values, got {row!r}"
                )
            if len(row) != self.in_features:
                raise FeatureDimensionError(self.in_features, len(row))
        return np.asarray(rows, dtype=np.float64)

    def infer(self, rows: Sequence[Sequence[float]]) -> Tensor:
        """
        Run one forward pass and return the detached output tensor.

        Parameters
        ----------
        rows : Sequence[Sequence[float]]
            Input batch, one row per example.

        Returns
        -------
        Tensor
            Output of shape (n_rows, out_features) with `requires_grad=False`
            and no graph context.

        Raises
        ------
        ValueError
            If `rows` is empty or is not a sequence of flat rows.
        FeatureDimensionError
            If any row does not have exactly `in_features` values.

        Notes
        -----
        The forward pass still records graph nodes because the model's
        parameters require grad; the output is detached so none of them
        outlive the call.
        """
        x = Tensor.from_numpy(self._validate_rows(rows))
        return self.model(x).detach()

    def predict(self, rows: Sequence[Sequence[float]]) -> List[List[float]]:
        """
        Run one forward pass over a batch of rows.

        Parameters
        ----------
        rows : Sequence[Sequence[float]]
            Input batch, one row per example.

        Returns
        -------
        List[List[float]]
            One output row per input row.

        Raises
        ------
        ValueError
            If `rows` is empty or is not a sequence of flat rows.
        FeatureDimensionError
            If any row does not have exactly `in_features` values.
        """
        return self.infer(rows).tolist()

    def check_api_key(self, api_key: Optional[str]) -> None:
        """
        Raise `InvalidApiKeyError` unless `api_key` is accepted.
        """
        if self._api_keys is None:
            return
        if api_key is None or api_key not in self._api_keys:
            raise InvalidApiKeyError()

    def handle(
        self, payload: Mapping[str, Any], api_key: Optional[str] = None
    ) -> dict:
        """
        Answer a prediction request.

        Parameters
        ----------
        payload : Mapping[str, Any]
            Request body, `{"input": [[...], ...]}`.
        api_key : str, optional
            Caller's key.

        Returns
        -------
        dict
            Response body, `{"output": [[...], ...]}`.

        Raises
        ------
        InvalidApiKeyError
            If the key is not accepted. Checked before the payload is read.
        KeyError
            If the payload has no `"input"` entry.
        FeatureDimensionError
            If any row has the wrong width.
        ValueError
            If `"input"` is empty or not a sequence of flat rows.
        """
        self.check_api_key(api_key)
        return {"output": self.predict(payload["input"])}
