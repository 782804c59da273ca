"""
Sequential container module.

This module defines `Sequential`, a simple container that composes a list of
child `Module` objects into a single `Model` by applying them in order:

    y = L_n(...L_2(L_1(x)))

Notes
-----
- The `_layers` list is the authoritative ordered view used by `forward()`;
  `_modules` is kept in sync so `parameters()` recurses into every layer.
"""

from typing import Iterator, List, Optional, Tuple

from .._module import Module
from ._models import Model


class Sequential(Model):
    """
    Sequential container model.

    Parameters
    ----------
    *layers : Module
        Zero or more child modules, applied in the given order.

    Examples
    --------
    >>> model = Sequential(Linear(4, 16), ReLU(), Linear(16, 2))
    """

    def __init__(self, *layers: Module) -> None:
        super().__init__()
        self._layers: List[Module] = []
        for layer in layers:
            self.add(layer)

    def add(self, layer: Module, name: Optional[str] = None) -> None:
        """
        Append a module to the container and register it as a submodule.

        Parameters
        ----------
        layer : Module
            The module to append.
        name : Optional[str], optional
            Explicit registration name. If omitted, a numeric name ("0", "1", ...)
            is assigned based on insertion order.

        Raises
        ------
        TypeError
            If `layer` is not an instance of `Module`.
        ValueError
            If the provided `name` conflicts with an existing submodule.
        """
        if not isinstance(layer, Module):
            raise TypeError(f"Sequential.add expects a Module, got: {type(layer)}")

        layer_name = name if name is not None else str(len(self._layers))
        if layer_name in self._modules:
            raise ValueError(f"Duplicate layer name '{layer_name}' in Sequential.")

        self._layers.append(layer)
        self._modules[layer_name] = layer

    def forward(self, x):
        """
        Apply all layers sequentially.
        """
        out = x
        for layer in self._layers:
            out = layer(out)
        return out

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Module]:
        return iter(self._layers)

    def __getitem__(self, idx: int) -> Module:
        return self._layers[idx]

    def layers(self) -> Tuple[Module, ...]:
        """
        Return all layers as an immutable tuple, in execution order.
        """
        return tuple(self._layers)

    def summary(self) -> str:
        """
        Generate a lightweight textual summary of the container.

        Returns
        -------
        str
            Human-readable listing of layer indices and types.
        """
        lines = [f"{self.__class__.__name__}("]
        for i, layer in enumerate(self._layers):
            lines.append(f"  ({i}): {layer!r}")
        lines.append(")")
        return "\n".join(lines)
