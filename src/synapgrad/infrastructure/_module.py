"""
Infrastructure module base class.

This module provides a concrete `Module` implementation that satisfies the
domain-level `IModule` protocol. It implements common conveniences used by
neural network layers, including:

- parameter registration and storage
- submodule registration and storage
- recursive parameter traversal (`parameters`, `named_parameters`)
- gradient zeroing over every trainable leaf (`zero_grad`)
- `__call__` forwarding to `forward` for ergonomic invocation

This class is intended to be subclassed by concrete layers (e.g., Linear,
ReLU, containers).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Dict, Iterator, Optional

from ..domain._module import IModule
from ..domain._parameter import IParameter
from ._parameter import Parameter


class Module(IModule):
    """
    Infrastructure base class for layers/modules.

    Subclasses typically:
    - create `Parameter` instances,
    - register them (explicitly via `register_parameter` or implicitly via
      attribute assignment),
    - implement `forward` to define computation.

    Attributes
    ----------
    _parameters : Dict[str, Parameter]
        Mapping from parameter name to parameter object for this module.
    _modules : Dict[str, Module]
        Mapping from child module name to child module object for this module.

    Notes
    -----
    - Parameters and submodules can be registered explicitly (register_*) or
      implicitly by assigning them as attributes, e.g.:
          self.weight = Parameter(...)
          self.block = Sequential(...)
    - `__call__` delegates to `forward`.
    """

    def __init__(self) -> None:
        """
        Initialize an empty module with no registered parameters/submodules.
        """
        # Use super().__setattr__ to avoid triggering our __setattr__ logic.
        super().__setattr__("_parameters", {})
        super().__setattr__("_modules", {})

    def __setattr__(self, name: str, value) -> None:
        """
        Intercept attribute assignment to auto-register Parameters and child Modules.
        """
        if name in {"_parameters", "_modules"}:
            super().__setattr__(name, value)
            return

        # Assigning None unregisters.
        if value is None:
            self._parameters.pop(name, None)
            self._modules.pop(name, None)
            super().__setattr__(name, value)
            return

        if isinstance(value, Parameter):
            self._parameters[name] = value
        elif isinstance(value, Module):
            self._modules[name] = value

        super().__setattr__(name, value)

    def register_parameter(self, name: str, param: Optional[IParameter]) -> None:
        """
        Register a parameter with this module.

        Parameters
        ----------
        name : str
            Name under which the parameter will be stored (e.g., "weight", "bias").
        param : Optional[IParameter]
            Parameter instance to register. If None, registration is skipped.

        Notes
        -----
        If the name already exists, it is overwritten.
        """
        if param is None:
            return
        self._parameters[name] = param
        super().__setattr__(name, param)

    def register_module(self, name: str, module: Optional["Module"]) -> None:
        """
        Register a child module with this module.

        Parameters
        ----------
        name : str
            Name under which the module will be stored.
        module : Optional[Module]
            Child module to register. If None, registration is skipped.
        """
        if module is None:
            return
        self._modules[name] = module
        super().__setattr__(name, module)

    def parameters(self) -> Iterable[IParameter]:
        """
        Return an iterator over this module's parameters (recursive).

        Returns
        -------
        Iterable[IParameter]
            Parameters registered on this module first, then those of each
            submodule in registration order.
        """
        for p in self._parameters.values():
            yield p
        for m in self._modules.values():
            yield from m.parameters()

    def named_parameters(self, prefix: str = "") -> Iterator[tuple[str, IParameter]]:
        """
        Return an iterator over (name, parameter) pairs (recursive).

        Parameters
        ----------
        prefix : str
            Prefix to prepend to parameter names (used for recursion).

        Returns
        -------
        Iterator[tuple[str, IParameter]]
            Iterator yielding (fully_qualified_name, parameter).
        """
        base = prefix + "." if prefix else ""

        for name, p in self._parameters.items():
            yield (f"{base}{name}", p)

        for child_name, child in self._modules.items():
            yield from child.named_parameters(f"{base}{child_name}")

    def zero_grad(self) -> None:
        """
        Reset the gradient of every parameter reachable from this module.
        """
        for p in self.parameters():
            p.zero_grad()

    def forward(self, x):
        """
        Execute the forward computation of the module.

        Subclasses must implement this.
        """
        raise NotImplementedError

    def __call__(self, x):
        """
        Call the module as a function, delegating to `forward`.
        """
        return self.forward(x)
