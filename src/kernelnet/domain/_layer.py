"""
Layer composition contracts.

Every layer in a network exposes the same structural surface, so that any
layer can be the upstream of any other:

    width, height, depth, weights, deltas, praxis,
    predict(), compare(), setup_kernels()

`weights` is the forward-pass output of the layer and `deltas` the gradient
associated with it; neither is a learned parameter matrix here.

The optimizer ("praxis") is injected through a factory called once at
construction with the new layer and the settings bundle. Layers store the
returned handle and never call into it.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class IUpstreamLayer(Protocol):
    """
    Minimal surface a layer reads from the layer feeding into it.
    """

    width: int
    height: int
    depth: Optional[int]
    weights: Any
    deltas: Any


@runtime_checkable
class ILayer(IUpstreamLayer, Protocol):
    """
    Full layer contract exposed to the rest of a network.
    """

    praxis: Any

    def setup_kernels(self) -> None: ...

    def predict(self) -> None: ...

    def compare(self) -> None: ...


@runtime_checkable
class IPraxisFactory(Protocol):
    """
    Optimizer factory.

    Called as `factory(layer, settings)`; the return value is opaque to the
    layer. Exceptions raised by the factory propagate unmodified.
    """

    def __call__(self, layer: Any, settings: Mapping[str, Any]) -> Any: ...
