"""
Elementwise activation layer base.

An activation layer maps its upstream layer's `weights` through a scalar
activation during `predict`, and combines its own `weights` with the
incoming `deltas` through the activation's derivative during `compare`.
Both passes run as dispatched kernels compiled for the layer's own output
shape.

Subclasses provide:

- `activation`: the shared `ActivationFunction` pair
- `programs_2d`: `(predict, compare)` kernel programs for rank-2 shapes
- `programs_3d`: `(predict, compare)` kernel programs for rank-3 shapes

Lifecycle
---------
- Construction adopts the upstream shape, zero-fills `weights`/`deltas`,
  leaves both kernels uncompiled, and calls the settings' praxis factory.
- `setup_kernels()` compiles both kernels; later calls keep the existing ones.
- `predict()` replaces `weights`; `compare()` replaces `deltas`.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Tuple

import numpy as np

from ...domain._activation import ActivationFunction
from ...domain._kernel import IKernelDispatcher
from ...domain._shape import LayerShape, Rank2Shape, Rank3Shape, shape_of
from ..kernel._setup import get_dispatcher
from ..kernel._slot import KernelSlot

ProgramPair = Tuple[Callable[..., float], Callable[..., float]]


class ActivationLayer:
    """
    Base class for elementwise activation layers.

    Parameters
    ----------
    input_layer : IUpstreamLayer
        Layer feeding into this one. Must expose `width`, `height`, an
        optional `depth`, and `weights` by the time `predict` runs.
    settings : Mapping[str, Any], optional
        Settings bundle. Recognised keys:

        - ``praxis``: optimizer factory called as `praxis(layer, settings)`.
        - ``dispatcher``: kernel dispatcher; defaults to the process-wide one.

    Attributes
    ----------
    width, height : int
        Mirrored from `input_layer`.
    depth : int | None
        Mirrored from `input_layer` (None when absent).
    shape : Rank2Shape | Rank3Shape
        Tagged shape variant used to select kernel programs.
    weights : np.ndarray
        Forward-pass output.
    deltas : np.ndarray
        Gradient associated with this layer.
    praxis : Any
        Opaque optimizer handle, or None if no factory was configured.
    predict_kernel, compare_kernel : KernelSlot
        Lazily compiled forward and backward kernels.
    """

    activation: ClassVar[ActivationFunction]
    programs_2d: ClassVar[ProgramPair]
    programs_3d: ClassVar[ProgramPair]

    def __init__(
        self, input_layer: Any, settings: Optional[Mapping[str, Any]] = None
    ) -> None:
        settings = {} if settings is None else settings

        self.input_layer = input_layer
        self.shape: LayerShape = shape_of(input_layer)
        self.width: int = input_layer.width
        self.height: int = input_layer.height
        self.depth: Optional[int] = getattr(input_layer, "depth", None)

        self.weights = np.zeros(self.shape.array_shape, dtype=np.float64)
        self.deltas = np.zeros(self.shape.array_shape, dtype=np.float64)

        self.predict_kernel = KernelSlot("predict_kernel")
        self.compare_kernel = KernelSlot("compare_kernel")
        self._dispatcher: Optional[IKernelDispatcher] = settings.get("dispatcher")

        praxis = settings.get("praxis")
        self.praxis = praxis(self, settings) if praxis is not None else None

    def kernel_programs(self) -> ProgramPair:
        """Return the `(predict, compare)` programs matching this layer's rank."""
        match self.shape:
            case Rank3Shape():
                return self.programs_3d
            case Rank2Shape():
                return self.programs_2d
        raise TypeError(f"Unsupported layer shape: {self.shape!r}")

    def setup_kernels(self) -> None:
        """
        Compile the forward and backward kernels for this layer's output shape.

        The forward kernel is linked against `activation.activate` only, the
        backward kernel against `activation.measure` only.
        """
        dispatcher = self._dispatcher if self._dispatcher is not None else get_dispatcher()
        predict, compare = self.kernel_programs()
        output = self.shape.output

        self.predict_kernel.compile(
            dispatcher, predict, output=output, functions=[self.activation.activate]
        )
        self.compare_kernel.compile(
            dispatcher, compare, output=output, functions=[self.activation.measure]
        )

    def predict(self) -> None:
        """
        Forward pass: `weights <- activate(input_layer.weights)` elementwise.

        Raises
        ------
        KernelNotCompiledError
            If `setup_kernels()` has not been called.
        ShapeMismatchError
            If the upstream weights do not match this layer's shape.
        """
        self.weights = self.predict_kernel(self.input_layer.weights)

    def compare(self) -> None:
        """
        Backward pass: `deltas <- measure(weights, deltas)` elementwise.

        `deltas` must already hold the gradient placed there by the
        downstream consumer.

        Raises
        ------
        KernelNotCompiledError
            If `setup_kernels()` has not been called.
        ShapeMismatchError
            If `weights` or `deltas` do not match this layer's shape.
        """
        self.deltas = self.compare_kernel(self.weights, self.deltas)

    def get_config(self) -> Dict[str, Any]:
        return {"width": self.width, "height": self.height, "depth": self.depth}

    def __repr__(self) -> str:
        dims = ", ".join(str(d) for d in self.shape.output)
        return f"{self.__class__.__name__}([{dims}])"
