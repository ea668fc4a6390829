"""
Backend-agnostic contracts and descriptors for kernelnet.

Nothing in this package depends on NumPy or on a concrete dispatcher.
"""

from ._activation import ActivationFunction
from ._device import Device, DeviceType
from ._errors import (
    DeviceNotSupportedError,
    InvalidShapeError,
    KernelNotCompiledError,
    ShapeMismatchError,
)
from ._kernel import ICompiledKernel, IKernelDispatcher, KernelFunction
from ._layer import ILayer, IPraxisFactory, IUpstreamLayer
from ._shape import LayerShape, Rank2Shape, Rank3Shape, make_shape, shape_of

__all__ = [
    "ActivationFunction",
    "Device",
    "DeviceType",
    "DeviceNotSupportedError",
    "InvalidShapeError",
    "KernelNotCompiledError",
    "ShapeMismatchError",
    "ICompiledKernel",
    "IKernelDispatcher",
    "KernelFunction",
    "ILayer",
    "IPraxisFactory",
    "IUpstreamLayer",
    "LayerShape",
    "Rank2Shape",
    "Rank3Shape",
    "make_shape",
    "shape_of",
]
