"""
kernelnet: dispatched elementwise activation layers.
"""

from .domain import Device, Rank2Shape, Rank3Shape
from .infrastructure.activation import SIGMOID, get_activation
from .infrastructure.kernel import KernelDispatcher, get_dispatcher, setup, teardown
from .infrastructure.layers import Sigmoid, sigmoid

__version__ = "0.1.0"

__all__ = [
    "Device",
    "KernelDispatcher",
    "Rank2Shape",
    "Rank3Shape",
    "SIGMOID",
    "Sigmoid",
    "get_activation",
    "get_dispatcher",
    "setup",
    "sigmoid",
    "teardown",
]
