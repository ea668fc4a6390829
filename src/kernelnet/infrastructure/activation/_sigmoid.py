"""
Sigmoid activation pair.

Implements:

    activate(x) = 1 / (1 + exp(-x))

Backward, given the forward output `weight` of an element and the error
`delta` arriving for that element:

    measure(weight, delta) = delta * weight * (1 - weight)

Notes
-----
`activate` evaluates `exp` only on non-positive arguments, so inputs of any
magnitude saturate toward 0 or 1 instead of overflowing.
"""

import math

from ...domain._activation import ActivationFunction
from ._registry import register_activation


def activate(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def measure(weight: float, delta: float) -> float:
    return delta * weight * (1.0 - weight)


SIGMOID = register_activation(ActivationFunction("sigmoid", activate, measure))
