"""
Activation function pair contract.

An activation is described by two pure scalar functions:

- `activate(x)` maps a pre-activation value to the layer output.
- `measure(weight, delta)` turns the stored forward output of one element
  and the upstream error signal of that element into the error signal
  passed further upstream (the derivative applied via the chain rule).

Both functions are handed to a kernel dispatcher as named sub-programs, so
they must be plain module-level functions with a stable `__name__`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class ActivationFunction:
    """
    Immutable `(activate, measure)` pair.

    A single instance is shared by reference across all layers that use the
    same activation; it is never copied or mutated.

    Attributes
    ----------
    name : str
        Registry name (e.g. "sigmoid").
    activate : Callable[[float], float]
        Forward scalar function.
    measure : Callable[[float, float], float]
        Backward scalar function taking `(weight, delta)`.
    """

    name: str
    activate: Callable[[float], float]
    measure: Callable[[float, float], float]
