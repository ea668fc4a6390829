"""
Activation pair registry.

Activation pairs are registered by name so layers and configuration code can
look them up without importing concrete modules. Each name maps to exactly
one shared `ActivationFunction` instance.

Usage
-----
    SIGMOID = register_activation(ActivationFunction("sigmoid", activate, measure))
    get_activation("sigmoid") is SIGMOID  # True
"""

from __future__ import annotations

from typing import Dict, Tuple

from ...domain._activation import ActivationFunction

_ACTIVATIONS: Dict[str, ActivationFunction] = {}


def register_activation(
    activation: ActivationFunction, *, overwrite: bool = False
) -> ActivationFunction:
    """
    Register `activation` under `activation.name` and return it.

    Raises
    ------
    ValueError
        If the name is empty, or already registered and `overwrite` is False.
    """
    name = activation.name
    if not isinstance(name, str) or not name:
        raise ValueError("Activation name must be a non-empty string")
    if not overwrite and name in _ACTIVATIONS:
        raise ValueError(f"Activation already registered: {name!r}")
    _ACTIVATIONS[name] = activation
    return activation


def get_activation(name: str) -> ActivationFunction:
    """Return the registered activation pair called `name`."""
    try:
        return _ACTIVATIONS[name]
    except KeyError as e:
        available = ", ".join(sorted(_ACTIVATIONS)) or "<none>"
        raise ValueError(
            f"Unsupported activation name: {name!r}. Available: {available}"
        ) from e


def available_activations() -> Tuple[str, ...]:
    """Return registered activation names (sorted)."""
    return tuple(sorted(_ACTIVATIONS))
