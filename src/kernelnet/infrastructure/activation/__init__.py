from ._registry import available_activations, get_activation, register_activation
from ._sigmoid import SIGMOID

__all__ = [
    "SIGMOID",
    "available_activations",
    "get_activation",
    "register_activation",
]
