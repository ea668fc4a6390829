from ._activation_layer import ActivationLayer
from ._registry import layer_from_config, layer_to_config, register_layer
from ._sigmoid import (
    Sigmoid,
    compare_2d,
    compare_3d,
    predict_2d,
    predict_3d,
    sigmoid,
)

__all__ = [
    "ActivationLayer",
    "Sigmoid",
    "compare_2d",
    "compare_3d",
    "layer_from_config",
    "layer_to_config",
    "predict_2d",
    "predict_3d",
    "register_layer",
    "sigmoid",
]
