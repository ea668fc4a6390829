"""
Sigmoid activation layer.

Forward (per output cell):

    weights[z][y][x] = activate(inputs[z][y][x])

Backward (per output cell):

    deltas[z][y][x] = measure(weights[z][y][x], deltas[z][y][x])

where `activate` and `measure` are the sigmoid pair from
`infrastructure.activation._sigmoid`. The four kernel programs below read a
single cell of each input at the coordinate they are computing, so the
dispatcher may evaluate all cells independently.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..activation._sigmoid import SIGMOID, activate, measure
from ._activation_layer import ActivationLayer
from ._registry import register_layer


def predict_2d(thread, inputs):
    return activate(inputs[thread.y][thread.x])


def predict_3d(thread, inputs):
    return activate(inputs[thread.z][thread.y][thread.x])


def compare_2d(thread, weights, deltas):
    return measure(weights[thread.y][thread.x], deltas[thread.y][thread.x])


def compare_3d(thread, weights, deltas):
    return measure(
        weights[thread.z][thread.y][thread.x],
        deltas[thread.z][thread.y][thread.x],
    )


@register_layer()
class Sigmoid(ActivationLayer):
    """
    Elementwise sigmoid layer over rank-2 or rank-3 tensors.

    See `ActivationLayer` for the construction parameters and lifecycle.
    """

    activation = SIGMOID
    programs_2d = (predict_2d, compare_2d)
    programs_3d = (predict_3d, compare_3d)


def sigmoid(input_layer: Any, settings: Optional[Mapping[str, Any]] = None) -> Sigmoid:
    """
    Create a `Sigmoid` layer on top of `input_layer`.

    Parameters
    ----------
    input_layer : IUpstreamLayer
        Upstream layer whose width/height/depth the new layer mirrors.
    settings : Mapping[str, Any], optional
        Settings bundle; ``praxis`` is the optimizer factory, invoked once
        with `(layer, settings)`.

    Returns
    -------
    Sigmoid
    """
    return Sigmoid(input_layer, settings)
