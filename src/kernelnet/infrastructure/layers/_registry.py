"""
Layer class registry and layer-level configuration round-trip.

Node format
-----------
{
  "type": "Sigmoid",
  "config": {"width": 4, "height": 3, "depth": None}
}

Only single layers are described; wiring layers into a network is left to
the caller, who supplies the upstream layer when rebuilding.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Type

from ...domain._errors import ShapeMismatchError
from ...domain._shape import make_shape, shape_of

_LAYER_REGISTRY: Dict[str, Type[Any]] = {}


def register_layer(name: Optional[str] = None) -> Callable[[Type[Any]], Type[Any]]:
    """
    Decorator to register a layer class under `name` (defaults to the class name).
    """

    def deco(cls: Type[Any]) -> Type[Any]:
        key = name or cls.__name__
        _LAYER_REGISTRY[key] = cls
        return cls

    return deco


def layer_to_config(layer: Any) -> dict[str, Any]:
    """Describe `layer` as a `{"type", "config"}` node."""
    return {"type": layer.__class__.__name__, "config": layer.get_config()}


def layer_from_config(
    node: Mapping[str, Any],
    input_layer: Any,
    settings: Optional[Mapping[str, Any]] = None,
) -> Any:
    """
    Rebuild a layer from a `{"type", "config"}` node on top of `input_layer`.

    Raises
    ------
    KeyError
        If the node's type is not registered.
    ShapeMismatchError
        If `input_layer` does not have the shape recorded in the node.
    """
    type_name = node["type"]
    if type_name not in _LAYER_REGISTRY:
        raise KeyError(f"Unknown layer type: {type_name!r}")

    cfg = node.get("config", {})
    recorded = make_shape(cfg["width"], cfg["height"], cfg.get("depth"))
    actual = shape_of(input_layer)
    if recorded != actual:
        raise ShapeMismatchError(
            recorded.array_shape, actual.array_shape, "input_layer"
        )

    return _LAYER_REGISTRY[type_name](input_layer, settings)
