"""
Layer shape variants.

A layer's shape is fixed at construction and is one of two tagged variants:

- `Rank2Shape(width, height)` for `[height][width]` tensors
- `Rank3Shape(width, height, depth)` for `[depth][height][width]` tensors

Code that needs to branch on rank matches on the variant instead of probing
an optional `depth` attribute. Two orderings are exposed because they differ:

- `output` is the kernel dispatch order, fastest-varying axis first
  (`[width, height(, depth)]`).
- `array_shape` is the NumPy order of the resulting array
  (`(height, width)` or `(depth, height, width)`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from ._errors import InvalidShapeError


def _positive_int(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidShapeError(field, value)
    return value


@dataclass(frozen=True)
class Rank2Shape:
    width: int
    height: int

    def __post_init__(self) -> None:
        _positive_int("width", self.width)
        _positive_int("height", self.height)

    @property
    def rank(self) -> int:
        return 2

    @property
    def output(self) -> List[int]:
        return [self.width, self.height]

    @property
    def array_shape(self) -> Tuple[int, int]:
        return (self.height, self.width)


@dataclass(frozen=True)
class Rank3Shape:
    width: int
    height: int
    depth: int

    def __post_init__(self) -> None:
        _positive_int("width", self.width)
        _positive_int("height", self.height)
        _positive_int("depth", self.depth)

    @property
    def rank(self) -> int:
        return 3

    @property
    def output(self) -> List[int]:
        return [self.width, self.height, self.depth]

    @property
    def array_shape(self) -> Tuple[int, int, int]:
        return (self.depth, self.height, self.width)


LayerShape = Union[Rank2Shape, Rank3Shape]


def make_shape(width: int, height: int, depth: Optional[int] = None) -> LayerShape:
    """
    Build the shape variant for the given dimensions.

    A missing depth, or a depth of 1, selects `Rank2Shape`. Any larger depth
    selects `Rank3Shape`.

    Raises
    ------
    InvalidShapeError
        If a dimension is not a positive integer.
    """
    if depth is None:
        return Rank2Shape(width, height)
    if _positive_int("depth", depth) == 1:
        return Rank2Shape(width, height)
    return Rank3Shape(width, height, depth)


def shape_of(layer: Any) -> LayerShape:
    """
    Derive the shape variant from any object exposing `width`, `height` and
    an optional `depth` attribute.
    """
    return make_shape(
        getattr(layer, "width", None),
        getattr(layer, "height", None),
        getattr(layer, "depth", None),
    )
