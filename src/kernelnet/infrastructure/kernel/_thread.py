"""
Per-cell coordinate passed to kernel programs.
"""

from typing import NamedTuple


class Thread(NamedTuple):
    """
    Coordinate of the output cell a kernel program is computing.

    `x` indexes width, `y` height and `z` depth. Axes beyond the kernel's
    rank are 0.
    """

    x: int
    y: int = 0
    z: int = 0
