"""
Compiled kernel handle.

A `CompiledKernel` binds a linked kernel program to its output bounds, the
named functions it was linked against, and the device it executes on.
Calling it validates every tensor argument against the output bounds and
then evaluates the program over the whole output space.

The original program's source text and the linked function list are kept
for introspection, so callers can verify which program and which
activation a layer was wired with.
"""

from __future__ import annotations

from typing import Any, Callable, List, Sequence, Tuple

import numpy as np

from ...domain._device import Device
from ...domain._errors import ShapeMismatchError
from ...domain._kernel import KernelFunction
from . import _cpu_backend


def as_tensor(value: Any, expected: Tuple[int, ...], argument: str) -> np.ndarray:
    """
    Convert `value` to a float64 array and check it has shape `expected`.

    Raises
    ------
    ShapeMismatchError
        If `value` is jagged or its shape differs from `expected`.
    """
    try:
        arr = np.asarray(value, dtype=np.float64)
    except ValueError as e:
        raise ShapeMismatchError(expected, None, argument) from e
    if arr.shape != expected:
        raise ShapeMismatchError(expected, arr.shape, argument)
    return arr


class CompiledKernel:
    """
    Callable produced by `KernelDispatcher.compile`.

    Attributes
    ----------
    program : Callable[..., float]
        The program as written (not the linked copy).
    source : str
        Source text of `program`.
    output : list[int]
        Output bounds in dispatch order `[x, y(, z)]`.
    functions : list[KernelFunction]
        Named functions linked into the program, in registration order.
    device : Device
        Device the kernel executes on.
    max_workers : int
        Worker threads used per call.
    """

    def __init__(
        self,
        program: Callable[..., float],
        linked: Callable[..., float],
        *,
        source: str,
        output: Sequence[int],
        functions: Sequence[KernelFunction],
        device: Device,
        max_workers: int = 1,
    ) -> None:
        self.program = program
        self.source = source
        self.output = list(output)
        self.functions = list(functions)
        self.device = device
        self.max_workers = max_workers
        self._linked = linked
        self._arity = program.__code__.co_argcount - 1

    @property
    def array_shape(self) -> Tuple[int, ...]:
        """NumPy shape of the tensors this kernel reads and produces."""
        return tuple(reversed(self.output))

    def __call__(self, *tensors: Any) -> np.ndarray:
        if len(tensors) != self._arity:
            raise TypeError(
                f"{self.program.__name__} expects {self._arity} tensor "
                f"argument(s), got {len(tensors)}"
            )
        expected = self.array_shape
        args = [
            as_tensor(t, expected, f"argument {i} of {self.program.__name__}").tolist()
            for i, t in enumerate(tensors)
        ]
        return _cpu_backend.run(
            self._linked, self.output, args, max_workers=self.max_workers
        )

    def __repr__(self) -> str:
        names = [f.name for f in self.functions]
        return (
            f"CompiledKernel({self.program.__name__}, output={self.output}, "
            f"functions={names}, device={str(self.device)!r})"
        )
