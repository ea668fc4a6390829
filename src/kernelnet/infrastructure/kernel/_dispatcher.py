"""
Reference kernel dispatcher.

`KernelDispatcher.compile` turns a scalar per-cell program into a
`CompiledKernel`:

1. The output bounds are validated (1 to 3 positive integers, dispatch order
   `[x, y(, z)]`).
2. Each function dependency is wrapped as a `KernelFunction` and linked into
   a private copy of the program's global namespace under its `__name__`.
   The program therefore calls exactly the functions it was compiled with.
3. The target device is resolved. Only host execution is implemented; a
   CUDA device either falls back to the CPU with a `RuntimeWarning` or
   raises `DeviceNotSupportedError`, depending on `fallback`.

Usage
-----
    dispatcher = KernelDispatcher("cpu", max_workers=4)
    kernel = dispatcher.compile(predict_2d, output=[4, 3], functions=[activate])
    result = kernel(inputs)
"""

from __future__ import annotations

import inspect
import textwrap
import types
import warnings
from typing import Callable, List, Sequence, Union

from ...domain._device import Device
from ...domain._errors import DeviceNotSupportedError
from ...domain._kernel import KernelFunction
from ._compiled import CompiledKernel


def source_of(fn: Callable[..., object]) -> str:
    """Return the dedented source text of `fn`, or "" if it is unavailable."""
    try:
        return textwrap.dedent(inspect.getsource(fn))
    except (OSError, TypeError):
        return ""


def _validate_output(output: Sequence[int]) -> List[int]:
    dims = list(output)
    if not 1 <= len(dims) <= 3:
        raise ValueError(f"output must have 1 to 3 dimensions, got {dims}")
    for d in dims:
        if isinstance(d, bool) or not isinstance(d, int) or d <= 0:
            raise ValueError(f"output dimensions must be positive integers, got {dims}")
    return dims


def link(
    program: Callable[..., float], functions: Sequence[KernelFunction]
) -> Callable[..., float]:
    """
    Return a copy of `program` whose global lookups resolve each function
    dependency by name before falling back to the program's own module.
    """
    namespace = dict(program.__globals__)
    namespace.update({f.name: f.fn for f in functions})
    linked = types.FunctionType(
        program.__code__,
        namespace,
        program.__name__,
        program.__defaults__,
        program.__closure__,
    )
    linked.__kwdefaults__ = program.__kwdefaults__
    return linked


class KernelDispatcher:
    """
    Compiles per-cell programs for a device.

    Parameters
    ----------
    device : str | Device, optional
        Target device. Defaults to "cpu".
    max_workers : int, optional
        Worker threads each compiled kernel uses per call. Defaults to 1.
    fallback : bool, optional
        If True (default), kernels requested on a device without a backend
        run on the CPU after a `RuntimeWarning`. If False, compilation raises
        `DeviceNotSupportedError` instead.
    """

    def __init__(
        self,
        device: Union[str, Device] = "cpu",
        *,
        max_workers: int = 1,
        fallback: bool = True,
    ) -> None:
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers!r}")
        self.device = Device.coerce(device)
        self.max_workers = max_workers
        self.fallback = fallback

    def _resolve_device(self) -> Device:
        if self.device.is_cpu():
            return self.device
        if not self.fallback:
            raise DeviceNotSupportedError("compile", str(self.device))
        warnings.warn(
            f"kernelnet has no kernel backend for device '{self.device}'; "
            "falling back to CPU execution.",
            RuntimeWarning,
            stacklevel=3,
        )
        return Device("cpu")

    def compile(
        self,
        program: Callable[..., float],
        *,
        output: Sequence[int],
        functions: Sequence[Callable[..., float]] = (),
    ) -> CompiledKernel:
        """
        Compile `program` for the given output bounds.

        Parameters
        ----------
        program : Callable[..., float]
            Function `(thread, *tensors) -> float` computing one output cell.
        output : Sequence[int]
            Output bounds `[x, y(, z)]`.
        functions : Sequence[Callable[..., float]], optional
            Named pure functions the program calls.

        Returns
        -------
        CompiledKernel

        Raises
        ------
        ValueError
            If the bounds are invalid, or a dependency is anonymous or its
            name is registered twice.
        DeviceNotSupportedError
            If the device has no backend and `fallback` is False.
        """
        dims = _validate_output(output)

        deps: List[KernelFunction] = []
        for fn in functions:
            name = getattr(fn, "__name__", "")
            if not name.isidentifier():
                raise ValueError(f"kernel functions must be named, got {fn!r}")
            if any(d.name == name for d in deps):
                raise ValueError(f"kernel function {name!r} registered twice")
            deps.append(KernelFunction(name, source_of(fn), fn))

        device = self._resolve_device()

        return CompiledKernel(
            program,
            link(program, deps),
            source=source_of(program),
            output=dims,
            functions=deps,
            device=device,
            max_workers=self.max_workers,
        )

    def __repr__(self) -> str:
        return (
            f"KernelDispatcher(device={str(self.device)!r}, "
            f"max_workers={self.max_workers}, fallback={self.fallback})"
        )
