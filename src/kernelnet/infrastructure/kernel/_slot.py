"""
Two-state kernel lifecycle.

A layer owns one `KernelSlot` per kernel. The slot starts `UNCOMPILED` and
moves to `COMPILED` exactly once, through `compile`. Reading the handle (or
calling the slot) while uncompiled raises `KernelNotCompiledError` rather
than failing on a missing attribute.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional, Sequence

from ...domain._errors import KernelNotCompiledError
from ...domain._kernel import ICompiledKernel, IKernelDispatcher


class KernelState(Enum):
    UNCOMPILED = "uncompiled"
    COMPILED = "compiled"


class KernelSlot:
    """
    Holder for a lazily compiled kernel.

    Parameters
    ----------
    name : str
        Slot name used in error messages (e.g. "predict_kernel").
    """

    __slots__ = ("name", "_handle")

    def __init__(self, name: str) -> None:
        self.name = name
        self._handle: Optional[ICompiledKernel] = None

    @property
    def state(self) -> KernelState:
        return KernelState.UNCOMPILED if self._handle is None else KernelState.COMPILED

    @property
    def compiled(self) -> bool:
        return self._handle is not None

    @property
    def handle(self) -> ICompiledKernel:
        """
        The compiled kernel.

        Raises
        ------
        KernelNotCompiledError
            If the slot has not been compiled.
        """
        if self._handle is None:
            raise KernelNotCompiledError(self.name)
        return self._handle

    def compile(
        self,
        dispatcher: IKernelDispatcher,
        program: Callable[..., float],
        *,
        output: Sequence[int],
        functions: Sequence[Callable[..., float]] = (),
    ) -> ICompiledKernel:
        """
        Compile `program` with `dispatcher` and store the handle.

        Once compiled the slot keeps its handle; later calls return it
        without compiling again.
        """
        if self._handle is None:
            self._handle = dispatcher.compile(
                program, output=output, functions=functions
            )
        return self._handle

    def __call__(self, *tensors: Any) -> Any:
        return self.handle(*tensors)

    def __repr__(self) -> str:
        return f"KernelSlot({self.name!r}, state={self.state.value})"
