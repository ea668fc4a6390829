"""
Kernel dispatcher contracts.

A kernel program is a plain Python function computing a single output cell.
Its first parameter is the cell coordinate (`thread.x`, `thread.y`,
`thread.z`); the remaining positional parameters are whole input tensors.
A dispatcher compiles such a program, together with the output bounds and
the named pure functions the program calls, into a callable that produces
the complete output tensor.

These Protocols keep layers decoupled from any concrete dispatcher so that
tests (or alternative backends) can substitute their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class KernelFunction:
    """
    A named pure function linked into a compiled kernel.

    Attributes
    ----------
    name : str
        Name the program uses to call the function.
    source : str
        Source text of the function, kept for introspection.
    fn : Callable[..., float]
        The function itself.
    """

    name: str
    source: str
    fn: Callable[..., float]


@runtime_checkable
class ICompiledKernel(Protocol):
    """
    A program bound to its output bounds and function dependencies.

    Calling it with the program's tensor arguments returns a new tensor
    shaped per `output`.
    """

    source: str
    output: List[int]
    functions: List[KernelFunction]

    def __call__(self, *tensors: Any) -> Any: ...


@runtime_checkable
class IKernelDispatcher(Protocol):
    """
    Compiles scalar per-cell programs into whole-tensor callables.
    """

    def compile(
        self,
        program: Callable[..., float],
        *,
        output: Sequence[int],
        functions: Sequence[Callable[..., float]] = (),
    ) -> ICompiledKernel: ...
