from ._compiled import CompiledKernel
from ._dispatcher import KernelDispatcher
from ._setup import default_dispatcher, get_dispatcher, setup, teardown
from ._slot import KernelSlot, KernelState
from ._thread import Thread

__all__ = [
    "CompiledKernel",
    "KernelDispatcher",
    "KernelSlot",
    "KernelState",
    "Thread",
    "default_dispatcher",
    "get_dispatcher",
    "setup",
    "teardown",
]
