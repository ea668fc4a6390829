"""
Process-wide kernel dispatcher.

Layers that are not handed a dispatcher explicitly compile their kernels with
the one installed here. `setup` installs a dispatcher, `teardown` removes it,
and `get_dispatcher` returns the installed dispatcher or builds a default one
from the environment on first use.

Environment variables
---------------------
KERNELNET_DEVICE : str, optional
    Device for the default dispatcher ("cpu" or "cuda:<index>").
    Defaults to "cpu".
KERNELNET_MAX_WORKERS : int, optional
    Worker threads for the default dispatcher. Defaults to 1.
"""

from __future__ import annotations

import os
import threading
from typing import Optional

from ...domain._kernel import IKernelDispatcher
from ._dispatcher import KernelDispatcher

_lock = threading.Lock()
_dispatcher: Optional[IKernelDispatcher] = None


def default_dispatcher() -> KernelDispatcher:
    """
    Build a dispatcher configured from the environment.

    Raises
    ------
    ValueError
        If `KERNELNET_DEVICE` or `KERNELNET_MAX_WORKERS` is malformed.
    """
    device = os.environ.get("KERNELNET_DEVICE", "cpu")
    raw_workers = os.environ.get("KERNELNET_MAX_WORKERS", "1")
    try:
        max_workers = int(raw_workers)
    except ValueError as e:
        raise ValueError(
            f"KERNELNET_MAX_WORKERS must be an integer, got {raw_workers!r}"
        ) from e
    return KernelDispatcher(device, max_workers=max_workers)


def setup(dispatcher: IKernelDispatcher) -> None:
    """Install `dispatcher` as the process-wide dispatcher."""
    global _dispatcher
    with _lock:
        _dispatcher = dispatcher


def teardown() -> None:
    """Remove the installed dispatcher."""
    global _dispatcher
    with _lock:
        _dispatcher = None


def get_dispatcher() -> IKernelDispatcher:
    """Return the installed dispatcher, installing a default one if needed."""
    global _dispatcher
    with _lock:
        if _dispatcher is None:
            _dispatcher = default_dispatcher()
        return _dispatcher
