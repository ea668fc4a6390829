"""
Wiring- and execution-related exceptions for kernelnet.

Every error defined here signals a deterministic programming mistake
(a mis-wired network, a kernel used before it was compiled, a tensor whose
dimensions disagree with the bounds a kernel was compiled for, or a device
with no backend). None of them is meant to be retried; callers are expected
to fix the wiring instead.
"""

from typing import Optional, Sequence


class ShapeMismatchError(ValueError):
    """
    Raised when a tensor's dimensions disagree with a kernel's output bounds.

    Attributes
    ----------
    expected : tuple[int, ...]
        NumPy-order shape the kernel was compiled for.
    actual : tuple[int, ...] | None
        NumPy-order shape that was received, or None if the argument is not
        rectangular.
    argument : str
        Name or position of the offending argument.
    """

    def __init__(
        self,
        expected: Sequence[int],
        actual: Optional[Sequence[int]],
        argument: str = "input",
    ) -> None:
        self.expected = tuple(expected)
        self.actual = None if actual is None else tuple(actual)
        self.argument = argument
        got = "a jagged array" if self.actual is None else f"shape {self.actual}"
        super().__init__(
            f"Shape mismatch for {argument}: expected {self.expected}, got {got}."
        )


class KernelNotCompiledError(RuntimeError):
    """
    Raised when a kernel handle is used before it has been compiled.

    Attributes
    ----------
    kernel : str
        Name of the kernel slot that was accessed (e.g. "predict_kernel").
    """

    def __init__(self, kernel: str) -> None:
        super().__init__(
            f"{kernel} has not been compiled; call setup_kernels() first."
        )
        self.kernel = kernel


class DeviceNotSupportedError(RuntimeError):
    """
    Raised when a kernel is requested on a device with no backend.

    Attributes
    ----------
    op : str
        The operation that was attempted (e.g. "compile").
    device : str
        String representation of the device.
    """

    def __init__(self, op: str, device: str) -> None:
        super().__init__(f"{op} is not implemented for device '{device}'.")
        self.op = op
        self.device = device


class InvalidShapeError(ValueError):
    """
    Raised when a layer shape cannot be derived from an upstream layer.

    Attributes
    ----------
    field : str
        The offending dimension name ("width", "height" or "depth").
    value : object
        The value that was found.
    """

    def __init__(self, field: str, value: object) -> None:
        super().__init__(
            f"Layer dimension {field!r} must be a positive integer, got {value!r}."
        )
        self.field = field
        self.value = value
