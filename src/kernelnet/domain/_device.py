"""
Execution device descriptors.

A kernel is always compiled for a specific device. This module provides
`DeviceType` (the device category) and `Device` (a validated, hashable
descriptor parsed from strings such as "cpu" or "cuda:0") so that
dispatchers can select a backend without depending on any accelerator
library.
"""

from enum import Enum
import re
from typing import Union

from typing_extensions import Self


class DeviceType(Enum):
    """
    Enumeration of supported device categories.

    Attributes
    ----------
    CPU : DeviceType
        Host execution.
    CUDA : DeviceType
        NVIDIA CUDA-enabled GPU.
    """

    CPU = "cpu"
    CUDA = "cuda"


class Device:
    """
    Concrete execution device descriptor.

    Parameters
    ----------
    device : str
        Either "cpu" or "cuda:<index>" with a non-negative integer index.

    Raises
    ------
    ValueError
        If the device string does not match a supported format.

    Notes
    -----
    Devices compare equal by value and are hashable, so they can be used as
    keys when registering backend implementations.
    """

    __slots__ = ("type", "index")

    _CUDA_PATTERN = re.compile(r"^cuda:(\d+)$")

    def __init__(self, device: str):
        if device == "cpu":
            self.type = DeviceType.CPU
            self.index = None
            return
        m = self._CUDA_PATTERN.match(device)
        if not m:
            raise ValueError(
                f"Invalid device '{device}'. Expected 'cpu' or 'cuda:<index>'"
            )
        self.type = DeviceType.CUDA
        self.index = int(m.group(1))

    @classmethod
    def coerce(cls, device: Union[str, "Device"]) -> Self:
        """Return `device` unchanged if it is a Device, otherwise parse it."""
        if isinstance(device, Device):
            return device
        return cls(str(device))

    def __str__(self) -> str:
        return "cpu" if self.type is DeviceType.CPU else f"cuda:{self.index}"

    def __repr__(self) -> str:
        return f"Device({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Device):
            return NotImplemented
        return self.type is other.type and self.index == other.index

    def __hash__(self) -> int:
        return hash((self.type, self.index))

    def is_cpu(self) -> bool:
        return self.type is DeviceType.CPU

    def is_cuda(self) -> bool:
        return self.type is DeviceType.CUDA
