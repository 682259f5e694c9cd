"""Memory buses the CPU reads from and writes to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

ADDRESS_SPACE = 0x10000


class Bus(ABC):
    """Anything the CPU can address: memory, devices and the NMI line."""

    @abstractmethod
    def read(self, address: int) -> int:
        """Return the byte at a 16-bit address."""

    @abstractmethod
    def write(self, address: int, data: int) -> None:
        """Store a byte at a 16-bit address."""

    @abstractmethod
    def take_nmi(self) -> bool:
        """Report a pending non-maskable interrupt and acknowledge it."""


class RamBus(Bus):
    """A flat 64 KiB of RAM with a software-triggered NMI line."""

    def __init__(self) -> None:
        self._memory = bytearray(ADDRESS_SPACE)
        self._nmi_pending = False

    def read(self, address: int) -> int:
        return self._memory[address & 0xFFFF]

    def write(self, address: int, data: int) -> None:
        self._memory[address & 0xFFFF] = data & 0xFF

    def take_nmi(self) -> bool:
        pending = self._nmi_pending
        self._nmi_pending = False
        return pending

    def request_nmi(self) -> None:
        """Raise the NMI line until the CPU takes it."""
        self._nmi_pending = True

    def load(self, program: Iterable[int], start: int = 0) -> None:
        """Copy program bytes into memory beginning at start."""
        data = bytes(program)
        if not 0 <= start or start + len(data) > ADDRESS_SPACE:
            raise ValueError("program does not fit in the address space")
        self._memory[start:start + len(data)] = data

    def clear(self) -> None:
        """Zero the whole of memory."""
        self._memory[:] = bytes(ADDRESS_SPACE)