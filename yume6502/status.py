"""The 6502 processor status register."""

from __future__ import annotations


class _Flag:
    """One bit of the status word exposed as a boolean attribute."""

    def __init__(self, bit: int) -> None:
        self.mask = 1 << bit

    def __get__(self, obj: "StatusRegister | None", owner: type) -> "bool | _Flag":
        if obj is None:
            return self
        return bool(obj.word & self.mask)

    def __set__(self, obj: "StatusRegister", value: object) -> None:
        if value:
            obj.word = obj.word | self.mask
        else:
            obj.word = obj.word & ~self.mask


class StatusRegister:
    """Processor flags P, readable as a byte or as individual flags."""

    carry = _Flag(0)
    zero = _Flag(1)
    interrupt = _Flag(2)
    decimal = _Flag(3)
    brk = _Flag(4)
    unused = _Flag(5)
    overflow = _Flag(6)
    negative = _Flag(7)

    def __init__(self, word: int = 0) -> None:
        self.word = word

    @property
    def word(self) -> int:
        return self._word

    @word.setter
    def word(self, value: int) -> None:
        self._word = value & 0xFF

    def copy(self) -> "StatusRegister":
        """Return an independent register holding the same word."""
        return StatusRegister(self.word)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StatusRegister):
            return NotImplemented
        return self.word == other.word

    def __repr__(self) -> str:
        return f"StatusRegister(0x{self.word:02X})"