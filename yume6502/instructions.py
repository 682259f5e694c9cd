"""6502 instruction set: mnemonics, addressing modes and the opcode table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class AddressingMode(Enum):
    """Ways an instruction locates its operand."""

    IMPLIED = auto()
    ACCUMULATOR = auto()
    IMMEDIATE = auto()
    ZERO_PAGE = auto()
    ZERO_PAGE_X = auto()
    ZERO_PAGE_Y = auto()
    RELATIVE = auto()
    ABSOLUTE = auto()
    ABSOLUTE_X = auto()
    ABSOLUTE_Y = auto()
    INDIRECT = auto()
    INDIRECT_X = auto()
    INDIRECT_Y = auto()


class Mnemonic(Enum):
    """Official 6502 operations, plus ILL for every undocumented opcode."""

    ADC = auto()
    AND = auto()
    ASL = auto()
    BCC = auto()
    BCS = auto()
    BEQ = auto()
    BIT = auto()
    BMI = auto()
    BNE = auto()
    BPL = auto()
    BRK = auto()
    BVC = auto()
    BVS = auto()
    CLC = auto()
    CLD = auto()
    CLI = auto()
    CLV = auto()
    CMP = auto()
    CPX = auto()
    CPY = auto()
    DEC = auto()
    DEX = auto()
    DEY = auto()
    EOR = auto()
    INC = auto()
    INX = auto()
    INY = auto()
    JMP = auto()
    JSR = auto()
    LDA = auto()
    LDX = auto()
    LDY = auto()
    LSR = auto()
    NOP = auto()
    ORA = auto()
    PHA = auto()
    PHP = auto()
    PLA = auto()
    PLP = auto()
    ROL = auto()
    ROR = auto()
    RTI = auto()
    RTS = auto()
    SBC = auto()
    SEC = auto()
    SED = auto()
    SEI = auto()
    STA = auto()
    STX = auto()
    STY = auto()
    TAX = auto()
    TAY = auto()
    TSX = auto()
    TXA = auto()
    TXS = auto()
    TYA = auto()
    ILL = auto()


@dataclass(frozen=True)
class Instruction:
    """One entry of the opcode table."""

    opcode: int
    mnemonic: Mnemonic
    addressing_mode: AddressingMode
    cycles: int


_M = AddressingMode
_IMP, _ACC, _IMM = _M.IMPLIED, _M.ACCUMULATOR, _M.IMMEDIATE
_ZP, _ZPX, _ZPY = _M.ZERO_PAGE, _M.ZERO_PAGE_X, _M.ZERO_PAGE_Y
_REL, _ABS, _ABX, _ABY = _M.RELATIVE, _M.ABSOLUTE, _M.ABSOLUTE_X, _M.ABSOLUTE_Y
_IND, _INX, _INY = _M.INDIRECT, _M.INDIRECT_X, _M.INDIRECT_Y

_ALU_MODES = (
    (_IMM, 2), (_ZP, 3), (_ZPX, 4), (_ABS, 4),
    (_ABX, 4), (_ABY, 4), (_INX, 6), (_INY, 5),
)
_SHIFT_MODES = ((_ACC, 2), (_ZP, 5), (_ZPX, 6), (_ABS, 6), (_ABX, 7))

_OFFICIAL: dict[Mnemonic, tuple[tuple[int, AddressingMode, int], ...]] = {
    Mnemonic.ADC: tuple(zip((0x69, 0x65, 0x75, 0x6D, 0x7D, 0x79, 0x61, 0x71), *zip(*_ALU_MODES))),
    Mnemonic.AND: tuple(zip((0x29, 0x25, 0x35, 0x2D, 0x3D, 0x39, 0x21, 0x31), *zip(*_ALU_MODES))),
    Mnemonic.CMP: tuple(zip((0xC9, 0xC5, 0xD5, 0xCD, 0xDD, 0xD9, 0xC1, 0xD1), *zip(*_ALU_MODES))),
    Mnemonic.EOR: tuple(zip((0x49, 0x45, 0x55, 0x4D, 0x5D, 0x59, 0x41, 0x51), *zip(*_ALU_MODES))),
    Mnemonic.LDA: tuple(zip((0xA9, 0xA5, 0xB5, 0xAD, 0xBD, 0xB9, 0xA1, 0xB1), *zip(*_ALU_MODES))),
    Mnemonic.ORA: tuple(zip((0x09, 0x05, 0x15, 0x0D, 0x1D, 0x19, 0x01, 0x11), *zip(*_ALU_MODES))),
    Mnemonic.SBC: tuple(zip((0xE9, 0xE5, 0xF5, 0xED, 0xFD, 0xF9, 0xE1, 0xF1), *zip(*_ALU_MODES))),
    Mnemonic.ASL: tuple(zip((0x0A, 0x06, 0x16, 0x0E, 0x1E), *zip(*_SHIFT_MODES))),
    Mnemonic.LSR: tuple(zip((0x4A, 0x46, 0x56, 0x4E, 0x5E), *zip(*_SHIFT_MODES))),
    Mnemonic.ROL: tuple(zip((0x2A, 0x26, 0x36, 0x2E, 0x3E), *zip(*_SHIFT_MODES))),
    Mnemonic.ROR: tuple(zip((0x6A, 0x66, 0x76, 0x6E, 0x7E), *zip(*_SHIFT_MODES))),
    Mnemonic.BCC: ((0x90, _REL, 2),),
    Mnemonic.BCS: ((0xB0, _REL, 2),),
    Mnemonic.BEQ: ((0xF0, _REL, 2),),
    Mnemonic.BMI: ((0x30, _REL, 2),),
    Mnemonic.BNE: ((0xD0, _REL, 2),),
    Mnemonic.BPL: ((0x10, _REL, 2),),
    Mnemonic.BVC: ((0x50, _REL, 2),),
    Mnemonic.BVS: ((0x70, _REL, 2),),
    Mnemonic.BIT: ((0x24, _ZP, 3), (0x2C, _ABS, 4)),
    Mnemonic.BRK: ((0x00, _IMP, 7),),
    Mnemonic.CLC: ((0x18, _IMP, 2),),
    Mnemonic.CLD: ((0xD8, _IMP, 2),),
    Mnemonic.CLI: ((0x58, _IMP, 2),),
    Mnemonic.CLV: ((0xB8, _IMP, 2),),
    Mnemonic.CPX: ((0xE0, _IMM, 2), (0xE4, _ZP, 3), (0xEC, _ABS, 4)),
    Mnemonic.CPY: ((0xC0, _IMM, 2), (0xC4, _ZP, 3), (0xCC, _ABS, 4)),
    Mnemonic.DEC: ((0xC6, _ZP, 5), (0xD6, _ZPX, 6), (0xCE, _ABS, 6), (0xDE, _ABX, 7)),
    Mnemonic.INC: ((0xE6, _ZP, 5), (0xF6, _ZPX, 6), (0xEE, _ABS, 6), (0xFE, _ABX, 7)),
    Mnemonic.DEX: ((0xCA, _IMP, 2),),
    Mnemonic.DEY: ((0x88, _IMP, 2),),
    Mnemonic.INX: ((0xE8, _IMP, 2),),
    Mnemonic.INY: ((0xC8, _IMP, 2),),
    Mnemonic.JMP: ((0x4C, _ABS, 3), (0x6C, _IND, 5)),
    Mnemonic.JSR: ((0x20, _ABS, 6),),
    Mnemonic.LDX: ((0xA2, _IMM, 2), (0xA6, _ZP, 3), (0xB6, _ZPY, 4), (0xAE, _ABS, 4), (0xBE, _ABY, 4)),
    Mnemonic.LDY: ((0xA0, _IMM, 2), (0xA4, _ZP, 3), (0xB4, _ZPX, 4), (0xAC, _ABS, 4), (0xBC, _ABX, 4)),
    Mnemonic.NOP: ((0xEA, _IMP, 2),),
    Mnemonic.PHA: ((0x48, _IMP, 3),),
    Mnemonic.PHP: ((0x08, _IMP, 3),),
    Mnemonic.PLA: ((0x68, _IMP, 4),),
    Mnemonic.PLP: ((0x28, _IMP, 4),),
    Mnemonic.RTI: ((0x40, _IMP, 6),),
    Mnemonic.RTS: ((0x60, _IMP, 6),),
    Mnemonic.SEC: ((0x38, _IMP, 2),),
    Mnemonic.SED: ((0xF8, _IMP, 2),),
    Mnemonic.SEI: ((0x78, _IMP, 2),),
    Mnemonic.STA: ((0x85, _ZP, 3), (0x95, _ZPX, 4), (0x8D, _ABS, 4), (0x9D, _ABX, 5),
                   (0x99, _ABY, 5), (0x81, _INX, 6), (0x91, _INY, 6)),
    Mnemonic.STX: ((0x86, _ZP, 3), (0x96, _ZPY, 4), (0x8E, _ABS, 4)),
    Mnemonic.STY: ((0x84, _ZP, 3), (0x94, _ZPX, 4), (0x8C, _ABS, 4)),
    Mnemonic.TAX: ((0xAA, _IMP, 2),),
    Mnemonic.TAY: ((0xA8, _IMP, 2),),
    Mnemonic.TSX: ((0xBA, _IMP, 2),),
    Mnemonic.TXA: ((0x8A, _IMP, 2),),
    Mnemonic.TXS: ((0x9A, _IMP, 2),),
    Mnemonic.TYA: ((0x98, _IMP, 2),),
}


def _build_table() -> tuple[Instruction, ...]:
    known = {
        opcode: Instruction(opcode, mnemonic, mode, cycles)
        for mnemonic, entries in _OFFICIAL.items()
        for opcode, mode, cycles in entries
    }
    return tuple(
        known.get(opcode, Instruction(opcode, Mnemonic.ILL, AddressingMode.IMPLIED, 2))
        for opcode in range(256)
    )


INSTRUCTIONS: tuple[Instruction, ...] = _build_table()


def decode(opcode: int) -> Instruction:
    """Return the table entry for an opcode byte."""
    if not 0 <= opcode <= 0xFF:
        raise ValueError(f"opcode out of range: {opcode!r}")
    return INSTRUCTIONS[opcode]


BRK_INSTRUCTION: Instruction = decode(0x00)