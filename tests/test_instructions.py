import pytest

from yume6502.instructions import (
    BRK_INSTRUCTION,
    AddressingMode,
    Instruction,
    Mnemonic,
    decode,
)


def test_every_opcode_decodes_to_itself():
    for opcode in range(256):
        assert decode(opcode).opcode == opcode


def test_lda_immediate():
    instruction = decode(0xA9)
    assert instruction.mnemonic is Mnemonic.LDA
    assert instruction.addressing_mode is AddressingMode.IMMEDIATE
    assert instruction.cycles == 2


def test_brk_instruction():
    assert BRK_INSTRUCTION == decode(0x00)
    assert BRK_INSTRUCTION.mnemonic is Mnemonic.BRK
    assert BRK_INSTRUCTION.cycles == 7


def test_official_opcode_count():
    decoded = [decode(opcode) for opcode in range(256)]
    official = [i for i in decoded if i.mnemonic is not Mnemonic.ILL]
    assert len(official) == 151


def test_mnemonic_mode_pairs_are_unique():
    decoded = [decode(opcode) for opcode in range(256)]
    pairs = [(i.mnemonic, i.addressing_mode) for i in decoded if i.mnemonic is not Mnemonic.ILL]
    assert len(pairs) == 151
    assert len(pairs) == len(set(pairs))


@pytest.mark.parametrize("opcode,mnemonic", [(0x0A, Mnemonic.ASL), (0x4A, Mnemonic.LSR),
                                             (0x2A, Mnemonic.ROL), (0x6A, Mnemonic.ROR)])
def test_accumulator_shifts(opcode, mnemonic):
    instruction = decode(opcode)
    assert instruction.mnemonic is mnemonic
    assert instruction.addressing_mode is AddressingMode.ACCUMULATOR


@pytest.mark.parametrize("opcode", [0x90, 0xB0, 0xF0, 0x30, 0xD0, 0x10, 0x50, 0x70])
def test_branches_are_relative(opcode):
    assert decode(opcode).addressing_mode is AddressingMode.RELATIVE


def test_jmp_indirect_and_ldx_zero_page_y():
    assert decode(0x6C).addressing_mode is AddressingMode.INDIRECT
    assert decode(0xB6) == Instruction(0xB6, Mnemonic.LDX, AddressingMode.ZERO_PAGE_Y, decode(0xB6).cycles)


def test_undocumented_opcode_is_illegal():
    assert decode(0x02).mnemonic is Mnemonic.ILL


@pytest.mark.parametrize("bad", [-1, 256])
def test_out_of_range_raises(bad):
    with pytest.raises(ValueError):
        decode(bad)