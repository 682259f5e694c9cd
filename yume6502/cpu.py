"""A cycle-stepped 6502 core driven over a memory bus."""

from __future__ import annotations

from collections.abc import Callable

from .bus import Bus
from .instructions import AddressingMode, Instruction, Mnemonic, decode
from .status import StatusRegister

_STACK_BASE = 0x0100
_NMI_VECTOR = 0xFFFA
_RESET_VECTOR = 0xFFFC
_IRQ_VECTOR = 0xFFFE

_PPU_REGISTERS_START = 0x2000
_APU_AND_IO_START = 0x4000
_UNREADABLE_MARKER = 0xAA

_POWER_ON_STACK = 0xFD
_POWER_ON_STATUS = 0x34


def _page_crossed(first: int, second: int) -> bool:
    return (first & 0xFF00) != (second & 0xFF00)


def _is_negative(value: int) -> bool:
    return bool(value & 0x80)


def _sign_changed(a: bool, b: bool, result: bool) -> bool:
    return (a and b and not result) or (not (a or b) and result)


class CPU:
    """The 6502 processor: registers, flags and instruction execution."""

    def __init__(self, bus: Bus) -> None:
        self.bus = bus
        self.acc = 0
        self.x_reg = 0
        self.y_reg = 0
        self.stack_ptr = _POWER_ON_STACK
        self.pc = 0
        self.status = StatusRegister(_POWER_ON_STATUS)
        self.cycles_queued = 0
        self.cycles_executed = 0
        self.current_instruction: Instruction | None = None
        self.arg_address = 0
        self.branch_offset = 0

        mode = AddressingMode
        self._addressing: dict[AddressingMode, Callable[[], None]] = {
            mode.IMMEDIATE: self._mode_immediate,
            mode.ZERO_PAGE: self._mode_zero_page,
            mode.ZERO_PAGE_X: self._mode_zero_page_x,
            mode.ZERO_PAGE_Y: self._mode_zero_page_y,
            mode.RELATIVE: self._mode_relative,
            mode.ABSOLUTE: self._mode_absolute,
            mode.ABSOLUTE_X: self._mode_absolute_x,
            mode.ABSOLUTE_Y: self._mode_absolute_y,
            mode.INDIRECT: self._mode_indirect,
            mode.INDIRECT_X: self._mode_indirect_x,
            mode.INDIRECT_Y: self._mode_indirect_y,
        }
        self._operations: dict[Mnemonic, Callable[[], None]] = {
            mnemonic: getattr(self, f"_{mnemonic.name.lower()}") for mnemonic in Mnemonic
        }

    # Public interface

    def perform_cycle(self, debug_mode: bool = False) -> None:
        """Advance the processor by one clock cycle."""
        self.status.unused = True

        if self.cycles_queued == 0:
            self._next_instruction()
            if debug_mode:
                print(self.debug_line())
        else:
            self.cycles_queued -= 1
            self.cycles_executed += 1

        if self.bus.take_nmi():
            self.interrupt_nmi()

    def hard_reset(self) -> None:
        """Put registers in their power-on state and clear memory."""
        self.acc = 0
        self.x_reg = 0
        self.y_reg = 0
        self.stack_ptr = _POWER_ON_STACK
        self.pc = self._read_vector(_RESET_VECTOR)
        self.status.word = _POWER_ON_STATUS
        clear = getattr(self.bus, "clear", None)
        if clear is not None:
            clear()

    def interrupt_nmi(self) -> None:
        """Service a non-maskable interrupt."""
        self._process_interrupt()
        self.pc = self._read_vector(_NMI_VECTOR)

    def interrupt_irq(self) -> None:
        """Service a maskable interrupt unless interrupts are disabled."""
        if self.status.interrupt:
            return
        self._process_interrupt()
        self.pc = self._read_vector(_IRQ_VECTOR)

    def interrupt_reset(self) -> None:
        """Perform a soft reset."""
        self.stack_ptr = (self.stack_ptr - 3) & 0xFF
        self.pc = self._read_vector(_RESET_VECTOR)
        self.status.interrupt = True

    def debug_line(self) -> str:
        """Describe the last decoded instruction and the register state."""
        if self.current_instruction is None:
            raise RuntimeError("no instruction has been decoded yet")
        if _PPU_REGISTERS_START <= self.arg_address < _APU_AND_IO_START:
            memory = _UNREADABLE_MARKER
        else:
            memory = self.read(self.arg_address)
        return (
            f"[DEBUG CPU] CYCLE: {self.cycles_executed:<10}"
            f" | OPCODE: 0x{self.current_instruction.opcode:02X}"
            f" | ARG: 0x{self.arg_address:04X}"
            f" | MEM[ARG]: 0x{memory:02X}"
            f" || A: 0x{self.acc:02X}"
            f" | X: 0x{self.x_reg:02X}"
            f" | Y: 0x{self.y_reg:02X}"
            f" | S: 0x{self.stack_ptr:02X}"
            f" | PC: 0x{self.pc:04X}"
            f" | P: 0x{self.status.word:02X}"
        )

    def read(self, address: int) -> int:
        """Read a byte from the bus."""
        return self.bus.read(address & 0xFFFF)

    def write(self, address: int, data: int) -> None:
        """Write a byte to the bus."""
        self.bus.write(address & 0xFFFF, data & 0xFF)

    def run_until_brk(self, max_cycles: int = 1_000_000) -> int:
        """Step cycles until a BRK has been executed; return the cycles spent."""
        for spent in range(1, max_cycles + 1):
            self.perform_cycle()
            if self.current_instruction is not None and self.current_instruction.mnemonic is Mnemonic.BRK:
                return spent
        raise RuntimeError(f"no BRK reached within {max_cycles} cycles")

    # Internals

    def _read_vector(self, address: int) -> int:
        return (self.read(address + 1) << 8) | self.read(address)

    def _fetch(self) -> int:
        value = self.read(self.pc)
        self.pc = (self.pc + 1) & 0xFFFF
        return value

    def _push(self, data: int) -> None:
        self.write(_STACK_BASE + self.stack_ptr, data)
        self.stack_ptr = (self.stack_ptr - 1) & 0xFF

    def _pop(self) -> int:
        self.stack_ptr = (self.stack_ptr + 1) & 0xFF
        return self.read(_STACK_BASE + self.stack_ptr)

    def _push_word(self, word: int) -> None:
        self._push((word >> 8) & 0xFF)
        self._push(word & 0xFF)

    def _pop_word(self) -> int:
        lsb = self._pop()
        msb = self._pop()
        return (msb << 8) | lsb

    def _next_instruction(self) -> None:
        instruction = decode(self._fetch())
        self.current_instruction = instruction
        self.cycles_queued = instruction.cycles

        addressing = self._addressing.get(instruction.addressing_mode)
        if addressing is not None:
            addressing()
        self._operations[instruction.mnemonic]()

    def _process_interrupt(self, brk_flag: bool = False) -> None:
        self.status.brk = brk_flag
        self.status.unused = True
        self.status.interrupt = True
        self._push_word(self.pc)
        self._push(self.status.word)

    def _set_zn(self, value: int) -> None:
        self.status.zero = value == 0
        self.status.negative = _is_negative(value)

    def _operand(self) -> int:
        return self.read(self.arg_address)

    def _branch_if(self, condition: bool) -> None:
        if not condition:
            return
        if self.branch_offset & 0x80:
            self.branch_offset |= 0xFF00
        new_pc = (self.pc + self.branch_offset) & 0xFFFF
        self.cycles_queued += 2 if _page_crossed(self.pc, new_pc) else 1
        self.pc = new_pc

    def _modify(self, operation: Callable[[int], int]) -> None:
        """Apply a read-modify-write operation to A or to memory."""
        if self.current_instruction.addressing_mode is AddressingMode.ACCUMULATOR:
            self.acc = operation(self.acc)
            result = self.acc
        else:
            result = operation(self._operand())
            self.write(self.arg_address, result)
        self._set_zn(result)

    def _add(self, value: int) -> None:
        result = self.acc + value + int(self.status.carry)
        acc_sign = _is_negative(self.acc)
        value_sign = _is_negative(value)
        result_sign = _is_negative(result & 0xFF)
        self.acc = result & 0xFF
        self.status.carry = result & 0xFF00
        self.status.overflow = _sign_changed(acc_sign, value_sign, result_sign)
        self._set_zn(self.acc)

    def _compare(self, register: int) -> None:
        value = self._operand()
        self.status.carry = register >= value
        self._set_zn((register - value) & 0xFF)

    # Addressing modes

    def _mode_immediate(self) -> None:
        self.arg_address = self.pc
        self.pc = (self.pc + 1) & 0xFFFF

    def _mode_zero_page(self) -> None:
        self.arg_address = self._fetch() & 0xFF

    def _mode_zero_page_x(self) -> None:
        self.arg_address = (self._fetch() + self.x_reg) & 0xFF

    def _mode_zero_page_y(self) -> None:
        self.arg_address = (self._fetch() + self.y_reg) & 0xFF

    def _mode_relative(self) -> None:
        self.branch_offset = self._fetch()
        self.arg_address = self.branch_offset

    def _mode_absolute(self) -> None:
        lsb = self._fetch()
        msb = self._fetch()
        self.arg_address = (msb << 8) | lsb

    def _indexed_absolute(self, index: int) -> None:
        lsb = self._fetch()
        msb = self._fetch()
        base = (msb << 8) | lsb
        self.arg_address = (base + index) & 0xFFFF
        if _page_crossed(self.arg_address, base):
            self.cycles_queued += 1

    def _mode_absolute_x(self) -> None:
        self._indexed_absolute(self.x_reg)

    def _mode_absolute_y(self) -> None:
        self._indexed_absolute(self.y_reg)

    def _mode_indirect(self) -> None:
        lsb = self._fetch()
        msb = self._fetch()
        pointer = (msb << 8) | lsb
        # The pointer's high byte never carries into the next page.
        if lsb == 0xFF:
            msb = self.read(pointer & 0xFF00)
        else:
            msb = self.read(pointer + 1)
        lsb = self.read(pointer)
        self.arg_address = (msb << 8) | lsb

    def _mode_indirect_x(self) -> None:
        pointer = self._fetch() + self.x_reg
        lsb = self.read(pointer & 0xFF)
        msb = self.read((pointer + 1) & 0xFF)
        self.arg_address = (msb << 8) | lsb

    def _mode_indirect_y(self) -> None:
        pointer = self._fetch()
        lsb = self.read(pointer & 0xFF)
        msb = self.read((pointer + 1) & 0xFF)
        base = (msb << 8) | lsb
        self.arg_address = (base + self.y_reg) & 0xFFFF
        if _page_crossed(self.arg_address, base):
            self.cycles_queued += 1

    # Instructions

    def _adc(self) -> None:
        self._add(self._operand())

    def _sbc(self) -> None:
        self._add(~self._operand() & 0xFF)

    def _and(self) -> None:
        self.acc &= self._operand()
        self._set_zn(self.acc)

    def _eor(self) -> None:
        self.acc ^= self._operand()
        self._set_zn(self.acc)

    def _ora(self) -> None:
        self.acc |= self._operand()
        self._set_zn(self.acc)

    def _asl(self) -> None:
        def shift(value: int) -> int:
            self.status.carry = value & 0x80
            return (value << 1) & 0xFF

        self._modify(shift)

    def _lsr(self) -> None:
        def shift(value: int) -> int:
            self.status.carry = value & 0x01
            return value >> 1

        self._modify(shift)

    def _rol(self) -> None:
        old_carry = int(self.status.carry)

        def rotate(value: int) -> int:
            self.status.carry = value & 0x80
            return ((value << 1) | old_carry) & 0xFF

        self._modify(rotate)

    def _ror(self) -> None:
        old_carry = int(self.status.carry)

        def rotate(value: int) -> int:
            self.status.carry = value & 0x01
            return (value >> 1) | (old_carry << 7)

        self._modify(rotate)

    def _bcc(self) -> None:
        self._branch_if(not self.status.carry)

    def _bcs(self) -> None:
        self._branch_if(self.status.carry)

    def _beq(self) -> None:
        self._branch_if(self.status.zero)

    def _bne(self) -> None:
        self._branch_if(not self.status.zero)

    def _bmi(self) -> None:
        self._branch_if(self.status.negative)

    def _bpl(self) -> None:
        self._branch_if(not self.status.negative)

    def _bvc(self) -> None:
        self._branch_if(not self.status.overflow)

    def _bvs(self) -> None:
        self._branch_if(self.status.overflow)

    def _bit(self) -> None:
        value = self._operand()
        self.status.zero = (self.acc & value) == 0
        self.status.overflow = value & 0x40
        self.status.negative = _is_negative(value)

    def _brk(self) -> None:
        self._process_interrupt(brk_flag=True)
        self.pc = self._read_vector(_IRQ_VECTOR)

    def _clc(self) -> None:
        self.status.carry = False

    def _cld(self) -> None:
        self.status.decimal = False

    def _cli(self) -> None:
        self.status.interrupt = False

    def _clv(self) -> None:
        self.status.overflow = False

    def _sec(self) -> None:
        self.status.carry = True

    def _sed(self) -> None:
        self.status.decimal = True

    def _sei(self) -> None:
        self.status.interrupt = True

    def _cmp(self) -> None:
        self._compare(self.acc)

    def _cpx(self) -> None:
        self._compare(self.x_reg)

    def _cpy(self) -> None:
        self._compare(self.y_reg)

    def _dec(self) -> None:
        value = (self._operand() - 1) & 0xFF
        self.write(self.arg_address, value)
        self._set_zn(value)

    def _inc(self) -> None:
        value = (self._operand() + 1) & 0xFF
        self.write(self.arg_address, value)
        self._set_zn(value)

    def _dex(self) -> None:
        self.x_reg = (self.x_reg - 1) & 0xFF
        self._set_zn(self.x_reg)

    def _dey(self) -> None:
        self.y_reg = (self.y_reg - 1) & 0xFF
        self._set_zn(self.y_reg)

    def _inx(self) -> None:
        self.x_reg = (self.x_reg + 1) & 0xFF
        self._set_zn(self.x_reg)

    def _iny(self) -> None:
        self.y_reg = (self.y_reg + 1) & 0xFF
        self._set_zn(self.y_reg)

    def _jmp(self) -> None:
        self.pc = self.arg_address

    def _jsr(self) -> None:
        self._push_word((self.pc - 1) & 0xFFFF)
        self.pc = self.arg_address

    def _rts(self) -> None:
        self.pc = (self._pop_word() + 1) & 0xFFFF

    def _rti(self) -> None:
        self.status.word = self._pop()
        self.status.brk = False
        self.status.unused = False
        self.pc = self._pop_word()

    def _lda(self) -> None:
        self.acc = self._operand()
        self._set_zn(self.acc)

    def _ldx(self) -> None:
        self.x_reg = self._operand()
        self._set_zn(self.x_reg)

    def _ldy(self) -> None:
        self.y_reg = self._operand()
        self._set_zn(self.y_reg)

    def _sta(self) -> None:
        self.write(self.arg_address, self.acc)

    def _stx(self) -> None:
        self.write(self.arg_address, self.x_reg)

    def _sty(self) -> None:
        self.write(self.arg_address, self.y_reg)

    def _pha(self) -> None:
        self._push(self.acc)

    def _php(self) -> None:
        self.status.brk = True
        self.status.unused = True
        self._push(self.status.word)
        self.status.brk = False

    def _pla(self) -> None:
        self.acc = self._pop()
        self._set_zn(self.acc)

    def _plp(self) -> None:
        self.status.word = self._pop()
        self.status.brk = False

    def _tax(self) -> None:
        self.x_reg = self.acc
        self._set_zn(self.x_reg)

    def _tay(self) -> None:
        self.y_reg = self.acc
        self._set_zn(self.y_reg)

    def _tsx(self) -> None:
        self.x_reg = self.stack_ptr
        self._set_zn(self.x_reg)

    def _txa(self) -> None:
        self.acc = self.x_reg
        self._set_zn(self.acc)

    def _txs(self) -> None:
        self.stack_ptr = self.x_reg

    def _tya(self) -> None:
        self.acc = self.y_reg
        self._set_zn(self.acc)

    def _nop(self) -> None:
        pass

    def _ill(self) -> None:
        pass