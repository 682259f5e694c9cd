# yume6502

A MOS 6502 CPU core modelled on the processor inside the NES. It decodes the
official instruction set and runs it one instruction at a time. Each
instruction's cycle count is kept, including the extra cycles for page
crossings and taken branches. The core handles NMI, IRQ, BRK and reset. It
also reproduces the indirect `JMP` page-wrap bug.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

The CPU talks to memory through a bus. `RamBus` is a flat 64 KiB address
space, which is enough to run programs directly.

```python
from yume6502.bus import RamBus
from yume6502.cpu import CPU

bus = RamBus()
cpu = CPU(bus)

# LDA #$28 ; ADC #$73 ; BRK
bus.load(bytes([0xA9, 0x28, 0x69, 0x73, 0x00]), cpu.pc)
cpu.run_until_brk(10_000)

print(hex(cpu.acc))        # 0x9b
print(cpu.status.carry)    # False
```

### The CPU

`CPU(bus)` starts with A, X and Y at zero and S at `$FD`. P starts at `$34` and
PC at zero. The registers are the plain attributes `acc`, `x_reg`, `y_reg`,
`stack_ptr` and `pc`. The flags live in `status`.

- `perform_cycle(debug_mode=False)` advances one clock cycle. When the
  previous instruction has used up its cycles, the next opcode is fetched and
  executed in that cycle. With `debug_mode` set, a trace line is printed after
  each fetch. If the bus reports a pending NMI, it is serviced at the end of
  the cycle.
- `debug_line()` returns that trace line: cycle count, opcode, operand address,
  the byte there, and A, X, Y, S, PC and P. It reads `$AA` in place of memory
  for operand addresses in `$2000`–`$3FFF`. It raises `RuntimeError` if no
  instruction has been decoded yet.
- `run_until_brk(max_cycles=1_000_000)` steps cycles until a `BRK` has been
  executed and returns how many cycles that took. It raises `RuntimeError` if
  no `BRK` is reached within `max_cycles`.
- `read(address)` and `write(address, data)` go through the bus.
- `hard_reset()` restores the power-on registers and loads PC from the reset
  vector at `$FFFC`. If the bus has a `clear()` method, it then calls it.
- `interrupt_reset()` lowers S by three, loads PC from `$FFFC` and sets the
  interrupt-disable flag.
- `interrupt_nmi()` pushes PC and P and jumps through `$FFFA`.
- `interrupt_irq()` does the same through `$FFFE`, unless interrupts are
  disabled.

### Status flags

`yume6502.status.StatusRegister` holds P. Read or write it as a byte through
`word`, or as booleans through `carry`, `zero`, `interrupt`, `decimal`, `brk`,
`unused`, `overflow` and `negative`. `copy()` returns an independent register
with the same value. Two registers compare equal when their words match.

### Buses

`yume6502.bus.Bus` is the abstract interface. It has three methods: `read`,
`write`, and `take_nmi`, which reports a pending NMI and acknowledges it.
Subclass it to connect the CPU to other hardware.

`RamBus` implements it over 64 KiB of RAM:

- `load(program, start=0)` copies bytes into memory. It raises `ValueError` if
  they would not fit.
- `clear()` zeroes memory.
- `request_nmi()` raises the NMI line until the CPU takes it.

### Instruction table

`yume6502.instructions.decode(opcode)` returns the `Instruction` record for an
opcode byte: `opcode`, `mnemonic` (a `Mnemonic`), `addressing_mode` (an
`AddressingMode`) and the base `cycles`. An opcode outside 0–255 raises
`ValueError`. `INSTRUCTIONS` holds all 256 entries, and `BRK_INSTRUCTION` is
the entry for `$00`.

## What it does not do

- Undocumented opcodes decode as `Mnemonic.ILL`. They take two cycles and do
  nothing.
- The decimal flag can be set and cleared, but `ADC` and `SBC` always do
  binary arithmetic, as on the NES.
- This is only the CPU. There is no picture or sound hardware, no cartridge
  or ROM loading, no controller input, and no command-line program. Those
  would have to be supplied through your own `Bus` subclass.