"""A cycle-counting MOS 6502 CPU core with a pluggable memory bus."""

__version__ = "0.1.0"
__all__ = ["bus", "cpu", "instructions", "status"]