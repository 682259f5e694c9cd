import pytest

from yume6502.bus import Bus, RamBus


def test_bus_is_abstract():
    with pytest.raises(TypeError):
        Bus()


def test_write_read_round_trip():
    bus = RamBus()
    bus.write(0x6124, 0x94)
    assert bus.read(0x6124) == 0x94


def test_memory_starts_zeroed():
    bus = RamBus()
    assert [bus.read(a) for a in (0x0000, 0x8000, 0xFFFF)] == [0, 0, 0]


def test_address_wraps_to_sixteen_bits():
    bus = RamBus()
    bus.write(0x10000 + 0x21, 0x28)
    assert bus.read(0x21) == 0x28


def test_load_places_program_at_start():
    bus = RamBus()
    program = [0xA9, 0x28, 0x69, 0x15, 0x00]
    bus.load(program, 0x0600)
    assert [bus.read(0x0600 + i) for i in range(len(program))] == program
    assert bus.read(0x05FF) == 0


def test_load_defaults_to_address_zero():
    bus = RamBus()
    bus.load(bytes([0xA2, 0x77]))
    assert bus.read(0) == 0xA2
    assert bus.read(1) == 0x77


def test_load_past_end_raises():
    bus = RamBus()
    with pytest.raises(ValueError):
        bus.load([0xEA, 0xEA], 0xFFFF)


def test_load_rejects_non_byte_values():
    bus = RamBus()
    with pytest.raises(ValueError):
        bus.load([0x100])


def test_nmi_is_taken_once():
    bus = RamBus()
    assert bus.take_nmi() is False
    bus.request_nmi()
    assert bus.take_nmi() is True
    assert bus.take_nmi() is False


def test_clear_zeroes_memory():
    bus = RamBus()
    bus.load([0xA9, 0xAE, 0x8D], 0xC8F8)
    bus.clear()
    assert [bus.read(0xC8F8 + i) for i in range(3)] == [0, 0, 0]