import pytest

from yume6502.status import StatusRegister

FLAGS = ["carry", "zero", "interrupt", "decimal", "brk", "unused", "overflow", "negative"]


def test_power_on_word_flags():
    status = StatusRegister(0x34)
    assert status.interrupt and status.brk and status.unused
    assert not (status.carry or status.zero or status.decimal or status.overflow or status.negative)


def test_default_is_clear():
    status = StatusRegister()
    assert status.word == 0
    assert [getattr(status, name) for name in FLAGS] == [False] * len(FLAGS)


@pytest.mark.parametrize("name", FLAGS)
def test_flag_set_and_clear_round_trip(name):
    status = StatusRegister(0x34)
    original = status.word
    setattr(status, name, 1)
    assert getattr(status, name) is True
    setattr(status, name, 0)
    assert getattr(status, name) is False
    setattr(status, name, (original & (1 << FLAGS.index(name))) != 0)
    assert status.word == original


def test_each_flag_is_a_distinct_bit():
    words = set()
    for name in FLAGS:
        status = StatusRegister()
        setattr(status, name, True)
        words.add(status.word)
    assert len(words) == len(FLAGS)
    combined = StatusRegister()
    for name in FLAGS:
        setattr(combined, name, True)
    assert combined.word == 0xFF


def test_word_is_masked_to_a_byte():
    status = StatusRegister()
    status.word = 0x134
    assert status == StatusRegister(0x34)


def test_copy_is_independent():
    status = StatusRegister(0x34)
    duplicate = status.copy()
    assert duplicate == status
    duplicate.carry = True
    assert status.carry is False
    assert duplicate.carry is True