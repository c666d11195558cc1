import pytest

from chip8vm.constants import FONTSET, MEM_SIZE, MEMORY_HEADROOM, PROGRAM_START
from chip8vm.errors import AddressFault
from chip8vm.memory import AddressSpace


def test_layout_for_program():
    mem = AddressSpace.for_program(b"\x12\x34\x56")

    assert len(mem) == PROGRAM_START + 3 + MEMORY_HEADROOM
    assert mem.read_block(0, len(FONTSET)) == bytes(FONTSET)
    assert mem.read_block(PROGRAM_START, 3) == b"\x12\x34\x56"


def test_capacity_never_below_canonical_size():
    mem = AddressSpace.for_program(b"")
    assert len(mem) >= MEM_SIZE


def test_words_are_big_endian():
    mem = AddressSpace(16)
    mem.write_word(4, 0xABCD)

    assert mem.read(4) == 0xAB
    assert mem.read(5) == 0xCD
    assert mem.read_word(4) == 0xABCD


def test_write_masks_to_a_byte():
    mem = AddressSpace(4)
    mem.write(0, 0x1FF)
    assert mem.read(0) == 0xFF


@pytest.mark.parametrize("access", [
    lambda m: m.read(16),
    lambda m: m.read(-1),
    lambda m: m.write(16, 0),
    lambda m: m.read_word(15),
    lambda m: m.write_word(15, 0),
    lambda m: m.read_block(10, 7),
    lambda m: m.load(14, b"abc"),
])
def test_out_of_range_access_faults(access):
    mem = AddressSpace(16)
    with pytest.raises(AddressFault):
        access(mem)


def test_failed_load_writes_nothing():
    mem = AddressSpace(16)
    with pytest.raises(AddressFault) as excinfo:
        mem.load(14, b"abc")
    assert excinfo.value.address == 14
    assert mem.read_block(0, 16) == bytes(16)
