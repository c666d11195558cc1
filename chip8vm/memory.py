"""Flat, bounds-checked address space."""
from __future__ import annotations

from .constants import FONT_ADDRESS, FONTSET, MEM_SIZE, MEMORY_HEADROOM, PROGRAM_START
from .errors import AddressFault


class AddressSpace:
    """Byte-addressable memory that never resizes and never wraps.

    Any access outside ``0 .. len(self) - 1`` raises :class:`AddressFault`.
    """

    def __init__(self, size: int = MEM_SIZE):
        self._data = bytearray(size)

    @classmethod
    def for_program(cls, image: bytes) -> AddressSpace:
        size = max(MEM_SIZE, PROGRAM_START + len(image) + MEMORY_HEADROOM)
        mem = cls(size)
        mem.load(FONT_ADDRESS, bytes(FONTSET))
        mem.load(PROGRAM_START, image)
        return mem

    def __len__(self) -> int:
        return len(self._data)

    def _check(self, address: int, count: int = 1):
        if address < 0 or address + count > len(self._data):
            raise AddressFault(address)

    def read(self, address: int) -> int:
        self._check(address)
        return self._data[address]

    def write(self, address: int, value: int):
        self._check(address)
        self._data[address] = value & 0xFF

    def read_word(self, address: int) -> int:
        self._check(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def write_word(self, address: int, value: int):
        self._check(address, 2)
        self._data[address] = (value >> 8) & 0xFF
        self._data[address + 1] = value & 0xFF

    def read_block(self, address: int, count: int) -> bytes:
        self._check(address, count)
        return bytes(self._data[address:address + count])

    def load(self, address: int, data: bytes):
        self._check(address, len(data))
        self._data[address:address + len(data)] = data
