import random

import pytest

from chip8vm.machine import Chip8


def assemble(*words: int) -> bytes:
    return b"".join(w.to_bytes(2, "big") for w in words)


@pytest.fixture
def machine():
    """Factory building a Chip8 whose program is the given opcode words."""
    def make(*words: int, **options) -> Chip8:
        options.setdefault("rng", random.Random(1234))
        return Chip8.from_program(assemble(*words), **options)
    return make
