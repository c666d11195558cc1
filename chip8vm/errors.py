"""Errors raised by the interpreter to its host.

Unknown opcodes are not errors: the executor logs them and moves on.
Register arithmetic wraps and never raises either.
"""
from __future__ import annotations


class Chip8Error(Exception):
    pass


class AddressFault(Chip8Error):
    def __init__(self, address: int, message: str | None = None):
        self.address = address
        super().__init__(message or f"Memory access out of range at {address:#05x}")


class StackFault(AddressFault):
    pass


class ProgramTooLarge(Chip8Error):
    pass
