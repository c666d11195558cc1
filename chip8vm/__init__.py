"""CHIP-8 interpreter with a pygame frontend."""

from .decoder import Instruction, Op, decode
from .disassembler import disassemble, format_instruction
from .errors import AddressFault, Chip8Error, ProgramTooLarge, StackFault
from .machine import Chip8

__version__ = "0.1.0"
