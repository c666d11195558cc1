"""Opcode decoding shared by the executor and the disassembler.

Decoding is two-level: the high nibble picks one of 16 families and the
0x0, 0x8, 0xE and 0xF families then dispatch on the low byte (or its low
nibble). Anything without a table entry decodes to ``Op.UNKNOWN``.

Operand fields follow the usual naming::

    nnn - 12-bit address     kk - 8-bit immediate
    x/y - register indices   n  - 4-bit immediate
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Op(Enum):
    CLS = auto()       # 00E0
    RET = auto()       # 00EE
    JP = auto()        # 1nnn
    CALL = auto()      # 2nnn
    SE_BYTE = auto()   # 3xkk
    SNE_BYTE = auto()  # 4xkk
    SE_REG = auto()    # 5xy0
    LD_BYTE = auto()   # 6xkk
    ADD_BYTE = auto()  # 7xkk
    LD_REG = auto()    # 8xy0
    OR = auto()        # 8xy1
    AND = auto()       # 8xy2
    XOR = auto()       # 8xy3
    ADD_REG = auto()   # 8xy4
    SUB = auto()       # 8xy5
    SHR = auto()       # 8xy6
    SUBN = auto()      # 8xy7
    SHL = auto()       # 8xyE
    SNE_REG = auto()   # 9xy0
    LD_I = auto()      # Annn
    JP_V0 = auto()     # Bnnn
    RND = auto()       # Cxkk
    DRW = auto()       # Dxyn
    SKP = auto()       # Ex9E
    SKNP = auto()      # ExA1
    LD_VX_DT = auto()  # Fx07
    LD_VX_K = auto()   # Fx0A
    LD_DT_VX = auto()  # Fx15
    LD_ST_VX = auto()  # Fx18
    ADD_I_VX = auto()  # Fx1E
    LD_F_VX = auto()   # Fx29
    LD_B_VX = auto()   # Fx33
    STORE = auto()     # Fx55  LD [I], Vx
    LOAD = auto()      # Fx65  LD Vx, [I]
    UNKNOWN = auto()


# Families fully identified by their high nibble
FAMILIES = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_BYTE,
    0x4: Op.SNE_BYTE,
    0x5: Op.SE_REG,
    0x6: Op.LD_BYTE,
    0x7: Op.ADD_BYTE,
    0x9: Op.SNE_REG,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

# Second-level tables
SYSTEM_OPS = {0xE0: Op.CLS, 0xEE: Op.RET}  # low byte
ALU_OPS = {  # low nibble
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}
KEY_OPS = {0x9E: Op.SKP, 0xA1: Op.SKNP}  # low byte
MISC_OPS = {  # low byte
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX,
    0x29: Op.LD_F_VX,
    0x33: Op.LD_B_VX,
    0x55: Op.STORE,
    0x65: Op.LOAD,
}


@dataclass(frozen=True)
class Instruction:
    op: Op
    raw: int
    x: int
    y: int
    n: int
    kk: int
    nnn: int

    @property
    def is_unknown(self) -> bool:
        return self.op is Op.UNKNOWN


def _lookup(family: int, kk: int) -> Op:
    if family == 0x0:
        return SYSTEM_OPS.get(kk, Op.UNKNOWN)
    if family == 0x8:
        return ALU_OPS.get(kk & 0x0F, Op.UNKNOWN)
    if family == 0xE:
        return KEY_OPS.get(kk, Op.UNKNOWN)
    if family == 0xF:
        return MISC_OPS.get(kk, Op.UNKNOWN)
    return FAMILIES[family]


def decode(word: int) -> Instruction:
    """Decode a 16-bit opcode into an :class:`Instruction`."""
    word &= 0xFFFF
    kk = word & 0x00FF
    return Instruction(
        op=_lookup(word >> 12, kk),
        raw=word,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        kk=kk,
        nnn=word & 0x0FFF,
    )


def decode_bytes(hi: int, lo: int) -> Instruction:
    return decode((hi << 8) | lo)
