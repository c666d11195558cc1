"""Mnemonic rendering for traces and program listings.

Works purely on decoded instructions and raw bytes; it never touches a
running machine.
"""
from __future__ import annotations

from typing import Iterator, Tuple

from .constants import INSTRUCTION_SIZE, PROGRAM_START
from .decoder import Instruction, Op, decode_bytes

FORMATS = {
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP ${nnn:03X}",
    Op.CALL: "CALL ${nnn:03X}",
    Op.SE_BYTE: "SE V{x:X}, #${kk:02X}",
    Op.SNE_BYTE: "SNE V{x:X}, #${kk:02X}",
    Op.SE_REG: "SE V{x:X}, V{y:X}",
    Op.LD_BYTE: "LD V{x:X}, #${kk:02X}",
    Op.ADD_BYTE: "ADD V{x:X}, #${kk:02X}",
    Op.LD_REG: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_REG: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}, V{y:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}, V{y:X}",
    Op.SNE_REG: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, ${nnn:03X}",
    Op.JP_V0: "JP V0, ${nnn:03X}",
    Op.RND: "RND V{x:X}, #${kk:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, #${n:X}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I_VX: "ADD I, V{x:X}",
    Op.LD_F_VX: "LD F, V{x:X}",
    Op.LD_B_VX: "LD B, V{x:X}",
    Op.STORE: "LD [I], V{x:X}",
    Op.LOAD: "LD V{x:X}, [I]",
    Op.UNKNOWN: "{raw:04X} not implemented",
}


def format_instruction(ins: Instruction) -> str:
    return FORMATS[ins.op].format(
        x=ins.x, y=ins.y, n=ins.n, kk=ins.kk, nnn=ins.nnn, raw=ins.raw)


def disassemble(data: bytes, offset: int = 0) -> Tuple[str, int]:
    """Render the instruction at ``data[offset]``.

    Returns the text and the number of bytes consumed, which is always
    INSTRUCTION_SIZE, unknown opcodes included.
    """
    ins = decode_bytes(data[offset], data[offset + 1])
    return format_instruction(ins), INSTRUCTION_SIZE


def iter_listing(data: bytes, origin: int = PROGRAM_START) -> Iterator[Tuple[int, int, str]]:
    """Yield ``(address, word, text)`` for every whole instruction in ``data``.

    ``origin`` is the address the first byte is loaded at. A trailing odd
    byte is not listed.
    """
    offset = 0
    while offset + 1 < len(data):
        text, size = disassemble(data, offset)
        yield origin + offset, (data[offset] << 8) | data[offset + 1], text
        offset += size
