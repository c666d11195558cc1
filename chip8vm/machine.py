"""The CHIP-8 machine: state plus the fetch/decode/execute cycle."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from .constants import (FONT_ADDRESS, GLYPH_SIZE, INSTRUCTION_SIZE, PROGRAM_START,
                        STACK_LIMIT, STACK_TOP)
from .decoder import Instruction, Op, decode
from .disassembler import format_instruction
from .errors import Chip8Error, StackFault
from .framebuffer import Framebuffer
from .keypad import Keypad
from .memory import AddressSpace
from .timers import TimerUnit

logger = logging.getLogger(__name__)

FLAG = 0xF


@dataclass
class Chip8:
    memory: AddressSpace = field(default_factory=lambda: AddressSpace.for_program(b""))
    V: List[int] = field(default_factory=lambda: [0] * 16)  # registers V0..VF
    I: int = 0
    pc: int = PROGRAM_START
    sp: int = STACK_TOP
    timers: TimerUnit = field(default_factory=TimerUnit)
    keypad: Keypad = field(default_factory=Keypad)
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    # if False, FX55/FX65 leave I untouched (later interpreters' behavior)
    store_increments_index: bool = True
    rng: random.Random = field(default_factory=random.Random)
    # the LD Vx, K instruction being waited on, if any
    blocked_on: Instruction | None = None

    def __post_init__(self):
        self.instructions: Dict[Op, Callable[[Instruction], None]] = {
            Op.CLS: self._00E0,
            Op.RET: self._00EE,
            Op.JP: self._1nnn,
            Op.CALL: self._2nnn,
            Op.SE_BYTE: self._3xkk,
            Op.SNE_BYTE: self._4xkk,
            Op.SE_REG: self._5xy0,
            Op.LD_BYTE: self._6xkk,
            Op.ADD_BYTE: self._7xkk,
            Op.LD_REG: self._8xy0,
            Op.OR: self._8xy1,
            Op.AND: self._8xy2,
            Op.XOR: self._8xy3,
            Op.ADD_REG: self._8xy4,
            Op.SUB: self._8xy5,
            Op.SHR: self._8xy6,
            Op.SUBN: self._8xy7,
            Op.SHL: self._8xyE,
            Op.SNE_REG: self._9xy0,
            Op.LD_I: self._Annn,
            Op.JP_V0: self._Bnnn,
            Op.RND: self._Cxkk,
            Op.DRW: self._Dxyn,
            Op.SKP: self._Ex9E,
            Op.SKNP: self._ExA1,
            Op.LD_VX_DT: self._Fx07,
            Op.LD_VX_K: self._Fx0A,
            Op.LD_DT_VX: self._Fx15,
            Op.LD_ST_VX: self._Fx18,
            Op.ADD_I_VX: self._Fx1E,
            Op.LD_F_VX: self._Fx29,
            Op.LD_B_VX: self._Fx33,
            Op.STORE: self._Fx55,
            Op.LOAD: self._Fx65,
            Op.UNKNOWN: self._unknown,
        }

    @classmethod
    def from_program(cls, image: bytes, **options) -> Chip8:
        return cls(memory=AddressSpace.for_program(bytes(image)), **options)

    @property
    def waiting_for_key(self) -> bool:
        return self.blocked_on is not None

    # =============== Core fetch/decode/execute cycle ===============
    def fetch_opcode(self) -> int:
        return self.memory.read_word(self.pc)

    def step(self) -> Instruction | None:
        """Execute one instruction and return it.

        The step that reaches ``LD Vx, K`` with no key down returns that
        instruction and leaves the program counter on it. Later steps do
        nothing and return None until a key is down; the step that sees the
        key returns the completed ``LD Vx, K``. Faults leave the program
        counter on the faulting instruction.
        """
        if self.blocked_on is not None:
            return self._resume_key_wait()

        pc = self.pc
        ins = decode(self.fetch_opcode())
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%03X  %04X  %s", pc, ins.raw, format_instruction(ins))

        self.pc = pc + INSTRUCTION_SIZE
        try:
            self.instructions[ins.op](ins)
        except Chip8Error:
            self.pc = pc
            raise
        return ins

    def run(self, cycles: int):
        for _ in range(cycles):
            self.step()

    def tick_timers(self, seconds: float) -> int:
        return self.timers.advance(seconds)

    def describe(self) -> str:
        regs = " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(self.V))
        return (f"PC={self.pc:03X} I={self.I:03X} SP={self.sp:03X} "
                f"DT={self.timers.delay:02X} ST={self.timers.sound:02X} {regs}")

    def _resume_key_wait(self) -> Instruction | None:
        key = self.keypad.first_pressed()
        if key is None:
            return None
        ins = self.blocked_on
        self.V[ins.x] = key
        self.blocked_on = None
        self.pc += INSTRUCTION_SIZE
        logger.debug("Key %X released LD V%X, K", key, ins.x)
        return ins

    # =============== Instructions ===============
    def _unknown(self, ins: Instruction):
        logger.warning("Unknown opcode %04X at %03X", ins.raw, self.pc - INSTRUCTION_SIZE)

    def _00E0(self, ins: Instruction):  # CLS
        self.framebuffer.clear()

    def _00EE(self, ins: Instruction):  # RET
        if self.sp >= STACK_TOP:
            raise StackFault(self.sp, "Stack underflow on RET")
        self.pc = self.memory.read_word(self.sp)
        self.sp += INSTRUCTION_SIZE

    def _1nnn(self, ins: Instruction):  # JP addr
        self.pc = ins.nnn

    def _2nnn(self, ins: Instruction):  # CALL addr
        sp = self.sp - INSTRUCTION_SIZE
        if sp < STACK_LIMIT:
            raise StackFault(sp, "Stack overflow on CALL")
        self.memory.write_word(sp, self.pc)
        self.sp = sp
        self.pc = ins.nnn

    def _3xkk(self, ins: Instruction):  # SE Vx, byte
        if self.V[ins.x] == ins.kk:
            self.pc += INSTRUCTION_SIZE

    def _4xkk(self, ins: Instruction):  # SNE Vx, byte
        if self.V[ins.x] != ins.kk:
            self.pc += INSTRUCTION_SIZE

    def _5xy0(self, ins: Instruction):  # SE Vx, Vy
        if self.V[ins.x] == self.V[ins.y]:
            self.pc += INSTRUCTION_SIZE

    def _6xkk(self, ins: Instruction):  # LD Vx, byte
        self.V[ins.x] = ins.kk

    def _7xkk(self, ins: Instruction):  # ADD Vx, byte (VF untouched)
        self.V[ins.x] = (self.V[ins.x] + ins.kk) & 0xFF

    def _8xy0(self, ins: Instruction):  # LD Vx, Vy
        self.V[ins.x] = self.V[ins.y]

    def _8xy1(self, ins: Instruction):  # OR Vx, Vy
        self.V[ins.x] |= self.V[ins.y]

    def _8xy2(self, ins: Instruction):  # AND Vx, Vy
        self.V[ins.x] &= self.V[ins.y]

    def _8xy3(self, ins: Instruction):  # XOR Vx, Vy
        self.V[ins.x] ^= self.V[ins.y]

    # The flag-setting ALU ops read both operands up front, write Vx, then
    # VF. With x == 0xF the flag wins.
    def _8xy4(self, ins: Instruction):  # ADD Vx, Vy
        total = self.V[ins.x] + self.V[ins.y]
        self.V[ins.x] = total & 0xFF
        self.V[FLAG] = 1 if total > 0xFF else 0

    def _8xy5(self, ins: Instruction):  # SUB Vx, Vy (Vx = Vx - Vy)
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vx - vy) & 0xFF
        self.V[FLAG] = 1 if vx > vy else 0

    def _8xy6(self, ins: Instruction):  # SHR Vx {, Vy}
        vx = self.V[ins.x]
        self.V[ins.x] = vx >> 1
        self.V[FLAG] = vx & 0x1

    def _8xy7(self, ins: Instruction):  # SUBN Vx, Vy (Vx = Vy - Vx)
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vy - vx) & 0xFF
        self.V[FLAG] = 1 if vy > vx else 0

    def _8xyE(self, ins: Instruction):  # SHL Vx {, Vy}
        vx = self.V[ins.x]
        self.V[ins.x] = (vx << 1) & 0xFF
        self.V[FLAG] = (vx >> 7) & 0x1

    def _9xy0(self, ins: Instruction):  # SNE Vx, Vy
        if self.V[ins.x] != self.V[ins.y]:
            self.pc += INSTRUCTION_SIZE

    def _Annn(self, ins: Instruction):  # LD I, addr
        self.I = ins.nnn

    def _Bnnn(self, ins: Instruction):  # JP V0, addr
        self.pc = ins.nnn + self.V[0]

    def _Cxkk(self, ins: Instruction):  # RND Vx, byte
        self.V[ins.x] = self.rng.randint(0, 255) & ins.kk

    def _Dxyn(self, ins: Instruction):  # DRW Vx, Vy, nibble
        rows = self.memory.read_block(self.I, ins.n)
        collision = self.framebuffer.draw_sprite(self.V[ins.x], self.V[ins.y], rows)
        self.V[FLAG] = 1 if collision else 0

    def _Ex9E(self, ins: Instruction):  # SKP Vx
        if self.keypad.is_pressed(self.V[ins.x]):
            self.pc += INSTRUCTION_SIZE

    def _ExA1(self, ins: Instruction):  # SKNP Vx
        if not self.keypad.is_pressed(self.V[ins.x]):
            self.pc += INSTRUCTION_SIZE

    def _Fx07(self, ins: Instruction):  # LD Vx, DT
        self.V[ins.x] = self.timers.delay

    def _Fx0A(self, ins: Instruction):  # LD Vx, K
        key = self.keypad.first_pressed()
        if key is None:
            # Stay on this instruction; step() polls the keypad from now on
            self.pc -= INSTRUCTION_SIZE
            self.blocked_on = ins
            logger.debug("Waiting for key into V%X at %03X", ins.x, self.pc)
        else:
            self.V[ins.x] = key

    def _Fx15(self, ins: Instruction):  # LD DT, Vx
        self.timers.delay = self.V[ins.x]

    def _Fx18(self, ins: Instruction):  # LD ST, Vx
        self.timers.sound = self.V[ins.x]

    def _Fx1E(self, ins: Instruction):  # ADD I, Vx
        self.I = (self.I + self.V[ins.x]) & 0xFFFF

    def _Fx29(self, ins: Instruction):  # LD F, Vx
        self.I = FONT_ADDRESS + GLYPH_SIZE * (self.V[ins.x] & 0xF)

    def _Fx33(self, ins: Instruction):  # LD B, Vx
        val = self.V[ins.x]
        self.memory.load(self.I, bytes([val // 100, (val // 10) % 10, val % 10]))

    def _Fx55(self, ins: Instruction):  # LD [I], Vx
        self.memory.load(self.I, bytes(self.V[:ins.x + 1]))
        if self.store_increments_index:
            self.I = (self.I + ins.x + 1) & 0xFFFF

    def _Fx65(self, ins: Instruction):  # LD Vx, [I]
        self.V[:ins.x + 1] = list(self.memory.read_block(self.I, ins.x + 1))
        if self.store_increments_index:
            self.I = (self.I + ins.x + 1) & 0xFFFF
