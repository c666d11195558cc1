"""Command line entry point.

Run:
  chip8vm path/to/rom [--scale 15] [--clock 700] [--step] [--trace]
  chip8vm path/to/rom --disassemble
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, TextIO

import pygame

from .constants import DEFAULT_CLOCK_HZ, MAX_PROGRAM_SIZE, PROGRAM_START, TIMER_HZ
from .disassembler import iter_listing
from .errors import Chip8Error, ProgramTooLarge
from .frontend import Frontend
from .machine import Chip8

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CHIP-8 interpreter")
    parser.add_argument("rom", help="Path to CHIP-8 ROM")
    parser.add_argument("--scale", type=int, default=15,
                        help="Pixel scale factor (default 15)")
    parser.add_argument("--clock", type=int, default=DEFAULT_CLOCK_HZ,
                        help=f"CPU clock in Hz (default {DEFAULT_CLOCK_HZ})")
    parser.add_argument("--step", action="store_true",
                        help="Execute one instruction per press of Space")
    parser.add_argument("--trace", action="store_true",
                        help="Log every executed instruction")
    parser.add_argument("--debug", action="store_true",
                        help="Enable verbose debug logging")
    parser.add_argument("--disassemble", action="store_true",
                        help="Print a listing of the ROM and exit")
    parser.add_argument("--no-index-increment", action="store_true",
                        help="FX55/FX65 leave I unchanged")
    return parser


def load_program(path: str) -> bytes:
    with open(path, "rb") as f:
        image = f.read()
    if len(image) > MAX_PROGRAM_SIZE:
        raise ProgramTooLarge(
            f"Program is {len(image)} bytes, at most {MAX_PROGRAM_SIZE} fit")
    logger.info("Program length %d bytes", len(image))
    return image


def print_listing(image: bytes, out: Optional[TextIO] = None):
    if out is None:
        out = sys.stdout
    for address, word, text in iter_listing(image, PROGRAM_START):
        print(f"{address:03X}  {word:04X}  {text}", file=out)


def run(chip8: Chip8, frontend: Frontend, clock_hz: int, step_mode: bool = False):
    """Main emulation loop; returns when the window is closed."""
    cycles_per_frame = max(1, clock_hz // TIMER_HZ)
    while frontend.handle_events():
        if step_mode:
            if frontend.step_requested:
                frontend.step_requested = False
                chip8.step()
        else:
            chip8.run(cycles_per_frame)
        frontend.render()
        # Timers follow wall time, not the number of cycles run
        chip8.tick_timers(frontend.tick(TIMER_HZ))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    if args.trace:
        logging.getLogger("chip8vm.machine").setLevel(logging.DEBUG)

    try:
        image = load_program(args.rom)
    except (OSError, ProgramTooLarge) as e:
        logger.error("Cannot load %s: %s", args.rom, e)
        return 1

    if args.disassemble:
        print_listing(image)
        return 0

    chip8 = Chip8.from_program(image, store_increments_index=not args.no_index_increment)

    pygame.init()
    try:
        frontend = Frontend(chip8, scale=args.scale)
        logger.info("Emulation starting at %d Hz", args.clock)
        run(chip8, frontend, args.clock, step_mode=args.step)
    except Chip8Error as e:
        logger.error("Emulation halted: %s", e)
        logger.error("%s", chip8.describe())
        return 1
    finally:
        pygame.quit()
    logger.info("Emulation stopped")
    return 0
