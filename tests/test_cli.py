import contextlib
import io

import pytest

from chip8vm import cli
from chip8vm.constants import MAX_PROGRAM_SIZE, PROGRAM_START, STACK_DEPTH, STACK_LIMIT
from chip8vm.errors import ProgramTooLarge
from chip8vm.machine import Chip8

from .conftest import assemble


class FakeFrontend:
    """Stands in for the pygame window for a fixed number of frames."""

    def __init__(self, chip8, frames, steps=()):
        self.chip8 = chip8
        self.frames = frames
        self.steps = list(steps)
        self.step_requested = False
        self.rendered = 0

    def handle_events(self):
        if self.frames == 0:
            return False
        self.frames -= 1
        if self.steps:
            self.step_requested = self.steps.pop(0)
        return True

    def render(self):
        self.rendered += 1

    def tick(self, fps):
        return 1 / fps


@pytest.fixture
def rom(tmp_path):
    path = tmp_path / "prog.ch8"
    path.write_bytes(assemble(0x6005, 0x00E0, 0x1202))
    return path


def test_load_program(rom):
    assert cli.load_program(str(rom)) == assemble(0x6005, 0x00E0, 0x1202)


def test_load_program_too_large(tmp_path):
    path = tmp_path / "big.ch8"
    path.write_bytes(bytes(MAX_PROGRAM_SIZE + 1))
    with pytest.raises(ProgramTooLarge):
        cli.load_program(str(path))


def test_print_listing():
    out = io.StringIO()
    cli.print_listing(assemble(0x6005, 0xF0FF), out)
    assert out.getvalue().splitlines() == [
        "200  6005  LD V0, #$05",
        "202  F0FF  F0FF not implemented",
    ]


def test_main_disassemble(rom, capsys):
    assert cli.main([str(rom), "--disassemble"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "200  6005  LD V0, #$05",
        "202  00E0  CLS",
        "204  1202  JP $202",
    ]


def test_main_missing_rom(tmp_path):
    assert cli.main([str(tmp_path / "nope.ch8")]) == 1


def test_parser_defaults():
    args = cli.build_parser().parse_args(["game.ch8"])
    assert args.clock == 700
    assert args.scale == 15
    assert not args.step
    assert not args.no_index_increment


def test_run_free_running_ticks_timers_by_frame():
    chip8 = Chip8.from_program(assemble(0x7001, 0x1200))
    chip8.timers.delay = 10
    frontend = FakeFrontend(chip8, frames=3)

    cli.run(chip8, frontend, clock_hz=600)

    # 10 cycles per frame, alternating ADD and JP
    assert chip8.V[0] == 15
    assert chip8.timers.delay == 7
    assert frontend.rendered == 3


def test_run_step_mode_waits_for_request():
    chip8 = Chip8.from_program(assemble(0x7001, 0x7001, 0x7001))
    frontend = FakeFrontend(chip8, frames=4, steps=[False, True, False, True])

    cli.run(chip8, frontend, clock_hz=600, step_mode=True)

    assert chip8.V[0] == 2


def test_print_listing_follows_redirected_stdout():
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        cli.print_listing(assemble(0x00EE))
    assert out.getvalue() == "200  00EE  RET\n"


def test_largest_program_is_not_overwritten_by_the_stack(tmp_path):
    # fill to the limit, ending with LD VA, #$12 just below the stack
    image = bytearray(MAX_PROGRAM_SIZE)
    image[0:2] = (0x2204).to_bytes(2, "big")
    image[-2:] = (0x6A12).to_bytes(2, "big")
    path = tmp_path / "full.ch8"
    path.write_bytes(bytes(image))

    chip8 = Chip8.from_program(cli.load_program(str(path)))
    last = PROGRAM_START + MAX_PROGRAM_SIZE - 2
    assert last + 2 <= STACK_LIMIT

    for _ in range(STACK_DEPTH):
        chip8.pc = PROGRAM_START
        chip8.step()
    assert chip8.memory.read_block(PROGRAM_START, MAX_PROGRAM_SIZE) == bytes(image)
    assert chip8.memory.read_word(last) == 0x6A12
