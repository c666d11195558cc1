"""Pygame window and keyboard for a running :class:`~chip8vm.machine.Chip8`.

Keyboard mapping (common layout):

  CHIP-8  =>  Keyboard
  1 2 3 C =>  1 2 3 4
  4 5 6 D =>  Q W E R
  7 8 9 E =>  A S D F
  A 0 B F =>  Z X C V
"""
from __future__ import annotations

import logging
import sys

try:
    import pygame
except ImportError:
    print("chip8vm requires pygame. Install with: pip install pygame", file=sys.stderr)
    raise

from .keypad import Keypad
from .machine import Chip8

logger = logging.getLogger(__name__)

# Keyboard mapping: CHIP-8 key index -> pygame key
KEYMAP = {
    0x0: pygame.K_x,
    0x1: pygame.K_1,
    0x2: pygame.K_2,
    0x3: pygame.K_3,
    0x4: pygame.K_q,
    0x5: pygame.K_w,
    0x6: pygame.K_e,
    0x7: pygame.K_a,
    0x8: pygame.K_s,
    0x9: pygame.K_d,
    0xA: pygame.K_z,
    0xB: pygame.K_c,
    0xC: pygame.K_4,
    0xD: pygame.K_r,
    0xE: pygame.K_f,
    0xF: pygame.K_v,
}
KEYS_BY_PYGAME = {pgk: k_idx for k_idx, pgk in KEYMAP.items()}

PIXEL_ON = (255, 255, 255)
PIXEL_OFF = (0, 0, 0)


def apply_key_event(keypad: Keypad, event) -> bool:
    """Mirror a KEYDOWN/KEYUP event onto the keypad.

    Returns True if the event was for a mapped key.
    """
    if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
        return False
    key = KEYS_BY_PYGAME.get(event.key)
    if key is None:
        return False
    if event.type == pygame.KEYDOWN:
        keypad.press(key)
    else:
        keypad.release(key)
    return True


class Frontend:
    def __init__(self, chip8: Chip8, scale: int = 10):
        self.chip8 = chip8
        self.scale = max(1, int(scale))
        fb = chip8.framebuffer
        self.surface = pygame.display.set_mode(
            (fb.width * self.scale, fb.height * self.scale))
        pygame.display.set_caption("chip8vm")
        logger.info("Display mode %d x %d", *self.surface.get_size())
        self.clock = pygame.time.Clock()
        # set by Space, consumed by the host loop in step mode
        self.step_requested = False

    def handle_events(self) -> bool:
        """Drain the event queue. Returns False once the user asked to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key == pygame.K_SPACE:
                    self.step_requested = True
            apply_key_event(self.chip8.keypad, event)
        return True

    def render(self):
        fb = self.chip8.framebuffer
        if not fb.dirty:
            return
        surf = self.surface
        surf.lock()
        surf.fill(PIXEL_OFF)
        pixel_size = self.scale
        for x, y in fb.lit_pixels():
            rect = pygame.Rect(x * pixel_size, y * pixel_size, pixel_size, pixel_size)
            pygame.draw.rect(surf, PIXEL_ON, rect)
        surf.unlock()
        pygame.display.flip()
        fb.dirty = False

    def tick(self, fps: int) -> float:
        """Cap the frame rate; returns the seconds since the previous tick."""
        return self.clock.tick(fps) / 1000.0
