"""Monochrome 64x32 display memory."""
from __future__ import annotations

from typing import List, Tuple

import numpy as np

from .constants import SCREEN_H, SCREEN_W


class Framebuffer:
    def __init__(self, width: int = SCREEN_W, height: int = SCREEN_H):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint8)
        self.dirty = True

    def clear(self):
        self.pixels.fill(0)
        self.dirty = True

    def pixel(self, x: int, y: int) -> int:
        return int(self.pixels[y % self.height, x % self.width])

    def draw_sprite(self, x_pos: int, y_pos: int, rows: bytes) -> bool:
        """XOR ``rows`` onto the screen with its top-left corner at (x_pos, y_pos).

        Each byte is one row, most significant bit leftmost. Rows and columns
        wrap around the screen edges pixel by pixel. Returns True when any
        lit pixel was switched off.
        """
        sprite = np.unpackbits(np.frombuffer(bytes(rows), dtype=np.uint8)[:, None], axis=1)
        ys = (y_pos + np.arange(sprite.shape[0])) % self.height
        xs = (x_pos + np.arange(8)) % self.width
        # sprites are at most 15x8, so the wrapped indices never repeat
        block = np.ix_(ys, xs)
        target = self.pixels[block]
        collision = bool(np.any(target & sprite))
        self.pixels[block] = target ^ sprite
        self.dirty = True
        return collision

    def lit_pixels(self) -> List[Tuple[int, int]]:
        return [(int(x), int(y)) for y, x in np.argwhere(self.pixels)]
