from __future__ import annotations

from typing import List

KEY_COUNT = 16


class Keypad:
    """Sixteen level-triggered keys, 0x0-0xF.

    The host sets and releases keys between steps; the interpreter only reads.
    """

    def __init__(self):
        self.keys: List[bool] = [False] * KEY_COUNT

    @staticmethod
    def _validate(key: int):
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"No such key: {key:#x}")

    def press(self, key: int):
        self._validate(key)
        self.keys[key] = True

    def release(self, key: int):
        self._validate(key)
        self.keys[key] = False

    def clear(self):
        self.keys = [False] * KEY_COUNT

    def is_pressed(self, key: int) -> bool:
        if 0 <= key < KEY_COUNT:
            return self.keys[key]
        return False

    def first_pressed(self) -> int | None:
        for i in range(KEY_COUNT):
            if self.keys[i]:
                return i
        return None
