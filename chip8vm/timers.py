"""Delay and sound timers, ticked by wall time rather than by instructions."""
from __future__ import annotations

from .constants import TIMER_HZ


class TimerUnit:
    def __init__(self, rate_hz: float = TIMER_HZ):
        self.rate_hz = rate_hz
        self.period = 1.0 / rate_hz
        self.delay = 0
        self.sound = 0
        self._elapsed = 0.0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def advance(self, seconds: float) -> int:
        """Account for ``seconds`` of wall time and apply every tick it covers.

        Leftover time below one period is carried into the next call.
        Returns the number of ticks applied.
        """
        self._elapsed += seconds
        ticks = int(self._elapsed // self.period)
        self._elapsed -= ticks * self.period
        for _ in range(ticks):
            self.tick()
        return ticks

    @property
    def sound_active(self) -> bool:
        return self.sound > 0
