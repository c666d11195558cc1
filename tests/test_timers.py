from chip8vm.timers import TimerUnit


def test_tick_clamps_at_zero():
    timers = TimerUnit()
    timers.delay = 1
    timers.sound = 0
    timers.tick()
    timers.tick()
    assert timers.delay == 0
    assert timers.sound == 0


def test_advance_counts_whole_periods():
    timers = TimerUnit(rate_hz=10)
    timers.delay = 50
    timers.sound = 3

    assert timers.advance(0.25) == 2
    assert timers.delay == 48
    assert timers.sound == 1
    assert timers.sound_active


def test_advance_carries_remainder():
    timers = TimerUnit(rate_hz=4)
    timers.delay = 10

    assert timers.advance(0.125) == 0
    assert timers.delay == 10
    assert timers.advance(0.125) == 1
    assert timers.delay == 9


def test_sound_stops_at_zero():
    timers = TimerUnit(rate_hz=4)
    timers.sound = 1
    timers.advance(1.0)
    assert timers.sound == 0
    assert not timers.sound_active
