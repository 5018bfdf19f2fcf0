#!/usr/bin/env python3

"""
Delay and Sound Timers

Both timers count down at 60Hz, no matter how many instructions the CPU runs
each second.  Rather than tying them to wall-clock time, each CPU cycle adds
60 / cycle_rate of a tick to an accumulator, and whole ticks are peeled off as
they build up.  This keeps the timers deterministic: N cycles at
a rate of R instructions per second always remove exactly floor(N * 60 / R)
ticks, which is what the test suites need.

The accumulator is held as an integer numerator over the cycle rate, so no
floating point drift builds up over long runs.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import TIMER_FREQ, DEFAULT_CLOCK_SPEED


class TimersError(Exception):
    pass


class Timers:
    def __init__(self, cycle_rate=DEFAULT_CLOCK_SPEED):
        if cycle_rate <= 0:
            raise TimersError("Cycle rate must be a positive number of instructions per second")

        self.cycle_rate = cycle_rate
        self.reset()

    def reset(self):
        self.dt = 0     # Delay timer (byte)
        self.st = 0     # Sound timer (byte)
        self.accum = 0  # Fractional progress towards the next tick, in units of 1/cycle_rate

    def advance(self):
        # Called once per CPU cycle.  Returns the number of whole ticks applied.
        self.accum += TIMER_FREQ
        ticks, self.accum = divmod(self.accum, self.cycle_rate)

        if ticks:
            self.tick(ticks)

        return ticks

    def tick(self, count=1):
        self.dt = max(0, self.dt - count)
        self.st = max(0, self.st - count)

    def set_delay(self, value):
        self.dt = value & 0xFF

    def set_sound(self, value):
        self.st = value & 0xFF

    def is_sound_active(self):
        return self.st > 0
