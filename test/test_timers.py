#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.timers import Timers, TimersError


class TestTimers(unittest.TestCase):
    def setUp(self):
        self.timers = Timers(700)

    def _advance(self, cycles):
        for _ in range(cycles):
            self.timers.advance()

    def test_timers_start_at_zero(self):
        self.assertEqual(0, self.timers.dt)
        self.assertEqual(0, self.timers.st)
        self.assertFalse(self.timers.is_sound_active())

    def test_timers_decay_rate(self):
        for cycle_rate in 60, 500, 700, 1000, 1234:
            for cycles in 1, 11, 12, 350, 699, 700, 701, 2000:
                timers = Timers(cycle_rate)
                timers.set_delay(0xFF)
                timers.set_sound(0xFF)

                for _ in range(cycles):
                    timers.advance()

                expected = max(0, 0xFF - (cycles * 60) // cycle_rate)
                self.assertEqual(expected, timers.dt, (cycle_rate, cycles))
                self.assertEqual(expected, timers.st, (cycle_rate, cycles))

    def test_timers_slow_cpu(self):
        # Below 60Hz, some cycles need to remove more than one tick
        timers = Timers(25)
        timers.set_delay(100)
        self.assertEqual(2, timers.advance())
        self.assertEqual(2, timers.advance())
        self.assertEqual(3, timers.advance())
        self.assertEqual(93, timers.dt)

    def test_timers_floor_at_zero(self):
        self.timers.set_delay(2)
        self._advance(7000)
        self.assertEqual(0, self.timers.dt)

    def test_timers_independent(self):
        self.timers.set_delay(10)
        self.timers.set_sound(3)
        self._advance(700)
        self.assertEqual(0, self.timers.st)
        self.assertEqual(0, self.timers.dt)
        self.timers.set_delay(100)
        self.timers.set_sound(61)
        self._advance(700)
        self.assertEqual(40, self.timers.dt)
        self.assertEqual(1, self.timers.st)
        self.assertTrue(self.timers.is_sound_active())

    def test_timers_set_masks_byte(self):
        self.timers.set_delay(0x1FF)
        self.assertEqual(0xFF, self.timers.dt)

    def test_timers_reset(self):
        self.timers.set_delay(5)
        self._advance(11)
        self.timers.reset()
        self.assertEqual(0, self.timers.dt)
        self.assertEqual(0, self.timers.accum)

    def test_timers_bad_rate(self):
        self.assertRaises(TimersError, Timers, 0)
