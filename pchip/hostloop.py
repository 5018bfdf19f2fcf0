#!/usr/bin/env python3

"""
Host Loop

Drives the CPU in real time.  The CPU can potentially cycle at hundreds of
thousands of instructions every second, so this has to be as fast as possible.

Each pass around the loop:
    * Reports performance once a second (in the window title)
    * At 60Hz, processes host input messages, hands the held-key mask to the
      CPU and redraws the display from the framebuffer
    * Executes one CPU cycle
    * Busy-waits until the next instruction slot, if the speed is capped

Everything that touches the framebuffer or key mask happens between cycles,
never during one.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import APP_NAME

DISPLAY_FREQ = 60.0  # 60Hz emulated display refresh
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ


class HostLoop:
    def __init__(self, cpu, renderer, inputs, clock_speed=None):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs

        if clock_speed is None:
            # Run at the same rate the timers were calibrated against
            clock_speed = cpu.timers.cycle_rate

        # User can specify 0 for infinite
        self.core_interval = None if clock_speed <= 0 else 1.0 / clock_speed

        self.next_display_update_time = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.cycles_run = 0
        self.report_perf()

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)

    def refresh_display(self):
        # Render the whole screen.  Should be called whenever there will be a pause, a quit, or the display refresh
        # interval expires.
        self.renderer.refresh_display(self.cpu.framebuffer)

    def run(self, max_cycles=None):
        # Returns when the host asks to quit, or after max_cycles instruction slots (if given)
        cpu = self.cpu

        try:
            while max_cycles is None or self.cycles_run < max_cycles:
                this_time = perf_counter()  # Do this first for maximum precision

                # Performance counters
                if this_time >= self.next_perf_report_time:
                    self.next_perf_report_time = int(this_time) + 1.0
                    # Reporting the performance should be done before a refresh, as refreshing will likely show it
                    self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                    self.perf_counter_ops = 0
                    self.perf_counter_fps = 0

                # Prevent unnecessary display rendering in excess of host frame rate
                if this_time >= self.next_display_update_time:
                    if self.inputs.process_messages():  # Process inputs at 60Hz too, to avoid slowdown
                        return

                    cpu.set_keys(self.inputs.get_key_mask())
                    self.next_display_update_time = this_time + DISPLAY_INTERVAL
                    self.refresh_display()
                    self.perf_counter_fps += 1

                if cpu.cycle():
                    self.perf_counter_ops += 1

                self.cycles_run += 1

                if self.core_interval is not None:
                    # Wait for next CPU instruction.  Do this last for maximum precision (takes into account time spent
                    # on this instruction)
                    next_time = this_time + self.core_interval

                    while perf_counter() < next_time:  # Unfortunately we have to do this to get the timing right
                        pass
        finally:
            self.refresh_display()
