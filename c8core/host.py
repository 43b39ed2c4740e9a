#!/usr/bin/env python3

"""
Host Driver

Runs an Emulator in real time.  The emulator itself has no sense of time, so
this is where the clocks live:

    * Once per 60Hz frame, inputs are processed (key changes go straight to the
      emulator's key hooks), the timers are ticked, and the display is handed
      to the renderer if anything was drawn since the last frame.
    * Between frames, instructions are stepped at the configured clock speed.

The timers tick at 60Hz regardless of the clock speed, as on real hardware
the two aren't related.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from time import perf_counter
from .constants import DEFAULT_CLOCK_SPEED, TIMER_FREQ

FRAME_INTERVAL = 1.0 / TIMER_FREQ

logger = logging.getLogger(__name__)


class Host:
    def __init__(self, emulator, renderer, inputs, clock_speed=None):
        self.emulator = emulator
        self.renderer = renderer
        self.inputs = inputs

        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        # A clock speed of 0 means run as fast as possible
        self.core_interval = None if clock_speed <= 0 else 1.0 / clock_speed
        self.next_frame_time = 0
        self.frames = 0
        self.steps = 0

    def frame(self):
        # Returns True if the user asked to quit
        emulator = self.emulator

        if self.inputs.process_messages(emulator):
            return True

        emulator.tick()
        self.refresh_display()
        self.frames += 1
        return False

    def refresh_display(self):
        display = self.emulator.display

        if display.dirty:
            self.renderer.draw_frame(display.rows())
            display.dirty = False

    def run(self):
        # Returns the reason the emulator halted, or None if the user quit
        logger.info("Starting at 0x%03x", self.emulator.cpu.pc)

        try:
            while True:
                this_time = perf_counter()  # Do this first for maximum precision

                if this_time >= self.next_frame_time:
                    if self.frame():
                        logger.info("Quit requested after %d instructions", self.steps)
                        return None

                    self.next_frame_time = this_time + FRAME_INTERVAL

                if not self.emulator.step():
                    halt_reason = self.emulator.halt_reason
                    logger.info("Stopped after %d instructions: %s", self.steps, halt_reason.value)
                    return halt_reason

                self.steps += 1

                if self.core_interval is not None:
                    # Wait for the next instruction, taking into account the time spent on this one
                    next_time = this_time + self.core_interval

                    while perf_counter() < next_time:
                        pass
        finally:
            # Show whatever was drawn last, in case the loop ended mid-frame
            self.refresh_display()
