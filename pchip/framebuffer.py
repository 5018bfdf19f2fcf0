#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only drawn to the actual display (the host
rendering system) when the host loop decides to refresh, usually at 60Hz.  The
renderer re-reads the whole grid each time, so nothing here needs to track
which pixels have changed.

Unlike other computers, programs for this system cannot write directly into
video RAM.  Instead, sprites are drawn to the screen using an XOR method.

Collisions (where any pixel was set, but was unset by an XOR) are reported.
The sprite's origin wraps around the screen edges, but the sprite itself is
clipped at the right and bottom edges rather than wrapping.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT, SPRITE_WIDTH
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        # One byte per pixel, row-major, 0 = off and 1 = on
        self.vram = RAM(self.vid_size)

    def clear(self):
        self.vram.clear()

    def _location(self, x, y):
        if not (0 <= x < self.vid_width and 0 <= y < self.vid_height):
            raise FramebufferError("Pixel ({}, {}) is outside the display".format(x, y))

        return y * self.vid_width + x

    def get_pixel(self, x, y):
        return self.vram.read(self._location(x, y)) != 0

    def set_pixel(self, x, y, value):
        self.vram.write(self._location(x, y), int(bool(value)))

    def xor_pixel(self, x, y):
        # Returns flagging any collision, or None if clipped
        if x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.vram.read(vram_loc)
        self.vram.write(vram_loc, pixel ^ 1)

        return pixel != 0

    def draw_sprite(self, x, y, sprite_rows):
        # Only the origin wraps.  Anything hanging off the right or bottom edge is trimmed.
        x_pos = x % self.vid_width
        y_pos = y % self.vid_height
        collided = False

        for row, spr_data in enumerate(sprite_rows):
            scr_y = y_pos + row

            if scr_y >= self.vid_height:
                break

            for col in range(SPRITE_WIDTH):
                if spr_data & (0x80 >> col):
                    if self.xor_pixel(x_pos + col, scr_y):
                        # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                        collided = True

        return collided

    def get_rows(self):
        # Read-only snapshot for renderers
        mem = self.vram.mem
        width = self.vid_width
        return tuple(
            tuple(mem[y * width + x] != 0 for x in range(width)) for y in range(self.vid_height)
        )

    def count_lit(self):
        return sum(self.vram.mem)

    def get_vid_size(self):
        return self.vid_width, self.vid_height
