#!/usr/bin/env python3

"""
Display Emulator

A 64x32 monochrome bitmap.  Programs cannot write pixels directly; sprites are
XORed onto the screen instead, and any pixel that was set but gets unset by
the XOR is reported as a collision.

Coordinates always wrap around both edges, per pixel, so a sprite drawn near
the right or bottom edge reappears on the opposite side rather than being
clipped.

Pixels are stored one per byte in row-major order.  The 'dirty' flag is raised
whenever the contents change, so a host only needs to re-render when it has
to.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DISPLAY_WIDTH, DISPLAY_HEIGHT


class DisplayError(Exception):
    pass


class Display:
    def __init__(self, vid_width=DISPLAY_WIDTH, vid_height=DISPLAY_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.pixels = memoryview(bytearray(self.vid_size))
        self.dirty = True

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def _vram_loc(self, x, y):
        return (y % self.vid_height) * self.vid_width + (x % self.vid_width)

    def get(self, x, y):
        return self.pixels[self._vram_loc(x, y)] != 0

    def xor_pixel(self, x, y):
        # Returns flagging any collision
        vram_loc = self._vram_loc(x, y)
        pixel = self.pixels[vram_loc]
        self.pixels[vram_loc] = pixel ^ 1
        self.dirty = True
        return pixel != 0

    def draw(self, x, y, sprite):
        collision = False

        for row, spr_data in enumerate(sprite):
            if not 0 <= spr_data <= 0xFF:
                raise DisplayError("Sprite row 0x{:x} is not a byte".format(spr_data))

            for col in range(8):
                if spr_data & (0x80 >> col):
                    # Don't stop drawing on the first collision, every pixel of the sprite still gets flipped
                    collision |= self.xor_pixel(x + col, y + row)

        return collision

    def clear(self):
        self.pixels[:] = bytes(self.vid_size)
        self.dirty = True

    def rows(self):
        vid_width = self.vid_width
        return [
            [pixel != 0 for pixel in self.pixels[y * vid_width:(y + 1) * vid_width]]
            for y in range(self.vid_height)
        ]
