#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws frames onto an SDL window surface via PyGame.  The surface is allocated
at the emulated screen size, and the contents are stretched (using 'Nearest
Neighbour' translation) to fit the window, so each pixel only gets written
once per frame.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

BACKGROUND_RGB = b"\x22\x22\x22"
FOREGROUND_RGB = b"\xDD\xDD\xDD"


class Renderer(RendererBase):
    def __init__(self, scale=None, **kwargs):
        if scale is None:
            scale = 512  # Default window width if not supplied

        if scale < 64:
            raise RendererError("The window must be at least 64 pixels wide.")

        pygame.display.init()
        self.set_title(APP_NAME)
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.rgb_buffer = None
        super().__init__(scale)

    def set_resolution(self, width, height):
        self.rgb_buffer = bytearray(BACKGROUND_RGB * (width * height))  # 24-bit
        super().set_resolution(width, height)

    def draw_frame(self, rows):
        height = len(rows)
        width = len(rows[0]) if rows else 0

        if (width, height) != (self.width, self.height):
            self.set_resolution(width, height)

        # Update the RGB buffer in-place to minimise allocations and PyGame calls
        rgb_buffer = self.rgb_buffer
        rgb_location = 0

        for row in rows:
            for pixel in row:
                rgb_buffer[rgb_location:rgb_location + 3] = FOREGROUND_RGB if pixel else BACKGROUND_RGB
                rgb_location += 3

        if width and height:
            render_surface = pygame.image.frombuffer(bytes(rgb_buffer), (width, height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

        super().draw_frame(rows)

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        pygame.display.quit()
        super().shutdown()
