#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

It can be used on its own if no output is wanted, such as when running
headless with only the log to look at.  The most recent frame is kept, so
the screen contents can still be inspected afterwards.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.frames_drawn = 0
        self.last_frame = None
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def draw_frame(self, rows):
        # 'rows' is a list of pixel rows, each a list of booleans
        self.last_frame = rows
        self.frames_drawn += 1

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
