#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8core.display import Display, DisplayError


class TestDisplay(unittest.TestCase):
    def setUp(self):
        self.display = Display()

    def test_display_size(self):
        self.assertEqual((64, 32), self.display.get_vid_size())
        rows = self.display.rows()
        self.assertEqual(32, len(rows))
        self.assertEqual(64, len(rows[0]))

    def test_display_xor_pixel(self):
        self.assertFalse(self.display.xor_pixel(2, 2))
        self.assertFalse(self.display.xor_pixel(4, 4))
        self.assertTrue(self.display.xor_pixel(4, 4))
        self.display.xor_pixel(100, 100)
        self.assertTrue(self.display.get(2, 2))
        self.assertTrue(self.display.get(36, 4))
        self.assertFalse(self.display.get(4, 4))

    def test_display_get_wraps(self):
        self.display.xor_pixel(63, 31)
        self.assertTrue(self.display.get(127, 63))
        self.assertTrue(self.display.get(-1, -1))

    def test_display_draw(self):
        collision = self.display.draw(1, 2, [0xF0, 0x90])
        self.assertFalse(collision)

        for x in range(1, 5):
            self.assertTrue(self.display.get(x, 2))

        self.assertTrue(self.display.get(1, 3))
        self.assertFalse(self.display.get(2, 3))
        self.assertFalse(self.display.get(3, 3))
        self.assertTrue(self.display.get(4, 3))
        self.assertFalse(self.display.get(5, 2))

    def test_display_draw_twice_clears(self):
        sprite = [0xFF, 0x81, 0xA5, 0xFF]
        self.assertFalse(self.display.draw(10, 10, sprite))
        self.assertTrue(self.display.draw(10, 10, sprite))

        for row in self.display.rows():
            self.assertFalse(any(row))

    def test_display_draw_collision_not_short_circuited(self):
        # The first pixel collides, but the rest of the sprite must still be drawn
        self.display.xor_pixel(0, 0)
        self.assertTrue(self.display.draw(0, 0, [0xC0, 0x80]))
        self.assertFalse(self.display.get(0, 0))
        self.assertTrue(self.display.get(1, 0))
        self.assertTrue(self.display.get(0, 1))

    def test_display_draw_wraps_per_pixel(self):
        self.display.draw(62, 31, [0xF0, 0x80])
        self.assertTrue(self.display.get(62, 31))
        self.assertTrue(self.display.get(63, 31))
        self.assertTrue(self.display.get(0, 31))
        self.assertTrue(self.display.get(1, 31))
        self.assertTrue(self.display.get(62, 0))
        self.assertFalse(self.display.get(2, 31))

    def test_display_draw_start_wraps(self):
        self.display.draw(64 + 3, 32 + 1, [0x80])
        self.assertTrue(self.display.get(3, 1))

    def test_display_draw_bad_row(self):
        self.assertRaises(DisplayError, self.display.draw, 0, 0, [0x100])

    def test_display_clear(self):
        self.display.draw(0, 0, [0xFF] * 5)
        self.display.dirty = False
        self.display.clear()
        self.assertTrue(self.display.dirty)

        for row in self.display.rows():
            self.assertFalse(any(row))

    def test_display_dirty(self):
        self.display.dirty = False
        self.display.draw(0, 0, [])
        self.assertFalse(self.display.dirty)
        self.display.draw(0, 0, [0x01])
        self.assertTrue(self.display.dirty)
