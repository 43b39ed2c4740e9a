#!/usr/bin/env python3

"""
Keypad Emulator

Holds the state of the 16 hexadecimal keys.  Only external key events change
it; instructions just read it.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import KEY_COUNT


class KeyboardError(Exception):
    pass


class Keyboard:
    def __init__(self):
        self.keys = [False] * KEY_COUNT

    def _check_index(self, index):
        if not 0 <= index < KEY_COUNT:
            raise KeyboardError("Key 0x{:x} is out of range".format(index))

    def toggle(self, index):
        self._check_index(index)
        self.keys[index] = not self.keys[index]

    def is_down(self, index):
        self._check_index(index)
        return self.keys[index]

    def press(self, index):
        # Returns whether the key actually changed state
        if self.is_down(index):
            return False

        self.toggle(index)
        return True

    def release(self, index):
        if not self.is_down(index):
            return False

        self.toggle(index)
        return True

    def first_down(self):
        for index, down in enumerate(self.keys):
            if down:
                return index

        return None

    def reset(self):
        self.keys = [False] * KEY_COUNT
