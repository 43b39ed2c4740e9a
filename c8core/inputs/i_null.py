#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

The keymap is a comma-separated list of 16 host key codes, for keys 0-F in
order.  It is parsed into a dictionary so plugins can look up which CHIP-8 key
(if any) a host key stands for.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import KEY_COUNT


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, renderer=None):
        self.keymap_dict = {}
        self.renderer = renderer
        keymap_split = keymap.split(",")

        if len(keymap_split) != KEY_COUNT:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

    def process_messages(self, emulator):  # pylint: disable=unused-argument
        # Forward any key changes to the emulator.  Returns True if the user asked to quit.
        return False

    def shutdown(self):
        pass
