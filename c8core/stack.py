#!/usr/bin/env python3

"""
Call Stack

CHIP-8 has no specified location for the call stack in memory, and programs
can't reach it other than through CALL and RET, so it is kept out of emulated
memory and modelled as a bounded list of return addresses.

The stack pointer is simply the depth of the list, so the two can never
disagree.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_DEPTH


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size=STACK_DEPTH):
        self.items = []
        self.size = size

    def __len__(self):
        return len(self.items)

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackError("Stack overflow")

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def get_items(self):
        return list(self.items)

    def clear(self):
        self.items = []
