#!/usr/bin/env python3

"""
Memory Emulator

A flat 4K byte-addressable store.  Supports reading and writing of single
bytes or contiguous blocks, and installing the built-in hexadecimal font.

The location of the font is remembered after installation, so that digit to
glyph address lookups (used by the FONT_ADDR instruction) stay valid wherever
the font was placed.

Writes outside the address space are programming errors and raise.  Block
reads that would run off the end return None instead, so that callers such
as the instruction fetch can treat the end of memory as a normal condition.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEMORY_SIZE, FONT_LOCATION, FONT_GLYPH_SIZE, SYSTEM_FONT


class MemoryAccessError(Exception):
    pass


class Memory:
    def __init__(self, mem_size=MEMORY_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size
        self.font_location = FONT_LOCATION

    def load(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def load_many(self, location, size):
        if location < 0 or size < 0 or location + size > self.mem_size:
            return None

        return bytes(self.mem[location:location + size])

    def store(self, location, byte):
        self.check_overflow(location)

        if not 0 <= byte <= 0xFF:
            raise MemoryAccessError("Value 0x{:x} does not fit in a byte".format(byte))

        self.mem[location] = byte

    def store_many(self, location, block):
        if not block:
            return

        block_top = location + len(block)
        self.check_overflow(location)
        self.check_overflow(block_top - 1)

        try:
            self.mem[location:block_top] = bytes(block)
        except ValueError:
            raise MemoryAccessError("Block contains values that do not fit in a byte") from None

    def check_overflow(self, location):
        if location < 0 or location > self.mem_top:
            raise MemoryAccessError("Address 0x{:x} is outside memory".format(location))

    def install_font(self, location=FONT_LOCATION):
        self.store_many(location, SYSTEM_FONT)
        self.font_location = location

    def font_glyph_address(self, digit):
        return self.font_location + FONT_GLYPH_SIZE * digit

    def clear(self):
        self.mem[:] = bytes(self.mem_size)
