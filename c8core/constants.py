#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "Chip8Core Emulator"
APP_VERSION = "1.0.0"
APP_INTRO = "{} V{}".format(APP_NAME, APP_VERSION)

# Memory layout
MEMORY_SIZE = 0x1000
ADDRESS_MASK = 0xFFF  # Only the low 12 bits of an address mean anything
PROGRAM_START = 0x200
FONT_LOCATION = 0x000
FONT_GLYPH_SIZE = 5

# Registers, call stack and keypad
REGISTER_COUNT = 0x10
FLAG_REGISTER = 0xF
STACK_DEPTH = 16
KEY_COUNT = 0x10

# Display
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# Timing
TIMER_FREQ = 60.0  # 60Hz timer decay, also used as the host frame rate
DEFAULT_CLOCK_SPEED = 700

# Default mappings for keys 0-F, later populated into a dictionary.  Note that the keyscans (on a UK QWERTY keyboard)
# and ASCII characters for these are the same code
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# Hexadecimal digits 0-F, 4 pixels wide by 5 rows each
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
