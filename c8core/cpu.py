#!/usr/bin/env python3

"""
CPU Emulator

Holds the register file and provides the primitive operations the emulator's
execute stage is built from: program counter control, subroutine calls,
register arithmetic with the CHIP-8 flag rules, the index register and the
two timers.

Nothing here fetches or decodes.  Every primitive finishes its own effect, but
only the control flow primitives (jump, call, ret, skip_if) move the program
counter; the caller advances it for everything else.

Flag rules (the flag register is Vf):
    * ADD Vx, Vy  - Vf is 1 when the 8-bit sum carries.
    * SUB/SUBN    - Vf is 1 when NO borrow occurs.  This is the inverse of the
                    usual carry-out convention, and is intentional.
    * SHR/SHL     - Vf takes the bit shifted out (bit 0 or bit 7).
Vf is always written after Vx, so if Vx is Vf the flag is what remains.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import random
from .constants import ADDRESS_MASK, FLAG_REGISTER, REGISTER_COUNT
from .stack import Stack


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, stack=None, rng=None):
        self.stack = Stack() if stack is None else stack
        self.rng = random if rng is None else rng  # Anything with randint(a, b)
        self.reset()

    def reset(self):
        self.v = memoryview(bytearray(REGISTER_COUNT))  # Bytearrays are mutable, so register updates are fast
        self.i = 0   # Index register
        self.pc = 0  # Set by whoever loads the program
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer
        self.last_op = None  # Last fetched operation, for diagnostics only
        self.stack.clear()

    @property
    def sp(self):
        # The stack pointer is just the number of active call frames
        return len(self.stack)

    def _check_registers(self, *registers):
        for register in registers:
            if not 0 <= register < REGISTER_COUNT:
                raise CPUError("Register V{:x} does not exist".format(register))

    # Program counter

    def inc_pc(self):
        self.pc = (self.pc + 2) & ADDRESS_MASK

    def skip_if(self, predicate):
        self.pc = (self.pc + (4 if predicate else 2)) & ADDRESS_MASK

    def jump(self, addr):
        self.pc = addr & ADDRESS_MASK

    def jump_offset(self, addr):
        self.pc = (self.v[0] + addr) & ADDRESS_MASK

    def call(self, addr):
        # The address of the CALL itself is saved, and 'ret' steps over it
        self.stack.push(self.pc)
        self.pc = addr & ADDRESS_MASK

    def ret(self):
        # Returns False, changing nothing, if there is no call to return from
        if not self.stack:
            return False

        self.pc = (self.stack.pop() + 2) & ADDRESS_MASK
        return True

    # Registers

    def load(self, vx, byte):
        self._check_registers(vx)
        self.v[vx] = byte & 0xFF

    def add_imm(self, vx, byte):
        self._check_registers(vx)
        self.v[vx] = (self.v[vx] + byte) & 0xFF  # No flag

    def move(self, vx, vy):
        self._check_registers(vx, vy)
        self.v[vx] = self.v[vy]

    def or_(self, vx, vy):
        self._check_registers(vx, vy)
        self.v[vx] |= self.v[vy]

    def and_(self, vx, vy):
        self._check_registers(vx, vy)
        self.v[vx] &= self.v[vy]

    def xor(self, vx, vy):
        self._check_registers(vx, vy)
        self.v[vx] ^= self.v[vy]

    def add_reg(self, vx, vy):
        self._check_registers(vx, vy)
        val = self.v[vx] + self.v[vy]
        self.v[vx] = val & 0xFF
        self.v[FLAG_REGISTER] = int(val > 0xFF)

    def _post_sub(self, vx, val):
        self.v[vx] = val & 0xFF
        self.v[FLAG_REGISTER] = int(val >= 0)

    def sub_reg(self, vx, vy):
        self._check_registers(vx, vy)
        self._post_sub(vx, self.v[vx] - self.v[vy])

    def sub_reg_rev(self, vx, vy):
        self._check_registers(vx, vy)
        self._post_sub(vx, self.v[vy] - self.v[vx])

    def shift_right(self, vx):
        self._check_registers(vx)
        val = self.v[vx]
        self.v[vx] = val >> 1
        self.v[FLAG_REGISTER] = val & 1

    def shift_left(self, vx):
        self._check_registers(vx)
        val = self.v[vx]
        self.v[vx] = (val << 1) & 0xFF
        self.v[FLAG_REGISTER] = val >> 7

    def random(self, vx, byte):
        self._check_registers(vx)
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[vx] = self.rng.randint(0, 0xFF) & byte

    # Index register

    def load_i(self, addr):
        self.i = addr & ADDRESS_MASK

    def add_to_i(self, vx):
        self._check_registers(vx)
        self.i = (self.i + self.v[vx]) & ADDRESS_MASK

    # Timers

    def get_delay(self, vx):
        self._check_registers(vx)
        self.v[vx] = self.dt

    def set_delay(self, vx):
        self._check_registers(vx)
        self.dt = self.v[vx]

    def set_sound(self, vx):
        self._check_registers(vx)
        self.st = self.v[vx]

    def tick_timers(self):
        # Both timers count down to zero and stay there
        self.dt = max(0, self.dt - 1)
        self.st = max(0, self.st - 1)
        return self.dt, self.st
