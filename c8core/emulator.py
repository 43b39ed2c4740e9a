#!/usr/bin/env python3

"""
Emulator

Owns the memory, CPU, display and keypad, and runs the fetch, decode and
execute cycle over them.

There is no clock in here.  Whatever drives the emulator (see host.py) calls
step() or run() to execute instructions, tick() at 60Hz to decay the timers,
and key_down()/key_up() when keys change.  Nothing blocks: waiting for a key
just reads the keypad as it is at that moment.

Program counter rules during execute:
    * JP, CALL, RET and JP V0 set the program counter themselves.
    * Skip instructions advance it by 2 or 4.
    * Everything else advances it by exactly 2 once its work is done.

Execution halts, rather than raising, in four situations, and halt_reason
records which one happened:
    * The word at the program counter is not a CHIP-8 instruction.  By
      convention programs use this to stop.
    * RET is executed with nothing on the call stack.
    * CALL is executed with the call stack already full.
    * The program counter leaves no room for a whole instruction.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from enum import Enum
from .constants import ADDRESS_MASK, FLAG_REGISTER, FONT_LOCATION, PROGRAM_START, STACK_DEPTH
from .cpu import CPU
from .display import Display
from .keyboard import Keyboard
from .memory import Memory
from .opcodes import Op, decode, encode_program, mnemonic, validate
from .stack import Stack

logger = logging.getLogger(__name__)


class EmulatorError(Exception):
    pass


class HaltReason(Enum):
    INVALID_INSTRUCTION = "invalid instruction"
    STACK_UNDERFLOW = "return without a call"
    STACK_OVERFLOW = "call stack full"
    END_OF_MEMORY = "end of memory"


class Emulator:
    def __init__(self, stack_depth=None, font_location=None, program_start=None, rng=None):
        self.font_location = FONT_LOCATION if font_location is None else font_location
        self.program_start = PROGRAM_START if program_start is None else program_start
        self.memory = Memory()
        self.cpu = CPU(Stack(STACK_DEPTH if stack_depth is None else stack_depth), rng=rng)
        self.display = Display()
        self.keyboard = Keyboard()
        self.halt_reason = None
        self.halt_word = None
        self.install_font()

        # One handler per instruction
        self.instructions = {
            Op.CLEAR:         self._clear,
            Op.RETURN:        self._return,
            Op.JUMP:          self._jump,
            Op.CALL:          self._call,
            Op.SKIP_EQ:       self._skip_eq,
            Op.SKIP_NEQ:      self._skip_neq,
            Op.SKIP_EQ_REG:   self._skip_eq_reg,
            Op.LOAD:          self._load,
            Op.ADD_IMM:       self._add_imm,
            Op.MOVE:          self._move,
            Op.OR:            self._or,
            Op.AND:           self._and,
            Op.XOR:           self._xor,
            Op.ADD_REG:       self._add_reg,
            Op.SUB_REG:       self._sub_reg,
            Op.SHIFT_RIGHT:   self._shift_right,
            Op.SUB_REG_REV:   self._sub_reg_rev,
            Op.SHIFT_LEFT:    self._shift_left,
            Op.SKIP_NEQ_REG:  self._skip_neq_reg,
            Op.LOAD_I:        self._load_i,
            Op.JUMP_OFFSET:   self._jump_offset,
            Op.RANDOM:        self._random,
            Op.DRAW:          self._draw,
            Op.SKIP_KEY_DOWN: self._skip_key_down,
            Op.SKIP_KEY_UP:   self._skip_key_up,
            Op.GET_DELAY:     self._get_delay,
            Op.WAIT_KEY:      self._wait_key,
            Op.SET_DELAY:     self._set_delay,
            Op.SET_SOUND:     self._set_sound,
            Op.ADD_TO_I:      self._add_to_i,
            Op.FONT_ADDR:     self._font_addr,
            Op.TO_BCD:        self._to_bcd,
            Op.STORE_REGS:    self._store_regs,
            Op.LOAD_REGS:     self._load_regs
        }

    def reset(self):
        self.memory.clear()
        self.cpu.reset()
        self.install_font()
        self.display.clear()
        self.keyboard.reset()
        self.halt_reason = None
        self.halt_word = None

    def install_font(self, location=None):
        # Also points the index register back at the start of memory
        if location is not None:
            self.font_location = location

        self.memory.install_font(self.font_location)
        self.cpu.i = 0

    # Program loading

    def load_program(self, data):
        start = self.program_start

        if start + len(data) > self.memory.mem_size:
            raise EmulatorError(
                "Program of {} bytes does not fit in memory at 0x{:03x}".format(len(data), start)
            )

        self.memory.store_many(start, data)
        self.cpu.pc = start
        logger.debug("Loaded %d bytes at 0x%03x", len(data), start)

    def load_words(self, words):
        self.load_program(b"".join(word.to_bytes(2, "big") for word in words))

    def load_operations(self, operations):
        self.load_program(encode_program(operations))

    # Fetch, decode and execute

    def fetch(self):
        word = self.memory.load_many(self.cpu.pc, 2)
        return None if word is None else int.from_bytes(word, "big")

    def _halt(self, reason, word=None):
        self.halt_reason = reason
        self.halt_word = word

    def step(self):
        # Returns True if an instruction was executed, or False if the program halted
        pc = self.cpu.pc
        word = self.fetch()

        if word is None:
            logger.info("Halted: no room for an instruction at 0x%03x", pc)
            self._halt(HaltReason.END_OF_MEMORY)
            return False

        operation = decode(word)
        self.cpu.last_op = operation

        if operation is None:
            logger.info("Halted: invalid instruction 0x%04x at 0x%03x", word, pc)
            self._halt(HaltReason.INVALID_INSTRUCTION, word)
            return False

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(self.trace(pc, word, operation))

        if not self.execute(operation):
            self.halt_word = word
            return False

        self.halt_reason = None
        self.halt_word = None
        return True

    def run(self, max_steps=None):
        # Returns the number of instructions executed
        steps = 0

        while max_steps is None or steps < max_steps:
            if not self.step():
                break

            steps += 1

        return steps

    def execute(self, operation):
        # Returns False only if the operation could not complete, which leaves the machine unchanged and halts it
        validate(operation)
        halt_reason = self.instructions[operation.op](operation)

        if halt_reason is not None:
            self._halt(halt_reason)
            return False

        return True

    def trace(self, pc, word, operation):
        cpu = self.cpu
        return (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:03x} DT: 0x{:02x} ST: 0x{:02x} SP: {} PC: 0x{:03x} OP: 0x{:04x} IN: {}"
        ).format(
            *[cpu.v[reg_num] for reg_num in range(15, -1, -1)] +
            [cpu.i, cpu.dt, cpu.st, cpu.sp, pc, word, mnemonic(operation)]
        )

    # Hooks for the driver

    def tick(self):
        return self.cpu.tick_timers()

    def key_down(self, index):
        if self.keyboard.press(index):
            logger.debug("Key 0x%x down", index)

    def key_up(self, index):
        if self.keyboard.release(index):
            logger.debug("Key 0x%x up", index)

    # Instructions

    def _clear(self, operation):  # CLS
        self.display.clear()
        self.cpu.inc_pc()

    def _return(self, operation):  # RET
        if not self.cpu.ret():
            logger.warning("RET at 0x%03x with an empty call stack", self.cpu.pc)
            return HaltReason.STACK_UNDERFLOW

        return None

    def _jump(self, operation):  # JP addr
        self.cpu.jump(operation.nnn)

    def _call(self, operation):  # CALL addr
        stack = self.cpu.stack

        if len(stack) >= stack.size:
            logger.warning("CALL at 0x%03x with a full call stack (%d deep)", self.cpu.pc, stack.size)
            return HaltReason.STACK_OVERFLOW

        self.cpu.call(operation.nnn)
        return None

    def _skip_eq(self, operation):  # SE Vx, byte
        self.cpu.skip_if(self.cpu.v[operation.x] == operation.kk)

    def _skip_neq(self, operation):  # SNE Vx, byte
        self.cpu.skip_if(self.cpu.v[operation.x] != operation.kk)

    def _skip_eq_reg(self, operation):  # SE Vx, Vy
        self.cpu.skip_if(self.cpu.v[operation.x] == self.cpu.v[operation.y])

    def _skip_neq_reg(self, operation):  # SNE Vx, Vy
        self.cpu.skip_if(self.cpu.v[operation.x] != self.cpu.v[operation.y])

    def _load(self, operation):  # LD Vx, byte
        self.cpu.load(operation.x, operation.kk)
        self.cpu.inc_pc()

    def _add_imm(self, operation):  # ADD Vx, byte
        self.cpu.add_imm(operation.x, operation.kk)
        self.cpu.inc_pc()

    def _move(self, operation):  # LD Vx, Vy
        self.cpu.move(operation.x, operation.y)
        self.cpu.inc_pc()

    def _or(self, operation):  # OR Vx, Vy
        self.cpu.or_(operation.x, operation.y)
        self.cpu.inc_pc()

    def _and(self, operation):  # AND Vx, Vy
        self.cpu.and_(operation.x, operation.y)
        self.cpu.inc_pc()

    def _xor(self, operation):  # XOR Vx, Vy
        self.cpu.xor(operation.x, operation.y)
        self.cpu.inc_pc()

    def _add_reg(self, operation):  # ADD Vx, Vy
        self.cpu.add_reg(operation.x, operation.y)
        self.cpu.inc_pc()

    def _sub_reg(self, operation):  # SUB Vx, Vy
        self.cpu.sub_reg(operation.x, operation.y)
        self.cpu.inc_pc()

    def _sub_reg_rev(self, operation):  # SUBN Vx, Vy
        self.cpu.sub_reg_rev(operation.x, operation.y)
        self.cpu.inc_pc()

    def _shift_right(self, operation):  # SHR Vx
        self.cpu.shift_right(operation.x)
        self.cpu.inc_pc()

    def _shift_left(self, operation):  # SHL Vx
        self.cpu.shift_left(operation.x)
        self.cpu.inc_pc()

    def _load_i(self, operation):  # LD I, addr
        self.cpu.load_i(operation.nnn)
        self.cpu.inc_pc()

    def _jump_offset(self, operation):  # JP V0, addr
        self.cpu.jump_offset(operation.nnn)

    def _random(self, operation):  # RND Vx, byte
        self.cpu.random(operation.x, operation.kk)
        self.cpu.inc_pc()

    def _draw(self, operation):  # DRW Vx, Vy, nibble
        cpu = self.cpu
        i = cpu.i
        sprite = [self.memory.load((i + row) & ADDRESS_MASK) for row in range(operation.n)]
        collision = self.display.draw(cpu.v[operation.x], cpu.v[operation.y], sprite)
        cpu.v[FLAG_REGISTER] = int(collision)
        cpu.inc_pc()

    def _skip_key_down(self, operation):  # SKP Vx
        self.cpu.skip_if(self.keyboard.is_down(self.cpu.v[operation.x] & 0xF))

    def _skip_key_up(self, operation):  # SKNP Vx
        self.cpu.skip_if(not self.keyboard.is_down(self.cpu.v[operation.x] & 0xF))

    def _get_delay(self, operation):  # LD Vx, DT
        self.cpu.get_delay(operation.x)
        self.cpu.inc_pc()

    def _wait_key(self, operation):  # LD Vx, K
        # Never blocks.  With no key down the register is left alone.
        key = self.keyboard.first_down()

        if key is not None:
            self.cpu.load(operation.x, key)

        self.cpu.inc_pc()

    def _set_delay(self, operation):  # LD DT, Vx
        self.cpu.set_delay(operation.x)
        self.cpu.inc_pc()

    def _set_sound(self, operation):  # LD ST, Vx
        self.cpu.set_sound(operation.x)
        self.cpu.inc_pc()

    def _add_to_i(self, operation):  # ADD I, Vx
        self.cpu.add_to_i(operation.x)
        self.cpu.inc_pc()

    def _font_addr(self, operation):  # LD F, Vx
        self.cpu.load_i(self.memory.font_glyph_address(self.cpu.v[operation.x] & 0xF))
        self.cpu.inc_pc()

    def _to_bcd(self, operation):  # LD B, Vx
        val = self.cpu.v[operation.x]
        i = self.cpu.i

        for offset, digit in enumerate(bcd_digits(val)):
            self.memory.store((i + offset) & ADDRESS_MASK, digit)

        self.cpu.inc_pc()

    def _store_regs(self, operation):  # LD [I], Vx
        i = self.cpu.i

        # Ensure with +1 that the final register is copied
        for reg in range(operation.x + 1):
            self.memory.store((i + reg) & ADDRESS_MASK, self.cpu.v[reg])

        self.cpu.inc_pc()

    def _load_regs(self, operation):  # LD Vx, [I]
        i = self.cpu.i

        for reg in range(operation.x + 1):
            self.cpu.v[reg] = self.memory.load((i + reg) & ADDRESS_MASK)

        self.cpu.inc_pc()


def bcd_digits(val):
    # Hundreds, tens and ones
    return [val // 100, (val // 10) % 10, val % 10]
