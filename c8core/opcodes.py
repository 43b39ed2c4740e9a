#!/usr/bin/env python3

"""
Opcode Codec

Converts between 16-bit CHIP-8 instruction words and Operation values, in
both directions.  Nothing here touches machine state.

An Operation is the instruction tag (an Op member) plus whichever operand
fields that instruction uses.  Operands always sit in the same place in the
word, whatever the instruction:

    x   = bits 8-11 (register)
    y   = bits 4-7 (register)
    n   = bits 0-3 (nibble)
    kk  = bits 0-7 (byte)
    nnn = bits 0-11 (address)

Fields an instruction doesn't use are left at zero, which keeps decoding and
encoding exact inverses of each other.

The first nibble picks the instruction family.  Some families hold a single
instruction, while others need part of the remaining word to tell their
members apart, so the word is masked per family before looking up the
instruction, much like a decoder ROM would.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from enum import Enum, auto


class OpcodeError(Exception):
    pass


class Op(Enum):
    CLEAR = auto()
    RETURN = auto()
    JUMP = auto()
    CALL = auto()
    SKIP_EQ = auto()
    SKIP_NEQ = auto()
    SKIP_EQ_REG = auto()
    LOAD = auto()
    ADD_IMM = auto()
    MOVE = auto()
    OR = auto()
    AND = auto()
    XOR = auto()
    ADD_REG = auto()
    SUB_REG = auto()
    SHIFT_RIGHT = auto()
    SUB_REG_REV = auto()
    SHIFT_LEFT = auto()
    SKIP_NEQ_REG = auto()
    LOAD_I = auto()
    JUMP_OFFSET = auto()
    RANDOM = auto()
    DRAW = auto()
    SKIP_KEY_DOWN = auto()
    SKIP_KEY_UP = auto()
    GET_DELAY = auto()
    WAIT_KEY = auto()
    SET_DELAY = auto()
    SET_SOUND = auto()
    ADD_TO_I = auto()
    FONT_ADDR = auto()
    TO_BCD = auto()
    STORE_REGS = auto()
    LOAD_REGS = auto()


Operation = namedtuple("Operation", ["op", "x", "y", "n", "kk", "nnn"], defaults=(0, 0, 0, 0, 0))

# Bit position and width of each operand field
FIELDS = {
    "x":   (8, 0xF),
    "y":   (4, 0xF),
    "n":   (0, 0xF),
    "kk":  (0, 0xFF),
    "nnn": (0, 0xFFF)
}

# Fixed bits, operand fields and assembly mnemonic of every instruction
LAYOUTS = {
    Op.CLEAR:         (0x00E0, (),              "CLS"),
    Op.RETURN:        (0x00EE, (),              "RET"),
    Op.JUMP:          (0x1000, ("nnn",),        "JP 0x{nnn:03x}"),
    Op.CALL:          (0x2000, ("nnn",),        "CALL 0x{nnn:03x}"),
    Op.SKIP_EQ:       (0x3000, ("x", "kk"),     "SE V{x:01x}, 0x{kk:02x}"),
    Op.SKIP_NEQ:      (0x4000, ("x", "kk"),     "SNE V{x:01x}, 0x{kk:02x}"),
    Op.SKIP_EQ_REG:   (0x5000, ("x", "y"),      "SE V{x:01x}, V{y:01x}"),
    Op.LOAD:          (0x6000, ("x", "kk"),     "LD V{x:01x}, 0x{kk:02x}"),
    Op.ADD_IMM:       (0x7000, ("x", "kk"),     "ADD V{x:01x}, 0x{kk:02x}"),
    Op.MOVE:          (0x8000, ("x", "y"),      "LD V{x:01x}, V{y:01x}"),
    Op.OR:            (0x8001, ("x", "y"),      "OR V{x:01x}, V{y:01x}"),
    Op.AND:           (0x8002, ("x", "y"),      "AND V{x:01x}, V{y:01x}"),
    Op.XOR:           (0x8003, ("x", "y"),      "XOR V{x:01x}, V{y:01x}"),
    Op.ADD_REG:       (0x8004, ("x", "y"),      "ADD V{x:01x}, V{y:01x}"),
    Op.SUB_REG:       (0x8005, ("x", "y"),      "SUB V{x:01x}, V{y:01x}"),
    Op.SHIFT_RIGHT:   (0x8006, ("x", "y"),      "SHR V{x:01x}, V{y:01x}"),
    Op.SUB_REG_REV:   (0x8007, ("x", "y"),      "SUBN V{x:01x}, V{y:01x}"),
    Op.SHIFT_LEFT:    (0x800E, ("x", "y"),      "SHL V{x:01x}, V{y:01x}"),
    Op.SKIP_NEQ_REG:  (0x9000, ("x", "y"),      "SNE V{x:01x}, V{y:01x}"),
    Op.LOAD_I:        (0xA000, ("nnn",),        "LD I, 0x{nnn:03x}"),
    Op.JUMP_OFFSET:   (0xB000, ("nnn",),        "JP V0, 0x{nnn:03x}"),
    Op.RANDOM:        (0xC000, ("x", "kk"),     "RND V{x:01x}, 0x{kk:02x}"),
    Op.DRAW:          (0xD000, ("x", "y", "n"), "DRW V{x:01x}, V{y:01x}, 0x{n:01x}"),
    Op.SKIP_KEY_DOWN: (0xE09E, ("x",),          "SKP V{x:01x}"),
    Op.SKIP_KEY_UP:   (0xE0A1, ("x",),          "SKNP V{x:01x}"),
    Op.GET_DELAY:     (0xF007, ("x",),          "LD V{x:01x}, DT"),
    Op.WAIT_KEY:      (0xF00A, ("x",),          "LD V{x:01x}, K"),
    Op.SET_DELAY:     (0xF015, ("x",),          "LD DT, V{x:01x}"),
    Op.SET_SOUND:     (0xF018, ("x",),          "LD ST, V{x:01x}"),
    Op.ADD_TO_I:      (0xF01E, ("x",),          "ADD I, V{x:01x}"),
    Op.FONT_ADDR:     (0xF029, ("x",),          "LD F, V{x:01x}"),
    Op.TO_BCD:        (0xF033, ("x",),          "LD B, V{x:01x}"),
    Op.STORE_REGS:    (0xF055, ("x",),          "LD [I], V{x:01x}"),
    Op.LOAD_REGS:     (0xF065, ("x",),          "LD V{x:01x}, [I]")
}

# Initial lookup on an instruction's first nibble.  Families not listed hold a single instruction, so only the first
# nibble is kept.
FAMILY_MASKS = {
    0x0: 0xFFFF,  # Exact match
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

PATTERNS = {layout[0]: op for op, layout in LAYOUTS.items()}


def decode(word):
    if not 0 <= word <= 0xFFFF:
        return None

    op = PATTERNS.get(word & FAMILY_MASKS.get(word >> 12, 0xF000))

    if op is None:
        return None

    operands = {}

    for field in LAYOUTS[op][1]:
        shift, mask = FIELDS[field]
        operands[field] = (word >> shift) & mask

    return Operation(op, **operands)


def validate(operation):
    if not isinstance(operation, Operation) or operation.op not in LAYOUTS:
        raise OpcodeError("Not an operation: {!r}".format(operation))

    used_fields = LAYOUTS[operation.op][1]

    for field, (_, mask) in FIELDS.items():
        value = getattr(operation, field)

        if field not in used_fields:
            if value:
                raise OpcodeError("{} does not take a '{}' operand".format(operation.op.name, field))
        elif not 0 <= value <= mask:
            raise OpcodeError(
                "Operand '{}' of {} is out of range: 0x{:x}".format(field, operation.op.name, value)
            )


def encode(operation):
    validate(operation)
    pattern, used_fields, _ = LAYOUTS[operation.op]
    word = pattern

    for field in used_fields:
        shift, _ = FIELDS[field]
        word |= getattr(operation, field) << shift

    return word


def mnemonic(operation):
    return LAYOUTS[operation.op][2].format(**operation._asdict())


def decode_program(data):
    # Any odd trailing byte is ignored, as it can't form a whole instruction
    return [decode((data[i] << 8) | data[i + 1]) for i in range(0, len(data) - 1, 2)]


def encode_program(operations):
    program = bytearray()

    for operation in operations:
        program += encode(operation).to_bytes(2, "big")

    return bytes(program)
