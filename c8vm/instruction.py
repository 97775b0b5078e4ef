#!/usr/bin/env python3

"""
Instruction Decoding

Turns a 16-bit opcode into an instruction kind, in four layers tried in order
(the first match wins):

    1. 00E0 / 00EE, matched exactly.
    2. Instructions identified by their first nibble alone.
    3. The arithmetic/logic family, bitmask 0xF00F.
    4. Key, timer and memory block instructions (bitmask 0xF0FF), plus the
       Super-CHIP screen instructions.

Decoding never raises.  Unknown opcodes decode to None, and it's left to the VM
to decide what to do about it.

Operands are always in the same positions:
    x    = register (bits 8-11)
    y    = register (bits 4-7)
    addr = address (low 12 bits), also used as a 12-bit immediate
    imm1 = nibble, imm2 = byte
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from enum import Enum


class InstrKind(Enum):
    # CHIP-8 instructions (also supported by Super-CHIP)
    CLEAR_SCREEN = "00E0"
    RET = "00EE"
    JUMP = "1nnn"
    CALL = "2nnn"
    SKIP_EQUAL = "3xkk"
    SKIP_NOT_EQUAL = "4xkk"
    SKIP_REGS_EQUAL = "5xy0"
    LOAD_BYTE = "6xkk"
    ADD = "7xkk"
    LOAD_REG = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD_REG = "8xy4"
    SUB_REG = "8xy5"
    RSHIFT = "8xy6"
    LOAD_AND_SUB_REG = "8xy7"
    LSHIFT = "8xyE"
    SKIP_REGS_NOT_EQUAL = "9xy0"
    LOAD_I = "Annn"
    JUMP_OFFSET = "Bnnn"
    RANDOM = "Cxkk"
    DRAW_SPRITE = "Dxyn"
    SKIP_PRESSED = "Ex9E"
    SKIP_NOT_PRESSED = "ExA1"
    LOAD_DT = "Fx07"
    READ_KEY = "Fx0A"
    SET_DT = "Fx15"
    SET_ST = "Fx18"
    ADD_I = "Fx1E"
    FONT_CHAR = "Fx29"
    BCD = "Fx33"
    REG_DUMP = "Fx55"
    REG_LOAD = "Fx65"

    # Super-CHIP instructions
    HIRES = "00FF"
    LORES = "00FE"
    SCROLL_DOWN = "00Cn"
    SCROLL_RIGHT = "00FB"
    SCROLL_LEFT = "00FC"
    BIG_FONT_CHAR = "Fx30"
    SAVE_FLAGS = "Fx75"
    LOAD_FLAGS = "Fx85"
    EXIT = "00FD"


class OperandMap:
    def __init__(self, opcode):
        self.x = (opcode & 0x0F00) >> 8
        self.y = (opcode & 0x00F0) >> 4
        self.addr = opcode & 0x0FFF
        self.imm1 = opcode & 0x000F
        self.imm2 = opcode & 0x00FF
        self.imm3 = opcode & 0x0FFF


# Layer 2, bitmask 0xF000
_NIBBLE_KINDS = {
    0x1000: InstrKind.JUMP,
    0x2000: InstrKind.CALL,
    0x3000: InstrKind.SKIP_EQUAL,
    0x4000: InstrKind.SKIP_NOT_EQUAL,
    0x5000: InstrKind.SKIP_REGS_EQUAL,
    0x6000: InstrKind.LOAD_BYTE,
    0x7000: InstrKind.ADD,
    0x9000: InstrKind.SKIP_REGS_NOT_EQUAL,
    0xA000: InstrKind.LOAD_I,
    0xB000: InstrKind.JUMP_OFFSET,
    0xC000: InstrKind.RANDOM,
    0xD000: InstrKind.DRAW_SPRITE
}

# Layer 3, bitmask 0xF00F
_ALU_KINDS = {
    0x8000: InstrKind.LOAD_REG,
    0x8001: InstrKind.OR,
    0x8002: InstrKind.AND,
    0x8003: InstrKind.XOR,
    0x8004: InstrKind.ADD_REG,
    0x8005: InstrKind.SUB_REG,
    0x8006: InstrKind.RSHIFT,
    0x8007: InstrKind.LOAD_AND_SUB_REG,
    0x800E: InstrKind.LSHIFT
}

# Layer 4, bitmask 0xF0FF
_MISC_KINDS = {
    0xE09E: InstrKind.SKIP_PRESSED,
    0xE0A1: InstrKind.SKIP_NOT_PRESSED,
    0xF007: InstrKind.LOAD_DT,
    0xF00A: InstrKind.READ_KEY,
    0xF015: InstrKind.SET_DT,
    0xF018: InstrKind.SET_ST,
    0xF01E: InstrKind.ADD_I,
    0xF029: InstrKind.FONT_CHAR,
    0xF033: InstrKind.BCD,
    0xF055: InstrKind.REG_DUMP,
    0xF065: InstrKind.REG_LOAD,
    0xF030: InstrKind.BIG_FONT_CHAR,
    0xF075: InstrKind.SAVE_FLAGS,
    0xF085: InstrKind.LOAD_FLAGS
}

# Layer 4, exact match
_SCREEN_KINDS = {
    0x00FB: InstrKind.SCROLL_RIGHT,
    0x00FC: InstrKind.SCROLL_LEFT,
    0x00FD: InstrKind.EXIT,
    0x00FE: InstrKind.LORES,
    0x00FF: InstrKind.HIRES
}


def decode_opcode(opcode):
    if (opcode & 0xFFF0) == 0x00E0:
        low_nibble = opcode & 0x000F

        if low_nibble == 0x0:
            return InstrKind.CLEAR_SCREEN

        if low_nibble == 0xE:
            return InstrKind.RET

    kind = _NIBBLE_KINDS.get(opcode & 0xF000)

    if kind is not None:
        return kind

    kind = _ALU_KINDS.get(opcode & 0xF00F)

    if kind is not None:
        return kind

    kind = _MISC_KINDS.get(opcode & 0xF0FF)

    if kind is not None:
        return kind

    if (opcode & 0xFFF0) == 0x00C0:
        return InstrKind.SCROLL_DOWN

    return _SCREEN_KINDS.get(opcode)


_FORMATS = {
    InstrKind.CLEAR_SCREEN: "clear_screen",
    InstrKind.RET: "ret",
    InstrKind.JUMP: "jump {addr}",
    InstrKind.CALL: "call {addr}",
    InstrKind.SKIP_EQUAL: "skip_equal {x}, {byte}",
    InstrKind.SKIP_NOT_EQUAL: "skip_not_equal {x}, {byte}",
    InstrKind.SKIP_REGS_EQUAL: "skip_equal {x}, {y}",
    InstrKind.LOAD_BYTE: "load {x}, {byte}",
    InstrKind.ADD: "add {x}, {byte}",
    InstrKind.LOAD_REG: "load {x}, {y}",
    InstrKind.OR: "or {x}, {y}",
    InstrKind.AND: "and {x}, {y}",
    InstrKind.XOR: "xor {x}, {y}",
    InstrKind.ADD_REG: "add {x}, {y}",
    InstrKind.SUB_REG: "sub {x}, {y}",
    InstrKind.RSHIFT: "rshift {x}",
    InstrKind.LOAD_AND_SUB_REG: "ldsub {x}, {y}",
    InstrKind.LSHIFT: "lshift {x}",
    InstrKind.SKIP_REGS_NOT_EQUAL: "skip_not_equal {x}, {y}",
    InstrKind.LOAD_I: "load I, {addr}",
    InstrKind.RANDOM: "random {x}, {byte}",
    InstrKind.DRAW_SPRITE: "draw_sprite {x}, {y}, {nibble}",
    InstrKind.SKIP_PRESSED: "skip_pressed {x}",
    InstrKind.SKIP_NOT_PRESSED: "skip_not_pressed {x}",
    InstrKind.LOAD_DT: "load_dt {x}",
    InstrKind.READ_KEY: "wait_keypress {x}",
    InstrKind.SET_DT: "load DT, {x}",
    InstrKind.SET_ST: "load ST, {x}",
    InstrKind.ADD_I: "add I, {x}",
    InstrKind.FONT_CHAR: "load I, font[{x}]",
    InstrKind.BCD: "bcd {x}",
    InstrKind.REG_DUMP: "reg_dump {x}",
    InstrKind.REG_LOAD: "reg_load {x}",
    InstrKind.HIRES: "hires",
    InstrKind.LORES: "lores",
    InstrKind.SCROLL_DOWN: "scroll_down {nibble}",
    InstrKind.SCROLL_RIGHT: "scroll_right",
    InstrKind.SCROLL_LEFT: "scroll_left",
    InstrKind.BIG_FONT_CHAR: "load I, bigfont[{x}]",
    InstrKind.SAVE_FLAGS: "save_flags {x}",
    InstrKind.LOAD_FLAGS: "load_flags {x}",
    InstrKind.EXIT: "exit"
}


def _hex(value, digits):
    return "0x{:0{}x}".format(value, digits)


def disassemble(opcode, jump_offset_use_v0=True):
    # Returns None if the opcode doesn't decode
    kind = decode_opcode(opcode)

    if kind is None:
        return None

    ops = OperandMap(opcode)
    x_reg = "V{:X}".format(ops.x)
    y_reg = "V{:X}".format(ops.y)
    addr = _hex(ops.addr, 4)
    byte = _hex(ops.imm2, 2)

    if kind is InstrKind.JUMP_OFFSET:
        return "jump {} + {}".format(addr, "V0" if jump_offset_use_v0 else x_reg)

    return _FORMATS[kind].format(x=x_reg, y=y_reg, addr=addr, byte=byte, nibble=_hex(ops.imm1, 2))
