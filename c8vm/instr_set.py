#!/usr/bin/env python3

"""
Instruction Set

One plain function per instruction kind, each taking the VM and the raw
opcode.  Handlers read and write the VM state directly and call into the
display for anything visible.  The program counter has already been moved past
the instruction by the time a handler runs, so jumps simply overwrite it.

The CHIP-8 and Super-CHIP tables are built once, on import.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import ADDR_MASK, FONT_OFFSET, FONT_CHAR_SIZE, BIG_FONT_OFFSET, BIG_FONT_CHAR_SIZE, RPL_FLAG_COUNT, \
    RPL_ENDIAN
from .display import Resolution, ScrollDirection, Sprite
from .errors import VMError
from .instruction import InstrKind, OperandMap
from .quirks import Extension

SCROLL_SIDEWAYS_DISTANCE = 4


def _skip(vm):
    vm.state.pc = (vm.state.pc + 2) & ADDR_MASK


def clear_screen(vm, opcode):  # 00E0
    vm.display.clear()


def ret(vm, opcode):  # 00EE
    vm.state.pc = vm.state.stack.pop()


def jump(vm, opcode):  # 1nnn
    vm.state.pc = OperandMap(opcode).addr


def call(vm, opcode):  # 2nnn
    # Raises before anything is pushed if the stack is full
    vm.state.stack.push(vm.state.pc)
    vm.state.pc = OperandMap(opcode).addr


def skip_equal(vm, opcode):  # 3xkk
    ops = OperandMap(opcode)

    if vm.state.regs[ops.x] == ops.imm2:
        _skip(vm)


def skip_not_equal(vm, opcode):  # 4xkk
    ops = OperandMap(opcode)

    if vm.state.regs[ops.x] != ops.imm2:
        _skip(vm)


def skip_regs_equal(vm, opcode):  # 5xy0
    ops = OperandMap(opcode)

    if vm.state.regs[ops.x] == vm.state.regs[ops.y]:
        _skip(vm)


def load_byte(vm, opcode):  # 6xkk
    ops = OperandMap(opcode)
    vm.state.regs[ops.x] = ops.imm2


def add(vm, opcode):  # 7xkk
    # No carry flag for this one
    ops = OperandMap(opcode)
    regs = vm.state.regs
    regs[ops.x] = (regs[ops.x] + ops.imm2) & 0xFF


def load_reg(vm, opcode):  # 8xy0
    ops = OperandMap(opcode)
    regs = vm.state.regs
    regs[ops.x] = regs[ops.y]


def _pre_bitwise(vm):
    if vm.quirks.bitwise_reset_vf:
        vm.state.regs[0xF] = 0


def bitwise_or(vm, opcode):  # 8xy1
    ops = OperandMap(opcode)
    regs = vm.state.regs
    _pre_bitwise(vm)
    regs[ops.x] |= regs[ops.y]


def bitwise_and(vm, opcode):  # 8xy2
    ops = OperandMap(opcode)
    regs = vm.state.regs
    _pre_bitwise(vm)
    regs[ops.x] &= regs[ops.y]


def bitwise_xor(vm, opcode):  # 8xy3
    ops = OperandMap(opcode)
    regs = vm.state.regs
    _pre_bitwise(vm)
    regs[ops.x] ^= regs[ops.y]


def add_reg(vm, opcode):  # 8xy4
    ops = OperandMap(opcode)
    regs = vm.state.regs
    val = regs[ops.x] + regs[ops.y]
    regs[ops.x] = val & 0xFF
    # VF is set when carrying, and only after Vx is set, as VF may also be one of the operands
    regs[0xF] = int(val > 0xFF)


def _post_sub(vm, x, val):
    regs = vm.state.regs
    regs[x] = val & 0xFF
    regs[0xF] = int(val >= 0)  # Set when NOT borrowing


def sub_reg(vm, opcode):  # 8xy5
    ops = OperandMap(opcode)
    regs = vm.state.regs
    _post_sub(vm, ops.x, regs[ops.x] - regs[ops.y])


def load_and_sub_reg(vm, opcode):  # 8xy7
    ops = OperandMap(opcode)
    regs = vm.state.regs
    _post_sub(vm, ops.x, regs[ops.y] - regs[ops.x])


def _pre_shift(vm, ops):
    regs = vm.state.regs

    if vm.quirks.shift_sets_vx_to_vy:
        regs[ops.x] = regs[ops.y]

    return regs[ops.x]


def rshift(vm, opcode):  # 8xy6
    ops = OperandMap(opcode)
    val = _pre_shift(vm, ops)
    vm.state.regs[ops.x] = val >> 1
    vm.state.regs[0xF] = val & 1


def lshift(vm, opcode):  # 8xyE
    ops = OperandMap(opcode)
    val = _pre_shift(vm, ops)
    vm.state.regs[ops.x] = (val << 1) & 0xFF
    vm.state.regs[0xF] = val >> 7


def skip_regs_not_equal(vm, opcode):  # 9xy0
    ops = OperandMap(opcode)

    if vm.state.regs[ops.x] != vm.state.regs[ops.y]:
        _skip(vm)


def load_i(vm, opcode):  # Annn
    vm.state.i = OperandMap(opcode).imm3


def jump_offset(vm, opcode):  # Bnnn
    # Breaks lots of programs if the wrong register is used.  It depends on the interpreter the program targeted.
    ops = OperandMap(opcode)
    offset_reg = 0 if vm.quirks.jump_offset_use_v0 else ops.x
    vm.state.pc = (ops.addr + vm.state.regs[offset_reg]) & ADDR_MASK


def random(vm, opcode):  # Cxkk
    # The ANDing is intentional.  This is not a random number between 0 and kk inclusive.
    ops = OperandMap(opcode)
    vm.state.regs[ops.x] = vm.rng.randint(0, 0xFF) & ops.imm2


def draw_sprite(vm, opcode):  # Dxyn
    ops = OperandMap(opcode)
    state = vm.state
    display = vm.display
    memory = state.memory
    height = ops.imm1
    width = 8

    if height == 0 and vm.quirks.extension is Extension.SCHIP:
        # Super-CHIP sprite.  16x16, or 8x16 in low resolution if the quirk asks for it.
        height = 16

        if not (display.is_lores() and vm.quirks.lores_big_sprite_8_wide):
            width = 16

    i = state.i

    if width > 8:
        rows = [memory.read_word(i + row * 2) for row in range(height)]
    else:
        rows = [memory.read(i + row) for row in range(height)]

    # The sprite's origin always wraps.  Whatever hangs off the edge wraps or is clipped, per axis.
    vid_width, vid_height = display.get_size()
    pos = (state.regs[ops.x] % vid_width, state.regs[ops.y] % vid_height)
    display.set_wrap(vm.quirks.wrap_x, vm.quirks.wrap_y)
    state.regs[0xF] = int(display.draw_sprite(Sprite(pos, rows, width)))


def skip_pressed(vm, opcode):  # Ex9E
    ops = OperandMap(opcode)

    if vm.state.input_table[vm.state.regs[ops.x] & 0xF]:
        _skip(vm)


def skip_not_pressed(vm, opcode):  # ExA1
    ops = OperandMap(opcode)

    if not vm.state.input_table[vm.state.regs[ops.x] & 0xF]:
        _skip(vm)


def load_dt(vm, opcode):  # Fx07
    vm.state.regs[OperandMap(opcode).x] = vm.state.dt


def read_key(vm, opcode):  # Fx0A
    # Waiting is done by rewinding the program counter, so this instruction runs again on the next step while the
    # timers and display carry on.  The key counts once it has been pressed and then released.
    ops = OperandMap(opcode)
    state = vm.state
    table = state.input_table

    if vm.wait_for_key_release:
        key = vm.key_to_release

        if not table[key]:
            state.regs[ops.x] = key
            vm.wait_for_key_release = False
            return
    else:
        # Only the first held key found is tracked
        for key, pressed in enumerate(table):
            if pressed:
                vm.wait_for_key_release = True
                vm.key_to_release = key
                break

    state.pc = (state.pc - 2) & ADDR_MASK


def set_dt(vm, opcode):  # Fx15
    vm.state.dt = vm.state.regs[OperandMap(opcode).x]


def set_st(vm, opcode):  # Fx18
    vm.state.st = vm.state.regs[OperandMap(opcode).x]


def add_i(vm, opcode):  # Fx1E
    state = vm.state
    state.i = (state.i + state.regs[OperandMap(opcode).x]) & ADDR_MASK


def font_char(vm, opcode):  # Fx29
    state = vm.state
    state.i = FONT_OFFSET + (state.regs[OperandMap(opcode).x] & 0xF) * FONT_CHAR_SIZE[1]


def bcd(vm, opcode):  # Fx33
    state = vm.state
    val = state.regs[OperandMap(opcode).x]
    i = state.i
    state.memory.write(i, val // 100)             # Most-significant digit
    state.memory.write(i + 1, (val // 10) % 10)   # Middle digit
    state.memory.write(i + 2, val % 10)           # Least-significant digit


def _post_reg_dump_load(vm, ops):
    if vm.quirks.load_save_increment_i:
        vm.state.i = (vm.state.i + ops.x + 1) & ADDR_MASK


def reg_dump(vm, opcode):  # Fx55
    ops = OperandMap(opcode)
    state = vm.state

    for reg in range(ops.x + 1):
        state.memory.write(state.i + reg, state.regs[reg])

    _post_reg_dump_load(vm, ops)


def reg_load(vm, opcode):  # Fx65
    ops = OperandMap(opcode)
    state = vm.state

    for reg in range(ops.x + 1):
        state.regs[reg] = state.memory.read(state.i + reg)

    _post_reg_dump_load(vm, ops)


# Super-CHIP instructions

def hires(vm, opcode):  # 00FF
    vm.display.set_resolution(Resolution.HIGH)


def lores(vm, opcode):  # 00FE
    vm.display.set_resolution(Resolution.LOW)


def scroll_down(vm, opcode):  # 00Cn
    vm.display.scroll(ScrollDirection.DOWN, OperandMap(opcode).imm1)


def scroll_right(vm, opcode):  # 00FB
    vm.display.scroll(ScrollDirection.RIGHT, SCROLL_SIDEWAYS_DISTANCE)


def scroll_left(vm, opcode):  # 00FC
    vm.display.scroll(ScrollDirection.LEFT, SCROLL_SIDEWAYS_DISTANCE)


def big_font_char(vm, opcode):  # Fx30
    state = vm.state
    state.i = BIG_FONT_OFFSET + (state.regs[OperandMap(opcode).x] & 0xF) * BIG_FONT_CHAR_SIZE[1]


def _check_flag_count(x):
    if x >= RPL_FLAG_COUNT:
        raise VMError("only {} RPL flags exist, V0-V{:X} cannot be copied".format(RPL_FLAG_COUNT, x))


def save_flags(vm, opcode):  # Fx75
    x = OperandMap(opcode).x
    _check_flag_count(x)
    # Ensure with +1s that the final register is copied
    vm.rpl_flags[:x + 1] = vm.state.regs[:x + 1]
    vm.cfg.cpu.rpl_flags = int.from_bytes(vm.rpl_flags, RPL_ENDIAN)


def load_flags(vm, opcode):  # Fx85
    x = OperandMap(opcode).x
    _check_flag_count(x)
    vm.state.regs[:x + 1] = vm.rpl_flags[:x + 1]


def exit_program(vm, opcode):  # 00FD
    vm.unload()


CHIP8_INSTRUCTIONS = {
    InstrKind.CLEAR_SCREEN: clear_screen,
    InstrKind.RET: ret,
    InstrKind.JUMP: jump,
    InstrKind.CALL: call,
    InstrKind.SKIP_EQUAL: skip_equal,
    InstrKind.SKIP_NOT_EQUAL: skip_not_equal,
    InstrKind.SKIP_REGS_EQUAL: skip_regs_equal,
    InstrKind.LOAD_BYTE: load_byte,
    InstrKind.ADD: add,
    InstrKind.LOAD_REG: load_reg,
    InstrKind.OR: bitwise_or,
    InstrKind.AND: bitwise_and,
    InstrKind.XOR: bitwise_xor,
    InstrKind.ADD_REG: add_reg,
    InstrKind.SUB_REG: sub_reg,
    InstrKind.RSHIFT: rshift,
    InstrKind.LOAD_AND_SUB_REG: load_and_sub_reg,
    InstrKind.LSHIFT: lshift,
    InstrKind.SKIP_REGS_NOT_EQUAL: skip_regs_not_equal,
    InstrKind.LOAD_I: load_i,
    InstrKind.JUMP_OFFSET: jump_offset,
    InstrKind.RANDOM: random,
    InstrKind.DRAW_SPRITE: draw_sprite,
    InstrKind.SKIP_PRESSED: skip_pressed,
    InstrKind.SKIP_NOT_PRESSED: skip_not_pressed,
    InstrKind.LOAD_DT: load_dt,
    InstrKind.READ_KEY: read_key,
    InstrKind.SET_DT: set_dt,
    InstrKind.SET_ST: set_st,
    InstrKind.ADD_I: add_i,
    InstrKind.FONT_CHAR: font_char,
    InstrKind.BCD: bcd,
    InstrKind.REG_DUMP: reg_dump,
    InstrKind.REG_LOAD: reg_load
}

SCHIP_INSTRUCTIONS = dict(CHIP8_INSTRUCTIONS)
SCHIP_INSTRUCTIONS.update(
    {
        InstrKind.HIRES: hires,
        InstrKind.LORES: lores,
        InstrKind.SCROLL_DOWN: scroll_down,
        InstrKind.SCROLL_RIGHT: scroll_right,
        InstrKind.SCROLL_LEFT: scroll_left,
        InstrKind.BIG_FONT_CHAR: big_font_char,
        InstrKind.SAVE_FLAGS: save_flags,
        InstrKind.LOAD_FLAGS: load_flags,
        InstrKind.EXIT: exit_program
    }
)


def load_instruction_set(extension):
    return SCHIP_INSTRUCTIONS if extension is Extension.SCHIP else CHIP8_INSTRUCTIONS
