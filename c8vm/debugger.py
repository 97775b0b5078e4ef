#!/usr/bin/env python3

"""
VM Debugger

If enabled, this will output information before each instruction executed:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter
    * OP - OpCode number
    * IN - Disassembled instruction

If an instruction fails, all of the above will be outputted, with the addition
of:
    * RPL   - Flag registers
    * Mem[I] - Memory from I onwards (cut short at the top of memory)
    * Stack - Stack contents
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

MEM_DUMP_SIZE = 8  # Bytes shown from I onwards


class Debugger:
    def __init__(self):
        self.live = False

    def debug(self, vm, pc, opcode, verbose=False):
        state = vm.state
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}"
        ).format(
            *[state.regs[reg_num] for reg_num in range(15, -1, -1)] +
            [state.i, state.dt, state.st, pc, opcode, vm.disassemble(opcode) or "(invalid)"]
        )

        if verbose:
            debug_str += ("\nRPL: 0x" + "{:02x}" * len(vm.rpl_flags)).format(*reversed(vm.rpl_flags))
            debug_str += "\nMem[I]: 0x{}".format(state.memory.read_block(state.i, MEM_DUMP_SIZE).hex())
            stack_items = state.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            debug_str += ("\nStack:{}").format(stack_str or " (Empty)")

        return debug_str

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, vm, pc, opcode, verbose=False):
        print(self.debug(vm, pc, opcode, verbose))
