#!/usr/bin/env python3

"""
VM State

Everything a running program can observe: registers, timers, memory, the call
stack and the state of the 16 keys.  Created once per VM and mutated in place.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import PROG_OFFSET, KEY_COUNT
from .memory import Memory
from .stack import Stack


class VMState:
    def __init__(self):
        self.memory = Memory()
        self.stack = Stack()
        self.regs = memoryview(bytearray(16))  # Bytearrays keep every register 8-bit on assignment
        self.input_table = [False] * KEY_COUNT
        self.rom_size = 0
        self.reset()

    def update_timers(self):
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    def reset(self):
        # Power-on values.  Program bytes in memory are left alone.
        self.pc = PROG_OFFSET
        self.dt = 0xFF
        self.st = 0
        self.i = 0
        self.regs[:] = bytes(16)
        self.stack.clear()

        for key in range(KEY_COUNT):
            self.input_table[key] = False
