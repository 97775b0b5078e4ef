#!/usr/bin/env python3

"""
VM Errors

Every error raised while a program is loaded or running derives from VMError,
so a caller only needs to catch one type to pause and report.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_MAX_SIZE


class VMError(Exception):
    pass


class InvalidOpcode(VMError):
    def __init__(self, opcode, offset):
        self.opcode = opcode
        self.offset = offset
        super().__init__("invalid opcode 0x{:04x} at 0x{:04x}".format(opcode, offset))


class StackOverflow(VMError):
    def __init__(self):
        super().__init__(
            "the maximum number of values in the stack ({}) has been exceeded".format(STACK_MAX_SIZE)
        )


class ROMSizeError(VMError, ValueError):
    pass
