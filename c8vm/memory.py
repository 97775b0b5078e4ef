#!/usr/bin/env python3

"""
Memory Emulator

4KB of byte-addressable RAM.  The small (8x5) and big (8x10) system fonts are
written into the bottom of memory on creation, and programs are loaded at
0x200.  Opcodes are stored big-endian, whatever the byte order of the host.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE, ADDR_MASK, FONT_OFFSET, BIG_FONT_OFFSET, SMALL_FONT, BIG_FONT
from .errors import VMError

CPU_ENDIAN = "big"


class MemoryOverflow(VMError):
    pass


class Memory:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size
        self.write_block(FONT_OFFSET, SMALL_FONT)
        self.write_block(BIG_FONT_OFFSET, BIG_FONT)

    def __len__(self):
        return self.mem_size

    def read(self, location):
        return self.mem[location & ADDR_MASK]

    def read_block(self, location, size=1):
        return self.mem[location:location + size]

    def read_word(self, location):
        # Explicit byte order, so fetching behaves the same on any host.  The second byte wraps to 0x000.
        return int.from_bytes(bytes((self.read(location), self.read(location + 1))), CPU_ENDIAN, signed=False)

    def write(self, location, byte):
        self.mem[location & ADDR_MASK] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location > self.mem_top:
            raise MemoryOverflow("Memory overflow")

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_overflow(block_top - 1)
        self.mem[offset:block_top] = bytes(size)
