#!/usr/bin/env python3

"""
Stack Emulator

The call stack has no location in memory and no stack pointer register exposed
to the running program, so a list is enough.  Only return addresses are ever
stored here, at most 12 of them.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_MAX_SIZE
from .errors import VMError, StackOverflow


class Stack:
    def __init__(self, size=STACK_MAX_SIZE):
        self.items = []
        self.size = size

    def __len__(self):
        return len(self.items)

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackOverflow()

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise VMError("cannot return from a subroutine: the stack is empty") from None

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For debugging
        return self.items
