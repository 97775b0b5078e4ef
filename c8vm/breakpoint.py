#!/usr/bin/env python3

"""
Breakpoints

A named address.  The VM asks the map once per prospective instruction whether
the program counter sits on a breakpoint, so lookups by address must be
immediate.  Names are indexed too, for the benefit of whatever edits them.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Breakpoint:
    def __init__(self, name, offset):
        self.name = name
        self.offset = offset

    def __eq__(self, other):
        if not isinstance(other, Breakpoint):
            return NotImplemented

        return self.name == other.name and self.offset == other.offset

    def __repr__(self):
        return "Breakpoint({!r}, 0x{:04x})".format(self.name, self.offset)


class BreakpointMap:
    def __init__(self):
        self.by_offset = {}
        self.name_to_offset = {}

    def add(self, breakpoint):
        # The first breakpoint registered at an address (or under a name) wins
        if breakpoint.offset in self.by_offset or breakpoint.name in self.name_to_offset:
            return

        self.by_offset[breakpoint.offset] = breakpoint
        self.name_to_offset[breakpoint.name] = breakpoint.offset

    def remove(self, key):
        # Accepts either a name or an address
        if not self.has(key):
            return

        breakpoint = self.find(key)
        del self.by_offset[breakpoint.offset]
        del self.name_to_offset[breakpoint.name]

    def clear(self):
        self.by_offset.clear()
        self.name_to_offset.clear()

    def find(self, key):
        if isinstance(key, str):
            return self.by_offset[self.name_to_offset[key]]

        return self.by_offset[key]

    def has(self, key):
        if isinstance(key, str):
            return key in self.name_to_offset

        return key in self.by_offset

    def __contains__(self, key):
        return self.has(key)

    def __len__(self):
        return len(self.by_offset)

    def __iter__(self):
        return iter(self.by_offset.values())
