#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8vm.breakpoint import Breakpoint, BreakpointMap


class TestBreakpointMap(unittest.TestCase):
    def setUp(self):
        self.breakpoints = BreakpointMap()
        self.breakpoints.add(Breakpoint("main", 0x200))
        self.breakpoints.add(Breakpoint("loop", 0x20A))

    def test_breakpoint_add(self):
        self.assertEqual(2, len(self.breakpoints))
        self.assertIn(0x200, self.breakpoints)
        self.assertIn("loop", self.breakpoints)
        self.assertNotIn(0x202, self.breakpoints)
        self.assertNotIn("draw", self.breakpoints)

    def test_breakpoint_add_duplicate(self):
        self.breakpoints.add(Breakpoint("other", 0x200))
        self.breakpoints.add(Breakpoint("main", 0x300))
        self.assertEqual(2, len(self.breakpoints))
        self.assertEqual("main", self.breakpoints.find(0x200).name)
        self.assertNotIn(0x300, self.breakpoints)

    def test_breakpoint_find(self):
        self.assertEqual(Breakpoint("loop", 0x20A), self.breakpoints.find("loop"))
        self.assertEqual(Breakpoint("main", 0x200), self.breakpoints.find(0x200))
        self.assertRaises(KeyError, self.breakpoints.find, 0x202)

    def test_breakpoint_remove_by_name(self):
        self.breakpoints.remove("main")
        self.assertNotIn(0x200, self.breakpoints)
        self.assertNotIn("main", self.breakpoints)
        self.assertEqual(1, len(self.breakpoints))

    def test_breakpoint_remove_by_offset(self):
        self.breakpoints.remove(0x20A)
        self.assertNotIn("loop", self.breakpoints)
        self.breakpoints.remove(0x20A)  # Already gone
        self.assertEqual(1, len(self.breakpoints))

    def test_breakpoint_clear(self):
        self.breakpoints.clear()
        self.assertEqual(0, len(self.breakpoints))
        self.assertFalse(self.breakpoints.has("main"))

    def test_breakpoint_iter(self):
        self.assertEqual(["main", "loop"], [bp.name for bp in self.breakpoints])

    def test_breakpoint_repr(self):
        self.assertEqual("Breakpoint('main', 0x0200)", repr(self.breakpoints.find("main")))
