#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import io
import unittest
from contextlib import redirect_stdout
from c8vm.config import Config
from c8vm.debugger import Debugger
from c8vm.display import Display
from c8vm.errors import InvalidOpcode
from c8vm.vm import VM, VMMode


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.vm = VM(Display(), Config(), debugger=self.debugger)

    def test_debugger_live(self):
        self.assertFalse(self.debugger.is_live())
        self.debugger.set_live(True)
        self.assertTrue(self.debugger.is_live())

    def test_debugger_debug(self):
        self.vm.state.regs[0x0] = 0x1
        self.vm.state.regs[0xF] = 0xAB
        debug_str = self.debugger.debug(self.vm, 0x200, 0x730A)
        self.assertEqual(
            "V: 0xab" + "00" * 14 + "01 I: 0x0000 DT: 0xff ST: 0x00 PC: 0x200 OP: 0x730a IN: add V3, 0x0a",
            debug_str
        )

    def test_debugger_debug_verbose(self):
        self.vm.state.stack.push(0x204)
        debug_str = self.debugger.debug(self.vm, 0x200, 0xFFFF, verbose=True)
        self.assertIn("IN: (invalid)", debug_str)
        self.assertIn("\nRPL: 0x0000000000000000", debug_str)
        self.assertTrue(debug_str.endswith("\nStack: 0x204"))

    def test_debugger_debug_memory_at_i(self):
        self.vm.state.i = 0x000
        debug_str = self.debugger.debug(self.vm, 0x200, 0x00E0, verbose=True)
        self.assertIn("\nMem[I]: 0xf0909090f0206020\n", debug_str)  # Font digits 0 and 1

        self.vm.state.i = 0xFFE
        self.vm.state.memory.write_block(0xFFE, b"\xAB\xCD")
        debug_str = self.debugger.debug(self.vm, 0x200, 0x00E0, verbose=True)
        self.assertIn("\nMem[I]: 0xabcd\n", debug_str)

    def test_debugger_trace(self):
        self.debugger.set_live(True)
        self.vm.load(b"\x60\x05\xFF\xFF")
        self.vm.set_mode(VMMode.RUN)
        output = io.StringIO()

        with redirect_stdout(output):
            self.vm.step()
            self.assertRaises(InvalidOpcode, self.vm.step)

        lines = output.getvalue().splitlines()
        self.assertEqual(6, len(lines))
        self.assertIn("PC: 0x200 OP: 0x6005 IN: load V0, 0x05", lines[0])
        self.assertIn("PC: 0x202 OP: 0xffff", lines[1])
        self.assertEqual("Mem[I]: 0xf0909090f0206020", lines[4])
        self.assertEqual("Stack: (Empty)", lines[5])
