#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from io import StringIO
from pchip.cpu import CPU
from pchip.debugger import Debugger


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.stream = StringIO()
        self.debugger = Debugger(self.stream)
        self.cpu = CPU(debugger=self.debugger)

    def test_debugger_not_live_by_default(self):
        self.assertFalse(self.debugger.is_live())
        self.cpu.load(b"\x61\x07")
        self.cpu.cycle()
        self.assertEqual("", self.stream.getvalue())

    def test_debugger_live_trace(self):
        self.debugger.set_live(True)
        self.cpu.load(b"\x6F\x07\x81\xF4")
        self.cpu.cycle()
        self.cpu.cycle()
        lines = self.stream.getvalue().splitlines()
        self.assertEqual(2, len(lines))
        self.assertTrue(lines[0].endswith("PC: 0x200 OP: 0x6f07 IN: LD Vf, 0x07"))
        self.assertTrue(lines[1].startswith("V: 0x07"))  # Vf comes first
        self.assertTrue(lines[1].endswith("PC: 0x202 OP: 0x81f4 IN: ADD V1, Vf"))

    def test_debugger_verbose(self):
        self.cpu.stack.push(0x246)
        self.cpu.set_keys(0x8001)
        debug_str = self.debugger.debug(self.cpu, "???", verbose=True)
        self.assertIn("Stack: 0x246", debug_str)
        self.assertIn("Keys: 0b1000000000000001", debug_str)

    def test_debugger_trace_follows_quirks(self):
        self.debugger.set_live(True)
        self.cpu.load(b"\x81\x26\x81\x26")
        self.cpu.cycle()
        self.cpu.quirks.shift = False
        self.cpu.cycle()
        lines = self.stream.getvalue().splitlines()
        self.assertTrue(lines[0].endswith("IN: SHR V1, V2"))
        self.assertTrue(lines[1].endswith("IN: SHR V1"))
