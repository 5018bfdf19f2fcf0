#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from pchip.cpu import CPU, LoadError
from pchip.hostio import Loader


class TestLoader(unittest.TestCase):
    def setUp(self):
        self.loader = Loader()
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp_dir.cleanup)

    def _write_rom(self, data):
        filename = os.path.join(self.tmp_dir.name, "test.ch8")

        with open(filename, "wb") as f:
            f.write(data)

        return filename

    def test_loader_load_file_present(self):
        filename = self._write_rom(b"\x00\xE0\x12\x00")
        self.assertEqual(b"\x00\xE0\x12\x00", self.loader.load_binary(filename))

    def test_loader_load_into_cpu(self):
        cpu = CPU()
        cpu.load(self.loader.load_binary(self._write_rom(b"\x60\x2A")))
        cpu.cycle()
        self.assertEqual(0x2A, cpu.v[0])

    def test_loader_oversized_rom(self):
        cpu = CPU()
        data = self.loader.load_binary(self._write_rom(b"\x00" * 0x1000))
        self.assertRaises(LoadError, cpu.load, data)

    def test_loader_load_file_missing(self):
        self.assertRaises(FileNotFoundError, self.loader.load_binary, os.path.join(self.tmp_dir.name, "NoFile.ch8"))
