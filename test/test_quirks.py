#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.quirks import Quirks, QuirksError


class TestQuirks(unittest.TestCase):
    def test_quirks_defaults(self):
        quirks = Quirks()
        self.assertEqual(
            {"jump": True, "shift": True, "index_overflow": False, "load_store": True}, quirks.as_dict()
        )
        self.assertEqual(Quirks.from_preset("cosmac"), quirks)

    def test_quirks_modern_preset(self):
        quirks = Quirks.from_preset("modern")
        self.assertFalse(any(quirks.as_dict().values()))

    def test_quirks_overrides(self):
        quirks = Quirks.from_preset("modern", shift=1, jump=None)
        self.assertTrue(quirks.shift)
        self.assertFalse(quirks.jump)

    def test_quirks_bad_preset(self):
        self.assertRaises(QuirksError, Quirks.from_preset, "amiga")

    def test_quirks_bad_override(self):
        self.assertRaises(QuirksError, Quirks.from_preset, "cosmac", logic=True)

    def test_quirks_copy_independent(self):
        quirks = Quirks()
        copied = quirks.copy()
        copied.index_overflow = True
        self.assertFalse(quirks.index_overflow)
        self.assertNotEqual(quirks, copied)

    def test_quirks_repr(self):
        self.assertEqual(
            "Quirks(jump=False, shift=False, index_overflow=False, load_store=False)",
            repr(Quirks.from_preset("modern"))
        )
