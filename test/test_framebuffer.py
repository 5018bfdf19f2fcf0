#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.framebuffer import Framebuffer, FramebufferError


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer = Framebuffer()
        self.framebuffer_small = Framebuffer(4, 5)

    def test_framebuffer_size(self):
        self.assertEqual((64, 32), self.framebuffer.get_vid_size())
        rows = self.framebuffer.get_rows()
        self.assertEqual(32, len(rows))
        self.assertEqual(64, len(rows[0]))

    def test_framebuffer_writes(self):
        fb = self.framebuffer_small
        self.assertFalse(fb.xor_pixel(0, 0))
        self.assertEqual("0100000000000000000000000000000000000000", fb.vram.mem.hex())
        self.assertFalse(fb.xor_pixel(1, 1))
        self.assertEqual("0100000000010000000000000000000000000000", fb.vram.mem.hex())
        self.assertIsNone(fb.xor_pixel(4, 4))  # Should do nothing as sprites don't wrap
        self.assertIsNone(fb.xor_pixel(3, 5))
        self.assertEqual("0100000000010000000000000000000000000000", fb.vram.mem.hex())
        self.assertTrue(fb.xor_pixel(1, 1))
        self.assertEqual("0100000000000000000000000000000000000000", fb.vram.mem.hex())

        # Check clear works
        fb.clear()
        self.assertEqual("0000000000000000000000000000000000000000", fb.vram.mem.hex())

    def test_framebuffer_get_set_pixel(self):
        fb = self.framebuffer
        fb.set_pixel(63, 31, True)
        self.assertTrue(fb.get_pixel(63, 31))
        self.assertTrue(fb.get_rows()[31][63])
        self.assertFalse(fb.get_rows()[0][0])
        fb.set_pixel(63, 31, False)
        self.assertFalse(fb.get_pixel(63, 31))
        self.assertRaises(FramebufferError, fb.get_pixel, 64, 0)
        self.assertRaises(FramebufferError, fb.set_pixel, 0, 32, True)

    def test_framebuffer_draw_sprite(self):
        fb = self.framebuffer
        self.assertFalse(fb.draw_sprite(0, 0, b"\xFF"))
        self.assertEqual((True,) * 8 + (False,) * 56, fb.get_rows()[0])
        self.assertTrue(fb.draw_sprite(0, 0, b"\xFF"))
        self.assertEqual(0, fb.count_lit())

    def test_framebuffer_draw_sprite_msb_first(self):
        fb = self.framebuffer
        fb.draw_sprite(10, 2, b"\x81")
        self.assertTrue(fb.get_pixel(10, 2))
        self.assertTrue(fb.get_pixel(17, 2))
        self.assertEqual(2, fb.count_lit())

    def test_framebuffer_draw_sprite_partial_collision(self):
        fb = self.framebuffer
        fb.draw_sprite(0, 0, b"\x01")
        # Only the last pixel of the first row collides, the second row is clean
        self.assertTrue(fb.draw_sprite(0, 0, b"\x03\x80"))
        self.assertTrue(fb.get_pixel(6, 0))
        self.assertFalse(fb.get_pixel(7, 0))
        self.assertTrue(fb.get_pixel(0, 1))

    def test_framebuffer_draw_sprite_clipped(self):
        fb = self.framebuffer
        fb.set_pixel(0, 0, True)  # Would be hit if the sprite wrapped around
        self.assertFalse(fb.draw_sprite(60, 30, b"\xFF\xFF\xFF"))
        self.assertEqual(9, fb.count_lit())
        self.assertTrue(fb.get_pixel(0, 0))

    def test_framebuffer_draw_sprite_origin_wraps(self):
        fb = self.framebuffer
        fb.draw_sprite(64 + 1, 32 + 2, b"\x80")
        self.assertTrue(fb.get_pixel(1, 2))

    def test_framebuffer_rows_read_only(self):
        rows = self.framebuffer.get_rows()

        with self.assertRaises(TypeError):
            rows[0][0] = True

        # Snapshots don't follow later changes
        self.framebuffer.set_pixel(0, 0, True)
        self.assertFalse(rows[0][0])
