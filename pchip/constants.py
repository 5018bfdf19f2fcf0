#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "PlainChip Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout
MEM_SIZE = 0x1000
PROGRAM_START = 0x200
PROGRAM_SIZE = MEM_SIZE - PROGRAM_START  # 0xE00 bytes available to a ROM
FONT_LOCATION = 0x50
FONT_GLYPH_SIZE = 5

# Display
VID_WIDTH = 64
VID_HEIGHT = 32
SPRITE_WIDTH = 8

# Timing
TIMER_FREQ = 60              # Timers count down at 60Hz regardless of CPU speed
DEFAULT_CLOCK_SPEED = 700    # Instructions per second
DEFAULT_STACK_DEPTH = 16

# Default mappings for keys 0-F.  Note that the keyscans (on a UK QWERTY keyboard) and ASCII characters for these are
# the same code.  Laid out as 1234/QWER/ASDF/ZXCV on the host keyboard.
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# CPU quirks, each selecting the legacy behaviour when enabled
CPU_QUIRKS = ["jump", "shift", "index_overflow", "load_store"]

QUIRK_PRESETS = {
    # Original COSMAC VIP interpreter
    "cosmac": {"jump": True, "shift": True, "index_overflow": False, "load_store": True},
    # CHIP-48 and Super-CHIP style interpreters
    "modern": {"jump": False, "shift": False, "index_overflow": False, "load_store": False},
}

DEFAULT_QUIRK_PRESET = "cosmac"

# Hex digit glyphs 0-F, 4 pixels wide and 5 rows high
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
))
