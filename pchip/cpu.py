#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  The CPU
owns all of the machine state (RAM, registers, stack, timers, framebuffer and
key bitmask) and executes one instruction per cycle.  It never drives itself:
the host loop calls cycle() once per instruction slot, and only reads the
framebuffer or writes the key bitmask between cycles.

Every instance is completely independent, so tests can run as many machines
side by side as they like.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .constants import (
    APP_INTRO, DEFAULT_CLOCK_SPEED, DEFAULT_STACK_DEPTH, FONT_GLYPH_SIZE, FONT_LOCATION, PROGRAM_SIZE, PROGRAM_START,
    SYSTEM_FONT
)
from .debugger import Debugger
from .decoder import decode, masked_opcode, mnemonic
from .framebuffer import Framebuffer
from .quirks import Quirks
from .ram import RAM, RAMError
from .stack import Stack, StackError
from .timers import Timers

INDEX_MASK = 0xFFFF  # I is a 16-bit register, and wraps on overflow


class CPUError(Exception):
    pass


class LoadError(CPUError):
    pass


class FetchError(CPUError):
    pass


class OpcodeError(CPUError):
    pass


class CPU:
    def __init__(self, quirks=None, debugger=None, cycle_rate=DEFAULT_CLOCK_SPEED, stack_depth=DEFAULT_STACK_DEPTH,
                 strict=False):

        # Keep a private copy of the startup quirks, so reset() can restore them after runtime toggling
        self.default_quirks = Quirks() if quirks is None else quirks.copy()
        self.quirks = self.default_quirks.copy()
        self.debugger = Debugger() if debugger is None else debugger
        self.strict = strict  # Raise on unknown opcodes rather than skipping them

        self.ram = RAM()
        self.stack = Stack(stack_depth)
        self.framebuffer = Framebuffer()
        self.timers = Timers(cycle_rate)

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._sub_instruction,  # Exact match
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._sub_instruction,  # Bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._sub_instruction,  # Bitmask 0xF00F
            0x9: self._sub_instruction,  # Bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._sub_instruction,  # Bitmask 0xF0FF
            0xF: self._sub_instruction,  # Bitmask 0xF0FF
        }

        self.sub_instructions = {
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        self.reset()

    def reset(self):
        self.ram.clear()
        self.ram.write_block(FONT_LOCATION, SYSTEM_FONT)  # Fonts never move

        # Bytearrays are mutable, so this should be fast when a register is updated
        self.v = memoryview(bytearray(16))
        self.i = 0  # Index register
        self.pc = PROGRAM_START
        self.debug_pc = PROGRAM_START
        self.opcode = 0

        self.stack.clear()
        self.timers.reset()
        self.framebuffer.clear()
        self.keys = 0  # One bit per key, 0x0-0xF.  Written by the host's input plugin.
        self.quirks = self.default_quirks.copy()
        self.paused = False
        self.halted = False

    def load(self, rom):
        rom = bytes(rom)

        if len(rom) > PROGRAM_SIZE:
            raise LoadError(
                "ROM is {} bytes long, but only {} bytes of program memory are available".format(len(rom), PROGRAM_SIZE)
            )

        self.ram.write_block(PROGRAM_START, rom)
        self.pc = PROGRAM_START

    # Execution control

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False

    def is_paused(self):
        return self.paused

    def cycle(self, force=False):
        # Returns True if an instruction was executed
        if self.paused and not force:
            return False

        if self.halted:
            raise CPUError("Emulation halted at address 0x{:03x}.  Reset the CPU to continue.".format(self.debug_pc))

        self.timers.advance()

        try:
            self.step()
        except (CPUError, RAMError, StackError):
            # Execution isn't transactional, so the machine state can't be trusted after a failure
            self.halted = True
            raise

        return True

    def step(self):
        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.pc
        self.opcode = self.fetch()
        self.decode_exec()

    def fetch(self):
        # The program counter updates after fetch, but before execute
        pc = self.pc

        if pc < 0 or pc + 1 > self.ram.mem_top:
            raise FetchError("Program counter 0x{:04x} is outside memory".format(pc))

        opcode = self.ram.read_word(pc)
        self.pc = pc + 2
        return opcode

    def decode_exec(self):
        op = decode(self.opcode)

        if self.debugger.is_live():
            self.debugger.output(self, mnemonic(op, self.quirks))

        self.instructions[op.family](op)

    def _sub_instruction(self, op):
        instruction = self.sub_instructions.get(masked_opcode(op))

        if instruction is None:
            self._opcode_unsupported(op)
        else:
            instruction(op)

    def _opcode_unsupported(self, op):
        # Unknown opcodes are skipped, as the original interpreters did, unless running strictly
        if not self.strict:
            return

        raise OpcodeError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\nOpcode 0x{:04x} at address 0x{:03x} is not a CHIP-8 instruction."
            ).format(
                APP_INTRO, self.debugger.debug(self, "???", verbose=True), op.opcode, self.debug_pc
            )
        )

    # Key input

    def set_keys(self, mask):
        self.keys = mask & 0xFFFF

    def press_key(self, key):
        self.keys |= 1 << (key & 0xF)

    def release_key(self, key):
        self.keys &= ~(1 << (key & 0xF)) & 0xFFFF

    def is_key_down(self, key):
        # Registers can hold values above 0xF, which never match a key
        return bool((self.keys >> key) & 1)

    def _skip(self):
        self.pc += 2

    # Instructions.  Every flag-setting instruction writes Vf last, so Vf can also be used as an operand.

    def _00E0(self, op):  # CLS
        self.framebuffer.clear()

    def _00EE(self, op):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self, op):  # JP addr
        self.pc = op.nnn

    def _2nnn(self, op):  # CALL addr
        self.stack.push(self.pc)
        self.pc = op.nnn

    def _3xkk(self, op):  # SE Vx, byte
        if self.v[op.x] == op.nn:
            self._skip()

    def _4xkk(self, op):  # SNE Vx, byte
        if self.v[op.x] != op.nn:
            self._skip()

    def _5xy0(self, op):  # SE Vx, Vy
        if self.v[op.x] == self.v[op.y]:
            self._skip()

    def _6xkk(self, op):  # LD Vx, byte
        self.v[op.x] = op.nn

    def _7xkk(self, op):  # ADD Vx, byte
        # No carry flag for this one
        self.v[op.x] = (self.v[op.x] + op.nn) & 0xFF

    def _8xy0(self, op):  # LD Vx, Vy
        self.v[op.x] = self.v[op.y]

    def _8xy1(self, op):  # OR Vx, Vy
        self.v[op.x] |= self.v[op.y]
        self.v[0xF] = 0

    def _8xy2(self, op):  # AND Vx, Vy
        self.v[op.x] &= self.v[op.y]
        self.v[0xF] = 0

    def _8xy3(self, op):  # XOR Vx, Vy
        self.v[op.x] ^= self.v[op.y]
        self.v[0xF] = 0

    def _8xy4(self, op):  # ADD Vx, Vy
        val = self.v[op.x] + self.v[op.y]
        self.v[op.x] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _8xy5(self, op):  # SUB Vx, Vy
        vx = self.v[op.x]
        vy = self.v[op.y]
        self.v[op.x] = (vx - vy) & 0xFF
        self.v[0xF] = int(vx >= vy)  # Vf is set when NOT borrowing

    def _8xy6(self, op):  # SHR Vx {, Vy}
        if self.quirks.shift:
            self.v[op.x] = self.v[op.y]

        val = self.v[op.x]
        self.v[op.x] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self, op):  # SUBN Vx, Vy
        vx = self.v[op.x]
        vy = self.v[op.y]
        self.v[op.x] = (vy - vx) & 0xFF
        self.v[0xF] = int(vy >= vx)

    def _8xyE(self, op):  # SHL Vx {, Vy}
        if self.quirks.shift:
            self.v[op.x] = self.v[op.y]

        val = self.v[op.x]
        self.v[op.x] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self, op):  # SNE Vx, Vy
        if self.v[op.x] != self.v[op.y]:
            self._skip()

    def _Annn(self, op):  # LD I, addr
        self.i = op.nnn

    def _Bnnn(self, op):  # JP V0, addr
        # This is a nasty quirk which breaks lots of games if set incorrectly
        vr = 0 if self.quirks.jump else op.x
        self.pc = op.nnn + self.v[vr]

    def _Cxkk(self, op):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[op.x] = randint(0, 0xFF) & op.nn

    def _Dxyn(self, op):  # DRW Vx, Vy, nibble
        # Read the origin before Vf is touched, in case Vf is one of the operands
        x_pos = self.v[op.x]
        y_pos = self.v[op.y]
        sprite_rows = self.ram.read_block(self.i, op.n)
        self.v[0xF] = int(self.framebuffer.draw_sprite(x_pos, y_pos, sprite_rows))

    def _Ex9E(self, op):  # SKP Vx
        if self.is_key_down(self.v[op.x]):
            self._skip()

    def _ExA1(self, op):  # SKNP Vx
        if not self.is_key_down(self.v[op.x]):
            self._skip()

    def _Fx07(self, op):  # LD Vx, DT
        self.v[op.x] = self.timers.dt

    def _Fx0A(self, op):  # LD Vx, K
        # The timers still need to expire while waiting, so rather than block, wind the program counter back and let
        # the host keep cycling until a key shows up in the bitmask.
        keys = self.keys & 0xFFFF

        if not keys:
            self.pc -= 2
        else:
            self.v[op.x] = (keys & -keys).bit_length() - 1  # Lowest pressed key

    def _Fx15(self, op):  # LD DT, Vx
        self.timers.set_delay(self.v[op.x])

    def _Fx18(self, op):  # LD ST, Vx
        self.timers.set_sound(self.v[op.x])

    def _Fx1E(self, op):  # ADD I, Vx
        val = self.i + self.v[op.x]
        self.i = val & INDEX_MASK

        # Allow for Amiga CHIP-8 interpreter behaviour
        if self.quirks.index_overflow:
            self.v[0xF] = int(val > INDEX_MASK)

    def _Fx29(self, op):  # LD F, Vx
        self.i = (FONT_LOCATION + FONT_GLYPH_SIZE * self.v[op.x]) & INDEX_MASK

    def _Fx33(self, op):  # LD B, Vx
        val = self.v[op.x]
        i = self.i
        self.ram.check_overflow(i + 2)
        self.ram.write(i, val // 100)             # Most-significant digit
        self.ram.write(i + 1, (val // 10) % 10)   # Middle digit
        self.ram.write(i + 2, val % 10)           # Least-significant digit

    def _post_Fx55_Fx65(self, op):
        if self.quirks.load_store:
            self.i = (self.i + op.x + 1) & INDEX_MASK

    def _Fx55(self, op):  # LD [I], Vx
        i = self.i
        self.ram.check_overflow(i + op.x)

        # Ensure with +1s that the final register is copied
        for reg in range(op.x + 1):
            self.ram.write(i + reg, self.v[reg])

        self._post_Fx55_Fx65(op)

    def _Fx65(self, op):  # LD Vx, [I]
        i = self.i
        self.ram.check_overflow(i + op.x)

        for reg in range(op.x + 1):
            self.v[reg] = self.ram.read(i + reg)

        self._post_Fx55_Fx65(op)
