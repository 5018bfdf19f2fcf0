#!/usr/bin/env python3

"""
Instruction Decoder

Every CHIP-8 instruction is a single 16-bit word, and the operands always sit
in the same bit positions, so decoding is just a matter of slicing fields out
of the word:

    family = bits 12-15
    x      = bits 8-11 (register)
    y      = bits 4-7  (register)
    n      = bits 0-3  (nibble)
    nn     = bits 0-7  (byte)
    nnn    = bits 0-11 (address)

Which fields are meaningful depends on the family.  The CPU picks what it
needs.  The mnemonic renderer here is only used for debug output.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

Instruction = namedtuple("Instruction", ["opcode", "family", "x", "y", "n", "nn", "nnn"])


def decode(opcode):
    return Instruction(
        opcode,
        (opcode & 0xF000) >> 12,
        (opcode & 0x0F00) >> 8,
        (opcode & 0x00F0) >> 4,
        opcode & 0x000F,
        opcode & 0x00FF,
        opcode & 0x0FFF
    )


# Formats for instructions identified by family alone
_FAMILY_FORMATS = {
    0x1: "JP 0x{nnn:03x}",
    0x2: "CALL 0x{nnn:03x}",
    0x3: "SE V{x:01x}, 0x{nn:02x}",
    0x4: "SNE V{x:01x}, 0x{nn:02x}",
    0x6: "LD V{x:01x}, 0x{nn:02x}",
    0x7: "ADD V{x:01x}, 0x{nn:02x}",
    0xA: "LD I, 0x{nnn:03x}",
    0xB: "JP V0, 0x{nnn:03x}",
    0xC: "RND V{x:01x}, 0x{nn:02x}",
    0xD: "DRW V{x:01x}, V{y:01x}, 0x{n:01x}",
}

# Formats for instructions which need the sub-opcode, keyed by the masked opcode
_MASKED_FORMATS = {
    0x00E0: "CLS",
    0x00EE: "RET",
    0x5000: "SE V{x:01x}, V{y:01x}",
    0x8000: "LD V{x:01x}, V{y:01x}",
    0x8001: "OR V{x:01x}, V{y:01x}",
    0x8002: "AND V{x:01x}, V{y:01x}",
    0x8003: "XOR V{x:01x}, V{y:01x}",
    0x8004: "ADD V{x:01x}, V{y:01x}",
    0x8005: "SUB V{x:01x}, V{y:01x}",
    0x8006: "SHR V{x:01x}, V{y:01x}",
    0x8007: "SUBN V{x:01x}, V{y:01x}",
    0x800E: "SHL V{x:01x}, V{y:01x}",
    0x9000: "SNE V{x:01x}, V{y:01x}",
    0xE09E: "SKP V{x:01x}",
    0xE0A1: "SKNP V{x:01x}",
    0xF007: "LD V{x:01x}, DT",
    0xF00A: "LD V{x:01x}, K",
    0xF015: "LD DT, V{x:01x}",
    0xF018: "LD ST, V{x:01x}",
    0xF01E: "ADD I, V{x:01x}",
    0xF029: "LD F, V{x:01x}",
    0xF033: "LD B, V{x:01x}",
    0xF055: "LD [I], V{x:01x}",
    0xF065: "LD V{x:01x}, [I]",
}


def masked_opcode(instruction):
    # Reduce an opcode to the key used for sub-opcode lookups (operand fields zeroed)
    family = instruction.family

    if family == 0x0:
        return instruction.opcode
    if family in (0x5, 0x8, 0x9):
        return instruction.opcode & 0xF00F
    if family in (0xE, 0xF):
        return instruction.opcode & 0xF0FF

    return None


def _quirk_format(instruction, quirks):
    if instruction.family == 0xB:
        return "JP V0, 0x{nnn:03x}" if quirks.jump else "JP V{x:01x}, 0x{nnn:03x}"

    masked = masked_opcode(instruction)

    if masked in (0x8006, 0x800E) and not quirks.shift:
        return "{} V{{x:01x}}".format("SHR" if masked == 0x8006 else "SHL")

    return None


def mnemonic(instruction, quirks=None):
    # Without quirks, the COSMAC operand forms are shown
    fmt = None if quirks is None else _quirk_format(instruction, quirks)

    if fmt is None:
        fmt = _FAMILY_FORMATS.get(instruction.family)

    if fmt is None:
        fmt = _MASKED_FORMATS.get(masked_opcode(instruction), "???")

    return fmt.format(**instruction._asdict())
