#!/usr/bin/env python3

"""
CPU Quirk Flags

Interpreters written over the years disagree on a handful of instructions.
Each flag below selects the legacy (COSMAC VIP era) behaviour when True:

    - jump          : BNNN adds V0 to the address.  Otherwise VX is added,
                      as on CHIP-48 and Super-CHIP.
    - shift         : 8XY6 and 8XYE copy VY into VX before shifting.
                      Otherwise VX is shifted in place.
    - index_overflow: FX1E sets VF when I overflows 16 bits, as the Amiga
                      interpreter did.  Otherwise VF is left alone.
    - load_store    : FX55 and FX65 leave I pointing past the last register
                      copied.  Otherwise I is unchanged.

The CPU reads these on every instruction, so they can be flipped at any time
without disturbing anything else.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import CPU_QUIRKS, QUIRK_PRESETS, DEFAULT_QUIRK_PRESET


class QuirksError(Exception):
    pass


class Quirks:
    def __init__(self, jump=True, shift=True, index_overflow=False, load_store=True):
        self.jump = jump
        self.shift = shift
        self.index_overflow = index_overflow
        self.load_store = load_store

    @classmethod
    def from_preset(cls, preset=DEFAULT_QUIRK_PRESET, **overrides):
        # Overrides of None mean "use the preset's setting"
        try:
            settings = dict(QUIRK_PRESETS[preset])
        except KeyError:
            raise QuirksError("Unknown quirk preset '{}'".format(preset)) from None

        for name, value in overrides.items():
            if name not in CPU_QUIRKS:
                raise QuirksError("Unknown quirk '{}'".format(name))

            if value is not None:
                settings[name] = bool(value)

        return cls(**settings)

    def as_dict(self):
        return {name: getattr(self, name) for name in CPU_QUIRKS}

    def copy(self):
        return Quirks(**self.as_dict())

    def __eq__(self, other):
        if not isinstance(other, Quirks):
            return NotImplemented

        return self.as_dict() == other.as_dict()

    def __repr__(self):
        return "Quirks({})".format(", ".join("{}={}".format(k, v) for k, v in self.as_dict().items()))
