#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

The CPU only ever sees a 16-bit mask of held keys.  Plugins are responsible
for turning host key codes into that mask, using the keymap given here.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, renderer):
        self.keymap_dict = {}
        self.renderer = renderer
        keymap_split = keymap.split(",")

        if len(keymap_split) != 0x10:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

        self.key_mask = 0

    def process_messages(self):
        return False  # Don't exit the program

    def get_key_mask(self):
        return self.key_mask  # No keys are held

    def key_down(self, host_key):
        # Returns the CHIP-8 key number, or None if the host key isn't mapped
        hex_key = self.keymap_dict.get(host_key)

        if hex_key is not None:
            self.key_mask |= 1 << hex_key

        return hex_key

    def key_up(self, host_key):
        hex_key = self.keymap_dict.get(host_key)

        if hex_key is not None:
            self.key_mask &= ~(1 << hex_key)

        return hex_key

    def shutdown(self):
        pass
