#!/usr/bin/env python3

"""
Stack Emulator

There is no specified location for the call stack in CHIP-8 memory, and no
stack pointer register is exposed to the running program, so a list of return
addresses is all that is needed.

The COSMAC VIP only had room for a handful of levels, and later interpreters
settled on 16.  The depth is configurable here, and can be removed entirely by
passing None.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DEFAULT_STACK_DEPTH


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size=DEFAULT_STACK_DEPTH):
        self.items = []
        self.size = size

    def push(self, item):
        if self.size is not None and len(self.items) >= self.size:
            raise StackError("Stack overflow")

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For debugging
        return self.items

    def __len__(self):
        return len(self.items)
