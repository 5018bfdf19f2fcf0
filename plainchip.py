#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from pchip import main
from pchip.constants import CPU_QUIRKS, DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP, DEFAULT_QUIRK_PRESET, QUIRK_PRESETS


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int, default=DEFAULT_CLOCK_SPEED,
        help="set the CPU speed in operations/second (default {}, 0 = uncapped)".format(DEFAULT_CLOCK_SPEED)
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"],
        help="set the rendering and input systems (pygame by default)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 1024)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes.  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--palette",
        help="redefine the background and foreground colours in comma-separated hex, e.g. 000000,FFFFFF"
    )
    parser.add_argument(
        "-p", "--preset", choices=list(QUIRK_PRESETS.keys()), default=DEFAULT_QUIRK_PRESET,
        help="set all quirks to match the COSMAC VIP or modern (CHIP-48/Super-CHIP) interpreters"
    )

    for sys_quirk in CPU_QUIRKS:
        parser.add_argument(
            "--{}_quirks".format(sys_quirk), type=int, choices=[0, 1],
            help="manually disable or enable {} quirks".format(sys_quirk.replace("_", " "))
        )

    parser.add_argument(
        "--stack_depth", type=int,
        help="set the number of call stack levels (default 16, 0 = unlimited)"
    )
    parser.add_argument(
        "--strict", action="store_true", default=False,
        help="halt on unknown opcodes instead of skipping them"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def cli():
    args = vars(parse_args())
    # It is possible to start the emulator from a GUI by calling main with a dictionary
    main(args)


if __name__ == "__main__":
    cli()
