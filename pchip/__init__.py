#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, DEFAULT_CLOCK_SPEED, DEFAULT_QUIRK_PRESET, DEFAULT_STACK_DEPTH
from .cpu import CPU
from .debugger import Debugger
from .hostio import Loader
from .hostloop import HostLoop
from .quirks import Quirks


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_setting = args["{}_quirks".format(cpu_quirk)]
        quirk_settings[cpu_quirk] = None if quirk_setting is None else bool(quirk_setting)

    preset = args["preset"]
    quirks = Quirks.from_preset(DEFAULT_QUIRK_PRESET if preset is None else preset, **quirk_settings)

    opt_renderer = args["renderer"]

    if opt_renderer is None or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel
        try:
            import pygame  # noqa: F401
        except ImportError:
            raise StartupError("PyGame does not appear to be installed.  Use the null renderer to run headless.") from None

        from .inputs.i_pygame import Inputs
        from .renderers.r_pygame import Renderer
    elif opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
    else:
        raise StartupError("Unknown renderer '{}'".format(opt_renderer))

    # A stack depth of 0 removes the limit entirely
    stack_depth = args["stack_depth"]

    if stack_depth is None:
        stack_depth = DEFAULT_STACK_DEPTH
    elif stack_depth <= 0:
        stack_depth = None

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    # Timers stay calibrated to the default rate when the CPU runs uncapped
    clock_speed = args["clock_speed"]

    if clock_speed is None:
        clock_speed = DEFAULT_CLOCK_SPEED

    cycle_rate = DEFAULT_CLOCK_SPEED if clock_speed <= 0 else clock_speed

    # Create a new CPU with fonts already in RAM, and write the ROM in at the default address
    cpu = CPU(
        quirks=quirks, debugger=debugger, cycle_rate=cycle_rate, stack_depth=stack_depth,
        strict=args["strict"]
    )
    cpu.load(Loader().load_binary(args["filename"]))

    renderer = Renderer(scale=args["scale"], palette=args["palette"])

    # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
    inputs = Inputs(args["keymap"], renderer)

    try:
        HostLoop(cpu, renderer, inputs, clock_speed=max(clock_speed, 0)).run()
    finally:
        # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        inputs.shutdown()
        renderer.shutdown()
