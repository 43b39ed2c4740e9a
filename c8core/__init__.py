#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import APP_INTRO, DEFAULT_KEYMAP
from .emulator import Emulator, HaltReason
from .host import Host
from .hostio import Loader

logger = logging.getLogger(__name__)


class StartupError(Exception):
    pass


def main(args):
    logger.info(APP_INTRO)
    opt_renderer = args["renderer"] or "pygame"

    if opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel
        try:
            import pygame  # noqa: F401
        except ImportError:
            raise StartupError("PyGame does not appear to be installed.") from None

        from .inputs.i_pygame import Inputs
        from .renderers.r_pygame import Renderer
    elif opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
    else:
        raise StartupError("Unknown renderer '{}'.".format(opt_renderer))

    # Read ROM binary and write it into memory, after the font
    emulator = Emulator(stack_depth=args["stack_depth"])
    emulator.load_program(Loader().load_binary(args["filename"]))

    renderer = Renderer(scale=args["scale"])
    inputs = Inputs(args["keymap"] or DEFAULT_KEYMAP, renderer)
    host = Host(emulator, renderer, inputs, clock_speed=args["clock_speed"])

    try:
        return host.run()
    finally:
        # The emulator has stopped, so shut down the plugins.  __del__ cannot be relied upon when using PyPy
        inputs.shutdown()
        renderer.shutdown()
