#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

import logging
import sys
from argparse import ArgumentParser
from c8core import main, HaltReason
from c8core.constants import DEFAULT_KEYMAP, LOG_FORMAT


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int,
        help="set the CPU speed in instructions/second (default 700, 0 = uncapped)"
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"],
        help="set the rendering and input systems (pygame by default)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 512)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--stack_depth", type=int,
        help="set the number of nested subroutine calls allowed (default 16)"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="log every executed instruction.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


if __name__ == "__main__":
    args = vars(parse_args())
    logging.basicConfig(level=logging.DEBUG if args["debug"] else logging.INFO, format=LOG_FORMAT)
    # It is possible to start the emulator from a GUI by calling this with a dictionary
    halt_reason = main(args)
    sys.exit(1 if halt_reason in (HaltReason.STACK_UNDERFLOW, HaltReason.STACK_OVERFLOW) else 0)
