#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from c8vm import main
from c8vm.config import KEYMAPS
from c8vm.constants import SUPPORTED_ARCHS, CPU_QUIRKS, DEFAULT_CYCLES_PER_SEC


def parse_args():
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-a", "--arch", choices=SUPPORTED_ARCHS, default="chip8",
        help="set instructions and quirks automatically for CHIP-8 or Super-CHIP"
    )
    parser.add_argument(
        "-c", "--clock_speed", type=int,
        help="override the CPU speed in operations/second (default {}, 0 = uncapped)".format(DEFAULT_CYCLES_PER_SEC)
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise null)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="multiply the window size by this factor (default 1)"
    )
    parser.add_argument(
        "--on_colour",
        help="colour of lit pixels in 6 hex digits, e.g. FFFFFF (default)"
    )
    parser.add_argument(
        "--off_colour",
        help="colour of unlit pixels in 6 hex digits, e.g. 000000 (default)"
    )
    parser.add_argument(
        "--fade", action="store_true", default=False,
        help="fade pixels out gradually when switched off, to reduce flicker"
    )
    parser.add_argument(
        "--grid", action="store_true", default=False,
        help="draw a grid between pixels"
    )
    parser.add_argument(
        "-m", "--mute", action="store_true", default=False,
        help="mute the emulated audio"
    )
    parser.add_argument(
        "--volume", type=float,
        help="tone level in dB (default 3.0)"
    )
    parser.add_argument(
        "--frequency", type=int,
        help="tone frequency in Hz (default 440)"
    )
    parser.add_argument(
        "--waveform", choices=["sine", "square", "saw"],
        help="tone waveform (default square)"
    )
    parser.add_argument(
        "-l", "--layout", choices=list(KEYMAPS.keys()),
        help="choose a predefined keymap.  'modern' is 1234/QWER/ASDF/ZXCV (default), 'original' is 0-9 and A-F"
    )
    parser.add_argument(
        "-k", "--keymap",
        help="redefine the 16 keyscan codes.  Separate each decimal with a comma.  Overrides the layout"
    )
    parser.add_argument(
        "--seed", type=int,
        help="seed the random number generator, so a program behaves the same on every run"
    )

    for sys_quirk in CPU_QUIRKS + ["screen_wrap"]:
        parser.add_argument(
            "--{}_quirks".format(sys_quirk), type=int, choices=[0, 1],
            help="manually disable or enable {} quirks".format(sys_quirk.replace("_", " "))
        )

    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output.  Slows CPU execution"
    )
    return parser.parse_args()  # Can call sys.exit(2) if args are incorrect


if __name__ == "__main__":
    args = vars(parse_args())
    # It is possible to start the emulator from a GUI by calling this with a dictionary
    main(args)
