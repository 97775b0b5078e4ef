#!/usr/bin/env python3

"""
Configuration

Plain settings objects, grouped the way the parts of the emulator use them.
They can be built by hand, or from the dictionary of command line options with
Config.from_args().  Anything left as None in that dictionary keeps its
default.

Keymaps are 16 comma-separated decimal key codes, for keys 0 to F in order.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from enum import Enum
from time import time
from .constants import DEFAULT_CYCLES_PER_SEC, DEFAULT_KEYMAP, ORIGINAL_KEYMAP, KEY_COUNT, CPU_QUIRKS
from .display import DEFAULT_ON_COLOUR, DEFAULT_OFF_COLOUR, DEFAULT_FADE_SPEED, LORES_DISPLAY_SIZE, LORES_PIXEL_SIZE
from .quirks import Quirks, QuirksError

KEYMAPS = {
    "modern": DEFAULT_KEYMAP,
    "original": ORIGINAL_KEYMAP
}


class ConfigError(Exception):
    pass


class Waveform(Enum):
    SINE = 0
    SQUARE = 1
    SAW = 2


def parse_keymap(keymap):
    # Returns a dictionary of host key code -> key number
    layout = {}
    keymap_split = keymap.split(",")

    if len(keymap_split) != KEY_COUNT:
        raise ConfigError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

    for key_num, key_defined in enumerate(keymap_split):
        try:
            key_code = int(key_defined)
        except ValueError:
            raise ConfigError("Defined keys are not all integer values") from None

        if key_code in layout:
            raise ConfigError("Duplicate keys defined")

        layout[key_code] = key_num

    return layout


def parse_colour(colour):
    # "RRGGBB" hex -> (r, g, b)
    if len(colour) != 6:
        raise ConfigError("Colours must be 6 hex digits long, not '{}'".format(colour))

    try:
        value = int(colour, 16)
    except ValueError:
        raise ConfigError("Invalid colour '{}'".format(colour)) from None

    return (value >> 16, (value >> 8) & 0xFF, value & 0xFF)


class GraphicsConfig:
    def __init__(self, on_colour=DEFAULT_ON_COLOUR, off_colour=DEFAULT_OFF_COLOUR, window_size=None, scale_factor=1,
                 enable_fade=False, fade_speed=DEFAULT_FADE_SPEED, enable_grid=False):

        self.on_colour = on_colour
        self.off_colour = off_colour
        self.window_size = window_size or tuple(d * p for d, p in zip(LORES_DISPLAY_SIZE, LORES_PIXEL_SIZE))
        self.scale_factor = scale_factor
        self.enable_fade = enable_fade
        self.fade_speed = fade_speed
        self.enable_grid = enable_grid


class CPUConfig:
    def __init__(self, cycles_per_sec=DEFAULT_CYCLES_PER_SEC, uncap_cycles_per_sec=False, rng_seed=None,
                 debug_mode=False, rpl_flags=0):

        self.cycles_per_sec = cycles_per_sec
        self.uncap_cycles_per_sec = uncap_cycles_per_sec
        self.rng_seed = int(time()) if rng_seed is None else rng_seed
        self.debug_mode = debug_mode
        self.rpl_flags = rpl_flags  # All 8 RPL flags packed into one 64-bit number, V0 first

    def is_uncapped(self):
        return self.uncap_cycles_per_sec or self.cycles_per_sec <= 0


class InputConfig:
    def __init__(self, keymap=DEFAULT_KEYMAP):
        self.keymap = keymap
        self.layout = parse_keymap(keymap)


class SoundConfig:
    def __init__(self, enable=True, level=3.0, frequency=440, waveform=Waveform.SQUARE):
        self.enable = enable
        self.level = level  # dB
        self.frequency = frequency
        self.waveform = waveform


class Config:
    def __init__(self, graphics=None, cpu=None, inputs=None, sound=None, quirks=None):
        self.graphics = graphics or GraphicsConfig()
        self.cpu = cpu or CPUConfig()
        self.inputs = inputs or InputConfig()
        self.sound = sound or SoundConfig()
        self.quirks = quirks or Quirks()

    @classmethod
    def from_args(cls, args):
        # Build from a dictionary of options, as produced by the command line parser
        try:
            quirks = Quirks.for_arch(args.get("arch") or "chip8")
        except QuirksError as error:
            raise ConfigError(str(error)) from None

        for cpu_quirk in CPU_QUIRKS:
            quirk_setting = args.get("{}_quirks".format(cpu_quirk))

            if quirk_setting is not None:
                setattr(quirks, cpu_quirk, bool(quirk_setting))

        screen_wrap = args.get("screen_wrap_quirks")

        if screen_wrap is not None:
            quirks.set_wrap(bool(screen_wrap))

        keymap = args.get("keymap")

        if keymap is None:
            keymap = KEYMAPS[args.get("layout") or "modern"]

        graphics = GraphicsConfig(
            on_colour=parse_colour(args["on_colour"]) if args.get("on_colour") else DEFAULT_ON_COLOUR,
            off_colour=parse_colour(args["off_colour"]) if args.get("off_colour") else DEFAULT_OFF_COLOUR,
            scale_factor=args.get("scale") or 1,
            enable_fade=bool(args.get("fade")),
            enable_grid=bool(args.get("grid"))
        )

        clock_speed = args.get("clock_speed")
        cpu = CPUConfig(
            cycles_per_sec=DEFAULT_CYCLES_PER_SEC if clock_speed is None else clock_speed,
            rng_seed=args.get("seed"),
            debug_mode=bool(args.get("debug"))
        )

        waveform = args.get("waveform")

        try:
            sound = SoundConfig(
                enable=not args.get("mute"),
                level=3.0 if args.get("volume") is None else args["volume"],
                frequency=args.get("frequency") or 440,
                waveform=Waveform.SQUARE if waveform is None else Waveform[waveform.upper()]
            )
        except KeyError:
            raise ConfigError("Unknown waveform '{}'".format(waveform)) from None

        return cls(graphics, cpu, InputConfig(keymap), sound, quirks)
