#!/usr/bin/env python3

"""
Quirks
------

Historical interpreters disagree on the details of a handful of instructions.
Each disagreement is a toggle here, so the same VM can run programs written
against any of them.

- Jump offset uses V0      : Bnnn jumps to nnn + V0.  Otherwise nnn + Vx.
- Wrap X / Wrap Y          : Sprite pixels past the right / bottom edge wrap
                             around instead of being clipped.
- Bitwise resets VF        : OR, AND and XOR zero VF first.
- Shift sets Vx to Vy      : 8xy6 / 8xyE copy Vy into Vx before shifting.
- Load/save increments I   : Fx55 / Fx65 leave I pointing after the last
                             register copied.
- Lo-res big sprite 8 wide : Dxy0 draws 8x16 rather than 16x16 in low
                             resolution mode.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from enum import Enum
from .display import Wrap


class Extension(Enum):
    NONE = 0
    SCHIP = 1


class QuirksError(Exception):
    pass


class Quirks:
    def __init__(self, jump_offset_use_v0=True, wrap_x=Wrap.CLIP, wrap_y=Wrap.CLIP, bitwise_reset_vf=False,
                 shift_sets_vx_to_vy=True, load_save_increment_i=True, lores_big_sprite_8_wide=False,
                 extension=Extension.NONE):

        self.jump_offset_use_v0 = jump_offset_use_v0
        self.wrap_x = wrap_x
        self.wrap_y = wrap_y
        self.bitwise_reset_vf = bitwise_reset_vf
        self.shift_sets_vx_to_vy = shift_sets_vx_to_vy
        self.load_save_increment_i = load_save_increment_i
        self.lores_big_sprite_8_wide = lores_big_sprite_8_wide
        self.extension = extension

    @classmethod
    def for_arch(cls, arch):
        if arch == "chip8":
            return cls(bitwise_reset_vf=True)

        if arch == "schip":
            return cls(
                jump_offset_use_v0=False, shift_sets_vx_to_vy=False, load_save_increment_i=False,
                lores_big_sprite_8_wide=True, extension=Extension.SCHIP
            )

        raise QuirksError("Unknown architecture '{}'".format(arch))

    def set_wrap(self, enabled):
        # Both axes at once, as the command line only has one switch for it
        self.wrap_x = self.wrap_y = Wrap.WRAP if enabled else Wrap.CLIP
