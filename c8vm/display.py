#!/usr/bin/env python3

"""
Display Emulator

Pixels are written here, and are only drawn to the actual screen (by whichever
renderer plugin is attached) once per frame.  Programs cannot write into video
memory directly.  Instead, sprites are XORed onto the display and any lit
pixel switched off by a sprite is reported as a collision.

The display is kept as one bit vector per row, bit 0 being the leftmost
column.  Every row also tracks the sub-range of columns changed since the last
time a renderer took the updates, so only those pixels need redrawing.  Some
operations (clearing, scrolling, resolution changes, colour changes) simply
mark everything as changed.

When fading is enabled, pixels that are switched off don't vanish at once.
Their colour instead decays towards the 'off' colour a little on each
animation tick, which hides most of the flicker XOR drawing produces.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from enum import Enum

LORES_DISPLAY_SIZE = (64, 32)
HIRES_DISPLAY_SIZE = (128, 64)
LORES_PIXEL_SIZE = (10, 10)
HIRES_PIXEL_SIZE = (5, 5)
TEXTURE_SIZE = (640, 320)  # Both resolutions fill the same physical area

DEFAULT_OFF_COLOUR = (0x00, 0x00, 0x00)
DEFAULT_ON_COLOUR = (0xFF, 0xFF, 0xFF)
DEFAULT_FADE_SPEED = 16


class Resolution(Enum):
    LOW = 0
    HIGH = 1


class ScrollDirection(Enum):
    DOWN = 0
    RIGHT = 1
    LEFT = 2


class Wrap(Enum):
    CLIP = 0
    WRAP = 1


class Region:
    # Half-open range of columns [begin, end).  Empty when begin == end.
    def __init__(self):
        self.begin = 0
        self.end = 0

    def is_empty(self):
        return self.begin >= self.end

    def expand(self, x):
        # Grow to include x, never shrink
        if self.is_empty():
            self.begin = x
            self.end = x + 1
        else:
            self.begin = min(self.begin, x)
            self.end = max(self.end, x + 1)

    def cover(self, width):
        self.begin = 0
        self.end = width

    def reset(self):
        self.begin = 0
        self.end = 0


class Line:
    def __init__(self):
        self.data = 0
        self.updated_region = Region()


class Sprite:
    def __init__(self, pos, rows, width=8):
        self.pos = pos
        self.rows = rows
        self.width = width


class Display:
    def __init__(self, on_colour=DEFAULT_ON_COLOUR, off_colour=DEFAULT_OFF_COLOUR, scale_factor=1,
                 enable_grid=False, enable_fade=False, fade_speed=DEFAULT_FADE_SPEED):

        self.on_colour = tuple(on_colour)
        self.off_colour = tuple(off_colour)
        self.scale_factor = scale_factor
        self.grid_enabled = enable_grid
        self.fade_enabled = enable_fade
        self.fade_speed = fade_speed
        self.wrap_x = Wrap.CLIP
        self.wrap_y = Wrap.CLIP
        self.fading_pixels = {}  # (x, y) -> [r, g, b]
        self.lines = []
        self.updated_lines = set()
        self.changed = False
        self.res = None
        self.size = (0, 0)
        self.pixel_size = (0, 0)
        self.set_resolution(Resolution.LOW)

    @property
    def width(self):
        return self.size[0]

    @property
    def height(self):
        return self.size[1]

    def get_size(self):
        return self.size

    def is_lores(self):
        return self.res is Resolution.LOW

    def clear(self):
        if self.fade_enabled:
            # Let everything currently lit fade out
            on_colour = self.on_colour

            for y, line in enumerate(self.lines):
                data = line.data
                x = 0

                while data:
                    if data & 1:
                        self.fading_pixels[(x, y)] = list(on_colour)

                    data >>= 1
                    x += 1

        for line in self.lines:
            line.data = 0

        self.update_all_lines()

    def _resolve(self, x, y):
        # Apply the wrap policy to a coordinate.  Returns None if it is clipped.
        width, height = self.size

        if not 0 <= x < width:
            if self.wrap_x is not Wrap.WRAP:
                return None

            x %= width

        if not 0 <= y < height:
            if self.wrap_y is not Wrap.WRAP:
                return None

            y %= height

        return x, y

    def at(self, x, y):
        pos = self._resolve(x, y)

        if pos is None:
            return False

        x, y = pos
        return bool(self.lines[y].data & (1 << x))

    def set_pixel(self, x, y, lit):
        pos = self._resolve(x, y)

        if pos is None:
            return

        x, y = pos
        line = self.lines[y]
        bit = 1 << x

        if lit:
            line.data |= bit
            self.fading_pixels.pop(pos, None)
        else:
            if self.fade_enabled and line.data & bit:
                self.fading_pixels[pos] = list(self.on_colour)

            line.data &= ~bit

        self._mark_updated(x, y)

    def _mark_updated(self, x, y):
        self.lines[y].updated_region.expand(x)
        self.updated_lines.add(y)
        self.changed = True

    def draw_sprite(self, sprite):
        # XOR the sprite onto the display.  Returns True if any lit pixel was switched off.
        collision = False
        mask = 0x8000 if sprite.width > 8 else 0x80
        origin_x, origin_y = sprite.pos

        for row_num, row in enumerate(sprite.rows):
            for col in range(sprite.width):
                if not row & (mask >> col):
                    continue

                pos = self._resolve(origin_x + col, origin_y + row_num)

                if pos is None:
                    continue

                lit = self.at(*pos)

                if lit:
                    # Don't stop drawing.  The flag is never unset for this sprite.
                    collision = True

                self.set_pixel(pos[0], pos[1], not lit)

        return collision

    def scroll(self, direction, n):
        # Low resolution pixels are twice the size, so scrolling moves half as many of them
        if self.res is Resolution.LOW:
            n //= 2

        width, height = self.size

        if direction is ScrollDirection.DOWN:
            n = min(n, height)
            self.lines[:0] = [Line() for _ in range(n)]  # Blank rows appear at the top
            del self.lines[height:]  # The bottom rows fall off
            self._shift_fading_pixels(0, n)
        elif direction is ScrollDirection.RIGHT:
            row_mask = (1 << width) - 1

            for line in self.lines:
                line.data = (line.data << n) & row_mask

            self._shift_fading_pixels(n, 0)
        elif direction is ScrollDirection.LEFT:
            for line in self.lines:
                line.data >>= n

            self._shift_fading_pixels(-n, 0)

        self.update_all_lines()

    def _shift_fading_pixels(self, dx, dy):
        # Fading pixels move with the rest of the display, and are dropped once scrolled off
        width, height = self.size
        shifted = {}

        for (x, y), colour in self.fading_pixels.items():
            x += dx
            y += dy

            if 0 <= x < width and 0 <= y < height:
                shifted[(x, y)] = colour

        self.fading_pixels = shifted

    def set_resolution(self, res):
        self.res = res

        if res is Resolution.LOW:
            self.size = LORES_DISPLAY_SIZE
            self.pixel_size = LORES_PIXEL_SIZE
        else:
            self.size = HIRES_DISPLAY_SIZE
            self.pixel_size = HIRES_PIXEL_SIZE

        width, height = self.size
        row_mask = (1 << width) - 1
        lines = self.lines[:height]

        for line in lines:
            line.data &= row_mask

        lines.extend(Line() for _ in range(height - len(lines)))
        self.lines = lines
        self.fading_pixels = {
            pos: colour for pos, colour in self.fading_pixels.items() if pos[0] < width and pos[1] < height
        }
        self.updated_lines.clear()
        self.update_all_lines()

    def update_all_lines(self):
        width = self.size[0]

        for y, line in enumerate(self.lines):
            line.updated_region.cover(width)
            self.updated_lines.add(y)

        self.changed = True

    def animate_fade(self):
        # One fade tick.  Every channel moves at most 'fade_speed' towards the off colour.
        if not self.fading_pixels:
            return

        off_colour = self.off_colour
        speed = self.fade_speed

        for pos, colour in list(self.fading_pixels.items()):
            for channel in range(3):
                diff = off_colour[channel] - colour[channel]
                colour[channel] += max(-speed, min(speed, diff))

            self._mark_updated(*pos)

            if tuple(colour) == off_colour:
                del self.fading_pixels[pos]

    def take_updates(self):
        # Hand the changed regions over to a renderer, as (row, begin, end), and forget them
        updates = []

        for y in sorted(self.updated_lines):
            region = self.lines[y].updated_region

            if not region.is_empty():
                updates.append((y, region.begin, region.end))

            region.reset()

        self.updated_lines.clear()
        self.changed = False
        return updates

    def pixel_colour(self, x, y):
        if self.at(x, y):
            return self.on_colour

        colour = self.fading_pixels.get((x, y))
        return self.off_colour if colour is None else tuple(colour)

    # Configuration.  Safe to apply between frames.

    def apply_config(self, graphics):
        self.on_colour = tuple(graphics.on_colour)
        self.off_colour = tuple(graphics.off_colour)
        self.scale_factor = graphics.scale_factor
        self.grid_enabled = graphics.enable_grid
        self.set_fade(graphics.enable_fade, graphics.fade_speed)
        self.update_all_lines()

    def set_wrap(self, wrap_x, wrap_y):
        self.wrap_x = wrap_x
        self.wrap_y = wrap_y

    def set_fade(self, enabled, speed=None):
        self.fade_enabled = enabled

        if speed is not None:
            self.fade_speed = speed

        if not enabled and self.fading_pixels:
            self.fading_pixels.clear()
            self.update_all_lines()

    def set_scale_factor(self, factor):
        self.scale_factor = factor
        self.update_all_lines()

    def set_on_colour(self, colour):
        self.on_colour = tuple(colour)
        self.update_all_lines()

    def set_off_colour(self, colour):
        self.off_colour = tuple(colour)
        self.update_all_lines()

    def enable_grid(self):
        self.grid_enabled = True
        self.update_all_lines()

    def disable_grid(self):
        self.grid_enabled = False
        self.update_all_lines()
