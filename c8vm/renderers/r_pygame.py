#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the Display onto an SDL window surface via PyGame.  Note that the
offscreen buffer is allocated at the size which matches the current screen
mode, and then the contents are stretched (using 'Nearest Neighbour'
translation) to fit the window itself.  This means we don't have to draw the
same pixel multiple times.

The window is the configured window size multiplied by the display's scale
factor, and is recreated if the scale factor changes.  If the grid is enabled,
a line is drawn between every emulated pixel after stretching.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME
from ..display import TEXTURE_SIZE

GRID_COLOUR = (0x20, 0x20, 0x20)


class Renderer(RendererBase):
    def __init__(self, window_size=None, **kwargs):
        if window_size is None:
            window_size = TEXTURE_SIZE

        if window_size[0] <= 0 or window_size[1] <= 0:
            raise RendererError("Window size must be positive, not {}x{}".format(*window_size))

        pygame.display.init()
        self.set_title(APP_NAME)
        self.rgb_buffer = None
        self.display_surface = None
        self.scaled_size = None
        super().__init__(window_size)

    def _set_scale_factor(self, scale_factor):
        self.scale_factor = scale_factor
        self.scaled_size = (self.window_size[0] * scale_factor, self.window_size[1] * scale_factor)
        self.display_surface = pygame.display.set_mode(self.scaled_size)

    def set_resolution(self, width, height):
        # Allocate a fresh 24-bit buffer.  Everything in it will be redrawn, as resolution changes mark the whole
        # display as updated.
        self.rgb_buffer = memoryview(bytearray(width * height * 3))
        super().set_resolution(width, height)

    def set_pixel(self, x, y, colour):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_location = (y * self.width + x) * 3
        self.rgb_buffer[rgb_location:rgb_location + 3] = bytes(colour)

    def present(self, display):
        if self.display_surface is None or display.scale_factor != self.scale_factor:
            self._set_scale_factor(display.scale_factor)

        # Blit the bytearray straight to the surface
        render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))

        if display.grid_enabled:
            self._draw_grid()

        pygame.display.flip()

    def _draw_grid(self):
        scaled_width, scaled_height = self.scaled_size

        for x in range(1, self.width):
            line_x = x * scaled_width // self.width
            pygame.draw.line(self.display_surface, GRID_COLOUR, (line_x, 0), (line_x, scaled_height - 1))

        for y in range(1, self.height):
            line_y = y * scaled_height // self.height
            pygame.draw.line(self.display_surface, GRID_COLOUR, (0, line_y), (scaled_width - 1, line_y))

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
