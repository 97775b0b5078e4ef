#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

Rendering plugins are handed a Display once per frame.  Only the regions of
the display that changed since the last frame are passed to set_pixel(), along
with the colour each pixel should be (fading included).

This module can be used on its own as a Renderer plugin if you only want to see
debug output.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, window_size=None, **kwargs):  # pylint: disable=unused-argument
        self.window_size = window_size
        self.scale_factor = 1
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def set_pixel(self, x, y, colour):  # pylint: disable=unused-argument
        pass

    def refresh_display(self, display):
        # Returns True if anything was redrawn
        if not display.changed:
            return False

        if display.get_size() != (self.width, self.height):
            self.set_resolution(*display.get_size())

        for y, begin, end in display.take_updates():
            for x in range(begin, end):
                self.set_pixel(x, y, display.pixel_colour(x, y))

        self.present(display)
        return True

    def present(self, display):  # pylint: disable=unused-argument
        # Show the finished frame
        pass

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
