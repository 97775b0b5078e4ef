#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8vm.config import GraphicsConfig
from c8vm.display import Display, Sprite, Resolution, ScrollDirection, Wrap, Region
from c8vm.renderers.r_null import Renderer

WHITE = (0xFF, 0xFF, 0xFF)
BLACK = (0x00, 0x00, 0x00)


class RecordingRenderer(Renderer):
    def __init__(self):
        self.pixels = {}
        self.presented = 0
        super().__init__()

    def set_pixel(self, x, y, colour):
        self.pixels[(x, y)] = colour

    def present(self, display):
        self.presented += 1


class TestRegion(unittest.TestCase):
    def test_region_expand(self):
        region = Region()
        self.assertTrue(region.is_empty())
        region.expand(5)
        self.assertEqual((5, 6), (region.begin, region.end))
        region.expand(2)
        region.expand(3)
        self.assertEqual((2, 6), (region.begin, region.end))
        region.reset()
        self.assertTrue(region.is_empty())


class TestDisplay(unittest.TestCase):
    def setUp(self):
        self.display = Display()

    def _lit_pixels(self):
        width, height = self.display.get_size()
        return [(x, y) for y in range(height) for x in range(width) if self.display.at(x, y)]

    def test_display_init(self):
        self.assertEqual((64, 32), self.display.get_size())
        self.assertEqual((10, 10), self.display.pixel_size)
        self.assertTrue(self.display.is_lores())
        self.assertEqual([(y, 0, 64) for y in range(32)], self.display.take_updates())
        self.assertEqual([], self.display.take_updates())

    def test_display_set_pixel(self):
        self.display.take_updates()
        self.display.set_pixel(3, 2, True)
        self.display.set_pixel(7, 2, True)
        self.display.set_pixel(0, 5, True)
        self.display.set_pixel(0, 5, False)
        self.assertTrue(self.display.changed)
        self.assertTrue(self.display.at(3, 2))
        self.assertFalse(self.display.at(4, 2))
        self.assertFalse(self.display.at(0, 5))
        self.assertEqual([(2, 3, 8), (5, 0, 1)], self.display.take_updates())
        self.assertFalse(self.display.changed)

    def test_display_set_pixel_clipped(self):
        self.display.take_updates()
        self.display.set_pixel(64, 0, True)
        self.display.set_pixel(0, 32, True)
        self.assertEqual([], self._lit_pixels())
        self.assertEqual([], self.display.take_updates())

    def test_display_set_pixel_wrapped(self):
        self.display.set_wrap(Wrap.WRAP, Wrap.CLIP)
        self.display.set_pixel(65, 0, True)
        self.display.set_pixel(0, 33, True)
        self.assertEqual([(1, 0)], self._lit_pixels())

    def test_display_clear(self):
        self.display.set_pixel(1, 1, True)
        self.display.take_updates()
        self.display.clear()
        self.assertEqual([], self._lit_pixels())
        self.assertEqual(32, len(self.display.take_updates()))
        self.assertEqual({}, self.display.fading_pixels)

    def test_display_draw_sprite(self):
        sprite = Sprite((2, 3), [0b10100000, 0b01000000])
        self.assertFalse(self.display.draw_sprite(sprite))
        self.assertEqual([(2, 3), (4, 3), (3, 4)], self._lit_pixels())

    def test_display_draw_sprite_twice(self):
        sprite = Sprite((10, 10), [0xFF, 0x81, 0xFF])
        self.display.draw_sprite(sprite)
        self.assertTrue(self.display.draw_sprite(sprite))
        self.assertEqual([], self._lit_pixels())

    def test_display_draw_sprite_collision_partial(self):
        self.display.set_pixel(5, 0, True)
        self.assertTrue(self.display.draw_sprite(Sprite((0, 0), [0xFF])))
        self.assertEqual([(x, 0) for x in range(8) if x != 5], self._lit_pixels())

    def test_display_draw_sprite_16_wide(self):
        self.display.set_resolution(Resolution.HIGH)
        self.display.draw_sprite(Sprite((0, 0), [0x8001], width=16))
        self.assertEqual([(0, 0), (15, 0)], self._lit_pixels())

    def test_display_draw_sprite_clip(self):
        self.display.draw_sprite(Sprite((62, 31), [0xF0, 0xF0]))
        self.assertEqual([(62, 31), (63, 31)], self._lit_pixels())

    def test_display_draw_sprite_wrap(self):
        self.display.set_wrap(Wrap.WRAP, Wrap.WRAP)
        self.display.draw_sprite(Sprite((63, 31), [0xC0, 0xC0]))
        self.assertEqual([(0, 0), (63, 0), (0, 31), (63, 31)], self._lit_pixels())

    def test_display_scroll_down(self):
        self.display.set_resolution(Resolution.HIGH)
        self.display.set_pixel(1, 0, True)
        self.display.set_pixel(1, 62, True)
        self.display.take_updates()
        self.display.scroll(ScrollDirection.DOWN, 2)
        self.assertEqual([(1, 2)], self._lit_pixels())
        self.assertEqual(64, len(self.display.lines))
        self.assertEqual(64, len(self.display.take_updates()))

    def test_display_scroll_lores_halved(self):
        self.display.set_pixel(0, 0, True)
        self.display.scroll(ScrollDirection.DOWN, 4)
        self.assertEqual([(0, 2)], self._lit_pixels())
        self.display.scroll(ScrollDirection.RIGHT, 4)
        self.assertEqual([(2, 2)], self._lit_pixels())
        self.display.scroll(ScrollDirection.LEFT, 4)
        self.assertEqual([(0, 2)], self._lit_pixels())

    def test_display_scroll_sideways_edges(self):
        self.display.set_resolution(Resolution.HIGH)
        self.display.set_pixel(126, 0, True)
        self.display.set_pixel(2, 1, True)
        self.display.scroll(ScrollDirection.RIGHT, 4)
        self.assertEqual([(6, 1)], self._lit_pixels())
        self.display.scroll(ScrollDirection.LEFT, 4)
        self.display.scroll(ScrollDirection.LEFT, 4)
        self.assertEqual([], self._lit_pixels())

    def test_display_set_resolution(self):
        self.display.set_pixel(1, 1, True)
        self.display.set_resolution(Resolution.HIGH)
        self.assertEqual((128, 64), self.display.get_size())
        self.assertEqual((5, 5), self.display.pixel_size)
        self.assertEqual(64, len(self.display.lines))
        self.assertFalse(self.display.is_lores())
        self.display.set_pixel(100, 50, True)
        self.assertEqual([(1, 1), (100, 50)], self._lit_pixels())
        self.display.set_resolution(Resolution.LOW)
        self.assertEqual(32, len(self.display.lines))
        self.assertEqual([(1, 1)], self._lit_pixels())
        self.assertEqual([(y, 0, 64) for y in range(32)], self.display.take_updates())

    def test_display_fade(self):
        self.display.set_fade(True)
        self.display.set_pixel(4, 4, True)
        self.display.set_pixel(4, 4, False)
        self.assertEqual(WHITE, self.display.pixel_colour(4, 4))
        self.display.take_updates()
        self.display.animate_fade()
        self.assertEqual((0xEF, 0xEF, 0xEF), self.display.pixel_colour(4, 4))
        self.assertEqual([(4, 4, 5)], self.display.take_updates())

        for _ in range(15):
            self.display.animate_fade()

        self.assertEqual(BLACK, self.display.pixel_colour(4, 4))
        self.assertEqual({}, self.display.fading_pixels)

    def test_display_fade_on_clear(self):
        self.display.set_fade(True, 0x80)
        self.display.set_pixel(1, 2, True)
        self.display.set_pixel(3, 4, True)
        self.display.clear()
        self.assertEqual({(1, 2), (3, 4)}, set(self.display.fading_pixels))
        self.display.animate_fade()
        self.assertEqual((0x7F, 0x7F, 0x7F), self.display.pixel_colour(1, 2))

    def test_display_fade_scrolls(self):
        self.display.set_resolution(Resolution.HIGH)
        self.display.set_fade(True)
        self.display.set_pixel(10, 10, True)
        self.display.set_pixel(125, 20, True)
        self.display.set_pixel(5, 62, True)
        self.display.clear()

        self.display.scroll(ScrollDirection.DOWN, 2)
        self.assertEqual({(10, 12), (125, 22)}, set(self.display.fading_pixels))
        self.display.scroll(ScrollDirection.RIGHT, 4)
        self.assertEqual({(14, 12)}, set(self.display.fading_pixels))
        self.display.scroll(ScrollDirection.LEFT, 4)
        self.assertEqual({(10, 12)}, set(self.display.fading_pixels))
        self.assertEqual(WHITE, self.display.pixel_colour(10, 12))
        self.assertEqual(BLACK, self.display.pixel_colour(10, 10))

    def test_display_fade_relit(self):
        self.display.set_fade(True)
        self.display.set_pixel(4, 4, True)
        self.display.set_pixel(4, 4, False)
        self.display.set_pixel(4, 4, True)
        self.assertEqual({}, self.display.fading_pixels)
        self.assertEqual(WHITE, self.display.pixel_colour(4, 4))

    def test_display_fade_disabled(self):
        self.display.set_pixel(4, 4, True)
        self.display.set_pixel(4, 4, False)
        self.assertEqual({}, self.display.fading_pixels)
        self.assertEqual(BLACK, self.display.pixel_colour(4, 4))

    def test_display_colours(self):
        self.display.take_updates()
        self.display.set_on_colour((0x10, 0x20, 0x30))
        self.display.set_pixel(0, 0, True)
        self.assertEqual((0x10, 0x20, 0x30), self.display.pixel_colour(0, 0))
        self.display.set_off_colour((0x01, 0x02, 0x03))
        self.assertEqual((0x01, 0x02, 0x03), self.display.pixel_colour(1, 0))
        self.assertEqual(32, len(self.display.take_updates()))

    def test_display_config(self):
        self.display.take_updates()
        self.display.enable_grid()
        self.assertTrue(self.display.grid_enabled)
        self.assertEqual(32, len(self.display.take_updates()))
        self.display.disable_grid()
        self.assertFalse(self.display.grid_enabled)
        self.display.set_scale_factor(2)
        self.assertEqual(2, self.display.scale_factor)
        self.display.apply_config(GraphicsConfig(on_colour=(1, 2, 3), enable_fade=True, fade_speed=4))
        self.assertEqual((1, 2, 3), self.display.on_colour)
        self.assertTrue(self.display.fade_enabled)
        self.assertEqual(4, self.display.fade_speed)
        self.assertEqual(1, self.display.scale_factor)


class TestRenderer(unittest.TestCase):
    def setUp(self):
        self.display = Display()
        self.renderer = RecordingRenderer()

    def test_renderer_refresh_display(self):
        self.assertTrue(self.renderer.refresh_display(self.display))
        self.assertEqual((64, 32), (self.renderer.width, self.renderer.height))
        self.assertEqual(64 * 32, len(self.renderer.pixels))
        self.assertEqual(1, self.renderer.presented)
        self.assertFalse(self.renderer.refresh_display(self.display))

        self.renderer.pixels.clear()
        self.display.set_pixel(5, 6, True)
        self.renderer.refresh_display(self.display)
        self.assertEqual({(5, 6): WHITE}, self.renderer.pixels)

    def test_renderer_follows_resolution(self):
        self.renderer.refresh_display(self.display)
        self.display.set_resolution(Resolution.HIGH)
        self.renderer.refresh_display(self.display)
        self.assertEqual((128, 64), (self.renderer.width, self.renderer.height))


if __name__ == "__main__":
    unittest.main()
