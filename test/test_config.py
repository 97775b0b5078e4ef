#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8vm.config import Config, CPUConfig, ConfigError, Waveform, parse_keymap, parse_colour
from c8vm.constants import DEFAULT_KEYMAP, ORIGINAL_KEYMAP
from c8vm.display import Wrap
from c8vm.quirks import Extension


class TestKeymap(unittest.TestCase):
    def test_keymap_default(self):
        layout = parse_keymap(DEFAULT_KEYMAP)
        self.assertEqual(16, len(layout))
        self.assertEqual(0x0, layout[ord("x")])
        self.assertEqual(0xC, layout[ord("4")])
        self.assertEqual(0xF, layout[ord("v")])

    def test_keymap_original(self):
        layout = parse_keymap(ORIGINAL_KEYMAP)
        self.assertEqual(0x0, layout[ord("0")])
        self.assertEqual(0xA, layout[ord("a")])

    def test_keymap_errors(self):
        self.assertRaises(ConfigError, parse_keymap, "1,2,3")
        self.assertRaises(ConfigError, parse_keymap, ",".join(["a"] * 16))
        self.assertRaises(ConfigError, parse_keymap, ",".join(["1"] * 16))


class TestColour(unittest.TestCase):
    def test_colour(self):
        self.assertEqual((0x10, 0x20, 0x30), parse_colour("102030"))
        self.assertEqual((0xFF, 0xFF, 0xFF), parse_colour("ffffff"))

    def test_colour_errors(self):
        self.assertRaises(ConfigError, parse_colour, "FFF")
        self.assertRaises(ConfigError, parse_colour, "GGGGGG")


class TestConfig(unittest.TestCase):
    def test_config_defaults(self):
        cfg = Config()
        self.assertEqual(250, cfg.cpu.cycles_per_sec)
        self.assertFalse(cfg.cpu.is_uncapped())
        self.assertIsInstance(cfg.cpu.rng_seed, int)
        self.assertEqual(0, cfg.cpu.rpl_flags)
        self.assertTrue(cfg.sound.enable)
        self.assertEqual(3.0, cfg.sound.level)
        self.assertEqual(440, cfg.sound.frequency)
        self.assertIs(Waveform.SQUARE, cfg.sound.waveform)
        self.assertEqual((640, 320), cfg.graphics.window_size)
        self.assertEqual(1, cfg.graphics.scale_factor)
        self.assertFalse(cfg.graphics.enable_fade)
        self.assertEqual(0x0, cfg.inputs.layout[ord("x")])
        self.assertIs(Extension.NONE, cfg.quirks.extension)

    def test_config_uncapped(self):
        self.assertTrue(CPUConfig(cycles_per_sec=0).is_uncapped())
        self.assertTrue(CPUConfig(uncap_cycles_per_sec=True).is_uncapped())

    def test_config_from_args_minimal(self):
        cfg = Config.from_args({"filename": "game.ch8"})
        self.assertTrue(cfg.quirks.bitwise_reset_vf)
        self.assertIs(Extension.NONE, cfg.quirks.extension)
        self.assertEqual(250, cfg.cpu.cycles_per_sec)

    def test_config_from_args(self):
        cfg = Config.from_args({
            "filename": "game.ch8",
            "arch": "schip",
            "clock_speed": 0,
            "seed": 42,
            "layout": "original",
            "on_colour": "102030",
            "scale": 2,
            "fade": True,
            "mute": True,
            "volume": -6.0,
            "waveform": "saw",
            "debug": True,
            "jump_offset_use_v0_quirks": 1,
            "screen_wrap_quirks": 1
        })
        self.assertIs(Extension.SCHIP, cfg.quirks.extension)
        self.assertTrue(cfg.quirks.jump_offset_use_v0)
        self.assertFalse(cfg.quirks.shift_sets_vx_to_vy)
        self.assertIs(Wrap.WRAP, cfg.quirks.wrap_x)
        self.assertIs(Wrap.WRAP, cfg.quirks.wrap_y)
        self.assertTrue(cfg.cpu.is_uncapped())
        self.assertEqual(42, cfg.cpu.rng_seed)
        self.assertTrue(cfg.cpu.debug_mode)
        self.assertEqual(0xA, cfg.inputs.layout[ord("a")])
        self.assertEqual((0x10, 0x20, 0x30), cfg.graphics.on_colour)
        self.assertEqual(2, cfg.graphics.scale_factor)
        self.assertTrue(cfg.graphics.enable_fade)
        self.assertFalse(cfg.sound.enable)
        self.assertEqual(-6.0, cfg.sound.level)
        self.assertIs(Waveform.SAW, cfg.sound.waveform)

    def test_config_from_args_keymap_overrides_layout(self):
        cfg = Config.from_args({"layout": "original", "keymap": DEFAULT_KEYMAP})
        self.assertEqual(0x0, cfg.inputs.layout[ord("x")])

    def test_config_from_args_errors(self):
        self.assertRaises(ConfigError, Config.from_args, {"arch": "xochip"})
        self.assertRaises(ConfigError, Config.from_args, {"waveform": "triangle"})
        self.assertRaises(ConfigError, Config.from_args, {"off_colour": "nope"})
