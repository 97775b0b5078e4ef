#!/usr/bin/env python3

"""
Null Audio Plugin

Serves as a base class for other Audio plugins.  Can be used on its own if no
sound is required.

The tone itself is generated here, so every plugin plays the same thing.  A
tone is a sine, square or sawtooth wave at a fixed frequency, and its level is
given in decibels.  Samples are signed 16-bit.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from math import sin, floor, pi
from ..config import SoundConfig, Waveform

SAMPLE_RATE = 44100
BUFFER_SIZE = 256  # In samples, not bytes
GAIN = 1000.0  # Samples are generated between -1 and 1, which is far too quiet
SAMPLE_MAX = 0x7FFF
SAMPLE_MIN = -0x8000


def db_to_amplitude(level):
    return 10 ** (level / 20.0)


class Audio:
    def __init__(self, sound_cfg=None):
        if sound_cfg is None:
            sound_cfg = SoundConfig()

        self.level = sound_cfg.level
        self.frequency = sound_cfg.frequency
        self.waveform = sound_cfg.waveform
        self.sample_count = 0

    def play(self):
        # Called repeatedly while the sound timer is running.  Must never queue up more than it needs to.
        pass

    def change_waveform(self, waveform):
        # Restart the wave from the beginning
        self.waveform = waveform
        self.sample_count = 0

    def apply_config(self, sound_cfg):
        self.level = sound_cfg.level
        self.frequency = sound_cfg.frequency

        if sound_cfg.waveform is not self.waveform:
            self.change_waveform(sound_cfg.waveform)

    def next_sample(self):
        # Between -1 and 1, for the current point in time
        t = self.sample_count / SAMPLE_RATE
        frequency = self.frequency

        if self.waveform is Waveform.SINE:
            return sin(2 * pi * frequency * t)

        if self.waveform is Waveform.SQUARE:
            return 1.0 if floor(2 * frequency * t) % 2 == 0 else -1.0

        period = t * frequency
        return 2 * (period - floor(0.5 + period))

    def generate_buffer(self, size=BUFFER_SIZE):
        amplitude = db_to_amplitude(self.level)
        samples = []

        for _ in range(size):
            sample = amplitude * GAIN * self.next_sample()
            samples.append(int(max(SAMPLE_MIN, min(sample, SAMPLE_MAX))))
            self.sample_count += 1

        return samples

    def shutdown(self):
        pass

    def is_null(self):
        # Only the null audio device should return True
        return True
