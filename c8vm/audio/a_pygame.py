#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the generated tone within PyGame / SDL.

There is no long-running sound here.  Each call to play() tops up a mixer
channel with short buffers of freshly generated samples, so the tone stops by
itself soon after the sound timer reaches zero and play() stops being called.
Only one buffer is ever queued behind the one playing.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from array import array
import pygame
from .a_null import Audio as AudioBase, SAMPLE_RATE, BUFFER_SIZE

DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self, sound_cfg=None):
        pygame.mixer.pre_init(SAMPLE_RATE, size=-16, channels=1, buffer=BUFFER_SIZE, allowedchanges=0)
        pygame.mixer.init()
        self.channel = pygame.mixer.Channel(0)
        super().__init__(sound_cfg)

    def _make_sound(self):
        return pygame.mixer.Sound(buffer=array("h", self.generate_buffer()).tobytes())

    def play(self):
        channel = self.channel

        if not channel.get_busy():
            channel.play(self._make_sound())
            channel.set_volume(DEFAULT_VOLUME)

        if channel.get_queue() is None:
            channel.queue(self._make_sound())

    def shutdown(self):
        self.channel.stop()
        pygame.mixer.quit()
        super().shutdown()

    def is_null(self):
        # Only the null audio device should return True
        return False
