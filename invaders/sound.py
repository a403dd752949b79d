"""Procedural sound effects. No external files required."""
from __future__ import annotations
import logging
import math
import struct

import pygame

from .game import EVENT_DAMAGE, EVENT_GAME_OVER, EVENT_HIT, EVENT_MISS, EVENT_SHOOT

log = logging.getLogger(__name__)

SAMPLE_RATE = 22050

# event -> (frequency Hz, duration ms, waveform)
TONES = {
    EVENT_SHOOT: (400, 100, "square"),
    EVENT_HIT: (800, 200, "sine"),
    EVENT_MISS: (200, 150, "sine"),
    EVENT_DAMAGE: (100, 300, "square"),
}

# mixer sample format -> (struct code, amplitude, offset)
SAMPLE_FORMATS = {
    -16: ('<h', 32767, 0),
    16: ('<H', 32767, 32768),
    -8: ('<b', 127, 0),
    8: ('<B', 127, 128),
    32: ('<f', 1.0, 0),
}


def _wave(kind: str, phase: float) -> float:
    s = math.sin(2 * math.pi * phase)
    if kind == "square":
        return 1.0 if s >= 0 else -1.0
    return s


def _envelope(i: int, n: int, start: float, end: float = 0.01) -> float:
    # Exponential ramp from start to end gain over the sample count
    return start * (end / start) ** (i / n)


def _pack(samples, channels: int, fmt: int) -> bytes:
    code, amp, offset = SAMPLE_FORMATS[fmt]
    as_int = code != '<f'
    buf = bytearray()
    for s in samples:
        v = s * amp + offset
        frame = struct.pack(code, int(v) if as_int else v)
        buf += frame * channels
    return bytes(buf)


def make_tone(freq: float, ms: int, volume: float = 0.3, kind: str = "sine",
              rate: int = SAMPLE_RATE, channels: int = 1, fmt: int = -16) -> bytes:
    n = max(1, int(rate * (ms / 1000.0)))
    samples = (_wave(kind, freq * i / rate) * _envelope(i, n, volume) for i in range(n))
    return _pack(samples, channels, fmt)


def make_sweep(f0: float, f1: float, ms: int, volume: float = 0.4,
               rate: int = SAMPLE_RATE, channels: int = 1, fmt: int = -16) -> bytes:
    """Exponential glissando from f0 to f1."""
    n = max(1, int(rate * (ms / 1000.0)))

    def samples():
        phase = 0.0
        for i in range(n):
            phase += f0 * (f1 / f0) ** (i / n) / rate
            yield math.sin(2 * math.pi * phase) * _envelope(i, n, volume)

    return _pack(samples(), channels, fmt)


class SoundManager:
    """Plays a short tone for each game event while enabled.

    Buffers are built for whatever format the mixer actually opened with, so
    tones keep their pitch and length even if pygame.init() got there first.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.available = False
        self.sounds = {}
        mixer_format = self._init_mixer()
        if self.available:
            rate, fmt, channels = mixer_format
            if fmt not in SAMPLE_FORMATS:
                log.warning("Sound disabled, unsupported mixer format %s", fmt)
                self.available = False
                return
            for name, (freq, ms, kind) in TONES.items():
                self.sounds[name] = self._load(make_tone(freq, ms, 0.3, kind, rate, channels, fmt))
            self.sounds[EVENT_GAME_OVER] = self._load(make_sweep(400, 100, 800, 0.4, rate, channels, fmt))

    def _init_mixer(self):
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.pre_init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
                pygame.mixer.init()
            mixer_format = pygame.mixer.get_init()
        except pygame.error as exc:
            log.warning("Sound disabled, mixer unavailable: %s", exc)
            return None
        if not mixer_format:
            log.warning("Sound disabled, mixer did not open")
            return None
        self.available = True
        return mixer_format

    def _load(self, data: bytes):
        try:
            return pygame.mixer.Sound(buffer=data)
        except pygame.error as exc:
            log.warning("Could not build sound: %s", exc)
            return None

    def play(self, name: str):
        if not self.enabled or not self.available:
            return
        snd = self.sounds.get(name)
        if snd is not None:
            snd.play()
