"""
audio.py — Sound effects.

Tones are synthesized once at start-up as 16-bit mono PCM and handed to
pygame.mixer, so the game ships without any audio files. If the mixer
cannot start the game runs silently with a console warning.
"""

import math
from array import array

import pygame

from .model import FOOD_EATEN, LEVEL_UP, GAME_OVER

SAMPLE_RATE = 22050
VOLUME      = 0.1


def _sample(shape: str, phase: float) -> float:
    phase %= 1.0
    if shape == "square":
        return 1.0 if phase < 0.5 else -1.0
    if shape == "sawtooth":
        return 2.0 * phase - 1.0
    return math.sin(phase * 2 * math.pi)


def render_tone(freq: float, duration: float, shape: str = "square",
                rate: int = SAMPLE_RATE) -> array:
    """One tone with an exponential decay from VOLUME down to a tenth of it."""
    n = max(1, int(rate * duration))
    amp = 32767 * VOLUME
    pcm = array("h")
    for i in range(n):
        env = 0.1 ** (i / n)
        pcm.append(int(amp * env * _sample(shape, freq * i / rate)))
    return pcm


def mix(parts, rate: int = SAMPLE_RATE) -> array:
    """Overlay (start_seconds, pcm) parts into one clipped buffer."""
    length = max(int(start * rate) + len(pcm) for start, pcm in parts)
    out = [0] * length
    for start, pcm in parts:
        offset = int(start * rate)
        for i, s in enumerate(pcm):
            out[offset + i] += s
    return array("h", (max(-32768, min(32767, s)) for s in out))


# signal -> [(start seconds, freq, duration, shape), ...]
EFFECTS = {
    FOOD_EATEN: [(0.0, 800, 0.10, "sine")],
    LEVEL_UP:   [(0.0, 523, 0.15, "square"),
                 (0.15, 659, 0.15, "square"),
                 (0.30, 784, 0.20, "square")],
    GAME_OVER:  [(0.0, 200, 0.50, "sawtooth"),
                 (0.2, 150, 0.30, "sawtooth")],
}


class SoundBoard:
    """Maps model side signals to pre-built pygame Sounds."""

    def __init__(self):
        self._sounds: dict = {}
        self._ok = self._init_mixer()
        if self._ok:
            self._build_sounds()

    @staticmethod
    def _init_mixer() -> bool:
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            return True
        except pygame.error as exc:
            print(f"[audio] Mixer unavailable, running without sound: {exc}")
            return False

    def _build_sounds(self) -> None:
        # The mixer may already be running with other settings
        rate, _, channels = pygame.mixer.get_init()
        for signal, notes in EFFECTS.items():
            pcm = mix(
                [(start, render_tone(f, d, shape, rate)) for start, f, d, shape in notes],
                rate,
            )
            if channels > 1:
                pcm = array("h", (s for s in pcm for _ in range(channels)))
            self._sounds[signal] = pygame.mixer.Sound(buffer=pcm.tobytes())

    def play(self, signals) -> None:
        """Play the effect for each signal; unknown signals are skipped."""
        for signal in signals:
            sound = self._sounds.get(signal)
            if sound is not None:
                sound.play()

    def stop(self) -> None:
        """Cut any effect still playing."""
        if self._ok:
            pygame.mixer.stop()
