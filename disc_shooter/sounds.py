import logging
import os
from typing import Dict, Optional

import numpy as np
import pygame
import pygame.sndarray

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
SOUND_DIR = os.path.join(os.path.dirname(__file__), "assets", "sounds")


class SoundManager:
    """Plays short cues for shot outcomes. Fire-and-forget."""

    def __init__(self, master_volume: float = 0.8, sound_dir: str = SOUND_DIR):
        self.audio_enabled = False
        self.sounds: Dict[str, Optional[pygame.mixer.Sound]] = {"hit": None, "miss": None}
        self.sound_volumes = {"hit": 0.8, "miss": 0.6}
        self.master_volume = master_volume
        self.muted = False
        self.sound_dir = sound_dir
        self._init_audio()

    def _init_audio(self):
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
            self.audio_enabled = True
        except pygame.error as e:
            logger.warning("Audio unavailable (%s), continuing muted", e)
            self.audio_enabled = False
            return

        for key in self.sounds:
            self.sounds[key] = self._load_sound(os.path.join(self.sound_dir, f"{key}.wav"))
        # Generate simple fallback cues if files are missing
        self._ensure_fallback_sounds()
        self._apply_volume()

    def _load_sound(self, path: str) -> Optional[pygame.mixer.Sound]:
        if not self.audio_enabled or not os.path.exists(path):
            return None
        try:
            return pygame.mixer.Sound(path)
        except pygame.error as e:
            logger.warning("Could not load %s: %s", path, e)
            return None

    def _ensure_fallback_sounds(self):
        if self.sounds.get("hit") is None:
            self.sounds["hit"] = self._make_sound(noise(260, vol=0.55))
        if self.sounds.get("miss") is None:
            self.sounds["miss"] = self._make_sound(tone(180.0, 90, vol=0.5))

    def _make_sound(self, stereo: np.ndarray) -> Optional[pygame.mixer.Sound]:
        try:
            return pygame.sndarray.make_sound((np.clip(stereo, -1.0, 1.0) * 32767).astype(np.int16))
        except (pygame.error, ValueError) as e:
            logger.warning("Could not synthesize fallback sound: %s", e)
            return None

    def play(self, key: str) -> None:
        s = self.sounds.get(key)
        if s is not None and self.audio_enabled:
            s.play()

    def _apply_volume(self):
        if not self.audio_enabled:
            return
        for k, s in self.sounds.items():
            if s is None:
                continue
            base = self.sound_volumes.get(k, 1.0)
            vol = 0.0 if self.muted else max(0.0, min(1.0, self.master_volume * base))
            s.set_volume(vol)

    def change_volume(self, delta: float):
        self.master_volume = max(0.0, min(1.0, self.master_volume + delta))
        self._apply_volume()

    def toggle_mute(self):
        self.muted = not self.muted
        self._apply_volume()


def tone(freq: float, dur_ms: int, vol: float = 0.6) -> np.ndarray:
    n = max(1, int(SAMPLE_RATE * dur_ms / 1000.0))
    t = np.linspace(0.0, dur_ms / 1000.0, n, endpoint=False)
    a = (np.sin(2 * np.pi * freq * t) * vol).astype(np.float32)
    return np.stack([a, a], axis=1)


def noise(dur_ms: int, vol: float = 0.5) -> np.ndarray:
    # White noise with an exponential decay
    n = max(1, int(SAMPLE_RATE * dur_ms / 1000.0))
    w = np.random.uniform(-1.0, 1.0, size=n).astype(np.float32)
    w *= np.exp(-np.linspace(0, 5, n)).astype(np.float32)
    a = (w * vol).astype(np.float32)
    return np.stack([a, a], axis=1)
