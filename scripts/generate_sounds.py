#!/usr/bin/env python3
"""
Generate placeholder WAV cues for Disc Shooter.
Files created in disc_shooter/assets/sounds/:
- hit.wav  : noise burst with decay
- miss.wav : short low-frequency thud
"""
from __future__ import annotations

import wave
from pathlib import Path

import numpy as np

SR = 44100  # sample rate


def tone(freq: float, dur_s: float, vol: float = 0.5) -> np.ndarray:
    n = max(1, int(SR * dur_s))
    t = np.linspace(0.0, dur_s, n, endpoint=False, dtype=np.float32)
    w = np.sin(2 * np.pi * freq * t)
    # Simple attack/decay envelope to avoid clicks
    attack = int(0.01 * n)
    decay = int(0.3 * n)
    env = np.ones_like(w)
    if attack > 0:
        env[:attack] = np.linspace(0.0, 1.0, attack, dtype=np.float32)
    if decay > 0:
        env[-decay:] = np.linspace(1.0, 0.0, decay, dtype=np.float32)
    a = (w * env * vol).astype(np.float32)
    return np.stack([a, a], axis=1)


def noise(dur_s: float, vol: float = 0.5) -> np.ndarray:
    n = max(1, int(SR * dur_s))
    w = np.random.uniform(-1.0, 1.0, size=n).astype(np.float32)
    w *= np.exp(-np.linspace(0, 5, n)).astype(np.float32)
    a = (w * vol).astype(np.float32)
    return np.stack([a, a], axis=1)


def write_wav(path: Path, data_stereo_float32: np.ndarray) -> None:
    data = np.clip(data_stereo_float32, -1.0, 1.0)
    pcm = (data * 32767.0).astype(np.int16)
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(2)
        wf.setsampwidth(2)  # 16-bit
        wf.setframerate(SR)
        wf.writeframes(pcm.tobytes())


def main() -> None:
    root = Path(__file__).resolve().parents[1]
    out_dir = root / "disc_shooter" / "assets" / "sounds"
    out_dir.mkdir(parents=True, exist_ok=True)

    # hit: bright noise burst ~0.26s
    write_wav(out_dir / "hit.wav", noise(0.26, vol=0.5))

    # miss: low thud ~0.09s @ 180 Hz
    write_wav(out_dir / "miss.wav", tone(180.0, 0.09, vol=0.5))

    print(f"Generated sounds in {out_dir}")


if __name__ == "__main__":
    main()
