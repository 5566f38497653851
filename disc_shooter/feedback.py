import itertools
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

HIT = "HIT"
MISS = "MISS"


@dataclass
class FeedbackEntry:
    id: int
    kind: str
    x: float
    y: float
    life: int
    max_life: int

    @property
    def text(self) -> str:
        return self.kind

    @property
    def alpha(self) -> float:
        return max(0.0, min(1.0, self.life / float(self.max_life or 1)))


class FeedbackBoard:
    """Floating HIT/MISS labels that fade out over a fixed number of frames.

    Entries added during a frame show at full life on that frame and are
    aged from the next tick on, so each one is visible for exactly
    `lifetime` frames.
    """

    def __init__(self, lifetime: int = 60, drift: float = -1.0):
        self.lifetime = lifetime
        self.drift = drift
        self.entries: List[FeedbackEntry] = []
        self._pending: List[FeedbackEntry] = []
        self._ids = itertools.count(1)

    def add(self, kind: str, x: float, y: float) -> FeedbackEntry:
        entry = FeedbackEntry(next(self._ids), kind, float(x), float(y), self.lifetime, self.lifetime)
        self._pending.append(entry)
        return entry

    def tick(self) -> None:
        for e in self.entries:
            e.life -= 1
            e.y += self.drift
        self.entries = [e for e in self.entries if e.life > 0]
        if self._pending:
            self.entries.extend(e for e in self._pending if e.life > 0)
            self._pending = []


class ScreenShake:
    def __init__(self, duration_ms: int = 50, magnitude: float = 5.0, rng: Optional[random.Random] = None):
        self.duration_ms = duration_ms
        self.magnitude = magnitude
        self.rng = rng or random.Random()
        self._until_ms = 0.0
        self._offset = (0.0, 0.0)

    def kick(self, now_ms: float) -> None:
        m = self.magnitude
        self._offset = (self.rng.uniform(-m, m), self.rng.uniform(-m, m))
        self._until_ms = now_ms + self.duration_ms

    def offset(self, now_ms: float) -> Tuple[float, float]:
        if now_ms < self._until_ms:
            return self._offset
        return (0.0, 0.0)
