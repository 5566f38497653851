import logging
import math
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np

from disc_shooter.config import GameConfig
from disc_shooter.vectors import normalize, vec3

logger = logging.getLogger(__name__)

# Hand model landmark indices (mediapipe 21-point layout)
THUMB_TIP = 4
INDEX_BASE = 5
INDEX_TIP = 8

Landmark = Tuple[float, float, float]


@dataclass
class HandSignal:
    active: bool = False
    aim_origin: np.ndarray = field(default_factory=lambda: vec3(0.0, 0.0, 0.0))
    aim_direction: np.ndarray = field(default_factory=lambda: vec3(0.0, 0.0, -1.0))
    trigger_value: float = 1.0
    screen_pos: Tuple[float, float] = (0.5, 0.5)

    def deactivated(self) -> "HandSignal":
        # Stale fields are kept but ignored by consumers
        return HandSignal(False, self.aim_origin, self.aim_direction, self.trigger_value, self.screen_pos)


def _xyz(lm) -> Landmark:
    if hasattr(lm, "x"):
        return (float(lm.x), float(lm.y), float(getattr(lm, "z", 0.0)))
    return (float(lm[0]), float(lm[1]), float(lm[2]) if len(lm) > 2 else 0.0)


class HandSignalExtractor:
    """Turns one frame of hand landmarks into a HandSignal.

    The last signal is kept so that frames without a hand only flip the
    active flag.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.signal = HandSignal()

    def extract(self, landmarks: Optional[Sequence]) -> HandSignal:
        if landmarks is None or len(landmarks) <= INDEX_TIP:
            self.signal = self.signal.deactivated()
            return self.signal

        tip = _xyz(landmarks[INDEX_TIP])
        base = _xyz(landmarks[INDEX_BASE])
        thumb = _xyz(landmarks[THUMB_TIP])

        # Image space is y-down with depth growing away from the camera
        direction = normalize(vec3(tip[0] - base[0], -(tip[1] - base[1]), -(tip[2] - base[2])))
        if direction is None:
            logger.debug("Degenerate aim direction, treating hand as inactive")
            self.signal = self.signal.deactivated()
            return self.signal

        s = self.config.aim_scale
        origin = vec3((tip[0] - 0.5) * 2.0 * s, -(tip[1] - 0.5) * 2.0 * s, 0.0)
        trigger = math.sqrt(
            (thumb[0] - base[0]) ** 2 + (thumb[1] - base[1]) ** 2 + (thumb[2] - base[2]) ** 2
        )

        self.signal = HandSignal(
            active=True,
            aim_origin=origin,
            aim_direction=direction,
            trigger_value=trigger,
            screen_pos=(tip[0], tip[1]),
        )
        return self.signal


class DetectionThrottle:
    """Forwards a render tick to detection with probability detection/render fps."""

    def __init__(self, ratio: float, rng: Optional[random.Random] = None):
        self.ratio = max(0.0, min(1.0, float(ratio)))
        self.rng = rng or random.Random()

    def should_sample(self) -> bool:
        if self.ratio >= 1.0:
            return True
        return self.rng.random() < self.ratio
