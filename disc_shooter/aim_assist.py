import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

import numpy as np

from disc_shooter.config import GameConfig
from disc_shooter.hand_signal import HandSignal
from disc_shooter.targets import Target
from disc_shooter.vectors import angle_between, lerp, normalize, vec3


@dataclass
class Laser:
    start: np.ndarray = field(default_factory=vec3)
    end: np.ndarray = field(default_factory=lambda: vec3(0.0, 0.0, -10.0))
    visible: bool = False


@dataclass
class Reticle:
    position: np.ndarray = field(default_factory=vec3)
    facing: np.ndarray = field(default_factory=lambda: vec3(0.0, 0.0, 1.0))
    visible: bool = False
    armed_scale: float = 1.0


@dataclass
class AimResult:
    laser: Laser
    reticle: Reticle
    candidate: Optional[Target] = None


class AimAssist:
    """Projects the hand ray into the scene and bends the reticle toward discs.

    Each target inside the assist cone that is better aligned than every one
    scanned before it pulls the point again, starting from wherever previous
    pulls left it. The best aligned disc therefore dominates, but earlier,
    looser matches still nudge the result.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

    def compute(self, signal: HandSignal, targets: Iterable[Target], armed: bool = False) -> AimResult:
        if not signal.active:
            return AimResult(Laser(visible=False), Reticle(visible=False))

        origin = signal.aim_origin
        direction = signal.aim_direction
        end = origin + direction * self.config.aim_range

        point = end.copy()
        best_angle = math.inf
        candidate = None
        cone = self.config.assist_cone
        for target in targets:
            angle = angle_between(direction, target.position - origin)
            if angle is None:
                continue
            if angle < cone and angle < best_angle:
                best_angle = angle
                candidate = target
                point = lerp(point, target.position, (1.0 - angle / cone) * self.config.assist_strength)

        facing = normalize(origin - point)
        if facing is None:
            facing = -direction
        reticle = Reticle(
            position=point,
            facing=facing,
            visible=True,
            armed_scale=0.8 if armed else 1.0,
        )
        return AimResult(Laser(origin.copy(), end, True), reticle, candidate)
