import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from disc_shooter.config import GameConfig
from disc_shooter.feedback import HIT, MISS, FeedbackBoard, FeedbackEntry, ScreenShake
from disc_shooter.hand_signal import HandSignal
from disc_shooter.targets import Target, TargetManager

logger = logging.getLogger(__name__)


@dataclass
class TriggerState:
    last_triggered: bool = False
    cooldown_until_ms: float = 0.0


@dataclass
class ShotResult:
    kind: str
    target: Optional[Target]
    distance: Optional[float]
    feedback: FeedbackEntry


class ShootingController:
    """Edge-triggered, debounced firing against the live targets.

    Hit testing uses the raw hand ray, never the assisted reticle point.
    """

    def __init__(
        self,
        targets: TargetManager,
        feedback: FeedbackBoard,
        config: Optional[GameConfig] = None,
        shake: Optional[ScreenShake] = None,
        audio=None,
    ):
        self.config = config or GameConfig()
        self.targets = targets
        self.feedback = feedback
        self.shake = shake
        self.audio = audio
        self.trigger = TriggerState()
        self.score = 0
        self.shots = 0

    def is_triggered(self, signal: HandSignal) -> bool:
        return signal.trigger_value < self.config.trigger_threshold

    def update(self, signal: HandSignal, now_ms: float, viewport: Tuple[int, int]) -> Optional[ShotResult]:
        if not signal.active:
            return None
        triggered = self.is_triggered(signal)
        result = None
        if triggered and not self.trigger.last_triggered and now_ms >= self.trigger.cooldown_until_ms:
            result = self.fire(signal, now_ms, viewport)
        # Release is tracked even while cooling down
        self.trigger.last_triggered = triggered
        return result

    def fire(self, signal: HandSignal, now_ms: float, viewport: Tuple[int, int]) -> ShotResult:
        w, h = viewport
        sx = signal.screen_pos[0] * w
        sy = signal.screen_pos[1] * h
        target, dist = self.targets.intersect(signal.aim_origin, signal.aim_direction, self.config.aim_range)
        self.shots += 1

        if target is not None:
            self.targets.remove(target)
            self.score += self.config.hit_reward
            entry = self.feedback.add(HIT, sx, sy)
            if self.shake is not None:
                self.shake.kick(now_ms)
            self._notify("hit")
            self.targets.maintain_population()
            logger.info("HIT %r at %.2f, score=%d", target, dist, self.score)
            result = ShotResult(HIT, target, dist, entry)
        else:
            entry = self.feedback.add(MISS, sx, sy)
            self._notify("miss")
            logger.info("MISS, score=%d", self.score)
            result = ShotResult(MISS, None, None, entry)

        self.trigger.cooldown_until_ms = now_ms + self.config.debounce_ms
        return result

    def _notify(self, event: str) -> None:
        if self.audio is not None:
            self.audio.play(event)
