import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import pygame

from disc_shooter.aim_assist import AimAssist, Laser, Reticle
from disc_shooter.config import DIFFICULTY_LEVELS, GameConfig
from disc_shooter.feedback import FeedbackBoard, FeedbackEntry, ScreenShake
from disc_shooter.hand_signal import DetectionThrottle, HandSignal, HandSignalExtractor
from disc_shooter.shooting import ShootingController, ShotResult
from disc_shooter.targets import TargetManager

logger = logging.getLogger(__name__)


class GameState(Enum):
    LOADING = "LOADING"
    PLAYING = "PLAYING"
    ERROR = "ERROR"


@dataclass
class TargetPose:
    id: int
    position: Tuple[float, float, float]
    rotation: Tuple[float, float]


@dataclass
class FrameState:
    state: GameState
    error_message: Optional[str] = None
    targets: List[TargetPose] = field(default_factory=list)
    laser: Laser = field(default_factory=Laser)
    reticle: Reticle = field(default_factory=Reticle)
    score: int = 0
    feedback: List[FeedbackEntry] = field(default_factory=list)
    shake_offset: Tuple[float, float] = (0.0, 0.0)
    difficulty: str = "Normal"
    paused: bool = False
    shot: Optional[ShotResult] = None


def now_ms() -> float:
    return time.time() * 1000.0


class GameEngine:
    """Drives one gameplay frame per rendered frame.

    Collaborators are injected: `sensor.latest_frame()` yields landmarks or
    None, `renderer.submit(frame_state)` draws, `audio.play(event)` is told
    about hits and misses.
    """

    def __init__(self, config: Optional[GameConfig] = None, sensor=None, renderer=None, audio=None,
                 rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.sensor = sensor
        self.renderer = renderer
        self.audio = audio
        self.rng = rng or random.Random()

        self.state = GameState.LOADING
        self.error_message: Optional[str] = None
        self.running = True
        self.paused = False

        self.signal = HandSignal()
        self.last_frame: Optional[FrameState] = None
        self._build_core()

    def _build_core(self):
        cfg = self.config
        self.extractor = HandSignalExtractor(cfg)
        self.throttle = DetectionThrottle(cfg.detection_ratio, self.rng)
        self.targets = TargetManager(cfg, self.rng)
        self.aim = AimAssist(cfg)
        self.feedback = FeedbackBoard(cfg.feedback_lifetime)
        self.shake = ScreenShake(cfg.shake_ms, cfg.shake_px, self.rng)
        self.shooter = ShootingController(self.targets, self.feedback, cfg, self.shake, self.audio)

    @property
    def score(self) -> int:
        return self.shooter.score

    @property
    def viewport(self) -> Tuple[int, int]:
        if self.renderer is not None:
            return self.renderer.viewport
        return (self.config.screen_width, self.config.screen_height)

    def start(self) -> None:
        if self.sensor is None:
            self.fail("No hand sensor configured.")
            return
        self.sensor.start()
        self.state = GameState.PLAYING
        logger.info("Game started (difficulty=%s)", self.config.difficulty)

    def fail(self, message: str) -> None:
        self.state = GameState.ERROR
        self.error_message = message
        logger.error("Gesture engine unavailable: %s", message)

    def apply_difficulty(self, level: str) -> None:
        if level not in DIFFICULTY_LEVELS:
            logger.warning("Unknown difficulty %r, keeping %s", level, self.config.difficulty)
            return
        cfg = self.config.for_difficulty(level)
        self.config = cfg
        for part in (self.extractor, self.targets, self.aim, self.shooter):
            part.config = cfg
        self.throttle.ratio = cfg.detection_ratio
        for t in self.targets:
            t.hit_radius = cfg.hit_radius
        # Drop the surplus when the cap shrinks
        while len(self.targets) > cfg.max_targets:
            self.targets.remove(self.targets.targets[-1])
        logger.info("Difficulty set to %s", level)

    def toggle_pause(self) -> None:
        self.paused = not self.paused

    def tick(self, now: Optional[float] = None) -> FrameState:
        if now is None:
            now = now_ms()
        if self.state is not GameState.PLAYING or self.paused:
            frame = self._frame_state(now, Laser(), Reticle(), None)
            self._submit(frame)
            return frame

        # 1. newest hand signal, when the sensor gets through the throttle
        if self.sensor is not None and self.throttle.should_sample():
            self.signal = self.extractor.extract(self.sensor.latest_frame())

        # 2-3. population, motion, retirement
        self.targets.maintain_population()
        self.targets.update()

        # 4. aim and assist
        armed = self.signal.active and self.shooter.is_triggered(self.signal)
        aim = self.aim.compute(self.signal, self.targets, armed=armed)

        # 5. trigger edge
        shot = self.shooter.update(self.signal, now, self.viewport)

        # 6. feedback decay
        self.feedback.tick()

        # 7. hand off
        frame = self._frame_state(now, aim.laser, aim.reticle, shot)
        self._submit(frame)
        return frame

    def _frame_state(self, now: float, laser: Laser, reticle: Reticle, shot: Optional[ShotResult]) -> FrameState:
        return FrameState(
            state=self.state,
            error_message=self.error_message,
            targets=[TargetPose(t.id, *t.pose()) for t in self.targets],
            laser=laser,
            reticle=reticle,
            score=self.shooter.score,
            feedback=list(self.feedback.entries),
            shake_offset=self.shake.offset(now),
            difficulty=self.config.difficulty,
            paused=self.paused,
            shot=shot,
        )

    def _submit(self, frame: FrameState) -> None:
        self.last_frame = frame
        if self.renderer is not None:
            self.renderer.submit(frame)

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_p:
                    self.toggle_pause()
                elif event.key == pygame.K_1:
                    self.apply_difficulty("Easy")
                elif event.key == pygame.K_2:
                    self.apply_difficulty("Normal")
                elif event.key == pygame.K_3:
                    self.apply_difficulty("Hard")
                elif self.audio is not None:
                    if event.key == pygame.K_m:
                        self.audio.toggle_mute()
                    elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                        self.audio.change_volume(-0.05)
                    elif event.key in (pygame.K_EQUALS, pygame.K_KP_PLUS):
                        self.audio.change_volume(+0.05)

    def run(self):
        clock = pygame.time.Clock()
        try:
            while self.running:
                clock.tick(self.config.render_fps)
                self._handle_events()
                self.tick()
        finally:
            if self.sensor is not None:
                self.sensor.shutdown()
            pygame.quit()
