from dataclasses import dataclass, replace
from typing import Dict

# Difficulty presets applied on top of the defaults below
DIFFICULTY_LEVELS: Dict[str, dict] = {
    "Easy": {
        "max_targets": 5,
        "assist_strength": 0.8,
        "hit_radius": 0.45,
    },
    "Normal": {
        "max_targets": 4,
        "assist_strength": 0.6,
        "hit_radius": 0.35,
    },
    "Hard": {
        "max_targets": 3,
        "assist_strength": 0.3,
        "hit_radius": 0.3,
    },
}


@dataclass(frozen=True)
class GameConfig:
    # Population
    max_targets: int = 4
    bound_radius: float = 15.0
    near_plane: float = 2.0
    hit_radius: float = 0.35

    # Cadence
    render_fps: int = 60
    detection_fps: int = 30

    # Aim
    aim_scale: float = 5.0
    aim_range: float = 20.0
    assist_cone: float = 0.25  # radians
    assist_strength: float = 0.6

    # Trigger / scoring
    trigger_threshold: float = 0.05
    debounce_ms: int = 250
    hit_reward: int = 100

    # Feedback
    feedback_lifetime: int = 60
    shake_ms: int = 50
    shake_px: float = 5.0

    # Display
    screen_width: int = 1280
    screen_height: int = 720
    camera_z: float = 5.0
    camera_fov: float = 75.0

    difficulty: str = "Normal"

    @property
    def detection_ratio(self) -> float:
        if self.render_fps <= 0:
            return 1.0
        return max(0.0, min(1.0, self.detection_fps / self.render_fps))

    def for_difficulty(self, level: str) -> "GameConfig":
        """Copy of this config with a difficulty preset applied.

        Unknown levels fall back to Normal.
        """
        if level not in DIFFICULTY_LEVELS:
            level = "Normal"
        return replace(self, difficulty=level, **DIFFICULTY_LEVELS[level])
