import itertools
import logging
import random
from typing import Iterator, List, Optional, Tuple

import numpy as np

from disc_shooter.config import GameConfig
from disc_shooter.vectors import normalize, ray_sphere_intersect, vec3

logger = logging.getLogger(__name__)

HOME_POINT = (0.0, 0.0, -5.0)
HOME_PULL = 0.01
SPIN = (0.05, 0.02)


class Target:
    def __init__(
        self,
        target_id: int,
        position: np.ndarray,
        velocity: np.ndarray,
        home: Optional[np.ndarray] = None,
        hit_radius: float = 0.35,
    ):
        self.id = target_id
        self.position = np.asarray(position, dtype=float)
        self.velocity = np.asarray(velocity, dtype=float)
        self.home = vec3(*HOME_POINT) if home is None else np.asarray(home, dtype=float)
        self.hit_radius = hit_radius
        self.rotation = [0.0, 0.0]

    def update(self):
        pull = normalize(self.home - self.position)
        if pull is not None:
            self.velocity = self.velocity + pull * HOME_PULL
        # Unit Euler step per frame
        self.position = self.position + self.velocity
        self.rotation[0] += SPIN[0]
        self.rotation[1] += SPIN[1]

    def intersect_ray(self, origin: np.ndarray, direction: np.ndarray) -> Optional[float]:
        return ray_sphere_intersect(origin, direction, self.position, self.hit_radius)

    def pose(self) -> Tuple[Tuple[float, float, float], Tuple[float, float]]:
        return tuple(float(c) for c in self.position), (self.rotation[0], self.rotation[1])

    def __repr__(self) -> str:
        x, y, z = self.position
        return f"Target(id={self.id}, pos=({x:.2f}, {y:.2f}, {z:.2f}))"


class TargetManager:
    """Owns the live discs and keeps their count at max_targets."""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.targets: List[Target] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self.targets)

    def __iter__(self) -> Iterator[Target]:
        return iter(self.targets)

    def spawn(self) -> Target:
        r = self.rng.random
        side = self.rng.randrange(4)
        if side == 0:  # top
            pos = vec3((r() - 0.5) * 10.0, 5.0, -5.0)
        elif side == 1:  # bottom
            pos = vec3((r() - 0.5) * 10.0, -5.0, -5.0)
        elif side == 2:  # left
            pos = vec3(-8.0, (r() - 0.5) * 6.0, -5.0)
        else:  # right
            pos = vec3(8.0, (r() - 0.5) * 6.0, -5.0)
        # Small x/y drift plus a constant push toward the camera
        vel = vec3((r() - 0.5) * 0.05, (r() - 0.5) * 0.05, r() * 0.02 + 0.01)
        target = Target(next(self._ids), pos, vel, hit_radius=self.config.hit_radius)
        self.targets.append(target)
        logger.debug("Spawned %r", target)
        return target

    def maintain_population(self) -> int:
        spawned = 0
        while len(self.targets) < self.config.max_targets:
            self.spawn()
            spawned += 1
        return spawned

    def advance(self, target: Target) -> None:
        target.update()

    def should_retire(self, target: Target) -> bool:
        return (
            float(np.linalg.norm(target.position)) > self.config.bound_radius
            or float(target.position[2]) > self.config.near_plane
        )

    def remove(self, target: Target) -> bool:
        # Swap-remove keeps the list compact
        try:
            idx = self.targets.index(target)
        except ValueError:
            return False
        last = self.targets.pop()
        if idx < len(self.targets):
            self.targets[idx] = last
        return True

    def update(self) -> List[Target]:
        """Advance every target, retire the ones out of bounds, top up."""
        retired = []
        for t in self.targets:
            # Already out of bounds: gone regardless of where it is heading
            if self.should_retire(t):
                retired.append(t)
                continue
            self.advance(t)
            if self.should_retire(t):
                retired.append(t)
        for t in retired:
            self.remove(t)
        if retired:
            logger.debug("Retired %d target(s)", len(retired))
        self.maintain_population()
        return retired

    def intersect(self, origin: np.ndarray, direction: np.ndarray, max_distance: float) -> Tuple[Optional[Target], Optional[float]]:
        best: Optional[Target] = None
        best_t: Optional[float] = None
        for t in self.targets:
            dist = t.intersect_ray(origin, direction)
            if dist is None or dist > max_distance:
                continue
            if best_t is None or dist < best_t:
                best, best_t = t, dist
        return best, best_t
