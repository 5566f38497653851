import math
from typing import Optional, Sequence, Tuple

import pygame

from disc_shooter.config import GameConfig
from disc_shooter.feedback import HIT

BACKGROUND = (8, 10, 18)
CYAN = (0, 255, 255)
MAGENTA = (255, 0, 255)
GREEN = (80, 230, 120)
RED = (240, 70, 70)
GREY = (170, 170, 170)
WHITE = (255, 255, 255)

DISC_RADIUS = 0.3
RETICLE_RADIUS = 0.1
NEAR_CLIP = 0.1


class PygameRenderer:
    """Draws submitted frame states with a fixed pinhole camera looking down -z."""

    def __init__(self, config: Optional[GameConfig] = None, screen: Optional[pygame.Surface] = None):
        self.config = config or GameConfig()
        pygame.init()
        if screen is None:
            screen = pygame.display.set_mode((self.config.screen_width, self.config.screen_height))
            pygame.display.set_caption("Disc Shooter")
        self.screen = screen
        self.canvas = pygame.Surface(self.screen.get_size())
        self.font = pygame.font.Font(None, 36)
        self.big_font = pygame.font.Font(None, 56)

    @property
    def viewport(self) -> Tuple[int, int]:
        return self.screen.get_size()

    def project(self, point: Sequence[float]) -> Optional[Tuple[float, float, float]]:
        """Screen x, y and pixels-per-world-unit at that depth, or None if behind the camera."""
        w, h = self.viewport
        depth = self.config.camera_z - float(point[2])
        if depth <= NEAR_CLIP:
            return None
        focal = (h / 2.0) / math.tan(math.radians(self.config.camera_fov) / 2.0)
        scale = focal / depth
        return (w / 2.0 + float(point[0]) * scale, h / 2.0 - float(point[1]) * scale, scale)

    def submit(self, frame) -> None:
        self.draw(frame)
        pygame.display.flip()

    def draw(self, frame) -> None:
        self.canvas.fill(BACKGROUND)
        state = frame.state.value
        if state == "PLAYING":
            self._draw_targets(frame.targets)
            self._draw_laser(frame.laser)
            self._draw_reticle(frame.reticle)
            self._draw_feedback(frame.feedback)
            self._draw_hud(frame)
        elif state == "LOADING":
            self._draw_center_text("LOADING GESTURE ENGINE...", CYAN)
        else:
            self._draw_error(frame.error_message)

        self.screen.fill(BACKGROUND)
        ox, oy = frame.shake_offset
        self.screen.blit(self.canvas, (int(round(ox)), int(round(oy))))

    def _draw_targets(self, poses):
        # Farthest first so nearer discs overlap them
        for pose in sorted(poses, key=lambda p: p.position[2]):
            proj = self.project(pose.position)
            if proj is None:
                continue
            x, y, scale = proj
            r = max(2, int(DISC_RADIUS * scale))
            squash = max(0.15, abs(math.cos(pose.rotation[0])))
            rect = pygame.Rect(0, 0, r * 2, max(2, int(r * 2 * squash)))
            rect.center = (int(x), int(y))
            pygame.draw.ellipse(self.canvas, MAGENTA, rect, max(2, r // 5))

    def _draw_laser(self, laser):
        if not laser.visible:
            return
        start = self.project(laser.start)
        end = self._clip_end(laser.start, laser.end)
        if start is None or end is None:
            return
        pygame.draw.line(self.canvas, CYAN, start[:2], end[:2], 1)

    def _clip_end(self, start, end):
        proj = self.project(end)
        if proj is not None:
            return proj
        # Pull the far point back in front of the camera
        limit = self.config.camera_z - NEAR_CLIP * 2
        dz = float(end[2]) - float(start[2])
        if abs(dz) < 1e-9:
            return None
        t = (limit - float(start[2])) / dz
        point = [float(s) + (float(e) - float(s)) * t for s, e in zip(start, end)]
        return self.project(point)

    def _draw_reticle(self, reticle):
        if not reticle.visible:
            return
        proj = self.project(reticle.position)
        if proj is None:
            return
        x, y, scale = proj
        r = max(6, int(RETICLE_RADIUS * scale * reticle.armed_scale))
        pygame.draw.circle(self.canvas, CYAN, (int(x), int(y)), r, 2)
        pygame.draw.line(self.canvas, CYAN, (x - r - 6, y), (x - r + 2, y), 1)
        pygame.draw.line(self.canvas, CYAN, (x + r - 2, y), (x + r + 6, y), 1)

    def _draw_feedback(self, entries):
        for e in entries:
            color = GREEN if e.kind == HIT else RED
            txt = self.font.render(e.text, True, color)
            txt.set_alpha(int(255 * e.alpha))
            self.canvas.blit(txt, txt.get_rect(center=(int(e.x), int(e.y))))

    def _draw_hud(self, frame):
        score = self.font.render(f"SCORE: {frame.score:06d}", True, CYAN)
        self.canvas.blit(score, (32, 32))
        w, _ = self.viewport
        diff = self.font.render(f"Diff: {frame.difficulty}", True, GREY)
        self.canvas.blit(diff, diff.get_rect(topright=(w - 20, 20)))
        if frame.paused:
            self._draw_center_text("PAUSED", (255, 255, 0))
        elif frame.score == 0:
            lines = [
                "AIM: point your index finger at the screen",
                "FIRE: pull your thumb down towards your hand",
                "Magnetic aim assist helps when you're close",
            ]
            _, h = self.viewport
            for i, line in enumerate(lines):
                t = self.font.render(line, True, GREY)
                self.canvas.blit(t, t.get_rect(center=(w // 2, h - 130 + i * 34)))

    def _draw_center_text(self, text: str, color, dy: int = 0, font=None):
        font = font or self.big_font
        w, h = self.viewport
        t = font.render(text, True, color)
        self.canvas.blit(t, t.get_rect(center=(w // 2, h // 2 + dy)))

    def _draw_error(self, message: Optional[str]):
        self._draw_center_text("INITIALIZATION FAILED", WHITE, dy=-40)
        self._draw_center_text(message or "Failed to initialize gesture engine.", RED, dy=10, font=self.font)
        self._draw_center_text("Restart the game to retry.", GREY, dy=50, font=self.font)
