#!/usr/bin/env python3
import os
import random
import sys

# Headless rendering for pygame
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

from disc_shooter.game_engine import GameEngine
from disc_shooter.hand_tracker import MouseTracker
from disc_shooter.renderer import PygameRenderer


def main():
    out_path = sys.argv[1] if len(sys.argv) > 1 else "screenshots/frame.png"
    renderer = PygameRenderer()
    w, h = renderer.viewport
    eng = GameEngine(sensor=MouseTracker(w, h), renderer=renderer, rng=random.Random(7))
    try:
        eng.start()
        # A few frames so the discs drift off their spawn edges
        for i in range(30):
            eng.tick(now=i * 1000.0 / eng.config.render_fps)
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
        pygame.image.save(renderer.screen, out_path)
        print(out_path)
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
