import random

import pygame
import pytest
from helpers import FakeSensor, pointing_forward

from disc_shooter.config import GameConfig
from disc_shooter.game_engine import GameEngine
from disc_shooter.renderer import PygameRenderer


@pytest.fixture
def renderer():
    r = PygameRenderer(GameConfig(screen_width=640, screen_height=360))
    try:
        yield r
    finally:
        try:
            pygame.quit()
        except pygame.error:
            pass


def test_project_center_and_behind_camera(renderer: PygameRenderer):
    x, y, scale = renderer.project((0.0, 0.0, -5.0))
    assert (x, y) == (320.0, 180.0)
    assert scale > 0
    assert renderer.project((0.0, 0.0, 6.0)) is None
    # Up in the world is up on screen
    assert renderer.project((0.0, 1.0, -5.0))[1] < 180.0


def test_renders_playing_and_error_frames(renderer: PygameRenderer):
    eng = GameEngine(renderer.config, sensor=FakeSensor(pointing_forward(pulled=True)), renderer=renderer,
                     rng=random.Random(2))
    eng.start()
    for i in range(3):
        eng.tick(now=i * 16.0)
    assert eng.last_frame.reticle.visible is True

    eng.fail("camera missing")
    frame = eng.tick(now=100.0)
    assert frame.error_message == "camera missing"
