import logging
import sys

from disc_shooter.config import GameConfig
from disc_shooter.game_engine import GameEngine
from disc_shooter.hand_tracker import HandTracker, MouseTracker, SensorInitError
from disc_shooter.renderer import PygameRenderer
from disc_shooter.sounds import SoundManager


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    config = GameConfig()
    renderer = PygameRenderer(config)
    engine = GameEngine(config, renderer=renderer, audio=SoundManager())
    # Loading overlay stays up while the detector model and camera come up
    engine.tick()
    try:
        if "--mouse" in argv:
            engine.sensor = MouseTracker(config.screen_width, config.screen_height)
        else:
            engine.sensor = HandTracker(width=config.screen_width, height=config.screen_height)
        engine.start()
    except SensorInitError as e:
        # Fatal for this session, shown until the player quits
        engine.fail(str(e))
    engine.run()


if __name__ == "__main__":
    main()
