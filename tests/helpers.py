from typing import List, Optional, Tuple

Point = Tuple[float, float, float]


def make_hand(tip: Point, base: Point, thumb: Point) -> List[Point]:
    """21-point hand with only the landmarks the game reads filled in."""
    pts = [(0.5, 0.5, 0.0)] * 21
    pts[4] = thumb
    pts[5] = base
    pts[8] = tip
    return pts


def pointing_forward(x: float = 0.5, y: float = 0.5, pulled: bool = False) -> List[Point]:
    # Index straight into the screen; thumb on the knuckle when pulled
    base = (x, y, -0.1)
    thumb = (x + 0.02, y, -0.1) if pulled else (x + 0.2, y, -0.1)
    return make_hand((x, y, 0.0), base, thumb)


class FakeSensor:
    def __init__(self, frame: Optional[List[Point]] = None):
        self.frame = frame
        self.started = False
        self.stopped = False

    def start(self):
        self.started = True

    def shutdown(self):
        self.stopped = True

    def latest_frame(self):
        return self.frame


class FakeRenderer:
    def __init__(self, viewport=(1280, 720)):
        self.viewport = viewport
        self.frames = []

    def submit(self, frame):
        self.frames.append(frame)


class FakeAudio:
    def __init__(self):
        self.events = []

    def play(self, event):
        self.events.append(event)
