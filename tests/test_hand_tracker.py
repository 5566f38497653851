import logging
import types

import pytest
from helpers import pointing_forward

import disc_shooter.hand_tracker as hand_tracker
from disc_shooter.hand_signal import HandSignalExtractor
from disc_shooter.hand_tracker import HandTracker, SensorInitError


def make_results(points):
    if points is None:
        return types.SimpleNamespace(multi_hand_landmarks=None)
    lms = [types.SimpleNamespace(x=x, y=y, z=z) for x, y, z in points]
    return types.SimpleNamespace(multi_hand_landmarks=[types.SimpleNamespace(landmark=lms)])


class FakeCapture:
    def __init__(self, reads, opened=True):
        self.reads = list(reads)
        self.opened = opened
        self.released = False

    def set(self, prop, value):
        return True

    def isOpened(self):
        return self.opened

    def read(self):
        if self.reads:
            return self.reads.pop(0)
        return (False, None)

    def release(self):
        self.released = True


class FakeHands:
    def __init__(self, outputs):
        self.outputs = list(outputs)
        self.closed = False

    def process(self, img):
        out = self.outputs.pop(0)
        if isinstance(out, Exception):
            raise out
        return out

    def close(self):
        self.closed = True


@pytest.fixture
def fake_backends(monkeypatch):
    """Installs fake camera / detector modules; returns a configurer."""

    def install(reads=(), outputs=(), opened=True, hands_error=None):
        cap = FakeCapture(reads, opened)
        hands = FakeHands(outputs)

        def make_hands(**kwargs):
            if hands_error is not None:
                raise hands_error
            return hands

        cv2 = types.SimpleNamespace(
            CAP_PROP_FRAME_WIDTH=3,
            CAP_PROP_FRAME_HEIGHT=4,
            COLOR_BGR2RGB=4,
            VideoCapture=lambda camera_id: cap,
            flip=lambda img, code: img,
            cvtColor=lambda img, code: img,
        )
        mp = types.SimpleNamespace(solutions=types.SimpleNamespace(hands=types.SimpleNamespace(Hands=make_hands)))
        monkeypatch.setattr(hand_tracker, "cv2", cv2)
        monkeypatch.setattr(hand_tracker, "mp", mp)
        return cap, hands

    return install


def test_failed_camera_read_clears_the_hand(fake_backends):
    fake_backends(reads=[(True, "img")], outputs=[make_results(pointing_forward())])
    ht = HandTracker()
    assert ht._step() is True
    assert HandSignalExtractor().extract(ht.latest_frame()).active is True

    assert ht._step() is False
    assert ht.latest_frame() is None
    assert HandSignalExtractor().extract(ht.latest_frame()).active is False


def test_detector_error_is_logged_and_clears_the_hand(fake_backends, caplog):
    fake_backends(
        reads=[(True, "img"), (True, "img"), (True, "img")],
        outputs=[make_results(pointing_forward()), RuntimeError("graph broke"), make_results(None)],
    )
    ht = HandTracker()
    ht._step()
    with caplog.at_level(logging.ERROR, logger="disc_shooter.hand_tracker"):
        assert ht._step() is True
    assert ht.latest_frame() is None
    assert "Hand detection failed" in caplog.text
    # The next frame is processed normally
    assert ht._step() is True
    assert ht.latest_frame() is None


def test_camera_that_will_not_open_is_fatal(fake_backends):
    cap, hands = fake_backends(opened=False)
    with pytest.raises(SensorInitError):
        HandTracker()
    assert cap.released is True
    assert hands.closed is True


def test_any_detector_load_error_becomes_sensor_init_error(fake_backends):
    fake_backends(hands_error=ValueError("bad protobuf"))
    with pytest.raises(SensorInitError, match="bad protobuf"):
        HandTracker()


def test_to_landmarks_converts_first_hand():
    assert HandTracker._to_landmarks(make_results(None)) is None
    assert HandTracker._to_landmarks(types.SimpleNamespace(multi_hand_landmarks=[])) is None
    pts = HandTracker._to_landmarks(make_results([(0.1, 0.2, 0.3)] * 21))
    assert len(pts) == 21
    assert pts[0] == (0.1, 0.2, 0.3)


def test_shutdown_stops_worker_and_releases(fake_backends):
    cap, hands = fake_backends()
    ht = HandTracker()
    ht.start()
    ht.shutdown()
    assert ht._thread is None
    assert cap.released is True
    assert hands.closed is True
