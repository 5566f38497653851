import sys
import types

import numpy as np

from disc_shooter.hand_signal import HandSignalExtractor
from disc_shooter.hand_tracker import LatestSlot, MouseTracker


def make_fake_pygame(buttons=(False, False, False), pos=(100, 200)):
    mod = types.ModuleType("pygame")
    mouse = types.SimpleNamespace()

    def get_pressed():
        return buttons

    def get_pos():
        return pos

    mouse.get_pressed = get_pressed
    mouse.get_pos = get_pos
    mod.mouse = mouse
    return mod


def test_mouse_tracker_aims_forward_from_cursor(monkeypatch):
    pg = make_fake_pygame(buttons=(False, False, False), pos=(0, 479))
    monkeypatch.setitem(sys.modules, "pygame", pg)

    mt = MouseTracker(screen_width=640, screen_height=480)
    sig = HandSignalExtractor().extract(mt.latest_frame())
    assert sig.active is True
    assert sig.screen_pos == (0.0, 1.0)
    np.testing.assert_allclose(sig.aim_direction, [0.0, 0.0, -1.0])
    np.testing.assert_allclose(sig.aim_origin, [-5.0, -5.0, 0.0])
    assert sig.trigger_value > 0.05


def test_mouse_tracker_left_button_pulls_trigger(monkeypatch):
    pg = make_fake_pygame(buttons=(True, False, False), pos=(5000, -10))
    monkeypatch.setitem(sys.modules, "pygame", pg)

    mt = MouseTracker(screen_width=640, screen_height=480)
    sig = HandSignalExtractor().extract(mt.latest_frame())
    # Position beyond bounds is clamped
    assert sig.screen_pos == (1.0, 0.0)
    assert sig.trigger_value < 0.05


def test_latest_slot_keeps_only_newest():
    slot = LatestSlot()
    assert slot.get() is None
    slot.put([(0.1, 0.1, 0.0)])
    slot.put([(0.2, 0.2, 0.0)])
    assert slot.get() == [(0.2, 0.2, 0.0)]
    slot.put(None)
    assert slot.get() is None
