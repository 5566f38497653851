import logging
import threading
import time
from typing import List, Optional, Tuple

import cv2
import mediapipe as mp

from disc_shooter.hand_signal import INDEX_BASE, INDEX_TIP, THUMB_TIP

logger = logging.getLogger(__name__)

Landmarks = List[Tuple[float, float, float]]


class SensorInitError(RuntimeError):
    """The hand detector or its camera could not be brought up."""


class LatestSlot:
    """Single-slot mailbox: writers overwrite, readers see the newest value."""

    def __init__(self):
        self.lock = threading.Lock()
        self._value: Optional[Landmarks] = None

    def put(self, value: Optional[Landmarks]) -> None:
        with self.lock:
            self._value = value

    def get(self) -> Optional[Landmarks]:
        with self.lock:
            return self._value


class HandTracker:
    """Webcam + mediapipe hands, detected off the frame tick in a worker thread."""

    def __init__(self, camera_id: int = 0, width: int = 1280, height: int = 720, mirror: bool = True):
        self.mirror = mirror
        self.slot = LatestSlot()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.cap = None
        self.hands = None

        try:
            self.mp_hands = mp.solutions.hands
            self.hands = self.mp_hands.Hands(
                static_image_mode=False,
                max_num_hands=1,
                model_complexity=1,
                min_detection_confidence=0.7,
                min_tracking_confidence=0.7,
            )
        except Exception as e:
            raise SensorInitError(f"Hand detector failed to load: {e}") from e

        self.cap = cv2.VideoCapture(camera_id)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        if not self.cap.isOpened():
            self.shutdown()
            raise SensorInitError("Could not open the webcam. Check the connection and permissions.")
        logger.info("Hand tracker ready on camera %d", camera_id)

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._worker, name="hand-tracker", daemon=True)
        self._thread.start()

    def _worker(self) -> None:
        while not self._stop.is_set():
            if not self._step():
                time.sleep(0.01)

    def _step(self) -> bool:
        """Read and detect one camera frame. False when the camera gave nothing."""
        ok, img = self.cap.read()
        if not ok or img is None:
            # No picture means no hand, not the last hand we saw
            self.slot.put(None)
            return False
        try:
            if self.mirror:
                img = cv2.flip(img, 1)
            img_rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
            results = self.hands.process(img_rgb)
            self.slot.put(self._to_landmarks(results))
        except Exception:
            logger.exception("Hand detection failed on this frame")
            self.slot.put(None)
        return True

    @staticmethod
    def _to_landmarks(results) -> Optional[Landmarks]:
        if not results.multi_hand_landmarks:
            return None
        hlms = results.multi_hand_landmarks[0]
        return [(lm.x, lm.y, lm.z) for lm in hlms.landmark]

    def latest_frame(self) -> Optional[Landmarks]:
        return self.slot.get()

    def shutdown(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None
        if self.cap is not None:
            self.cap.release()
            self.cap = None
        if self.hands is not None:
            self.hands.close()
            self.hands = None


# Debug fallback: mouse-driven sensor for playing without a webcam
class MouseTracker:
    """Synthesizes a hand pointing straight into the screen at the cursor.

    Holding the left button curls the thumb onto the index knuckle.
    """

    def __init__(self, screen_width: int = 1280, screen_height: int = 720):
        self.screen_width = screen_width
        self.screen_height = screen_height

    def start(self) -> None:
        pass

    def shutdown(self) -> None:
        pass

    def latest_frame(self) -> Optional[Landmarks]:
        import pygame

        x, y = pygame.mouse.get_pos()
        nx = max(0.0, min(1.0, x / float(max(1, self.screen_width - 1))))
        ny = max(0.0, min(1.0, y / float(max(1, self.screen_height - 1))))
        pressed = bool(pygame.mouse.get_pressed()[0])

        pts: Landmarks = [(nx, ny, 0.0)] * 21
        pts[INDEX_TIP] = (nx, ny, 0.0)
        pts[INDEX_BASE] = (nx, ny, -0.1)
        pts[THUMB_TIP] = (nx, ny, -0.1) if pressed else (nx + 0.2, ny, -0.1)
        return pts
