import math
from typing import Optional

import numpy as np

EPS = 1e-9


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    return np.array([x, y, z], dtype=float)


def normalize(v: np.ndarray) -> Optional[np.ndarray]:
    """Unit vector along v, or None when v has (near) zero length."""
    mag = float(np.linalg.norm(v))
    if mag < EPS or not math.isfinite(mag):
        return None
    return v / mag


def angle_between(a: np.ndarray, b: np.ndarray) -> Optional[float]:
    mag_a = float(np.linalg.norm(a))
    mag_b = float(np.linalg.norm(b))
    if mag_a < EPS or mag_b < EPS:
        return None
    cos_angle = float(np.dot(a, b)) / (mag_a * mag_b)
    # Clamp to [-1, 1] to absorb floating point error
    cos_angle = max(-1.0, min(1.0, cos_angle))
    return math.acos(cos_angle)


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    return a + (b - a) * t


def ray_sphere_intersect(origin: np.ndarray, direction: np.ndarray, center: np.ndarray, radius: float) -> Optional[float]:
    """Distance along a unit-direction ray to the first sphere crossing.

    Returns None when the ray misses or the sphere lies entirely behind the
    origin. An origin inside the sphere reports the exit distance.
    """
    oc = origin - center
    b = float(np.dot(oc, direction))
    c = float(np.dot(oc, oc)) - radius * radius
    disc = b * b - c
    if disc < 0:
        return None
    root = math.sqrt(disc)
    t = -b - root
    if t >= 0:
        return t
    t = -b + root
    if t >= 0:
        return t
    return None
