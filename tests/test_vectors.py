import math

import pytest

from disc_shooter.vectors import angle_between, normalize, ray_sphere_intersect, vec3


def test_normalize_guards_zero_length():
    assert normalize(vec3()) is None
    assert normalize(vec3(0.0, 3.0, 4.0))[2] == pytest.approx(0.8)


def test_angle_between():
    assert angle_between(vec3(1, 0, 0), vec3(0, 2, 0)) == pytest.approx(math.pi / 2)
    assert angle_between(vec3(1, 0, 0), vec3(3, 0, 0)) == pytest.approx(0.0)
    assert angle_between(vec3(), vec3(1, 0, 0)) is None


def test_ray_sphere_front_behind_inside():
    d = vec3(0, 0, -1)
    assert ray_sphere_intersect(vec3(), d, vec3(0, 0, -5), 1.0) == pytest.approx(4.0)
    assert ray_sphere_intersect(vec3(), d, vec3(0, 0, 5), 1.0) is None
    assert ray_sphere_intersect(vec3(), d, vec3(2, 0, -5), 1.0) is None
    assert ray_sphere_intersect(vec3(), d, vec3(0, 0, -0.5), 1.0) == pytest.approx(1.5)
