import math
import random

import pytest

from asteroidfield.geometry import (
    Vec2,
    angle_between,
    circle_touches_segment,
    clamp,
    left_normal,
    lerp,
    random_in_range,
    random_on_circle,
    random_unit_float,
    segment_intersection,
    smooth_step,
)


def approx_vec(v):
    return pytest.approx((v.x, v.y), abs=1e-9)


def test_add_sub_neg():
    a = Vec2(1.5, -2.0)
    b = Vec2(3.0, 4.0)
    assert (a + b) - b == a
    assert -a == Vec2(-1.5, 2.0)
    assert a + (-a) == Vec2(0.0, 0.0)


def test_scale_and_length():
    v = Vec2(3.0, 4.0)
    assert v.length() == pytest.approx(5.0)
    assert v.scale(2.0).length() == pytest.approx(10.0)


def test_normalized_has_unit_length():
    v = Vec2(-7.0, 2.5)
    assert v.normalized().length() == pytest.approx(1.0)


def test_normalized_zero_stays_zero():
    assert Vec2(0.0, 0.0).normalized() == Vec2(0.0, 0.0)


def test_dot_and_distance():
    a = Vec2(1.0, 0.0)
    b = Vec2(0.0, 1.0)
    assert a.dot(b) == 0.0
    assert a.distance(a) == 0.0
    assert a.distance(b) == pytest.approx(math.sqrt(2.0))


def test_rotated_preserves_length_and_round_trips():
    v = Vec2(2.0, -1.0)
    r = v.rotated(0.7)
    assert r.length() == pytest.approx(v.length())
    assert (r.rotated(-0.7).x, r.rotated(-0.7).y) == approx_vec(v)


def test_rotated_quarter_turn():
    assert (Vec2(1.0, 0.0).rotated(math.pi / 2).x, Vec2(1.0, 0.0).rotated(math.pi / 2).y) == approx_vec(
        Vec2(0.0, 1.0)
    )


def test_reflect_preserves_length_and_flips_normal_component():
    v = Vec2(3.0, -2.0)
    n = Vec2(0.0, 1.0)
    r = v.reflect(n)
    assert r.length() == pytest.approx(v.length())
    assert r.dot(n) == pytest.approx(-v.dot(n))
    assert r.x == pytest.approx(v.x)


def test_vec_clamp():
    low, high = Vec2(0.0, 0.0), Vec2(10.0, 10.0)
    assert Vec2(-5.0, 20.0).clamp(low, high) == Vec2(0.0, 10.0)
    assert Vec2(3.0, 4.0).clamp(low, high) == Vec2(3.0, 4.0)


def test_angle_between_rotates_first_onto_second():
    v1 = Vec2(0.0, -1.0)
    v2 = Vec2(2.0, 3.0)
    angle = angle_between(v1, v2)
    rotated = v1.rotated(angle)
    assert (rotated.x, rotated.y) == approx_vec(v2.normalized())


def test_angle_between_same_direction_is_zero():
    assert angle_between(Vec2(1.0, 1.0), Vec2(3.0, 3.0)) == pytest.approx(0.0)


def test_scalar_clamp_and_lerp():
    assert clamp(5.0, 0.0, 1.0) == 1.0
    assert clamp(-5.0, 0.0, 1.0) == 0.0
    assert lerp(2.0, 6.0, 0.0) == 2.0
    assert lerp(2.0, 6.0, 1.0) == 6.0


def test_smooth_step_endpoints_and_monotonic():
    assert smooth_step(0.0, 1.0, -1.0) == 0.0
    assert smooth_step(0.0, 1.0, 2.0) == 1.0
    values = [smooth_step(0.0, 1.0, x / 10) for x in range(11)]
    assert values == sorted(values)
    assert smooth_step(0.0, 1.0, 0.5) == pytest.approx(0.5)


def test_segment_intersection_crossing():
    p0, p1 = Vec2(0.0, 0.0), Vec2(2.0, 2.0)
    q0, q1 = Vec2(0.0, 2.0), Vec2(2.0, 0.0)
    hit = segment_intersection(p0, p1, q0, q1)
    other = segment_intersection(q0, q1, p0, p1)
    assert hit is not None and other is not None
    assert (hit.x, hit.y) == approx_vec(other)
    assert circle_touches_segment(hit, 1e-6, p0, p1)
    assert circle_touches_segment(hit, 1e-6, q0, q1)


def test_segment_intersection_parallel_and_disjoint():
    assert segment_intersection(Vec2(0, 0), Vec2(1, 0), Vec2(0, 1), Vec2(1, 1)) is None
    assert segment_intersection(Vec2(0, 0), Vec2(1, 1), Vec2(5, 0), Vec2(6, -1)) is None


def test_circle_touches_segment():
    p0, p1 = Vec2(0.0, 0.0), Vec2(10.0, 0.0)
    assert circle_touches_segment(Vec2(5.0, 2.0), 3.0, p0, p1)
    assert not circle_touches_segment(Vec2(5.0, 4.0), 3.0, p0, p1)
    assert not circle_touches_segment(Vec2(15.0, 0.0), 3.0, p0, p1)


def test_circle_touches_degenerate_segment():
    p = Vec2(1.0, 1.0)
    assert circle_touches_segment(Vec2(1.0, 2.0), 1.5, p, p)
    assert not circle_touches_segment(Vec2(1.0, 5.0), 1.5, p, p)


def test_left_normal_is_perpendicular_unit():
    p0, p1 = Vec2(1.0, 2.0), Vec2(4.0, 6.0)
    n = left_normal(p0, p1)
    assert n.length() == pytest.approx(1.0)
    assert n.dot(p1 - p0) == pytest.approx(0.0)
    assert (left_normal(p1, p0).x, left_normal(p1, p0).y) == approx_vec(-n)


def test_random_helpers_stay_in_bounds():
    rng = random.Random(7)
    for _ in range(200):
        assert 0.0 <= random_unit_float(rng) <= 1.0
        assert 3.0 <= random_in_range(rng, 3.0, 5.0) <= 5.0
        assert random_on_circle(rng, 4.0).length() == pytest.approx(4.0)


def test_random_helpers_are_deterministic_per_seed():
    a = [random_on_circle(random.Random(3), 2.0) for _ in range(3)]
    b = [random_on_circle(random.Random(3), 2.0) for _ in range(3)]
    assert a == b