import math

import pytest

from missilesim.entities import (
    MAP_SIZE_X,
    MAP_SIZE_Y,
    EntityOutOfBounds,
    Missile,
    Target,
)


def test_missile_with_zero_speed_stays_put():
    missile = Missile(id=1, x=1000.0, y=1000.0, speed=0, degree=45.0)
    missile.update_position(0.1)
    assert (missile.x, missile.y) == (1000.0, 1000.0)


def test_negative_speed_does_not_move():
    target = Target(name="alpha", x=1500.0, y=1500.0, speed=-20, degree=10.0)
    target.update_position(1.0)
    assert (target.x, target.y) == (1500.0, 1500.0)


def test_missile_moves_speed_times_delta_along_heading():
    missile = Missile(id=2, x=1000.0, y=1000.0, speed=300, degree=30.0)
    missile.update_position(0.5)
    dx, dy = missile.x - 1000.0, missile.y - 1000.0
    assert math.hypot(dx, dy) == pytest.approx(300 * 0.5)
    assert math.degrees(math.atan2(dy, dx)) == pytest.approx(30.0)


def test_target_heading_zero_moves_along_x_only():
    target = Target(name="alpha", x=100.0, y=200.0, speed=50, degree=0.0)
    target.update_position(1.0)
    assert target.x == pytest.approx(100.0 + 50)
    assert target.y == pytest.approx(200.0)


def test_target_heading_ninety_moves_along_y():
    target = Target(name="bravo", x=100.0, y=200.0, speed=50, degree=90.0)
    target.update_position(0.1)
    assert target.x == pytest.approx(100.0)
    assert target.y == pytest.approx(200.0 + 50 * 0.1)


def test_missile_leaving_map_raises_and_keeps_new_position():
    missile = Missile(id=7, x=4999.0, y=10.0, speed=100, degree=0.0)
    with pytest.raises(EntityOutOfBounds, match=r"\[7\] Entity removed due to out-of-bounds"):
        missile.update_position(1.0)
    assert missile.x > MAP_SIZE_X


def test_target_out_of_bounds_message_uses_name():
    target = Target(name="alpha", x=1.0, y=1.0, speed=100, degree=180.0)
    with pytest.raises(EntityOutOfBounds, match=r"\[alpha\]"):
        target.update_position(1.0)


@pytest.mark.parametrize("x,y", [(0.0, 0.0), (5000.0, 5000.0), (2500.0, 0.0)])
def test_check_bounds_accepts_edges(x, y):
    missile = Missile(id=1, x=x, y=y, speed=0, degree=0.0)
    missile.update_position(0.1)
    assert (missile.x, missile.y) == (x, y)


@pytest.mark.parametrize("x,y", [(-0.01, 10.0), (10.0, -0.01), (MAP_SIZE_X + 0.01, 10.0), (10.0, MAP_SIZE_Y + 1)])
def test_check_bounds_rejects_outside(x, y):
    target = Target(name="t", x=x, y=y, speed=0, degree=0.0)
    with pytest.raises(EntityOutOfBounds):
        target.check_bounds(target.name, x, y)


def test_entities_compare_by_identity():
    a = Missile(id=1, x=1.0, y=1.0, speed=0, degree=0.0)
    b = Missile(id=1, x=1.0, y=1.0, speed=0, degree=0.0)
    assert a == a
    assert not (a == b)