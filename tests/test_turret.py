import math
from dataclasses import dataclass

import pytest

from towerdefense.turret import (
    SHOVEL_PRICE,
    Turret,
    TurretKind,
    TurretSpec,
    button_enabled,
    rotate_towards,
)


@dataclass
class FakeEnemy:
    position: tuple


def heading(rotation):
    return math.cos(rotation - math.pi / 2), math.sin(rotation - math.pi / 2)


def test_specs_match_prices():
    assert TurretSpec.for_kind(TurretKind.MACHINE_GUN).price == 50
    assert TurretSpec.for_kind(TurretKind.LASER).price == 200
    assert TurretSpec.for_kind(TurretKind.LASER_SOURCE).price == 500
    assert Turret(TurretKind.LASER, 0, 0).price == 200


def test_button_enabled():
    assert button_enabled(50, 50)
    assert not button_enabled(49, 50)
    assert button_enabled(SHOVEL_PRICE, SHOVEL_PRICE)


def test_rotate_towards_full_turn_points_at_target():
    r = rotate_towards(0.0, (0, 0), (5, 0), 100.0)
    hx, hy = heading(r)
    assert hx == pytest.approx(1.0)
    assert hy == pytest.approx(0.0, abs=1e-9)


def test_rotate_towards_limited_turn():
    r = rotate_towards(0.0, (0, 0), (5, 0), 0.1)
    assert 0 < r < math.pi / 2


def test_rotate_towards_same_point_unchanged():
    assert rotate_towards(1.25, (3, 3), (3, 3), 1.0) == 1.25


def test_acquires_target_in_range_and_fires():
    t = Turret(TurretKind.MACHINE_GUN, 0, 0)
    near = FakeEnemy((100, 0))
    shots = t.update(0.01, [FakeEnemy((1000, 0)), near])
    assert t.target is near
    assert len(shots) == 1
    assert t.beam_cool_down is False


def test_out_of_range_no_target():
    t = Turret(TurretKind.MACHINE_GUN, 0, 0)
    assert t.update(0.1, [FakeEnemy((500, 0))]) == []
    assert t.target is None


def test_reload_blocks_next_shot():
    t = Turret(TurretKind.LASER, 0, 0)
    enemy = FakeEnemy((0, -50))
    assert len(t.update(0.01, [enemy])) == 2
    assert t.update(0.01, [enemy]) == []
    assert len(t.update(t.spec.cool_down, [enemy])) == 2


def test_target_released_when_leaving_range():
    t = Turret(TurretKind.MACHINE_GUN, 0, 0)
    enemy = FakeEnemy((100, 0))
    t.update(0.01, [enemy])
    enemy.position = (1000, 0)
    t.update(0.01, [enemy])
    assert t.target is None


def test_target_dropped_when_removed():
    t = Turret(TurretKind.MACHINE_GUN, 0, 0)
    a, b = FakeEnemy((10, 0)), FakeEnemy((20, 0))
    t.update(0.01, [a, b])
    assert t.target is a
    t.update(0.01, [b])
    assert t.target is b


def test_disabled_turret_does_nothing():
    t = Turret(TurretKind.MACHINE_GUN, 0, 0)
    t.enabled = False
    assert t.update(1.0, [FakeEnemy((10, 0))]) == []
    assert t.target is None


def test_machine_gun_barrel():
    t = Turret(TurretKind.MACHINE_GUN, 100, 100)
    [(origin, direction, _)] = t.barrel_positions()
    assert origin == pytest.approx((100, 100 - 36))
    assert direction == pytest.approx((0, -1), abs=1e-9)


def test_laser_barrels_symmetric():
    t = Turret(TurretKind.LASER, 100, 100)
    (o1, _, _), (o2, _, _) = t.barrel_positions()
    assert (o1[0] + o2[0]) / 2 == pytest.approx(100)
    assert o1[1] == pytest.approx(o2[1])
    assert abs(o1[0] - o2[0]) == pytest.approx(12)


def test_laser_source_aim_and_barrel():
    t = Turret(TurretKind.LASER_SOURCE, 0, 0)
    t.aim_at(50, 0)
    assert t.direction == pytest.approx(math.pi / 2)
    assert t.rotation == t.direction
    [(origin, _, _)] = t.barrel_positions()
    assert origin == pytest.approx((230, 0), abs=1e-9)


def test_laser_source_adjust_mode_holds_fire():
    t = Turret(TurretKind.LASER_SOURCE, 0, 0)
    t.adjust_mode = True
    assert t.update(1.0, [FakeEnemy((10, 0))]) == []


def test_laser_source_does_not_rotate():
    t = Turret(TurretKind.LASER_SOURCE, 0, 0, rotation=0.5)
    shots = t.update(0.5, [FakeEnemy((100, 0))])
    assert t.locked
    assert t.rotation == 0.5
    assert len(shots) == 1