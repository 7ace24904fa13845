"""Turrets: target locking, aiming, reloading and where their shots leave the barrel."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

Vec = tuple[float, float]
# (origin, direction, rotation) of one projectile leaving a turret.
Shot = tuple[Vec, Vec, float]

SHOVEL_PRICE = 10


class TurretKind(Enum):
    """The turrets a player can build."""

    MACHINE_GUN = "machine-gun"
    LASER = "laser"
    LASER_SOURCE = "laser-source"


@dataclass(frozen=True)
class TurretSpec:
    """Fixed properties shared by every turret of one kind."""

    base_image: str
    turret_image: str
    radius: float
    price: int
    cool_down: float
    sound: str
    # Fixed-direction turrets fire along a set direction and never turn.
    fixed_direction: bool = False

    @classmethod
    def for_kind(cls, kind: TurretKind) -> TurretSpec:
        return _SPECS[kind]


_SPECS: dict[TurretKind, TurretSpec] = {
    TurretKind.MACHINE_GUN: TurretSpec(
        "play/tower-base.png", "play/turret-1.png", 200, 50, 0.5, "gun.wav"
    ),
    TurretKind.LASER: TurretSpec(
        "play/tower-base.png", "play/turret-2.png", 400, 200, 0.3, "laser.wav"
    ),
    TurretKind.LASER_SOURCE: TurretSpec(
        "play/tower-base.png", "play/turret-7.png", 450, 500, 2.0, "laser.wav",
        fixed_direction=True,
    ),
}


def _heading(rotation: float) -> Vec:
    # Images point upward, so a rotation of 0 faces -y.
    return math.cos(rotation - math.pi / 2), math.sin(rotation - math.pi / 2)


def _normalize(v: Vec) -> Optional[Vec]:
    length = math.hypot(*v)
    if length == 0:
        return None
    return v[0] / length, v[1] / length


def rotate_towards(rotation: float, position: Vec, target: Vec, max_radian: float) -> float:
    """Turn a rotation toward a target point by at most about max_radian."""
    wanted = _normalize((target[0] - position[0], target[1] - position[1]))
    if wanted is None:
        return rotation
    origin = _heading(rotation)
    cos_theta = max(-1.0, min(1.0, origin[0] * wanted[0] + origin[1] * wanted[1]))
    radian = math.acos(cos_theta)
    if abs(radian) <= max_radian:
        direction = wanted
    else:
        keep = abs(radian) - max_radian
        direction = (
            (keep * origin[0] + max_radian * wanted[0]) / radian,
            (keep * origin[1] + max_radian * wanted[1]) / radian,
        )
    return math.atan2(direction[1], direction[0]) + math.pi / 2


def button_enabled(money: int, price: int) -> bool:
    """Whether a build button can be pressed with the money at hand."""
    return money >= price


class Turret:
    """A placed (or previewed) turret that locks on enemies in range and fires."""

    rotate_radian = 2 * math.pi

    def __init__(self, kind: TurretKind, x: float, y: float, rotation: float = 0.0) -> None:
        self.kind = kind
        self.spec = TurretSpec.for_kind(kind)
        self.x = float(x)
        self.y = float(y)
        self.rotation = float(rotation)
        self.direction = float(rotation)
        self.enabled = True
        self.locked = False
        self.preview = False
        self.adjust_mode = False
        self.beam_cool_down = True
        self.reload = 0.0
        self.target: Any = None

    @property
    def position(self) -> Vec:
        return self.x, self.y

    @property
    def price(self) -> int:
        return self.spec.price

    @property
    def radius(self) -> float:
        return self.spec.radius

    def _in_range(self, enemy: Any) -> bool:
        ex, ey = enemy.position
        return math.hypot(ex - self.x, ey - self.y) <= self.radius

    def update(self, delta_time: float, enemies: Sequence[Any]) -> list[Shot]:
        """Advance one frame against enemies having a position; return the shots fired."""
        if self.spec.fixed_direction:
            if self.adjust_mode:
                return []
            self.locked = True
        if not self.enabled:
            return []
        if self.target is not None and (
            not any(e is self.target for e in enemies) or not self._in_range(self.target)
        ):
            self.target = None
        if self.target is None:
            self.target = next((e for e in enemies if self._in_range(e)), None)
        if self.target is None:
            return []
        if not self.locked:
            self.rotation = rotate_towards(
                self.rotation, self.position, tuple(self.target.position),
                self.rotate_radian * delta_time,
            )
        self.reload -= delta_time
        if self.reload > 0:
            return []
        self.reload = self.spec.cool_down
        self.beam_cool_down = not self.beam_cool_down
        return self.barrel_positions()

    def barrel_positions(self) -> list[Shot]:
        """Where projectiles leave the barrel, in which direction and at which rotation."""
        angle = self.direction if self.spec.fixed_direction else self.rotation
        diff = _heading(angle)
        rotation = math.atan2(diff[1], diff[0])
        nx, ny = diff
        normal = (-ny, nx)
        if self.kind is TurretKind.MACHINE_GUN:
            offsets = [(36.0, 0.0)]
        elif self.kind is TurretKind.LASER:
            offsets = [(36.0, -6.0), (36.0, 6.0)]
        else:
            offsets = [(230.0, 0.0)]
        return [
            (
                (self.x + nx * ahead + normal[0] * side, self.y + ny * ahead + normal[1] * side),
                diff,
                rotation,
            )
            for ahead, side in offsets
        ]

    def aim_at(self, mx: float, my: float) -> None:
        """Point a fixed-direction turret at the mouse while it is being adjusted."""
        self.direction = math.atan2(my - self.y, mx - self.x) + math.pi / 2
        self.rotation = self.direction