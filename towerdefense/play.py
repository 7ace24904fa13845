"""Game state of one stage: money, lives, turret placement, waves and cheats."""

from __future__ import annotations

import math
from collections import deque
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Iterable, Optional

from towerdefense.grid import (
    BLOCK_SIZE,
    MAP_HEIGHT,
    MAP_WIDTH,
    SPAWN_GRID_POINT,
    TileType,
    Tiles,
    bfs_distance,
    load_enemy_waves,
    load_map,
)
from towerdefense.keys import Key
from towerdefense.turret import SHOVEL_PRICE, Turret, TurretKind

DANGER_TIME = 7.61
INITIAL_LIVES = 10
INITIAL_MONEY = 150
CHEAT_REWARD = 10000

CHEAT_CODE: tuple[int, ...] = (
    Key.UP, Key.UP, Key.DOWN, Key.DOWN,
    Key.LEFT, Key.RIGHT, Key.LEFT, Key.RIGHT,
    Key.B, Key.A, Key.LSHIFT, Key.ENTER,
)

SPAWN_POSITION = (
    SPAWN_GRID_POINT[0] * BLOCK_SIZE + BLOCK_SIZE // 2,
    SPAWN_GRID_POINT[1] * BLOCK_SIZE + BLOCK_SIZE // 2,
)


class EnemyKind(Enum):
    """Enemy types as numbered in wave files."""

    SOLDIER = 1
    FLY = 2
    TANK = 3
    SUICIDE = 4


def _grid_cell(px: float, py: float) -> tuple[int, int]:
    gx = min(max(math.floor(px / BLOCK_SIZE), 0), MAP_WIDTH - 1)
    gy = min(max(math.floor(py / BLOCK_SIZE), 0), MAP_HEIGHT - 1)
    return gx, gy


class PlayState:
    """Everything that changes while a stage is played."""

    def __init__(
        self,
        tiles: Tiles,
        waves: Iterable[tuple[int, float]] = (),
        map_id: int = 1,
    ) -> None:
        self.map_id = map_id
        self.tiles: Tiles = [list(row) for row in tiles]
        self.distance = bfs_distance(self.tiles)
        self.waves: deque[tuple[int, float]] = deque(waves)
        self.lives = INITIAL_LIVES
        self.money = INITIAL_MONEY
        self.speed_mult = 1
        self.ticks = 0.0
        self.death_countdown = -1.0
        self.danger_alpha = 0
        self.score = 0
        self.debug_mode = False
        self.key_strokes: deque[int] = deque(maxlen=len(CHEAT_CODE))
        self.planes_spawned = 0
        self.preview: Optional[Turret] = None
        self.shovel_mode = False
        self.turrets: dict[tuple[int, int], Turret] = {}
        self.next_scene: Optional[str] = None

    @classmethod
    def from_files(
        cls, map_id: int, resource_dir: str | PathLike[str] = "Resource"
    ) -> PlayState:
        """Load the map and enemy waves of a stage from its resource files."""
        base = Path(resource_dir)
        tiles = load_map(base / f"map{map_id}.txt")
        waves = load_enemy_waves(base / f"enemy{map_id}.txt")
        return cls(tiles, waves, map_id)

    @property
    def money_text(self) -> str:
        return f"${self.money}"

    @property
    def lives_text(self) -> str:
        return f"Life {self.lives}"

    def hit(self) -> None:
        """Lose a life; the stage is lost when none are left."""
        self.lives -= 1
        if self.lives <= 0:
            self.next_scene = "lose"

    def earn_money(self, amount: int) -> None:
        """Add (or, if negative, spend) money."""
        self.money += amount

    def on_key_down(self, key: int) -> bool:
        """Handle a key press; return True when it completes the cheat code."""
        if key == Key.TAB:
            self.debug_mode = not self.debug_mode
        else:
            self.key_strokes.append(key)
        cheat = tuple(self.key_strokes) == CHEAT_CODE
        if cheat:
            self.key_strokes.clear()
            self.planes_spawned += 1
            self.earn_money(CHEAT_REWARD)
        if key == Key.Q:
            self.select_turret(TurretKind.MACHINE_GUN)
        elif key == Key.W:
            self.select_turret(TurretKind.LASER)
        elif Key.NUM_0 <= key <= Key.NUM_9:
            self.speed_mult = key - Key.NUM_0
        return cheat

    def select_turret(self, kind: Optional[TurretKind]) -> Optional[Turret]:
        """Pick a turret to preview, or the shovel when kind is None.

        Picking anything while the shovel is active only leaves shovel mode.
        Returns the new preview turret, if any.
        """
        self.preview = None
        if self.shovel_mode:
            self.shovel_mode = False
            return None
        if kind is None:
            if self.money >= SHOVEL_PRICE:
                self.shovel_mode = True
            return None
        turret = Turret(kind, 0, 0)
        if self.money < turret.price:
            return None
        turret.enabled = False
        turret.preview = True
        self.preview = turret
        return turret

    def check_space_valid(
        self, x: int, y: int, enemy_positions: Iterable[tuple[float, float]] = ()
    ) -> bool:
        """Whether blocking tile (x, y) keeps every path open; if so, block it."""
        if not (0 <= x < MAP_WIDTH and 0 <= y < MAP_HEIGHT):
            return False
        previous = self.tiles[y][x]
        self.tiles[y][x] = TileType.OCCUPIED
        distance = bfs_distance(self.tiles)
        self.tiles[y][x] = previous
        if distance[0][0] == -1:
            return False
        for px, py in enemy_positions:
            gx, gy = _grid_cell(px, py)
            if distance[gy][gx] == -1:
                return False
        self.tiles[y][x] = TileType.OCCUPIED
        self.distance = distance
        return True

    def place_turret(
        self, x: int, y: int, enemy_positions: Iterable[tuple[float, float]] = ()
    ) -> Optional[Turret]:
        """Build the previewed turret on tile (x, y); return it, or None if refused."""
        if self.preview is None or not (0 <= x < MAP_WIDTH and 0 <= y < MAP_HEIGHT):
            return None
        if self.tiles[y][x] is TileType.OCCUPIED:
            return None
        if not self.check_space_valid(x, y, enemy_positions):
            return None
        turret = self.preview
        self.earn_money(-turret.price)
        turret.x = float(x * BLOCK_SIZE + BLOCK_SIZE // 2)
        turret.y = float(y * BLOCK_SIZE + BLOCK_SIZE // 2)
        turret.enabled = True
        turret.preview = False
        if turret.spec.fixed_direction:
            turret.adjust_mode = True
        self.turrets[(x, y)] = turret
        self.tiles[y][x] = TileType.OCCUPIED
        self.preview = None
        return turret

    def remove_turret(self, x: int, y: int) -> Optional[Turret]:
        """Dig up the turret on tile (x, y) with the shovel, refunding a third of its price."""
        if not self.shovel_mode:
            return None
        turret = self.turrets.pop((x, y), None)
        if turret is None:
            return None
        self.tiles[y][x] = TileType.FLOOR
        self.earn_money(turret.price // 3)
        self.shovel_mode = False
        return turret

    def danger_countdown(self, reach_end_times: Iterable[float]) -> float:
        """Update the death countdown from enemies' times to reach the end.

        The countdown is the arrival time of the enemy that would take the
        last life within DANGER_TIME, or -1 when there is none.
        """
        if self.speed_mult == 0:
            self.death_countdown = -1.0
        elif self.death_countdown != -1:
            self.speed_mult = 1
        new_countdown = -1.0
        danger = self.lives
        for reach in sorted(reach_end_times):
            if reach > DANGER_TIME:
                continue
            danger -= 1
            if danger <= 0:
                ratio = (DANGER_TIME - reach) / DANGER_TIME
                self.danger_alpha = max(0, min(255, int(ratio * ratio * 255)))
                new_countdown = reach
                break
        self.death_countdown = new_countdown
        if self.death_countdown == -1 and self.lives > 0:
            self.danger_alpha = 0
        if self.speed_mult == 0:
            self.death_countdown = -1.0
        return self.death_countdown

    def advance(self, delta_time: float, enemies_alive: int) -> list[tuple[EnemyKind, float]]:
        """Run the spawn clock for one frame at the current speed.

        Returns the enemies spawned with the time each has to catch up. When
        no waves and no enemies remain, the stage is won and the score set.
        """
        spawned: list[tuple[EnemyKind, float]] = []
        for _ in range(self.speed_mult):
            self.ticks += delta_time
            if not self.waves:
                if enemies_alive + len(spawned) == 0:
                    self.score = self.money // 100 + self.lives * 10
                    self.next_scene = "win"
                    return spawned
                continue
            kind_id, wait = self.waves[0]
            if self.ticks < wait:
                continue
            self.ticks -= wait
            self.waves.popleft()
            try:
                kind = EnemyKind(kind_id)
            except ValueError:
                continue
            spawned.append((kind, self.ticks))
        return spawned