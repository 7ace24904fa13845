"""Tile map and enemy wave files, and path distances on the map."""

from __future__ import annotations

import math
from collections import deque
from enum import Enum
from os import PathLike

MAP_WIDTH = 20
MAP_HEIGHT = 13
BLOCK_SIZE = 64

# Left, up, right, down as (dx, dy).
DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, 0), (0, -1), (1, 0), (0, 1))
SPAWN_GRID_POINT = (-1, 0)
END_GRID_POINT = (MAP_WIDTH, MAP_HEIGHT - 1)

_WHITESPACE = " \t\n\v\f\r"


class TileType(Enum):
    """What occupies one map tile."""

    DIRT = 0
    FLOOR = 1
    OCCUPIED = 2
    HIGH = 3


class MapCorruptedError(ValueError):
    """Raised when map data cannot be read as a full map."""

    def __init__(self, message: str = "Map data is corrupted.") -> None:
        super().__init__(message)


Tiles = list[list[TileType]]


def parse_map(text: str) -> Tiles:
    """Parse a map of '0' (dirt) and '1' (floor) characters; whitespace is ignored."""
    cells: list[TileType] = []
    for ch in text:
        if ch in _WHITESPACE:
            continue
        if ch == "0":
            cells.append(TileType.DIRT)
        elif ch == "1":
            cells.append(TileType.FLOOR)
        else:
            raise MapCorruptedError()
    if len(cells) != MAP_WIDTH * MAP_HEIGHT:
        raise MapCorruptedError()
    return [cells[row * MAP_WIDTH:(row + 1) * MAP_WIDTH] for row in range(MAP_HEIGHT)]


def load_map(path: str | PathLike[str]) -> Tiles:
    """Read and parse a map file; an unreadable file counts as corrupted."""
    try:
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
    except OSError as exc:
        raise MapCorruptedError() from exc
    return parse_map(text)


def parse_enemy_waves(text: str) -> list[tuple[int, float]]:
    """Parse 'type wait repeat' triples into a flat list of (type, wait) spawns.

    Reading stops at the first value that is not a number or at an
    incomplete triple.
    """
    values: list[float] = []
    for token in text.split():
        try:
            values.append(float(token))
        except ValueError:
            break
    waves: list[tuple[int, float]] = []
    for start in range(0, len(values) - 2, 3):
        kind, wait, repeat = values[start:start + 3]
        count = math.ceil(repeat) if repeat > 0 else 0
        waves.extend([(int(kind), wait)] * count)
    return waves


def load_enemy_waves(path: str | PathLike[str]) -> list[tuple[int, float]]:
    """Read an enemy wave file; a missing file yields no waves."""
    try:
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
    except OSError:
        return []
    return parse_enemy_waves(text)


def bfs_distance(tiles: Tiles) -> list[list[int]]:
    """Distance in steps from every dirt tile to the bottom-right tile, -1 if unreachable."""
    height = len(tiles)
    width = len(tiles[0]) if height else 0
    dist = [[-1] * width for _ in range(height)]
    if not height or not width or tiles[height - 1][width - 1] is not TileType.DIRT:
        return dist
    dist[height - 1][width - 1] = 0
    queue = deque([(width - 1, height - 1)])
    while queue:
        x, y = queue.popleft()
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if (
                0 <= nx < width
                and 0 <= ny < height
                and dist[ny][nx] == -1
                and tiles[ny][nx] is TileType.DIRT
            ):
                dist[ny][nx] = dist[y][x] + 1
                queue.append((nx, ny))
    return dist


def client_size() -> tuple[int, int]:
    """Pixel size of the playable map area."""
    return MAP_WIDTH * BLOCK_SIZE, MAP_HEIGHT * BLOCK_SIZE