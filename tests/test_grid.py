import pytest

from towerdefense.grid import (
    MAP_HEIGHT,
    MAP_WIDTH,
    MapCorruptedError,
    TileType,
    bfs_distance,
    client_size,
    load_enemy_waves,
    load_map,
    parse_enemy_waves,
    parse_map,
)


def _map_text(rows):
    return "\n".join("".join(r) for r in rows) + "\n"


def _all(ch):
    return [[ch] * MAP_WIDTH for _ in range(MAP_HEIGHT)]


def test_parse_all_dirt():
    tiles = parse_map(_map_text(_all("0")))
    assert len(tiles) == MAP_HEIGHT
    assert all(len(row) == MAP_WIDTH for row in tiles)
    assert all(t is TileType.DIRT for row in tiles for t in row)


def test_parse_keeps_positions_and_ignores_whitespace():
    rows = _all("0")
    rows[2][5] = "1"
    text = _map_text(rows).replace("\n", "\r\n").replace("0", "0 ", 3)
    tiles = parse_map(text)
    assert tiles[2][5] is TileType.FLOOR
    assert sum(t is TileType.FLOOR for row in tiles for t in row) == 1


def test_parse_rejects_unknown_character():
    rows = _all("0")
    rows[0][0] = "2"
    with pytest.raises(MapCorruptedError):
        parse_map(_map_text(rows))


def test_parse_rejects_wrong_size():
    rows = _all("0")[:-1]
    with pytest.raises(MapCorruptedError):
        parse_map(_map_text(rows))


def test_error_message():
    with pytest.raises(MapCorruptedError, match="Map data is corrupted."):
        parse_map("")


def test_load_map_round_trip(tmp_path):
    rows = _all("1")
    rows[MAP_HEIGHT - 1][MAP_WIDTH - 1] = "0"
    path = tmp_path / "map1.txt"
    path.write_text(_map_text(rows))
    tiles = load_map(path)
    assert tiles[-1][-1] is TileType.DIRT
    assert tiles[0][0] is TileType.FLOOR


def test_load_map_missing_file(tmp_path):
    with pytest.raises(MapCorruptedError):
        load_map(tmp_path / "absent.txt")


def test_enemy_waves_expand_repeats():
    assert parse_enemy_waves("1 2.5 3") == [(1, 2.5)] * 3


def test_enemy_waves_keep_order_and_stop_at_incomplete():
    waves = parse_enemy_waves("1 1 1\n3 0.5 2\n4 9")
    assert waves == [(1, 1.0), (3, 0.5), (3, 0.5)]


def test_enemy_waves_stop_at_garbage():
    assert parse_enemy_waves("2 1 1 x 1 1") == [(2, 1.0)]


def test_enemy_waves_zero_repeat():
    assert parse_enemy_waves("1 1 0") == []


def test_load_enemy_waves(tmp_path):
    path = tmp_path / "enemy1.txt"
    path.write_text("4 3 2\n")
    assert load_enemy_waves(path) == [(4, 3.0), (4, 3.0)]
    assert load_enemy_waves(tmp_path / "absent.txt") == []


def test_bfs_open_map_is_manhattan_distance():
    dist = bfs_distance(parse_map(_map_text(_all("0"))))
    assert dist[MAP_HEIGHT - 1][MAP_WIDTH - 1] == 0
    for y in range(MAP_HEIGHT):
        for x in range(MAP_WIDTH):
            assert dist[y][x] == (MAP_WIDTH - 1 - x) + (MAP_HEIGHT - 1 - y)


def test_bfs_end_not_dirt_is_unreachable():
    rows = _all("0")
    rows[MAP_HEIGHT - 1][MAP_WIDTH - 1] = "1"
    dist = bfs_distance(parse_map(_map_text(rows)))
    assert all(d == -1 for row in dist for d in row)


def test_bfs_wall_cuts_off_left_side():
    rows = _all("0")
    for row in rows:
        row[10] = "1"
    dist = bfs_distance(parse_map(_map_text(rows)))
    assert all(dist[y][x] == -1 for y in range(MAP_HEIGHT) for x in range(11))
    assert all(dist[y][x] >= 0 for y in range(MAP_HEIGHT) for x in range(11, MAP_WIDTH))


def test_bfs_neighbours_differ_by_one():
    rows = _all("0")
    for y in range(1, MAP_HEIGHT):
        rows[y][7] = "1"
    dist = bfs_distance(parse_map(_map_text(rows)))
    for y in range(MAP_HEIGHT):
        for x in range(MAP_WIDTH - 1):
            a, b = dist[y][x], dist[y][x + 1]
            if a >= 0 and b >= 0:
                assert abs(a - b) == 1


def test_client_size():
    assert client_size() == (1280, 832)