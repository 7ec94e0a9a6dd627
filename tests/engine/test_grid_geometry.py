import random

import pytest

from pizza_delivery.core.errors import NoSuchPointError, SetupError
from pizza_delivery.core.types import ALL_DIRECTIONS, Direction, Topping
from pizza_delivery.engine.grid import Grid
from pizza_delivery.engine.tiles import Border, Empty, Grave, House, Pizza, Wall


@pytest.mark.parametrize(("width", "height"), [(7, 7), (5, 3), (3, 5), (1, 1)])
def test_point_xy_round_trip(width: int, height: int):
    grid = Grid(width, height)
    for point in grid.points():
        assert grid.point_from_xy(*grid.point_to_xy(point)) == point


def test_row_major_indexing_uses_width():
    grid = Grid(5, 3)
    assert grid.point_from_xy(4, 2) == 14
    assert grid.point_to_xy(14) == (4, 2)
    assert grid.point_from_xy(5, 0) is None
    assert grid.point_from_xy(0, 3) is None


@pytest.mark.parametrize("point", [None, -100, -1, 49, 50, 10_000])
def test_get_or_border_is_total(point: int | None):
    grid = Grid()
    tile = grid.get_or_border(point)
    assert isinstance(tile, Border)
    assert tile is grid.border


def test_get_or_border_returns_tiles_inside_the_grid():
    grid = Grid()
    # Point 0 is a real tile, not "no point"
    assert grid.get_or_border(0) is grid[0]
    assert all(grid.get_or_border(p) is grid[p] for p in grid.points())


def test_indexing_outside_the_grid_raises():
    grid = Grid(2, 2)
    with pytest.raises(IndexError):
        _ = grid[4]
    with pytest.raises(IndexError):
        grid[-1] = Wall()


def test_grid_must_have_tiles():
    with pytest.raises(SetupError):
        Grid(0, 3)


def test_offset_point_in_every_direction():
    grid = Grid()
    center = grid.point_from_xy(3, 3)
    expected = {
        Direction.NORTH: (3, 2),
        Direction.NORTH_EAST: (4, 2),
        Direction.EAST: (4, 3),
        Direction.SOUTH_EAST: (4, 4),
        Direction.SOUTH: (3, 4),
        Direction.SOUTH_WEST: (2, 4),
        Direction.WEST: (2, 3),
        Direction.NORTH_WEST: (2, 2),
    }
    for direction in ALL_DIRECTIONS:
        assert grid.offset_point(center, direction) == grid.point_from_xy(*expected[direction])

    assert grid.offset_point(center, Direction.EAST, 3) == grid.point_from_xy(6, 3)
    assert grid.offset_point(center, Direction.EAST, 4) is None
    assert grid.offset_point(None, Direction.EAST) is None


def test_offset_point_does_not_wrap_rows():
    grid = Grid(4, 4)
    assert grid.offset_point(grid.point_from_xy(3, 0), Direction.EAST) is None
    assert grid.offset_point(grid.point_from_xy(0, 1), Direction.WEST) is None


def test_adjacent_and_surrounding_tiles_include_border():
    grid = Grid(3, 3)
    corner = grid.point_from_xy(0, 0)

    adjacent = grid.adjacent_tiles(corner)
    assert set(adjacent) == {Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST}
    assert isinstance(adjacent[Direction.NORTH], Border)
    assert isinstance(adjacent[Direction.EAST], Empty)

    surrounding = grid.surrounding_tiles(corner)
    assert len(surrounding) == 8
    assert sum(isinstance(t, Border) for t in surrounding.values()) == 5


@pytest.mark.parametrize(("width", "height"), [(7, 7), (4, 6), (1, 5)])
def test_mirror_point_is_its_own_inverse(width: int, height: int):
    grid = Grid(width, height)
    for point in grid.points():
        mirrored = grid.mirror_point(point)
        assert mirrored is not None
        assert grid.mirror_point(mirrored) == point


def test_mirror_point_reflects_through_the_center():
    grid = Grid(7, 5)
    assert grid.mirror_point(grid.point_from_xy(0, 0)) == grid.point_from_xy(6, 4)
    assert grid.mirror_point(grid.point_from_xy(3, 2)) == grid.point_from_xy(3, 2)


def test_random_point_fails_when_nothing_matches():
    grid = Grid(2, 2, rng=random.Random(0))
    with pytest.raises(NoSuchPointError):
        grid.random_point(lambda _p, tile: isinstance(tile, Wall))


def test_random_point_only_returns_matches():
    grid = Grid(3, 3, rng=random.Random(0))
    grid[4] = Wall()
    assert grid.random_point(lambda _p, tile: isinstance(tile, Wall)) == 4


def test_full_reachability_detects_split_grids():
    grid = Grid(3, 3)
    for y in range(3):
        grid[grid.point_from_xy(1, y)] = Wall()
    assert not grid.is_fully_reachable()

    grid[grid.point_from_xy(1, 2)] = Empty()
    assert grid.is_fully_reachable()
    # Walling the last gap would split it again
    assert not grid.is_fully_reachable(blocked=grid.point_from_xy(1, 2))
    assert grid.is_fully_reachable(blocked=grid.point_from_xy(0, 0))


def test_spawn_house_surrounds_house_with_ghosts_except_graves_and_players():
    grid = Grid(5, 5)
    house_point = grid.point_from_xy(2, 2)
    grid[house_point] = House(Topping.CHEESE)
    grid[grid.point_from_xy(0, 0)] = Pizza(Topping.CHEESE)

    grave = Grave()
    grave.clear_ghost()
    grid[grid.point_from_xy(1, 1)] = grave
    occupied = grid.point_from_xy(3, 3)

    assert grid.spawn_house(Topping.CHEESE, occupied={occupied}) == house_point

    house = grid[house_point]
    assert isinstance(house, House)
    assert house.spawned

    haunted = {
        direction for direction, tile in grid.surrounding_tiles(house_point).items() if tile.ghost
    }
    assert haunted == set(ALL_DIRECTIONS) - {Direction.NORTH_WEST, Direction.SOUTH_EAST}
    # A cleared grave stays cleared
    assert not grave.ghost


def test_nearest_house_prefers_undelivered_then_lower_topping():
    grid = Grid(7, 1)
    shrimp = House(Topping.SHRIMP)
    cheese = House(Topping.CHEESE)
    grid[0] = shrimp
    grid[6] = cheese

    # Equal distance from the middle, shrimp has the lower ordinal
    assert grid.nearest_house(3) == 0
    assert grid.nearest_house(5) == 6

    shrimp.delivered = True
    assert grid.nearest_house(1) == 6
    assert grid.nearest_house(1, prefer_undelivered=False) == 0

    cheese.delivered = True
    assert grid.nearest_house(1) == 0


def test_nearest_house_without_houses():
    assert Grid(3, 3).nearest_house(4) is None
