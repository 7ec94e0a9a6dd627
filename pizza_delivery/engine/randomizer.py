"""Random grid population for a freshly constructed game.

Placement order matters: starts first (so their neighbours can be marked safe),
then pizza/house pairs, graves, walls, teleporters and finally bonus tiles.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pizza_delivery.core import LOGGER_NAME
from pizza_delivery.core.errors import SetupError
from pizza_delivery.core.types import Topping
from pizza_delivery.engine.tiles import (
    Crow,
    Empty,
    Grave,
    House,
    ManholeCover,
    Monkey,
    Pig,
    Pizza,
    Start,
    Teleporter,
    Tile,
    Wall,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pizza_delivery.core.player import Player
    from pizza_delivery.core.types import Point
    from pizza_delivery.engine.game import Game
    from pizza_delivery.engine.grid import Grid

logger = logging.getLogger(LOGGER_NAME)

MIN_PLAYERS = 2


def randomize_grid(
    game: Game,
    walls: int = 4,
    graves: int = 6,
    teleporters: int = 3,
    pigs: int = 0,
    monkeys: int = 0,
    crows: int = 0,
    manhole_covers: int = 0,
) -> None:
    """Populate ``game.grid`` and move every player onto their start tile.

    Raises ``SetupError`` when the configuration cannot be satisfied.
    """
    grid = game.grid
    players = game.players

    if len(players) < MIN_PLAYERS:
        msg = f"Need at least {MIN_PLAYERS} players, got {len(players)}"
        raise SetupError(msg)
    if len(players) > len(Topping):
        msg = f"Only {len(Topping)} toppings for {len(players)} players"
        raise SetupError(msg)
    if teleporters == 1:
        msg = "Teleporters come in chains, a single one has nowhere to go"
        raise SetupError(msg)

    place_starts(grid, players)
    place_pizzas(grid, list(Topping)[: len(players)])
    place_many(grid, graves, Grave)
    place_walls(grid, walls)
    place_teleporters(grid, teleporters)

    # Bonus tiles
    for _ in range(pigs):
        place_one(grid, lambda: Pig(parent=True))
        place_one(grid, lambda: Pig(parent=False))
    place_many(grid, monkeys, Monkey)
    place_many(grid, crows, Crow)
    place_many(grid, manhole_covers, ManholeCover)

    if not grid.is_valid(players):
        msg = "Randomized grid failed validation"
        raise SetupError(msg)
    logger.debug(f"Setup: {grid.width}x{grid.height} grid ready for {len(players)} players")


def place_starts(grid: Grid, players: Sequence[Player]) -> None:
    for player in players:
        point = grid.random_point(lambda p, _tile: grid.is_adjacent_empty(p))
        grid[point] = Start(player)
        player.point = point

        for tile in grid.adjacent_tiles(point).values():
            assert isinstance(tile, Empty)
            tile.safe = True
        logger.debug(f"Setup: {player.repr} starts at {grid.point_to_xy(point)}")


def place_pizzas(grid: Grid, toppings: Sequence[Topping]) -> None:
    for topping in toppings:
        pizza_point = place_one(grid, lambda: Pizza(topping))

        def away_from_pizza(point: Point, _tile: Tile) -> bool:
            return grid.is_free_floor(point) and pizza_point not in (
                grid.adjacent_points(point).values()
            )

        house_point = grid.random_point(away_from_pizza)
        grid[house_point] = House(topping)
        logger.debug(
            f"Setup: {topping.label} Pizza at {grid.point_to_xy(pizza_point)}, "
            f"House at {grid.point_to_xy(house_point)}",
        )


def place_walls(grid: Grid, count: int) -> None:
    """Only build walls that keep every open tile reachable."""
    for _ in range(count):
        point = grid.random_point(
            lambda p, _tile: grid.is_free_floor(p) and grid.is_fully_reachable(blocked=p),
        )
        grid[point] = Wall()


def place_teleporters(grid: Grid, count: int) -> None:
    """Link ``count`` teleporters into one cycle."""
    if count == 0:
        return

    points: list[Point] = []
    for _ in range(count):
        points.append(
            grid.random_point(lambda p, _tile: grid.is_free_floor(p) and p not in points),
        )
    for i, point in enumerate(points):
        grid[point] = Teleporter(points[(i + 1) % count])
    logger.debug(f"Setup: teleporter chain {[grid.point_to_xy(p) for p in points]}")


def place_many(grid: Grid, count: int, factory: Callable[[], Tile]) -> None:
    for _ in range(count):
        place_one(grid, factory)


def place_one(grid: Grid, factory: Callable[[], Tile]) -> Point:
    point = grid.random_point(lambda p, _tile: grid.is_free_floor(p))
    grid[point] = factory()
    return point
