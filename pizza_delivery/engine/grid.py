from __future__ import annotations

import logging
import random
from collections import deque
from collections.abc import Callable, Collection, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pizza_delivery.core import LOGGER_NAME
from pizza_delivery.core.errors import NoSuchPointError, SetupError
from pizza_delivery.core.types import (
    ALL_DIRECTIONS,
    ORTHOGONAL_DIRECTIONS,
    Direction,
    Point,
    Topping,
)
from pizza_delivery.engine.tiles import Border, Empty, Grave, House, Start, Tile, Wall

if TYPE_CHECKING:
    from pizza_delivery.core.player import Player

logger = logging.getLogger(LOGGER_NAME)

PointPredicate = Callable[[Point, Tile], bool]


@dataclass
class Grid:
    """Fixed-size board stored as a flat row-major list of tiles.

    Every lookup outside the board (or at ``None``) yields the border tile, so
    spatial queries never fail.
    """

    width: int = 7
    height: int = 7
    rng: random.Random = field(default_factory=random.Random, repr=False)
    tiles: list[Tile] = field(init=False)
    border: Border = field(init=False, default_factory=Border, repr=False)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            msg = f"Grid must be at least 1x1, got {self.width}x{self.height}"
            raise SetupError(msg)
        self.tiles = [Empty() for _ in range(self.width * self.height)]

    # --- Container protocol ---
    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def __getitem__(self, point: Point) -> Tile:
        if not self.contains(point):
            msg = f"Point {point} is outside the {self.width}x{self.height} grid"
            raise IndexError(msg)
        return self.tiles[point]

    def __setitem__(self, point: Point, tile: Tile) -> None:
        if not self.contains(point):
            msg = f"Point {point} is outside the {self.width}x{self.height} grid"
            raise IndexError(msg)
        self.tiles[point] = tile

    def points(self) -> range:
        return range(len(self.tiles))

    def contains(self, point: Point | None) -> bool:
        return point is not None and 0 <= point < len(self.tiles)

    # --- Geometry ---
    def point_from_xy(self, x: int, y: int) -> Point | None:
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return None
        return y * self.width + x

    def point_to_xy(self, point: Point) -> tuple[int, int]:
        y, x = divmod(point, self.width)
        return x, y

    def offset_point(
        self,
        point: Point | None,
        direction: Direction,
        offset: int = 1,
    ) -> Point | None:
        if not self.contains(point):
            return None
        assert point is not None
        x, y = self.point_to_xy(point)
        dx = bool(direction & Direction.EAST) - bool(direction & Direction.WEST)
        dy = bool(direction & Direction.SOUTH) - bool(direction & Direction.NORTH)
        return self.point_from_xy(x + dx * offset, y + dy * offset)

    def mirror_point(self, point: Point) -> Point | None:
        """Reflect through the grid center."""
        x, y = self.point_to_xy(point)
        return self.point_from_xy(self.width - x - 1, self.height - y - 1)

    def manhattan_distance(self, a: Point, b: Point) -> int:
        ax, ay = self.point_to_xy(a)
        bx, by = self.point_to_xy(b)
        return abs(ax - bx) + abs(ay - by)

    def adjacent_points(self, point: Point | None) -> dict[Direction, Point | None]:
        return {d: self.offset_point(point, d) for d in ORTHOGONAL_DIRECTIONS}

    def adjacent_tiles(self, point: Point | None) -> dict[Direction, Tile]:
        return {d: self.get_or_border(p) for d, p in self.adjacent_points(point).items()}

    def surrounding_points(self, point: Point | None) -> dict[Direction, Point | None]:
        return {d: self.offset_point(point, d) for d in ALL_DIRECTIONS}

    def surrounding_tiles(self, point: Point | None) -> dict[Direction, Tile]:
        return {
            d: self.get_or_border(p) for d, p in self.surrounding_points(point).items()
        }

    def get_or_border(self, point: Point | None) -> Tile:
        if not self.contains(point):
            return self.border
        assert point is not None
        return self.tiles[point]

    # --- Queries ---
    def random_point(self, predicate: PointPredicate) -> Point:
        candidates = [p for p, tile in enumerate(self.tiles) if predicate(p, tile)]
        if not candidates:
            msg = "Could not find a point matching the placement rule"
            raise NoSuchPointError(msg)
        return self.rng.choice(candidates)

    def is_free_floor(self, point: Point) -> bool:
        """Empty floor that may still receive an obstacle."""
        tile = self.get_or_border(point)
        return isinstance(tile, Empty) and not tile.safe

    def is_adjacent_empty(self, point: Point) -> bool:
        return self.is_free_floor(point) and all(
            isinstance(tile, Empty) for tile in self.adjacent_tiles(point).values()
        )

    def find_start(self, player: Player) -> Point:
        for point, tile in enumerate(self.tiles):
            if isinstance(tile, Start) and tile.player is player:
                return point
        msg = f"No start tile for {player.repr}"
        raise LookupError(msg)

    def houses(self) -> list[tuple[Point, House]]:
        return [(p, t) for p, t in enumerate(self.tiles) if isinstance(t, House)]

    def find_house(self, topping: Topping) -> Point:
        for point, house in self.houses():
            if house.topping == topping:
                return point
        msg = f"No house for {topping.label}"
        raise LookupError(msg)

    def nearest_house(self, point: Point, *, prefer_undelivered: bool = True) -> Point | None:
        """Closest house by Manhattan distance. Ties go to the lower topping."""
        houses = self.houses()
        if prefer_undelivered:
            houses = [(p, h) for p, h in houses if not h.delivered] or houses
        if not houses:
            return None
        best = min(
            houses,
            key=lambda item: (self.manhattan_distance(point, item[0]), item[1].topping),
        )
        return best[0]

    def is_valid(self, players: Collection[Player]) -> bool:
        starts = [tile.player for tile in self.tiles if isinstance(tile, Start)]
        return all(
            tile.is_valid(self, point) for point, tile in enumerate(self.tiles)
        ) and all(any(player is s for s in starts) for player in players)

    def is_fully_reachable(self, blocked: Point | None = None) -> bool:
        """Whether every non-wall point can be walked to from every other one.

        ``blocked`` is treated as a wall, to test a placement before making it.
        """

        def open_(p: Point) -> bool:
            return p != blocked and not isinstance(self.tiles[p], Wall)

        open_points = [p for p in self.points() if open_(p)]
        if not open_points:
            return True

        seen = {open_points[0]}
        queue = deque(seen)
        while queue:
            current = queue.popleft()
            for neighbour in self.adjacent_points(current).values():
                if neighbour is None or neighbour in seen or not open_(neighbour):
                    continue
                seen.add(neighbour)
                queue.append(neighbour)
        return len(seen) == len(open_points)

    # --- Mutation ---
    def spawn_house(self, topping: Topping, occupied: Collection[Point] = ()) -> Point:
        """Reveal the house for ``topping`` and surround it with ghosts.

        Graves and tiles with a player on them are skipped.
        """
        house_point = self.find_house(topping)
        house = self.tiles[house_point]
        assert isinstance(house, House)

        spawned = 0
        for point in self.surrounding_points(house_point).values():
            if point is None or point in occupied:
                continue
            tile = self.tiles[point]
            if isinstance(tile, Grave):
                continue
            if tile.spawn_ghost():
                spawned += 1

        house.spawned = True
        logger.debug(f"Grid: {topping.label} house at {house_point} spawned {spawned} ghosts")
        return house_point
