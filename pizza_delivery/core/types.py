from enum import IntEnum, IntFlag
from typing import Literal


class Direction(IntFlag):
    """Compass directions. Diagonals are the union of their orthogonal parts."""

    NORTH = 1
    EAST = 2
    SOUTH = 4
    WEST = 8
    NORTH_EAST = NORTH | EAST
    SOUTH_EAST = SOUTH | EAST
    SOUTH_WEST = SOUTH | WEST
    NORTH_WEST = NORTH | WEST

    @property
    def label(self) -> str:
        if not self.name:
            return str(self.value)
        return "".join(part.title() for part in self.name.split("_"))


ORTHOGONAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)
DIAGONAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.NORTH_EAST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
    Direction.NORTH_WEST,
)
# Clockwise from north
ALL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.NORTH_EAST,
    Direction.EAST,
    Direction.SOUTH_EAST,
    Direction.SOUTH,
    Direction.SOUTH_WEST,
    Direction.WEST,
    Direction.NORTH_WEST,
)


def is_orthogonal(direction: Direction) -> bool:
    return direction in ORTHOGONAL_DIRECTIONS


def is_diagonal(direction: Direction) -> bool:
    return direction in DIAGONAL_DIRECTIONS


class Topping(IntEnum):
    SHRIMP = 0
    VEGETABLE = 1
    CHEESE = 2

    @property
    def label(self) -> str:
        return self.name.title()


# Flat row-major grid index. None means "no point".
Point = int

SpecialName = Literal[
    "Bishop",
    "Rook",
    "Diagonal",
    "HopStep",
    "PointSymmetric",
    "BackToStart",
    "AntiGhostBarrier",
]

TokenName = Literal[
    "Monkey",
    "Crow",
]

TileKind = Literal[
    "Empty",
    "Wall",
    "Border",
    "Start",
    "Pizza",
    "House",
    "Teleporter",
    "Grave",
    "Pig",
    "Monkey",
    "Crow",
    "ManholeCover",
]
