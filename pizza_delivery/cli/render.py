from __future__ import annotations

from typing import TYPE_CHECKING

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
    from collections.abc import Sequence

    from pizza_delivery.cli.console import ConsolePlayer
    from pizza_delivery.engine.grid import Grid

GHOST = "👻"


def tile_emoji(tile: Tile) -> str:
    match tile:
        case Empty():
            return "🆓"
        case Start():
            return "👣"
        case Teleporter():
            return "🌀"
        case Grave():
            return "⚰️"
        case House(spawned=spawned):
            return "🏠" if spawned else "🚧"
        case Pizza(found=found):
            return "🥡" if found else "🍕"
        case Pig(parent=parent):
            return "🐷" if parent else "🐽"
        case Monkey(claimed=claimed):
            return "🆓" if claimed else "🐒"
        case Crow():
            return "🐦"
        case ManholeCover():
            return "⭕"
        case Wall():
            return "⛔"
        case _:
            msg = f"No emoji for {tile.__class__.__name__}"
            raise ValueError(msg)


def render_grid(grid: Grid, players: Sequence[ConsolePlayer]) -> str:
    """One emoji per tile. Players are drawn on top of ghosts, ghosts on top of tiles."""
    cells: list[str] = []
    for point, tile in enumerate(grid):
        player = next((p for p in players if p.point == point), None)
        if player is not None:
            cells.append(player.emoji)
        elif tile.ghost:
            cells.append(GHOST)
        else:
            cells.append(tile_emoji(tile))

    rows = [
        " ".join(cells[start : start + grid.width])
        for start in range(0, len(cells), grid.width)
    ]
    return "\n".join(rows)
