from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, override

from pizza_delivery.core import LOGGER_NAME
from pizza_delivery.core.reports import (
    BumpedIntoGhostReport,
    BumpedIntoWallReport,
    ChaseAwayGhostReport,
    FoundHouseReport,
    FoundManholeCoverReport,
    FoundPigReport,
    FoundPizzaReport,
    GhostNotFoundReport,
    TeleportReport,
    UseSpecialReport,
    WinReport,
)

if TYPE_CHECKING:
    from pizza_delivery.core.player import Player
    from pizza_delivery.core.types import Point, TileKind, Topping
    from pizza_delivery.engine.game import Game
    from pizza_delivery.engine.grid import Grid

logger = logging.getLogger(LOGGER_NAME)


@dataclass(eq=False)
class Tile(ABC):
    """One grid cell. Subclasses decide what moving onto or attacking it does."""

    kind: ClassVar[TileKind]

    # --- Ghosts ---
    @property
    def ghost(self) -> bool:
        return False

    def spawn_ghost(self) -> bool:
        """Place a ghost here. Returns False if this tile cannot hold one."""
        return False

    def clear_ghost(self) -> None:
        return None

    # --- Setup ---
    @abstractmethod
    def is_valid(self, grid: Grid, point: Point) -> bool:
        pass

    # --- Movement ---
    def can_move_to(
        self,
        game: Game,
        player: Player,
        point: Point | None,
        teleport: bool = False,
    ) -> bool:
        return point is not None

    def on_move_to(
        self,
        game: Game,
        player: Player,
        point: Point | None,
        teleport: bool = False,
    ) -> None:
        """Resolve ``player`` entering this tile.

        A walking player stops at a ghost unless they spend an AntiGhostBarrier.
        Teleporting players chase the ghost away for free.
        """
        if point is None or player.point == point:
            return

        if self.ghost:
            if teleport:
                self.clear_ghost()
            elif not self._pass_ghost(game, player):
                return

        player.point = point
        self.on_arrive(game, player, point)

    def _pass_ghost(self, game: Game, player: Player) -> bool:
        game.send_player_report(BumpedIntoGhostReport(player))

        if not player.has_special("AntiGhostBarrier"):
            return False
        if not player.handle_use_anti_ghost_barrier_special():
            return False

        player.remove_special("AntiGhostBarrier")
        game.send_player_report(UseSpecialReport(player, "AntiGhostBarrier"))

        self.clear_ghost()
        game.send_player_report(ChaseAwayGhostReport(player))
        return True

    def on_arrive(self, game: Game, player: Player, point: Point) -> None:
        """Variant effect once the player stands on this tile."""
        _ = game, player, point

    # --- Combat ---
    def on_attack_at(self, game: Game, player: Player, point: Point | None) -> None:
        _ = point
        if self.ghost:
            self.clear_ghost()
            game.send_player_report(ChaseAwayGhostReport(player))
            game.give_player_special(player)
        else:
            game.send_player_report(GhostNotFoundReport(player))

    # --- Turn end survey ---
    def report_as_wall(self) -> bool:
        return False

    def report_as_ghost(self) -> bool:
        return self.ghost

    def report_as_pizza(self) -> bool:
        return False

    def report_as_house(self) -> bool:
        return False


@dataclass(eq=False)
class Empty(Tile):
    """Floor. ``safe`` floor next to a start never receives obstacles."""

    kind: ClassVar[TileKind] = "Empty"
    safe: bool = False
    haunted: bool = False

    @property
    @override
    def ghost(self) -> bool:
        return self.haunted

    @override
    def spawn_ghost(self) -> bool:
        self.haunted = True
        return True

    @override
    def clear_ghost(self) -> None:
        self.haunted = False

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        return True


@dataclass(eq=False)
class Wall(Tile):
    kind: ClassVar[TileKind] = "Wall"

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        return True

    @override
    def can_move_to(
        self,
        game: Game,
        player: Player,
        point: Point | None,
        teleport: bool = False,
    ) -> bool:
        return False

    @override
    def on_move_to(
        self,
        game: Game,
        player: Player,
        point: Point | None,
        teleport: bool = False,
    ) -> None:
        game.send_player_report(BumpedIntoWallReport(player))

    @override
    def report_as_wall(self) -> bool:
        return True


@dataclass(eq=False)
class Border(Wall):
    """Everything outside the grid. Stateless, so one instance serves all lookups."""

    kind: ClassVar[TileKind] = "Border"


@dataclass(eq=False)
class Start(Tile):
    kind: ClassVar[TileKind] = "Start"
    player: Player

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        return all(isinstance(tile, Empty) for tile in grid.adjacent_tiles(point).values())


@dataclass(eq=False)
class Pizza(Tile):
    kind: ClassVar[TileKind] = "Pizza"
    topping: Topping
    found: bool = False

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        return not any(
            isinstance(tile, House) and tile.topping == self.topping
            for tile in grid.adjacent_tiles(point).values()
        )

    @override
    def on_arrive(self, game: Game, player: Player, point: Point) -> None:
        if self.found:
            return
        self.found = True
        if player.topping is not None:
            # Already carrying one, this pizza is wasted
            game.send_player_report(FoundPizzaReport(player, None))
            return

        player.topping = self.topping
        game.spawn_house(self.topping)
        game.send_player_report(FoundPizzaReport(player, self.topping))

    @override
    def report_as_pizza(self) -> bool:
        return not self.found


@dataclass(eq=False)
class House(Tile):
    kind: ClassVar[TileKind] = "House"
    topping: Topping
    spawned: bool = False
    delivered: bool = False

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        adjacent_pizza = any(
            isinstance(tile, Pizza) and tile.topping == self.topping
            for tile in grid.adjacent_tiles(point).values()
        )
        matching = [
            tile
            for tile in grid
            if isinstance(tile, Pizza) and tile.topping == self.topping
        ]
        return not adjacent_pizza and len(matching) == 1

    @override
    def on_arrive(self, game: Game, player: Player, point: Point) -> None:
        if not self.spawned:
            return

        game.send_player_report(FoundHouseReport(player))
        if player.topping is not None and player.topping == self.topping:
            self.delivered = True
            player.won = game.round()
            game.send_player_report(WinReport(player, player.won))

    @override
    def report_as_house(self) -> bool:
        return self.spawned


@dataclass(eq=False)
class Teleporter(Tile):
    kind: ClassVar[TileKind] = "Teleporter"
    next_point: Point

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        return point != self.next_point and isinstance(
            grid.get_or_border(self.next_point),
            Teleporter,
        )

    @override
    def on_arrive(self, game: Game, player: Player, point: Point) -> None:
        player.point = self.next_point
        game.send_player_report(TeleportReport(player))


@dataclass(eq=False)
class Grave(Tile):
    """Starts haunted. Once its ghost is gone it never comes back."""

    kind: ClassVar[TileKind] = "Grave"
    haunted: bool = True

    @property
    @override
    def ghost(self) -> bool:
        return self.haunted

    @override
    def clear_ghost(self) -> None:
        self.haunted = False

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        return True


# --- Bonus tiles ---


@dataclass(eq=False)
class Pig(Tile):
    kind: ClassVar[TileKind] = "Pig"
    parent: bool = True

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        return True

    @override
    def on_arrive(self, game: Game, player: Player, point: Point) -> None:
        game.send_player_report(FoundPigReport(player, self.parent))


@dataclass(eq=False)
class Monkey(Tile):
    """The first visitor learns to sense the direction of nearby pizza."""

    kind: ClassVar[TileKind] = "Monkey"
    claimed: bool = False

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        return True

    @override
    def on_arrive(self, game: Game, player: Player, point: Point) -> None:
        if self.claimed:
            return
        self.claimed = True
        game.give_player_token(player, "Monkey")


@dataclass(eq=False)
class Crow(Tile):
    """Attack it once to get the Crow token and a ride to the nearest house."""

    kind: ClassVar[TileKind] = "Crow"
    claimed: bool = False

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        return True

    @override
    def on_attack_at(self, game: Game, player: Player, point: Point | None) -> None:
        if self.claimed:
            game.send_player_report(GhostNotFoundReport(player))
            return

        self.claimed = True
        game.give_player_token(player, "Crow")

        house_point = game.grid.nearest_house(player.point)
        if house_point is None:
            logger.warning(f"Crow: no house on the grid to carry {player.repr} to")
            return

        game.send_player_report(TeleportReport(player))
        game.grid[house_point].on_move_to(game, player, house_point, teleport=True)


@dataclass(eq=False)
class ManholeCover(Tile):
    """Looks like a pizza from a distance."""

    kind: ClassVar[TileKind] = "ManholeCover"

    @override
    def is_valid(self, grid: Grid, point: Point) -> bool:
        return True

    @override
    def on_arrive(self, game: Game, player: Player, point: Point) -> None:
        game.send_player_report(FoundManholeCoverReport(player))

    @override
    def report_as_pizza(self) -> bool:
        return True
