from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, override

if TYPE_CHECKING:
    from pizza_delivery.core.player import Player
    from pizza_delivery.core.types import Direction, SpecialName, TokenName, Topping


@dataclass(frozen=True)
class Report:
    """Something observable that happened to ``player``."""

    player: Player

    def describe(self) -> str:
        return f"{self.player.repr} {self.__class__.__name__}"


# --- Turn boundaries ---


@dataclass(frozen=True)
class TurnStartReport(Report):
    round: int

    @override
    def describe(self) -> str:
        return f"=== {self.player.repr} round {self.round} ==="


@dataclass(frozen=True)
class TurnEndReport(Report):
    """Read-only survey of the player's surroundings at the end of the turn.

    ``near_pizza`` is a plain flag, or the set of directions holding a pizza when
    the player owns the Monkey token.
    """

    walls: frozenset[Direction]
    near_ghosts: bool
    near_pizza: bool | frozenset[Direction]
    near_house: bool

    @override
    def describe(self) -> str:
        walls = ", ".join(d.label for d in sorted(self.walls)) or "None"
        if isinstance(self.near_pizza, frozenset):
            pizza = ", ".join(d.label for d in sorted(self.near_pizza)) or "No"
        else:
            pizza = "Yes" if self.near_pizza else "No"
        return (
            f"{self.player.repr} report: walls={walls} "
            f"ghosts={'Yes' if self.near_ghosts else 'No'} "
            f"pizza={pizza} house={'Yes' if self.near_house else 'No'}"
        )


@dataclass(frozen=True)
class WinReport(Report):
    round: int

    @override
    def describe(self) -> str:
        return f"!!! {self.player.repr} won in round {self.round} !!!"


# --- Inventory ---


@dataclass(frozen=True)
class ReceiveSpecialReport(Report):
    special: SpecialName

    @override
    def describe(self) -> str:
        return f"{self.player.repr} received special {self.special}"


@dataclass(frozen=True)
class UseSpecialReport(Report):
    special: SpecialName

    @override
    def describe(self) -> str:
        return f"{self.player.repr} used special {self.special}"


@dataclass(frozen=True)
class ReceiveTokenReport(Report):
    token: TokenName

    @override
    def describe(self) -> str:
        return f"{self.player.repr} received token {self.token}"


# --- Actions ---


@dataclass(frozen=True)
class SkipReport(Report):
    @override
    def describe(self) -> str:
        return f"{self.player.repr} skipped"


@dataclass(frozen=True)
class EndGameReport(Report):
    @override
    def describe(self) -> str:
        return f"{self.player.repr} ended the game"


@dataclass(frozen=True)
class MoveReport(Report):
    direction: Direction

    @override
    def describe(self) -> str:
        return f"{self.player.repr} Move {self.direction.label}"


@dataclass(frozen=True)
class AttackReport(Report):
    direction: Direction

    @override
    def describe(self) -> str:
        return f"{self.player.repr} Attack {self.direction.label}"


@dataclass(frozen=True)
class TeleportMoveReport(Report):
    direction: Direction
    count: int

    @override
    def describe(self) -> str:
        return f"{self.player.repr} Teleport {self.count} spaces {self.direction.label}"


@dataclass(frozen=True)
class DiagonalMoveReport(Report):
    direction: Direction

    @override
    def describe(self) -> str:
        return f"{self.player.repr} Move {self.direction.label}"


@dataclass(frozen=True)
class BackToStartReport(Report):
    @override
    def describe(self) -> str:
        return f"{self.player.repr} Teleport back to the start"


@dataclass(frozen=True)
class TeleportReport(Report):
    @override
    def describe(self) -> str:
        return f"{self.player.repr} was teleported"


# --- Outcomes ---


@dataclass(frozen=True)
class FoundPizzaReport(Report):
    """``topping`` is None when the player already carried a pizza."""

    topping: Topping | None

    @override
    def describe(self) -> str:
        if self.topping is None:
            return f"{self.player.repr} found a pizza but cannot carry it"
        return f"{self.player.repr} found a {self.topping.label} pizza"


@dataclass(frozen=True)
class FoundHouseReport(Report):
    @override
    def describe(self) -> str:
        return f"{self.player.repr} found a house"


@dataclass(frozen=True)
class FoundPigReport(Report):
    parent: bool

    @override
    def describe(self) -> str:
        kind = "a parent pig" if self.parent else "a piglet"
        return f"{self.player.repr} found {kind}"


@dataclass(frozen=True)
class FoundManholeCoverReport(Report):
    @override
    def describe(self) -> str:
        return f"{self.player.repr} found a manhole cover. No pizza here"


@dataclass(frozen=True)
class BumpedIntoWallReport(Report):
    @override
    def describe(self) -> str:
        return f"{self.player.repr} bumped into a wall"


@dataclass(frozen=True)
class BumpedIntoGhostReport(Report):
    @override
    def describe(self) -> str:
        return f"{self.player.repr} bumped into a ghost"


@dataclass(frozen=True)
class ChaseAwayGhostReport(Report):
    @override
    def describe(self) -> str:
        return f"{self.player.repr} chased away a ghost"


@dataclass(frozen=True)
class GhostNotFoundReport(Report):
    @override
    def describe(self) -> str:
        return f"{self.player.repr} attacked but found no ghost"
