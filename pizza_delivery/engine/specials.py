from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, override

from pizza_delivery.core.errors import IllegalActionError
from pizza_delivery.core.reports import (
    BackToStartReport,
    DiagonalMoveReport,
    TeleportMoveReport,
    TeleportReport,
    UseSpecialReport,
)
from pizza_delivery.core.types import Direction, is_diagonal, is_orthogonal
from pizza_delivery.engine.actions import Action, FollowUp

if TYPE_CHECKING:
    from pizza_delivery.core.types import Point, SpecialName
    from pizza_delivery.engine.game import Game


@dataclass(frozen=True)
class ActionSpecial(Action, ABC):
    """A special ability used as the turn's action.

    The special is spent before its effect runs, so it is gone even if the
    effect ends against a wall.
    """

    name: ClassVar[SpecialName]

    @override
    def resolve(self, game: Game) -> FollowUp | None:
        if not self.player.remove_special(self.name):
            msg = f"{self.player.repr} does not hold a {self.name} special"
            raise IllegalActionError(msg)
        game.send_player_report(UseSpecialReport(self.player, self.name))
        return self.perform(game)

    @abstractmethod
    def perform(self, game: Game) -> FollowUp | None:
        pass

    def land(self, game: Game, point: Point | None) -> None:
        """Teleport-style landing. Ghosts on the destination are chased off quietly."""
        tile = game.grid.get_or_border(point)
        tile.on_move_to(game, self.player, point, teleport=True)


@dataclass(frozen=True)
class DirectedSpecial(ActionSpecial, ABC):
    """A special aimed in one direction."""

    direction: Direction

    def slide_distance(self, game: Game) -> int:
        """How many tiles a slide covers before the next one cannot be entered."""
        grid = game.grid
        limit = max(grid.width, grid.height)

        distance = 0
        while distance < limit:
            point = grid.offset_point(self.player.point, self.direction, distance + 1)
            tile = grid.get_or_border(point)
            if not tile.can_move_to(game, self.player, point, teleport=True):
                break
            distance += 1
        return distance

    def slide(self, game: Game) -> None:
        distance = self.slide_distance(game)
        game.send_player_report(TeleportMoveReport(self.player, self.direction, distance))

        # A zero slide still walks into the blocking tile to report the bump
        point = game.grid.offset_point(self.player.point, self.direction, max(distance, 1))
        self.land(game, point)


@dataclass(frozen=True)
class OrthogonalSpecial(DirectedSpecial, ABC):
    def __post_init__(self) -> None:
        if not is_orthogonal(self.direction):
            msg = f"{self.name} needs an orthogonal direction, got {self.direction!r}"
            raise IllegalActionError(msg)


@dataclass(frozen=True)
class DiagonalDirectionSpecial(DirectedSpecial, ABC):
    def __post_init__(self) -> None:
        if not is_diagonal(self.direction):
            msg = f"{self.name} needs a diagonal direction, got {self.direction!r}"
            raise IllegalActionError(msg)


@dataclass(frozen=True)
class BishopSpecial(DiagonalDirectionSpecial):
    name: ClassVar[SpecialName] = "Bishop"

    @override
    def perform(self, game: Game) -> FollowUp | None:
        self.slide(game)
        return None


@dataclass(frozen=True)
class RookSpecial(OrthogonalSpecial):
    name: ClassVar[SpecialName] = "Rook"

    @override
    def perform(self, game: Game) -> FollowUp | None:
        self.slide(game)
        return None


@dataclass(frozen=True)
class DiagonalSpecial(DiagonalDirectionSpecial):
    name: ClassVar[SpecialName] = "Diagonal"

    @override
    def perform(self, game: Game) -> FollowUp | None:
        game.send_player_report(DiagonalMoveReport(self.player, self.direction))
        self.land(game, game.grid.offset_point(self.player.point, self.direction))
        return None


@dataclass(frozen=True)
class HopStepSpecial(OrthogonalSpecial):
    """Jump exactly two tiles, over whatever is in between."""

    name: ClassVar[SpecialName] = "HopStep"

    @override
    def perform(self, game: Game) -> FollowUp | None:
        game.send_player_report(TeleportMoveReport(self.player, self.direction, 2))
        self.land(game, game.grid.offset_point(self.player.point, self.direction, 2))
        return None


@dataclass(frozen=True)
class PointSymmetricSpecial(ActionSpecial):
    name: ClassVar[SpecialName] = "PointSymmetric"

    @override
    def perform(self, game: Game) -> FollowUp | None:
        game.send_player_report(TeleportReport(self.player))
        self.land(game, game.grid.mirror_point(self.player.point))
        return None


@dataclass(frozen=True)
class BackToStartSpecial(ActionSpecial):
    """Return to your own start, then take one more move, attack or skip."""

    name: ClassVar[SpecialName] = "BackToStart"

    @override
    def perform(self, game: Game) -> FollowUp | None:
        start = game.grid.find_start(self.player)
        game.send_player_report(BackToStartReport(self.player))
        self.land(game, start)
        return FollowUp.BACK_TO_START


class AntiGhostBarrierSpecial:
    """Marker only. Checked, never resolved, when a move bumps into a ghost."""

    name: ClassVar[SpecialName] = "AntiGhostBarrier"


SPECIAL_ACTIONS: dict[SpecialName, type[ActionSpecial]] = {
    cls.name: cls
    for cls in (
        BishopSpecial,
        RookSpecial,
        DiagonalSpecial,
        HopStepSpecial,
        PointSymmetricSpecial,
        BackToStartSpecial,
    )
}

ALL_SPECIALS: tuple[SpecialName, ...] = (
    *SPECIAL_ACTIONS,
    AntiGhostBarrierSpecial.name,
)
