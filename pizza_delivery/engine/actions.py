from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, override

from pizza_delivery.core.errors import IllegalActionError
from pizza_delivery.core.reports import (
    AttackReport,
    EndGameReport,
    MoveReport,
    SkipReport,
)
from pizza_delivery.core.types import Direction, is_orthogonal

if TYPE_CHECKING:
    from pizza_delivery.core.player import Player
    from pizza_delivery.engine.game import Game


class FollowUp(Enum):
    """A decision the game must request before the turn can finish."""

    BACK_TO_START = auto()


@dataclass(frozen=True)
class Action(ABC):
    """What a player does with their turn."""

    player: Player

    @abstractmethod
    def resolve(self, game: Game) -> FollowUp | None:
        """Apply the action. Returns a follow-up request, if any."""


@dataclass(frozen=True)
class SkipAction(Action):
    @override
    def resolve(self, game: Game) -> FollowUp | None:
        game.send_player_report(SkipReport(self.player))
        return None


@dataclass(frozen=True)
class EndGameAction(Action):
    """Stop the match after this turn."""

    @override
    def resolve(self, game: Game) -> FollowUp | None:
        game.send_player_report(EndGameReport(self.player))
        game.end_game()
        return None


@dataclass(frozen=True)
class DirectedAction(Action, ABC):
    direction: Direction

    def __post_init__(self) -> None:
        if not is_orthogonal(self.direction):
            msg = f"{self.__class__.__name__} needs an orthogonal direction, got {self.direction!r}"
            raise IllegalActionError(msg)

    def target_point(self, game: Game) -> int | None:
        return game.grid.offset_point(self.player.point, self.direction)


@dataclass(frozen=True)
class MoveAction(DirectedAction):
    @override
    def resolve(self, game: Game) -> FollowUp | None:
        game.send_player_report(MoveReport(self.player, self.direction))

        point = self.target_point(game)
        tile = game.grid.get_or_border(point)
        tile.on_move_to(game, self.player, point, teleport=False)
        return None


@dataclass(frozen=True)
class AttackAction(DirectedAction):
    @override
    def resolve(self, game: Game) -> FollowUp | None:
        game.send_player_report(AttackReport(self.player, self.direction))

        point = self.target_point(game)
        tile = game.grid.get_or_border(point)
        tile.on_attack_at(game, self.player, point)
        return None
