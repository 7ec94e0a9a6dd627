from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pizza_delivery.core.reports import Report
    from pizza_delivery.core.types import Point, SpecialName, TokenName, Topping
    from pizza_delivery.engine.actions import (
        Action,
        AttackAction,
        MoveAction,
        SkipAction,
    )


@dataclass(eq=False)
class Player(ABC):
    """A participant: mutable game state plus the decisions the engine asks for.

    The engine never cares where decisions come from. Console prompts, scripts
    and test doubles all implement the same four methods.
    """

    idx: int
    name: str
    point: Point = -1
    topping: Topping | None = None
    specials: list[SpecialName] = field(default_factory=list)
    tokens: list[TokenName] = field(default_factory=list)
    won: int | None = None

    @property
    def repr(self) -> str:
        return f"{self.idx}:{self.name}"

    @property
    def has_won(self) -> bool:
        return self.won is not None

    # --- Inventory ---
    def has_special(self, special: SpecialName) -> bool:
        return special in self.specials

    def count_special(self, special: SpecialName) -> int:
        return self.specials.count(special)

    def add_special(self, special: SpecialName) -> None:
        self.specials.append(special)

    def remove_special(self, special: SpecialName) -> bool:
        """Remove one copy. Returns False if the player held none."""
        try:
            self.specials.remove(special)
        except ValueError:
            return False
        return True

    def has_token(self, token: TokenName) -> bool:
        return token in self.tokens

    def add_token(self, token: TokenName) -> None:
        self.tokens.append(token)

    # --- Decisions ---
    @abstractmethod
    def handle_turn(self) -> Action:
        """Choose this turn's action: move, attack, special, skip or end game."""

    @abstractmethod
    def handle_use_anti_ghost_barrier_special(self) -> bool:
        """Asked after bumping into a ghost while holding an AntiGhostBarrier."""

    @abstractmethod
    def handle_back_to_start_special(self) -> MoveAction | AttackAction | SkipAction:
        """Follow-up action after BackToStart relocated the player."""

    @abstractmethod
    def receive_report(self, report: Report) -> None:
        pass
