"""Hot-seat console player backed by rich prompts."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, override

from rich.console import Console
from rich.prompt import Confirm, Prompt

from pizza_delivery.core.deck import Deck
from pizza_delivery.core.errors import DecisionCancelled
from pizza_delivery.core.player import Player
from pizza_delivery.core.reports import (
    TurnEndReport,
    TurnStartReport,
    WinReport,
)
from pizza_delivery.core.types import DIAGONAL_DIRECTIONS, ORTHOGONAL_DIRECTIONS, Direction
from pizza_delivery.engine.actions import (
    Action,
    AttackAction,
    EndGameAction,
    MoveAction,
    SkipAction,
)
from pizza_delivery.engine.specials import (
    SPECIAL_ACTIONS,
    ActionSpecial,
    DiagonalDirectionSpecial,
    OrthogonalSpecial,
)

if TYPE_CHECKING:
    import random

    from pizza_delivery.core.reports import Report
    from pizza_delivery.core.types import SpecialName

CANCEL = "cancel"

PLAYER_EMOJIS = (
    "🐵", "🐶", "🐺", "🦊", "🐱", "🦁", "🐯", "🐴", "🦄",
    "🐮", "🐷", "🐭", "🐹", "🐰", "🐻", "🐼", "🐸", "🐲",
)  # fmt: skip


@dataclass(eq=False)
class ConsolePlayer(Player):
    emoji: str = "🙂"
    console: Console = field(default_factory=Console, repr=False)

    # --- Decisions ---
    @override
    def handle_turn(self) -> Action:
        while True:
            choice = self._ask(
                f"{self.emoji} What would you like to do?",
                ["move", "attack", "special", "skip", "end"],
            )
            try:
                match choice:
                    case "move":
                        return MoveAction(self, self._ask_direction(ORTHOGONAL_DIRECTIONS))
                    case "attack":
                        return AttackAction(self, self._ask_direction(ORTHOGONAL_DIRECTIONS))
                    case "special":
                        return self._ask_special()
                    case "skip":
                        return SkipAction(self)
                    case _:
                        if Confirm.ask("End the game for everyone?", console=self.console):
                            return EndGameAction(self)
            except DecisionCancelled:
                continue

    @override
    def handle_use_anti_ghost_barrier_special(self) -> bool:
        return Confirm.ask(
            f"{self.emoji} Use AntiGhostBarrier to chase the ghost away?",
            console=self.console,
        )

    @override
    def handle_back_to_start_special(self) -> MoveAction | AttackAction | SkipAction:
        while True:
            choice = self._ask(
                f"{self.emoji} Back at the start. What next?",
                ["move", "attack", "skip"],
            )
            try:
                match choice:
                    case "move":
                        return MoveAction(self, self._ask_direction(ORTHOGONAL_DIRECTIONS))
                    case "attack":
                        return AttackAction(self, self._ask_direction(ORTHOGONAL_DIRECTIONS))
                    case _:
                        return SkipAction(self)
            except DecisionCancelled:
                continue

    def _ask(self, message: str, choices: list[str]) -> str:
        return Prompt.ask(message, choices=choices, console=self.console)

    def _ask_direction(self, directions: tuple[Direction, ...]) -> Direction:
        lookup = {d.label.lower(): d for d in directions}
        choice = self._ask("Which direction?", [*lookup, CANCEL])
        if choice == CANCEL:
            raise DecisionCancelled
        return lookup[choice]

    def _ask_special(self) -> ActionSpecial:
        usable: dict[str, SpecialName] = {
            name.lower(): name for name in SPECIAL_ACTIONS if self.has_special(name)
        }
        if not usable:
            self.console.print("[dim]No specials you can play right now.[/dim]")
            raise DecisionCancelled

        choice = self._ask("Which special?", [*usable, CANCEL])
        if choice == CANCEL:
            raise DecisionCancelled

        special = SPECIAL_ACTIONS[usable[choice]]
        if issubclass(special, DiagonalDirectionSpecial):
            return special(self, self._ask_direction(DIAGONAL_DIRECTIONS))
        if issubclass(special, OrthogonalSpecial):
            return special(self, self._ask_direction(ORTHOGONAL_DIRECTIONS))
        return special(self)

    # --- Reports ---
    @override
    def receive_report(self, report: Report) -> None:
        match report:
            case TurnStartReport(round=round_):
                self.console.rule(f"{self.emoji} round {round_}")
                counts = Counter(self.specials)
                specials = ", ".join(f"{name} x{n}" for name, n in counts.items())
                self.console.print(f"Specials: {specials or 'None'}")
                tokens = ", ".join(self.tokens) or "None"
                self.console.print(f"Tokens: {tokens}")
                pizza = self.topping.label if self.topping is not None else "None"
                self.console.print(f"Pizza: {pizza}")
            case TurnEndReport():
                self._print_survey(report)
            case WinReport(round=round_):
                self.console.print(f"[bold green]{self.emoji} won in round {round_}![/]")
            case _:
                self.console.print(f"{self.emoji} {report.describe()}")

    def _print_survey(self, report: TurnEndReport) -> None:
        walls = ", ".join(d.label for d in sorted(report.walls)) or "None"
        if isinstance(report.near_pizza, frozenset):
            pizza = ", ".join(d.label for d in sorted(report.near_pizza)) or "No"
        else:
            pizza = "Yes" if report.near_pizza else "No"

        self.console.print(f"\n{self.emoji} report")
        self.console.print(f"Adjacent Walls: {walls}")
        self.console.print(f"Near Ghosts: {'Yes' if report.near_ghosts else 'No'}")
        self.console.print(f"Near Pizza: {pizza}")
        self.console.print(f"Near House: {'Yes' if report.near_house else 'No'}")


def make_console_players(
    count: int,
    rng: random.Random,
    console: Console | None = None,
) -> list[ConsolePlayer]:
    """Seat ``count`` players, each with a random animal emoji."""
    console = console or Console()
    emojis: Deck[str] = Deck.from_items(PLAYER_EMOJIS, rng)
    players: list[ConsolePlayer] = []
    for idx in range(count):
        emoji = emojis.draw()
        players.append(
            ConsolePlayer(idx=idx, name=f"Player{idx + 1}", emoji=emoji, console=console),
        )
    return players
