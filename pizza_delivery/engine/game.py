from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pizza_delivery.core import LOGGER_NAME
from pizza_delivery.core.deck import Deck
from pizza_delivery.core.errors import (
    AllPlayersWon,
    DeckEmptyError,
    GameOver,
    IllegalActionError,
    MaxRoundsReached,
    SetupError,
)
from pizza_delivery.core.reports import (
    ReceiveSpecialReport,
    ReceiveTokenReport,
    Report,
    TurnEndReport,
    TurnStartReport,
)
from pizza_delivery.engine.actions import (
    Action,
    AttackAction,
    FollowUp,
    MoveAction,
    SkipAction,
)
from pizza_delivery.engine.logging import ContextFilter, LogContext
from pizza_delivery.engine.specials import ActionSpecial

if TYPE_CHECKING:
    from pizza_delivery.core.player import Player
    from pizza_delivery.core.types import Point, SpecialName, TokenName, Topping
    from pizza_delivery.engine.grid import Grid


@dataclass
class Game:
    """Owns the grid, the specials deck and the turn counter.

    Each ``loop()`` call plays exactly one turn. The game ends by raising a
    ``GameOver`` subclass, which ``play()`` turns into a return value.
    """

    players: list[Player]
    grid: Grid
    specials: Deck[SpecialName] = field(default_factory=Deck)
    max_rounds: int = 20
    turn: int = -1
    history: list[Report] = field(default_factory=list, repr=False)
    log_context: LogContext = field(default_factory=LogContext, repr=False)

    verbose: bool = True
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.players:
            msg = "A game needs at least one player"
            raise SetupError(msg)
        if self.max_rounds < 1:
            msg = f"max_rounds must be positive, got {self.max_rounds}"
            raise SetupError(msg)

        base = logging.getLogger(LOGGER_NAME)
        self._logger = base.getChild(f"game.{id(self)}")
        if self.verbose:
            self._logger.addFilter(ContextFilter(self))

    # --- Turn bookkeeping ---
    def round(self) -> int:
        return self.turn // len(self.players) + 1

    def current_player(self) -> Player:
        return self.players[self.turn % len(self.players)]

    def end_game(self) -> None:
        """Jump to the last turn so the next ``loop()`` hits the round limit."""
        self.turn = self.max_rounds * len(self.players) - 1

    # --- Main loop ---
    def loop(self) -> None:
        self.turn += 1

        if all(player.has_won for player in self.players):
            raise AllPlayersWon(AllPlayersWon.reason)
        if self.round() > self.max_rounds:
            raise MaxRoundsReached(MaxRoundsReached.reason)

        player = self.current_player()
        if player.has_won:
            self.log_debug(f"{player.repr} already won, skipping turn")
            return

        self.log_context.start_turn_log(self.round(), player.repr)
        self.send_player_report(TurnStartReport(player, self.round()))

        action = player.handle_turn()
        self.resolve_action(player, action)

        self.send_player_turn_end_report(player)

    def play(self, max_turns: int | None = None) -> str | None:
        """Run turns until the game ends. Returns the reason, or None if cut short."""
        turns = 0
        while max_turns is None or turns < max_turns:
            try:
                self.loop()
            except GameOver as e:
                self.log_info(f"Game over: {e.reason}")
                return e.reason
            turns += 1
        return None

    def resolve_action(self, player: Player, action: Action) -> None:
        """Check and resolve one action, then any follow-up it requests.

        A follow-up is requested after the first action has fully committed, so
        rejecting it leaves that action in place. The follow-up itself is checked
        before it touches anything.
        """
        self._check_entitled(player, action)
        follow_up = action.resolve(self)

        if follow_up is FollowUp.BACK_TO_START:
            next_action = player.handle_back_to_start_special()
            if not isinstance(next_action, MoveAction | AttackAction | SkipAction):
                msg = (
                    f"{player.repr} must follow BackToStart with a move, attack or "
                    f"skip, got {next_action.__class__.__name__}"
                )
                raise IllegalActionError(msg)
            self._check_entitled(player, next_action)
            _ = next_action.resolve(self)

    def _check_entitled(self, player: Player, action: Action) -> None:
        if action.player is not player:
            msg = f"{player.repr} cannot play an action for {action.player.repr}"
            raise IllegalActionError(msg)
        if isinstance(action, ActionSpecial) and not player.has_special(action.name):
            msg = f"{player.repr} does not hold a {action.name} special"
            raise IllegalActionError(msg)

    # --- Effects called by tiles and actions ---
    def give_player_special(self, player: Player) -> None:
        try:
            special = self.specials.draw()
        except DeckEmptyError:
            self.log_warning(f"Specials deck is exhausted, {player.repr} receives nothing")
            return

        player.add_special(special)
        self.send_player_report(ReceiveSpecialReport(player, special))

    def give_player_token(self, player: Player, token: TokenName) -> None:
        if player.has_token(token):
            return
        player.add_token(token)
        self.send_player_report(ReceiveTokenReport(player, token))

    def spawn_house(self, topping: Topping) -> Point:
        occupied = {player.point for player in self.players}
        return self.grid.spawn_house(topping, occupied)

    # --- Reports ---
    def survey(self, player: Player) -> TurnEndReport:
        """What the player can sense from where they stand. Mutates nothing."""
        point = player.point
        surrounding = self.grid.surrounding_tiles(point)

        walls = frozenset(
            direction
            for direction, tile in self.grid.adjacent_tiles(point).items()
            if tile.report_as_wall()
        )
        near_ghosts = any(tile.report_as_ghost() for tile in surrounding.values())
        near_house = any(tile.report_as_house() for tile in surrounding.values())

        near_pizza: bool | frozenset
        if player.has_token("Monkey"):
            near_pizza = frozenset(
                direction
                for direction, tile in surrounding.items()
                if tile.report_as_pizza()
            )
        else:
            near_pizza = any(tile.report_as_pizza() for tile in surrounding.values())

        return TurnEndReport(player, walls, near_ghosts, near_pizza, near_house)

    def send_player_turn_end_report(self, player: Player) -> None:
        self.send_player_report(self.survey(player))

    def send_player_report(self, report: Report) -> None:
        self.history.append(report)
        self.log_info(report.describe())
        self.deliver_report(report)

    def deliver_report(self, report: Report) -> None:
        """Hand a report to its player. Override to route reports elsewhere."""
        report.player.receive_report(report)

    def standings(self) -> list[Player]:
        """Winners by round, then everyone else in seat order."""
        return sorted(
            self.players,
            key=lambda p: (p.won is None, p.won or 0, p.idx),
        )

    # -- Logging --
    def _log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        """Core logging helper; respects game verbosity."""
        if not self.verbose:
            return
        self._logger.log(level, msg, *args, **kwargs)

    def log_debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def log_info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def log_warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)
