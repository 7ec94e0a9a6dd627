from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from pizza_delivery.core import LOGGER_NAME
from pizza_delivery.core.deck import Deck
from pizza_delivery.core.errors import SetupError
from pizza_delivery.engine.game import Game
from pizza_delivery.engine.grid import Grid
from pizza_delivery.engine.randomizer import randomize_grid
from pizza_delivery.engine.specials import ALL_SPECIALS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pizza_delivery.config import GameConfig
    from pizza_delivery.core.player import Player

logger = logging.getLogger(LOGGER_NAME)


def deal_starting_specials(
    players: Sequence[Player],
    count: int,
    rng: random.Random,
) -> None:
    """Give each player ``count`` specials from a starter deck holding one of each."""
    if count * len(players) > len(ALL_SPECIALS):
        msg = (
            f"Starter deck holds {len(ALL_SPECIALS)} specials, "
            f"cannot deal {count} to each of {len(players)} players"
        )
        raise SetupError(msg)

    starter: Deck = Deck.from_items(ALL_SPECIALS, rng)
    for player in players:
        for _ in range(count):
            player.add_special(starter.draw())
        logger.debug(f"Setup: {player.repr} starts with {', '.join(player.specials)}")


def build_game(
    config: GameConfig,
    players: Sequence[Player],
    rng: random.Random | None = None,
    *,
    verbose: bool = True,
) -> Game:
    """Create a ready-to-play game from a configuration."""
    config.validate()
    rng = rng or random.Random(config.seed)

    grid = Grid(config.width, config.height, rng=rng)
    specials: Deck = Deck.from_items(config.specials, rng)
    game = Game(
        list(players),
        grid,
        specials,
        max_rounds=config.max_rounds,
        verbose=verbose,
    )

    deal_starting_specials(game.players, config.starting_specials, rng)
    randomize_grid(
        game,
        walls=config.walls,
        graves=config.graves,
        teleporters=config.teleporters,
        pigs=config.pigs,
        monkeys=config.monkeys,
        crows=config.crows,
        manhole_covers=config.manhole_covers,
    )
    return game
