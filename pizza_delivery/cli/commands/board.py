from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path  # cappa needs this at runtime
from typing import Annotated

import cappa
from rich.console import Console

from pizza_delivery.cli.console import make_console_players
from pizza_delivery.cli.converters import load_config, validate_player_count
from pizza_delivery.cli.render import render_grid
from pizza_delivery.core.errors import SetupError
from pizza_delivery.engine.logging import configure_logging
from pizza_delivery.engine.setup import build_game


@cappa.command(name="board", help="Generate a random board and print it.")
@dataclass
class BoardCommand:
    players: Annotated[
        int,
        cappa.Arg(
            short="-p",
            long="--players",
            parse=validate_player_count,
            help="Number of players.",
        ),
    ] = 3
    seed: Annotated[
        int | None,
        cappa.Arg(short="-s", long="--seed", help="RNG seed."),
    ] = None
    config_file: Annotated[
        Path | None,
        cappa.Arg(short="-c", long="--config", help="Path to TOML config file."),
    ] = None
    debug: Annotated[
        bool,
        cappa.Arg(short="-d", long="--debug", help="Log every placement step."),
    ] = False

    def __call__(self) -> None:
        configure_logging(logging.DEBUG if self.debug else logging.WARNING)

        config = load_config(self.config_file, seed=self.seed)
        if config.seed is None:
            config = config.with_overrides(seed=random.randint(0, 1_000_000))
        rng = random.Random(config.seed)

        console = Console()
        players = make_console_players(self.players, rng, console)
        try:
            game = build_game(config, players, rng)
        except SetupError as e:
            msg = f"Could not set up the board: {e}"
            raise cappa.Exit(msg, code=1) from e

        console.print(f"[dim]{config.repr}[/dim]")
        console.print(render_grid(game.grid, players))
        for player in players:
            console.print(f"{player.emoji} {player.name}: {', '.join(player.specials) or 'no specials'}")
