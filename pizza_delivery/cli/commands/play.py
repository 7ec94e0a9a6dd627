"""CLI command for an interactive hot-seat game."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path  # cappa needs this at runtime
from typing import TYPE_CHECKING, Annotated

import cappa
from rich.console import Console

from pizza_delivery.cli.console import ConsolePlayer, make_console_players
from pizza_delivery.cli.converters import load_config, validate_player_count
from pizza_delivery.cli.render import render_grid
from pizza_delivery.core.errors import GameOver, SetupError
from pizza_delivery.engine.logging import configure_logging
from pizza_delivery.engine.setup import build_game

if TYPE_CHECKING:
    from pizza_delivery.engine.game import Game


def print_standings(console: Console, game: Game, players: list[ConsolePlayer]) -> None:
    console.rule("Results")
    for player in game.standings():
        emoji = next(p.emoji for p in players if p is player)
        if player.won is None:
            console.print(f"{emoji} {player.name}: no delivery")
        else:
            console.print(f"{emoji} {player.name}: delivered in round {player.won}")


def run_console_game(game: Game, players: list[ConsolePlayer], *, show_map: bool) -> str:
    console = players[0].console
    if show_map:
        console.print(render_grid(game.grid, players))

    while True:
        try:
            game.loop()
        except GameOver as e:
            console.print(f"\n[bold]Game over:[/bold] {e.reason}")
            print_standings(console, game, players)
            return e.reason
        if show_map:
            console.print()
            console.print(render_grid(game.grid, players))


@cappa.command(name="play", help="Play a hot-seat game in the terminal.")
@dataclass
class PlayCommand:
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
    max_rounds: Annotated[
        int | None,
        cappa.Arg(long="--max-rounds", help="Rounds before the game ends."),
    ] = None
    show_map: Annotated[
        bool,
        cappa.Arg(short="-m", long="--map", help="Show the map after every turn."),
    ] = False
    verbose: Annotated[
        bool,
        cappa.Arg(short="-v", long="--verbose", help="Also log every report."),
    ] = False

    def __call__(self) -> None:
        configure_logging(logging.INFO if self.verbose else logging.WARNING)

        config = load_config(
            self.config_file,
            seed=self.seed,
            max_rounds=self.max_rounds,
        )
        if config.seed is None:
            config = config.with_overrides(seed=random.randint(0, 1_000_000))
        rng = random.Random(config.seed)

        console = Console()
        players = make_console_players(self.players, rng, console)
        try:
            game = build_game(config, players, rng)
        except SetupError as e:
            msg = f"Could not set up the game: {e}"
            raise cappa.Exit(msg, code=1) from e

        console.print(f"[dim]{config.repr}[/dim]")
        run_console_game(game, players, show_map=self.show_map)
