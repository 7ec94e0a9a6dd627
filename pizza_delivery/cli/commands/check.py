from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass
from pathlib import Path  # cappa needs this at runtime
from typing import Annotated

import cappa
from tqdm import tqdm

from pizza_delivery.cli.console import make_console_players
from pizza_delivery.cli.converters import load_config, validate_player_count
from pizza_delivery.core import LOGGER_NAME
from pizza_delivery.core.errors import SetupError
from pizza_delivery.engine.setup import build_game


@cappa.command(
    name="check",
    help="Generate many boards to see how often a configuration fails to set up.",
)
@dataclass
class CheckCommand:
    runs: Annotated[
        int,
        cappa.Arg(short="-n", long="--runs", help="Number of boards to generate."),
    ] = 1000
    players: Annotated[
        int,
        cappa.Arg(
            short="-p",
            long="--players",
            parse=validate_player_count,
            help="Number of players.",
        ),
    ] = 3
    config_file: Annotated[
        Path | None,
        cappa.Arg(short="-c", long="--config", help="Path to TOML config file."),
    ] = None
    seed_offset: Annotated[
        int,
        cappa.Arg(long="--seed-offset", help="First seed to try."),
    ] = 0

    def __call__(self) -> None:
        logging.getLogger(LOGGER_NAME).setLevel(logging.CRITICAL)
        config = load_config(self.config_file)

        failures: Counter[str] = Counter()
        with tqdm(total=self.runs, unit="board", desc="Checking") as pbar:
            for seed in range(self.seed_offset, self.seed_offset + self.runs):
                rng = random.Random(seed)
                players = make_console_players(self.players, rng)
                try:
                    build_game(config, players, rng, verbose=False)
                except SetupError as e:
                    failures[e.__class__.__name__] += 1
                pbar.update(1)

        failed = sum(failures.values())
        tqdm.write(f"Config: {config.repr}")
        tqdm.write(f"Boards: {self.runs}, failed: {failed} ({failed / max(self.runs, 1):.1%})")
        for name, count in failures.most_common():
            tqdm.write(f"  {name}: {count}")
        if failed == self.runs and self.runs > 0:
            msg = "Every board failed to set up."
            raise cappa.Exit(msg, code=1)
