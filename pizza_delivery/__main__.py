from __future__ import annotations

from dataclasses import dataclass

import cappa

from pizza_delivery.cli.commands.board import BoardCommand  # noqa: TC001
from pizza_delivery.cli.commands.check import CheckCommand  # noqa: TC001
from pizza_delivery.cli.commands.play import (
    PlayCommand,  # noqa: TC001 # cappa needs to know about this at runtime
)


@dataclass
class Main:
    subcommand: cappa.Subcommands[PlayCommand | BoardCommand | CheckCommand]


def main():
    cappa.invoke(Main)


if __name__ == "__main__":
    main()
