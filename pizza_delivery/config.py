"""Game setup configuration using msgspec."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import msgspec

from pizza_delivery.core.errors import SetupError
from pizza_delivery.core.types import SpecialName  # noqa: TC001 # msgspec needs it at runtime
from pizza_delivery.engine.specials import ALL_SPECIALS

# Two copies of every special, as in the boxed game
DEFAULT_SPECIALS: tuple[SpecialName, ...] = ALL_SPECIALS * 2


class GameConfig(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """
    Immutable description of one game setup.
    Loaded from TOML, then overridden field by field from the command line.
    """

    width: int = 7
    height: int = 7
    max_rounds: int = 20

    walls: int = 4
    graves: int = 6
    teleporters: int = 3

    # Bonus tiles, off by default
    pigs: int = 0
    monkeys: int = 0
    crows: int = 0
    manhole_covers: int = 0

    # Dealt to each player from a starter deck holding one of each special
    starting_specials: int = 2
    specials: tuple[SpecialName, ...] = DEFAULT_SPECIALS

    seed: int | None = None

    @classmethod
    def from_toml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a TOML file path."""
        with Path(path).open("rb") as f:
            config = msgspec.toml.decode(f.read(), type=cls)
        config.validate()
        return config

    def with_overrides(self, **overrides: Any) -> GameConfig:
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        config = msgspec.structs.replace(self, **changes)
        config.validate()
        return config

    def validate(self) -> None:
        if self.width < 1 or self.height < 1:
            msg = f"Grid must be at least 1x1, got {self.width}x{self.height}"
            raise SetupError(msg)
        if self.max_rounds < 1:
            msg = f"max_rounds must be positive, got {self.max_rounds}"
            raise SetupError(msg)

        counts = {
            "walls": self.walls,
            "graves": self.graves,
            "teleporters": self.teleporters,
            "pigs": self.pigs,
            "monkeys": self.monkeys,
            "crows": self.crows,
            "manhole_covers": self.manhole_covers,
            "starting_specials": self.starting_specials,
        }
        negative = [name for name, count in counts.items() if count < 0]
        if negative:
            msg = f"Counts cannot be negative: {', '.join(negative)}"
            raise SetupError(msg)
        if self.teleporters == 1:
            msg = "teleporters must be 0 or at least 2"
            raise SetupError(msg)

    @property
    def repr(self) -> str:
        """String representation for logging."""
        return (
            f"{self.width}x{self.height}, {self.max_rounds} rounds, "
            f"walls={self.walls} graves={self.graves} teleporters={self.teleporters} "
            f"(Seed: {self.seed})"
        )
