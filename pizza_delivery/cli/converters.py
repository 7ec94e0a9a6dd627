from __future__ import annotations

from typing import TYPE_CHECKING, Any

import cappa
import msgspec

from pizza_delivery.config import GameConfig
from pizza_delivery.core.errors import SetupError
from pizza_delivery.core.types import Topping

if TYPE_CHECKING:
    from pathlib import Path


def validate_player_count(value: str) -> int:
    """Parse a player count. Every player needs their own topping."""
    try:
        count = int(value)
    except ValueError:
        msg = f"Player count '{value}' is not a number."
        raise cappa.Exit(msg, code=1)  # noqa: B904

    if not 2 <= count <= len(Topping):
        msg = f"Player count must be between 2 and {len(Topping)}, got {count}."
        raise cappa.Exit(msg, code=1)
    return count


def load_config(config_file: Path | None, **overrides: Any) -> GameConfig:
    """
    Resolve the effective configuration.
    TOML file first, then command line overrides on top.
    """
    try:
        if config_file is None:
            config = GameConfig()
        else:
            if not config_file.exists():
                msg = f"Config file not found: {config_file}"
                raise cappa.Exit(msg, code=1)
            config = GameConfig.from_toml(config_file)
        return config.with_overrides(**overrides)
    except msgspec.DecodeError as e:
        msg = f"Invalid TOML config: {e}"
        raise cappa.Exit(msg, code=1) from e
    except SetupError as e:
        msg = f"Invalid configuration: {e}"
        raise cappa.Exit(msg, code=1) from e
