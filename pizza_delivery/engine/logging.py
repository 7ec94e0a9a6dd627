from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, get_args, override

from rich.highlighter import Highlighter
from rich.logging import RichHandler

from pizza_delivery.core import LOGGER_NAME
from pizza_delivery.core.types import SpecialName, TileKind, TokenName, Topping

if TYPE_CHECKING:
    from rich.text import Text

    from pizza_delivery.engine.game import Game

SPECIAL_NAMES = set(get_args(SpecialName))
TOKEN_NAMES = set(get_args(TokenName))
TILE_KINDS = set(get_args(TileKind)) - {"Empty"}
TOPPING_LABELS = {topping.label for topping in Topping}

# --- PATTERNS ---
SPECIAL_PATTERN = re.compile(rf"\b({'|'.join(map(re.escape, SPECIAL_NAMES))})\b")
TOKEN_PATTERN = re.compile(rf"\b({'|'.join(map(re.escape, TOKEN_NAMES))}) token\b")
TILE_PATTERN = re.compile(rf"\b({'|'.join(map(re.escape, TILE_KINDS))})\b")
TOPPING_PATTERN = re.compile(rf"\b({'|'.join(map(re.escape, TOPPING_LABELS))})\b")
# "0:Alice" style player references
PLAYER_PATTERN = re.compile(r"\b\d+:\w+\b")

COLOR = {
    "move": "bold #23d18b",  # light green
    "teleport": "bold #87d700",  # yellow-ish green
    "attack": "bold #ff5f5f",  # soft red
    "ghost": "bold #d670d6",  # magenta
    "warning": "bold bright_red",
    "special": "bold #29b8db",  # cyan
    "token": "bold #ffaf00",  # orange
    "tile": "bold #f5f543",  # yellow
    "topping": "italic #ffd7af",
    "player": "bold white",
    "prefix": "grey50",
}


@dataclass(slots=True)
class LogContext:
    """Per-game logging state."""

    round: int = 0
    turn_log_count: int = 0
    current_player_repr: str = "_"

    def start_turn_log(self, round_: int, player_repr: str) -> None:
        self.round = round_
        self.turn_log_count = 0
        self.current_player_repr = player_repr

    def inc_log_count(self) -> None:
        self.turn_log_count += 1


class ContextFilter(logging.Filter):
    """Inject per-game runtime context into every log record."""

    def __init__(self, game: Game, name: str = "") -> None:
        super().__init__(name)
        self.game: Game = game

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        logctx = self.game.log_context
        record.round = logctx.round
        record.turn_log_count = logctx.turn_log_count
        record.player_repr = logctx.current_player_repr
        logctx.inc_log_count()
        return True


class RichMarkupFormatter(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord) -> str:
        round_ = getattr(record, "round", None)
        message = record.getMessage()
        if round_ is None:
            # Setup and CLI messages carry no game context
            return message

        turn_log_count = getattr(record, "turn_log_count", 0)
        player_repr = getattr(record, "player_repr", "_")
        prefix = f"R{round_}.{player_repr}.{turn_log_count}"

        # The highlighter colors the message body on top of this
        return f"[{COLOR['prefix']}]{prefix:<14}[/{COLOR['prefix']}]  {message}"


class GameLogHighlighter(Highlighter):
    @override
    def highlight(self, text: Text) -> None:
        text.highlight_regex(r"\bMove\b", COLOR["move"])
        text.highlight_regex(r"\bTeleport\b", COLOR["teleport"])
        text.highlight_regex(r"\bBack to start\b", COLOR["teleport"])
        text.highlight_regex(r"\bAttack\b", COLOR["attack"])
        text.highlight_regex(r"\b[Gg]hosts?\b", COLOR["ghost"])
        text.highlight_regex(SPECIAL_PATTERN, COLOR["special"])
        text.highlight_regex(TOKEN_PATTERN, COLOR["token"])
        text.highlight_regex(TILE_PATTERN, COLOR["tile"])
        text.highlight_regex(TOPPING_PATTERN, COLOR["topping"])
        text.highlight_regex(PLAYER_PATTERN, COLOR["player"])
        text.highlight_regex(r"!!!", COLOR["warning"])


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    handler = RichHandler(
        markup=True,
        show_path=False,
        show_time=False,
        highlighter=GameLogHighlighter(),
    )
    handler.setFormatter(RichMarkupFormatter())
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
