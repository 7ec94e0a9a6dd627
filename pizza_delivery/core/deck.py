import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Self

from pizza_delivery.core import LOGGER_NAME
from pizza_delivery.core.errors import DeckEmptyError

logger = logging.getLogger(LOGGER_NAME)


@dataclass
class Deck[T]:
    """Draw pile plus discard pile. The discard pile is reshuffled in on demand."""

    draw_pile: list[T] = field(default_factory=list)
    discard_pile: list[T] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @classmethod
    def from_items(
        cls,
        items: Iterable[T],
        rng: random.Random | None = None,
        *,
        shuffle: bool = True,
    ) -> Self:
        deck = cls(list(items), rng=rng or random.Random())
        if shuffle:
            deck.shuffle()
        return deck

    def __len__(self) -> int:
        return len(self.draw_pile) + len(self.discard_pile)

    def draw(self) -> T:
        if not self.draw_pile:
            self.shuffle()
        if not self.draw_pile:
            msg = "Cannot draw from an empty deck"
            raise DeckEmptyError(msg)
        return self.draw_pile.pop()

    def discard(self, item: T) -> None:
        self.discard_pile.append(item)

    def shuffle(self) -> None:
        """Move the discard pile under the draw pile and shuffle everything."""
        if self.discard_pile:
            logger.debug(f"Deck: reshuffling {len(self.discard_pile)} discarded items")
        self.draw_pile.extend(self.discard_pile)
        self.discard_pile = []
        self.rng.shuffle(self.draw_pile)
