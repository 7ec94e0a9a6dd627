class PizzaDeliveryError(Exception):
    """Base class for every error raised by the game."""


class GameOver(PizzaDeliveryError):
    """The game has ended normally. Stop calling ``Game.loop()``."""

    reason: str = "game over"


class AllPlayersWon(GameOver):
    reason = "all players won"


class MaxRoundsReached(GameOver):
    reason = "max rounds reached"


class SetupError(PizzaDeliveryError, ValueError):
    """The game could not be set up with the given configuration."""


class NoSuchPointError(SetupError):
    """No grid point satisfies a placement predicate."""


class IllegalActionError(PizzaDeliveryError, ValueError):
    """A player handed the engine an action it may not perform."""


class DeckEmptyError(PizzaDeliveryError, IndexError):
    """Both the draw pile and the discard pile are empty."""


class DecisionCancelled(PizzaDeliveryError):
    """A player backed out of a sub-decision. The enclosing prompt restarts."""
