"""Turn-based pizza delivery board game engine."""

__version__ = "0.3.0"
