"""Game strategies for Crazy Eights."""

from strategies.base import Strategy
from strategies.first_match import FirstMatchStrategy
from strategies.random_strategy import RandomStrategy

__all__ = [
    "Strategy",
    "FirstMatchStrategy",
    "RandomStrategy",
]
