"""Base strategy interface for Crazy Eights players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eights_engine.cards import Card, Suit
    from eights_engine.moves import Move
    from eights_engine.state import GameState, Side, Winner


class Strategy(ABC):
    """Abstract base class for player strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        """Select a move from the list of legal moves.

        Args:
            state: Current game state.
            legal_moves: List of all legal moves for the side to act.

        Returns:
            The selected move.
        """
        ...

    @abstractmethod
    def choose_suit(self, state: GameState, hand: tuple[Card, ...]) -> Suit:
        """Name the suit to put in effect after playing a wild.

        Args:
            state: State right after the wild was played.
            hand: The strategy's hand after the wild left it.

        Returns:
            The declared suit.
        """
        ...

    def on_game_start(self, state: GameState, side: Side) -> None:
        """Called when a game starts.

        Override to initialize per-game state.
        """
        pass

    def on_game_end(self, state: GameState, winner: Winner | None) -> None:
        """Called when a game ends; ``winner`` is None if it was abandoned."""
        pass
